#!/usr/bin/env python3
import argparse
import json
import logging

from config import (
    CACHE_SIZE,
    DATA_DIR,
    LOCAL_STORE_ENABLED,
    MUSHAF_DB_PATH,
    MUSHAF_ID,
    QURAN_API,
    REMOTE_TIMEOUT,
)
from lang import DEFAULT_LANG, available_languages, normalize_lang, t
from mushaf import (
    MushafError,
    PageLayoutService,
    RemoteLayoutFetcher,
    WordStore,
    analyze_page,
    resolve_typography,
)
from mushaf.utils import safe_int

logger = logging.getLogger(__name__)

settings = {"lang": DEFAULT_LANG, "width": 700, "remote": False, "fallback": False}


def load_settings():
    global settings
    file = DATA_DIR / "settings.json"
    if file.exists():
        try:
            settings = {**settings, **json.loads(file.read_text(encoding="utf-8"))}
        except json.JSONDecodeError:
            logger.warning(f"Ignoring corrupted settings file: {file}")
    settings["lang"] = normalize_lang(settings.get("lang"))


def save_settings():
    file = DATA_DIR / "settings.json"
    file.parent.mkdir(parents=True, exist_ok=True)
    file.write_text(json.dumps(settings, indent=2, ensure_ascii=False), encoding="utf-8")


def create_service() -> PageLayoutService:
    """Wire the layout service from configuration."""
    store = WordStore(path=MUSHAF_DB_PATH, enabled=LOCAL_STORE_ENABLED)
    fetcher = RemoteLayoutFetcher(QURAN_API, timeout=REMOTE_TIMEOUT)
    return PageLayoutService(
        store=store,
        fetcher=fetcher,
        mushaf_id=MUSHAF_ID,
        default_deadline=REMOTE_TIMEOUT,
        cache_size=CACHE_SIZE,
    )


def parse_width(text: str):
    """A number is a width in pixels; anything else is a breakpoint name."""
    width = safe_int(text)
    return width if width is not None else text.strip()


def format_error(error: MushafError, lang: str) -> str:
    return t(f"error_{error.code}", lang)


def format_layout(layout, lang: str) -> str:
    out = [
        f"{t('page', lang)} {layout.page_number} | "
        f"{t('source', lang)}: {layout.source.value} | "
        f"{t('breakpoint', lang)}: {layout.breakpoint.value}"
    ]

    typo = layout.typography
    out.append(t(
        "typography", lang,
        width=typo.canvas_width, height=typo.canvas_height,
        font=typo.font_size, line=typo.line_height,
    ))

    if layout.summary:
        out.append(t(
            "summary", lang,
            first=layout.summary.first_verse_id,
            last=layout.summary.last_verse_id,
            count=layout.summary.verse_count,
        ))

    analysis = analyze_page(layout.page)
    if analysis.header_lines:
        out.append(t("headers", lang, lines=", ".join(map(str, analysis.header_lines))))
    for start in analysis.surah_starts:
        out.append(t("surah_start", lang, name=start.name, line=start.first_line))

    out.append("-" * 60)
    for line in layout.lines:
        text = line.text if not line.is_empty else t("empty_line", lang)
        out.append(f"{line.line_number:>2} {text}")
    out.append("-" * 60)

    if layout.page.missing_lines:
        out.append(t("missing_lines", lang, lines=", ".join(map(str, layout.page.missing_lines))))
    if layout.page.anomalies:
        out.append(t("anomalies", lang, count=len(layout.page.anomalies)))
    return "\n".join(out)


def page_flow(service):
    lang = settings["lang"]
    page = safe_int(input(t("choose_page", lang) + " "))
    if page is None:
        print(t("error_OutOfRange", lang))
        return

    try:
        layout = service.get_page(
            page,
            use_remote=settings["remote"],
            width_or_breakpoint=settings["width"],
            fallback=settings["fallback"],
        )
    except MushafError as e:
        print(format_error(e, lang))
        return
    print(format_layout(layout, lang))


def width_flow():
    lang = settings["lang"]
    value = parse_width(input(t("choose_width", lang) + " "))
    try:
        resolve_typography(value)
    except ValueError:
        print(t("invalid_width", lang))
        return
    settings["width"] = value
    save_settings()
    print(t("done", lang))


def source_flow():
    settings["remote"] = not settings["remote"]
    save_settings()
    print(t("source_set", settings["lang"], source="remote" if settings["remote"] else "local"))


def fallback_flow():
    settings["fallback"] = not settings["fallback"]
    save_settings()
    print(t("fallback_set", settings["lang"], state="on" if settings["fallback"] else "off"))


def lang_flow():
    prompt = t("choose_lang", settings["lang"], langs="/".join(available_languages()))
    choice = input(prompt + " ").strip().lower()
    if choice in available_languages():
        settings["lang"] = choice
        save_settings()
        print(t("done", choice))


def main():
    load_settings()
    service = create_service()

    try:
        while True:
            lang = settings["lang"]
            print(f"\n{t('welcome', lang)}")
            print(t("menu", lang))

            choice = input("\n> ").strip()

            if choice == "1":
                page_flow(service)
            elif choice == "2":
                width_flow()
            elif choice == "3":
                source_flow()
            elif choice == "4":
                fallback_flow()
            elif choice == "5":
                lang_flow()
            elif choice == "6":
                break
    finally:
        service.close()


def page_command(argv: list[str]) -> int:
    """One-shot page rendering: ``main.py page N [options]``."""
    parser = argparse.ArgumentParser(prog="main.py page", description="Show one Mushaf page layout")
    parser.add_argument("page", help="Page number (1-604)")
    parser.add_argument("--width", default="700", help="Container width in pixels or breakpoint name")
    parser.add_argument("--viewport", action="store_true", help="Treat --width as a window width")
    parser.add_argument("--remote", action="store_true", help="Read from the remote API")
    parser.add_argument("--fallback", action="store_true", help="Try the other source on failure")
    parser.add_argument("--deadline", type=float, default=None, help="Remote deadline in seconds")
    parser.add_argument("--json", action="store_true", help="Print the layout as JSON")
    parser.add_argument("--lang", default=DEFAULT_LANG, choices=available_languages())
    args = parser.parse_args(argv)

    page = safe_int(args.page)
    if page is None:
        print(t("error_OutOfRange", args.lang))
        return 1

    service = create_service()
    try:
        layout = service.get_page(
            page,
            use_remote=args.remote,
            width_or_breakpoint=parse_width(args.width),
            viewport=args.viewport,
            deadline=args.deadline,
            fallback=args.fallback,
        )
    except MushafError as e:
        if args.json:
            print(json.dumps(e.to_dict(), ensure_ascii=False))
        else:
            print(format_error(e, args.lang))
        return 1
    except ValueError:
        print(t("invalid_width", args.lang))
        return 2
    finally:
        service.close()

    if args.json:
        print(json.dumps(layout.to_dict(), ensure_ascii=False, indent=2))
    else:
        print(format_layout(layout, args.lang))
    return 0


if __name__ == "__main__":
    main()
