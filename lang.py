"""
lang.py — CLI and error message catalogs.

Each ``locales/<code>.json`` file is one language. Lookups fall back to
English, then to the key itself.
"""
import json
import logging
from pathlib import Path

logger = logging.getLogger(__name__)

LOCALE_DIR   = Path(__file__).parent / "locales"
DEFAULT_LANG = "en"


def load_locales(locale_dir: Path = LOCALE_DIR) -> dict[str, dict[str, str]]:
    """Read every catalog in *locale_dir*; unreadable files are skipped."""
    catalogs = {}
    for path in sorted(locale_dir.glob("*.json")):
        try:
            entries = json.loads(path.read_text(encoding="utf-8"))
        except (OSError, json.JSONDecodeError) as e:
            logger.warning(f"Skipping locale {path.name}: {e}")
            continue
        if not isinstance(entries, dict):
            logger.warning(f"Skipping locale {path.name}: expected a JSON object")
            continue
        catalogs[path.stem] = entries
    return catalogs


_catalogs = load_locales()


def available_languages() -> tuple[str, ...]:
    return tuple(sorted(_catalogs)) or (DEFAULT_LANG,)


def normalize_lang(code) -> str:
    """Known language code for *code*, or the default one."""
    code = str(code or "").strip().lower()
    return code if code in _catalogs else DEFAULT_LANG


def t(key: str, lang: str = DEFAULT_LANG, **kwargs) -> str:
    for code in (lang, DEFAULT_LANG):
        template = _catalogs.get(code, {}).get(key)
        if template is not None:
            break
    else:
        logger.debug(f"Missing message key: {key}")
        return key

    if not kwargs:
        return template
    try:
        return template.format(**kwargs)
    except (KeyError, IndexError, ValueError) as e:
        logger.debug(f"Could not format {key!r} for {lang}: {e}")
        return template
