"""
typography.py — Calibrated typography profiles per device class.

The values below were validated by rendering every page of the Mushaf at each
canvas size; they are looked up, never computed from content.
"""
import math

from .models import Breakpoint, TypographyProfile

PROFILES: dict[Breakpoint, TypographyProfile] = {
    Breakpoint.WIDE: TypographyProfile(
        canvas_width=620,
        canvas_height=1280,
        font_size=22.78,
        line_height=70.5,
        word_spacing=1.5,
        letter_spacing=0.3,
    ),
    Breakpoint.MEDIUM: TypographyProfile(
        canvas_width=500,
        canvas_height=960,
        font_size=17.00,
        line_height=53.76,
        word_spacing=1.36,
        letter_spacing=0.34,
    ),
    Breakpoint.NARROW: TypographyProfile(
        canvas_width=350,
        canvas_height=640,
        font_size=11.90,
        line_height=35.41,
        word_spacing=0.95,
        letter_spacing=0.24,
    ),
}

DEFAULT_BREAKPOINT = Breakpoint.WIDE

# Container widths (the element the page is drawn into)
CONTAINER_WIDE   = 600
CONTAINER_MEDIUM = 400

# Window/screen widths
VIEWPORT_WIDE   = 1024
VIEWPORT_MEDIUM = 768

_ALIASES = {
    "mobile":  Breakpoint.NARROW,
    "tablet":  Breakpoint.MEDIUM,
    "desktop": Breakpoint.WIDE,
}


def _check_width(width) -> float:
    if isinstance(width, bool) or not isinstance(width, (int, float)):
        raise ValueError(f"Width must be a number, got {width!r}")
    if not math.isfinite(width):
        raise ValueError(f"Width must be finite, got {width}")
    if width < 0:
        raise ValueError(f"Width must not be negative, got {width}")
    return width


def breakpoint_for_container(width: float) -> Breakpoint:
    """Device class for the width of the rendering container."""
    width = _check_width(width)
    if width >= CONTAINER_WIDE:
        return Breakpoint.WIDE
    if width >= CONTAINER_MEDIUM:
        return Breakpoint.MEDIUM
    return Breakpoint.NARROW


def breakpoint_for_viewport(width: float) -> Breakpoint:
    """Device class for the window/screen width."""
    width = _check_width(width)
    if width >= VIEWPORT_WIDE:
        return Breakpoint.WIDE
    if width >= VIEWPORT_MEDIUM:
        return Breakpoint.MEDIUM
    return Breakpoint.NARROW


def parse_breakpoint(name: str | Breakpoint) -> Breakpoint:
    if isinstance(name, Breakpoint):
        return name
    key = str(name).strip().lower()
    if key in _ALIASES:
        return _ALIASES[key]
    try:
        return Breakpoint(key)
    except ValueError:
        raise ValueError(f"Unknown breakpoint: {name!r}") from None


def profile_for(breakpoint: Breakpoint | str) -> TypographyProfile:
    return PROFILES[parse_breakpoint(breakpoint)]


def resolve_typography(value=None, viewport: bool = False) -> tuple[Breakpoint, TypographyProfile]:
    """
    Resolve a width or breakpoint name to a (breakpoint, profile) pair.

    Args:
        value:    Width in pixels, a Breakpoint, a breakpoint name, or None for the default.
        viewport: Treat a numeric width as a window width instead of a container width.
    """
    if value is None:
        breakpoint = DEFAULT_BREAKPOINT
    elif isinstance(value, (Breakpoint, str)):
        breakpoint = parse_breakpoint(value)
    elif viewport:
        breakpoint = breakpoint_for_viewport(value)
    else:
        breakpoint = breakpoint_for_container(value)
    return breakpoint, PROFILES[breakpoint]
