"""Terminal color palettes and color capability probing."""

import logging
import os
import sys
from dataclasses import dataclass
from typing import Optional, TextIO, Tuple

logger = logging.getLogger(__name__)

COLOR_MODES = ("auto", "always", "never")
NOCOLOR_TERMS = ("dumb",)
MIN_COLORS = 8


def _sgr(code: str) -> str:
    return f"\x1b[{code}m"


@dataclass(frozen=True)
class Palette:
    """Escape sequences used for headers, line numbers and match highlighting."""

    file: str = ""
    line_no: str = ""
    match: str = ""
    reset: str = ""

    @classmethod
    def default(cls) -> "Palette":
        return cls(file=_sgr("35"), line_no=_sgr("32"), match=_sgr("31;1"), reset=_sgr("0"))

    @classmethod
    def none(cls) -> "Palette":
        return cls()


def select_palette(
    mode: str, is_tty: bool, term: Optional[str], max_colors: Optional[int]
) -> Palette:
    """Pick the palette for a color mode and the terminal's capabilities.

    Args:
        mode: One of 'auto', 'always' or 'never'
        is_tty: Whether the output stream is an interactive terminal
        term: Value of the TERM environment variable, if any
        max_colors: Number of colors the terminal reports, None if unknown

    Returns:
        The default palette or the empty one

    Raises:
        ValueError: If mode is not a known color mode
    """
    if mode == "always":
        return Palette.default()
    if mode == "never":
        return Palette.none()
    if mode != "auto":
        raise ValueError(f"Unsupported color mode: {mode}")

    if not is_tty:
        return Palette.none()
    if (term or "").lower() in NOCOLOR_TERMS:
        return Palette.none()
    if max_colors is None or max_colors < MIN_COLORS:
        return Palette.none()
    return Palette.default()


def _terminfo_colors(term: Optional[str], fd: int) -> Optional[int]:
    """Look up the terminfo 'colors' capability, None when unavailable."""
    if not term:
        return None
    try:
        import curses
    except ImportError:
        return None
    try:
        curses.setupterm(term, fd)
        colors = curses.tigetnum("colors")
    except curses.error as exc:
        logger.debug(f"Terminfo lookup for {term!r} failed: {exc}")
        return None
    # tigetnum returns -1 or -2 for absent/non-numeric capabilities
    return colors if colors >= 0 else None


def probe_terminal(stream: Optional[TextIO] = None) -> Tuple[bool, Optional[str], Optional[int]]:
    """Collect (is_tty, TERM, max_colors) for the given output stream."""
    stream = stream or sys.stdout
    try:
        is_tty = stream.isatty()
    except (AttributeError, ValueError):
        is_tty = False
    term = os.getenv("TERM")
    max_colors = None
    if is_tty:
        try:
            max_colors = _terminfo_colors(term, stream.fileno())
        except (AttributeError, OSError, ValueError):
            max_colors = None
    return is_tty, term, max_colors


def detect_palette(mode: str, stream: Optional[TextIO] = None) -> Palette:
    """Probe the terminal once and select the palette for mode."""
    if mode != "auto":
        return select_palette(mode, False, None, None)
    is_tty, term, max_colors = probe_terminal(stream)
    logger.debug(f"Terminal probe: tty={is_tty} term={term!r} colors={max_colors}")
    return select_palette(mode, is_tty, term, max_colors)
