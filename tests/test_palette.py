import io
from unittest.mock import patch

import pytest

from codegrep.core.palette import Palette, detect_palette, probe_terminal, select_palette


def test_default_palette_codes():
    palette = Palette.default()
    assert palette.file == "\x1b[35m"
    assert palette.line_no == "\x1b[32m"
    assert palette.match == "\x1b[31;1m"
    assert palette.reset == "\x1b[0m"


def test_none_palette_is_empty():
    palette = Palette.none()
    assert (palette.file, palette.line_no, palette.match, palette.reset) == ("", "", "", "")


@pytest.mark.parametrize(
    "mode, is_tty, term, colors, expected",
    [
        ("always", False, None, None, Palette.default()),
        ("never", True, "xterm-256color", 256, Palette.none()),
        ("auto", False, "xterm-256color", 256, Palette.none()),
        ("auto", True, "dumb", 256, Palette.none()),
        ("auto", True, "DUMB", 256, Palette.none()),
        ("auto", True, "xterm", None, Palette.none()),
        ("auto", True, "vt100", 2, Palette.none()),
        ("auto", True, "xterm", 8, Palette.default()),
        ("auto", True, "xterm-256color", 256, Palette.default()),
    ],
)
def test_select_palette(mode, is_tty, term, colors, expected):
    assert select_palette(mode, is_tty, term, colors) == expected


def test_select_palette_rejects_unknown_mode():
    with pytest.raises(ValueError, match="color mode"):
        select_palette("sometimes", True, "xterm", 256)


def test_probe_non_tty_stream_skips_terminfo():
    with patch("codegrep.core.palette._terminfo_colors") as terminfo:
        is_tty, _, colors = probe_terminal(io.StringIO())
    assert is_tty is False
    assert colors is None
    terminfo.assert_not_called()


def test_detect_palette_for_explicit_modes():
    assert detect_palette("always", io.StringIO()) == Palette.default()
    assert detect_palette("never", io.StringIO()) == Palette.none()


def test_detect_palette_auto_on_pipe():
    assert detect_palette("auto", io.StringIO()) == Palette.none()
