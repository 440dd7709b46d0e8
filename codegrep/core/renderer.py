"""Rendering of markup code snippets into terminal lines.

A snippet is an HTML table excerpt where every ``<tr>`` holds one source line:
a line number cell and a code cell whose matching fragments are wrapped in
``<mark>``. Rows whose line-number cell carries a ``class="jump"`` element
mark a gap between two non-contiguous fragments of the file.
"""

import enum
import html
import re
from dataclasses import dataclass, field
from typing import Iterator, List, Optional

from codegrep.core.palette import Palette

_TAG_RE = re.compile(r"<(/?)([A-Za-z][\w-]*)([^>]*)>")
_CLASS_RE = re.compile(r"""(?:^|\s)class\s*=\s*["']([^"']*)["']""")
_LINE_RE = re.compile(r"\s*(\d+)(.*)", re.DOTALL)


class _State(enum.Enum):
    OUTSIDE_ROW = "outside-row"
    IN_ROW = "in-row"
    IN_HIGHLIGHT = "in-highlight"


@dataclass
class _Row:
    parts: List[str] = field(default_factory=list)
    matched: bool = False
    jump: bool = False

    @property
    def text(self) -> str:
        return "".join(self.parts)


@dataclass(frozen=True)
class RenderedLine:
    """One display line; ``number`` is None for blank separators and unnumbered rows."""

    number: Optional[str]
    text: str


BLANK = RenderedLine(None, "")


def _has_jump_class(attrs: str) -> bool:
    found = _CLASS_RE.search(attrs)
    return found is not None and "jump" in found.group(1).split()


def _close(row: _Row, state: _State, palette: Palette) -> _Row:
    if state is _State.IN_HIGHLIGHT:
        row.parts.append(palette.reset)
    return row


def tokenize_rows(snippet: str, palette: Palette) -> Iterator[_Row]:
    """Split a snippet into rows, replacing highlight markup with palette codes.

    Unterminated ``<mark>`` spans are closed at the end of their row and a row
    missing its ``</tr>`` ends at the next ``<tr>`` or at the end of the snippet.
    """
    state = _State.OUTSIDE_ROW
    row = None
    pos = 0

    for tag in _TAG_RE.finditer(snippet):
        if state is not _State.OUTSIDE_ROW and tag.start() > pos:
            row.parts.append(snippet[pos:tag.start()])
        pos = tag.end()

        closing, name, attrs = tag.group(1) == "/", tag.group(2).lower(), tag.group(3)

        if name == "tr":
            if state is not _State.OUTSIDE_ROW:
                yield _close(row, state, palette)
                state, row = _State.OUTSIDE_ROW, None
            if not closing:
                state, row = _State.IN_ROW, _Row(jump=_has_jump_class(attrs))
            continue

        if state is _State.OUTSIDE_ROW:
            continue

        if _has_jump_class(attrs):
            row.jump = True

        if name == "mark":
            if not closing and state is _State.IN_ROW:
                row.parts.append(palette.match)
                row.matched = True
                state = _State.IN_HIGHLIGHT
            elif closing and state is _State.IN_HIGHLIGHT:
                row.parts.append(palette.reset)
                state = _State.IN_ROW
        # every other tag is dropped

    if state is not _State.OUTSIDE_ROW:
        if pos < len(snippet):
            row.parts.append(snippet[pos:])
        yield _close(row, state, palette)


def split_line_number(text: str) -> RenderedLine:
    """Split a row's text into its leading line number and decoded content.

    A row without a leading number yields an empty, unnumbered line.
    """
    found = _LINE_RE.match(text)
    if found is None:
        return RenderedLine(None, "")
    return RenderedLine(found.group(1), html.unescape(found.group(2)))


class SnippetRenderer:
    """Turns hit snippets into printable, optionally colorized lines."""

    def __init__(self, palette: Palette, context: bool = False, line_numbers: bool = True) -> None:
        """Initialize renderer.

        Args:
            palette: Escape sequences to apply
            context: Show every row, not only the matching ones
            line_numbers: Prefix lines with their line number
        """
        self.palette = palette
        self.context = context
        self.line_numbers = line_numbers

    def lines(self, snippet: str) -> Iterator[RenderedLine]:
        """Yield the rendered lines of one snippet.

        Nothing is yielded for a snippet without rows; otherwise the lines are
        followed by a single blank line.
        """
        after_jump = False
        seen_row = False
        for row in tokenize_rows(snippet, self.palette):
            seen_row = True
            if after_jump and self.context:
                yield BLANK
            after_jump = row.jump

            if not row.matched and not self.context:
                continue
            yield split_line_number(row.text)

        if seen_row:
            yield BLANK

    def format_line(self, line: RenderedLine) -> str:
        if line.number is None or not self.line_numbers:
            return line.text
        return f"{self.palette.line_no}{line.number}{self.palette.reset}:{line.text}"

    def render(self, snippet: str) -> Iterator[str]:
        """Yield the display strings of one snippet."""
        for line in self.lines(snippet):
            yield self.format_line(line)
