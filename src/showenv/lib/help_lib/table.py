"""
Column-based text table for help sections.

A table is a fixed list of columns. Each column has a width (in display
columns, including its indent), an indent, and an overflow policy that
decides what happens when a value does not fit:

    WRAP      break at whitespace onto continuation lines in the same column
    SPAN      run into the space of the following columns; the next
              column's value then starts on a later line
    TRUNCATE  cut the value at the column edge

With ``adjust_cjk`` on, East Asian wide and fullwidth characters count as
two display columns and a line may break between any two of them.
"""

import unicodedata
from dataclasses import dataclass
from enum import Enum
from typing import Iterator, List, Tuple


class Overflow(Enum):
    """What a cell does with text wider than its column."""
    TRUNCATE = 'truncate'
    SPAN = 'span'
    WRAP = 'wrap'


@dataclass(frozen=True)
class Column:
    """One table column.

    Attributes:
        width: Total column width, indent included
        indent: Spaces before the text on every line of the cell
        overflow: Overflow policy
    """
    width: int
    indent: int = 0
    overflow: Overflow = Overflow.WRAP

    def __post_init__(self):
        if self.width < 0 or self.indent < 0:
            raise ValueError(
                f"Column width and indent must be >= 0, got "
                f"width={self.width}, indent={self.indent}")

    @property
    def text_width(self) -> int:
        """Room for text once the indent is taken out (at least 1)."""
        return max(self.width - self.indent, 1)


def char_width(ch: str, adjust_cjk: bool = False) -> int:
    """Display width of a single character."""
    if adjust_cjk and unicodedata.east_asian_width(ch) in ('W', 'F'):
        return 2
    return 1


def text_width(text: str, adjust_cjk: bool = False) -> int:
    """Display width of a string."""
    if not adjust_cjk:
        return len(text)
    return sum(char_width(ch, True) for ch in text)


def _split_at(text: str, width: int, adjust_cjk: bool) -> Tuple[str, str]:
    """Split text so the head fits width. The head is never empty."""
    used = 0
    for i, ch in enumerate(text):
        w = char_width(ch, adjust_cjk)
        if used + w > width and i > 0:
            return text[:i], text[i:]
        used += w
    return text, ''


def _tokens(text: str, adjust_cjk: bool) -> Iterator[Tuple[str, bool]]:
    """Yield (token, preceded_by_space) pairs for line breaking."""
    for i, word in enumerate(text.split()):
        spaced = i > 0
        if not adjust_cjk:
            yield word, spaced
            continue
        buf = ''
        for ch in word:
            if char_width(ch, True) == 2:
                if buf:
                    yield buf, spaced
                    spaced = False
                    buf = ''
                yield ch, spaced
                spaced = False
            else:
                buf += ch
        if buf:
            yield buf, spaced


def wrap(text: str, width: int, adjust_cjk: bool = False) -> List[str]:
    """Break text into lines no wider than width.

    Lines break at whitespace (and between wide characters when
    adjust_cjk is on). A word wider than the whole line is split.

    Returns:
        List of lines; a blank input gives ``['']``
    """
    width = max(width, 1)
    lines: List[str] = []
    line, line_w = '', 0

    for token, spaced in _tokens(text, adjust_cjk):
        tw = text_width(token, adjust_cjk)
        gap = 1 if spaced and line else 0
        if line and line_w + gap + tw <= width:
            line += ' ' * gap + token
            line_w += gap + tw
            continue
        if line:
            lines.append(line)
        while tw > width:
            head, token = _split_at(token, width, adjust_cjk)
            lines.append(head)
            tw = text_width(token, adjust_cjk)
        line, line_w = token, tw

    if line or not lines:
        lines.append(line)
    return lines


class TextTable:
    """A grid of text laid out in fixed-width columns.

    Usage::

        table = TextTable(Column(14, 2, Overflow.SPAN),
                          Column(66, 2, Overflow.WRAP))
        table.add_row("FOO_CREATOR", "The foo's creator")
        print(table, end="")
    """

    def __init__(self, *columns: Column, adjust_cjk: bool = False):
        if not columns:
            raise ValueError("TextTable needs at least one column")
        self.columns = tuple(columns)
        self.adjust_cjk = adjust_cjk
        self._offsets = []
        start = 0
        for col in self.columns:
            self._offsets.append(start)
            start += col.width
        self.width = start
        # Each line holds (start position, text) cells
        self._lines: List[List[Tuple[int, str]]] = []

    @property
    def row_count(self) -> int:
        """Number of physical lines laid out so far."""
        return len(self._lines)

    def _line_end(self, index: int) -> int:
        if index >= len(self._lines):
            return 0
        return max((start + text_width(text, self.adjust_cjk)
                    for start, text in self._lines[index]), default=0)

    def _put(self, index: int, start: int, text: str) -> None:
        while len(self._lines) <= index:
            self._lines.append([])
        self._lines[index].append((start, text))

    def _layout(self, col_index: int, value: str) -> List[str]:
        col = self.columns[col_index]
        start = self._offsets[col_index] + col.indent
        result: List[str] = []
        for paragraph in value.split('\n'):
            if col.overflow is Overflow.TRUNCATE:
                result.append(_split_at(paragraph, col.text_width,
                                        self.adjust_cjk)[0])
            elif col.overflow is Overflow.SPAN:
                result.extend(wrap(paragraph, self.width - start,
                                   self.adjust_cjk))
            else:
                result.extend(wrap(paragraph, col.text_width,
                                   self.adjust_cjk))
        return result

    def add_row(self, *values: str) -> None:
        """Add one logical row; values map to columns left to right.

        Missing trailing values are treated as empty cells.

        Raises:
            ValueError: if there are more values than columns
        """
        if len(values) > len(self.columns):
            raise ValueError(
                f"Row has {len(values)} values but table has "
                f"{len(self.columns)} columns")

        row_start = len(self._lines)
        row_end = row_start
        for i, value in enumerate(values):
            if not value:
                continue
            line = row_start
            # A spanned cell to the left pushes this value down
            while self._line_end(line) > self._offsets[i]:
                line += 1
            start = self._offsets[i] + self.columns[i].indent
            for chunk in self._layout(i, value):
                self._put(line, start, chunk)
                line += 1
            row_end = max(row_end, line)

        # Empty rows still take a line
        while len(self._lines) < max(row_end, row_start + 1):
            self._lines.append([])

    def add_rows(self, rows) -> None:
        """Add several rows from an iterable of value tuples."""
        for row in rows:
            self.add_row(*row)

    def render(self) -> str:
        """Render all lines, each right-stripped and newline-terminated."""
        out = []
        for cells in self._lines:
            pos = 0
            parts = []
            for start, text in sorted(cells, key=lambda c: c[0]):
                parts.append(' ' * max(start - pos, 0))
                parts.append(text)
                pos = max(pos, start) + text_width(text, self.adjust_cjk)
            out.append(''.join(parts).rstrip() + '\n')
        return ''.join(out)

    def __str__(self) -> str:
        return self.render()
