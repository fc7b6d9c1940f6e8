from bisect import bisect_right
from dataclasses import dataclass
import re
from typing import Final


@dataclass(frozen=True, slots=True, order=True)
class TextSize:
    """Opaque measure of text length / character index into text."""

    value: int

    def __post_init__(self):
        if self.value < 0:
            raise ValueError("TextSize cannot be negative")

    def __repr__(self) -> str:
        return f"TextSize({self.value})"


@dataclass(frozen=True, slots=True, order=True)
class TextRange:
    """
    Half-open range [start, end) in text, measured in characters.

    Invariant:
    - 0 <= start <= end
    """

    _start: int
    _end: int

    def __post_init__(self):
        if self._start < 0 or self._end < 0:
            raise ValueError("TextRange positions cannot be negative")
        if self._start > self._end:
            raise ValueError("TextRange invariant violated: start > end")

    @staticmethod
    def new(start: TextSize, end: TextSize) -> "TextRange":
        """Create a TextRange from start and end TextSizes."""
        return TextRange(start.value, end.value)

    @staticmethod
    def empty(offset: TextSize) -> "TextRange":
        """Create an empty TextRange at the given offset."""
        return TextRange(offset.value, offset.value)

    @property
    def start(self) -> TextSize:
        return TextSize(self._start)

    @property
    def end(self) -> TextSize:
        return TextSize(self._end)

    def len(self) -> TextSize:
        return TextSize(self._end - self._start)

    def is_empty(self) -> bool:
        return self._start == self._end

    def as_tuple(self) -> tuple[int, int]:
        """Get the range as a tuple of (start, end) integers."""
        return (self._start, self._end)

    def contains_range(self, other: "TextRange") -> bool:
        """Check if the range fully contains another range."""
        return self._start <= other._start and other._end <= self._end

    def cover(self, other: "TextRange") -> "TextRange":
        """Get the minimal range that covers both this range and another range."""
        start = min(self._start, other._start)
        end = max(self._end, other._end)
        return TextRange(start, end)

    def __repr__(self) -> str:
        return f"TextRange({self._start}, {self._end})"


def slice_text_range(source: str, range: TextRange) -> str:
    """Get the substring of the source text covered by the given TextRange.

    Coord system matches python string indices so we can just do this.
    """
    return source[range.start.value : range.end.value]


@dataclass(frozen=True, slots=True, order=True)
class LinePosition:
    """Zero-based line and character column."""

    line: int
    character: int


@dataclass(frozen=True, slots=True)
class LineSpan:
    """Start/end pair of line positions (end exclusive)."""

    start: LinePosition
    end: LinePosition


LINE_BREAK_RE: Final[re.Pattern[str]] = re.compile(r"\r\n|\r|\n")


class LineIndex:
    """Character offset <-> line/column lookups over one text.

    Line breaks are `\\r\\n`, `\\r` and `\\n`, the same rules `LineTextModel` uses.
    """

    __slots__ = ("_line_starts", "_length")

    def __init__(self, text: str) -> None:
        starts = [0]
        starts.extend(match.end() for match in LINE_BREAK_RE.finditer(text))
        self._line_starts = starts
        self._length = len(text)

    @property
    def line_count(self) -> int:
        return len(self._line_starts)

    def position_of(self, offset: int) -> LinePosition:
        if offset < 0 or offset > self._length:
            raise ValueError(f"Offset {offset} is outside the text (length {self._length})")
        line = bisect_right(self._line_starts, offset) - 1
        return LinePosition(line, offset - self._line_starts[line])

    def span_of(self, range: TextRange) -> LineSpan:
        return LineSpan(self.position_of(range.start.value), self.position_of(range.end.value))

    def offset_of(self, position: LinePosition) -> int:
        if position.line < 0 or position.line >= len(self._line_starts):
            raise ValueError(f"Line {position.line} is outside the text")
        return self._line_starts[position.line] + position.character
