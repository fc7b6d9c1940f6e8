"""Line-oriented text buffer for single-line span replacement."""

from __future__ import annotations

from bundlepass.text.text import LINE_BREAK_RE, LineSpan


class LineTextModel:
    """Mutable list of lines that remembers each line's original terminator.

    Spans are replaced in place on their start line. A span covering several
    lines is collapsed onto the start line and the lines it covered are blanked,
    so later line numbers stay valid. Apply several spans in reverse document
    order so the ones not yet visited keep their original columns.
    """

    __slots__ = ("_lines", "_line_endings")

    def __init__(self, contents: str) -> None:
        self._lines: list[str] = []
        self._line_endings: list[str] = []

        index = 0
        for match in LINE_BREAK_RE.finditer(contents):
            self._lines.append(contents[index : match.start()])
            self._line_endings.append(match.group(0))
            index = match.end()

        if contents:
            self._lines.append(contents[index:])
            self._line_endings.append("")

    @property
    def line_count(self) -> int:
        return len(self._lines)

    def get(self, index: int) -> str:
        return self._lines[index]

    def set(self, index: int, line: str) -> None:
        self._lines[index] = line

    def apply(self, span: LineSpan, content: str) -> None:
        start_line_number = span.start.line
        end_line_number = span.end.line

        start_line = self._line_or_empty(start_line_number)
        end_line = self._line_or_empty(end_line_number)

        self._lines[start_line_number] = "".join(
            (
                start_line[: span.start.character],
                content,
                end_line[span.end.character :],
            )
        )

        for i in range(start_line_number + 1, end_line_number + 1):
            self._lines[i] = ""

    def to_text(self) -> str:
        return "".join(line + ending for line, ending in zip(self._lines, self._line_endings, strict=True))

    def __str__(self) -> str:
        return self.to_text()

    def _line_or_empty(self, index: int) -> str:
        if 0 <= index < len(self._lines):
            return self._lines[index]
        return ""
