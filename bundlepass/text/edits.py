"""Offset-based text edits applied in one linear pass."""

from __future__ import annotations

from collections.abc import Iterable
from dataclasses import dataclass

from bundlepass.text.text import TextRange


@dataclass(frozen=True, slots=True)
class TextEdit:
    """Replace `[start, end)` of the original text with `new_text`."""

    start: int
    end: int
    new_text: str

    def __post_init__(self) -> None:
        if self.start < 0 or self.start > self.end:
            raise ValueError(f"Invalid edit range [{self.start}, {self.end})")

    @staticmethod
    def replace(range: TextRange, new_text: str) -> TextEdit:
        start, end = range.as_tuple()
        return TextEdit(start, end, new_text)

    @property
    def range(self) -> TextRange:
        return TextRange(self.start, self.end)


def apply_edits(text: str, edits: Iterable[TextEdit]) -> str:
    """Apply non-overlapping edits against the original `text`.

    Edits may arrive in any order; they are sorted by start offset (stable, so
    two insertions at the same offset keep their discovery order). Overlapping
    edits are a caller bug and give an undefined result.
    """
    ordered = sorted(edits, key=_edit_start)
    if not ordered:
        return text

    parts: list[str] = []
    cursor = 0
    for edit in ordered:
        parts.append(text[cursor : edit.start])
        parts.append(edit.new_text)
        cursor = edit.end
    parts.append(text[cursor:])
    return "".join(parts)


def _edit_start(edit: TextEdit) -> int:
    return edit.start
