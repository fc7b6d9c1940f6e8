"""Text offsets, ranges, line positions and the edit model."""

from bundlepass.text.edits import TextEdit, apply_edits
from bundlepass.text.model import LineTextModel
from bundlepass.text.text import (
    LineIndex,
    LinePosition,
    LineSpan,
    TextRange,
    TextSize,
    slice_text_range,
)

__all__ = [
    "LineIndex",
    "LinePosition",
    "LineSpan",
    "LineTextModel",
    "TextEdit",
    "TextRange",
    "TextSize",
    "apply_edits",
    "slice_text_range",
]
