"""Resolve NLS placeholders in compiled output to their message indices."""

from __future__ import annotations

from collections.abc import Mapping
from dataclasses import dataclass
import re
from typing import Final

from bundlepass.diagnostics import NLS_UNRESOLVED_PLACEHOLDER, Diagnostic
from bundlepass.text import TextRange

# "%%NLS:<moduleId>#<key>%%" in either quote style, optionally followed by
# `, <message literal>`. Message literals are matched escape-aware so an
# escaped quote never ends them early.
PLACEHOLDER_RE: Final[re.Pattern[str]] = re.compile(
    r"""
    (?P<quote>["'])
    (?P<placeholder>%%(?P<flavor>NLS2?):[^%]+%%)
    (?P=quote)
    (?:
        (?P<separator>\s*,\s*)
        (?P<message>
            "(?:[^"\\]|\\.)*"
          | '(?:[^'\\]|\\.)*'
          | `(?:[^`\\]|\\.)*`
        )
    )?
    """,
    re.VERBOSE | re.DOTALL,
)


@dataclass(frozen=True, slots=True)
class NlsPostProcessResult:
    content: str
    replaced: int
    nulled: int
    unresolved: tuple[tuple[str, TextRange], ...]

    @property
    def changed(self) -> bool:
        return self.replaced > 0

    def diagnostics(self) -> list[Diagnostic]:
        return [
            Diagnostic.from_spec(NLS_UNRESOLVED_PLACEHOLDER, range, detail=f"`{placeholder}`.")
            for placeholder, range in self.unresolved
        ]


def post_process_nls_with_stats(
    content: str,
    index_map: Mapping[str, int],
    preserve_english: bool,
) -> NlsPostProcessResult:
    """Replace placeholder literals with indices, reporting what happened.

    Production mode (`preserve_english=False`) also turns the message literal
    that follows an `NLS` placeholder into `null`. `NLS2` messages are always
    kept. Placeholders missing from `index_map` are left as they are.
    """
    replaced = 0
    nulled = 0
    unresolved: list[tuple[str, TextRange]] = []

    def _replace(match: re.Match[str]) -> str:
        nonlocal replaced, nulled
        placeholder = match.group("placeholder")
        index = index_map.get(placeholder)
        if index is None:
            unresolved.append((placeholder, TextRange(match.start(), match.end())))
            return match.group(0)

        replaced += 1
        message = match.group("message")
        if message is None:
            return str(index)
        separator = match.group("separator")
        if preserve_english or match.group("flavor") == "NLS2":
            return f"{index}{separator}{message}"
        nulled += 1
        return f"{index}{separator}null"

    if "%%NLS" not in content:
        return NlsPostProcessResult(content=content, replaced=0, nulled=0, unresolved=())

    rewritten = PLACEHOLDER_RE.sub(_replace, content)
    return NlsPostProcessResult(
        content=rewritten,
        replaced=replaced,
        nulled=nulled,
        unresolved=tuple(unresolved),
    )


def post_process_nls(content: str, index_map: Mapping[str, int], preserve_english: bool) -> str:
    """Post-process one compiled file; see `post_process_nls_with_stats`."""
    return post_process_nls_with_stats(content, index_map, preserve_english).content


replace_in_output = post_process_nls
