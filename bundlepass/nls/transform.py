"""Replace localize() keys with deterministic placeholders before bundling."""

from __future__ import annotations

import os

from bundlepass.nls.analysis import analyze_localize_calls
from bundlepass.nls.literal import parse_localize_key, parse_localize_message
from bundlepass.nls.model import (
    LocalizeCall,
    LocalizeFunction,
    NlsEntry,
    NlsTransformResult,
    key_string,
    make_placeholder,
)
from bundlepass.syntax import SourceLanguage, parse_source
from bundlepass.text import LineTextModel

_MODULE_EXTENSIONS = (".ts", ".js")


def transform_to_placeholders(source: str, module_id: str) -> NlsTransformResult:
    """Swap every localize()/localize2() key argument for its placeholder string.

    Calls are applied in reverse document order so earlier spans keep their
    original line/column positions. Returns the source unchanged when the file
    has no localize calls.
    """
    tree = parse_source(source, SourceLanguage.TYPESCRIPT)
    tagged: list[tuple[LocalizeCall, LocalizeFunction]] = [
        (call, function)
        for function in LocalizeFunction
        for call in analyze_localize_calls(source, function, tree=tree)
    ]
    if not tagged:
        return NlsTransformResult(code=source, entries=())

    tagged.sort(key=lambda item: (item[0].key_span.start.line, item[0].key_span.start.character))

    entries: list[NlsEntry] = []
    model = LineTextModel(source)
    for call, function in reversed(tagged):
        key = parse_localize_key(call.key)
        message = parse_localize_message(call.value)
        placeholder = make_placeholder(module_id, key_string(key), function)
        entries.append(NlsEntry(module_id=module_id, key=key, message=message, placeholder=placeholder))
        model.apply(call.key_span, f'"{placeholder}"')

    entries.reverse()
    return NlsTransformResult(code=model.to_text(), entries=tuple(entries))


def compute_module_id(path: str | os.PathLike[str], base_dir: str | os.PathLike[str]) -> str:
    """`src/vs/editor/editor.ts` relative to `src` -> `vs/editor/editor`."""
    relative = os.path.relpath(os.fspath(path), os.fspath(base_dir))
    posix = relative.replace("\\", "/")
    for extension in _MODULE_EXTENSIONS:
        if posix.endswith(extension):
            return posix[: -len(extension)]
    return posix
