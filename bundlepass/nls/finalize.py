"""Assign stable message indices and write the NLS index assets."""

from __future__ import annotations

from collections.abc import Iterable
import json
import logging
import os
from pathlib import Path
from types import MappingProxyType
from typing import Final

from bundlepass.nls.collector import NlsCollector
from bundlepass.nls.model import LocalizeKey, NlsEntry, NlsFinalizeResult, NlsIndex

logger = logging.getLogger(__name__)

NLS_MESSAGES_JSON: Final[str] = "nls.messages.json"
NLS_KEYS_JSON: Final[str] = "nls.keys.json"
NLS_METADATA_JSON: Final[str] = "nls.metadata.json"
NLS_MESSAGES_JS: Final[str] = "nls.messages.js"

DEFAULT_MESSAGES_GLOBAL: Final[str] = "_VSCODE_NLS_MESSAGES"


def build_nls_index(entries: NlsCollector | Iterable[NlsEntry]) -> NlsIndex:
    """Sort entries by `(module_id, key, placeholder)` and number them in that order.

    Comparison is by code point, so separately run builds over the same entry
    set agree on every index regardless of insertion order or locale.
    """
    collected = entries.entries if isinstance(entries, NlsCollector) else tuple(entries)
    sorted_entries = sorted(collected, key=lambda entry: entry.sort_key)

    index_map: dict[str, int] = {}
    messages: list[str] = []
    module_keys: dict[str, list[LocalizeKey]] = {}
    module_messages: dict[str, list[str]] = {}
    for index, entry in enumerate(sorted_entries):
        index_map[entry.placeholder] = index
        messages.append(entry.message)
        module_keys.setdefault(entry.module_id, []).append(entry.key)
        module_messages.setdefault(entry.module_id, []).append(entry.message)

    return NlsIndex(
        messages=tuple(messages),
        index_map=MappingProxyType(index_map),
        module_keys=MappingProxyType({module_id: tuple(keys) for module_id, keys in module_keys.items()}),
        module_messages=MappingProxyType(
            {module_id: tuple(module_msgs) for module_id, module_msgs in module_messages.items()}
        ),
    )


def render_nls_assets(index: NlsIndex, *, global_name: str = DEFAULT_MESSAGES_GLOBAL) -> dict[str, str]:
    """File name -> contents for the four NLS assets."""
    messages_json = json.dumps(list(index.messages), ensure_ascii=False, separators=(",", ":"))
    return {
        NLS_MESSAGES_JSON: messages_json,
        NLS_KEYS_JSON: json.dumps(index.keys_json(), ensure_ascii=False, separators=(",", ":")),
        NLS_METADATA_JSON: json.dumps(index.metadata_json(), ensure_ascii=False, indent="\t"),
        NLS_MESSAGES_JS: (
            "/*---------------------------------------------------------\n"
            " * Generated localization messages. Do not edit.\n"
            " *--------------------------------------------------------*/\n"
            f"globalThis.{global_name}={messages_json};"
        ),
    }


def finalize_nls(
    collector: NlsCollector,
    out_dir: str | os.PathLike[str],
    extra_out_dirs: Iterable[str | os.PathLike[str]] = (),
    *,
    global_name: str = DEFAULT_MESSAGES_GLOBAL,
) -> NlsFinalizeResult:
    """Finalize one build's NLS collection and write its assets.

    Call exactly once, after every source transform that feeds `collector`
    has completed. An empty collector writes nothing.
    """
    index = build_nls_index(collector)
    if index.is_empty:
        return NlsFinalizeResult(index_map=MappingProxyType({}), message_count=0)

    assets = render_nls_assets(index, global_name=global_name)
    written: list[str] = []
    for directory in (out_dir, *extra_out_dirs):
        target = Path(directory)
        target.mkdir(parents=True, exist_ok=True)
        for name, contents in assets.items():
            path = target / name
            path.write_text(contents, encoding="utf-8", newline="")
            written.append(str(path))

    logger.info("[nls] Extracted %d messages from %d modules", index.message_count, index.module_count)
    return NlsFinalizeResult(
        index_map=index.index_map,
        message_count=index.message_count,
        written_files=tuple(written),
    )
