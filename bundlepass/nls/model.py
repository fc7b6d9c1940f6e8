"""Models for localize() extraction and the finalized NLS index."""

from __future__ import annotations

from collections.abc import Mapping
from dataclasses import dataclass, field
from enum import StrEnum
from types import MappingProxyType
from typing import TypeAlias

from bundlepass.text import LineSpan


class LocalizeFunction(StrEnum):
    """Recognized localization functions exported by the `nls` module."""

    LOCALIZE = "localize"
    """Message is blanked at runtime in production builds."""

    LOCALIZE2 = "localize2"
    """Message is kept at runtime (it also serves as the English original)."""

    @property
    def placeholder_prefix(self) -> str:
        return "%%NLS:" if self is LocalizeFunction.LOCALIZE else "%%NLS2:"


@dataclass(frozen=True, slots=True)
class StructuredKey:
    """`{ key: '...', comment: ['...'] }` key carrying notes for translators."""

    key: str
    comment: tuple[str, ...] = ()

    def to_json(self) -> dict[str, object]:
        return {"key": self.key, "comment": list(self.comment)}


LocalizeKey: TypeAlias = str | StructuredKey


def key_string(key: LocalizeKey) -> str:
    return key if isinstance(key, str) else key.key


def key_to_json(key: LocalizeKey) -> object:
    return key if isinstance(key, str) else key.to_json()


def make_placeholder(module_id: str, key: str, function: LocalizeFunction = LocalizeFunction.LOCALIZE) -> str:
    """Deterministic placeholder text for one `(module_id, key)` pair."""
    return f"{function.placeholder_prefix}{module_id}#{key}%%"


@dataclass(frozen=True, slots=True)
class LocalizeCall:
    """One located `localize(key, message, ...)` call.

    `key` and `value` are the raw source text of the first two arguments.
    """

    key_span: LineSpan
    key: str
    value_span: LineSpan
    value: str


@dataclass(frozen=True, slots=True)
class NlsEntry:
    """One extracted message, identified by its placeholder."""

    module_id: str
    key: LocalizeKey
    message: str
    placeholder: str

    @property
    def key_string(self) -> str:
        return key_string(self.key)

    @property
    def sort_key(self) -> tuple[str, str, str]:
        # `localize` and `localize2` may share a key; the placeholder breaks the tie.
        return (self.module_id, key_string(self.key), self.placeholder)


@dataclass(frozen=True, slots=True)
class NlsTransformResult:
    """Placeholder transform output for one source file."""

    code: str
    entries: tuple[NlsEntry, ...]

    @property
    def changed(self) -> bool:
        return bool(self.entries)


@dataclass(frozen=True, slots=True)
class NlsIndex:
    """Finalized, index-ordered view over every collected entry."""

    messages: tuple[str, ...] = ()
    index_map: Mapping[str, int] = field(default_factory=lambda: MappingProxyType({}))
    module_keys: Mapping[str, tuple[LocalizeKey, ...]] = field(default_factory=lambda: MappingProxyType({}))
    module_messages: Mapping[str, tuple[str, ...]] = field(default_factory=lambda: MappingProxyType({}))

    @property
    def message_count(self) -> int:
        return len(self.messages)

    @property
    def module_count(self) -> int:
        return len(self.module_keys)

    @property
    def is_empty(self) -> bool:
        return not self.messages

    def keys_json(self) -> list[list[object]]:
        """`[[moduleId, [key, ...]], ...]` with structured keys flattened to their key string."""
        return [[module_id, [key_string(key) for key in keys]] for module_id, keys in self.module_keys.items()]

    def metadata_json(self) -> dict[str, dict[str, list[object]]]:
        """`{"keys": {...}, "messages": {...}}` grouped by module, structured keys preserved."""
        return {
            "keys": {module_id: [key_to_json(key) for key in keys] for module_id, keys in self.module_keys.items()},
            "messages": {module_id: list(messages) for module_id, messages in self.module_messages.items()},
        }


@dataclass(frozen=True, slots=True)
class NlsFinalizeResult:
    index_map: Mapping[str, int]
    message_count: int
    written_files: tuple[str, ...] = ()
