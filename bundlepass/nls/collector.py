"""Build-wide accumulator of NLS entries keyed by placeholder."""

from __future__ import annotations

from collections.abc import Iterable
import threading

from bundlepass.nls.model import NlsEntry


class NlsCollector:
    """Placeholder -> entry map shared by every per-file transform of one build.

    Writes are keyed overwrites under a lock, so concurrent transforms never
    lose updates. Two calls producing the same placeholder collapse to one
    entry. Readers (finalisation) must run only after every transform has
    settled; the collector cannot detect an early read.
    """

    __slots__ = ("_entries", "_lock")

    def __init__(self) -> None:
        self._entries: dict[str, NlsEntry] = {}
        self._lock = threading.Lock()

    def add(self, entry: NlsEntry) -> None:
        with self._lock:
            self._entries[entry.placeholder] = entry

    def extend(self, entries: Iterable[NlsEntry]) -> None:
        batch = list(entries)
        with self._lock:
            for entry in batch:
                self._entries[entry.placeholder] = entry

    @property
    def entries(self) -> tuple[NlsEntry, ...]:
        with self._lock:
            return tuple(self._entries.values())

    def get(self, placeholder: str) -> NlsEntry | None:
        with self._lock:
            return self._entries.get(placeholder)

    def __len__(self) -> int:
        with self._lock:
            return len(self._entries)


def create_nls_collector() -> NlsCollector:
    return NlsCollector()
