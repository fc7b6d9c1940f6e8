"""Pipeline run result carriers for build orchestration."""

from __future__ import annotations

from dataclasses import dataclass

from bundlepass.diagnostics import Diagnostic, collect_diagnostics
from bundlepass.mangle import ConvertPrivateFieldsResult
from bundlepass.nls import NlsPostProcessResult, NlsTransformResult


@dataclass(frozen=True, slots=True)
class SourceTransformResult:
    """Placeholder transform of one source file (`transform` is None when skipped)."""

    path: str
    module_id: str
    transform: NlsTransformResult | None

    @property
    def skipped(self) -> bool:
        return self.transform is None

    @property
    def entry_count(self) -> int:
        return 0 if self.transform is None else len(self.transform.entries)


@dataclass(frozen=True, slots=True)
class SourceTransformRunResult:
    """Every per-file transform of one build, all settled."""

    files: tuple[SourceTransformResult, ...]

    @property
    def entry_count(self) -> int:
        return sum(file.entry_count for file in self.files)

    @property
    def changed_files(self) -> tuple[SourceTransformResult, ...]:
        return tuple(file for file in self.files if file.transform is not None and file.transform.changed)


@dataclass(frozen=True, slots=True)
class OutputProcessResult:
    """Post-processing of one compiled output file."""

    path: str
    content: str
    nls: NlsPostProcessResult | None = None
    mangle: ConvertPrivateFieldsResult | None = None

    @property
    def changed(self) -> bool:
        nls_changed = self.nls is not None and self.nls.changed
        mangle_changed = self.mangle is not None and self.mangle.edit_count > 0
        return nls_changed or mangle_changed

    def diagnostics(self) -> list[Diagnostic]:
        return collect_diagnostics(
            self.nls.diagnostics() if self.nls is not None else (),
            self.mangle.diagnostics() if self.mangle is not None else (),
        )


@dataclass(frozen=True, slots=True)
class MangleStats:
    """Totals over the files the private-field pass actually changed."""

    file_count: int = 0
    class_count: int = 0
    field_count: int = 0
    edit_count: int = 0
    elapsed: float = 0.0
