"""Build modes and per-build options for the rewrite passes."""

from collections.abc import Callable
from dataclasses import dataclass
from enum import StrEnum
from typing import Final

EXTENSION_HOST_ENTRY_POINTS: Final[tuple[str, ...]] = (
    "vs/workbench/api/node/extensionHostProcess",
    "vs/workbench/api/worker/extensionHostWorkerMain",
)


def is_extension_host_bundle(path: str) -> bool:
    """Extension host bundles expose API surface to extensions and keep real `#` privates."""
    normalized = path.replace("\\", "/")
    return any(normalized.endswith(f"{entry_point}.js") for entry_point in EXTENSION_HOST_ENTRY_POINTS)


class BuildMode(StrEnum):
    """Top-level build behavior profile."""

    DEVELOPMENT = "development"
    PRODUCTION = "production"


@dataclass(frozen=True, slots=True)
class BuildOptions:
    """Switches the orchestration passes to the core per build."""

    mode: BuildMode = BuildMode.DEVELOPMENT
    nls: bool = False
    preserve_english: bool = True
    mangle_privates: bool = False
    mangle_exempt: Callable[[str], bool] = is_extension_host_bundle
    max_workers: int | None = None

    def __post_init__(self) -> None:
        if self.max_workers is not None and self.max_workers < 1:
            raise ValueError("max_workers must be at least 1")

    @staticmethod
    def for_mode(mode: BuildMode) -> "BuildOptions":
        if mode == BuildMode.PRODUCTION:
            return BuildOptions(
                mode=mode,
                nls=True,
                preserve_english=False,
                mangle_privates=True,
            )

        return BuildOptions(
            mode=mode,
            nls=False,
            preserve_english=True,
            mangle_privates=False,
        )

    def should_mangle(self, path: str) -> bool:
        return self.mangle_privates and path.endswith(".js") and not self.mangle_exempt(path)
