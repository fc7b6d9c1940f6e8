"""Build options, result carriers and orchestration entrypoints."""

from bundlepass.pipeline.entrypoints import (
    log_mangle_stats,
    post_process_output,
    post_process_outputs,
    summarize_mangle_stats,
    transform_source_file,
    transform_sources,
)
from bundlepass.pipeline.options import (
    EXTENSION_HOST_ENTRY_POINTS,
    BuildMode,
    BuildOptions,
    is_extension_host_bundle,
)
from bundlepass.pipeline.results import (
    MangleStats,
    OutputProcessResult,
    SourceTransformResult,
    SourceTransformRunResult,
)

__all__ = [
    "EXTENSION_HOST_ENTRY_POINTS",
    "BuildMode",
    "BuildOptions",
    "MangleStats",
    "OutputProcessResult",
    "SourceTransformResult",
    "SourceTransformRunResult",
    "is_extension_host_bundle",
    "log_mangle_stats",
    "post_process_output",
    "post_process_outputs",
    "summarize_mangle_stats",
    "transform_source_file",
    "transform_sources",
]
