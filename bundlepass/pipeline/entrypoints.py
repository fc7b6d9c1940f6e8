"""Build-level entrypoints that drive the per-file passes.

Order of a build:

1. `transform_sources` over every source file of every entry point, all
   feeding one `NlsCollector`. It returns only after every task settled.
2. `finalize_nls` once, over the complete collector.
3. `post_process_outputs` over every compiled output file.
"""

from __future__ import annotations

from collections.abc import Iterable, Mapping
from concurrent.futures import ThreadPoolExecutor, wait
import logging
import os
from pathlib import Path

from bundlepass.mangle import ConvertPrivateFieldsResult, convert_private_fields
from bundlepass.nls import (
    NlsCollector,
    compute_module_id,
    post_process_nls_with_stats,
    transform_to_placeholders,
)
from bundlepass.pipeline.options import BuildOptions
from bundlepass.pipeline.results import (
    MangleStats,
    OutputProcessResult,
    SourceTransformResult,
    SourceTransformRunResult,
)

logger = logging.getLogger(__name__)

_SOURCE_SUFFIX = ".ts"
_DECLARATION_SUFFIX = ".d.ts"


def transform_source_file(
    path: str | os.PathLike[str],
    base_dir: str | os.PathLike[str],
    collector: NlsCollector,
) -> SourceTransformResult:
    """Placeholder-transform one `.ts` file and add its entries to `collector`."""
    file_path = os.fspath(path)
    module_id = compute_module_id(file_path, base_dir)
    if not file_path.endswith(_SOURCE_SUFFIX) or file_path.endswith(_DECLARATION_SUFFIX):
        return SourceTransformResult(path=file_path, module_id=module_id, transform=None)

    source = Path(file_path).read_text(encoding="utf-8")
    transform = transform_to_placeholders(source, module_id)
    collector.extend(transform.entries)
    return SourceTransformResult(path=file_path, module_id=module_id, transform=transform)


def transform_sources(
    paths: Iterable[str | os.PathLike[str]],
    base_dir: str | os.PathLike[str],
    collector: NlsCollector,
    *,
    max_workers: int | None = None,
) -> SourceTransformRunResult:
    """Transform many files concurrently and join on all of them.

    Returning is the barrier before `finalize_nls`: every task has settled,
    whether it contributed entries or not. If any task failed, the first
    failure (in input order) is raised once all tasks are done.
    """
    with ThreadPoolExecutor(max_workers=max_workers) as executor:
        futures = [executor.submit(transform_source_file, path, base_dir, collector) for path in paths]
        wait(futures)

    results: list[SourceTransformResult] = []
    for future in futures:
        error = future.exception()
        if error is not None:
            raise error
        results.append(future.result())

    run = SourceTransformRunResult(files=tuple(results))
    logger.debug(
        "[nls] Transformed %d files (%d with localize calls, %d entries)",
        len(run.files),
        len(run.changed_files),
        run.entry_count,
    )
    return run


def post_process_output(
    path: str,
    content: str,
    options: BuildOptions,
    index_map: Mapping[str, int],
) -> OutputProcessResult:
    """NLS index substitution, then private-field conversion, for one output file."""
    if not path.endswith(".js"):
        return OutputProcessResult(path=path, content=content)

    nls_result = None
    if options.nls and index_map:
        nls_result = post_process_nls_with_stats(content, index_map, options.preserve_english)
        content = nls_result.content

    mangle_result = None
    if options.should_mangle(path):
        mangle_result = convert_private_fields(content, path)
        content = mangle_result.code

    return OutputProcessResult(path=path, content=content, nls=nls_result, mangle=mangle_result)


def post_process_outputs(
    outputs: Mapping[str, str],
    options: BuildOptions,
    index_map: Mapping[str, int],
) -> tuple[OutputProcessResult, ...]:
    """Post-process every output file; files share no state so they run in parallel."""
    with ThreadPoolExecutor(max_workers=options.max_workers) as executor:
        results = tuple(
            executor.map(
                lambda item: post_process_output(item[0], item[1], options, index_map),
                outputs.items(),
            )
        )

    if options.mangle_privates:
        log_mangle_stats(
            (result.path, result.mangle)
            for result in results
            if result.mangle is not None
        )
    return results


def summarize_mangle_stats(results: Iterable[tuple[str, ConvertPrivateFieldsResult]]) -> MangleStats:
    file_count = class_count = field_count = edit_count = 0
    elapsed = 0.0
    for _, result in results:
        if result.edit_count == 0:
            continue
        file_count += 1
        class_count += result.class_count
        field_count += result.field_count
        edit_count += result.edit_count
        elapsed += result.elapsed
    return MangleStats(
        file_count=file_count,
        class_count=class_count,
        field_count=field_count,
        edit_count=edit_count,
        elapsed=elapsed,
    )


def log_mangle_stats(results: Iterable[tuple[str, ConvertPrivateFieldsResult]]) -> MangleStats:
    changed = [(path, result) for path, result in results if result.edit_count > 0]
    for path, result in changed:
        logger.info(
            "[mangle-privates] %s: %d classes, %d fields, %d edits, %.0fms",
            path,
            result.class_count,
            result.field_count,
            result.edit_count,
            result.elapsed,
        )
    stats = summarize_mangle_stats(changed)
    if stats.file_count:
        logger.info(
            "[mangle-privates] Total: %d classes, %d fields, %d edits, %.0fms",
            stats.class_count,
            stats.field_count,
            stats.edit_count,
            stats.elapsed,
        )
    return stats
