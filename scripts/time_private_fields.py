#!/usr/bin/env python3
"""Quick perf benchmark for private-field conversion over bundled output."""

from __future__ import annotations

import argparse
import cProfile
import io
import logging
from pathlib import Path
import pstats
import statistics
import time

from tqdm import tqdm

from bundlepass.mangle import convert_private_fields
from bundlepass.pipeline import is_extension_host_bundle, log_mangle_stats


def _collect_bundle_files(root: Path) -> list[Path]:
    files = sorted(root.rglob("*.js"))
    return [path for path in files if path.is_file() and not is_extension_host_bundle(path.as_posix())]


def _run_once(
    files: list[Path],
    *,
    label: str,
    show_progress: bool,
    report: bool,
) -> tuple[float, int, int, int]:
    start = time.perf_counter()
    total_classes = 0
    total_fields = 0
    total_edits = 0
    results = []
    iterator = (
        tqdm(files, desc=label, unit="file")
        if show_progress
        else files
    )
    for path in iterator:
        result = convert_private_fields(path.read_text(encoding="utf-8"), str(path))
        total_classes += result.class_count
        total_fields += result.field_count
        total_edits += result.edit_count
        if report:
            results.append((str(path), result))
    duration = time.perf_counter() - start
    if report:
        log_mangle_stats(results)
    return duration, total_classes, total_fields, total_edits


def main() -> int:
    parser = argparse.ArgumentParser(description="Benchmark private-field conversion throughput")
    parser.add_argument("out_root", type=Path, help="Directory of bundled .js output")
    parser.add_argument("--runs", type=int, default=5, help="Measured runs")
    parser.add_argument("--warmups", type=int, default=1, help="Warmup runs")
    parser.add_argument(
        "--no-progress",
        action="store_true",
        help="Disable tqdm progress bars (useful for pure timing)",
    )
    parser.add_argument(
        "--verbose",
        action="store_true",
        help="Log per-file [mangle-privates] stats for the last measured run",
    )
    parser.add_argument(
        "--profile",
        action="store_true",
        help="Run cProfile and print top hotspots",
    )
    parser.add_argument(
        "--profile-top",
        type=int,
        default=30,
        help="Number of cProfile rows to print (default: 30)",
    )
    parser.add_argument(
        "--profile-sort",
        type=str,
        default="tottime",
        help="cProfile sort key (default: tottime, common: cumulative)",
    )
    parser.add_argument(
        "--limit-files",
        type=int,
        default=0,
        help="Optional file limit for quick profiling/smoke tests (0 = all files)",
    )
    args = parser.parse_args()
    logging.basicConfig(level=logging.INFO if args.verbose else logging.WARNING, format="%(message)s")

    out_root: Path = args.out_root
    if not out_root.exists() or not out_root.is_dir():
        raise SystemExit(f"Invalid out_root: {out_root}")

    files = _collect_bundle_files(out_root)
    if not files:
        raise SystemExit(f"No .js files found under {out_root}")
    if args.limit_files > 0:
        files = files[: args.limit_files]

    show_progress = not args.no_progress
    runs = max(args.runs, 1)

    def _benchmark() -> tuple[list[float], int, int, int]:
        for warmup_idx in range(max(args.warmups, 0)):
            _run_once(
                files,
                label=f"warmup {warmup_idx + 1}/{max(args.warmups, 0)}",
                show_progress=show_progress,
                report=False,
            )

        timings: list[float] = []
        classes = fields = edits = 0
        for run_idx in range(runs):
            duration, classes, fields, edits = _run_once(
                files,
                label=f"run {run_idx + 1}/{runs}",
                show_progress=show_progress,
                report=args.verbose and run_idx == runs - 1,
            )
            timings.append(duration)
        return timings, classes, fields, edits

    if args.profile:
        profiler = cProfile.Profile()
        profiler.enable()
        timings, classes, fields, edits = _benchmark()
        profiler.disable()
        stream = io.StringIO()
        stats = pstats.Stats(profiler, stream=stream)
        stats.sort_stats(args.profile_sort).print_stats(max(args.profile_top, 1))
        print("\n[cProfile top functions]")
        print(stream.getvalue())
    else:
        timings, classes, fields, edits = _benchmark()

    mean = statistics.mean(timings)

    print(f"Dataset: {out_root}")
    print(f"Files: {len(files)}")
    print(f"Classes: {classes}")
    print(f"Fields: {fields}")
    print(f"Edits: {edits}")
    print(f"Runs: {len(timings)} (warmups={max(args.warmups, 0)})")
    print(f"Best:   {min(timings):.4f}s")
    print(f"Median: {statistics.median(timings):.4f}s")
    print(f"Mean:   {mean:.4f}s")
    print(f"Worst:  {max(timings):.4f}s")
    print(f"Files/s (mean): {len(files) / mean:.1f}")
    return 0


if __name__ == "__main__":
    raise SystemExit(main())
