import logging
from pathlib import Path

import pytest

from bundlepass.mangle import convert_private_fields
from bundlepass.nls import create_nls_collector, finalize_nls
from bundlepass.pipeline import (
    BuildMode,
    BuildOptions,
    is_extension_host_bundle,
    log_mangle_stats,
    post_process_output,
    post_process_outputs,
    summarize_mangle_stats,
    transform_source_file,
    transform_sources,
)


def _write(path: Path, text: str) -> Path:
    path.parent.mkdir(parents=True, exist_ok=True)
    path.write_text(text, encoding="utf-8")
    return path


def test_build_options_for_mode() -> None:
    development = BuildOptions.for_mode(BuildMode.DEVELOPMENT)
    production = BuildOptions.for_mode(BuildMode.PRODUCTION)

    assert (development.nls, development.preserve_english, development.mangle_privates) == (False, True, False)
    assert (production.nls, production.preserve_english, production.mangle_privates) == (True, False, True)


def test_build_options_reject_invalid_worker_count() -> None:
    try:
        BuildOptions(max_workers=0)
    except ValueError as exc:
        assert "max_workers" in str(exc)
    else:
        raise AssertionError("Expected ValueError for max_workers=0")


def test_extension_host_bundles_are_exempt_from_mangling() -> None:
    options = BuildOptions.for_mode(BuildMode.PRODUCTION)

    assert is_extension_host_bundle("out/vs/workbench/api/node/extensionHostProcess.js")
    assert is_extension_host_bundle("out\\vs\\workbench\\api\\worker\\extensionHostWorkerMain.js")
    assert not options.should_mangle("out/vs/workbench/api/node/extensionHostProcess.js")
    assert options.should_mangle("out/vs/workbench/workbench.desktop.main.js")
    assert not options.should_mangle("out/vs/workbench/workbench.desktop.main.css")


def test_transform_source_file_skips_declaration_files(tmp_path: Path) -> None:
    collector = create_nls_collector()
    path = _write(tmp_path / "src" / "vs" / "types.d.ts", "import * as nls from 'vs/nls';\nnls.localize('k', 'v');\n")

    result = transform_source_file(path, tmp_path / "src", collector)

    assert result.skipped
    assert result.module_id == "vs/types.d"
    assert len(collector) == 0


def test_transform_sources_joins_every_file_before_returning(tmp_path: Path) -> None:
    base = tmp_path / "src"
    paths = [
        _write(base / "vs" / f"m{index}.ts", f"import * as nls from 'vs/nls';\nnls.localize('k{index}', 'v{index}');\n")
        for index in range(20)
    ]
    paths.append(_write(base / "vs" / "plain.ts", "export const x = 1;\n"))
    collector = create_nls_collector()

    run = transform_sources(paths, base, collector, max_workers=4)

    assert len(run.files) == 21
    assert run.entry_count == 20
    assert len(run.changed_files) == 20
    assert len(collector) == 20
    assert collector.get("%%NLS:vs/m7#k7%%") is not None


def test_transform_sources_raises_after_all_tasks_settle(tmp_path: Path) -> None:
    base = tmp_path / "src"
    good = _write(base / "good.ts", "import * as nls from 'vs/nls';\nnls.localize('k', 'v');\n")
    missing = base / "missing.ts"
    collector = create_nls_collector()

    with pytest.raises(FileNotFoundError):
        transform_sources([missing, good], base, collector)

    assert collector.get("%%NLS:good#k%%") is not None


def test_end_to_end_production_build(tmp_path: Path) -> None:
    base = tmp_path / "src"
    source = _write(
        base / "vs" / "editor.ts",
        "import * as nls from 'vs/nls';\n"
        "export class Editor {\n"
        "    #title = nls.localize('title', \"Editor\");\n"
        "    get title() { return this.#title; }\n"
        "}\n",
    )
    collector = create_nls_collector()
    run = transform_sources([source], base, collector)
    (transformed,) = run.files
    assert transformed.transform is not None

    finalized = finalize_nls(collector, tmp_path / "out")
    options = BuildOptions.for_mode(BuildMode.PRODUCTION)
    result = post_process_output("out/vs/editor.js", transformed.transform.code, options, finalized.index_map)

    assert result.changed
    assert "this.$a" in result.content
    assert "nls.localize(0, null)" in result.content
    assert result.diagnostics() == []


def test_development_build_leaves_output_untouched() -> None:
    options = BuildOptions.for_mode(BuildMode.DEVELOPMENT)
    content = 'class A { #x = 1; }\nf("%%NLS:m#k%%", "K");\n'

    result = post_process_output("out/a.js", content, options, {"%%NLS:m#k%%": 0})

    assert result.content == content
    assert result.nls is None
    assert result.mangle is None
    assert not result.changed


def test_non_js_outputs_are_skipped() -> None:
    options = BuildOptions.for_mode(BuildMode.PRODUCTION)

    result = post_process_output("out/a.css", '.a { content: "%%NLS:m#k%%"; }', options, {"%%NLS:m#k%%": 0})

    assert result.content == '.a { content: "%%NLS:m#k%%"; }'


def test_post_process_outputs_logs_mangle_stats(caplog: pytest.LogCaptureFixture) -> None:
    options = BuildOptions(mangle_privates=True, max_workers=2)
    outputs = {
        "out/a.js": "class A { #x = 1; m() { return this.#x; } }",
        "out/b.js": "class B { y = 1; }",
        "out/vs/workbench/api/node/extensionHostProcess.js": "class C { #z = 1; }",
    }

    with caplog.at_level(logging.INFO, logger="bundlepass.pipeline.entrypoints"):
        results = post_process_outputs(outputs, options, {})

    by_path = {result.path: result for result in results}
    assert by_path["out/a.js"].content == "class A { $a = 1; m() { return this.$a; } }"
    assert by_path["out/vs/workbench/api/node/extensionHostProcess.js"].mangle is None
    assert "[mangle-privates] out/a.js: 1 classes, 1 fields, 2 edits" in caplog.text
    assert "[mangle-privates] Total: 1 classes, 1 fields, 2 edits" in caplog.text
    assert "out/b.js" not in caplog.text


def test_summarize_mangle_stats_counts_only_changed_files() -> None:
    results = [
        ("a.js", convert_private_fields("class A { #x; #y; }")),
        ("b.js", convert_private_fields("class B {}")),
        ("c.js", convert_private_fields("class C { #x; m() { this.#x; } }")),
    ]

    stats = summarize_mangle_stats(results)

    assert (stats.file_count, stats.class_count, stats.field_count, stats.edit_count) == (2, 2, 3, 4)
    assert log_mangle_stats(results) == stats
