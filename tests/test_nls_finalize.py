import json
import logging
from pathlib import Path
import threading

import pytest

from bundlepass.nls import (
    NLS_KEYS_JSON,
    NLS_MESSAGES_JS,
    NLS_MESSAGES_JSON,
    NLS_METADATA_JSON,
    LocalizeFunction,
    NlsEntry,
    StructuredKey,
    build_nls_index,
    create_nls_collector,
    finalize_nls,
    make_placeholder,
    render_nls_assets,
)


def _entry(module_id: str, key: str | StructuredKey, message: str) -> NlsEntry:
    key_text = key if isinstance(key, str) else key.key
    return NlsEntry(module_id=module_id, key=key, message=message, placeholder=make_placeholder(module_id, key_text))


ENTRIES = (
    _entry("vs/b", "zeta", "Zeta"),
    _entry("vs/a", "beta", "Beta"),
    _entry("vs/b", "alpha", "Alpha"),
    _entry("vs/a", StructuredKey(key="Alpha", comment=("Capitalized",)), "Upper Alpha"),
)


def test_collector_collapses_duplicate_placeholders() -> None:
    collector = create_nls_collector()
    collector.add(_entry("vs/a", "k", "first"))
    collector.add(_entry("vs/a", "k", "second"))

    assert len(collector) == 1
    entry = collector.get("%%NLS:vs/a#k%%")
    assert entry is not None
    assert entry.message == "second"
    assert collector.get("%%NLS:vs/a#missing%%") is None


def test_collector_accepts_concurrent_writers() -> None:
    collector = create_nls_collector()

    def _add_module(module_index: int) -> None:
        collector.extend(_entry(f"vs/m{module_index}", f"k{key}", "msg") for key in range(50))

    threads = [threading.Thread(target=_add_module, args=(index,)) for index in range(8)]
    for thread in threads:
        thread.start()
    for thread in threads:
        thread.join()

    assert len(collector) == 8 * 50


def test_index_is_ordered_by_module_then_key_code_points() -> None:
    index = build_nls_index(ENTRIES)

    # "Alpha" sorts before "beta": uppercase code points come first.
    assert index.messages == ("Upper Alpha", "Beta", "Alpha", "Zeta")
    assert index.index_map["%%NLS:vs/a#Alpha%%"] == 0
    assert index.index_map["%%NLS:vs/b#zeta%%"] == 3
    assert index.module_count == 2


def test_index_does_not_depend_on_insertion_order() -> None:
    forward = build_nls_index(ENTRIES)
    backward = build_nls_index(reversed(ENTRIES))

    assert dict(forward.index_map) == dict(backward.index_map)
    assert forward.messages == backward.messages


def test_localize_and_localize2_with_same_key_get_stable_indices() -> None:
    blanked = NlsEntry("vs/m", "k", "A", make_placeholder("vs/m", "k", LocalizeFunction.LOCALIZE))
    kept = NlsEntry("vs/m", "k", "B", make_placeholder("vs/m", "k", LocalizeFunction.LOCALIZE2))

    forward = build_nls_index([blanked, kept])
    backward = build_nls_index([kept, blanked])

    assert dict(forward.index_map) == dict(backward.index_map) == {"%%NLS2:vs/m#k%%": 0, "%%NLS:vs/m#k%%": 1}
    assert forward.messages == backward.messages == ("B", "A")


def test_rendered_assets_shapes() -> None:
    assets = render_nls_assets(build_nls_index(ENTRIES), global_name="_TEST_MESSAGES")

    assert json.loads(assets[NLS_MESSAGES_JSON]) == ["Upper Alpha", "Beta", "Alpha", "Zeta"]
    assert json.loads(assets[NLS_KEYS_JSON]) == [["vs/a", ["Alpha", "beta"]], ["vs/b", ["alpha", "zeta"]]]
    metadata = json.loads(assets[NLS_METADATA_JSON])
    assert metadata["keys"]["vs/a"][0] == {"key": "Alpha", "comment": ["Capitalized"]}
    assert metadata["messages"]["vs/b"] == ["Alpha", "Zeta"]
    assert assets[NLS_MESSAGES_JS].endswith('globalThis._TEST_MESSAGES=["Upper Alpha","Beta","Alpha","Zeta"];')


def test_finalize_writes_assets_to_every_output_directory(tmp_path: Path, caplog: pytest.LogCaptureFixture) -> None:
    collector = create_nls_collector()
    collector.extend(ENTRIES)
    out_dir = tmp_path / "out"
    extra_dir = tmp_path / "out-extra" / "nested"

    with caplog.at_level(logging.INFO, logger="bundlepass.nls.finalize"):
        result = finalize_nls(collector, out_dir, [extra_dir])

    assert result.message_count == 4
    assert result.index_map["%%NLS:vs/a#beta%%"] == 1
    assert len(result.written_files) == 8
    for directory in (out_dir, extra_dir):
        for name in (NLS_MESSAGES_JSON, NLS_KEYS_JSON, NLS_METADATA_JSON, NLS_MESSAGES_JS):
            assert (directory / name).is_file()
    assert (out_dir / NLS_MESSAGES_JS).read_text(encoding="utf-8") == (
        extra_dir / NLS_MESSAGES_JS
    ).read_text(encoding="utf-8")
    assert "[nls] Extracted 4 messages from 2 modules" in caplog.text


def test_finalize_with_empty_collector_writes_nothing(tmp_path: Path) -> None:
    result = finalize_nls(create_nls_collector(), tmp_path / "out")

    assert result.message_count == 0
    assert dict(result.index_map) == {}
    assert result.written_files == ()
    assert not (tmp_path / "out").exists()


def test_finalize_keeps_non_ascii_messages_unescaped(tmp_path: Path) -> None:
    collector = create_nls_collector()
    collector.add(_entry("vs/a", "k", "Größe"))

    finalize_nls(collector, tmp_path)

    assert (tmp_path / NLS_MESSAGES_JSON).read_text(encoding="utf-8") == '["Größe"]'
