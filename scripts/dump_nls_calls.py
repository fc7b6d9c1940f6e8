#!/usr/bin/env python
import argparse
from pathlib import Path

from bundlepass.nls import (
    LocalizeCall,
    LocalizeFunction,
    LocalizeLiteralError,
    analyze_localize_calls,
    compute_module_id,
    parse_localize_key,
    transform_to_placeholders,
)
from bundlepass.syntax import SourceLanguage, parse_source
from bundlepass.text import LineIndex


def format_call(idx: int, function: LocalizeFunction, call: LocalizeCall) -> str:
    start = call.key_span.start
    return (
        f"[{idx}] {function.value} "
        f"at={start.line + 1}:{start.character + 1} "
        f"key={call.key!r} "
        f"value={call.value!r}"
    )


def main() -> None:
    parser = argparse.ArgumentParser(description="Print localize calls and their placeholders for one file")
    parser.add_argument("path", type=Path)
    parser.add_argument("--base-dir", type=Path, default=Path("src"))
    parser.add_argument("--show-code", action="store_true", help="Print the transformed source too")
    args = parser.parse_args()

    text = args.path.read_text(encoding="utf-8")
    tree = parse_source(text, SourceLanguage.TYPESCRIPT)
    for diagnostic in tree.syntax_diagnostics():
        print(f"{diagnostic.code} {diagnostic.range}: {diagnostic.message}")

    index = LineIndex(text)
    count = 0
    for function in LocalizeFunction:
        for call in analyze_localize_calls(text, function, tree=tree):
            print(format_call(count, function, call))
            count += 1
            try:
                parse_localize_key(call.key)
            except LocalizeLiteralError as exc:
                diagnostic = exc.diagnostic(index.offset_of(call.key_span.start))
                print(f"    {diagnostic.code} {diagnostic.range}: {diagnostic.message}")

    module_id = compute_module_id(args.path, args.base_dir)
    try:
        result = transform_to_placeholders(text, module_id)
    except LocalizeLiteralError as exc:
        raise SystemExit(str(exc)) from exc

    for entry in result.entries:
        print(f"{entry.placeholder} -> {entry.message!r}")
    if args.show_code:
        print(result.code)

    print(f"Found {count} calls in {module_id}")


if __name__ == "__main__":
    main()
