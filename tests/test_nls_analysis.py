import pytest

from bundlepass.nls import (
    LocalizeFunction,
    analyze_localize_calls,
    collect_nls_imports,
    parse_localize_key,
)
from bundlepass.syntax import SourceLanguage, parse_source
from bundlepass.text import LinePosition
from tests._shared_cases import NLS_CASES, NlsCase, case_id


def _keys(source: str) -> tuple[str, ...]:
    tree = parse_source(source, SourceLanguage.TYPESCRIPT)
    found = []
    for function in LocalizeFunction:
        for call in analyze_localize_calls(source, function, tree=tree):
            key = parse_localize_key(call.key)
            found.append((call.key_span.start, key if isinstance(key, str) else key.key))
    return tuple(key for _, key in sorted(found, key=lambda item: item[0]))


@pytest.mark.parametrize("case", NLS_CASES, ids=case_id)
def test_shared_nls_cases_find_expected_keys(case: NlsCase) -> None:
    assert _keys(case.source) == case.expected_keys


def test_call_spans_point_at_key_and_message_arguments() -> None:
    source = "import * as nls from 'vs/nls';\nconst a = nls.localize('k', \"Message\");\n"

    calls = analyze_localize_calls(source, LocalizeFunction.LOCALIZE)

    assert len(calls) == 1
    call = calls[0]
    assert call.key == "'k'"
    assert call.value == '"Message"'
    assert call.key_span.start == LinePosition(1, 23)
    assert call.key_span.end == LinePosition(1, 26)
    assert call.value_span.start == LinePosition(1, 28)


def test_calls_with_fewer_than_two_arguments_are_ignored() -> None:
    source = "import * as nls from 'vs/nls';\nnls.localize('only-key');\nnls.localize('k', 'v', 1);\n"

    calls = analyze_localize_calls(source, "localize")

    assert [call.key for call in calls] == ["'k'"]


def test_other_members_of_namespace_are_not_matched() -> None:
    source = "import * as nls from 'vs/nls';\nnls.localize2('a', 'A');\nnls.getConfiguredDefaultLocale('x', 'y');\n"

    assert analyze_localize_calls(source, LocalizeFunction.LOCALIZE) == []
    assert [call.key for call in analyze_localize_calls(source, LocalizeFunction.LOCALIZE2)] == ["'a'"]


def test_named_import_only_matches_its_own_function() -> None:
    source = "import { localize2 } from 'vs/nls';\nlocalize2('a', 'A');\n"

    assert analyze_localize_calls(source, LocalizeFunction.LOCALIZE) == []


def test_comments_between_arguments_are_skipped() -> None:
    source = "import * as nls from 'vs/nls';\nnls.localize(/* key */ 'k', /* msg */ 'v');\n"

    calls = analyze_localize_calls(source, LocalizeFunction.LOCALIZE)

    assert [(call.key, call.value) for call in calls] == [("'k'", "'v'")]


def test_calls_are_returned_in_source_order() -> None:
    source = (
        "import * as nls from 'vs/nls';\n"
        "f(nls.localize('outer', nls.localize('inner', 'I')));\n"
        "nls.localize('last', 'L');\n"
    )

    calls = analyze_localize_calls(source, LocalizeFunction.LOCALIZE)

    assert [call.key for call in calls] == ["'outer'", "'inner'", "'last'"]


def test_non_ascii_text_keeps_character_columns() -> None:
    source = "import * as nls from 'vs/nls';\nconst é = 'ü'; nls.localize('k', 'ö');\n"

    calls = analyze_localize_calls(source, LocalizeFunction.LOCALIZE)

    assert calls[0].key_span.start == LinePosition(1, 28)
    assert calls[0].value == "'ö'"


def test_collect_nls_imports_reports_bindings() -> None:
    source = (
        "import * as nls from 'vs/nls';\n"
        "import { localize as loc, localize2 } from '../nls.js';\n"
        "import { other } from './other';\n"
    )

    imports = collect_nls_imports(parse_source(source, SourceLanguage.TYPESCRIPT))

    assert imports.namespace_names == frozenset({"nls"})
    assert imports.local_names_for("localize") == frozenset({"loc"})
    assert imports.local_names_for("localize2") == frozenset({"localize2"})
    assert not imports.is_empty


def test_file_without_nls_import_returns_empty_list() -> None:
    assert analyze_localize_calls("const x = localize('a', 'b');\n", LocalizeFunction.LOCALIZE) == []


def test_parameters_and_locals_shadowing_the_import_are_not_matched() -> None:
    source = (
        "import { localize } from 'vs/nls';\n"
        "function wrap(localize: Function) { return localize(key, value); }\n"
        "const arrow = localize => localize(key, value);\n"
        "function inner() { const localize = make(); return localize(key, value); }\n"
        "function outer() { return localize('real', 'Real'); }\n"
    )

    calls = analyze_localize_calls(source, LocalizeFunction.LOCALIZE)

    assert [call.key for call in calls] == ["'real'"]


def test_shadowed_namespace_name_is_not_matched() -> None:
    source = "import * as nls from 'vs/nls';\nfunction f(nls) { return nls.localize(a, b); }\nnls.localize('k', 'v');\n"

    calls = analyze_localize_calls(source, LocalizeFunction.LOCALIZE)

    assert [call.key for call in calls] == ["'k'"]
