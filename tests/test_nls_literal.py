from bundlepass.nls import (
    LocalizeLiteralError,
    StructuredKey,
    parse_localize_key,
    parse_localize_key_or_value,
    parse_localize_message,
)


def test_quoted_strings_in_both_styles() -> None:
    assert parse_localize_key("'hello'") == "hello"
    assert parse_localize_key('"hello"') == "hello"


def test_escape_sequences_are_decoded() -> None:
    source = r"'tab\there \'quoted\' \x41B\u{1F600} 😀 line\
joined'"

    assert parse_localize_message(source) == "tab\there 'quoted' AB\U0001F600 \U0001F600 linejoined"


def test_template_without_substitutions() -> None:
    assert parse_localize_message("`multi\nline`") == "multi\nline"


def test_template_substitution_is_rejected() -> None:
    try:
        parse_localize_message("`hello ${name}`")
    except LocalizeLiteralError as exc:
        assert "substitutions" in str(exc)
    else:
        raise AssertionError("Expected LocalizeLiteralError for a template substitution")


def test_concatenation_and_parentheses() -> None:
    assert parse_localize_message("'a' + \"b\" + ('c' + `d`)") == "abcd"


def test_comments_and_whitespace_between_tokens() -> None:
    assert parse_localize_message("/* lead */ 'a' // tail\n + 'b'") == "ab"


def test_structured_key_with_comment_list() -> None:
    key = parse_localize_key("{ key: 'save', comment: ['Verb', \"not a noun\",], }")

    assert key == StructuredKey(key="save", comment=("Verb", "not a noun"))


def test_structured_key_with_quoted_property_names() -> None:
    key = parse_localize_key_or_value("{ 'comment': 'single note', \"key\": 'k' }")

    assert key == StructuredKey(key="k", comment=("single note",))


def test_structured_key_without_key_is_rejected() -> None:
    try:
        parse_localize_key("{ comment: ['only a note'] }")
    except LocalizeLiteralError as exc:
        assert "missing `key`" in str(exc)
    else:
        raise AssertionError("Expected LocalizeLiteralError for a key object without `key`")


def test_identifiers_and_calls_are_never_evaluated() -> None:
    for source in ("someVariable", "getKey()", "'a' + b", "{ key: k }", "{ key: 'k', other: 'x' }"):
        try:
            parse_localize_key(source)
        except LocalizeLiteralError as exc:
            assert exc.source == source
        else:
            raise AssertionError(f"Expected LocalizeLiteralError for {source!r}")


def test_message_must_be_a_string() -> None:
    try:
        parse_localize_message("{ key: 'k' }")
    except LocalizeLiteralError as exc:
        assert "Expected a string message" in str(exc)
    else:
        raise AssertionError("Expected LocalizeLiteralError for an object message")


def test_unterminated_string_is_rejected() -> None:
    try:
        parse_localize_key("'open")
    except LocalizeLiteralError as exc:
        assert "Unterminated" in str(exc)
    else:
        raise AssertionError("Expected LocalizeLiteralError for an unterminated string")


def test_literal_error_reports_diagnostic_at_file_offset() -> None:
    try:
        parse_localize_key("  nope")
    except LocalizeLiteralError as exc:
        diagnostic = exc.diagnostic(base_offset=100)
    else:
        raise AssertionError("Expected LocalizeLiteralError")

    assert diagnostic.code == "NLS_INVALID_LITERAL"
    assert diagnostic.range.as_tuple() == (102, 102)
    assert diagnostic.severity == "error"
