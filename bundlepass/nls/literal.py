"""Restricted literal reader for localize() key and message arguments.

Accepted shapes:

- `'text'`, `"text"`, or a template literal without `${...}` substitutions
- string pieces joined with `+`, optionally parenthesised
- `{ key: <string>, comment: [<string>, ...] }`

Anything else is rejected. Source text is never executed.
"""

from __future__ import annotations

from bundlepass.diagnostics import NLS_INVALID_LITERAL, Diagnostic
from bundlepass.nls.model import LocalizeKey, StructuredKey
from bundlepass.text import TextRange

_SIMPLE_ESCAPES = {
    "n": "\n",
    "r": "\r",
    "t": "\t",
    "b": "\b",
    "f": "\f",
    "v": "\v",
}
_LINE_TERMINATORS = frozenset({"\n", "\r", "\u2028", "\u2029"})
_HEX_DIGITS = frozenset("0123456789abcdefABCDEF")


class LocalizeLiteralError(ValueError):
    """Raised when a localize() argument is not a supported literal."""

    def __init__(self, message: str, source: str, offset: int) -> None:
        super().__init__(f"{message} at offset {offset} in `{source}`")
        self.source = source
        self.offset = offset

    def diagnostic(self, base_offset: int = 0) -> Diagnostic:
        """Report the failure at `base_offset + offset` of the enclosing file."""
        position = base_offset + self.offset
        return Diagnostic.from_spec(
            NLS_INVALID_LITERAL,
            TextRange(position, position),
            detail=f"Got `{self.source}`.",
        )


def parse_localize_key_or_value(source: str) -> LocalizeKey:
    """Read one key/message argument expression into its value."""
    reader = _LiteralReader(source)
    value = reader.read_expression()
    reader.skip_trivia()
    if not reader.at_end():
        raise reader.error("Unexpected trailing input")
    return value


def parse_localize_key(source: str) -> LocalizeKey:
    return parse_localize_key_or_value(source)


def parse_localize_message(source: str) -> str:
    value = parse_localize_key_or_value(source)
    if not isinstance(value, str):
        raise LocalizeLiteralError("Expected a string message", source, 0)
    return value


class _LiteralReader:
    __slots__ = ("_source", "_pos")

    def __init__(self, source: str) -> None:
        self._source = source
        self._pos = 0

    def error(self, message: str) -> LocalizeLiteralError:
        return LocalizeLiteralError(message, self._source, self._pos)

    def at_end(self) -> bool:
        return self._pos >= len(self._source)

    def _peek(self, ahead: int = 0) -> str:
        index = self._pos + ahead
        if index < len(self._source):
            return self._source[index]
        return ""

    def skip_trivia(self) -> None:
        source = self._source
        while self._pos < len(source):
            char = source[self._pos]
            if char.isspace():
                self._pos += 1
            elif source.startswith("//", self._pos):
                newline = source.find("\n", self._pos)
                self._pos = len(source) if newline == -1 else newline + 1
            elif source.startswith("/*", self._pos):
                close = source.find("*/", self._pos + 2)
                if close == -1:
                    raise self.error("Unterminated comment")
                self._pos = close + 2
            else:
                return

    def _expect(self, char: str) -> None:
        self.skip_trivia()
        if self._peek() != char:
            raise self.error(f"Expected `{char}`")
        self._pos += 1

    def read_expression(self) -> LocalizeKey:
        self.skip_trivia()
        if self._peek() == "{":
            return self._read_object()
        return self._read_string_expression()

    def _read_string_expression(self) -> str:
        parts = [self._read_string_operand()]
        while True:
            self.skip_trivia()
            if self._peek() != "+":
                return "".join(parts)
            self._pos += 1
            parts.append(self._read_string_operand())

    def _read_string_operand(self) -> str:
        self.skip_trivia()
        char = self._peek()
        if char == "(":
            self._pos += 1
            value = self._read_string_expression()
            self._expect(")")
            return value
        if char in {"'", '"'}:
            return self._read_quoted(char)
        if char == "`":
            return self._read_template()
        raise self.error("Expected a string literal")

    def _read_quoted(self, quote: str) -> str:
        self._pos += 1
        source = self._source
        chunks: list[str] = []
        start = self._pos
        while True:
            if self._pos >= len(source):
                raise self.error("Unterminated string literal")
            char = source[self._pos]
            if char == quote:
                chunks.append(source[start : self._pos])
                self._pos += 1
                return "".join(chunks)
            if char == "\\":
                chunks.append(source[start : self._pos])
                chunks.append(self._read_escape())
                start = self._pos
                continue
            if char in {"\n", "\r"}:
                raise self.error("Unterminated string literal")
            self._pos += 1

    def _read_template(self) -> str:
        self._pos += 1
        source = self._source
        chunks: list[str] = []
        start = self._pos
        while True:
            if self._pos >= len(source):
                raise self.error("Unterminated template literal")
            char = source[self._pos]
            if char == "`":
                chunks.append(source[start : self._pos])
                self._pos += 1
                return "".join(chunks).replace("\r\n", "\n").replace("\r", "\n")
            if char == "$" and self._peek(1) == "{":
                raise self.error("Template substitutions are not supported")
            if char == "\\":
                chunks.append(source[start : self._pos])
                chunks.append(self._read_escape())
                start = self._pos
                continue
            self._pos += 1

    def _read_escape(self) -> str:
        # Positioned on the backslash.
        self._pos += 1
        char = self._peek()
        if not char:
            raise self.error("Unterminated escape sequence")
        self._pos += 1
        if char in _SIMPLE_ESCAPES:
            return _SIMPLE_ESCAPES[char]
        if char == "0" and not self._peek().isdigit():
            return "\0"
        if char == "x":
            return chr(self._read_hex(2))
        if char == "u":
            if self._peek() == "{":
                self._pos += 1
                close = self._source.find("}", self._pos)
                if close == -1:
                    raise self.error("Unterminated unicode escape")
                digits = self._source[self._pos : close]
                if not digits or any(d not in _HEX_DIGITS for d in digits):
                    raise self.error("Invalid unicode escape")
                self._pos = close + 1
                return chr(int(digits, 16))
            return self._read_utf16_escape()
        if char in _LINE_TERMINATORS:
            if char == "\r" and self._peek() == "\n":
                self._pos += 1
            return ""
        return char

    def _read_utf16_escape(self) -> str:
        code = self._read_hex(4)
        if 0xD800 <= code <= 0xDBFF and self._source.startswith("\\u", self._pos):
            save = self._pos
            self._pos += 2
            low = self._read_hex(4)
            if 0xDC00 <= low <= 0xDFFF:
                return chr(0x10000 + ((code - 0xD800) << 10) + (low - 0xDC00))
            self._pos = save
        return chr(code)

    def _read_hex(self, count: int) -> int:
        digits = self._source[self._pos : self._pos + count]
        if len(digits) != count or any(d not in _HEX_DIGITS for d in digits):
            raise self.error("Invalid hex escape")
        self._pos += count
        return int(digits, 16)

    def _read_object(self) -> StructuredKey:
        self._pos += 1
        key: str | None = None
        comment: tuple[str, ...] = ()
        while True:
            self.skip_trivia()
            if self._peek() == "}":
                self._pos += 1
                break
            name = self._read_property_name()
            self._expect(":")
            if name == "key":
                key = self._read_string_expression()
            elif name == "comment":
                comment = self._read_comment_value()
            else:
                raise self.error(f"Unsupported property `{name}`")
            self.skip_trivia()
            if self._peek() == ",":
                self._pos += 1
            elif self._peek() != "}":
                raise self.error("Expected `,` or `}`")
        if key is None:
            raise self.error("Object key literal is missing `key`")
        return StructuredKey(key=key, comment=comment)

    def _read_property_name(self) -> str:
        self.skip_trivia()
        char = self._peek()
        if char in {"'", '"'}:
            return self._read_quoted(char)
        start = self._pos
        while self._pos < len(self._source):
            char = self._source[self._pos]
            if char.isalnum() or char in {"_", "$"}:
                self._pos += 1
            else:
                break
        if start == self._pos:
            raise self.error("Expected a property name")
        return self._source[start : self._pos]

    def _read_comment_value(self) -> tuple[str, ...]:
        self.skip_trivia()
        if self._peek() != "[":
            return (self._read_string_expression(),)
        self._pos += 1
        items: list[str] = []
        while True:
            self.skip_trivia()
            if self._peek() == "]":
                self._pos += 1
                return tuple(items)
            items.append(self._read_string_expression())
            self.skip_trivia()
            if self._peek() == ",":
                self._pos += 1
            elif self._peek() != "]":
                raise self.error("Expected `,` or `]`")
