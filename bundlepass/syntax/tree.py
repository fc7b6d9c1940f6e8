"""Tree-sitter syntax trees with character-offset spans."""

from __future__ import annotations

from array import array
from collections.abc import Iterator
from dataclasses import dataclass, field
from itertools import repeat
import threading

from tree_sitter import Language, Node, Parser, Tree
import tree_sitter_javascript
import tree_sitter_typescript

from bundlepass.diagnostics import (
    PARSER_MISSING_TOKEN,
    PARSER_SYNTAX_ERROR,
    Diagnostic,
    sort_diagnostics,
)
from bundlepass.syntax.kind import NodeKind, SourceLanguage
from bundlepass.text import LineIndex, TextRange

_LANGUAGES: dict[SourceLanguage, Language] = {
    SourceLanguage.JAVASCRIPT: Language(tree_sitter_javascript.language()),
    SourceLanguage.TYPESCRIPT: Language(tree_sitter_typescript.language_typescript()),
}

# tree_sitter.Parser is not safe to share between threads.
_parsers = threading.local()


def get_parser(language: SourceLanguage) -> Parser:
    cache: dict[SourceLanguage, Parser] | None = getattr(_parsers, "cache", None)
    if cache is None:
        cache = {}
        _parsers.cache = cache
    parser = cache.get(language)
    if parser is None:
        parser = Parser(_LANGUAGES[language])
        cache[language] = parser
    return parser


class SourceText:
    """Decoded text plus the UTF-8 bytes tree-sitter reads.

    Tree-sitter reports byte offsets; everything downstream works on `str`
    indices, so offsets are translated here. ASCII input maps 1:1.
    """

    __slots__ = ("text", "data", "_char_offsets")

    def __init__(self, text: str) -> None:
        self.text = text
        self.data = text.encode("utf-8", "surrogatepass")
        self._char_offsets: array[int] | None = None
        if len(self.data) != len(text):
            self._char_offsets = _build_char_offsets(text)

    def char_offset(self, byte_offset: int) -> int:
        if self._char_offsets is None:
            return byte_offset
        return self._char_offsets[byte_offset]


def _build_char_offsets(text: str) -> array[int]:
    offsets = array("q")
    for index, char in enumerate(text):
        width = 1 if char < "\x80" else len(char.encode("utf-8", "surrogatepass"))
        offsets.extend(repeat(index, width))
    offsets.append(len(text))
    return offsets


@dataclass(slots=True)
class SyntaxTree:
    """One parsed file. Read-only; positions are character offsets into `source.text`."""

    source: SourceText
    tree: Tree
    language: SourceLanguage
    _line_index: LineIndex | None = field(default=None, init=False, repr=False)

    @property
    def text(self) -> str:
        return self.source.text

    @property
    def root(self) -> Node:
        return self.tree.root_node

    @property
    def has_errors(self) -> bool:
        return self.tree.root_node.has_error

    def line_index(self) -> LineIndex:
        if self._line_index is None:
            self._line_index = LineIndex(self.source.text)
        return self._line_index

    def node_start(self, node: Node) -> int:
        return self.source.char_offset(node.start_byte)

    def node_end(self, node: Node) -> int:
        return self.source.char_offset(node.end_byte)

    def node_range(self, node: Node) -> TextRange:
        return TextRange(self.node_start(node), self.node_end(node))

    def node_text(self, node: Node) -> str:
        return self.source.text[self.node_start(node) : self.node_end(node)]

    def syntax_diagnostics(self) -> list[Diagnostic]:
        if not self.has_errors:
            return []
        diagnostics: list[Diagnostic] = []
        stack = [self.root]
        while stack:
            node = stack.pop()
            if node.is_missing:
                diagnostics.append(
                    Diagnostic.from_spec(
                        PARSER_MISSING_TOKEN,
                        self.node_range(node),
                        detail=f"Expected `{node.type}`.",
                    )
                )
                continue
            if node.type == NodeKind.ERROR:
                diagnostics.append(Diagnostic.from_spec(PARSER_SYNTAX_ERROR, self.node_range(node)))
                continue
            stack.extend(child for child in node.children if child.has_error or child.is_missing)
        return sort_diagnostics(diagnostics)


def parse_source(text: str, language: SourceLanguage = SourceLanguage.JAVASCRIPT) -> SyntaxTree:
    """Parse `text` once. Never raises on malformed input; see `SyntaxTree.has_errors`."""
    source = SourceText(text)
    tree = get_parser(language).parse(source.data)
    return SyntaxTree(source=source, tree=tree, language=language)


def iter_nodes(node: Node) -> Iterator[Node]:
    """Pre-order walk over `node` and its descendants without Python recursion."""
    stack = [node]
    while stack:
        current = stack.pop()
        yield current
        children = current.children
        if children:
            stack.extend(reversed(children))


def named_arguments(arguments: Node) -> list[Node]:
    """Argument expressions of an `arguments` node (comments are not arguments)."""
    return [child for child in arguments.named_children if child.type != NodeKind.COMMENT]
