"""Tree-sitter backed syntax reader shared by the rewrite passes."""

from bundlepass.syntax.kind import (
    CLASS_KINDS,
    CLASS_MEMBER_KINDS,
    FUNCTION_KINDS,
    NodeKind,
    SourceLanguage,
)
from bundlepass.syntax.tree import (
    SourceText,
    SyntaxTree,
    get_parser,
    iter_nodes,
    named_arguments,
    parse_source,
)

__all__ = [
    "CLASS_KINDS",
    "CLASS_MEMBER_KINDS",
    "FUNCTION_KINDS",
    "NodeKind",
    "SourceLanguage",
    "SourceText",
    "SyntaxTree",
    "get_parser",
    "iter_nodes",
    "named_arguments",
    "parse_source",
]
