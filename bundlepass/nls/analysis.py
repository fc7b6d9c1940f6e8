"""Locate localize()/localize2() calls reachable through imports of the `nls` module."""

from __future__ import annotations

from collections.abc import Iterator
from dataclasses import dataclass

from tree_sitter import Node

from bundlepass.nls.model import LocalizeCall, LocalizeFunction
from bundlepass.syntax import (
    FUNCTION_KINDS,
    NodeKind,
    SourceLanguage,
    SyntaxTree,
    named_arguments,
    parse_source,
)

_NLS_MODULE_SUFFIXES = ("/nls'", '/nls"', "/nls.js'", '/nls.js"')
_WRITE_PARENTS = frozenset(
    {
        NodeKind.ASSIGNMENT_EXPRESSION.value,
        NodeKind.AUGMENTED_ASSIGNMENT_EXPRESSION.value,
    }
)


@dataclass(frozen=True, slots=True)
class NlsImports:
    """Local names bound by imports of the `nls` module in one file."""

    namespace_names: frozenset[str] = frozenset()
    """`import * as nls from '.../nls'` and `import nls = require('.../nls')`."""

    named_bindings: tuple[tuple[str, str], ...] = ()
    """`(imported_name, local_name)` for `import { localize as l } from '.../nls'`."""

    @property
    def is_empty(self) -> bool:
        return not self.namespace_names and not self.named_bindings

    def local_names_for(self, function_name: str) -> frozenset[str]:
        return frozenset(local for imported, local in self.named_bindings if imported == function_name)


def analyze_localize_calls(
    contents: str,
    function_name: LocalizeFunction | str,
    *,
    tree: SyntaxTree | None = None,
) -> list[LocalizeCall]:
    """Find calls to `function_name` from the `nls` module, ordered by key position.

    Pass `tree` to reuse a parse of `contents` across several lookups.
    """
    syntax = tree if tree is not None else parse_source(contents, SourceLanguage.TYPESCRIPT)
    imports = collect_nls_imports(syntax)
    if imports.is_empty:
        return []

    target = str(function_name)
    namespace_names = imports.namespace_names
    named_names = imports.local_names_for(target)
    if not namespace_names and not named_names:
        return []

    calls_by_start: dict[int, Node] = {}
    for reference in _iter_references(syntax, namespace_names | named_names):
        call = _innermost_call(reference)
        if call is None or call.start_byte in calls_by_start:
            continue
        callee = call.child_by_field_name("function")
        if callee is None:
            continue
        name = syntax.node_text(reference)
        if name in namespace_names and _is_member_call(syntax, callee, reference, target):
            calls_by_start[call.start_byte] = call
        elif name in named_names and _same_node(callee, reference):
            calls_by_start[call.start_byte] = call

    located: list[tuple[int, LocalizeCall]] = []
    line_index = syntax.line_index()
    for call in calls_by_start.values():
        arguments = call.child_by_field_name("arguments")
        if arguments is None:
            continue
        args = named_arguments(arguments)
        if len(args) < 2:
            continue
        key_node, value_node = args[0], args[1]
        key_range = syntax.node_range(key_node)
        value_range = syntax.node_range(value_node)
        located.append(
            (
                key_range.start.value,
                LocalizeCall(
                    key_span=line_index.span_of(key_range),
                    key=syntax.node_text(key_node),
                    value_span=line_index.span_of(value_range),
                    value=syntax.node_text(value_node),
                ),
            )
        )

    located.sort(key=lambda item: item[0])
    return [call for _, call in located]


def collect_nls_imports(syntax: SyntaxTree) -> NlsImports:
    namespace_names: set[str] = set()
    named_bindings: list[tuple[str, str]] = []

    # Imports may only appear at the top level (or in ambient module blocks,
    # which never reference the nls module).
    for statement in syntax.root.named_children:
        if statement.type != NodeKind.IMPORT_STATEMENT:
            continue

        require_clause = _first_child_of_kind(statement, NodeKind.IMPORT_REQUIRE_CLAUSE)
        if require_clause is not None:
            source = require_clause.child_by_field_name("source")
            name = _first_child_of_kind(require_clause, NodeKind.IDENTIFIER)
            if source is not None and name is not None and _is_nls_module(syntax, source):
                namespace_names.add(syntax.node_text(name))
            continue

        source = statement.child_by_field_name("source")
        clause = _first_child_of_kind(statement, NodeKind.IMPORT_CLAUSE)
        if source is None or clause is None or not _is_nls_module(syntax, source):
            continue

        for binding in clause.named_children:
            if binding.type == NodeKind.NAMESPACE_IMPORT:
                name = _first_child_of_kind(binding, NodeKind.IDENTIFIER)
                if name is not None:
                    namespace_names.add(syntax.node_text(name))
            elif binding.type == NodeKind.NAMED_IMPORTS:
                for specifier in binding.named_children:
                    if specifier.type != NodeKind.IMPORT_SPECIFIER:
                        continue
                    imported = specifier.child_by_field_name("name")
                    alias = specifier.child_by_field_name("alias")
                    if imported is None:
                        continue
                    imported_name = syntax.node_text(imported).strip("'\"")
                    local_name = syntax.node_text(alias) if alias is not None else imported_name
                    named_bindings.append((imported_name, local_name))

    return NlsImports(namespace_names=frozenset(namespace_names), named_bindings=tuple(named_bindings))


def _is_nls_module(syntax: SyntaxTree, source: Node) -> bool:
    if source.type != NodeKind.STRING:
        return False
    return syntax.node_text(source).endswith(_NLS_MODULE_SUFFIXES)


def _iter_references(syntax: SyntaxTree, names: frozenset[str]) -> Iterator[Node]:
    """Read references to `names`, skipping import bindings and assignment targets.

    Matching is syntactic. A name re-bound by an enclosing function parameter
    or by a `const`/`let`/`var` of an enclosing block refers to that local and
    is skipped; destructured and hoisted bindings are not tracked.
    """
    stack = [syntax.root]
    while stack:
        node = stack.pop()
        if node.type == NodeKind.IMPORT_STATEMENT:
            continue
        if node.type == NodeKind.IDENTIFIER:
            name = syntax.node_text(node)
            if name in names and not _is_write_target(node) and not _is_shadowed(syntax, node, name):
                yield node
            continue
        children = node.children
        if children:
            stack.extend(reversed(children))


def _is_shadowed(syntax: SyntaxTree, node: Node, name: str) -> bool:
    current = node.parent
    while current is not None and current.type != NodeKind.PROGRAM:
        if current.type in FUNCTION_KINDS:
            if name in _parameter_names(syntax, current):
                return True
        elif current.type == NodeKind.STATEMENT_BLOCK:
            if name in _declared_names(syntax, current):
                return True
        current = current.parent
    return False


def _parameter_names(syntax: SyntaxTree, function: Node) -> set[str]:
    # `x => ...` has a bare `parameter`, everything else a `formal_parameters` list.
    single = function.child_by_field_name("parameter")
    if single is not None:
        return {syntax.node_text(single)} if single.type == NodeKind.IDENTIFIER else set()
    parameters = function.child_by_field_name("parameters")
    if parameters is None:
        return set()
    names: set[str] = set()
    for parameter in parameters.named_children:
        if parameter.type in (NodeKind.REQUIRED_PARAMETER, NodeKind.OPTIONAL_PARAMETER):
            parameter = parameter.child_by_field_name("pattern")
        if parameter is not None and parameter.type == NodeKind.IDENTIFIER:
            names.add(syntax.node_text(parameter))
    return names


def _declared_names(syntax: SyntaxTree, block: Node) -> set[str]:
    names: set[str] = set()
    for statement in block.named_children:
        if statement.type not in (NodeKind.LEXICAL_DECLARATION, NodeKind.VARIABLE_DECLARATION):
            continue
        for declarator in statement.named_children:
            if declarator.type != NodeKind.VARIABLE_DECLARATOR:
                continue
            binding = declarator.child_by_field_name("name")
            if binding is not None and binding.type == NodeKind.IDENTIFIER:
                names.add(syntax.node_text(binding))
    return names


def _is_write_target(node: Node) -> bool:
    parent = node.parent
    if parent is None or parent.type not in _WRITE_PARENTS:
        return False
    left = parent.child_by_field_name("left")
    return left is not None and _same_node(left, node)


def _innermost_call(node: Node) -> Node | None:
    current = node.parent
    while current is not None:
        if current.type == NodeKind.CALL_EXPRESSION:
            return current
        current = current.parent
    return None


def _is_member_call(syntax: SyntaxTree, callee: Node, reference: Node, target: str) -> bool:
    if callee.type != NodeKind.MEMBER_EXPRESSION:
        return False
    obj = callee.child_by_field_name("object")
    prop = callee.child_by_field_name("property")
    if obj is None or prop is None:
        return False
    return _same_node(obj, reference) and syntax.node_text(prop) == target


def _first_child_of_kind(node: Node, kind: NodeKind) -> Node | None:
    for child in node.named_children:
        if child.type == kind:
            return child
    return None


def _same_node(a: Node, b: Node) -> bool:
    return a.start_byte == b.start_byte and a.end_byte == b.end_byte and a.type == b.type
