"""Rewrite native `#private` class members into ordinary properties with short unique names.

Native private names are slower than plain properties and cannot be minified.
Simply dropping the `#` is unsafe:

- `class B extends A` where both declare `#x` would collide on `x`.
- `class E extends Error { static #name }` would shadow the inherited `name`.

Each `(class, private name)` pair therefore gets its own name from one counter
per conversion (`$a`, `$b`, ...). `$`-prefixed names never clash with `#`
names (a different namespace in the source) and the counter keeps unrelated
classes apart.

Private names are lexically scoped to the declaring class body, so every
declaration and use is inside that body and one syntax walk finds them all.
String and template contents are never touched because only
`private_property_identifier` nodes are matched.
"""

from __future__ import annotations

from dataclasses import dataclass, field
import time
from typing import TypeAlias

from tree_sitter import Node

from bundlepass.diagnostics import MANGLE_UNRESOLVED_PRIVATE_NAME, Diagnostic
from bundlepass.mangle.names import ShortNameAllocator
from bundlepass.syntax import (
    CLASS_KINDS,
    CLASS_MEMBER_KINDS,
    NodeKind,
    SourceLanguage,
    SyntaxTree,
    parse_source,
)
from bundlepass.text import TextEdit, TextRange, apply_edits

ClassScope: TypeAlias = dict[str, str]
"""Private name (with `#`) -> replacement name, for one class body."""


@dataclass(frozen=True, slots=True)
class ConvertPrivateFieldsResult:
    code: str
    class_count: int
    field_count: int
    edit_count: int
    elapsed: float
    """Wall time in milliseconds."""

    unresolved: tuple[tuple[str, TextRange], ...] = field(default=(), repr=False)

    def diagnostics(self) -> list[Diagnostic]:
        return [
            Diagnostic.from_spec(MANGLE_UNRESOLVED_PRIVATE_NAME, range, detail=f"`{name}`.")
            for name, range in self.unresolved
        ]


def convert_private_fields(code: str, filename: str = "<memory>") -> ConvertPrivateFieldsResult:
    """Convert every `#name` member in `code` (typically a bundled output file).

    `filename` is informational only. Pure: no state survives the call.
    """
    started = time.perf_counter()
    if "#" not in code:
        return _unchanged(code, started)

    syntax = parse_source(code, SourceLanguage.JAVASCRIPT)
    resolver = _PrivateNameResolver(syntax, ShortNameAllocator())
    resolver.visit(syntax.root)

    if not resolver.edits:
        return _unchanged(code, started, unresolved=tuple(resolver.unresolved))

    return ConvertPrivateFieldsResult(
        code=apply_edits(code, resolver.edits),
        class_count=resolver.class_count,
        field_count=resolver.allocator.count,
        edit_count=len(resolver.edits),
        elapsed=_elapsed_ms(started),
        unresolved=tuple(resolver.unresolved),
    )


class _PrivateNameResolver:
    """Walks classes with a stack of scopes, innermost last."""

    __slots__ = ("_syntax", "allocator", "edits", "class_count", "unresolved", "_scopes")

    def __init__(self, syntax: SyntaxTree, allocator: ShortNameAllocator) -> None:
        self._syntax = syntax
        self.allocator = allocator
        self.edits: list[TextEdit] = []
        self.class_count = 0
        self.unresolved: list[tuple[str, TextRange]] = []
        self._scopes: list[ClassScope] = []

    def visit(self, root: Node) -> None:
        stack = [root]
        while stack:
            node = stack.pop()
            if _is_class(node):
                self._visit_class(node)
                continue
            stack.extend(reversed(node.children))

    def _visit_class(self, node: Node) -> None:
        scope = self._declared_scope(node)
        if scope:
            self.class_count += 1
        self._scopes.append(scope)
        try:
            self._walk_class(node)
        finally:
            self._scopes.pop()

    def _declared_scope(self, node: Node) -> ClassScope:
        # Getter/setter pairs re-declare a name; the first declaration wins.
        scope: ClassScope = {}
        body = node.child_by_field_name("body")
        if body is None:
            return scope
        for member in body.named_children:
            if member.type not in CLASS_MEMBER_KINDS:
                continue
            name_node = _member_name(member)
            if name_node is None or name_node.type != NodeKind.PRIVATE_PROPERTY_IDENTIFIER:
                continue
            name = self._syntax.node_text(name_node)
            if name not in scope:
                scope[name] = self.allocator.allocate()
        return scope

    def _walk_class(self, node: Node) -> None:
        stack = list(reversed(node.children))
        while stack:
            child = stack.pop()
            if _is_class(child):
                self._visit_class(child)
                continue

            if child.type == NodeKind.BINARY_EXPRESSION and _is_brand_check(child):
                left = child.child_by_field_name("left")
                right = child.child_by_field_name("right")
                if left is not None:
                    self._rename(left, quoted=True)
                if right is not None:
                    stack.append(right)
                continue

            if child.type == NodeKind.PRIVATE_PROPERTY_IDENTIFIER:
                self._rename(child, quoted=False)
                continue

            stack.extend(reversed(child.children))

    def _rename(self, node: Node, *, quoted: bool) -> None:
        name = self._syntax.node_text(node)
        range = self._syntax.node_range(node)
        resolved = self._resolve(name)
        if resolved is None:
            self.unresolved.append((name, range))
            return
        # `#x in obj` needs a string operand once the name is no longer private.
        self.edits.append(TextEdit.replace(range, f"'{resolved}'" if quoted else resolved))

    def _resolve(self, name: str) -> str | None:
        for scope in reversed(self._scopes):
            resolved = scope.get(name)
            if resolved is not None:
                return resolved
        return None


def _is_class(node: Node) -> bool:
    # The `class` keyword token shares its type name with class expressions.
    return node.is_named and node.type in CLASS_KINDS


def _member_name(member: Node) -> Node | None:
    name = member.child_by_field_name("property")
    if name is None:
        name = member.child_by_field_name("name")
    return name


def _is_brand_check(node: Node) -> bool:
    operator = node.child_by_field_name("operator")
    if operator is None or operator.type != "in":
        return False
    left = node.child_by_field_name("left")
    return left is not None and left.type == NodeKind.PRIVATE_PROPERTY_IDENTIFIER


def _unchanged(
    code: str,
    started: float,
    *,
    unresolved: tuple[tuple[str, TextRange], ...] = (),
) -> ConvertPrivateFieldsResult:
    return ConvertPrivateFieldsResult(
        code=code,
        class_count=0,
        field_count=0,
        edit_count=0,
        elapsed=_elapsed_ms(started),
        unresolved=unresolved,
    )


def _elapsed_ms(started: float) -> float:
    return (time.perf_counter() - started) * 1000.0
