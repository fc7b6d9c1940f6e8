"""Diagnostic codes and messages."""

from dataclasses import dataclass
from typing import Final, Literal

Severity = Literal["error", "warning"]


@dataclass(frozen=True, slots=True)
class DiagnosticSpec:
    code: str
    message: str
    hint: str | None = None
    severity: Severity = "error"
    category: str | None = None


PARSER_SYNTAX_ERROR: Final[DiagnosticSpec] = DiagnosticSpec(
    code="PARSER_SYNTAX_ERROR",
    message="Source could not be parsed.",
    hint="The passes assume syntactically valid input; fix the source or exclude the file.",
    severity="error",
    category="parser",
)

PARSER_MISSING_TOKEN: Final[DiagnosticSpec] = DiagnosticSpec(
    code="PARSER_MISSING_TOKEN",
    message="Parser inserted a missing token.",
    severity="error",
    category="parser",
)

NLS_INVALID_LITERAL: Final[DiagnosticSpec] = DiagnosticSpec(
    code="NLS_INVALID_LITERAL",
    message="Localize key or message is not a plain string or `{ key, comment }` literal.",
    hint="Pass string literals (or a `{ key: '...', comment: [...] }` object) to localize().",
    severity="error",
    category="nls",
)

NLS_UNRESOLVED_PLACEHOLDER: Final[DiagnosticSpec] = DiagnosticSpec(
    code="NLS_UNRESOLVED_PLACEHOLDER",
    message="Placeholder has no entry in the finalized NLS index; left unchanged.",
    hint="Finalize NLS only after every source transform has completed.",
    severity="warning",
    category="nls",
)

MANGLE_UNRESOLVED_PRIVATE_NAME: Final[DiagnosticSpec] = DiagnosticSpec(
    code="MANGLE_UNRESOLVED_PRIVATE_NAME",
    message="Private name is not declared by any enclosing class; left unchanged.",
    severity="warning",
    category="mangle",
)
