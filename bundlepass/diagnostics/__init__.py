"""Diagnostics."""

from bundlepass.diagnostics.codes import (
    MANGLE_UNRESOLVED_PRIVATE_NAME,
    NLS_INVALID_LITERAL,
    NLS_UNRESOLVED_PLACEHOLDER,
    PARSER_MISSING_TOKEN,
    PARSER_SYNTAX_ERROR,
    DiagnosticSpec,
)
from bundlepass.diagnostics.diagnostic import Diagnostic, Severity
from bundlepass.diagnostics.report import collect_diagnostics, has_errors, sort_diagnostics

__all__ = [
    "MANGLE_UNRESOLVED_PRIVATE_NAME",
    "NLS_INVALID_LITERAL",
    "NLS_UNRESOLVED_PLACEHOLDER",
    "PARSER_MISSING_TOKEN",
    "PARSER_SYNTAX_ERROR",
    "Diagnostic",
    "DiagnosticSpec",
    "Severity",
    "collect_diagnostics",
    "has_errors",
    "sort_diagnostics",
]
