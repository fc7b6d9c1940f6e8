"""Tree-sitter node types matched by the rewrite passes."""

from enum import StrEnum


class SourceLanguage(StrEnum):
    """Grammar used to read a file."""

    JAVASCRIPT = "javascript"
    TYPESCRIPT = "typescript"


class NodeKind(StrEnum):
    """Named node types shared by the JavaScript and TypeScript grammars."""

    PROGRAM = "program"
    ERROR = "ERROR"
    COMMENT = "comment"

    # Literals / names
    IDENTIFIER = "identifier"
    PROPERTY_IDENTIFIER = "property_identifier"
    PRIVATE_PROPERTY_IDENTIFIER = "private_property_identifier"
    STRING = "string"
    TEMPLATE_STRING = "template_string"

    # Expressions
    CALL_EXPRESSION = "call_expression"
    MEMBER_EXPRESSION = "member_expression"
    BINARY_EXPRESSION = "binary_expression"
    ASSIGNMENT_EXPRESSION = "assignment_expression"
    AUGMENTED_ASSIGNMENT_EXPRESSION = "augmented_assignment_expression"
    PARENTHESIZED_EXPRESSION = "parenthesized_expression"
    ARGUMENTS = "arguments"

    # Functions and local bindings
    FUNCTION_DECLARATION = "function_declaration"
    FUNCTION_EXPRESSION = "function_expression"
    FUNCTION = "function"
    GENERATOR_FUNCTION_DECLARATION = "generator_function_declaration"
    GENERATOR_FUNCTION = "generator_function"
    ARROW_FUNCTION = "arrow_function"
    FORMAL_PARAMETERS = "formal_parameters"
    REQUIRED_PARAMETER = "required_parameter"
    OPTIONAL_PARAMETER = "optional_parameter"
    STATEMENT_BLOCK = "statement_block"
    LEXICAL_DECLARATION = "lexical_declaration"
    VARIABLE_DECLARATION = "variable_declaration"
    VARIABLE_DECLARATOR = "variable_declarator"

    # Classes
    CLASS_DECLARATION = "class_declaration"
    ABSTRACT_CLASS_DECLARATION = "abstract_class_declaration"
    CLASS = "class"
    CLASS_BODY = "class_body"
    FIELD_DEFINITION = "field_definition"
    PUBLIC_FIELD_DEFINITION = "public_field_definition"
    METHOD_DEFINITION = "method_definition"

    # Imports
    IMPORT_STATEMENT = "import_statement"
    IMPORT_CLAUSE = "import_clause"
    IMPORT_REQUIRE_CLAUSE = "import_require_clause"
    NAMESPACE_IMPORT = "namespace_import"
    NAMED_IMPORTS = "named_imports"
    IMPORT_SPECIFIER = "import_specifier"


CLASS_KINDS: frozenset[str] = frozenset(
    {
        NodeKind.CLASS_DECLARATION.value,
        NodeKind.ABSTRACT_CLASS_DECLARATION.value,
        NodeKind.CLASS.value,
    }
)
"""Class declarations and class expressions (`class` is the expression form)."""

CLASS_MEMBER_KINDS: frozenset[str] = frozenset(
    {
        NodeKind.FIELD_DEFINITION.value,
        NodeKind.PUBLIC_FIELD_DEFINITION.value,
        NodeKind.METHOD_DEFINITION.value,
    }
)

FUNCTION_KINDS: frozenset[str] = frozenset(
    {
        NodeKind.FUNCTION_DECLARATION.value,
        NodeKind.FUNCTION_EXPRESSION.value,
        NodeKind.FUNCTION.value,
        NodeKind.GENERATOR_FUNCTION_DECLARATION.value,
        NodeKind.GENERATOR_FUNCTION.value,
        NodeKind.ARROW_FUNCTION.value,
        NodeKind.METHOD_DEFINITION.value,
    }
)
"""Nodes that open a parameter scope (`function` is the older expression name)."""
