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


LEXER_UNEXPECTED_CHARACTER: Final[DiagnosticSpec] = DiagnosticSpec(
    code="LEXER_UNEXPECTED_CHARACTER",
    message="No token pattern matches the input.",
    hint="Declare a token type for this character or remove it from the input.",
    category="lexer",
)

PARSER_MISMATCHED_TOKEN: Final[DiagnosticSpec] = DiagnosticSpec(
    code="PARSER_MISMATCHED_TOKEN",
    message="Unexpected token.",
    category="parser",
)

PARSER_NO_VIABLE_ALTERNATIVE: Final[DiagnosticSpec] = DiagnosticSpec(
    code="PARSER_NO_VIABLE_ALTERNATIVE",
    message="No alternative matches the input.",
    category="parser",
)

PARSER_EARLY_EXIT: Final[DiagnosticSpec] = DiagnosticSpec(
    code="PARSER_EARLY_EXIT",
    message="Expected at least one iteration.",
    category="parser",
)

PARSER_NOT_ALL_INPUT_PARSED: Final[DiagnosticSpec] = DiagnosticSpec(
    code="PARSER_NOT_ALL_INPUT_PARSED",
    message="Redundant input, expected end of input.",
    category="parser",
)

GRAMMAR_DUPLICATE_RULE: Final[DiagnosticSpec] = DiagnosticSpec(
    code="GRAMMAR_DUPLICATE_RULE",
    message="Rule is defined more than once.",
    category="grammar",
)

GRAMMAR_UNDEFINED_RULE: Final[DiagnosticSpec] = DiagnosticSpec(
    code="GRAMMAR_UNDEFINED_RULE",
    message="Reference to an undefined rule.",
    category="grammar",
)

GRAMMAR_UNDEFINED_TOKEN: Final[DiagnosticSpec] = DiagnosticSpec(
    code="GRAMMAR_UNDEFINED_TOKEN",
    message="Terminal is not part of the grammar's token vocabulary.",
    hint="Add the token type to the vocabulary passed to the grammar.",
    category="grammar",
)

GRAMMAR_LEFT_RECURSION: Final[DiagnosticSpec] = DiagnosticSpec(
    code="GRAMMAR_LEFT_RECURSION",
    message="Left recursion: rule can invoke itself without consuming a token.",
    hint="Rewrite the rule as `lhs, many(operator, rhs)`.",
    category="grammar",
)

GRAMMAR_EMPTY_REPETITION: Final[DiagnosticSpec] = DiagnosticSpec(
    code="GRAMMAR_EMPTY_REPETITION",
    message="Repetition body can match empty input.",
    category="grammar",
)

GRAMMAR_AMBIGUOUS_LABEL: Final[DiagnosticSpec] = DiagnosticSpec(
    code="GRAMMAR_AMBIGUOUS_LABEL",
    message="Two positions in one rule record under the same implicit label.",
    hint="Give each position an explicit label, e.g. `lhs` and `rhs`.",
    category="grammar",
)

GRAMMAR_AMBIGUOUS_ALTERNATIVES: Final[DiagnosticSpec] = DiagnosticSpec(
    code="GRAMMAR_AMBIGUOUS_ALTERNATIVES",
    message="Decision is ambiguous with one token of lookahead.",
    category="grammar",
)

GRAMMAR_UNDEFINED_ENTRY_RULE: Final[DiagnosticSpec] = DiagnosticSpec(
    code="GRAMMAR_UNDEFINED_ENTRY_RULE",
    message="Entry rule is not defined.",
    category="grammar",
)

VISITOR_MISSING_METHOD: Final[DiagnosticSpec] = DiagnosticSpec(
    code="VISITOR_MISSING_METHOD",
    message="Visitor has no method for a grammar rule.",
    category="visitor",
)

VISITOR_REDUNDANT_METHOD: Final[DiagnosticSpec] = DiagnosticSpec(
    code="VISITOR_REDUNDANT_METHOD",
    message="Visitor method does not correspond to any grammar rule.",
    hint="Rename the method or prefix helpers with an underscore.",
    category="visitor",
)

VISITOR_UNDISPATCHABLE_RULE: Final[DiagnosticSpec] = DiagnosticSpec(
    code="VISITOR_UNDISPATCHABLE_RULE",
    message="Grammar rule name cannot be a visitor method name.",
    hint="Rename the rule to a public identifier that is not part of the visitor API.",
    category="visitor",
)
