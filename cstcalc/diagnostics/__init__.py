"""Diagnostics."""

from cstcalc.diagnostics.codes import (
    GRAMMAR_AMBIGUOUS_ALTERNATIVES,
    GRAMMAR_AMBIGUOUS_LABEL,
    GRAMMAR_DUPLICATE_RULE,
    GRAMMAR_EMPTY_REPETITION,
    GRAMMAR_LEFT_RECURSION,
    GRAMMAR_UNDEFINED_ENTRY_RULE,
    GRAMMAR_UNDEFINED_RULE,
    GRAMMAR_UNDEFINED_TOKEN,
    LEXER_UNEXPECTED_CHARACTER,
    PARSER_EARLY_EXIT,
    PARSER_MISMATCHED_TOKEN,
    PARSER_NO_VIABLE_ALTERNATIVE,
    PARSER_NOT_ALL_INPUT_PARSED,
    VISITOR_MISSING_METHOD,
    VISITOR_REDUNDANT_METHOD,
    VISITOR_UNDISPATCHABLE_RULE,
    DiagnosticSpec,
    Severity,
)
from cstcalc.diagnostics.diagnostic import Diagnostic
from cstcalc.diagnostics.errors import (
    CstCalcError,
    DispatchError,
    GrammarError,
    LexError,
    ParseError,
)

__all__ = [
    "GRAMMAR_AMBIGUOUS_ALTERNATIVES",
    "GRAMMAR_AMBIGUOUS_LABEL",
    "GRAMMAR_DUPLICATE_RULE",
    "GRAMMAR_EMPTY_REPETITION",
    "GRAMMAR_LEFT_RECURSION",
    "GRAMMAR_UNDEFINED_ENTRY_RULE",
    "GRAMMAR_UNDEFINED_RULE",
    "GRAMMAR_UNDEFINED_TOKEN",
    "LEXER_UNEXPECTED_CHARACTER",
    "PARSER_EARLY_EXIT",
    "PARSER_MISMATCHED_TOKEN",
    "PARSER_NOT_ALL_INPUT_PARSED",
    "PARSER_NO_VIABLE_ALTERNATIVE",
    "VISITOR_MISSING_METHOD",
    "VISITOR_REDUNDANT_METHOD",
    "VISITOR_UNDISPATCHABLE_RULE",
    "CstCalcError",
    "Diagnostic",
    "DiagnosticSpec",
    "DispatchError",
    "GrammarError",
    "LexError",
    "ParseError",
    "Severity",
]
