"""Calculator language: words for numbers and operators, evaluated over its CST."""

from cstcalc.calculator.entrypoints import (
    CALCULATOR_LEXER,
    CALCULATOR_PARSER,
    CalculatorParseResult,
    evaluate,
    lex,
    parse,
    parse_result,
)
from cstcalc.calculator.grammar import CALCULATOR_GRAMMAR, ENTRY_RULE
from cstcalc.calculator.interpreter import CalculatorInterpreter
from cstcalc.calculator.tokens import ALL_TOKENS, VALUES

__all__ = [
    "ALL_TOKENS",
    "CALCULATOR_GRAMMAR",
    "CALCULATOR_LEXER",
    "CALCULATOR_PARSER",
    "ENTRY_RULE",
    "VALUES",
    "CalculatorInterpreter",
    "CalculatorParseResult",
    "evaluate",
    "lex",
    "parse",
    "parse_result",
]
