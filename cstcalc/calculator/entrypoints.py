"""Text-to-value entrypoints for the calculator language."""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Final

from cstcalc.calculator.grammar import CALCULATOR_GRAMMAR, ENTRY_RULE
from cstcalc.calculator.interpreter import CalculatorInterpreter
from cstcalc.calculator.tokens import ALL_TOKENS
from cstcalc.cst import CstNode, dump_cst
from cstcalc.lexer import Lexer, Token
from cstcalc.parser import CstParser

# Token types and grammar are immutable, so one lexer and parser serve every call.
CALCULATOR_LEXER: Final[Lexer] = Lexer(ALL_TOKENS)
CALCULATOR_PARSER: Final[CstParser] = CstParser(CALCULATOR_GRAMMAR)


def lex(text: str) -> tuple[Token, ...]:
    return CALCULATOR_LEXER.tokenize(text).tokens


def parse(text: str) -> CstNode:
    return CALCULATOR_PARSER.parse(lex(text), ENTRY_RULE)


def evaluate(text: str) -> int:
    """Lex, parse and interpret `text` in one go."""
    return CalculatorInterpreter().visit(parse(text))


@dataclass(slots=True)
class CalculatorParseResult:
    """Parse-once carrier: tokens and CST up front, value computed on first use."""

    source_text: str
    tokens: tuple[Token, ...]
    cst: CstNode
    _value: int | None = field(default=None, init=False, repr=False)

    def value(self) -> int:
        if self._value is None:
            self._value = CalculatorInterpreter().visit(self.cst)
        return self._value

    def dump(self) -> str:
        return dump_cst(self.cst)


def parse_result(text: str) -> CalculatorParseResult:
    tokens = lex(text)
    return CalculatorParseResult(
        source_text=text,
        tokens=tokens,
        cst=CALCULATOR_PARSER.parse(tokens, ENTRY_RULE),
    )
