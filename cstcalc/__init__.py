"""Token model, lexer, grammar-driven CST parser and CST visitors."""

from cstcalc.cst import CstNode, dump_cst
from cstcalc.diagnostics import (
    CstCalcError,
    Diagnostic,
    DispatchError,
    GrammarError,
    LexError,
    ParseError,
)
from cstcalc.lexer import NA, SKIPPED, Lexer, Token, TokenType, create_token, token_matcher
from cstcalc.parser import CstParser, Grammar, Rule
from cstcalc.visitor import CstVisitor, CstVisitorWithDefaults

__all__ = [
    "NA",
    "SKIPPED",
    "CstCalcError",
    "CstNode",
    "CstParser",
    "CstVisitor",
    "CstVisitorWithDefaults",
    "Diagnostic",
    "DispatchError",
    "Grammar",
    "GrammarError",
    "LexError",
    "Lexer",
    "ParseError",
    "Rule",
    "Token",
    "TokenType",
    "create_token",
    "dump_cst",
    "token_matcher",
]
