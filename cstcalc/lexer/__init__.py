"""Lexer."""

from cstcalc.lexer.lexer import Lexer, LexResult, dump_tokens
from cstcalc.lexer.options import LexerOptions, PositionTracking
from cstcalc.lexer.tokens import (
    NA,
    SKIPPED,
    Token,
    TokenType,
    create_token,
    token_matcher,
)

__all__ = [
    "NA",
    "SKIPPED",
    "LexResult",
    "Lexer",
    "LexerOptions",
    "PositionTracking",
    "Token",
    "TokenType",
    "create_token",
    "dump_tokens",
    "token_matcher",
]
