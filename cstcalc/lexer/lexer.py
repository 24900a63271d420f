"""Lexer."""

import logging
from collections.abc import Sequence
from dataclasses import dataclass, field

from cstcalc.diagnostics import LEXER_UNEXPECTED_CHARACTER, Diagnostic, LexError
from cstcalc.lexer.options import LexerOptions
from cstcalc.lexer.tokens import Token, TokenType
from cstcalc.text import LineIndex, TextRange, TextSize

logger = logging.getLogger(__name__)


@dataclass(frozen=True, slots=True)
class LexResult:
    """Tokens emitted for the parser plus tokens routed to custom groups."""

    tokens: tuple[Token, ...]
    groups: dict[str, tuple[Token, ...]] = field(default_factory=dict)


class Lexer:
    """Pattern-driven lexer over a fixed, ordered token vocabulary.

    Leaf types are tried in declaration order at every position and the first
    match that consumes at least one character wins. Abstract types may appear
    in the vocabulary; they are never matched. The lexer holds no per-call
    state, so one instance can be shared.
    """

    def __init__(self, token_types: Sequence[TokenType], options: LexerOptions | None = None) -> None:
        if not token_types:
            raise ValueError("Lexer needs at least one token type")

        seen: set[str] = set()
        for token_type in token_types:
            if token_type.name in seen:
                raise ValueError(f"Duplicate token type name `{token_type.name}`")
            seen.add(token_type.name)

        self._vocabulary = tuple(token_types)
        self._leaves = tuple(t for t in token_types if not t.is_abstract)
        if not self._leaves:
            raise ValueError("Lexer vocabulary has no token type with a pattern")
        self._options = options or LexerOptions()
        logger.debug(
            "lexer ready: %d token types, %d matchable",
            len(self._vocabulary),
            len(self._leaves),
        )

    @property
    def vocabulary(self) -> tuple[TokenType, ...]:
        return self._vocabulary

    @property
    def options(self) -> LexerOptions:
        return self._options

    def tokenize(self, text: str) -> LexResult:
        tokens: list[Token] = []
        groups: dict[str, list[Token]] = {}
        line_index = LineIndex(text) if self._options.tracks_lines else None
        position = 0

        while position < len(text):
            token_type, end = self._match_at(text, position)
            if token_type is None:
                raise self._unexpected_character(text, position, line_index)

            if not token_type.is_skipped:
                token = self._make_token(token_type, text, position, end, line_index)
                if token_type.group is None:
                    tokens.append(token)
                else:
                    groups.setdefault(token_type.group, []).append(token)
            position = end

        return LexResult(
            tokens=tuple(tokens),
            groups={name: tuple(members) for name, members in groups.items()},
        )

    def _match_at(self, text: str, position: int) -> tuple[TokenType | None, int]:
        for token_type in self._leaves:
            match = token_type.pattern.match(text, position)
            # A zero-width match (`\b`, lookaheads) would never advance the cursor.
            if match is not None and match.end() > position:
                return token_type, match.end()
        return None, position

    @staticmethod
    def _make_token(
        token_type: TokenType,
        text: str,
        start: int,
        end: int,
        line_index: LineIndex | None,
    ) -> Token:
        token_range = TextRange(start, end)
        if line_index is None:
            return Token(token_type, text[start:end], token_range)
        line, column = line_index.line_col(token_range.start)
        return Token(token_type, text[start:end], token_range, line=line, column=column)

    @staticmethod
    def _unexpected_character(text: str, position: int, line_index: LineIndex | None) -> LexError:
        offset = TextSize.from_int(position)
        line, column = line_index.line_col(offset) if line_index is not None else (None, None)
        where = f"offset {position}" if line is None else f"line {line}, column {column}"
        diagnostic = Diagnostic.from_spec(
            LEXER_UNEXPECTED_CHARACTER,
            message=f"Unexpected character {text[position]!r} at {where}",
            range=TextRange.at(offset, TextSize.from_int(1)),
        )
        return LexError(diagnostic, offset=offset, line=line, column=column)


def dump_tokens(tokens: Sequence[Token]) -> None:
    """Print token list with type, range, position and image for debugging."""
    for i, tok in enumerate(tokens):
        where = "" if tok.line is None else f" at={tok.line}:{tok.column}"
        print(f"{i:03d} {tok.type.name:<24} range={tok.range.as_tuple()}{where} image={tok.image!r}")
