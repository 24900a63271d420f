"""Token model: token types, categories and lexed tokens."""

import re
from collections.abc import Iterable
from dataclasses import dataclass, field
from typing import Final

from cstcalc.text import TextRange

NA: Final[None] = None
"""Pattern of an abstract (category-only) token type. Never matched against text."""

SKIPPED: Final[str] = "skipped"
"""Group of token types the lexer discards instead of emitting."""


@dataclass(frozen=True, slots=True, eq=False)
class TokenType:
    """Immutable token type descriptor.

    Identity-hashed: two types with the same name are still distinct. Leaf types
    carry a compiled pattern; abstract types (pattern `NA`) only group leaves via
    `categories`.
    """

    name: str
    pattern: re.Pattern[str] | None
    categories: tuple["TokenType", ...] = ()
    group: str | None = None
    ancestors: frozenset["TokenType"] = field(init=False)

    def __post_init__(self) -> None:
        ancestors: set[TokenType] = set()
        for category in self.categories:
            ancestors.add(category)
            ancestors.update(category.ancestors)
        object.__setattr__(self, "ancestors", frozenset(ancestors))

    @property
    def is_abstract(self) -> bool:
        return self.pattern is None

    @property
    def is_skipped(self) -> bool:
        return self.group == SKIPPED

    def __repr__(self) -> str:
        return f"TokenType({self.name})"


def create_token(
    name: str,
    pattern: str | re.Pattern[str] | None = NA,
    *,
    categories: TokenType | Iterable[TokenType] = (),
    group: str | None = None,
) -> TokenType:
    """Declare a token type.

    Raises `ValueError` for definitions the lexer could never use safely. A
    pattern that only matches empty text at some positions is accepted; the
    lexer ignores such zero-width matches.
    """
    if not name:
        raise ValueError("Token type name cannot be empty")

    compiled = re.compile(pattern) if isinstance(pattern, str) else pattern
    if compiled is not None and compiled.match("") is not None:
        raise ValueError(f"Token type `{name}` has a pattern that matches the empty string")
    if compiled is None and group is not None:
        raise ValueError(f"Abstract token type `{name}` cannot belong to group `{group}`")

    resolved = (categories,) if isinstance(categories, TokenType) else tuple(categories)
    for category in resolved:
        if not category.is_abstract:
            raise ValueError(f"Category `{category.name}` of `{name}` must be abstract (pattern NA)")

    return TokenType(name=name, pattern=compiled, categories=resolved, group=group)


@dataclass(frozen=True, slots=True)
class Token:
    """A single lexed token. `line`/`column` are 1-based and omitted for offset-only tracking."""

    type: TokenType
    image: str
    range: TextRange
    line: int | None = None
    column: int | None = None

    @property
    def offset(self) -> int:
        return self.range.start.value


def token_matcher(token: Token, token_type: TokenType) -> bool:
    """True iff the token's leaf type is `token_type` or transitively belongs to it."""
    return token.type is token_type or token_type in token.type.ancestors
