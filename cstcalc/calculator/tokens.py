"""Calculator token vocabulary.

Only leaf types appear in text; ADDITION_OPERATOR, MULTIPLICATION_OPERATOR
and NUMBER_LITERAL exist so the grammar can match a whole family at once.
"""

from typing import Final

from cstcalc.lexer import NA, SKIPPED, TokenType, create_token

ADDITION_OPERATOR: Final[TokenType] = create_token("ADDITION_OPERATOR", NA)
PLUS: Final[TokenType] = create_token("PLUS", r"plus", categories=ADDITION_OPERATOR)
MINUS: Final[TokenType] = create_token("MINUS", r"minus", categories=ADDITION_OPERATOR)

MULTIPLICATION_OPERATOR: Final[TokenType] = create_token("MULTIPLICATION_OPERATOR", NA)
TIMES: Final[TokenType] = create_token("TIMES", r"times", categories=MULTIPLICATION_OPERATOR)

NUMBER_LITERAL: Final[TokenType] = create_token("NUMBER_LITERAL", NA)
ONE: Final[TokenType] = create_token("ONE", r"one", categories=NUMBER_LITERAL)
TWO: Final[TokenType] = create_token("TWO", r"two", categories=NUMBER_LITERAL)
THREE: Final[TokenType] = create_token("THREE", r"three", categories=NUMBER_LITERAL)
FOUR: Final[TokenType] = create_token("FOUR", r"four", categories=NUMBER_LITERAL)

WHITESPACE: Final[TokenType] = create_token("WHITESPACE", r"\s+", group=SKIPPED)

# Priority order. Whitespace is the most common token, so it goes first.
ALL_TOKENS: Final[tuple[TokenType, ...]] = (
    WHITESPACE,
    PLUS,
    MINUS,
    TIMES,
    ONE,
    TWO,
    THREE,
    FOUR,
    NUMBER_LITERAL,
    ADDITION_OPERATOR,
    MULTIPLICATION_OPERATOR,
)

VALUES: Final[dict[str, int]] = {"one": 1, "two": 2, "three": 3, "four": 4}
