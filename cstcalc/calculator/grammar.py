"""Calculator grammar.

Pure syntax: no actions run during parsing. Precedence follows nesting depth,
so the loosest-binding operator is the first rule in the chain. Each
`lhs, many(operator, rhs)` rule is left-associative: every `rhs` folds into
the result accumulated so far.
"""

from typing import Final

from cstcalc.calculator.tokens import (
    ADDITION_OPERATOR,
    ALL_TOKENS,
    MULTIPLICATION_OPERATOR,
    NUMBER_LITERAL,
)
from cstcalc.parser import Grammar, Rule, consume, many, subrule

ENTRY_RULE: Final[str] = "expression"

CALCULATOR_GRAMMAR: Final[Grammar] = Grammar(
    "calculator",
    tokens=ALL_TOKENS,
    rules=(
        Rule("expression", subrule("addition_expression")),
        Rule(
            "addition_expression",
            subrule("multiplication_expression", label="lhs"),
            many(
                consume(ADDITION_OPERATOR),
                subrule("multiplication_expression", label="rhs"),
            ),
        ),
        Rule(
            "multiplication_expression",
            subrule("atomic_expression", label="lhs"),
            many(
                consume(MULTIPLICATION_OPERATOR),
                subrule("atomic_expression", label="rhs"),
            ),
        ),
        Rule("atomic_expression", consume(NUMBER_LITERAL)),
    ),
    entry_rule=ENTRY_RULE,
)
