"""Pipeline failures.

Each error carries the diagnostics that describe it. None of them is recovered
from inside the pipeline; they propagate to the caller.
"""

from __future__ import annotations

from collections.abc import Sequence
from typing import TYPE_CHECKING

from cstcalc.diagnostics.diagnostic import Diagnostic
from cstcalc.text import TextSize

if TYPE_CHECKING:
    from cstcalc.lexer.tokens import Token


class CstCalcError(Exception):
    """Base class for lexer, parser, grammar and visitor failures."""

    def __init__(self, diagnostics: Sequence[Diagnostic]) -> None:
        if not diagnostics:
            raise ValueError(f"{type(self).__name__} needs at least one diagnostic")
        self.diagnostics: tuple[Diagnostic, ...] = tuple(diagnostics)
        super().__init__(self._format())

    @property
    def codes(self) -> tuple[str, ...]:
        return tuple(diagnostic.code for diagnostic in self.diagnostics)

    def _format(self) -> str:
        if len(self.diagnostics) == 1:
            return self.diagnostics[0].message
        lines = [f"{len(self.diagnostics)} problems:"]
        lines.extend(f"- {d.code}: {d.message}" for d in self.diagnostics)
        return "\n".join(lines)


class LexError(CstCalcError):
    """No declared token pattern matches at `offset`."""

    def __init__(
        self,
        diagnostic: Diagnostic,
        *,
        offset: TextSize,
        line: int | None = None,
        column: int | None = None,
    ) -> None:
        self.offset = offset
        self.line = line
        self.column = column
        super().__init__((diagnostic,))


class ParseError(CstCalcError):
    """An expected terminal or rule did not match at the current token."""

    def __init__(
        self,
        diagnostic: Diagnostic,
        *,
        expected: str,
        token: Token | None,
        offset: TextSize,
        rule_stack: tuple[str, ...] = (),
    ) -> None:
        self.expected = expected
        self.token = token
        self.offset = offset
        self.rule_stack = rule_stack
        super().__init__((diagnostic,))

    @property
    def at_end_of_input(self) -> bool:
        return self.token is None


class GrammarError(CstCalcError):
    """Structural defect found while analysing a grammar definition."""


class DispatchError(CstCalcError):
    """Visitor handlers do not line up with the grammar's rules."""
