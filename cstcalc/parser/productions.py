"""Grammar productions.

A grammar is plain data: rules hold sequences of productions, and productions
nest. Every production object is one position in the grammar, so productions
compare and hash by identity.
"""

from __future__ import annotations

from collections.abc import Sequence
from dataclasses import dataclass

from cstcalc.lexer import TokenType

type Body = tuple[Production, ...]
type Production = Terminal | NonTerminal | Option | Many | AtLeastOne | ManySep | Alternation


@dataclass(frozen=True, slots=True, eq=False)
class Terminal:
    token_type: TokenType
    label: str | None = None

    @property
    def effective_label(self) -> str:
        return self.label if self.label is not None else self.token_type.name


@dataclass(frozen=True, slots=True, eq=False)
class NonTerminal:
    rule_name: str
    label: str | None = None

    @property
    def effective_label(self) -> str:
        return self.label if self.label is not None else self.rule_name


@dataclass(frozen=True, slots=True, eq=False)
class Option:
    body: Body


@dataclass(frozen=True, slots=True, eq=False)
class Many:
    body: Body


@dataclass(frozen=True, slots=True, eq=False)
class AtLeastOne:
    body: Body


@dataclass(frozen=True, slots=True, eq=False)
class ManySep:
    separator: Terminal
    body: Body


@dataclass(frozen=True, slots=True, eq=False)
class Alternation:
    alternatives: tuple[Body, ...]


class Rule:
    """A named rule; its body is matched as a sequence."""

    __slots__ = ("name", "body")

    def __init__(self, name: str, *body: Production) -> None:
        if not name:
            raise ValueError("Rule name cannot be empty")
        self.name = name
        self.body: Body = body

    def __repr__(self) -> str:
        return f"Rule({self.name!r}, {len(self.body)} productions)"


def consume(token_type: TokenType, label: str | None = None) -> Terminal:
    """Match the next token against `token_type` (directly or through a category)."""
    return Terminal(token_type, label)


def subrule(rule_name: str, label: str | None = None) -> NonTerminal:
    return NonTerminal(rule_name, label)


def option(*body: Production) -> Option:
    return Option(_body(body))


def many(*body: Production) -> Many:
    return Many(_body(body))


def at_least_one(*body: Production) -> AtLeastOne:
    return AtLeastOne(_body(body))


def many_sep(separator: TokenType | Terminal, *body: Production) -> ManySep:
    sep = separator if isinstance(separator, Terminal) else Terminal(separator)
    return ManySep(sep, _body(body))


def alt(*alternatives: Production | Sequence[Production]) -> Alternation:
    """Ordered choice. A tuple or list alternative is matched as a sequence."""
    if len(alternatives) < 2:
        raise ValueError("alt() needs at least two alternatives")
    resolved: list[Body] = []
    for alternative in alternatives:
        if isinstance(alternative, (tuple, list)):
            resolved.append(tuple(alternative))
        else:
            resolved.append((alternative,))
    return Alternation(tuple(resolved))


def _body(body: tuple[Production, ...]) -> Body:
    if not body:
        raise ValueError("Production body cannot be empty")
    return body


def children_of(production: Production) -> tuple[Body, ...]:
    """Nested sequences of a production, empty for terminals and rule references."""
    match production:
        case Option(body) | Many(body) | AtLeastOne(body):
            return (body,)
        case ManySep(separator, body):
            return ((separator,), body)
        case Alternation(alternatives):
            return alternatives
        case _:
            return ()
