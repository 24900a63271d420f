"""CST visitors dispatched by rule name."""

from __future__ import annotations

import inspect
import keyword
import logging
from collections.abc import Callable, Sequence
from typing import Any, ClassVar

from cstcalc.cst import CstElement, CstNode
from cstcalc.diagnostics import (
    VISITOR_MISSING_METHOD,
    VISITOR_REDUNDANT_METHOD,
    VISITOR_UNDISPATCHABLE_RULE,
    Diagnostic,
    DispatchError,
)
from cstcalc.parser import Grammar

logger = logging.getLogger(__name__)

type Handler = Callable[[CstNode, Any], Any]


class CstVisitor:
    """Base class for CST interpreters.

    Subclasses define one method per grammar rule, named exactly after the rule
    and taking `(node, param=None)`. The rule-name -> handler table is built and
    checked against the grammar once, at construction: a missing handler or a
    public method that names no rule raises `DispatchError`. Methods whose names
    start with `_` are helpers and are never dispatched to. A rule whose name
    cannot be such a method (not an identifier, a keyword, `_`-prefixed, or
    part of the visitor API) is reported as undispatchable.
    """

    _BASE_METHODS: ClassVar[frozenset[str]] = frozenset({"visit", "validate_visitor", "grammar"})
    _REQUIRE_ALL_RULES: ClassVar[bool] = True

    def __init__(self, grammar: Grammar) -> None:
        self._grammar = grammar
        self._handlers: dict[str, Handler] = {}
        self.validate_visitor()

    @property
    def grammar(self) -> Grammar:
        return self._grammar

    def validate_visitor(self) -> None:
        rule_names = self._grammar.rule_names
        defined = self._public_methods()

        diagnostics: list[Diagnostic] = []
        if self._REQUIRE_ALL_RULES:
            for name in rule_names:
                if not self._is_dispatchable(name):
                    diagnostics.append(
                        Diagnostic.from_spec(
                            VISITOR_UNDISPATCHABLE_RULE,
                            message=(
                                f"{type(self).__name__} cannot handle rule `{name}`: the name is not "
                                "a public identifier or is reserved by the visitor API"
                            ),
                        )
                    )
                elif name not in defined:
                    diagnostics.append(
                        Diagnostic.from_spec(
                            VISITOR_MISSING_METHOD,
                            message=f"{type(self).__name__} is missing a method for rule `{name}`",
                        )
                    )
        for name in sorted(defined - set(rule_names)):
            diagnostics.append(
                Diagnostic.from_spec(
                    VISITOR_REDUNDANT_METHOD,
                    message=f"{type(self).__name__}.{name} does not match any rule in grammar `{self._grammar.name}`",
                )
            )
        if diagnostics:
            raise DispatchError(diagnostics)

        self._handlers = {name: getattr(self, name) for name in rule_names if name in defined}
        logger.debug("%s bound to %d rules of grammar %s", type(self).__name__, len(self._handlers), self._grammar.name)

    def visit(self, node: CstNode | Sequence[CstElement], param: Any = None) -> Any:
        """Visit a node, or the first node of a labeled child tuple."""
        if not isinstance(node, CstNode):
            if not node:
                raise ValueError("Cannot visit an empty child sequence; check for the label first")
            first = node[0]
            if not isinstance(first, CstNode):
                raise ValueError(f"Cannot visit token {first.image!r}; only nodes are visitable")
            node = first

        handler = self._handlers.get(node.name)
        if handler is None:
            return self._visit_default(node, param)
        return handler(node, param)

    def _visit_default(self, node: CstNode, param: Any) -> Any:
        # Only reachable for nodes of a foreign grammar; validation rules out the rest.
        raise DispatchError(
            (
                Diagnostic.from_spec(
                    VISITOR_MISSING_METHOD,
                    message=f"{type(self).__name__} cannot visit node `{node.name}`",
                ),
            )
        )

    def _is_dispatchable(self, rule_name: str) -> bool:
        return (
            rule_name.isidentifier()
            and not keyword.iskeyword(rule_name)
            and not rule_name.startswith("_")
            and rule_name not in self._BASE_METHODS
        )

    def _public_methods(self) -> set[str]:
        names: set[str] = set()
        for name, member in inspect.getmembers(type(self), predicate=callable):
            if name.startswith("_") or name in self._BASE_METHODS or isinstance(member, type):
                continue
            names.add(name)
        return names


class CstVisitorWithDefaults(CstVisitor):
    """Visitor whose unhandled rules visit every child node and return None.

    Redundant methods are still rejected.
    """

    _REQUIRE_ALL_RULES: ClassVar[bool] = False

    def _visit_default(self, node: CstNode, param: Any) -> Any:
        for _, elements in node.entries:
            for element in elements:
                if isinstance(element, CstNode):
                    self.visit(element, param)
        return None
