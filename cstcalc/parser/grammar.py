"""Grammar definition and self-analysis.

`Grammar` validates its rules once, in the constructor, and precomputes the
single-token lookahead sets the parser uses for every decision. Decisions are
checked against FOLLOW sets computed across rule boundaries, so a grammar that
constructs successfully is LL(1): no option or repetition can take a token
that its caller needs next. Structural defects surface as a `GrammarError`
listing every problem found.
"""

from __future__ import annotations

import logging
from collections.abc import Callable, Iterable, Sequence

from cstcalc.diagnostics import (
    GRAMMAR_AMBIGUOUS_ALTERNATIVES,
    GRAMMAR_AMBIGUOUS_LABEL,
    GRAMMAR_DUPLICATE_RULE,
    GRAMMAR_EMPTY_REPETITION,
    GRAMMAR_LEFT_RECURSION,
    GRAMMAR_UNDEFINED_ENTRY_RULE,
    GRAMMAR_UNDEFINED_RULE,
    GRAMMAR_UNDEFINED_TOKEN,
    Diagnostic,
    GrammarError,
)
from cstcalc.lexer import TokenType
from cstcalc.parser.productions import (
    Alternation,
    AtLeastOne,
    Body,
    Many,
    ManySep,
    NonTerminal,
    Option,
    Production,
    Rule,
    Terminal,
    children_of,
)

logger = logging.getLogger(__name__)

type LeafSet = frozenset[TokenType]


class Grammar:
    """A closed set of named rules over a fixed token vocabulary."""

    def __init__(
        self,
        name: str,
        tokens: Sequence[TokenType],
        rules: Sequence[Rule],
        entry_rule: str | None = None,
    ) -> None:
        self._name = name
        self._vocabulary = tuple(tokens)
        self._declared_tokens = frozenset(tokens)
        self._leaves = tuple(t for t in tokens if not t.is_abstract)
        self._rules: dict[str, Rule] = {}
        self._entry_rule = entry_rule

        self._nullable_rules: set[str] = set()
        self._first_rules: dict[str, frozenset[TokenType]] = {}
        self._follow_rules: dict[str, frozenset[TokenType]] = {}
        self._leaf_cache: dict[TokenType, LeafSet] = {}
        self._lookahead: dict[Production, LeafSet] = {}
        self._alternatives: dict[Alternation, tuple[LeafSet, ...]] = {}

        diagnostics: list[Diagnostic] = []
        for rule in rules:
            if rule.name in self._rules:
                diagnostics.append(
                    Diagnostic.from_spec(
                        GRAMMAR_DUPLICATE_RULE,
                        message=f"Rule `{rule.name}` is defined more than once in grammar `{name}`",
                    )
                )
                continue
            self._rules[rule.name] = rule

        diagnostics.extend(self._perform_self_analysis())
        if diagnostics:
            raise GrammarError(diagnostics)

        logger.debug(
            "grammar %s analysed: %d rules, %d token types, entry=%s",
            name,
            len(self._rules),
            len(self._vocabulary),
            entry_rule,
        )

    @property
    def name(self) -> str:
        return self._name

    @property
    def vocabulary(self) -> tuple[TokenType, ...]:
        return self._vocabulary

    @property
    def entry_rule(self) -> str | None:
        return self._entry_rule

    @property
    def rule_names(self) -> tuple[str, ...]:
        return tuple(self._rules)

    def rule(self, name: str) -> Rule:
        try:
            return self._rules[name]
        except KeyError:
            raise ValueError(f"Grammar `{self._name}` has no rule `{name}`") from None

    def lookahead(self, production: Option | Many | AtLeastOne | ManySep) -> LeafSet:
        """Leaf token types that commit a decision to enter `production`'s body."""
        return self._lookahead[production]

    def alternative_lookaheads(self, production: Alternation) -> tuple[LeafSet, ...]:
        return self._alternatives[production]

    def leaves_of(self, token_type: TokenType) -> LeafSet:
        """Leaf token types in the vocabulary that match `token_type`."""
        return self._leaves_of(token_type)

    def is_nullable(self, body: Body) -> bool:
        return self._nullable_seq(body)

    def first_of(self, body: Body) -> LeafSet:
        """Leaf token types that can start `body`."""
        return self._expand(self._first_seq(body))

    # -------------------------
    # Self-analysis
    # -------------------------

    def _perform_self_analysis(self) -> list[Diagnostic]:
        diagnostics: list[Diagnostic] = []

        if self._entry_rule is not None and self._entry_rule not in self._rules:
            diagnostics.append(
                Diagnostic.from_spec(
                    GRAMMAR_UNDEFINED_ENTRY_RULE,
                    message=f"Entry rule `{self._entry_rule}` is not defined in grammar `{self._name}`",
                )
            )

        for rule in self._rules.values():
            diagnostics.extend(self._check_references(rule))
            diagnostics.extend(self._check_labels(rule))
        if diagnostics:
            # Nullability and FIRST sets are meaningless over dangling references.
            return diagnostics

        self._compute_nullable()
        self._compute_first()

        diagnostics.extend(self._check_left_recursion())
        for rule in self._rules.values():
            diagnostics.extend(self._check_repetitions(rule))
        if diagnostics:
            return diagnostics

        self._compute_follow()
        for rule in self._rules.values():
            diagnostics.extend(self._build_decisions(rule))

        self._warn_unreachable_rules()
        return diagnostics

    def _check_references(self, rule: Rule) -> list[Diagnostic]:
        diagnostics: list[Diagnostic] = []
        for production in _walk(rule.body):
            if isinstance(production, NonTerminal) and production.rule_name not in self._rules:
                diagnostics.append(
                    Diagnostic.from_spec(
                        GRAMMAR_UNDEFINED_RULE,
                        message=f"Rule `{rule.name}` references undefined rule `{production.rule_name}`",
                    )
                )
            elif isinstance(production, Terminal):
                if production.token_type not in self._declared_tokens:
                    diagnostics.append(
                        Diagnostic.from_spec(
                            GRAMMAR_UNDEFINED_TOKEN,
                            message=(
                                f"Rule `{rule.name}` consumes `{production.token_type.name}`, "
                                f"which is not declared in grammar `{self._name}`"
                            ),
                        )
                    )
                elif not self._leaves_of(production.token_type):
                    logger.warning(
                        "rule %s consumes %s, but no token type in grammar %s can match it",
                        rule.name,
                        production.token_type.name,
                        self._name,
                    )
        return diagnostics

    def _check_labels(self, rule: Rule) -> list[Diagnostic]:
        positions: dict[str, list[Terminal | NonTerminal]] = {}
        for production in _walk(rule.body):
            if isinstance(production, (Terminal, NonTerminal)):
                positions.setdefault(production.effective_label, []).append(production)

        diagnostics: list[Diagnostic] = []
        for label, productions in positions.items():
            if len(productions) > 1 and any(p.label is None for p in productions):
                diagnostics.append(
                    Diagnostic.from_spec(
                        GRAMMAR_AMBIGUOUS_LABEL,
                        message=(
                            f"Rule `{rule.name}` records {len(productions)} positions under "
                            f"implicit label `{label}`"
                        ),
                    )
                )
        return diagnostics

    def _compute_nullable(self) -> None:
        changed = True
        while changed:
            changed = False
            for rule in self._rules.values():
                if rule.name not in self._nullable_rules and self._nullable_seq(rule.body):
                    self._nullable_rules.add(rule.name)
                    changed = True

    def _nullable(self, production: Production) -> bool:
        match production:
            case Terminal():
                return False
            case NonTerminal(rule_name):
                return rule_name in self._nullable_rules
            case Option() | Many() | ManySep():
                return True
            case AtLeastOne(body):
                return self._nullable_seq(body)
            case Alternation(alternatives):
                return any(self._nullable_seq(body) for body in alternatives)
        raise TypeError(f"Unknown production {production!r}")

    def _nullable_seq(self, body: Body) -> bool:
        return all(self._nullable(production) for production in body)

    def _compute_first(self) -> None:
        self._first_rules = {name: frozenset() for name in self._rules}
        changed = True
        while changed:
            changed = False
            for rule in self._rules.values():
                first = self._first_seq(rule.body)
                if first != self._first_rules[rule.name]:
                    self._first_rules[rule.name] = first
                    changed = True

    def _first(self, production: Production) -> frozenset[TokenType]:
        match production:
            case Terminal(token_type):
                return frozenset({token_type})
            case NonTerminal(rule_name):
                return self._first_rules[rule_name]
            case ManySep(_, body):
                return self._first_seq(body)
            case _:
                first: set[TokenType] = set()
                for body in children_of(production):
                    first.update(self._first_seq(body))
                return frozenset(first)

    def _first_seq(self, body: Body) -> frozenset[TokenType]:
        first: set[TokenType] = set()
        for production in body:
            first.update(self._first(production))
            if not self._nullable(production):
                break
        return frozenset(first)

    def _check_left_recursion(self) -> list[Diagnostic]:
        edges = {name: _leading_rule_refs(rule.body, self._nullable) for name, rule in self._rules.items()}
        reported: set[frozenset[str]] = set()
        diagnostics: list[Diagnostic] = []

        def visit(name: str, path: list[str]) -> None:
            for target in edges[name]:
                if target in path:
                    cycle = path[path.index(target) :] + [target]
                    key = frozenset(cycle)
                    if key not in reported:
                        reported.add(key)
                        diagnostics.append(
                            Diagnostic.from_spec(
                                GRAMMAR_LEFT_RECURSION,
                                message=f"Left recursion: {' -> '.join(cycle)}",
                            )
                        )
                    continue
                if target in finished:
                    continue
                visit(target, path + [target])
            finished.add(name)

        finished: set[str] = set()
        for name in self._rules:
            if name not in finished:
                visit(name, [name])
        return diagnostics

    def _check_repetitions(self, rule: Rule) -> list[Diagnostic]:
        diagnostics: list[Diagnostic] = []
        for production in _walk(rule.body):
            if isinstance(production, (Many, AtLeastOne, ManySep)) and self._nullable_seq(production.body):
                diagnostics.append(
                    Diagnostic.from_spec(
                        GRAMMAR_EMPTY_REPETITION,
                        message=f"Rule `{rule.name}` repeats a body that can match empty input",
                    )
                )
        return diagnostics

    def _compute_follow(self) -> None:
        """FOLLOW sets per rule, as declared token types. End of input is implicit."""
        self._follow_rules = {name: frozenset() for name in self._rules}
        changed = True
        while changed:
            changed = False
            for rule in self._rules.values():
                for rule_name, follow in self._rule_references(rule.body, self._follow_rules[rule.name]):
                    merged = self._follow_rules[rule_name] | follow
                    if merged != self._follow_rules[rule_name]:
                        self._follow_rules[rule_name] = merged
                        changed = True

    def _rule_references(
        self,
        body: Body,
        tail: frozenset[TokenType],
    ) -> Iterable[tuple[str, frozenset[TokenType]]]:
        """Every rule reference in `body` with the tokens that may follow it."""
        for index, production in enumerate(body):
            follow = self._follow_seq(body[index + 1 :], tail)
            if isinstance(production, NonTerminal):
                yield production.rule_name, follow
            for inner, inner_tail in self._nested_tails(production, follow):
                yield from self._rule_references(inner, inner_tail)

    def _follow_seq(self, rest: Body, tail: frozenset[TokenType]) -> frozenset[TokenType]:
        first = self._first_seq(rest)
        return first | tail if self._nullable_seq(rest) else first

    def _nested_tails(
        self,
        production: Production,
        follow: frozenset[TokenType],
    ) -> Iterable[tuple[Body, frozenset[TokenType]]]:
        """Nested sequences of `production`, each with what may follow its end."""
        match production:
            case Option(body):
                yield body, follow
            case Many(body) | AtLeastOne(body):
                yield body, self._first_seq(body) | follow
            case ManySep(separator, body):
                yield (separator,), self._first_seq(body)
                yield body, frozenset({separator.token_type}) | follow
            case Alternation(alternatives):
                for body in alternatives:
                    yield body, follow

    def _build_decisions(self, rule: Rule) -> list[Diagnostic]:
        diagnostics: list[Diagnostic] = []

        def visit_seq(body: Body, tail: frozenset[TokenType]) -> None:
            for index, production in enumerate(body):
                follow_types = self._follow_seq(body[index + 1 :], tail)
                follow = self._expand(follow_types)
                match production:
                    case Option(inner) | Many(inner) | AtLeastOne(inner) | ManySep(_, inner):
                        lookahead = self._expand(self._first_seq(inner))
                        self._lookahead[production] = lookahead
                        if lookahead & follow:
                            diagnostics.append(self._ambiguity(rule, "a repetition or option", lookahead & follow))
                        if isinstance(production, ManySep):
                            separator = self._leaves_of(production.separator.token_type)
                            if separator & follow:
                                diagnostics.append(self._ambiguity(rule, "a separator", separator & follow))
                    case Alternation(alternatives):
                        sets = tuple(self._expand(self._first_seq(inner)) for inner in alternatives)
                        self._alternatives[production] = sets
                        seen: set[TokenType] = set()
                        for inner, candidate in zip(alternatives, sets):
                            # A nullable alternative is also chosen by whatever follows the choice.
                            deciding = candidate | follow if self._nullable_seq(inner) else candidate
                            overlap = deciding & seen
                            if overlap:
                                diagnostics.append(self._ambiguity(rule, "alternatives", overlap))
                            seen.update(deciding)
                for inner, inner_tail in self._nested_tails(production, follow_types):
                    visit_seq(inner, inner_tail)

        visit_seq(rule.body, self._follow_rules[rule.name])
        return diagnostics

    def _ambiguity(self, rule: Rule, what: str, overlap: Iterable[TokenType]) -> Diagnostic:
        names = ", ".join(sorted(t.name for t in overlap))
        return Diagnostic.from_spec(
            GRAMMAR_AMBIGUOUS_ALTERNATIVES,
            message=f"Rule `{rule.name}`: {what} cannot be told apart by the next token ({names})",
        )

    def _expand(self, token_types: Iterable[TokenType]) -> LeafSet:
        leaves: set[TokenType] = set()
        for token_type in token_types:
            leaves.update(self._leaves_of(token_type))
        return frozenset(leaves)

    def _leaves_of(self, token_type: TokenType) -> LeafSet:
        cached = self._leaf_cache.get(token_type)
        if cached is None:
            cached = frozenset(
                leaf for leaf in self._leaves if leaf is token_type or token_type in leaf.ancestors
            )
            self._leaf_cache[token_type] = cached
        return cached

    def _warn_unreachable_rules(self) -> None:
        if self._entry_rule is None:
            return
        reachable: set[str] = set()
        pending = [self._entry_rule]
        while pending:
            name = pending.pop()
            if name in reachable:
                continue
            reachable.add(name)
            pending.extend(p.rule_name for p in _walk(self._rules[name].body) if isinstance(p, NonTerminal))
        for name in self._rules:
            if name not in reachable:
                logger.warning("rule %s is unreachable from entry rule %s", name, self._entry_rule)


def _walk(body: Body) -> Iterable[Production]:
    for production in body:
        yield production
        for inner in children_of(production):
            yield from _walk(inner)


def _leading_rule_refs(body: Body, nullable: Callable[[Production], bool]) -> set[str]:
    """Rules reachable from the start of `body` before any token must be consumed."""
    refs: set[str] = set()
    for production in body:
        if isinstance(production, NonTerminal):
            refs.add(production.rule_name)
        else:
            for inner in children_of(production):
                refs.update(_leading_rule_refs(inner, nullable))
        if not nullable(production):
            break
    return refs
