"""Grammar-driven recursive-descent CST parser."""

from collections.abc import Sequence
from dataclasses import dataclass

from cstcalc.cst import CstNode, CstNodeBuilder
from cstcalc.diagnostics import (
    PARSER_EARLY_EXIT,
    PARSER_MISMATCHED_TOKEN,
    PARSER_NO_VIABLE_ALTERNATIVE,
    PARSER_NOT_ALL_INPUT_PARSED,
    Diagnostic,
    DiagnosticSpec,
    ParseError,
)
from cstcalc.lexer import Token, token_matcher
from cstcalc.parser.grammar import Grammar, LeafSet
from cstcalc.parser.options import ParserOptions
from cstcalc.parser.productions import (
    Alternation,
    AtLeastOne,
    Body,
    Many,
    ManySep,
    NonTerminal,
    Option,
    Production,
    Terminal,
)
from cstcalc.text import TextRange, TextSize


@dataclass(slots=True)
class ParserProgress:
    """Detect parser stalls inside repetition loops."""

    _position: int | None = None

    def has_progressed(self, run: "ParseRun") -> bool:
        has_progressed = self._position is None or self._position < run.position
        self._position = run.position
        return has_progressed

    def assert_progressing(self, run: "ParseRun") -> None:
        if not self.has_progressed(run):
            raise RuntimeError(f"Parser stopped making progress at token index {run.position}")


class CstParser:
    """Parses token sequences into CSTs for one grammar.

    The parser holds only the grammar and options; every `parse` call runs on a
    fresh `ParseRun`, so one instance can be reused.
    """

    def __init__(self, grammar: Grammar, options: ParserOptions | None = None) -> None:
        self._grammar = grammar
        self._options = options or ParserOptions()

    @property
    def grammar(self) -> Grammar:
        return self._grammar

    @property
    def options(self) -> ParserOptions:
        return self._options

    def parse(self, tokens: Sequence[Token], entry_rule: str | None = None) -> CstNode:
        resolved = entry_rule if entry_rule is not None else self._grammar.entry_rule
        if resolved is None:
            raise ValueError(f"Grammar `{self._grammar.name}` has no entry rule; pass one explicitly")
        # Fail on an unknown entry rule before touching any token.
        self._grammar.rule(resolved)

        run = ParseRun(self._grammar, self._options, tokens)
        root = run.invoke_rule(resolved)
        run.expect_end()
        return root


class ParseRun:
    """Cursor state for a single parse."""

    def __init__(self, grammar: Grammar, options: ParserOptions, tokens: Sequence[Token]) -> None:
        self._grammar = grammar
        self._options = options
        self._tokens = tuple(tokens)
        self._position = 0
        self._rule_stack: list[str] = []

    @property
    def position(self) -> int:
        return self._position

    @property
    def current(self) -> Token | None:
        if self._position < len(self._tokens):
            return self._tokens[self._position]
        return None

    def at_set(self, leaves: LeafSet) -> bool:
        token = self.current
        return token is not None and token.type in leaves

    def bump(self) -> Token:
        token = self.current
        if token is None:
            raise RuntimeError("Cannot bump past the end of input")
        self._position += 1
        return token

    def invoke_rule(self, name: str) -> CstNode:
        rule = self._grammar.rule(name)
        builder = CstNodeBuilder(name)
        self._rule_stack.append(name)
        self._sequence(rule.body, builder)
        self._rule_stack.pop()
        return builder.finish(track_location=self._options.node_location_tracking)

    def expect_end(self) -> None:
        token = self.current
        if token is not None:
            raise self._error(PARSER_NOT_ALL_INPUT_PARSED, "end of input")

    def _sequence(self, body: Body, builder: CstNodeBuilder) -> None:
        for production in body:
            self._production(production, builder)

    def _production(self, production: Production, builder: CstNodeBuilder) -> None:
        match production:
            case Terminal():
                self._consume(production, builder)
            case NonTerminal(rule_name):
                builder.add(production.effective_label, self.invoke_rule(rule_name))
            case Option(body):
                if self.at_set(self._grammar.lookahead(production)):
                    self._sequence(body, builder)
            case Many(body):
                self._repeat(production, body, builder)
            case AtLeastOne(body):
                if not self.at_set(self._grammar.lookahead(production)):
                    raise self._error(PARSER_EARLY_EXIT, f"at least one {self._describe(body)}")
                self._repeat(production, body, builder)
            case ManySep(separator, body):
                if not self.at_set(self._grammar.lookahead(production)):
                    return
                self._sequence(body, builder)
                separators = self._grammar.leaves_of(separator.token_type)
                while self.at_set(separators):
                    self._consume(separator, builder)
                    self._sequence(body, builder)
            case Alternation(alternatives):
                self._alternation(production, alternatives, builder)
            case _:
                raise TypeError(f"Unknown production {production!r}")

    def _consume(self, terminal: Terminal, builder: CstNodeBuilder) -> None:
        token = self.current
        if token is None or not token_matcher(token, terminal.token_type):
            raise self._error(PARSER_MISMATCHED_TOKEN, f"token of type {terminal.token_type.name}")
        builder.add(terminal.effective_label, self.bump())

    def _repeat(self, production: Many | AtLeastOne, body: Body, builder: CstNodeBuilder) -> None:
        # The decision is made on lookahead only; once an iteration starts, failures propagate.
        lookahead = self._grammar.lookahead(production)
        progress = ParserProgress()
        while self.at_set(lookahead):
            progress.assert_progressing(self)
            self._sequence(body, builder)

    def _alternation(
        self,
        production: Alternation,
        alternatives: tuple[Body, ...],
        builder: CstNodeBuilder,
    ) -> None:
        fallback: Body | None = None
        for body, lookahead in zip(alternatives, self._grammar.alternative_lookaheads(production)):
            if self.at_set(lookahead):
                self._sequence(body, builder)
                return
            if fallback is None and self._grammar.is_nullable(body):
                fallback = body
        if fallback is not None:
            self._sequence(fallback, builder)
            return
        expected = " or ".join(self._describe(body) for body in alternatives)
        raise self._error(PARSER_NO_VIABLE_ALTERNATIVE, f"one of: {expected}")

    def _describe(self, body: Body) -> str:
        names = sorted(t.name for t in self._grammar.first_of(body))
        return "[" + ", ".join(names) + "]"

    def _error(self, spec: DiagnosticSpec, expected: str) -> ParseError:
        token = self.current
        if token is not None:
            found = repr(token.image)
            error_range = token.range
        else:
            found = "end of input"
            end = self._tokens[-1].range.end if self._tokens else TextSize.from_int(0)
            error_range = TextRange.empty(end)

        rule_path = " > ".join(self._rule_stack)
        where = f" in {rule_path}" if rule_path else ""
        diagnostic = Diagnostic.from_spec(
            spec,
            message=f"Expected {expected} but found {found}{where}",
            range=error_range,
        )
        return ParseError(
            diagnostic,
            expected=expected,
            token=token,
            offset=error_range.start,
            rule_stack=tuple(self._rule_stack),
        )
