import pytest

from cstcalc.calculator import CALCULATOR_GRAMMAR, CALCULATOR_PARSER, ENTRY_RULE, lex
from cstcalc.calculator.tokens import ALL_TOKENS, PLUS, TWO
from cstcalc.cst import CstNode, dump_cst
from cstcalc.diagnostics import (
    PARSER_EARLY_EXIT,
    PARSER_MISMATCHED_TOKEN,
    PARSER_NO_VIABLE_ALTERNATIVE,
    PARSER_NOT_ALL_INPUT_PARSED,
    ParseError,
)
from cstcalc.lexer import SKIPPED, Lexer, Token, create_token
from cstcalc.parser import (
    CstParser,
    Grammar,
    ParserOptions,
    Rule,
    alt,
    at_least_one,
    consume,
    many,
    many_sep,
    option,
    subrule,
)
from cstcalc.text import TextRange, TextSize
from tests._shared_cases import CALCULATOR_CASES, CalculatorCase, case_id

WHITESPACE = create_token("WHITESPACE", r"\s+", group=SKIPPED)
LPAREN = create_token("LPAREN", r"\(")
RPAREN = create_token("RPAREN", r"\)")
COMMA = create_token("COMMA", r",")
MINUS = create_token("MINUS", r"-")
NUMBER = create_token("NUMBER", r"\d+")
LIST_TOKENS = (WHITESPACE, LPAREN, RPAREN, COMMA, MINUS, NUMBER)

LIST_GRAMMAR = Grammar(
    "lists",
    tokens=LIST_TOKENS,
    rules=(
        Rule("list", consume(LPAREN), many_sep(COMMA, subrule("item")), consume(RPAREN)),
        Rule("item", alt(subrule("signed", label="number"), subrule("list", label="nested"))),
        Rule("signed", option(consume(MINUS)), consume(NUMBER)),
        Rule("digits", at_least_one(consume(NUMBER))),
        Rule("groups", many(consume(LPAREN), consume(NUMBER), consume(RPAREN))),
    ),
    entry_rule="list",
)
LIST_LEXER = Lexer(LIST_TOKENS)
LIST_PARSER = CstParser(LIST_GRAMMAR)

CALCULATOR_GRAMMAR_RULES = tuple(CALCULATOR_GRAMMAR.rule(name) for name in CALCULATOR_GRAMMAR.rule_names)


def parse_calc(text: str) -> CstNode:
    return CALCULATOR_PARSER.parse(lex(text), ENTRY_RULE)


def parse_list(text: str, entry_rule: str | None = None) -> CstNode:
    return LIST_PARSER.parse(LIST_LEXER.tokenize(text).tokens, entry_rule)


def parse_error(parse, text: str, *args) -> ParseError:
    with pytest.raises(ParseError) as excinfo:
        parse(text, *args)
    return excinfo.value


def test_binary_expression_records_lhs_operator_and_rhs_labels() -> None:
    root = parse_calc("one plus two")

    assert root.name == "expression"
    assert root.labels == ("addition_expression",)

    addition = root.nodes("addition_expression")[0]
    assert addition.labels == ("lhs", "ADDITION_OPERATOR", "rhs")
    assert [token.type for token in addition.tokens("ADDITION_OPERATOR")] == [PLUS]

    (rhs,) = addition.nodes("rhs")
    (atomic,) = rhs.nodes("lhs")
    assert atomic.name == "atomic_expression"
    assert atomic.tokens("NUMBER_LITERAL")[0].type is TWO


def test_repeated_operands_keep_order_and_pair_with_operators() -> None:
    addition = parse_calc("four plus three minus one").nodes("addition_expression")[0]

    operators = [token.image for token in addition.tokens("ADDITION_OPERATOR")]
    operands = [rhs.descendant_tokens()[0].image for rhs in addition.nodes("rhs")]

    assert operators == ["plus", "minus"]
    assert operands == ["three", "one"]


def test_single_operand_leaves_repeated_labels_absent() -> None:
    addition = parse_calc("two").nodes("addition_expression")[0]

    assert addition.labels == ("lhs",)
    assert not addition.has("rhs")
    assert addition.get("rhs") == ()
    assert addition.get("ADDITION_OPERATOR") == ()
    with pytest.raises(KeyError, match="rhs"):
        _ = addition["rhs"]


def test_children_maps_each_present_label_to_its_elements() -> None:
    addition = parse_calc("one plus two minus three").nodes("addition_expression")[0]

    children = addition.children

    assert list(children) == ["lhs", "ADDITION_OPERATOR", "rhs"]
    assert [token.image for token in children["ADDITION_OPERATOR"]] == ["plus", "minus"]
    assert len(children["rhs"]) == 2
    assert "rhs" not in parse_calc("one").nodes("addition_expression")[0].children


def test_precedence_nests_tighter_operators_deeper() -> None:
    addition = parse_calc("one plus two times three").nodes("addition_expression")[0]

    lhs, rhs = addition.nodes("lhs")[0], addition.nodes("rhs")[0]
    assert lhs.labels == ("lhs",)
    assert rhs.labels == ("lhs", "MULTIPLICATION_OPERATOR", "rhs")


@pytest.mark.parametrize("case", CALCULATOR_CASES, ids=case_id)
def test_reparsing_same_tokens_yields_equal_trees(case: CalculatorCase) -> None:
    tokens = lex(case.source)

    first = CALCULATOR_PARSER.parse(tokens, ENTRY_RULE)
    second = CALCULATOR_PARSER.parse(tokens, ENTRY_RULE)

    assert first == second
    assert first is not second
    assert sorted(first.descendant_tokens(), key=lambda t: t.offset) == list(tokens)


def test_missing_left_operand_fails() -> None:
    error = parse_error(parse_calc, "plus one")

    assert error.codes == (PARSER_MISMATCHED_TOKEN.code,)
    assert error.expected == "token of type NUMBER_LITERAL"
    assert error.token is not None and error.token.image == "plus"
    assert error.offset == TextSize(0)
    assert error.rule_stack == (
        "expression",
        "addition_expression",
        "multiplication_expression",
        "atomic_expression",
    )


def test_missing_right_operand_fails_at_end_of_input() -> None:
    error = parse_error(parse_calc, "one plus")

    assert error.codes == (PARSER_MISMATCHED_TOKEN.code,)
    assert error.at_end_of_input
    assert error.offset == TextSize(8)
    assert "but found end of input" in str(error)


def test_trailing_tokens_fail() -> None:
    error = parse_error(parse_calc, "one two")

    assert error.codes == (PARSER_NOT_ALL_INPUT_PARSED.code,)
    assert error.token is not None and error.token.image == "two"
    assert error.diagnostics[0].range == TextRange(4, 7)


def test_empty_input_fails() -> None:
    error = parse_error(parse_calc, "")

    assert error.at_end_of_input
    assert error.offset == TextSize(0)


def test_any_rule_can_be_the_entry_rule() -> None:
    node = CALCULATOR_PARSER.parse(lex("three"), "atomic_expression")

    assert node.name == "atomic_expression"
    assert node.tokens("NUMBER_LITERAL")[0].image == "three"


def test_unknown_entry_rule_raises_value_error() -> None:
    with pytest.raises(ValueError, match="has no rule `statement`"):
        CALCULATOR_PARSER.parse(lex("one"), "statement")


def test_grammar_without_entry_rule_requires_explicit_one() -> None:
    grammar = Grammar("no_entry", tokens=ALL_TOKENS, rules=CALCULATOR_GRAMMAR_RULES)
    parser = CstParser(grammar)

    with pytest.raises(ValueError, match="no entry rule"):
        parser.parse(lex("one"))
    assert parser.parse(lex("one"), "expression") == parse_calc("one")


def test_node_ranges_cover_their_tokens() -> None:
    root = parse_calc("one plus two")
    addition = root.nodes("addition_expression")[0]

    assert root.range == TextRange(0, 12)
    assert addition.nodes("rhs")[0].range == TextRange(9, 12)


def test_node_location_tracking_can_be_disabled() -> None:
    parser = CstParser(CALCULATOR_GRAMMAR, ParserOptions(node_location_tracking=False))

    root = parser.parse(lex("one plus two"), ENTRY_RULE)

    assert root.range is None
    assert root.nodes("addition_expression")[0].range is None


def test_dump_cst_renders_labels_and_tokens() -> None:
    expected = "\n".join(
        [
            "expression",
            "  addition_expression: addition_expression",
            "    lhs: multiplication_expression",
            "      lhs: atomic_expression",
            "        NUMBER_LITERAL: ONE 'one'",
            "    ADDITION_OPERATOR: PLUS 'plus'",
            "    rhs: multiplication_expression",
            "      lhs: atomic_expression",
            "        NUMBER_LITERAL: TWO 'two'",
        ]
    )

    assert dump_cst(parse_calc("one plus two")) == expected


def test_separated_list_with_nested_alternatives() -> None:
    root = parse_list("(1, (2, -3), 4)")

    assert root.labels == ("LPAREN", "item", "COMMA", "RPAREN")
    assert len(root.get("item")) == 3
    assert len(root.get("COMMA")) == 2

    first, second, third = root.nodes("item")
    assert first.labels == ("number",)
    assert second.labels == ("nested",)
    assert third.nodes("number")[0].tokens("NUMBER")[0].image == "4"

    nested_signed = second.nodes("nested")[0].nodes("item")[1].nodes("number")[0]
    assert [token.image for token in nested_signed.tokens("MINUS")] == ["-"]


def test_empty_separated_list_has_no_items() -> None:
    root = parse_list("()")

    assert root.labels == ("LPAREN", "RPAREN")
    assert root.get("item") == ()


def test_missing_separator_is_a_mismatched_token() -> None:
    error = parse_error(parse_list, "(1 2)")

    assert error.codes == (PARSER_MISMATCHED_TOKEN.code,)
    assert error.expected == "token of type RPAREN"


def test_trailing_separator_has_no_viable_alternative() -> None:
    error = parse_error(parse_list, "(1,)")

    assert error.codes == (PARSER_NO_VIABLE_ALTERNATIVE.code,)
    assert error.token is not None and error.token.image == ")"
    assert "[LPAREN]" in error.expected


def test_at_least_one_requires_a_first_iteration() -> None:
    assert len(parse_list("1 2 3", "digits").get("NUMBER")) == 3

    error = parse_error(parse_list, ")", "digits")
    assert error.codes == (PARSER_EARLY_EXIT.code,)
    assert "[NUMBER]" in error.expected


def test_failure_after_repetition_started_is_not_swallowed() -> None:
    assert len(parse_list("(1)(2)", "groups").get("NUMBER")) == 2

    error = parse_error(parse_list, "(1)(2", "groups")
    assert error.codes == (PARSER_MISMATCHED_TOKEN.code,)
    assert error.at_end_of_input


def test_zero_repetitions_produce_an_empty_node() -> None:
    node = parse_list("", "groups")

    assert node.entries == ()
    assert node.range is None


def test_parse_accepts_any_token_sequence() -> None:
    tokens: list[Token] = list(lex("one plus two"))

    assert CALCULATOR_PARSER.parse(tokens) == parse_calc("one plus two")
