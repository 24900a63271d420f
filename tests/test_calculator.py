import pytest

from cstcalc.calculator import (
    CALCULATOR_GRAMMAR,
    CalculatorInterpreter,
    evaluate,
    parse,
    parse_result,
)
from cstcalc.calculator.tokens import PLUS
from cstcalc.cst import CstNode, CstNodeBuilder
from cstcalc.diagnostics import (
    LEXER_UNEXPECTED_CHARACTER,
    PARSER_MISMATCHED_TOKEN,
    CstCalcError,
    LexError,
    ParseError,
)
from cstcalc.lexer import Token
from cstcalc.text import TextRange
from tests._shared_cases import CALCULATOR_CASES, CalculatorCase, case_id


@pytest.mark.parametrize("case", CALCULATOR_CASES, ids=case_id)
def test_evaluate(case: CalculatorCase) -> None:
    assert evaluate(case.source) == case.value


@pytest.mark.parametrize("case", CALCULATOR_CASES, ids=case_id)
def test_interpreter_over_parsed_tree(case: CalculatorCase) -> None:
    assert CalculatorInterpreter().visit(parse(case.source)) == case.value


def test_subtraction_can_go_negative() -> None:
    assert evaluate("one minus four") == -3


def test_interpreter_can_be_reused() -> None:
    interpreter = CalculatorInterpreter()

    assert interpreter.visit(parse("one plus two")) == 3
    assert interpreter.visit(parse("four times four")) == 16


def test_unknown_word_is_a_lex_error() -> None:
    with pytest.raises(LexError) as excinfo:
        evaluate("one plus five")

    assert excinfo.value.codes == (LEXER_UNEXPECTED_CHARACTER.code,)
    assert "line 1, column 10" in str(excinfo.value)


def test_uppercase_words_are_not_recognized() -> None:
    with pytest.raises(LexError):
        evaluate("One")


def test_dangling_operator_is_a_parse_error() -> None:
    with pytest.raises(ParseError) as excinfo:
        evaluate("two times")

    assert excinfo.value.codes == (PARSER_MISMATCHED_TOKEN.code,)
    assert excinfo.value.at_end_of_input


def test_every_failure_shares_the_base_error() -> None:
    for source in ("one ? two", "plus", "one one"):
        with pytest.raises(CstCalcError):
            evaluate(source)


def test_parse_result_keeps_tokens_and_tree() -> None:
    result = parse_result("one plus two times three")

    assert result.source_text == "one plus two times three"
    assert [token.image for token in result.tokens] == ["one", "plus", "two", "times", "three"]
    assert result.cst.name == "expression"
    assert result.dump().splitlines()[0] == "expression"


def test_parse_result_value_is_computed_once(monkeypatch: pytest.MonkeyPatch) -> None:
    result = parse_result("two times three")
    calls: list[CstNode] = []
    original = CalculatorInterpreter.visit

    def counting_visit(self, node, param=None):
        if isinstance(node, CstNode) and node.name == "expression":
            calls.append(node)
        return original(self, node, param)

    monkeypatch.setattr(CalculatorInterpreter, "visit", counting_visit)

    assert result.value() == 6
    assert result.value() == 6
    assert len(calls) == 1


def test_operator_and_operand_counts_must_agree() -> None:
    plus = Token(type=PLUS, image="plus", range=TextRange(4, 8))
    atomic = parse("one").nodes("addition_expression")[0].nodes("lhs")[0]

    builder = CstNodeBuilder("addition_expression")
    builder.add("lhs", atomic)
    builder.add("ADDITION_OPERATOR", plus)
    malformed = builder.finish()

    with pytest.raises(RuntimeError, match="recorded 1 operators for 0 right-hand operands"):
        CalculatorInterpreter(CALCULATOR_GRAMMAR).visit(malformed)
