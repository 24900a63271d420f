"""Centralized calculator source cases used across lexer/parser/interpreter tests."""

from __future__ import annotations

from dataclasses import dataclass


@dataclass(frozen=True, slots=True)
class CalculatorCase:
    name: str
    source: str
    value: int


CALCULATOR_CASES: tuple[CalculatorCase, ...] = (
    CalculatorCase(name="single_operand", source="two", value=2),
    CalculatorCase(name="single_addition", source="one plus two", value=3),
    CalculatorCase(name="left_associative_addition", source="four plus three plus one", value=8),
    CalculatorCase(name="left_associative_subtraction", source="four minus one minus two", value=1),
    CalculatorCase(name="multiplication_binds_tighter", source="one plus two times three", value=7),
    CalculatorCase(name="multiplication_first", source="two times three plus four", value=10),
    CalculatorCase(name="chained_multiplication", source="two times two times three", value=12),
    CalculatorCase(name="mixed_precedence", source="four minus two times two plus one", value=1),
    CalculatorCase(name="leading_and_trailing_whitespace", source="  three plus one\n", value=4),
    CalculatorCase(name="multiline_input", source="one\nplus\r\ntwo\ttimes four", value=9),
    CalculatorCase(name="no_whitespace_between_words", source="oneplustwo", value=3),
)


def case_id(case: CalculatorCase) -> str:
    return case.name
