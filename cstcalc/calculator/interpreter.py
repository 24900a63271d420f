"""Calculator semantics over the calculator CST."""

from cstcalc.calculator.grammar import CALCULATOR_GRAMMAR
from cstcalc.calculator.tokens import MINUS, PLUS, TIMES, VALUES
from cstcalc.cst import CstNode
from cstcalc.lexer import Token, token_matcher
from cstcalc.parser import Grammar
from cstcalc.visitor import CstVisitor


class CalculatorInterpreter(CstVisitor):
    def __init__(self, grammar: Grammar = CALCULATOR_GRAMMAR) -> None:
        super().__init__(grammar)

    def expression(self, node: CstNode, param=None) -> int:
        return self.visit(node["addition_expression"])

    def addition_expression(self, node: CstNode, param=None) -> int:
        return self._fold(node, node.tokens("ADDITION_OPERATOR"))

    def multiplication_expression(self, node: CstNode, param=None) -> int:
        return self._fold(node, node.tokens("MULTIPLICATION_OPERATOR"))

    def atomic_expression(self, node: CstNode, param=None) -> int:
        literal = node.tokens("NUMBER_LITERAL")[0]
        return VALUES[literal.image]

    def _fold(self, node: CstNode, operators: tuple[Token, ...]) -> int:
        result = self.visit(node["lhs"])
        # "rhs" is absent when the repetition matched zero times; lhs passes through.
        operands = node.nodes("rhs")
        if len(operands) != len(operators):
            raise RuntimeError(
                f"`{node.name}` recorded {len(operators)} operators for {len(operands)} right-hand operands"
            )

        for operator, operand in zip(operators, operands):
            value = self.visit(operand)
            if token_matcher(operator, PLUS):
                result += value
            elif token_matcher(operator, MINUS):
                result -= value
            elif token_matcher(operator, TIMES):
                result *= value
            else:
                raise RuntimeError(f"Unsupported operator {operator.image!r}")
        return result
