"""CST visitors."""

from cstcalc.visitor.visitor import CstVisitor, CstVisitorWithDefaults

__all__ = [
    "CstVisitor",
    "CstVisitorWithDefaults",
]
