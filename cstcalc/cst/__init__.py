"""Concrete syntax tree structures."""

from cstcalc.cst.node import CstElement, CstNode, CstNodeBuilder, dump_cst

__all__ = [
    "CstElement",
    "CstNode",
    "CstNodeBuilder",
    "dump_cst",
]
