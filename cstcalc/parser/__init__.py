"""Grammar definition and CST parser."""

from cstcalc.parser.grammar import Grammar
from cstcalc.parser.options import ParserOptions
from cstcalc.parser.parser import CstParser, ParseRun, ParserProgress
from cstcalc.parser.productions import (
    Alternation,
    AtLeastOne,
    Many,
    ManySep,
    NonTerminal,
    Option,
    Production,
    Rule,
    Terminal,
    alt,
    at_least_one,
    consume,
    many,
    many_sep,
    option,
    subrule,
)

__all__ = [
    "Alternation",
    "AtLeastOne",
    "CstParser",
    "Grammar",
    "Many",
    "ManySep",
    "NonTerminal",
    "Option",
    "ParseRun",
    "ParserOptions",
    "ParserProgress",
    "Production",
    "Rule",
    "Terminal",
    "alt",
    "at_least_one",
    "consume",
    "many",
    "many_sep",
    "option",
    "subrule",
]
