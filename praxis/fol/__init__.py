"""praxis.fol — First-order terms, their parser, and the matching capability."""

from praxis.fol.matcher import Matcher, StructuralMatcher
from praxis.fol.parser import parse_predicate, parse_symbol, parse_term
from praxis.fol.terms import Predicate, Symbol, Term, Variable

__all__ = [
    "Matcher",
    "StructuralMatcher",
    "Predicate",
    "Symbol",
    "Term",
    "Variable",
    "parse_predicate",
    "parse_symbol",
    "parse_term",
]
