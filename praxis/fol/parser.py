"""
praxis.fol.parser — Read terms from their textual form.

Grammar::

    term      := variable | predicate | symbol
    variable  := "?" NAME [":" NAME]
    predicate := (NAME | QUOTED) "(" [term ("," term)*] ")"
    symbol    := (NAME | QUOTED) [":" NAME]

NAME is ``[A-Za-z0-9_.-]+``; QUOTED is a double-quoted string with
backslash escapes.  The output of ``str(term)`` always parses back to
an equal term.
"""

from __future__ import annotations

import re
from typing import List, Optional, Tuple

from praxis.fol.terms import Predicate, Symbol, Term, Variable

_TOKEN_RE = re.compile(
    r"""
    (?P<ws>\s+)
  | (?P<name>[A-Za-z0-9_.\-]+)
  | (?P<quoted>"(?:[^"\\]|\\.)*")
  | (?P<punct>[?:(),])
    """,
    re.VERBOSE,
)

_Token = Tuple[str, str, int]  # (kind, text, offset)


def _tokenize(text: str) -> List[_Token]:
    tokens: List[_Token] = []
    pos = 0
    while pos < len(text):
        match = _TOKEN_RE.match(text, pos)
        if match is None:
            raise ValueError(f"Unexpected character {text[pos]!r} at {pos} in {text!r}")
        kind = match.lastgroup or ""
        if kind != "ws":
            tokens.append((kind, match.group(), pos))
        pos = match.end()
    return tokens


def _unquote(raw: str) -> str:
    return re.sub(r"\\(.)", r"\1", raw[1:-1])


class _Parser:
    def __init__(self, text: str) -> None:
        self.text = text
        self.tokens = _tokenize(text)
        self.pos = 0

    def peek(self) -> Optional[_Token]:
        return self.tokens[self.pos] if self.pos < len(self.tokens) else None

    def next(self) -> _Token:
        tok = self.peek()
        if tok is None:
            raise ValueError(f"Unexpected end of input in {self.text!r}")
        self.pos += 1
        return tok

    def expect(self, text: str) -> None:
        kind, value, offset = self.next()
        if value != text or kind != "punct":
            raise ValueError(f"Expected {text!r} at {offset} in {self.text!r}, got {value!r}")

    def accept(self, text: str) -> bool:
        tok = self.peek()
        if tok is not None and tok[0] == "punct" and tok[1] == text:
            self.pos += 1
            return True
        return False

    def type_suffix(self) -> str:
        if not self.accept(":"):
            return ""
        kind, value, offset = self.next()
        if kind != "name":
            raise ValueError(f"Expected type name at {offset} in {self.text!r}")
        return value

    def term(self) -> Term:
        kind, value, offset = self.next()
        if kind == "punct" and value == "?":
            name_kind, name, name_offset = self.next()
            if name_kind != "name":
                raise ValueError(f"Expected variable name at {name_offset} in {self.text!r}")
            return Variable("?" + name, self.type_suffix())
        if kind not in ("name", "quoted"):
            raise ValueError(f"Unexpected {value!r} at {offset} in {self.text!r}")
        if kind == "quoted":
            value = _unquote(value)
        if self.accept("("):
            args: List[Term] = []
            if not self.accept(")"):
                args.append(self.term())
                while self.accept(","):
                    args.append(self.term())
                self.expect(")")
            return Predicate(value, tuple(args))
        return Symbol(value, self.type_suffix())

    def parse(self) -> Term:
        result = self.term()
        tok = self.peek()
        if tok is not None:
            raise ValueError(f"Trailing input {tok[1]!r} at {tok[2]} in {self.text!r}")
        return result


def parse_term(text: str) -> Term:
    """Parse any term.  Raises ``ValueError`` on malformed input."""
    return _Parser(text).parse()


def parse_predicate(text: str) -> Predicate:
    """Parse a term that must be a predicate, e.g. ``holding(robot1, cup1)``."""
    term = parse_term(text)
    if not isinstance(term, Predicate):
        raise ValueError(f"Expected a predicate, got {text!r}")
    return term


def parse_symbol(text: str) -> Symbol:
    """Parse a constant such as ``robot1`` or ``robot1:agent``."""
    term = parse_term(text)
    if not isinstance(term, Symbol):
        raise ValueError(f"Expected a symbol, got {text!r}")
    return term
