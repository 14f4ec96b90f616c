"""
praxis.fol.terms — Minimal first-order term representation.

Three immutable term kinds, all hashable so they can key dictionaries
and be compared structurally:

    Symbol     constant, optionally typed      ``robot1`` / ``robot1:agent``
    Variable   named placeholder, ``?`` prefix ``?obj`` / ``?obj:physobj``
    Predicate  functor applied to terms        ``holding(?actor, ?obj)``

Equality includes the declared type, so ``cup1`` and ``cup1:physobj``
are different terms.
"""

from __future__ import annotations

import re
from dataclasses import dataclass, field
from typing import Dict, Iterator, List, Tuple, Union

_PLAIN_NAME_RE = re.compile(r"^[A-Za-z0-9_.\-]+$")


def _format_name(name: str) -> str:
    if _PLAIN_NAME_RE.match(name):
        return name
    escaped = name.replace("\\", "\\\\").replace('"', '\\"')
    return f'"{escaped}"'


def _with_type(text: str, type_: str) -> str:
    return f"{text}:{type_}" if type_ else text


@dataclass(frozen=True)
class Symbol:
    """A constant term such as an agent or object name."""

    name: str
    type: str = ""

    def __str__(self) -> str:
        return _with_type(_format_name(self.name), self.type)


@dataclass(frozen=True)
class Variable:
    """A placeholder term.  The name always carries the ``?`` prefix."""

    name: str
    type: str = ""

    def __post_init__(self) -> None:
        if not self.name.startswith("?"):
            object.__setattr__(self, "name", "?" + self.name)

    def __str__(self) -> str:
        return _with_type(self.name, self.type)


@dataclass(frozen=True)
class Predicate:
    """A functor applied to an ordered tuple of argument terms."""

    name: str
    args: Tuple["Term", ...] = field(default_factory=tuple)

    def __post_init__(self) -> None:
        if not isinstance(self.args, tuple):
            object.__setattr__(self, "args", tuple(self.args))

    # -- access -------------------------------------------------------------

    def size(self) -> int:
        return len(self.args)

    def get(self, index: int) -> "Term":
        return self.args[index]

    def __len__(self) -> int:
        return len(self.args)

    def __iter__(self) -> Iterator["Term"]:
        return iter(self.args)

    # -- structure ----------------------------------------------------------

    def variables(self) -> List[Variable]:
        """All variables in argument order, depth-first, without repeats."""
        seen: Dict[str, Variable] = {}
        for arg in self.args:
            if isinstance(arg, Variable):
                seen.setdefault(arg.name, arg)
            elif isinstance(arg, Predicate):
                for inner in arg.variables():
                    seen.setdefault(inner.name, inner)
        return list(seen.values())

    def is_ground(self) -> bool:
        return not self.variables()

    def substitute(self, bindings: Dict[str, "Term"]) -> "Predicate":
        """Return a copy with variables replaced according to *bindings*."""
        new_args: List[Term] = []
        for arg in self.args:
            if isinstance(arg, Variable) and arg.name in bindings:
                new_args.append(bindings[arg.name])
            elif isinstance(arg, Predicate):
                new_args.append(arg.substitute(bindings))
            else:
                new_args.append(arg)
        return Predicate(self.name, tuple(new_args))

    def __str__(self) -> str:
        inner = ", ".join(str(a) for a in self.args)
        return f"{_format_name(self.name)}({inner})"


Term = Union[Symbol, Variable, Predicate]
