"""
praxis.fol.matcher — The matching capability the action database relies on.

The database never inspects term structure itself.  It asks a
``Matcher`` two questions:

  - ``instance_of(pattern, query)``: can the stored *pattern* (the more
    general one, usually containing variables) be made equal to *query*
    by binding the pattern's variables?
  - ``accepts_actor(actor, role_types)``: may *actor* fill a role
    declared with one of *role_types*?

``StructuralMatcher`` is the reference implementation: one-way matching
with consistent bindings, and type checks against an optional
single-inheritance hierarchy (``{"robot": "agent", "agent": "object"}``).
Any object with these two methods can be injected instead, which keeps
the database testable with a stub.
"""

from __future__ import annotations

from typing import Dict, Mapping, Optional, Protocol, Sequence, runtime_checkable

from praxis.fol.terms import Predicate, Symbol, Term, Variable


@runtime_checkable
class Matcher(Protocol):
    def instance_of(self, pattern: Predicate, query: Predicate) -> bool:
        ...

    def accepts_actor(self, actor: Optional[Term], role_types: Sequence[str]) -> bool:
        ...


class StructuralMatcher:
    """Reference ``Matcher`` over ``praxis.fol.terms``.

    Typing rules:
      - An empty type is compatible with every type.
      - A pattern variable typed ``T`` binds a query symbol whose type is
        ``T`` or a subtype of ``T``.
      - A query variable acts as a wildcard for any pattern term whose
        type is compatible in either direction.
    """

    def __init__(self, type_hierarchy: Optional[Mapping[str, str]] = None) -> None:
        self.type_hierarchy: Dict[str, str] = dict(type_hierarchy or {})

    # ------------------------------------------------------------------
    # Types
    # ------------------------------------------------------------------

    def is_subtype(self, child: str, parent: str) -> bool:
        """True if *child* equals *parent* or descends from it."""
        if not child or not parent:
            return True
        seen = set()
        current: Optional[str] = child
        while current and current not in seen:
            if current == parent:
                return True
            seen.add(current)
            current = self.type_hierarchy.get(current)
        return False

    def _compatible(self, a: str, b: str) -> bool:
        return self.is_subtype(a, b) or self.is_subtype(b, a)

    # ------------------------------------------------------------------
    # Matcher protocol
    # ------------------------------------------------------------------

    def instance_of(self, pattern: Predicate, query: Predicate) -> bool:
        return self._match(pattern, query, {})

    def accepts_actor(self, actor: Optional[Term], role_types: Sequence[str]) -> bool:
        declared = [t for t in role_types if t]
        if actor is None or not declared:
            return True
        if isinstance(actor, Variable):
            return not actor.type or any(self._compatible(actor.type, t) for t in declared)
        if isinstance(actor, Symbol):
            return not actor.type or any(self.is_subtype(actor.type, t) for t in declared)
        return False

    # ------------------------------------------------------------------
    # Internals
    # ------------------------------------------------------------------

    def _match(self, pattern: Term, query: Term, bindings: Dict[str, Term]) -> bool:
        if isinstance(query, Variable) and not isinstance(pattern, Variable):
            # query-side wildcard
            if isinstance(pattern, Symbol):
                return self._compatible(pattern.type, query.type)
            return not query.type

        if isinstance(pattern, Variable):
            if isinstance(query, Variable):
                if not self._compatible(pattern.type, query.type):
                    return False
            elif isinstance(query, Symbol):
                if not self.is_subtype(query.type, pattern.type):
                    return False
            elif pattern.type:
                return False
            bound = bindings.get(pattern.name)
            if bound is None:
                bindings[pattern.name] = query
                return True
            return bound == query

        if isinstance(pattern, Symbol):
            return (
                isinstance(query, Symbol)
                and pattern.name == query.name
                and self._compatible(pattern.type, query.type)
            )

        if not isinstance(query, Predicate):
            return False
        if pattern.name != query.name or len(pattern.args) != len(query.args):
            return False
        return all(self._match(p, q, bindings) for p, q in zip(pattern.args, query.args))
