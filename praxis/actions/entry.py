"""
praxis.actions.entry — Immutable description of one action.

An ``Entry`` carries everything the action database indexes:

  - ``type``: the action name (overloads share it)
  - ``roles``: ordered parameters, each input / output / local with a
    declared type; the non-local roles form the call signature
  - ``is_primitive``: directly executable, or a script of sub-actions
  - ``effects``: declared effects; postconditions are indexed for
    goal-directed lookup
  - ``signature_variants``: alternate call shapes (overloads)

Identity is structural: two entries are equal when their type, ordered
role types, and primitive flag agree.  Effects, variants, and the
description do not take part.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from enum import Enum
from typing import Any, Dict, Iterable, List, Optional, Tuple

from praxis.fol.terms import Predicate, Variable


class RoleKind(str, Enum):
    """Semantic kind of an action parameter."""

    INPUT = "input"
    OUTPUT = "output"
    LOCAL = "local"


@dataclass(frozen=True)
class Role:
    name: str
    kind: RoleKind = RoleKind.INPUT
    declared_type: str = ""

    def __post_init__(self) -> None:
        if not isinstance(self.kind, RoleKind):
            object.__setattr__(self, "kind", RoleKind(self.kind))

    @property
    def is_local(self) -> bool:
        return self.kind is RoleKind.LOCAL

    def as_variable(self) -> Variable:
        return Variable(self.name, self.declared_type)

    def to_dict(self) -> Dict[str, str]:
        return {"name": self.name, "kind": self.kind.value, "type": self.declared_type}


@dataclass(frozen=True)
class Effect:
    predicate: Predicate
    is_postcondition: bool = True
    is_auto_generated: bool = False

    def to_dict(self) -> Dict[str, Any]:
        return {
            "predicate": str(self.predicate),
            "postcondition": self.is_postcondition,
            "auto_generated": self.is_auto_generated,
        }


def _as_tuple(items: Optional[Iterable[Any]]) -> Tuple[Any, ...]:
    return tuple(items) if items is not None else ()


@dataclass(frozen=True, eq=False)
class Entry:
    """One action definition.  Never mutated after construction."""

    type: str
    roles: Tuple[Role, ...] = field(default_factory=tuple)
    is_primitive: bool = True
    effects: Tuple[Effect, ...] = field(default_factory=tuple)
    signature_variants: Tuple[Predicate, ...] = field(default_factory=tuple)
    description: str = ""

    def __post_init__(self) -> None:
        if not self.type:
            raise ValueError("Entry type must be a non-empty string")
        object.__setattr__(self, "roles", _as_tuple(self.roles))
        object.__setattr__(self, "effects", _as_tuple(self.effects))
        object.__setattr__(self, "signature_variants", _as_tuple(self.signature_variants))
        for variant in self.signature_variants:
            if variant.name != self.type:
                raise ValueError(
                    f"Signature variant {variant} does not match action type {self.type!r}"
                )

    # -- identity -----------------------------------------------------------

    def _key(self) -> Tuple[Any, ...]:
        return (self.type, self.role_types, self.is_primitive)

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, Entry):
            return NotImplemented
        return self._key() == other._key()

    def __hash__(self) -> int:
        return hash(self._key())

    # -- roles --------------------------------------------------------------

    @property
    def role_types(self) -> Tuple[str, ...]:
        return tuple(r.declared_type for r in self.roles)

    @property
    def signature_roles(self) -> Tuple[Role, ...]:
        return tuple(r for r in self.roles if not r.is_local)

    @property
    def non_local_role_types(self) -> Tuple[str, ...]:
        return tuple(r.declared_type for r in self.signature_roles)

    @property
    def actor_role(self) -> Optional[Role]:
        """First non-local input role, conventionally ``?actor``."""
        for role in self.roles:
            if role.kind is RoleKind.INPUT:
                return role
        return None

    @property
    def actor_types(self) -> Tuple[str, ...]:
        actor = self.actor_role
        if actor is None or not actor.declared_type:
            return ()
        return (actor.declared_type,)

    @property
    def input_role_types(self) -> Tuple[str, ...]:
        """Declared types of the input roles that follow the actor role."""
        inputs = [r for r in self.roles if r.kind is RoleKind.INPUT]
        return tuple(r.declared_type for r in inputs[1:])

    def get_role(self, name: str) -> Optional[Role]:
        for role in self.roles:
            if role.name == name:
                return role
        return None

    # -- effects / signatures -----------------------------------------------

    @property
    def postconditions(self) -> Tuple[Effect, ...]:
        return tuple(e for e in self.effects if e.is_postcondition)

    @property
    def signature(self) -> Predicate:
        """Canonical call shape built from the non-local roles."""
        return Predicate(self.type, tuple(r.as_variable() for r in self.signature_roles))

    def signature_options(self) -> Tuple[Predicate, ...]:
        return self.signature_variants or (self.signature,)

    # -- serialisation ------------------------------------------------------

    def to_dict(self) -> Dict[str, Any]:
        return {
            "type": self.type,
            "primitive": self.is_primitive,
            "description": self.description,
            "signature": str(self.signature),
            "roles": [r.to_dict() for r in self.roles],
            "effects": [e.to_dict() for e in self.effects],
            "signatures": [str(s) for s in self.signature_options()],
        }

    def __str__(self) -> str:
        kind = "primitive" if self.is_primitive else "script"
        return f"{self.signature} [{kind}]"

    def __repr__(self) -> str:
        return f"Entry({self})"


def entries_to_dicts(entries: Iterable[Entry]) -> List[Dict[str, Any]]:
    """Render a collection of entries as plain data, sorted by signature."""
    return [e.to_dict() for e in sorted(entries, key=str)]
