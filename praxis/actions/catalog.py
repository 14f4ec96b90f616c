"""
praxis.actions.catalog — Load action definitions from a YAML catalog.

Format example::

    types:                  # optional, child: parent
      robot: agent
    actions:
      - type: pickUp
        primitive: true
        description: Grasp an object
        roles:
          - {name: "?actor", kind: input, type: agent}
          - {name: "?obj", kind: input, type: physobj}
        effects:
          - {predicate: "holding(?actor, ?obj)"}
          - {predicate: "touched(?obj)", postcondition: false}
        signatures:
          - "pickUp(?actor:agent, ?obj:physobj)"

Untyped variables in effect predicates pick up the declared type of the
role with the same name, so ``holding(?actor, ?obj)`` above is indexed
as ``holding(?actor:agent, ?obj:physobj)``.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass, field
from pathlib import Path
from typing import TYPE_CHECKING, Any, Dict, List, Tuple

import yaml

from praxis.actions.entry import Effect, Entry, Role, RoleKind
from praxis.fol.parser import parse_predicate
from praxis.fol.terms import Predicate, Term, Variable

if TYPE_CHECKING:
    from praxis.actions.database import ActionDatabase

log = logging.getLogger("praxis.actions.catalog")


@dataclass
class Catalog:
    entries: List[Entry] = field(default_factory=list)
    type_hierarchy: Dict[str, str] = field(default_factory=dict)


def _type_from_roles(predicate: Predicate, roles: Tuple[Role, ...]) -> Predicate:
    by_name = {Variable(r.name).name: r.declared_type for r in roles}
    args: List[Term] = []
    for arg in predicate.args:
        if isinstance(arg, Variable) and not arg.type and by_name.get(arg.name):
            args.append(Variable(arg.name, by_name[arg.name]))
        elif isinstance(arg, Predicate):
            args.append(_type_from_roles(arg, roles))
        else:
            args.append(arg)
    return Predicate(predicate.name, tuple(args))


def _parse_role(data: Any, action: str) -> Role:
    if isinstance(data, str):
        # shorthand: "?obj:physobj"
        name, _, declared = data.partition(":")
        return Role(name=name.strip(), declared_type=declared.strip())
    if not isinstance(data, dict) or "name" not in data:
        raise ValueError(f"Action {action!r}: role must be a mapping with a 'name', got {data!r}")
    kind = str(data.get("kind", RoleKind.INPUT.value)).lower()
    try:
        role_kind = RoleKind(kind)
    except ValueError:
        raise ValueError(f"Action {action!r}: unknown role kind {kind!r}") from None
    return Role(name=str(data["name"]), kind=role_kind, declared_type=str(data.get("type", "")))


def _parse_effect(data: Any, action: str, roles: Tuple[Role, ...]) -> Effect:
    if isinstance(data, str):
        data = {"predicate": data}
    if not isinstance(data, dict) or "predicate" not in data:
        raise ValueError(f"Action {action!r}: effect must carry a 'predicate', got {data!r}")
    predicate = _type_from_roles(parse_predicate(str(data["predicate"])), roles)
    return Effect(
        predicate=predicate,
        is_postcondition=bool(data.get("postcondition", True)),
        is_auto_generated=bool(data.get("auto_generated", False)),
    )


def parse_entry(data: Dict[str, Any]) -> Entry:
    """Build an ``Entry`` from one catalog mapping.  Raises ``ValueError``."""
    if not isinstance(data, dict):
        raise ValueError(f"Action definition must be a mapping, got {data!r}")
    action = data.get("type")
    if not action or not isinstance(action, str):
        raise ValueError(f"Action definition is missing a 'type': {data!r}")

    roles = tuple(_parse_role(r, action) for r in data.get("roles") or [])
    effects = tuple(_parse_effect(e, action, roles) for e in data.get("effects") or [])
    variants = tuple(parse_predicate(str(s)) for s in data.get("signatures") or [])

    return Entry(
        type=action,
        roles=roles,
        is_primitive=bool(data.get("primitive", True)),
        effects=effects,
        signature_variants=variants,
        description=str(data.get("description", "")),
    )


def parse_catalog(text: str) -> Catalog:
    raw = yaml.safe_load(text) or {}
    if not isinstance(raw, dict):
        raise ValueError("Action catalog must be a mapping with an 'actions' list")
    data = raw.get("praxis", raw)

    hierarchy = data.get("types") or {}
    if not isinstance(hierarchy, dict):
        raise ValueError("'types' must map child type names to parent type names")

    entries = [parse_entry(item) for item in data.get("actions") or []]
    return Catalog(
        entries=entries,
        type_hierarchy={str(k): str(v) for k, v in hierarchy.items()},
    )


def load_catalog(path: str | Path) -> Catalog:
    """Read a catalog file from disk."""
    path = Path(path)
    if not path.exists():
        raise FileNotFoundError(f"Action catalog not found: {path}")
    catalog = parse_catalog(path.read_text(encoding="utf-8"))
    log.info("Loaded %d action(s) from %s", len(catalog.entries), path)
    return catalog


def populate(db: "ActionDatabase", catalog: Catalog) -> int:
    """Insert every catalog entry into *db* in file order."""
    for entry in catalog.entries:
        db.put_action(entry)
    return len(catalog.entries)
