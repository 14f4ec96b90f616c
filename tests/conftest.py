"""Shared fixtures for Praxis tests."""

import pytest

from praxis.actions.database import ActionDatabase
from praxis.actions.entry import Effect, Entry, Role, RoleKind
from praxis.fol.matcher import StructuralMatcher
from praxis.fol.parser import parse_predicate


SAMPLE_CATALOG = """\
types:
  robot: agent
  cup: physobj
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
  - type: fetch
    primitive: false
    roles:
      - {name: "?actor", kind: input, type: agent}
      - {name: "?obj", kind: input, type: physobj}
      - {name: "?loc", kind: local, type: location}
    effects:
      - "holding(?actor, ?obj)"
  - type: say
    roles:
      - "?actor:agent"
      - "?text:utterance"
"""


def make_entry(
    type_name,
    roles=(("?actor", "agent"),),
    primitive=True,
    postconditions=(),
    effects=(),
    signatures=(),
):
    """Build an Entry from compact tuples: roles as (name, type[, kind])."""
    role_objs = []
    for spec in roles:
        name, declared = spec[0], spec[1]
        kind = spec[2] if len(spec) > 2 else RoleKind.INPUT
        role_objs.append(Role(name=name, kind=kind, declared_type=declared))
    all_effects = [Effect(parse_predicate(p)) for p in postconditions]
    all_effects += [Effect(parse_predicate(p), is_postcondition=False) for p in effects]
    return Entry(
        type=type_name,
        roles=tuple(role_objs),
        is_primitive=primitive,
        effects=tuple(all_effects),
        signature_variants=tuple(parse_predicate(s) for s in signatures),
    )


class StubMatcher:
    """Matcher that compares functor names only and records every call."""

    def __init__(self, accept_actors=True):
        self.accept_actors = accept_actors
        self.calls = []

    def instance_of(self, pattern, query):
        self.calls.append(("instance_of", pattern, query))
        return pattern.name == query.name

    def accepts_actor(self, actor, role_types):
        self.calls.append(("accepts_actor", actor, tuple(role_types)))
        return self.accept_actors


@pytest.fixture
def matcher():
    return StructuralMatcher({"robot": "agent", "cup": "physobj"})


@pytest.fixture
def db(matcher):
    return ActionDatabase(matcher=matcher)


@pytest.fixture
def pick_up():
    return make_entry(
        "pickUp",
        roles=[("?actor", "agent"), ("?obj", "physobj")],
        postconditions=["holding(?actor, ?obj)"],
    )


@pytest.fixture
def fetch():
    return make_entry(
        "fetch",
        roles=[("?actor", "agent"), ("?obj", "physobj"), ("?loc", "location", RoleKind.LOCAL)],
        primitive=False,
        postconditions=["holding(?actor, ?obj)"],
    )


@pytest.fixture
def catalog_file(tmp_path):
    path = tmp_path / "actions.yaml"
    path.write_text(SAMPLE_CATALOG, encoding="utf-8")
    return path
