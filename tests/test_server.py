"""Tests for praxis.server MCP tool functions.

The tools are called directly (not via MCP transport) after injecting
a catalog-populated ActionDatabase into the server module.
"""

import json

import pytest

import praxis.server as server_mod
from praxis.core.config import Config
from praxis.system import open_database


@pytest.fixture
def server_db(catalog_file):
    db = open_database(Config(catalog_path=catalog_file))
    old = server_mod._database
    server_mod._database = db
    yield db
    server_mod._database = old


class TestLookupTools:
    def test_lookup_type(self, server_db):
        data = json.loads(server_mod.praxis_lookup_type(type_name="pickUp"))
        assert data["type"] == "pickUp"
        assert data["action"]["signature"] == "pickUp(?actor:agent, ?obj:physobj)"

    def test_lookup_type_with_role_types(self, server_db):
        data = json.loads(
            server_mod.praxis_lookup_type(type_name="pickUp", role_types=["agent", "tool"])
        )
        assert data["action"] is None

    def test_lookup_type_for_actor(self, server_db):
        data = json.loads(
            server_mod.praxis_lookup_type(
                type_name="pickUp", actor="robot1:robot", input_role_types=["physobj"]
            )
        )
        assert data["action"]["type"] == "pickUp"

    def test_lookup_effect(self, server_db):
        data = json.loads(
            server_mod.praxis_lookup_effect(goal="holding(robot1:robot, cup1:cup)")
        )
        assert [a["type"] for a in data["actions"]] == ["fetch", "pickUp"]

    def test_lookup_effect_actor_rejected(self, server_db):
        data = json.loads(
            server_mod.praxis_lookup_effect(goal="holding(robot1, cup1)", actor="cup2:cup")
        )
        assert data["actions"] == []

    def test_lookup_signature(self, server_db):
        data = json.loads(server_mod.praxis_lookup_signature(signature="say(robot1, hi)"))
        assert [a["type"] for a in data["actions"]] == ["say"]

    def test_action_exists(self, server_db):
        assert json.loads(server_mod.praxis_action_exists(goal="touched(cup1)"))["exists"] is False
        assert json.loads(server_mod.praxis_action_exists(goal="holding(r, c)"))["exists"] is True

    def test_signatures_for_name(self, server_db):
        data = json.loads(server_mod.praxis_signatures_for_name(name="fetch"))
        assert data["signatures"] == ["fetch(?actor:agent, ?obj:physobj)"]

    def test_list_actions(self, server_db):
        data = json.loads(server_mod.praxis_list_actions(kind="scripts"))
        assert data["count"] == 1
        assert data["actions"][0]["type"] == "fetch"
        assert json.loads(server_mod.praxis_list_actions())["count"] == 3

    def test_stats(self, server_db):
        data = json.loads(server_mod.praxis_stats())
        assert data["primitives"] == 2
        assert data["scripts"] == 1


class TestMaintenanceTools:
    def test_disable_then_enable(self, server_db):
        data = json.loads(server_mod.praxis_disable_action(signature="pickUp(robot1, cup1)"))
        assert [a["type"] for a in data["disabled"]] == ["pickUp"]

        hidden = json.loads(server_mod.praxis_lookup_type(type_name="pickUp"))
        assert hidden["action"] is None
        inspected = json.loads(server_mod.praxis_disabled_action(type_name="pickUp"))
        assert inspected["action"]["type"] == "pickUp"

        enabled = json.loads(server_mod.praxis_enable_action(type_name="pickUp"))
        assert enabled["enabled"] is True
        assert json.loads(server_mod.praxis_lookup_type(type_name="pickUp"))["action"]
        assert server_db.get_disabled_action("pickUp") is None
        server_db.check_invariants()

    def test_enable_without_disabled(self, server_db):
        data = json.loads(server_mod.praxis_enable_action(type_name="say"))
        assert data["enabled"] is False
        assert data["action"] is None

    def test_remove_signature(self, server_db):
        data = json.loads(server_mod.praxis_remove_signature(signature="fetch(robot1, cup1)"))
        assert [a["type"] for a in data["removed"]] == ["fetch"]
        assert len(server_db) == 2


class TestErrors:
    def test_invalid_kind(self, server_db):
        data = json.loads(server_mod.praxis_list_actions(kind="macros"))
        assert data["error"] is True
        assert data["tool"] == "praxis_list_actions"
        assert "kind must be one of" in data["message"]

    def test_unparseable_goal(self, server_db):
        data = json.loads(server_mod.praxis_lookup_effect(goal="holding(robot1,"))
        assert data["error"] is True

    def test_oversized_input(self, server_db):
        data = json.loads(server_mod.praxis_lookup_signature(signature="x" * 20_000))
        assert data["error"] is True
        assert "maximum length" in data["message"]
