"""
Praxis -- MCP server exposing the action knowledge base as tools.

Run with:
    praxis serve --catalog ./actions.yaml

Or configure in your MCP client as:
    {
        "mcpServers": {
            "praxis": {
                "command": "praxis",
                "args": ["serve", "--catalog", "/path/to/actions.yaml"]
            }
        }
    }

Every tool takes plain strings (predicates in their textual form, e.g.
``holding(robot1, cup1)``) and returns a JSON string.  Nothing returned
is a live view of the database.

Tools exposed:
    Lookup:
        praxis_lookup_type         -- Newest action for a type name
        praxis_lookup_effect       -- Actions whose postcondition achieves a goal
        praxis_lookup_signature    -- Actions callable with a signature
        praxis_action_exists       -- Goal or signature has any candidate
        praxis_signatures_for_name -- Canonical signatures under a type name
        praxis_list_actions        -- Snapshot of all / primitive / script actions
        praxis_stats               -- Index sizes
    Maintenance:
        praxis_disable_action      -- Take matching actions out of service
        praxis_disabled_action     -- Inspect the newest disabled action for a type
        praxis_enable_action       -- Re-insert the newest disabled action for a type
        praxis_remove_signature    -- Remove actions matching a signature
"""

import atexit
import dataclasses
import functools
import json
import logging
import traceback
from typing import Any, List, Optional

from mcp.server.fastmcp import FastMCP

from praxis.actions.database import ActionDatabase
from praxis.actions.entry import Entry, entries_to_dicts
from praxis.core.config import Config
from praxis.fol.parser import parse_predicate, parse_term
from praxis.system import open_database

log = logging.getLogger("praxis.server")

#: Maximum byte length for text inputs (10 KB).
MAX_INPUT_BYTES = 10_000

LIST_KINDS = ("all", "primitives", "scripts")


def _validate_length(text: str, name: str) -> str:
    """Raise ValueError if *text* exceeds MAX_INPUT_BYTES."""
    if len(text.encode("utf-8", errors="replace")) > MAX_INPUT_BYTES:
        raise ValueError(f"'{name}' exceeds maximum length ({MAX_INPUT_BYTES} bytes).")
    return text


def _predicate(text: str, name: str):
    return parse_predicate(_validate_length(text, name))


def _entry_or_none(entry: Optional[Entry]) -> Optional[dict]:
    return entry.to_dict() if entry is not None else None


# ---------------------------------------------------------------------------
# Error-safe tool decorator
# ---------------------------------------------------------------------------


def _safe_json(fn):
    """Wrap an MCP tool so exceptions return JSON errors instead of crashing."""

    @functools.wraps(fn)
    def wrapper(*args: Any, **kwargs: Any) -> str:
        try:
            return fn(*args, **kwargs)
        except Exception as exc:
            log.error("Tool %s failed: %s\n%s", fn.__name__, exc, traceback.format_exc())
            return json.dumps({"error": True, "tool": fn.__name__, "message": str(exc)})

    return wrapper


# ---------------------------------------------------------------------------
# Server singleton
# ---------------------------------------------------------------------------

mcp = FastMCP(
    "Praxis",
    instructions="Action knowledge base: look up actions by type, effect, or signature",
)

_database: Optional[ActionDatabase] = None


def init_database(
    config_path: Optional[str] = None,
    catalog_path: Optional[str] = None,
) -> ActionDatabase:
    """Initialize the global ActionDatabase instance."""
    global _database

    config = Config.from_yaml(config_path) if config_path else Config()
    if catalog_path:
        config = dataclasses.replace(config, catalog_path=catalog_path)

    _database = open_database(config)
    return _database


def _get_database() -> ActionDatabase:
    """Get the global ActionDatabase, initializing with defaults if needed."""
    global _database
    if _database is None:
        _database = init_database()
    return _database


# ===========================================================================
# Lookup Tools
# ===========================================================================


@mcp.tool()
@_safe_json
def praxis_lookup_type(
    type_name: str,
    role_types: Optional[List[str]] = None,
    actor: str = "",
    input_role_types: Optional[List[str]] = None,
) -> str:
    """Return the newest action registered under a type name.

    Args:
        type_name: Action name, e.g. "pickUp".
        role_types: Exact non-local role types to require (optional).
        actor: Actor that must be able to perform the action, e.g. "robot1:agent".
        input_role_types: Exact input role types after the actor role (used with actor).
    """
    db = _get_database()
    _validate_length(type_name, "type_name")
    entry = db.get_action(
        type_name,
        role_types,
        actor=parse_term(actor) if actor else None,
        input_role_types=input_role_types,
    )
    return json.dumps({"type": type_name, "action": _entry_or_none(entry)}, indent=2)


@mcp.tool()
@_safe_json
def praxis_lookup_effect(goal: str, actor: str = "") -> str:
    """List actions whose postconditions achieve a goal state, newest first.

    Args:
        goal: Desired state, e.g. "holding(robot1, cup1)".
        actor: Restrict to actions this actor can perform (optional).
    """
    db = _get_database()
    effect = _predicate(goal, "goal")
    entries = db.get_actions_by_effect(parse_term(actor) if actor else None, effect)
    return json.dumps(
        {"goal": str(effect), "actions": [e.to_dict() for e in entries]},
        indent=2,
    )


@mcp.tool()
@_safe_json
def praxis_lookup_signature(signature: str) -> str:
    """List actions callable with a signature, e.g. "pickUp(robot1, cup1:physobj)".

    Args:
        signature: Action call with the actor as first argument.
    """
    db = _get_database()
    sig = _predicate(signature, "signature")
    entries = db.get_actions_by_signature(sig)
    return json.dumps(
        {"signature": str(sig), "actions": [e.to_dict() for e in entries]},
        indent=2,
    )


@mcp.tool()
@_safe_json
def praxis_action_exists(goal: str) -> str:
    """Check whether any action achieves a goal or matches a signature.

    Args:
        goal: "goal(actor, state)", a bare state, or an action signature.
    """
    db = _get_database()
    pred = _predicate(goal, "goal")
    return json.dumps({"goal": str(pred), "exists": db.action_exists(pred)})


@mcp.tool()
@_safe_json
def praxis_signatures_for_name(name: str) -> str:
    """List the canonical signature of every action registered under a name."""
    db = _get_database()
    _validate_length(name, "name")
    signatures = db.get_action_signatures_for_name(name)
    return json.dumps({"name": name, "signatures": [str(s) for s in signatures]}, indent=2)


@mcp.tool()
@_safe_json
def praxis_list_actions(kind: str = "all") -> str:
    """Snapshot of the active actions.

    Args:
        kind: "all", "primitives", or "scripts".
    """
    if kind not in LIST_KINDS:
        raise ValueError(f"kind must be one of {', '.join(LIST_KINDS)}, got {kind!r}")
    db = _get_database()
    if kind == "primitives":
        entries = db.get_primitives()
    elif kind == "scripts":
        entries = db.get_scripts()
    else:
        entries = db.get_all_actions()
    return json.dumps(
        {"kind": kind, "count": len(entries), "actions": entries_to_dicts(entries)},
        indent=2,
    )


@mcp.tool()
@_safe_json
def praxis_stats() -> str:
    """Sizes of the action indices."""
    return json.dumps(_get_database().stats(), indent=2)


# ===========================================================================
# Maintenance Tools
# ===========================================================================


@mcp.tool()
@_safe_json
def praxis_disable_action(signature: str) -> str:
    """Disable every action matching a signature so goals stop selecting it.

    Disabled actions stay inspectable via praxis_disabled_action and can
    be brought back with praxis_enable_action.
    """
    db = _get_database()
    sig = _predicate(signature, "signature")
    disabled = [e for e in db.get_actions_by_signature(sig) if db.disable_action(e)]
    return json.dumps(
        {"signature": str(sig), "disabled": [e.to_dict() for e in disabled]},
        indent=2,
    )


@mcp.tool()
@_safe_json
def praxis_disabled_action(type_name: str) -> str:
    """Return the most recently disabled action for a type name."""
    db = _get_database()
    _validate_length(type_name, "type_name")
    entry = db.get_disabled_action(type_name)
    return json.dumps({"type": type_name, "action": _entry_or_none(entry)}, indent=2)


@mcp.tool()
@_safe_json
def praxis_enable_action(type_name: str) -> str:
    """Re-insert the most recently disabled action for a type name."""
    db = _get_database()
    _validate_length(type_name, "type_name")
    entry = db.get_disabled_action(type_name)
    if entry is not None:
        db.put_action(entry)
    return json.dumps(
        {"type": type_name, "enabled": entry is not None, "action": _entry_or_none(entry)},
        indent=2,
    )


@mcp.tool()
@_safe_json
def praxis_remove_signature(signature: str) -> str:
    """Permanently remove every active action matching a signature."""
    db = _get_database()
    sig = _predicate(signature, "signature")
    removed = db.remove_actions_with_signature(sig)
    return json.dumps(
        {"signature": str(sig), "removed": [e.to_dict() for e in removed]},
        indent=2,
    )


# ===========================================================================
# Entry point
# ===========================================================================


def _shutdown() -> None:
    global _database
    if _database is not None:
        log.info("Shutting down Praxis (%d action(s) loaded)", len(_database))
        _database = None


def run_server(
    config_path: Optional[str] = None,
    catalog_path: Optional[str] = None,
    transport: str = "stdio",
    host: Optional[str] = None,
    port: Optional[int] = None,
) -> None:
    """Initialize and run the MCP server.

    Args:
        config_path: Path to a praxis YAML config file.
        catalog_path: Action catalog overriding the config's catalog_path.
        transport: MCP transport: "stdio", "streamable-http", or "sse".
        host: Bind address for HTTP transports (default from config).
        port: Port for HTTP transports (default from config).
    """
    config = Config.from_yaml(config_path) if config_path else Config()
    init_database(config_path=config_path, catalog_path=catalog_path)
    atexit.register(_shutdown)
    log.info("Starting Praxis MCP server (transport=%s)", transport)
    if transport in ("streamable-http", "sse"):
        mcp.settings.host = host or config.host
        mcp.settings.port = port or config.port
        log.info("HTTP endpoint: http://%s:%d", mcp.settings.host, mcp.settings.port)
    try:
        mcp.run(transport=transport)  # type: ignore[arg-type]
    finally:
        _shutdown()
