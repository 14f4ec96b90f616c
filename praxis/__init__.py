"""
Praxis -- Action knowledge base for goal-directed agents.

    from praxis import ActionDatabase, parse_predicate

    db = ActionDatabase()
    db.put_action(entry)
    db.get_actions_by_effect(None, parse_predicate("holding(robot1, cup1)"))
"""

from praxis.actions import (
    ActionDatabase,
    Effect,
    Entry,
    InconsistentStateError,
    Role,
    RoleKind,
    load_catalog,
)
from praxis.core.config import Config
from praxis.fol import (
    Matcher,
    Predicate,
    StructuralMatcher,
    Symbol,
    Variable,
    parse_predicate,
    parse_term,
)
from praxis.system import open_database

__version__ = "0.1.0"

__all__ = [
    "ActionDatabase",
    "Config",
    "Effect",
    "Entry",
    "InconsistentStateError",
    "Matcher",
    "Predicate",
    "Role",
    "RoleKind",
    "StructuralMatcher",
    "Symbol",
    "Variable",
    "load_catalog",
    "open_database",
    "parse_predicate",
    "parse_term",
]
