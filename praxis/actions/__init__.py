"""praxis.actions — Action entries, their indices, and the action database."""

from praxis.actions.catalog import Catalog, load_catalog, parse_catalog, parse_entry, populate
from praxis.actions.database import ActionDatabase
from praxis.actions.entry import Effect, Entry, Role, RoleKind
from praxis.actions.index import InconsistentStateError, IndexSet

__all__ = [
    "ActionDatabase",
    "Catalog",
    "Effect",
    "Entry",
    "InconsistentStateError",
    "IndexSet",
    "Role",
    "RoleKind",
    "load_catalog",
    "parse_catalog",
    "parse_entry",
    "populate",
]
