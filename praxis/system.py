"""
praxis.system — Build a ready-to-use ActionDatabase from a Config.

    from praxis import Config, open_database

    db = open_database(Config(catalog_path="actions.yaml"))
    db.get_actions_by_effect(None, parse_predicate("holding(robot1, cup1)"))
"""

from __future__ import annotations

import logging
from typing import Optional

from praxis.actions.catalog import Catalog, load_catalog, populate
from praxis.actions.database import ActionDatabase
from praxis.core.config import Config
from praxis.core.logging import configure_logging

log = logging.getLogger("praxis.system")


def open_database(config: Optional[Config] = None) -> ActionDatabase:
    """Create the database, its matcher, and load the configured catalog."""
    config = config or Config()
    configure_logging(structured=config.structured_logging, level=config.log_level)

    catalog = load_catalog(config.catalog_path) if config.catalog_path else Catalog()
    db = ActionDatabase(matcher=config.build_matcher(catalog.type_hierarchy))
    count = populate(db, catalog)
    log.info("Action database ready with %d action(s)", count)
    return db
