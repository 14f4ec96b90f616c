"""
praxis.core.config — Configuration for the action knowledge base.

Supports loading from YAML, environment variables, and programmatic
construction.
"""

from __future__ import annotations

import os
from dataclasses import asdict, dataclass, field
from pathlib import Path
from typing import Any, Dict, Optional

import yaml

from praxis.fol.matcher import StructuralMatcher


def _env_path(name: str) -> Optional[Path]:
    value = os.environ.get(name)
    return Path(value) if value else None


@dataclass
class Config:
    """
    Central configuration object.

    Construct directly or via ``Config.from_yaml(path)``.
    """

    # -- action catalog -----------------------------------------------------
    catalog_path: Optional[Path] = field(default_factory=lambda: _env_path("PRAXIS_CATALOG"))

    # -- typing -------------------------------------------------------------
    # child type -> parent type, merged with any ``types:`` block in the catalog
    type_hierarchy: Dict[str, str] = field(default_factory=dict)

    # -- logging ------------------------------------------------------------
    structured_logging: bool = False  # emit JSON log lines when True
    log_level: str = "INFO"

    # -- MCP server ---------------------------------------------------------
    server_name: str = "Praxis"
    host: str = "127.0.0.1"
    port: int = 8765

    def __post_init__(self) -> None:
        if self.catalog_path is not None:
            self.catalog_path = Path(self.catalog_path).resolve()

    @classmethod
    def from_yaml(cls, path: str | Path) -> "Config":
        """Load configuration from a YAML file.

        Keys may sit at the top level or under a ``praxis:`` section.
        Unknown keys are ignored so the file can be shared with other
        agent components.
        """
        path = Path(path)
        if not path.exists():
            raise FileNotFoundError(f"Config file not found: {path}")

        with open(path, "r", encoding="utf-8") as fh:
            raw: Dict[str, Any] = yaml.safe_load(fh) or {}

        data = raw.get("praxis", raw)

        # relative catalog paths are resolved against the config file
        if data.get("catalog_path"):
            catalog = Path(data["catalog_path"])
            if not catalog.is_absolute():
                catalog = path.parent / catalog
            data["catalog_path"] = catalog

        known = {f.name for f in cls.__dataclass_fields__.values()}
        filtered = {k: v for k, v in data.items() if k in known}
        return cls(**filtered)

    def build_matcher(self, extra_types: Optional[Dict[str, str]] = None) -> StructuralMatcher:
        """Reference matcher over the configured (plus *extra_types*) hierarchy."""
        hierarchy = dict(extra_types or {})
        hierarchy.update(self.type_hierarchy)
        return StructuralMatcher(hierarchy)

    def to_dict(self) -> Dict[str, Any]:
        d = asdict(self)
        d["catalog_path"] = str(self.catalog_path) if self.catalog_path else None
        return d
