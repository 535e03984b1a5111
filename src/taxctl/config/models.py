"""Pydantic configuration models with code-baked defaults.

Sparse TOML contract: defaults baked here, taxctl.toml only contains
overrides.  An empty file (or none at all) is a valid workspace config.
"""

from __future__ import annotations

from pydantic import BaseModel, Field

from taxctl.domain.state import DEFAULT_MAX_DEPTH


class TaxonomyConfig(BaseModel):
    """[taxonomy] section."""

    model_config = {"frozen": True}

    # Seeds TreeConfig for a fresh workspace; saved state wins afterwards.
    default_max_depth: int = Field(default=DEFAULT_MAX_DEPTH, gt=0)


class StorageConfig(BaseModel):
    """[storage] section."""

    model_config = {"frozen": True}

    directory: str = ".taxctl"
    filename: str = "taxctl.db"
