"""SQLAlchemy Core table definitions for the taxctl database.

Root domains are stored as children of the root key, so one table
holds the whole tree.  ``position`` preserves insertion order.
"""

from __future__ import annotations

from sqlalchemy import Column, Integer, MetaData, Table, Text, UniqueConstraint

metadata = MetaData()

domains = Table(
    "domains",
    metadata,
    Column("parent_key", Text, nullable=False),  # encoded parent path, "" for roots
    Column("position", Integer, nullable=False),
    Column("name", Text, nullable=False),
    UniqueConstraint("parent_key", "name"),
)

documents = Table(
    "documents",
    metadata,
    Column("path_key", Text, nullable=False),
    Column("position", Integer, nullable=False),
    Column("name", Text, nullable=False),
    Column("content", Text, nullable=False, default="", server_default=""),
    UniqueConstraint("path_key", "name"),
)

workspace_meta = Table(
    "workspace_meta",
    metadata,
    Column("key", Text, primary_key=True),
    Column("value", Text, nullable=False),  # JSON
)
