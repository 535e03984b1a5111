"""SQLite database engine and schema via SQLAlchemy Core."""

from taxctl.infrastructure.database.engine import create_db_engine, init_database
from taxctl.infrastructure.database.schema import documents, domains, metadata, workspace_meta

__all__ = [
    "create_db_engine",
    "documents",
    "domains",
    "init_database",
    "metadata",
    "workspace_meta",
]
