"""
Database initialization orchestrator for the travel map backend.

Brings fresh, legacy and already-migrated databases to the current
schema through the Alembic migration chain.
"""

from typing import Any, Dict, Optional

from .schema_manager import AlembicError, DatabaseSchemaError, SchemaManager


class DatabaseInitializationError(Exception):
    """Raised when database initialization fails."""

    pass


def initialize_database(database_url: Optional[str] = None) -> Dict[str, Any]:
    """
    Initialize the database schema.

    Args:
        database_url: Database connection URL. Uses settings if None.

    Returns:
        Dictionary with initialization results

    Raises:
        DatabaseInitializationError: If initialization fails
    """
    try:
        schema_manager = SchemaManager(database_url)
        previous_revision = schema_manager.get_database_revision()

        if previous_revision is None:
            method = (
                "legacy_adoption"
                if schema_manager.has_legacy_schema()
                else "fresh_schema"
            )
        else:
            method = "migrations"

        schema_manager.run_migrations()
        current_revision = schema_manager.get_database_revision()

        return {
            "method": method,
            "success": True,
            "previous_revision": previous_revision,
            "current_revision": current_revision,
            "message": (
                "Database already up to date"
                if previous_revision == current_revision
                else "Database upgraded successfully"
            ),
        }

    except AlembicError as e:
        raise DatabaseInitializationError(f"Database upgrade failed: {e}") from e
    except DatabaseSchemaError as e:
        raise DatabaseInitializationError(f"Database initialization failed: {e}") from e


def get_database_status(database_url: Optional[str] = None) -> Dict[str, Any]:
    """
    Get database status for health checks.

    Args:
        database_url: Database connection URL. Uses settings if None.

    Returns:
        Dictionary with database status
    """
    return SchemaManager(database_url).get_database_info()

