"""
Database schema management.

Schema evolution is a versioned Alembic migration chain. The first
migrations also adopt databases created before migrations existed, so
fresh and legacy databases both reach head through ``alembic upgrade``.
"""

from pathlib import Path
from typing import Any, Dict, Optional

import psycopg
from alembic import command
from alembic.config import Config
from alembic.script import ScriptDirectory
from alembic.util import CommandError

from ..config import settings
from ..enums import LogEmoji, LoggerName, LogSource
from ..services.logger import get_service_logger

logger = get_service_logger(LoggerName.DATABASE, LogSource.DATABASE)


class DatabaseSchemaError(Exception):
    """Base exception for database schema operations."""

    pass


class AlembicError(DatabaseSchemaError):
    """Raised when Alembic operations fail."""

    pass


class SchemaManager:
    """Manages database migration detection and execution."""

    def __init__(self, database_url: Optional[str] = None):
        """
        Initialize SchemaManager.

        Args:
            database_url: Database connection URL. Uses settings.database_url if None.
        """
        self.database_url = database_url or settings.database_url
        self._backend_root = Path(__file__).parent.parent.parent

    def _alembic_config(self) -> Config:
        """Build an Alembic config bound to this manager's database."""
        config = Config(str(self._backend_root / "alembic.ini"))
        config.set_main_option(
            "script_location", str(self._backend_root / "alembic")
        )
        # ConfigParser interpolation treats % specially
        config.set_main_option("sqlalchemy.url", self.database_url.replace("%", "%%"))
        config.attributes["configure_logger"] = False
        return config

    def _table_exists(self, cur: psycopg.Cursor, table_name: str) -> bool:
        cur.execute(
            """
            SELECT EXISTS (
                SELECT FROM information_schema.tables
                WHERE table_schema = 'public'
                AND table_name = %(table_name)s
            )
            """,
            {"table_name": table_name},
        )
        result = cur.fetchone()
        if result is None:
            raise DatabaseSchemaError(f"Failed to check for {table_name} table")
        return bool(result[0])

    def has_legacy_schema(self) -> bool:
        """True if a locations table exists that Alembic has never managed."""
        try:
            with psycopg.connect(self.database_url) as conn:
                with conn.cursor() as cur:
                    return self._table_exists(
                        cur, "locations"
                    ) and not self._table_exists(cur, "alembic_version")
        except psycopg.Error as e:
            raise DatabaseSchemaError(f"Database connection failed: {e}") from e

    def get_database_revision(self) -> Optional[str]:
        """
        Get the revision the database is stamped with.

        Returns:
            Revision string, or None if the database has no Alembic state
        """
        try:
            with psycopg.connect(self.database_url) as conn:
                with conn.cursor() as cur:
                    if not self._table_exists(cur, "alembic_version"):
                        return None
                    cur.execute("SELECT version_num FROM alembic_version")
                    result = cur.fetchone()
                    return result[0] if result else None
        except psycopg.Error as e:
            raise DatabaseSchemaError(f"Database connection failed: {e}") from e

    def get_head_revision(self) -> str:
        """
        Get the HEAD revision of the migration chain.

        Raises:
            AlembicError: If the migration scripts cannot be read
        """
        try:
            script = ScriptDirectory.from_config(self._alembic_config())
            head = script.get_current_head()
        except CommandError as e:
            raise AlembicError(f"Could not resolve migration head: {e}") from e

        if head is None:
            raise AlembicError("Migration chain has no head revision")
        return head

    def run_migrations(self, revision: str = "head") -> None:
        """
        Upgrade the database to ``revision``.

        Raises:
            AlembicError: If migration fails
        """
        try:
            logger.info(
                f"Running Alembic migrations to {revision}", emoji=LogEmoji.DATABASE
            )
            command.upgrade(self._alembic_config(), revision)
            logger.info("Migrations completed successfully", emoji=LogEmoji.SUCCESS)
        except Exception as e:
            raise AlembicError(f"Migration failed: {e}") from e

    def get_database_info(self) -> Dict[str, Any]:
        """
        Get database state information for diagnostics.

        Returns:
            Dictionary with database state info
        """
        try:
            current_revision = self.get_database_revision()
            head_revision = self.get_head_revision()
            return {
                "is_fresh": current_revision is None,
                "current_revision": current_revision,
                "head_revision": head_revision,
                "up_to_date": current_revision == head_revision,
            }
        except DatabaseSchemaError as e:
            return {"error": str(e), "is_fresh": None}
