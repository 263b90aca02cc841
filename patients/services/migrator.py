"""
Schema migrator.

Brings the database to the latest migration before the API serves any
request, and checks that the patient table it ends up with actually has
the expected layout.  Several processes may start at once; when ``migrate``
fails because a sibling already applied the same migrations, the run is
treated as a success once the schema verifies.
"""
from __future__ import annotations

import logging

from django.core.management import call_command
from django.db import DEFAULT_DB_ALIAS, DatabaseError, connections
from django.db.migrations.executor import MigrationExecutor

from patients.exceptions import MigrationError
from patients.models import Patient
from patients.schema import APP_LABEL, COLUMNS, UNIQUE_FIELDS

logger = logging.getLogger(__name__)


class SchemaMigrator:
    def __init__(self, using: str = DEFAULT_DB_ALIAS):
        self.using = using

    @property
    def connection(self):
        return connections[self.using]

    def describe_target(self) -> str:
        settings_dict = self.connection.settings_dict
        return f"{settings_dict.get('ENGINE')} ({settings_dict.get('NAME')})"

    def pending_migrations(self) -> list[str]:
        """Names of migrations not yet applied, in the order they would run."""
        executor = MigrationExecutor(self.connection)
        plan = executor.migration_plan(executor.loader.graph.leaf_nodes())
        return [f"{migration.app_label}.{migration.name}" for migration, _backwards in plan]

    def is_current(self) -> bool:
        if self.pending_migrations():
            return False
        try:
            self.verify_schema()
        except MigrationError:
            return False
        return True

    def verify_schema(self) -> None:
        """Raise :class:`MigrationError` unless the patient table matches the model."""
        table = Patient._meta.db_table
        introspection = self.connection.introspection
        with self.connection.cursor() as cursor:
            if table not in introspection.table_names(cursor):
                raise MigrationError(f"table {table!r} does not exist")
            columns = {col.name for col in introspection.get_table_description(cursor, table)}
            constraints = introspection.get_constraints(cursor, table)

        expected = set(COLUMNS)
        if columns != expected:
            raise MigrationError(
                f"table {table!r} has columns {sorted(columns)}, expected {sorted(expected)}"
            )
        if not any(
            info.get('unique') and list(info.get('columns') or []) == list(UNIQUE_FIELDS)
            for info in constraints.values()
        ):
            raise MigrationError(f"table {table!r} lacks the unique index on {UNIQUE_FIELDS}")

    def apply(self) -> list[str]:
        """Apply pending migrations and verify the result.

        Returns the migrations that were pending before the run; an empty
        list means the schema was already current.
        """
        pending = self.pending_migrations()
        if not pending:
            self.verify_schema()
            logger.info("Schema on %s is current; nothing to migrate", self.describe_target())
            return []

        logger.info("Applying %d migration(s) on %s: %s", len(pending), self.describe_target(), ", ".join(pending))
        try:
            call_command("migrate", database=self.using, interactive=False, verbosity=0)
        except DatabaseError as exc:
            still_pending = self.pending_migrations()
            if still_pending:
                logger.error("Migration failed on %s: %s", self.describe_target(), exc)
                raise MigrationError(f"could not apply {', '.join(still_pending)}: {exc}") from exc
            logger.info("Migrations were applied concurrently by another process")

        self.verify_schema()
        logger.info("Schema on %s migrated", self.describe_target())
        return pending

    def reset(self) -> None:
        """Unapply every patient migration, dropping the table and its seed rows."""
        logger.warning("Resetting %s schema on %s", APP_LABEL, self.describe_target())
        try:
            call_command("migrate", APP_LABEL, "zero", database=self.using, interactive=False, verbosity=0)
        except DatabaseError as exc:
            raise MigrationError(f"could not reset {APP_LABEL}: {exc}") from exc


def migrate_on_startup(using: str = DEFAULT_DB_ALIAS) -> None:
    """Run the migrator for a starting process; exit the process if it fails."""
    try:
        SchemaMigrator(using).apply()
    except MigrationError as exc:
        logger.critical("Refusing to start with an unmigrated schema: %s", exc.message)
        raise SystemExit(1) from exc
