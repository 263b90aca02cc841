from django.core.management.base import BaseCommand, CommandError

from patients.exceptions import MigrationError
from patients.services.migrator import SchemaMigrator


class Command(BaseCommand):
    help = "Bring the database schema to the current version (idempotent)."

    def add_arguments(self, parser):
        parser.add_argument('--database', default='default', help='Database alias to migrate.')
        group = parser.add_mutually_exclusive_group()
        group.add_argument('--check', action='store_true', help='Only report whether the schema is current.')
        group.add_argument('--reset', action='store_true', help='Drop the patient table and its seed rows.')

    def handle(self, *args, **opts):
        migrator = SchemaMigrator(using=opts['database'])

        if opts['check']:
            pending = migrator.pending_migrations()
            if pending:
                raise CommandError(f"pending migrations: {', '.join(pending)}")
            try:
                migrator.verify_schema()
            except MigrationError as exc:
                raise CommandError(exc.message) from exc
            self.stdout.write(self.style.SUCCESS("Schema is current."))
            return

        try:
            if opts['reset']:
                migrator.reset()
                self.stdout.write(self.style.WARNING("Patient table dropped."))
                return
            applied = migrator.apply()
        except MigrationError as exc:
            raise CommandError(exc.message) from exc

        if applied:
            for name in applied:
                self.stdout.write(f"applied: {name}")
            self.stdout.write(self.style.SUCCESS(f"Applied {len(applied)} migration(s)."))
        else:
            self.stdout.write(self.style.SUCCESS("Schema is current; nothing to do."))
