"""Development server command that does not require the database at startup.

The notification tables are created and migrated by the main workforce
application, so this service ships no migrations and can start (in degraded
mode) before the database is reachable.
"""

from django.core.management.commands.runserver import Command as RunServer


class Command(RunServer):
    """``runserver`` without the unapplied-migrations check."""

    help = "Start the development server without checking migrations"

    def check_migrations(self, *_args, **_kwargs):
        """Report that migrations are owned by the main application."""
        self.stdout.write(
            self.style.WARNING(
                "Skipping migration checks (schema is owned by the workforce app)"
            )
        )
