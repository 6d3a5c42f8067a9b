"""Migrate command - upgrade the database schema."""

import cyclopts

from unmessy.cli.console import get_console
from unmessy.config import Config, configure_logging
from unmessy.infrastructure.persistence.migrate import run_migrations

app = cyclopts.App(name="migrate", help="Apply database migrations")


@app.default
def migrate() -> None:
    """Upgrade the configured database to the latest schema."""
    console = get_console()
    config = Config()
    configure_logging(config.logging)

    with console.status("Running migrations..."):
        run_migrations(config.database.url)
    console.success("Database is up to date")
