"""Main CLI application using Cyclopts.

Apart from ``serve`` and ``migrate``, the CLI is a thin HTTP client that
talks to a running server through its REST API.
"""

import cyclopts

from unmessy.cli.commands import batch, health, migrate, serve, validate

app = cyclopts.App(
    name="unmessy",
    help="Unmessy - email normalization and verification",
)

app.command(validate.app, name="validate")
app.command(batch.app, name="batch")
app.command(health.app, name="health")
app.command(migrate.app, name="migrate")
app.command(serve.app, name="serve")
