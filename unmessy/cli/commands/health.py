"""Health command - show server status."""

import cyclopts

from unmessy.cli.client import request_json
from unmessy.cli.console import get_console

app = cyclopts.App(name="health", help="Show server health")


@app.default
def health() -> None:
    """Show server health, oracle and cache configuration."""
    console = get_console()
    data = request_json("GET", "/api/v1/health")

    if data.get("status") == "healthy":
        console.success(f"Server healthy (v{data.get('version')})")
    else:
        console.warning(f"Server {data.get('status')}: database {data.get('database')}")

    console.print(f"  [dim]Oracle:[/dim] {'enabled' if data.get('oracle_enabled') else 'disabled'}")
    console.print(f"  [dim]Cache:[/dim] {data.get('cache_backend')}")
    if data.get("records") is not None:
        console.print(f"  [dim]Records:[/dim] {data['records']:,}")
