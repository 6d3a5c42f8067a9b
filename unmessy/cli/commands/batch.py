"""Batch command - check addresses from a file."""

import sys
from pathlib import Path

import cyclopts

from unmessy.cli.client import request_json
from unmessy.cli.console import get_console

app = cyclopts.App(name="batch", help="Validate a file of email addresses")

COLUMNS = [
    ("original_address", "Input"),
    ("current_address", "Address"),
    ("status", "Status"),
    ("sub_status", "Reason"),
    ("recheck_needed", "Recheck"),
]


def read_addresses(path: Path) -> list[str]:
    """One address per line; blank lines and ``#`` comments are skipped."""
    lines = (line.strip() for line in path.read_text().splitlines())
    return [line for line in lines if line and not line.startswith("#")]


@app.default
def batch(file: Path, /, *, skip_oracle: bool = False) -> None:
    """Validate every address in FILE, one per line.

    Args:
        file: Text file with one address per line.
        skip_oracle: Do not call the external verification service.
    """
    console = get_console()
    if not file.exists():
        console.error(f"File not found: {file}")
        sys.exit(1)

    addresses = read_addresses(file)
    if not addresses:
        console.warning(f"No addresses in {file}")
        return

    with console.status(f"Validating {len(addresses)} addresses..."):
        results = request_json(
            "POST",
            "/api/v1/validate/batch",
            json={"addresses": addresses, "skip_oracle": skip_oracle},
        )

    console.table(results, COLUMNS, numbered=True)
    valid = sum(1 for r in results if r.get("status") == "valid")
    console.success(f"{valid} of {len(addresses)} valid")
