"""Validate command - check a single address."""

import cyclopts

from unmessy.cli.client import request_json
from unmessy.cli.console import get_console

app = cyclopts.App(name="validate", help="Validate one email address")


@app.default
def validate(address: str, /, *, skip_oracle: bool = False, json: bool = False) -> None:
    """Normalize and verify ADDRESS.

    Args:
        address: Email address to check.
        skip_oracle: Do not call the external verification service.
        json: Print the raw result record.
    """
    console = get_console()
    with console.status("Validating..."):
        result = request_json(
            "POST",
            "/api/v1/validate/email",
            json={"address": address, "skip_oracle": skip_oracle},
        )

    if json:
        console.print_json(result)
    else:
        console.validation_result(result)
