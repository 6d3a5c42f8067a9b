"""Helpers shared by the HTTP-backed commands."""

import os
import sys
import time
from collections.abc import Callable
from typing import Any, TypeVar

import httpx

from unmessy.cli.console import get_console

# Transient client-side errors worth another try
RETRYABLE = (httpx.ReadError, httpx.ConnectError)

T = TypeVar("T")


def get_server_url() -> str:
    """Get server URL from the environment."""
    return os.environ.get("UNMESSY_SERVER", "http://localhost:8000").rstrip("/")


def with_retry(
    fn: Callable[[], T],
    retries: int = 3,
    exceptions: tuple[type[Exception], ...] = (Exception,),
) -> T:
    """Retry a function on transient errors with linear backoff.

    Total attempts are ``retries + 1``; the last exception is re-raised.
    """
    last_error: Exception | None = None
    for attempt in range(retries + 1):
        try:
            return fn()
        except exceptions as e:
            last_error = e
            if attempt < retries:
                time.sleep(0.2 * (attempt + 1))  # Backoff: 0.2, 0.4, 0.6s
    raise last_error  # type: ignore[misc]


def request_json(method: str, path: str, **kwargs: Any) -> Any:
    """Call the server and return its JSON body, exiting with a message on failure."""
    console = get_console()
    server_url = get_server_url()
    kwargs.setdefault("timeout", 30.0)

    try:
        response = with_retry(
            lambda: httpx.request(method, f"{server_url}{path}", **kwargs),
            exceptions=RETRYABLE,
        )
        response.raise_for_status()
        return response.json()
    except httpx.ConnectError:
        console.error(
            f"Could not connect to server at {server_url}",
            hint="Is the server running? Start it with: unmessy serve",
        )
        sys.exit(1)
    except httpx.HTTPStatusError as e:
        console.error(f"Server error: {e.response.status_code} - {_message(e.response)}")
        sys.exit(1)
    except httpx.ReadError:
        console.error("Connection lost while reading response")
        sys.exit(1)


def _message(response: httpx.Response) -> str:
    try:
        body = response.json()
    except ValueError:
        return response.text
    if isinstance(body, dict) and "message" in body:
        return str(body["message"])
    return response.text
