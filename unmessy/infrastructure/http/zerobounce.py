"""HTTP adapter for the VerificationOracle port, backed by ZeroBounce."""

import logging
from typing import Any

import httpx

from unmessy.domain.validation.error import (
    OracleResponseError,
    OracleTimeout,
    OracleTransportError,
)
from unmessy.domain.validation.model import OracleVerdict, SubStatus, ValidationStatus
from unmessy.domain.validation.port import VerificationOracle

logger = logging.getLogger(__name__)

ZEROBOUNCE_VALIDATE_URL = "https://api.zerobounce.net/v2/validate"


def map_zerobounce_response(address: str, data: dict[str, Any]) -> OracleVerdict:
    """Translate a ZeroBounce payload into our status taxonomy."""
    raw_status = str(data.get("status") or "").strip().lower()
    provider_sub = (str(data.get("sub_status") or "").strip().lower()) or None

    match raw_status:
        case "valid":
            status, sub_status = ValidationStatus.VALID, provider_sub
        case "invalid":
            status, sub_status = ValidationStatus.INVALID, provider_sub
        case "catch-all" | "unknown":
            status, sub_status = ValidationStatus.UNKNOWN, provider_sub
        case "spamtrap":
            status, sub_status = ValidationStatus.INVALID, SubStatus.SPAMTRAP
        case "abuse":
            status, sub_status = ValidationStatus.INVALID, SubStatus.ABUSE
        case "do_not_mail":
            status, sub_status = ValidationStatus.INVALID, provider_sub or SubStatus.DO_NOT_MAIL
        case _:
            logger.warning("Unrecognised ZeroBounce status %r", raw_status)
            status, sub_status = ValidationStatus.CHECK_FAILED, None

    suggestion = str(data.get("did_you_mean") or "").strip().lower() or None
    if suggestion == address:
        suggestion = None

    return OracleVerdict(
        status=status,
        sub_status=str(sub_status) if sub_status else None,
        suggested_address=suggestion,
        raw=data,
    )


class ZeroBounceOracle(VerificationOracle):
    """Calls ZeroBounce's single-address validate endpoint."""

    def __init__(
        self,
        client: httpx.AsyncClient,
        api_key: str,
        base_url: str = ZEROBOUNCE_VALIDATE_URL,
    ) -> None:
        self._client = client
        self._api_key = api_key
        self._base_url = base_url

    async def verify(self, address: str, *, timeout: float) -> OracleVerdict:
        params = {"api_key": self._api_key, "email": address, "ip_address": ""}
        try:
            response = await self._client.get(
                self._base_url, params=params, timeout=httpx.Timeout(timeout)
            )
        except httpx.TimeoutException as e:
            raise OracleTimeout(f"ZeroBounce timed out after {timeout:.2f}s") from e
        except httpx.TransportError as e:
            raise OracleTransportError(f"ZeroBounce unreachable: {e}") from e

        if response.status_code == 429 or response.status_code >= 500:
            raise OracleTransportError(f"ZeroBounce returned HTTP {response.status_code}")
        if response.status_code >= 400:
            raise OracleResponseError(f"ZeroBounce rejected the request: HTTP {response.status_code}")

        try:
            data = response.json()
        except ValueError as e:
            raise OracleResponseError("ZeroBounce returned a non-JSON body") from e
        if not isinstance(data, dict):
            raise OracleResponseError("ZeroBounce returned an unexpected payload")
        # Credential and quota problems come back as 200 with an "error" field
        if "error" in data and "status" not in data:
            raise OracleResponseError(f"ZeroBounce error: {data['error']}")

        return map_zerobounce_response(address, data)
