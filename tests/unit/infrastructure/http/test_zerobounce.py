"""Unit tests for the ZeroBounce oracle adapter."""

import httpx
import pytest

from unmessy.domain.validation.error import (
    OracleResponseError,
    OracleTimeout,
    OracleTransportError,
)
from unmessy.domain.validation.model import SubStatus, ValidationStatus
from unmessy.infrastructure.http.zerobounce import (
    ZeroBounceOracle,
    map_zerobounce_response,
)


def _oracle(handler) -> ZeroBounceOracle:
    client = httpx.AsyncClient(transport=httpx.MockTransport(handler))
    return ZeroBounceOracle(client, api_key="secret", base_url="https://zb.test/v2/validate")


class TestMapZeroBounceResponse:
    @pytest.mark.parametrize(
        "payload,status,sub_status",
        [
            ({"status": "valid"}, ValidationStatus.VALID, None),
            (
                {"status": "invalid", "sub_status": "mailbox_not_found"},
                ValidationStatus.INVALID,
                "mailbox_not_found",
            ),
            ({"status": "catch-all"}, ValidationStatus.UNKNOWN, None),
            ({"status": "unknown", "sub_status": "timeout_exceeded"}, ValidationStatus.UNKNOWN, "timeout_exceeded"),
            ({"status": "spamtrap"}, ValidationStatus.INVALID, SubStatus.SPAMTRAP),
            ({"status": "abuse"}, ValidationStatus.INVALID, SubStatus.ABUSE),
            ({"status": "do_not_mail"}, ValidationStatus.INVALID, SubStatus.DO_NOT_MAIL),
            (
                {"status": "do_not_mail", "sub_status": "role_based"},
                ValidationStatus.INVALID,
                "role_based",
            ),
            ({"status": "something_new"}, ValidationStatus.CHECK_FAILED, None),
        ],
    )
    def test_status_mapping(self, payload, status, sub_status):
        verdict = map_zerobounce_response("bob@company.io", payload)

        assert verdict.status == status
        assert verdict.sub_status == sub_status
        assert verdict.raw == payload

    def test_status_is_case_insensitive(self):
        assert map_zerobounce_response("a@b.io", {"status": "Valid"}).status == ValidationStatus.VALID

    def test_suggestion_is_normalized(self):
        verdict = map_zerobounce_response(
            "bob@gmial.com", {"status": "invalid", "did_you_mean": " Bob@Gmail.com "}
        )
        assert verdict.suggested_address == "bob@gmail.com"

    def test_suggestion_equal_to_address_is_dropped(self):
        verdict = map_zerobounce_response(
            "bob@gmail.com", {"status": "valid", "did_you_mean": "BOB@gmail.com"}
        )
        assert verdict.suggested_address is None


class TestZeroBounceOracle:
    @pytest.mark.asyncio
    async def test_sends_credentials_and_address(self):
        seen: list[httpx.Request] = []

        def handler(request: httpx.Request) -> httpx.Response:
            seen.append(request)
            return httpx.Response(200, json={"status": "valid", "address": "bob@company.io"})

        verdict = await _oracle(handler).verify("bob@company.io", timeout=1.0)

        assert verdict.status == ValidationStatus.VALID
        [request] = seen
        assert request.url.host == "zb.test"
        assert request.url.params["api_key"] == "secret"
        assert request.url.params["email"] == "bob@company.io"
        assert request.url.params["ip_address"] == ""

    @pytest.mark.asyncio
    async def test_timeout(self):
        def handler(request: httpx.Request) -> httpx.Response:
            raise httpx.ReadTimeout("slow", request=request)

        with pytest.raises(OracleTimeout):
            await _oracle(handler).verify("bob@company.io", timeout=0.5)

    @pytest.mark.asyncio
    async def test_connection_error_is_transient(self):
        def handler(request: httpx.Request) -> httpx.Response:
            raise httpx.ConnectError("refused", request=request)

        with pytest.raises(OracleTransportError) as exc_info:
            await _oracle(handler).verify("bob@company.io", timeout=0.5)

        assert exc_info.value.transient is True

    @pytest.mark.asyncio
    @pytest.mark.parametrize("status_code", [429, 500, 503])
    async def test_server_errors_are_transient(self, status_code):
        oracle = _oracle(lambda request: httpx.Response(status_code))

        with pytest.raises(OracleTransportError):
            await oracle.verify("bob@company.io", timeout=0.5)

    @pytest.mark.asyncio
    @pytest.mark.parametrize("status_code", [400, 401, 404])
    async def test_client_errors_are_permanent(self, status_code):
        oracle = _oracle(lambda request: httpx.Response(status_code))

        with pytest.raises(OracleResponseError) as exc_info:
            await oracle.verify("bob@company.io", timeout=0.5)

        assert exc_info.value.transient is False

    @pytest.mark.asyncio
    async def test_non_json_body(self):
        oracle = _oracle(lambda request: httpx.Response(200, text="<html>oops</html>"))

        with pytest.raises(OracleResponseError, match="non-JSON"):
            await oracle.verify("bob@company.io", timeout=0.5)

    @pytest.mark.asyncio
    async def test_non_object_body(self):
        oracle = _oracle(lambda request: httpx.Response(200, json=["valid"]))

        with pytest.raises(OracleResponseError, match="unexpected payload"):
            await oracle.verify("bob@company.io", timeout=0.5)

    @pytest.mark.asyncio
    async def test_error_payload(self):
        oracle = _oracle(lambda request: httpx.Response(200, json={"error": "Invalid API key"}))

        with pytest.raises(OracleResponseError, match="Invalid API key"):
            await oracle.verify("bob@company.io", timeout=0.5)
