"""Port for the external address-verification oracle."""

from abc import abstractmethod
from typing import Protocol

from unmessy.domain.shared.port import Port
from unmessy.domain.validation.model import OracleVerdict


class VerificationOracle(Port, Protocol):
    """Performs one verification call.

    Raises OracleTimeout / OracleTransportError for transient failures and
    OracleResponseError for anything not worth retrying.
    """

    @abstractmethod
    async def verify(self, address: str, *, timeout: float) -> OracleVerdict: ...
