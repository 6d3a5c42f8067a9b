"""DI provider for HTTP infrastructure."""

from typing import AsyncIterable, NewType

import httpx
from dishka import provide

from unmessy.config import Config
from unmessy.domain.validation.port import VerificationOracle
from unmessy.infrastructure.http.zerobounce import ZeroBounceOracle
from unmessy.util.di.base import Provider
from unmessy.util.di.scope import Scope

# Dedicated client for the verification oracle
OracleHttpClient = NewType("OracleHttpClient", httpx.AsyncClient)

# Per-attempt read budgets are passed on each call; these bound the rest
_ORACLE_TIMEOUT = httpx.Timeout(
    connect=2.0,
    read=3.0,
    write=2.0,
    pool=1.0,
)


class HttpProvider(Provider):
    """DI provider for HTTP adapters."""

    @provide(scope=Scope.APP)
    async def get_oracle_http_client(self) -> AsyncIterable[OracleHttpClient]:
        async with httpx.AsyncClient(timeout=_ORACLE_TIMEOUT) as client:
            yield OracleHttpClient(client)

    @provide(scope=Scope.APP, provides=VerificationOracle)
    def get_oracle(self, client: OracleHttpClient, config: Config) -> ZeroBounceOracle:
        return ZeroBounceOracle(
            client=client,
            api_key=config.oracle.api_key,
            base_url=config.oracle.base_url,
        )
