from dishka import AsyncContainer, Provider, from_context, make_async_container

from unmessy.config import Config
from unmessy.domain.validation.util.di import ValidationProvider
from unmessy.infrastructure.cache import CacheProvider
from unmessy.infrastructure.http import HttpProvider
from unmessy.infrastructure.persistence import PersistenceProvider
from unmessy.util.di.scope import Scope


class ConfigProvider(Provider):
    config = from_context(provides=Config, scope=Scope.APP)


def create_container(config: Config | None = None) -> AsyncContainer:
    # Pydantic Settings populates from env vars at runtime
    config = config or Config()  # type: ignore[call-arg]

    return make_async_container(
        ConfigProvider(),
        PersistenceProvider(),
        CacheProvider(),
        HttpProvider(),
        ValidationProvider(),
        context={Config: config},
        scopes=Scope,  # type: ignore[arg-type]  # Custom scope class
    )
