from dishka import AsyncContainer, Provider, make_async_container

from ficarchive.application.api.v1.di import WebProvider
from ficarchive.config import Config
from ficarchive.domain.admin.util.di.provider import AdminProvider
from ficarchive.domain.auth.util.di.provider import AuthProvider
from ficarchive.domain.faq.util.di.provider import FaqProvider
from ficarchive.infrastructure.di import InfrastructureProvider
from ficarchive.util.di.scope import Scope


def create_container(config: Config | None = None, *overrides: Provider) -> AsyncContainer:
    """Build the application container.

    Providers in ``overrides`` are registered last and win over the defaults.
    """
    # Pydantic Settings populates from env vars at runtime
    config = config or Config()  # type: ignore[call-arg]

    return make_async_container(
        InfrastructureProvider(),
        AuthProvider(),
        AdminProvider(),
        FaqProvider(),
        WebProvider(),
        *overrides,
        context={Config: config},
        scopes=Scope,  # type: ignore[arg-type]  # Custom scope class
    )
