"""Dishka integration for FastAPI with one Scope.UOW container per request."""

from typing import TypeVar

from dishka import AsyncContainer
from starlette.requests import HTTPConnection, Request
from starlette.types import ASGIApp, Receive, Scope, Send

from ficarchive.util.di.scope import Scope as ArchiveScope

T = TypeVar("T")


class ContainerMiddleware:
    """Opens the request's Scope.UOW container and parks it on request.state.

    dishka.integrations.starlette.ContainerMiddleware does the same with
    dishka.Scope.REQUEST, which our scope hierarchy does not have.
    """

    def __init__(self, app: ASGIApp) -> None:
        self.app = app

    async def __call__(self, scope: Scope, receive: Receive, send: Send) -> None:
        if scope["type"] != "http":
            return await self.app(scope, receive, send)

        request = Request(scope, receive=receive, send=send)
        async with request.app.state.dishka_container(
            {Request: request},
            scope=ArchiveScope.UOW,
        ) as request_container:
            request.state.dishka_container = request_container
            return await self.app(scope, receive, send)


async def resolve(connection: HTTPConnection, dependency: type[T]) -> T:
    """Resolve a dependency from the current request's container.

    For code that runs outside DishkaRoute handlers (middleware, exception
    handlers) but inside ContainerMiddleware.
    """
    container: AsyncContainer = connection.state.dishka_container
    return await container.get(dependency)


def setup_dishka(container: AsyncContainer, app) -> None:
    """Install ContainerMiddleware and the application container.

    Args:
        container: The async DI container
        app: FastAPI or Starlette application
    """
    app.add_middleware(ContainerMiddleware)
    app.state.dishka_container = container
