"""Middleware running the request lifecycle hooks around every route."""

import logging

from starlette.middleware.base import BaseHTTPMiddleware, RequestResponseEndpoint
from starlette.requests import Request
from starlette.responses import Response

from ficarchive.application.api.v1.guards import render_denial
from ficarchive.domain.auth.port.identity_resolver import IdentityResolver
from ficarchive.domain.session.cookies import CookieMutation
from ficarchive.domain.session.lifecycle import RequestLifecycle
from ficarchive.domain.shared.authorization.context import RequestContext
from ficarchive.util.di.fastapi import resolve

logger = logging.getLogger(__name__)


def apply_cookie_mutations(
    response: Response, mutations: list[CookieMutation], *, secure: bool = False
) -> None:
    for mutation in mutations:
        if mutation.is_delete:
            response.delete_cookie(mutation.name)
        else:
            response.set_cookie(
                mutation.name,
                mutation.value or "",
                max_age=mutation.max_age,
                secure=secure,
                samesite="lax",
            )


class RequestLifecycleMiddleware(BaseHTTPMiddleware):
    """Runs RequestLifecycle.before/after inside the request's DI container.

    The post-hook runs for every response the route stack produces,
    redirects and handled errors included.
    """

    def __init__(self, app, *, secure_cookies: bool = False) -> None:
        super().__init__(app)
        self._secure_cookies = secure_cookies

    async def dispatch(self, request: Request, call_next: RequestResponseEndpoint) -> Response:
        ctx = await resolve(request, RequestContext)
        lifecycle = await resolve(request, RequestLifecycle)

        halt = lifecycle.before(ctx)
        if halt is not None:
            resolver = await resolve(request, IdentityResolver)
            response = render_denial(
                ctx, halt, memory=lifecycle.location_memory(ctx), resolver=resolver
            )
        else:
            response = await call_next(request)

        apply_cookie_mutations(
            response, lifecycle.after(ctx), secure=self._secure_cookies
        )
        return response
