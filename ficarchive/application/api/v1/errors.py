"""Centralized error transformation for API routes.

Access refusals become redirects (or their JSON/JS equivalents); the rest of
the archive's errors map to status codes.
"""

import logging
from typing import Any

from fastapi import FastAPI, HTTPException, Request
from fastapi.responses import JSONResponse, RedirectResponse, Response

from ficarchive.application.api.v1.guards import redirect_script, render_denial
from ficarchive.config import Config
from ficarchive.domain.auth.port.identity_resolver import IdentityResolver
from ficarchive.domain.session.lifecycle import RequestLifecycle
from ficarchive.domain.shared.authorization.context import RequestContext, RequestFormat
from ficarchive.domain.shared.authorization.decision import AccessDenied, Deny
from ficarchive.domain.shared.authorization.policy import AccessPolicy
from ficarchive.domain.shared.error import (
    ArchiveError,
    AuthenticationExpiredError,
    AuthorizationError,
    DomainError,
    InfrastructureError,
    NotFoundError,
    RequestTimeoutError,
    UnknownFormatError,
    UpstreamUnavailableError,
    ValidationError,
)
from ficarchive.domain.shared.port.translator import Translator
from ficarchive.util.di.fastapi import resolve

logger = logging.getLogger(__name__)

# Distinguishes a search index outage from a generic 503. 444 is taken:
# nginx closes the connection without sending headers for it.
SEARCH_UNAVAILABLE_STATUS = 445

DOMAIN_ERROR_STATUS_MAP: dict[type[DomainError], int] = {
    NotFoundError: 404,
    ValidationError: 422,
    AuthorizationError: 403,
    AuthenticationExpiredError: 422,
}


def map_archive_error(error: ArchiveError) -> HTTPException:
    """Map an archive error to an HTTPException.

    Args:
        error: The archive error to map.

    Returns:
        HTTPException with appropriate status code and detail.
    """
    detail: dict[str, Any] = {
        "code": error.code,
        "message": error.message,
    }

    if isinstance(error, InfrastructureError):
        return HTTPException(status_code=503, detail=detail)

    if isinstance(error, DomainError):
        status_code = DOMAIN_ERROR_STATUS_MAP.get(type(error), 400)
        if isinstance(error, ValidationError) and error.field is not None:
            detail["field"] = error.field
        return HTTPException(status_code=status_code, detail=detail)

    return HTTPException(status_code=500, detail=detail)


async def _deny(request: Request, deny: Deny) -> Response:
    ctx = await resolve(request, RequestContext)
    lifecycle = await resolve(request, RequestLifecycle)
    resolver = await resolve(request, IdentityResolver)
    return render_denial(ctx, deny, memory=lifecycle.location_memory(ctx), resolver=resolver)


def register_error_handlers(app: FastAPI, config: Config) -> None:
    """Install the archive's exception handlers on app."""
    navigation = config.navigation

    @app.exception_handler(AccessDenied)
    async def access_denied_handler(request: Request, exc: AccessDenied) -> Response:
        return await _deny(request, exc.decision)

    @app.exception_handler(AuthorizationError)
    async def authorization_error_handler(request: Request, exc: AuthorizationError) -> Response:
        # Policy objects refuse admins; answer the same way admin_only does
        ctx = await resolve(request, RequestContext)
        policy = await resolve(request, AccessPolicy)
        logger.warning("Policy refused %s: %s", ctx.describe(), exc.message)
        return await _deny(request, policy.admin_only_access_denied(ctx))

    @app.exception_handler(AuthenticationExpiredError)
    async def auth_error_handler(request: Request, exc: AuthenticationExpiredError) -> Response:
        ctx = await resolve(request, RequestContext)
        if ctx.format.is_api:
            translator = await resolve(request, Translator)
            return JSONResponse(
                {"errors": {"auth_error": translator.translate("application.auth_error")}},
                status_code=422,
            )
        return RedirectResponse(navigation.auth_error_path, status_code=302)

    @app.exception_handler(UnknownFormatError)
    async def unknown_format_handler(request: Request, exc: UnknownFormatError) -> Response:
        return RedirectResponse(navigation.not_found_path, status_code=302)

    @app.exception_handler(UpstreamUnavailableError)
    async def upstream_unavailable_handler(
        request: Request, exc: UpstreamUnavailableError
    ) -> Response:
        logger.error("Search index unavailable: %s", exc.message)
        return Response(status_code=SEARCH_UNAVAILABLE_STATUS)

    @app.exception_handler(RequestTimeoutError)
    async def timeout_handler(request: Request, exc: RequestTimeoutError) -> Response:
        logger.error("Request timed out: %s %s", request.method, request.url.path)
        ctx = await resolve(request, RequestContext)
        if ctx.format is RequestFormat.JS:
            return redirect_script(navigation.timeout_error_path)
        return RedirectResponse(navigation.timeout_error_path, status_code=302)

    # Everything else the archive raises - maps domain and infrastructure errors to HTTP responses
    @app.exception_handler(ArchiveError)
    async def archive_error_handler(request: Request, exc: ArchiveError) -> Response:
        http_exc = map_archive_error(exc)
        return JSONResponse(
            status_code=http_exc.status_code,
            content=http_exc.detail,
        )

    # Global exception handler - logs all unhandled exceptions
    @app.exception_handler(Exception)
    async def unhandled_exception_handler(request: Request, exc: Exception) -> Response:
        logger.exception(
            "Unhandled exception on %s %s",
            request.method,
            request.url.path,
        )
        return JSONResponse(
            status_code=500,
            content={"detail": "Internal server error"},
        )
