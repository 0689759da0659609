"""Applying guard decisions to HTTP responses."""

import logging

from starlette.responses import JSONResponse, RedirectResponse, Response

from ficarchive.domain.auth.port.identity_resolver import IdentityResolver
from ficarchive.domain.navigation.location import LocationMemory
from ficarchive.domain.shared.authorization.context import RequestContext, RequestFormat
from ficarchive.domain.shared.authorization.decision import AccessDenied, Decision, Deny

logger = logging.getLogger(__name__)


def enforce(decision: Decision) -> None:
    """Raise AccessDenied for a Deny so the route stops here."""
    if isinstance(decision, Deny):
        raise AccessDenied(decision)


def redirect_script(location: str) -> Response:
    return Response(
        f"window.location.href = '{location}';",
        media_type="text/javascript",
    )


def render_denial(
    ctx: RequestContext,
    deny: Deny,
    *,
    memory: LocationMemory,
    resolver: IdentityResolver,
) -> Response:
    """Apply a Deny: sign-out, location memory, flash, then the format's response.

    HTML gets a redirect, JS a script that navigates, JSON an errors payload
    with the Deny's status code.
    """
    if deny.sign_out:
        resolver.sign_out(ctx.session)
        ctx.sign_out()
    if deny.store_location:
        memory.store(ctx.path)

    if ctx.format is RequestFormat.JSON:
        return JSONResponse({"errors": deny.errors}, status_code=deny.status_code)

    if deny.flash is not None:
        ctx.flash.add(deny.flash)
    if ctx.format is RequestFormat.JS:
        return redirect_script(deny.redirect_to)
    return RedirectResponse(deny.redirect_to, status_code=302)
