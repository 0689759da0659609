"""Sign-in and sign-out for users and admins.

Credentials are verified by the identity provider in front of this service;
these routes record the outcome in the session and pick the landing page.
"""

import logging
from typing import Annotated

from dishka.integrations.fastapi import DishkaRoute, FromDishka
from fastapi import APIRouter, Query
from fastapi.responses import JSONResponse, RedirectResponse, Response
from pydantic import BaseModel

from ficarchive.application.api.v1.guards import enforce
from ficarchive.application.api.v1.page import PageBuilder, PageResponse
from ficarchive.config import Config
from ficarchive.domain.auth.port.account import AccountRepository
from ficarchive.domain.auth.port.identity_resolver import IdentityResolver
from ficarchive.domain.navigation.location import after_sign_in_path
from ficarchive.domain.session.lifecycle import RequestLifecycle
from ficarchive.domain.shared.authorization.context import RequestContext
from ficarchive.domain.shared.authorization.policy import AccessPolicy
from ficarchive.domain.shared.error import ValidationError
from ficarchive.domain.shared.port.translator import Translator

logger = logging.getLogger(__name__)

router = APIRouter(tags=["Sessions"], route_class=DishkaRoute)


class SignInRequest(BaseModel):
    login: str


class SignInPage(PageResponse):
    restricted: bool = False


def _land(ctx: RequestContext, destination: str) -> Response:
    if ctx.format.is_api:
        return JSONResponse({"redirect_to": destination})
    return RedirectResponse(destination, status_code=302)


@router.get("/users/login", response_model=SignInPage)
async def sign_in_page(
    ctx: FromDishka[RequestContext],
    policy: FromDishka[AccessPolicy],
    pages: FromDishka[PageBuilder],
    restricted: Annotated[bool, Query()] = False,
) -> SignInPage:
    """Sign-in form; ``restricted`` explains that the requested work needs an account."""
    enforce(policy.admin_logout_required(ctx))
    page = await pages.build("Log In")
    return SignInPage(**page.model_dump(), restricted=restricted)


@router.post("/users/login")
async def sign_in_user(
    body: SignInRequest,
    ctx: FromDishka[RequestContext],
    config: FromDishka[Config],
    policy: FromDishka[AccessPolicy],
    accounts: FromDishka[AccountRepository],
    resolver: FromDishka[IdentityResolver],
    lifecycle: FromDishka[RequestLifecycle],
) -> Response:
    enforce(policy.admin_logout_required(ctx))
    user = await accounts.user_by_login(body.login)
    if user is None:
        raise ValidationError(f"Unknown login: {body.login}", field="login")

    resolver.sign_in_user(ctx.session, user.id)
    ctx.user = user
    logger.info("User %s signed in", user.id)
    destination = after_sign_in_path(
        user,
        lifecycle.location_memory(ctx),
        admins_path=config.navigation.admins_path,
        user_path=config.navigation.path_for_user(user.login),
    )
    return _land(ctx, destination)


@router.post("/users/logout")
async def sign_out_user(
    ctx: FromDishka[RequestContext],
    config: FromDishka[Config],
    resolver: FromDishka[IdentityResolver],
    translator: FromDishka[Translator],
) -> Response:
    if ctx.user is not None:
        logger.info("User %s signed out", ctx.user.id)
    resolver.sign_out(ctx.session)
    ctx.sign_out()
    ctx.flash.notice(translator.translate("application.signed_out"))
    return _land(ctx, config.navigation.root_path)


@router.post("/admins/login")
async def sign_in_admin(
    body: SignInRequest,
    ctx: FromDishka[RequestContext],
    config: FromDishka[Config],
    policy: FromDishka[AccessPolicy],
    accounts: FromDishka[AccountRepository],
    resolver: FromDishka[IdentityResolver],
    lifecycle: FromDishka[RequestLifecycle],
) -> Response:
    enforce(policy.user_logout_required(ctx))
    admin = await accounts.admin_by_login(body.login)
    if admin is None:
        raise ValidationError(f"Unknown login: {body.login}", field="login")

    resolver.sign_in_admin(ctx.session, admin.id)
    ctx.admin = admin
    logger.info("Admin %s signed in", admin.id)
    destination = after_sign_in_path(
        admin,
        lifecycle.location_memory(ctx),
        admins_path=config.navigation.admins_path,
        user_path=config.navigation.root_path,
    )
    return _land(ctx, destination)


@router.post("/admins/logout")
async def sign_out_admin(
    ctx: FromDishka[RequestContext],
    config: FromDishka[Config],
    resolver: FromDishka[IdentityResolver],
    translator: FromDishka[Translator],
) -> Response:
    resolver.sign_out_admin(ctx.session)
    ctx.admin = None
    ctx.flash.notice(translator.translate("application.signed_out"))
    return _land(ctx, config.navigation.root_path)
