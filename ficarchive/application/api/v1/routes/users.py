"""User profiles and preferences."""

import dataclasses
import logging

from dishka.integrations.fastapi import DishkaRoute, FromDishka
from fastapi import APIRouter
from pydantic import BaseModel

from ficarchive.application.api.v1.guards import enforce
from ficarchive.config import Config
from ficarchive.domain.auth.model.identity import User
from ficarchive.domain.auth.port.account import AccountRepository
from ficarchive.domain.auth.service.suspension import SuspensionWindow
from ficarchive.domain.shared.authorization.context import RequestContext
from ficarchive.domain.shared.authorization.policy import AccessPolicy
from ficarchive.domain.shared.error import NotFoundError

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/users", tags=["Users"], route_class=DishkaRoute)


class ProfileResponse(BaseModel):
    login: str
    status: str
    unsuspended_at: str | None = None  # Rendered in the viewer's time zone


class PreferenceRequest(BaseModel):
    adult: bool | None = None
    work_title_format: str | None = None
    time_zone: str | None = None


class PreferenceResponse(BaseModel):
    adult: bool
    work_title_format: str | None
    time_zone: str | None


def _profile(user: User, viewer: RequestContext, config: Config) -> ProfileResponse:
    profile = ProfileResponse(login=user.login, status=str(user.suspension.status))
    if user.is_suspended:
        window = SuspensionWindow.for_end(user.suspension.suspended_until)  # type: ignore[arg-type]
        time_zone = None
        if viewer.user is not None:
            time_zone = viewer.user.preference.time_zone
        profile.unsuspended_at = window.display(
            time_zone or config.display.default_time_zone, config.display.time_format
        )
    return profile


async def _load(accounts: AccountRepository, login: str) -> User:
    user = await accounts.user_by_login(login)
    if user is None:
        raise NotFoundError(f"User not found: {login}", code="user_not_found")
    return user


@router.get("/{login}", response_model=ProfileResponse)
async def show_user(
    login: str,
    ctx: FromDishka[RequestContext],
    config: FromDishka[Config],
    accounts: FromDishka[AccountRepository],
) -> ProfileResponse:
    return _profile(await _load(accounts, login), ctx, config)


@router.patch("/{login}/preferences", response_model=PreferenceResponse)
async def update_preferences(
    login: str,
    body: PreferenceRequest,
    ctx: FromDishka[RequestContext],
    config: FromDishka[Config],
    policy: FromDishka[AccessPolicy],
    accounts: FromDishka[AccountRepository],
) -> PreferenceResponse:
    """Only the user themself may edit, and not while suspended or banned."""
    user = await _load(accounts, login)
    enforce(policy.users_only(ctx))
    enforce(policy.check_ownership(ctx, user, fallback=config.navigation.path_for_user(login)))
    enforce(policy.check_user_status(ctx))

    changes = body.model_dump(exclude_none=True)
    preference = dataclasses.replace(user.preference, **changes)
    await accounts.save_user(dataclasses.replace(user, preference=preference))
    logger.info("User %s updated preferences: %s", user.id, sorted(changes))
    return PreferenceResponse(**dataclasses.asdict(preference))
