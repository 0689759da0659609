"""Admin dashboard, site settings and banners."""

import logging

from dishka.integrations.fastapi import DishkaRoute, FromDishka
from fastapi import APIRouter
from pydantic import BaseModel

from ficarchive.application.api.v1.guards import enforce
from ficarchive.domain.admin.model.banner import AdminBanner, BannerType
from ficarchive.domain.admin.model.settings import AdminSettings
from ficarchive.domain.admin.port.repository import BannerRepository
from ficarchive.domain.admin.service.banner import BannerService
from ficarchive.domain.admin.service.settings import AdminSettingsService
from ficarchive.domain.shared.authorization.context import RequestContext
from ficarchive.domain.shared.authorization.policy import AccessPolicy

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/admins", tags=["Admin"], route_class=DishkaRoute)


class SettingsResponse(BaseModel):
    tag_wrangling_off: bool
    enable_test_caching: bool
    caching_enabled: bool


class DashboardResponse(BaseModel):
    admin: str
    settings: SettingsResponse


class SettingsRequest(BaseModel):
    tag_wrangling_off: bool


class BannerRequest(BaseModel):
    content: str
    banner_type: BannerType = BannerType.DEFAULT


class BannerCreatedResponse(BaseModel):
    id: int
    content: str
    banner_type: str


async def _settings_response(
    settings: AdminSettings, service: AdminSettingsService
) -> SettingsResponse:
    return SettingsResponse(
        tag_wrangling_off=settings.tag_wrangling_off,
        enable_test_caching=settings.enable_test_caching,
        caching_enabled=await service.use_caching(),
    )


@router.get("", response_model=DashboardResponse)
async def dashboard(
    ctx: FromDishka[RequestContext],
    policy: FromDishka[AccessPolicy],
    service: FromDishka[AdminSettingsService],
    settings: FromDishka[AdminSettings],
) -> DashboardResponse:
    enforce(policy.admin_only(ctx))
    return DashboardResponse(
        admin=ctx.admin.login,  # type: ignore[union-attr]
        settings=await _settings_response(settings, service),
    )


@router.put("/settings", response_model=SettingsResponse)
async def update_settings(
    body: SettingsRequest,
    ctx: FromDishka[RequestContext],
    policy: FromDishka[AccessPolicy],
    service: FromDishka[AdminSettingsService],
) -> SettingsResponse:
    enforce(policy.admin_only(ctx))
    updated = await service.set_tag_wrangling_off(body.tag_wrangling_off)
    logger.info("Admin %s set tag_wrangling_off=%s", ctx.describe(), updated.tag_wrangling_off)
    return await _settings_response(updated, service)


@router.post("/banners", response_model=BannerCreatedResponse, status_code=201)
async def create_banner(
    body: BannerRequest,
    ctx: FromDishka[RequestContext],
    policy: FromDishka[AccessPolicy],
    repo: FromDishka[BannerRepository],
    banners: FromDishka[BannerService],
) -> BannerCreatedResponse:
    """Publish a new banner; it replaces the cached one immediately."""
    enforce(policy.admin_only(ctx))
    banner = AdminBanner(id=await repo.next_id(), content=body.content, banner_type=body.banner_type)
    await repo.save(banner)
    await banners.expire()
    return BannerCreatedResponse(
        id=banner.id, content=banner.content, banner_type=str(banner.banner_type)
    )
