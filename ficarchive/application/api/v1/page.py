"""The page payload shared by every page route."""

from dataclasses import asdict

from pydantic import BaseModel

from ficarchive.config import Config
from ficarchive.domain.admin.service.banner import BannerService
from ficarchive.domain.auth.service.user_menu import UserMenuService
from ficarchive.domain.navigation.title import get_page_title
from ficarchive.domain.session.lifecycle import banner_hidden
from ficarchive.domain.shared.authorization.context import RequestContext


class FlashMessage(BaseModel):
    level: str
    message: str


class BannerResponse(BaseModel):
    id: int
    content: str
    banner_type: str


class MenuCountsResponse(BaseModel):
    subscriptions: int
    visible_works: int
    bookmarks: int
    owned_collections: int
    challenge_signups: int
    offer_assignments: int
    unposted_works: int


class PageResponse(BaseModel):
    """What every rendered page carries besides its own content."""

    title: str
    message: str | None = None
    flash: list[FlashMessage] = []
    banner: BannerResponse | None = None
    tos_version: int
    signed_in_as: str | None = None
    menu: MenuCountsResponse | None = None


class PageBuilder:
    """Collects the page chrome: flash, banner, TOS version and user menu.

    JSON and JS requests get the flash and TOS version only; the banner and
    menu counts are loaded for HTML pages.
    """

    def __init__(
        self,
        ctx: RequestContext,
        config: Config,
        banners: BannerService,
        menus: UserMenuService,
    ) -> None:
        self._ctx = ctx
        self._config = config
        self._banners = banners
        self._menus = menus

    async def build(self, title: str, message: str | None = None) -> PageResponse:
        ctx = self._ctx
        page = PageResponse(
            title=title,
            message=message,
            flash=[
                FlashMessage(level=str(f.level), message=f.message) for f in ctx.flash.consume()
            ],
            tos_version=self._config.content.tos_version,
        )
        if ctx.format.is_api:
            return page

        if not banner_hidden(ctx):
            banner = await self._banners.current()
            if banner is not None:
                page.banner = BannerResponse(
                    id=banner.id, content=banner.content, banner_type=str(banner.banner_type)
                )
        if ctx.admin is not None:
            page.signed_in_as = ctx.admin.login
        elif ctx.user is not None:
            page.signed_in_as = ctx.user.login
            counts = await self._menus.counts_for(ctx.user)
            page.menu = MenuCountsResponse(**asdict(counts))
        return page

    def work_title(self, fandom: str, author: str, title: str, *, truncate: bool = False) -> str:
        """Title for a work page; a signed-in user's title format wins over the default."""
        title_format = None
        if self._ctx.user is not None:
            title_format = self._ctx.user.preference.work_title_format
        return get_page_title(
            fandom,
            author,
            title,
            app_name=self._config.server.name,
            truncate=truncate,
            title_format=title_format,
        )
