"""Site pages: home and the fixed error pages."""

from dishka.integrations.fastapi import DishkaRoute, FromDishka
from fastapi import APIRouter

from ficarchive.application.api.v1.page import PageBuilder, PageResponse
from ficarchive.config import Config
from ficarchive.domain.navigation.title import process_title
from ficarchive.domain.shared.port.translator import Translator

router = APIRouter(tags=["Pages"], route_class=DishkaRoute)


@router.get("/", response_model=PageResponse)
async def home(pages: FromDishka[PageBuilder], config: FromDishka[Config]) -> PageResponse:
    return await pages.build(config.server.name)


async def _fixed_page(name: str, pages: PageBuilder, translator: Translator) -> PageResponse:
    return await pages.build(process_title(name), translator.translate(f"application.{name}"))


@router.get("/lost_cookie", response_model=PageResponse)
async def lost_cookie(
    pages: FromDishka[PageBuilder], translator: FromDishka[Translator]
) -> PageResponse:
    """Shown after a session was signed out for missing its user_credentials cookie."""
    return await _fixed_page("lost_cookie", pages, translator)


@router.get("/auth_error", response_model=PageResponse)
async def auth_error(
    pages: FromDishka[PageBuilder], translator: FromDishka[Translator]
) -> PageResponse:
    return await _fixed_page("auth_error", pages, translator)


@router.get("/timeout_error", response_model=PageResponse)
async def timeout_error(
    pages: FromDishka[PageBuilder], translator: FromDishka[Translator]
) -> PageResponse:
    return await _fixed_page("timeout_error", pages, translator)


@router.get("/404", response_model=PageResponse, status_code=404)
async def not_found(
    pages: FromDishka[PageBuilder], translator: FromDishka[Translator]
) -> PageResponse:
    return await _fixed_page("not_found", pages, translator)
