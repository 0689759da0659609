"""Tag wrangling pages."""

from dishka.integrations.fastapi import DishkaRoute, FromDishka
from fastapi import APIRouter
from pydantic import BaseModel

from ficarchive.application.api.v1.guards import enforce
from ficarchive.domain.navigation.sorting import set_sort_order
from ficarchive.domain.shared.authorization.context import RequestContext
from ficarchive.domain.shared.authorization.policy import AccessPolicy

router = APIRouter(prefix="/tags", tags=["Tags"], route_class=DishkaRoute)


class WranglingResponse(BaseModel):
    wrangler: str
    order: str


@router.get("/wrangle", response_model=WranglingResponse)
async def wrangle(
    ctx: FromDishka[RequestContext],
    policy: FromDishka[AccessPolicy],
) -> WranglingResponse:
    """Wrangling dashboard, listed in the requested tag order."""
    enforce(policy.check_permission_to_wrangle(ctx))
    sort = set_sort_order(
        ctx.params.get("sort_column"), ctx.params.get("sort_direction"), kind="tag"
    )
    return WranglingResponse(wrangler=ctx.describe(), order=sort.order)
