from typing import List

from fastapi import APIRouter, Depends
from sqlalchemy.ext.asyncio import AsyncSession

from geomonitor.api.deps import get_db_session, get_wisp_filter
from geomonitor.db.models.wisp import Wisp
from geomonitor.schemas.ap import AccessPointOut
from geomonitor.schemas.map import MapResponse
from geomonitor.services import scopes
from geomonitor.services.map_builder import build_map

router = APIRouter(
    prefix="/v1/map",
)


@router.get("/", response_model=MapResponse)
async def get_map(
    wisp: Wisp | None = Depends(get_wisp_filter),
    db: AsyncSession = Depends(get_db_session),
) -> MapResponse:
    """
    Маркеры для карты: одиночные точки доступа и кластеры точек,
    находящихся в пределах радиуса кластеризации друг от друга.
    """
    return await build_map(db, wisp)


@router.get("/georss", response_model=List[AccessPointOut])
async def get_public_access_points(
    wisp: Wisp | None = Depends(get_wisp_filter),
    db: AsyncSession = Depends(get_db_session),
):
    """
    Публичные точки доступа (PropertySet.public) для внешней ленты georss.
    """
    stmt = scopes.of_wisp(scopes.on_georss(), wisp)
    result = await db.execute(scopes.sort_with(stmt, "id"))
    return [AccessPointOut.model_validate(ap) for ap in result.scalars().all()]
