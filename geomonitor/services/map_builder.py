from typing import List, Union
import logging

from sqlalchemy.ext.asyncio import AsyncSession

from geomonitor.core.config import settings
from geomonitor.db.models.access_point import AccessPoint
from geomonitor.db.models.wisp import Wisp
from geomonitor.schemas.map import MapAccessPoint, MapCluster, MapItem, MapResponse
from geomonitor.services import scopes
from geomonitor.utils.geo_utils import Coords, centroid

logger = logging.getLogger(__name__)

# Явно объявляем публичный API модуля
__all__ = [
    "Cluster",
    "MapBuilder",
    "draw_map",
    "build_map",
]

# Сколько точек доступа читать из БД за один запрос при обходе
BATCH_SIZE = 1000


class Cluster:
    """
    Группа близко расположенных точек доступа, рисуемая на карте одним
    маркером.
    """
    def __init__(self, access_points: List[AccessPoint]):
        self.access_points = list(access_points)

    @property
    def size(self) -> int:
        return len(self.access_points)

    @property
    def coords(self) -> Coords:
        return centroid(ap.coords for ap in self.access_points)

    def count(self, attribute: str) -> int:
        return sum(1 for ap in self.access_points if getattr(ap, attribute))

    def __iter__(self):
        return iter(self.access_points)

    def __len__(self) -> int:
        return self.size

    def __repr__(self) -> str:
        return f"<Cluster size={self.size} coords={self.coords}>"


class MapBuilder:
    """
    Жадная кластеризация точек доступа для карты:
    - обходит точки в порядке первичного ключа;
    - для каждой ещё не попавшей в группу точки ("затравки") берёт все точки
      в радиусе от неё, кроме уже сгруппированных;
    - больше одной точки: Cluster, иначе сама точка.

    Группа определяется близостью к затравке, а не попарной близостью,
    поэтому результат зависит от порядка обхода.
    """
    def __init__(self, db: AsyncSession, wisp: Wisp | None = None, radius_km: float | None = None):
        self.db = db
        self.wisp = wisp
        self.radius_km = settings.CLUSTER_RADIUS_KM if radius_km is None else radius_km

    async def _each_access_point(self):
        last_id = 0
        while True:
            stmt = (
                scopes.of_wisp(None, self.wisp)
                .where(AccessPoint.id > last_id)
                .order_by(AccessPoint.id)
                .limit(BATCH_SIZE)
            )
            batch = (await self.db.execute(stmt)).scalars().all()
            if not batch:
                return
            for ap in batch:
                yield ap
            last_id = batch[-1].id

    async def draw(self) -> List[Union[AccessPoint, Cluster]]:
        groups: List[Union[AccessPoint, Cluster]] = []
        already_clustered: set[int] = set()

        async for seed in self._each_access_point():
            if seed.id in already_clustered:
                continue
            nearby = await scopes.around(
                self.db, seed.coords, self.radius_km, stmt=scopes.of_wisp(None, self.wisp)
            )
            cluster = [ap for ap in nearby if ap.id not in already_clustered]
            # Затравка в радиусе сама от себя; на случай неточностей float
            if not any(ap.id == seed.id for ap in cluster):
                cluster.insert(0, seed)

            groups.append(Cluster(cluster) if len(cluster) > 1 else cluster[0])
            already_clustered.update(ap.id for ap in cluster)

        logger.info(
            f"Map drawn: {len(groups)} markers for {len(already_clustered)} access points "
            f"(radius {self.radius_km} km)"
        )
        return groups

    async def build(self) -> MapResponse:
        items: List[MapItem] = []
        for group in await self.draw():
            if isinstance(group, Cluster):
                lat, lng = group.coords
                items.append(MapCluster(
                    lat=lat,
                    lng=lng,
                    size=group.size,
                    up=group.count("up"),
                    down=group.count("down"),
                    unknown=group.count("unknown"),
                    access_point_ids=[ap.id for ap in group],
                ))
            else:
                items.append(MapAccessPoint(
                    id=group.id,
                    hostname=group.hostname,
                    lat=group.lat,
                    lng=group.lng,
                    status=group.status,
                ))
        return MapResponse(radius_km=self.radius_km, items=items)

# ——— Публичные функции-обёртки ———

async def draw_map(db: AsyncSession, wisp: Wisp | None = None) -> List[Union[AccessPoint, Cluster]]:
    """
    Точки доступа и кластеры для карты (ORM-объекты).
    """
    return await MapBuilder(db, wisp).draw()

async def build_map(db: AsyncSession, wisp: Wisp | None = None) -> MapResponse:
    """
    То же, что draw_map, но в виде схемы ответа API.
    """
    return await MapBuilder(db, wisp).build()
