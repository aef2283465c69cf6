"""
Составные фильтры (scopes) для выборок точек доступа.

Каждая функция принимает `Select` по AccessPoint (или None, тогда
начинает с чистого `select(AccessPoint)`) и возвращает новый `Select`,
поэтому их можно комбинировать: `hostname_like(up(), "bologna")`.
"""
import logging

from sqlalchemy import Select, func, select
from sqlalchemy.ext.asyncio import AsyncSession

from geomonitor.core.config import settings
from geomonitor.db.models.access_point import AccessPoint
from geomonitor.db.models.property_set import PropertySet
from geomonitor.utils.geo_utils import Coords, bounding_box, distances_km

logger = logging.getLogger(__name__)

# Значения из PropertySet, коррелированные с текущей строкой access_points.
# Нет набора свойств -> NULL, т.е. точка считается "unknown".
reachable_column = (
    select(PropertySet.reachable)
    .where(PropertySet.access_point_id == AccessPoint.id)
    .scalar_subquery()
)
public_column = (
    select(PropertySet.public)
    .where(PropertySet.access_point_id == AccessPoint.id)
    .scalar_subquery()
)

SORTABLE_FIELDS = {
    "id": AccessPoint.id,
    "hostname": AccessPoint.hostname,
    "address": AccessPoint.address,
    "city": AccessPoint.city,
    "wisp_id": AccessPoint.wisp_id,
    "activation_date": AccessPoint.activation_date,
    "created_at": AccessPoint.created_at,
    "status": reachable_column,
}


def _base(stmt: Select | None) -> Select:
    return stmt if stmt is not None else select(AccessPoint)


def of_wisp(stmt: Select | None = None, wisp=None) -> Select:
    # Без WISP фильтр пропускается, чтобы остальные scopes работали как есть
    stmt = _base(stmt)
    return stmt.where(AccessPoint.wisp_id == wisp.id) if wisp is not None else stmt


def sort_with(stmt: Select | None, attribute: str, direction: str = "asc") -> Select:
    column = SORTABLE_FIELDS.get(attribute)
    if column is None:
        logger.debug(f"Unknown sort attribute {attribute!r}, falling back to id")
        column = AccessPoint.id
    column = column.desc() if (direction or "").lower() == "desc" else column.asc()
    return _base(stmt).order_by(column)


def on_georss(stmt: Select | None = None) -> Select:
    return _base(stmt).where(public_column.is_(True))


def up(stmt: Select | None = None) -> Select:
    return _base(stmt).where(reachable_column.is_(True))


def down(stmt: Select | None = None) -> Select:
    return _base(stmt).where(reachable_column.is_(False))


def known(stmt: Select | None = None) -> Select:
    return _base(stmt).where(reachable_column.is_not(None))


def unknown(stmt: Select | None = None) -> Select:
    return _base(stmt).where(reachable_column.is_(None))


STATUS_SCOPES = {
    "up": up,
    "down": down,
    "known": known,
    "unknown": unknown,
}


def activated(stmt: Select | None = None, till=None) -> Select:
    # till не задан: точки, активированные к текущему моменту
    bound = till if till is not None else func.now()
    return _base(stmt).where(AccessPoint.activation_date <= bound)


def hostname_like(stmt: Select | None = None, name: str | None = None) -> Select:
    return _base(stmt).where(AccessPoint.hostname.like(f"%{name or ''}%"))


def all_up(regex: str | None = None) -> Select:
    return hostname_like(up(), regex)


def all_down(regex: str | None = None) -> Select:
    return hostname_like(down(), regex)


def all_unknown(regex: str | None = None) -> Select:
    return hostname_like(unknown(), regex)


def paginate(stmt: Select, page: int = 1, per_page: int | None = None) -> Select:
    per_page = per_page or settings.PAGE_SIZE
    page = max(page, 1)
    return stmt.limit(per_page).offset((page - 1) * per_page)


async def around(
    db: AsyncSession,
    coords: Coords,
    within: float | None = None,
    stmt: Select | None = None,
) -> list[AccessPoint]:
    """
    Точки доступа в радиусе `within` км (включительно) от `coords`,
    в порядке первичного ключа.

    Сначала грубый фильтр по прямоугольнику в SQL, затем точная проверка
    расстояния по большому кругу.
    """
    within = settings.CLUSTER_RADIUS_KM if within is None else within
    min_lat, max_lat, min_lng, max_lng = bounding_box(coords, within)
    stmt = (
        _base(stmt)
        .where(
            AccessPoint.lat.between(min_lat, max_lat),
            AccessPoint.lng.between(min_lng, max_lng),
        )
        .order_by(AccessPoint.id)
    )
    candidates = (await db.execute(stmt)).scalars().all()
    if not candidates:
        return []
    distances = distances_km(coords, [ap.lat for ap in candidates], [ap.lng for ap in candidates])
    return [ap for ap, dist in zip(candidates, distances) if dist <= within]
