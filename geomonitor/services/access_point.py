import logging
from datetime import datetime, timezone

from sqlalchemy.ext.asyncio import AsyncSession
from sqlalchemy import select, func, update
from sqlalchemy.exc import NoResultFound, IntegrityError

from geomonitor.db.models.access_point import AccessPoint
from geomonitor.db.models.activity_history import ActivityHistory
from geomonitor.db.models.property_set import PropertySet
from geomonitor.db.models.wisp import Wisp
from geomonitor.exceptions import NotFoundError, ValidationError
from geomonitor.schemas.ap import AccessPointCreate, AccessPointUpdate
from geomonitor.services import scopes
from geomonitor.utils.math_utils import round_percentage

logger = logging.getLogger(__name__)

# Поля, которые хранятся не в access_points, а в PropertySet / mng_ip
DELEGATED_FIELDS = ("ip", "public", "notes", "site_description")


async def get_access_point(db: AsyncSession, ap_id: int) -> AccessPoint | None:
    result = await db.execute(select(AccessPoint).where(AccessPoint.id == ap_id))
    return result.scalars().first()

async def list_access_points(
    db: AsyncSession,
    wisp: Wisp | None = None,
    status: str | None = None,
    hostname: str | None = None,
    activated_till: datetime | None = None,
    order_by: str = "id",
    order_dir: str = "asc",
    page: int = 1,
    per_page: int | None = None,
) -> tuple[list[AccessPoint], int]:
    """
    Выборка для админки: фильтры по WISP, статусу, имени хоста и дате
    активации, сортировка и постраничный вывод.
    """
    stmt = scopes.of_wisp(None, wisp)
    if status is not None:
        if status not in scopes.STATUS_SCOPES:
            raise ValidationError(f"Unknown status filter {status!r}")
        stmt = scopes.STATUS_SCOPES[status](stmt)
    if hostname:
        stmt = scopes.hostname_like(stmt, hostname)
    if activated_till is not None:
        stmt = scopes.activated(stmt, activated_till)

    count_query = select(func.count()).select_from(stmt.subquery())
    total = (await db.execute(count_query)).scalar_one()

    stmt = scopes.sort_with(stmt, order_by, order_dir)
    # вторичная сортировка, чтобы страницы были стабильны
    if order_by != "id":
        stmt = stmt.order_by(AccessPoint.id)
    result = await db.execute(scopes.paginate(stmt, page, per_page))
    return result.scalars().all(), total

async def status_summary(db: AsyncSession, wisp: Wisp | None = None, hostname: str | None = None) -> dict:
    counts = {}
    for name, scope in (("up", scopes.all_up), ("down", scopes.all_down), ("unknown", scopes.all_unknown)):
        stmt = scopes.of_wisp(scope(hostname), wisp)
        counts[name] = (await db.execute(select(func.count()).select_from(stmt.subquery()))).scalar_one()
    counts["total"] = counts["up"] + counts["down"] + counts["unknown"]
    return counts

async def _check_wisp(db: AsyncSession, wisp_id: int | None) -> None:
    if wisp_id is not None and await db.get(Wisp, wisp_id) is None:
        raise NotFoundError(f"Wisp id={wisp_id} not found")

def _apply(ap: AccessPoint, values: dict) -> None:
    for k, v in values.items():
        if k == "ip":
            ap.ip = None if v is None else str(v)
        else:
            setattr(ap, k, v)

async def create_access_point(db: AsyncSession, data: AccessPointCreate) -> AccessPoint:
    values = data.model_dump(exclude_none=True)
    ap = AccessPoint(**{k: v for k, v in values.items() if k not in DELEGATED_FIELDS})
    _apply(ap, {k: v for k, v in values.items() if k in DELEGATED_FIELDS})
    await _check_wisp(db, ap.wisp_id)
    db.add(ap)
    await db.commit()
    await db.refresh(ap)
    logger.info(f"AccessPoint {ap.hostname} (id={ap.id}) created")
    return ap

async def update_access_point(db: AsyncSession, ap_id: int, data: AccessPointUpdate) -> AccessPoint:
    ap = await get_access_point(db, ap_id)
    if not ap:
        raise NoResultFound(f"AccessPoint id={ap_id} not found")
    values = data.model_dump(exclude_unset=True)
    if "wisp_id" in values:
        await _check_wisp(db, values["wisp_id"])
    _apply(ap, values)
    await db.commit()
    await db.refresh(ap)
    return ap

async def delete_access_point(db: AsyncSession, ap_id: int) -> None:
    ap = await get_access_point(db, ap_id)
    if not ap:
        raise NoResultFound(f"AccessPoint id={ap_id} not found")
    await db.delete(ap)
    await db.commit()
    logger.info(f"AccessPoint {ap.hostname} (id={ap_id}) deleted")

# ——— Доступность ———

async def set_reachable_to(db: AsyncSession, ap: AccessPoint, value: bool) -> AccessPoint:
    """
    Обновляет PropertySet точки; если обновлять нечего (набора свойств
    ещё нет), создаёт новый в точке сохранения (SAVEPOINT). Одновременная
    вставка из другой сессии (нарушение уникальности access_point_id)
    откатывает только точку сохранения и повторяется как обновление,
    остальные несохранённые изменения сессии не теряются.
    """
    ap_id = ap.id
    stmt = (
        update(PropertySet)
        .where(PropertySet.access_point_id == ap_id)
        .values(reachable=value)
    )
    result = await db.execute(stmt)
    if result.rowcount == 0:
        try:
            async with db.begin_nested():
                db.add(PropertySet(access_point_id=ap_id, reachable=value, public=False))
        except IntegrityError:
            logger.warning(f"PropertySet for AP id={ap_id} appeared concurrently, updating instead")
            await db.execute(stmt)
    await db.commit()
    await db.refresh(ap, ["property_set"])
    return ap

async def reachable(db: AsyncSession, ap: AccessPoint) -> AccessPoint:
    return await set_reachable_to(db, ap, True)

async def unreachable(db: AsyncSession, ap: AccessPoint) -> AccessPoint:
    return await set_reachable_to(db, ap, False)

# ——— История активности ———

async def _seen(db: AsyncSession, ap: AccessPoint, latest: bool) -> datetime | None:
    if ap.unknown:
        return None
    order = ActivityHistory.last_time.desc() if latest else ActivityHistory.last_time.asc()
    result = await db.execute(
        select(ActivityHistory.last_time)
        .where(ActivityHistory.access_point_id == ap.id, ActivityHistory.status > 0)
        .order_by(order)
        .limit(1)
    )
    return result.scalars().first()

async def latest_seen(db: AsyncSession, ap: AccessPoint) -> datetime | None:
    return await _seen(db, ap, latest=True)

async def earliest_seen(db: AsyncSession, ap: AccessPoint) -> datetime | None:
    return await _seen(db, ap, latest=False)

def _as_utc(value: datetime) -> datetime:
    # naive-значения из БД считаем UTC
    if value.tzinfo is None:
        return value.replace(tzinfo=timezone.utc)
    return value.astimezone(timezone.utc)

def observe(ap: AccessPoint, start: datetime, end: datetime):
    """Истории точки, целиком попадающие в интервал [start, end]."""
    return (
        select(ActivityHistory)
        .where(
            ActivityHistory.access_point_id == ap.id,
            ActivityHistory.start_time >= start,
            ActivityHistory.last_time <= end,
        )
    )

async def average_availability(db: AsyncSession, ap: AccessPoint, start: datetime, end: datetime) -> float | None:
    # Отсчёт не раньше даты активации точки
    if ap.activation_date is not None and _as_utc(ap.activation_date) > _as_utc(start):
        start = ap.activation_date
    if _as_utc(start) > _as_utc(end):
        raise ValidationError("Observation period starts after it ends")
    histories = observe(ap, start, end).subquery()
    result = await db.execute(select(func.avg(histories.c.status)))
    avg = result.scalar()
    return None if avg is None else float(avg) * 100

async def up_average(db: AsyncSession, ap: AccessPoint, start: datetime, end: datetime) -> float | None:
    availability = await average_availability(db, ap, start, end)
    return None if availability is None else round_percentage(availability)

async def down_average(db: AsyncSession, ap: AccessPoint, start: datetime, end: datetime) -> float | None:
    availability = await average_availability(db, ap, start, end)
    return None if availability is None else round_percentage(100 - availability)
