from datetime import datetime, timedelta, timezone

from fastapi import APIRouter, Depends, HTTPException, Query, status
from sqlalchemy.exc import NoResultFound
from sqlalchemy.ext.asyncio import AsyncSession

from geomonitor.api.deps import get_db_session, get_wisp_filter
from geomonitor.db.models.user import User
from geomonitor.db.models.wisp import Wisp
from geomonitor.exceptions import NotFoundError, ServiceError, ValidationError
from geomonitor.schemas.ap import (
    AccessPointCreate,
    AccessPointUpdate,
    AccessPointOut,
    AccessPointDetailOut,
    AccessPointListResponse,
    ActivityCreate,
    ActivityOut,
    StatusFilter,
    StatusSummary,
)
from geomonitor.schemas.wisp import AssociatedUser
from geomonitor.services import access_point as ap_service
from geomonitor.services.activity import record_activity
from geomonitor.services.associated_users import associated_users
from geomonitor.services.security import get_current_active_user
from geomonitor.core.config import settings

router = APIRouter(prefix="/v1/access-points", tags=["AccessPoint"])

# Период по умолчанию для статистики доступности
DEFAULT_STATS_DAYS = 30


async def _get_or_404(db: AsyncSession, ap_id: int):
    ap = await ap_service.get_access_point(db, ap_id)
    if not ap:
        raise HTTPException(status_code=404, detail="AccessPoint not found")
    return ap

@router.get(
    "/",
    response_model=AccessPointListResponse,
    summary="Получить список точек доступа",
    description="Список точек доступа с фильтрами по WISP, статусу, имени хоста и дате активации. Поддерживается постраничный вывод и сортировка (в т.ч. по статусу)."
)
async def list_access_points(
    wisp: Wisp | None = Depends(get_wisp_filter),
    status_filter: StatusFilter | None = Query(None, alias="status", description="up, down, known или unknown"),
    hostname: str | None = Query(None, description="Подстрока имени хоста"),
    activated_till: datetime | None = Query(None, description="Только активированные до этой даты"),
    page: int = Query(1, ge=1, description="Номер страницы"),
    per_page: int = Query(settings.PAGE_SIZE, ge=1, le=1000, description="Размер страницы"),
    order_by: str = Query("id", description="Поле сортировки: id, hostname, address, city, wisp_id, activation_date, created_at, status"),
    order_dir: str = Query("asc", description="Направление сортировки: asc или desc"),
    db: AsyncSession = Depends(get_db_session)
):
    items, total = await ap_service.list_access_points(
        db, wisp, status_filter, hostname, activated_till, order_by, order_dir, page, per_page
    )
    return AccessPointListResponse(
        items=[AccessPointOut.model_validate(ap) for ap in items],
        total=total,
        page=page,
        per_page=per_page,
    )

@router.get(
    "/summary",
    response_model=StatusSummary,
    summary="Сводка по статусам",
    description="Количество точек доступа в состоянии up / down / unknown (опционально по WISP и имени хоста)."
)
async def status_summary(
    wisp: Wisp | None = Depends(get_wisp_filter),
    hostname: str | None = Query(None, description="Подстрока имени хоста"),
    db: AsyncSession = Depends(get_db_session)
):
    return StatusSummary(**await ap_service.status_summary(db, wisp, hostname))

@router.get(
    "/{ap_id}",
    response_model=AccessPointDetailOut,
    summary="Получить точку доступа по ID",
    description="Точка доступа со статусом, временем последней/первой активности и доступностью за период (по умолчанию последние 30 дней)."
)
async def get_access_point(
    ap_id: int,
    date_from: datetime | None = Query(None, alias="from", description="Начало периода статистики"),
    date_to: datetime | None = Query(None, alias="to", description="Конец периода статистики"),
    db: AsyncSession = Depends(get_db_session)
):
    ap = await _get_or_404(db, ap_id)
    date_to = date_to or datetime.now(timezone.utc)
    date_from = date_from or date_to - timedelta(days=DEFAULT_STATS_DAYS)
    try:
        up_average = await ap_service.up_average(db, ap, date_from, date_to)
        down_average = await ap_service.down_average(db, ap, date_from, date_to)
    except ValidationError as e:
        raise HTTPException(status_code=422, detail=str(e))

    detail = AccessPointDetailOut.model_validate(ap)
    detail.latest_seen = await ap_service.latest_seen(db, ap)
    detail.earliest_seen = await ap_service.earliest_seen(db, ap)
    detail.up_average = up_average
    detail.down_average = down_average
    return detail

@router.post(
    "/",
    response_model=AccessPointDetailOut,
    status_code=201,
    summary="Создать новую точку доступа",
    responses={
        404: {"description": "Wisp not found"}
    }
)
async def create_access_point(
    data: AccessPointCreate,
    db: AsyncSession = Depends(get_db_session),
    current_user: User = Depends(get_current_active_user),
):
    try:
        ap = await ap_service.create_access_point(db, data)
    except NotFoundError as e:
        raise HTTPException(status_code=404, detail=str(e))
    return AccessPointDetailOut.model_validate(ap)

@router.put(
    "/{ap_id}",
    response_model=AccessPointDetailOut,
    summary="Обновить точку доступа",
    description="Обновляет поля точки доступа и её набора свойств (public, notes, site_description)."
)
async def update_access_point(
    ap_id: int,
    data: AccessPointUpdate,
    db: AsyncSession = Depends(get_db_session),
    current_user: User = Depends(get_current_active_user),
):
    try:
        ap = await ap_service.update_access_point(db, ap_id, data)
    except NoResultFound:
        raise HTTPException(status_code=404, detail="AccessPoint not found")
    except NotFoundError as e:
        raise HTTPException(status_code=404, detail=str(e))
    return AccessPointDetailOut.model_validate(ap)

@router.delete(
    "/{ap_id}",
    status_code=204,
    summary="Удалить точку доступа",
    description="Удаляет точку доступа вместе с набором свойств и историей."
)
async def delete_access_point(
    ap_id: int,
    db: AsyncSession = Depends(get_db_session),
    current_user: User = Depends(get_current_active_user),
):
    try:
        await ap_service.delete_access_point(db, ap_id)
    except NoResultFound:
        raise HTTPException(status_code=404, detail="AccessPoint not found")

@router.post(
    "/{ap_id}/activities",
    response_model=ActivityOut,
    status_code=status.HTTP_201_CREATED,
    summary="Записать результат проверки",
    description="Сохраняет результат проверки доступности и обновляет статус точки доступа."
)
async def create_activity(
    ap_id: int,
    data: ActivityCreate,
    db: AsyncSession = Depends(get_db_session),
    current_user: User = Depends(get_current_active_user),
):
    ap = await _get_or_404(db, ap_id)
    return await record_activity(db, ap, data.status)

@router.get(
    "/{ap_id}/associated-users",
    response_model=list[AssociatedUser],
    summary="Пользователи, подключённые к точке доступа",
    description="Проксирует запрос к сервису пользователей WISP (owmw).",
    responses={
        502: {"description": "owmw unavailable or not configured"}
    }
)
async def get_associated_users(
    ap_id: int,
    db: AsyncSession = Depends(get_db_session)
):
    ap = await _get_or_404(db, ap_id)
    try:
        return await associated_users(ap)
    except ServiceError as e:
        raise HTTPException(status_code=502, detail=str(e))
