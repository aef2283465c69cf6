import logging
from datetime import datetime
from itertools import groupby

from sqlalchemy import select, delete
from sqlalchemy.ext.asyncio import AsyncSession

from geomonitor.db.models.access_point import AccessPoint
from geomonitor.db.models.activity import Activity
from geomonitor.db.models.activity_history import ActivityHistory
from geomonitor.services.access_point import set_reachable_to

logger = logging.getLogger(__name__)


async def record_activity(db: AsyncSession, ap: AccessPoint, status: bool) -> Activity:
    """
    Сохраняет результат проверки доступности и переводит точку в
    reachable/unreachable.
    """
    activity = Activity(access_point_id=ap.id, status=status)
    db.add(activity)
    await db.flush()
    await set_reachable_to(db, ap, status)
    await db.refresh(activity)
    logger.debug(f"Activity for AP {ap.hostname}: {'up' if status else 'down'}")
    return activity


async def archive_activities(db: AsyncSession, before: datetime) -> int:
    """
    Сворачивает «сырые» активности старше `before` в истории: одна запись
    ActivityHistory на точку доступа за каждый день. status истории: доля
    успешных проверок, start_time/last_time: первая и последняя проверки.
    Свёрнутые активности удаляются.

    Returns:
        Количество созданных историй.
    """
    result = await db.execute(
        select(Activity)
        .where(Activity.created_at < before)
        .order_by(Activity.access_point_id, Activity.created_at)
    )
    activities = result.scalars().all()
    if not activities:
        logger.info("Нет активностей для архивации")
        return 0

    created = 0
    for (ap_id, day), group in groupby(activities, key=lambda a: (a.access_point_id, a.created_at.date())):
        group = list(group)
        up_count = sum(1 for a in group if a.status)
        db.add(ActivityHistory(
            access_point_id=ap_id,
            status=up_count / len(group),
            start_time=group[0].created_at,
            last_time=group[-1].created_at,
        ))
        created += 1

    # тот же предикат, что и при выборке: без списка id в параметрах запроса
    await db.execute(delete(Activity).where(Activity.created_at < before))
    await db.commit()
    logger.info(f"Архивировано {len(activities)} активностей в {created} историй")
    return created
