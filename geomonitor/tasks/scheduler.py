import logging
from datetime import datetime, timezone

from apscheduler.schedulers.asyncio import AsyncIOScheduler
from apscheduler.triggers.cron import CronTrigger

from geomonitor.core.config import settings
from geomonitor.db.session import AsyncSessionLocal
from geomonitor.services.activity import archive_activities

logger = logging.getLogger(__name__)

ARCHIVE_JOB_ID = "archive_activities"

# Инициализируем планировщик
scheduler = AsyncIOScheduler()

async def _run_archive_job() -> None:
    """
    Обёртка для асинхронного запуска архивации активностей за прошедшие дни.
    """
    logger.info(f"Job '{ARCHIVE_JOB_ID}' started")
    today = datetime.now(timezone.utc).replace(hour=0, minute=0, second=0, microsecond=0)
    async with AsyncSessionLocal() as session:
        created = await archive_activities(session, before=today)
    logger.info(f"Job '{ARCHIVE_JOB_ID}' finished, {created} histories created")

def start_scheduler() -> None:
    """
    Запускает APScheduler с ежедневной архивацией активностей
    (час задаёт settings.ACTIVITY_ARCHIVE_HOUR).
    """
    scheduler.add_job(
        _run_archive_job,
        trigger=CronTrigger(hour=settings.ACTIVITY_ARCHIVE_HOUR, minute=0),
        id=ARCHIVE_JOB_ID,
        replace_existing=True,
        coalesce=True,
        max_instances=1
    )
    if not scheduler.running:
        scheduler.start()
    logger.info(f"Scheduler started: job '{ARCHIVE_JOB_ID}' scheduled at {settings.ACTIVITY_ARCHIVE_HOUR:02d}:00 daily")

def stop_scheduler() -> None:
    if scheduler.running:
        scheduler.shutdown(wait=False)
