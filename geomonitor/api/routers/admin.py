from datetime import datetime, timezone

from fastapi import APIRouter, Depends, HTTPException, status
from sqlalchemy.ext.asyncio import AsyncSession
from geomonitor.api.deps import get_db_session
from geomonitor.services.activity import archive_activities
from geomonitor.services.security import get_current_active_user
from geomonitor.db.models.user import User

router = APIRouter(prefix="/v1/admin", tags=["admin"])

@router.post("/archive-activities", status_code=status.HTTP_200_OK)
async def archive_all_activities(
    db: AsyncSession = Depends(get_db_session),
    current_user: User = Depends(get_current_active_user),
):
    if not current_user.is_superuser:
        raise HTTPException(status_code=403, detail="Administrator rights required")
    # Сегодняшние проверки остаются «сырыми» до конца дня
    today = datetime.now(timezone.utc).replace(hour=0, minute=0, second=0, microsecond=0)
    created = await archive_activities(db, before=today)
    return {"detail": "Activities archived", "histories_created": created}
