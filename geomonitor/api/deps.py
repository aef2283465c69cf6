# geomonitor/api/deps.py

from typing import AsyncGenerator

from fastapi import Depends, HTTPException, Query
from sqlalchemy.ext.asyncio import AsyncSession

from geomonitor.db.models.wisp import Wisp
from geomonitor.db.session import AsyncSessionLocal


async def get_db_session() -> AsyncGenerator[AsyncSession, None]:
    """
    Зависимость FastAPI, возвращающая асинхронную сессию SQLAlchemy.
    Сессия автоматически открывается при входе в контекст и закрывается по выходу.
    """
    async with AsyncSessionLocal() as session:
        yield session


async def get_wisp_filter(
    wisp_id: int | None = Query(None, description="Фильтр по WISP"),
    db: AsyncSession = Depends(get_db_session),
) -> Wisp | None:
    """
    Необязательный фильтр по WISP: нет параметра: None (фильтр пропускается),
    неизвестный id: 404.
    """
    if wisp_id is None:
        return None
    wisp = await db.get(Wisp, wisp_id)
    if wisp is None:
        raise HTTPException(status_code=404, detail=f"Wisp id={wisp_id} not found")
    return wisp
