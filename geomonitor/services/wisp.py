from sqlalchemy.ext.asyncio import AsyncSession
from sqlalchemy import select
from sqlalchemy.exc import IntegrityError
from geomonitor.db.models.wisp import Wisp
from geomonitor.schemas.wisp import WispCreate

async def get_wisp(db: AsyncSession, wisp_id: int) -> Wisp | None:
    result = await db.execute(select(Wisp).where(Wisp.id == wisp_id))
    return result.scalars().first()

async def list_wisps(db: AsyncSession) -> list[Wisp]:
    result = await db.execute(select(Wisp).order_by(Wisp.name))
    return result.scalars().all()

async def create_wisp(db: AsyncSession, data: WispCreate) -> Wisp:
    wisp = Wisp(**data.model_dump())
    db.add(wisp)
    try:
        await db.commit()
    except IntegrityError:
        await db.rollback()
        raise ValueError("Wisp with this name already exists")
    await db.refresh(wisp)
    return wisp
