from fastapi import APIRouter, Depends, HTTPException
from sqlalchemy.ext.asyncio import AsyncSession
from geomonitor.api.deps import get_db_session
from geomonitor.db.models.user import User
from geomonitor.schemas.wisp import WispCreate, WispOut
from geomonitor.services import wisp as wisp_service
from geomonitor.services.security import get_current_active_user
from typing import List

router = APIRouter(prefix="/v1/wisps", tags=["Wisp"])

@router.get("/", response_model=List[WispOut], summary="Получить список WISP", description="Возвращает список всех WISP.")
async def list_wisps(db: AsyncSession = Depends(get_db_session)):
    return await wisp_service.list_wisps(db)

@router.get("/{wisp_id}", response_model=WispOut, summary="Получить WISP по ID")
async def get_wisp(wisp_id: int, db: AsyncSession = Depends(get_db_session)):
    wisp = await wisp_service.get_wisp(db, wisp_id)
    if not wisp:
        raise HTTPException(status_code=404, detail="Wisp not found")
    return wisp

@router.post(
    "/",
    response_model=WispOut,
    status_code=201,
    summary="Создать WISP",
    responses={409: {"description": "Wisp with this name already exists"}}
)
async def create_wisp(
    data: WispCreate,
    db: AsyncSession = Depends(get_db_session),
    current_user: User = Depends(get_current_active_user),
):
    try:
        return await wisp_service.create_wisp(db, data)
    except ValueError as e:
        raise HTTPException(status_code=409, detail=str(e))
