from datetime import datetime
from typing import Optional
from pydantic import BaseModel, Field


class WispCreate(BaseModel):
    name: str = Field(..., min_length=1, description="Название WISP")
    owmw_url: Optional[str] = Field(None, description="URL сервиса пользователей owmw")
    owmw_username: Optional[str] = None
    owmw_password: Optional[str] = None


class WispOut(BaseModel):
    id: int
    name: str
    owmw_url: Optional[str] = None
    created_at: datetime

    class Config:
        from_attributes = True


class AssociatedUser(BaseModel):
    """Пользователь, подключённый к точке доступа (данные owmw)."""
    mac_address: Optional[str] = None
    ip_address: Optional[str] = None
    access_point: Optional[str] = None
    auth_method: Optional[str] = None

    model_config = {"extra": "allow"}
