from datetime import datetime
from typing import Optional, List, Literal
from ipaddress import IPv4Address
from pydantic import BaseModel, Field

StatusFilter = Literal["up", "down", "known", "unknown"]


class AccessPointBase(BaseModel):
    hostname: str = Field(..., min_length=1, description="Имя хоста точки доступа")
    wisp_id: Optional[int] = Field(None, description="ID WISP-а")
    lat: float = Field(..., ge=-90, le=90, description="Широта")
    lng: float = Field(..., ge=-180, le=180, description="Долгота")
    address: Optional[str] = Field(None, description="Адрес установки")
    city: Optional[str] = Field(None, description="Город")
    activation_date: Optional[datetime] = Field(None, description="Дата активации")
    ip: Optional[IPv4Address] = Field(None, description="Management IPv4")
    public: Optional[bool] = Field(None, description="Показывать в georss")
    notes: Optional[str] = Field(None, description="Заметки")
    site_description: Optional[str] = Field(None, description="Описание площадки")

class AccessPointCreate(AccessPointBase):
    pass

class AccessPointUpdate(BaseModel):
    hostname: Optional[str] = None
    wisp_id: Optional[int] = None
    lat: Optional[float] = Field(None, ge=-90, le=90)
    lng: Optional[float] = Field(None, ge=-180, le=180)
    address: Optional[str] = None
    city: Optional[str] = None
    activation_date: Optional[datetime] = None
    ip: Optional[IPv4Address] = None
    public: Optional[bool] = None
    notes: Optional[str] = None
    site_description: Optional[str] = None

class AccessPointOut(BaseModel):
    id: int = Field(..., description="Первичный ключ точки доступа")
    hostname: str = Field(..., description="Имя хоста")
    wisp_id: Optional[int] = Field(None, description="ID WISP-а")
    lat: float = Field(..., description="Широта")
    lng: float = Field(..., description="Долгота")
    address: Optional[str] = None
    city: Optional[str] = None
    ip: Optional[str] = Field(None, description="Management IPv4")
    activation_date: Optional[datetime] = None
    reachable: Optional[bool] = Field(None, description="true/false/null: неизвестно")
    status: int = Field(..., description="1: up, 0: down, -1: неизвестно")
    public: Optional[bool] = None

    class Config:
        from_attributes = True

class AccessPointDetailOut(AccessPointOut):
    notes: Optional[str] = None
    site_description: Optional[str] = None
    latest_seen: Optional[datetime] = Field(None, description="Последняя успешная активность")
    earliest_seen: Optional[datetime] = Field(None, description="Первая успешная активность")
    up_average: Optional[float] = Field(None, description="Доступность за период, %")
    down_average: Optional[float] = Field(None, description="Недоступность за период, %")

    class Config:
        from_attributes = True

class AccessPointListResponse(BaseModel):
    items: List[AccessPointOut] = Field(..., description="Список точек доступа")
    total: int = Field(..., description="Общее количество подходящих точек доступа")
    page: int = Field(..., description="Номер страницы (с 1)")
    per_page: int = Field(..., description="Размер страницы")

class StatusSummary(BaseModel):
    up: int
    down: int
    unknown: int
    total: int

class ActivityCreate(BaseModel):
    status: bool = Field(..., description="Была ли точка доступна при проверке")

class ActivityOut(BaseModel):
    id: int
    access_point_id: int
    status: bool
    created_at: datetime

    class Config:
        from_attributes = True
