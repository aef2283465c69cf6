from typing import List, Literal, Union
from pydantic import BaseModel, Field


class MapAccessPoint(BaseModel):
    kind: Literal["access_point"] = "access_point"
    id: int
    hostname: str
    lat: float
    lng: float
    status: int = Field(..., description="1: up, 0: down, -1: неизвестно")


class MapCluster(BaseModel):
    kind: Literal["cluster"] = "cluster"
    lat: float = Field(..., description="Широта центра кластера")
    lng: float = Field(..., description="Долгота центра кластера")
    size: int = Field(..., description="Число точек доступа в кластере")
    up: int
    down: int
    unknown: int
    access_point_ids: List[int]


MapItem = Union[MapAccessPoint, MapCluster]


class MapResponse(BaseModel):
    radius_km: float = Field(..., description="Радиус кластеризации")
    items: List[MapItem] = Field(..., description="Одиночные точки и кластеры")
