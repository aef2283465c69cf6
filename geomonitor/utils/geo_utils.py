import math
from typing import Iterable, Sequence, Tuple

import numpy as np

from geomonitor.utils.math_utils import clamp, mean


Coords = Tuple[float, float]

# Те же константы, что и у geokit (километры)
EARTH_RADIUS_KM = 6376.77271
KMS_PER_LATITUDE_DEGREE = 111.1819


def distances_km(origin: Coords, lats: Sequence[float], lngs: Sequence[float]) -> np.ndarray:
    """
    Векторно считает расстояния по большому кругу (формула гаверсинусов)
    от точки origin до набора точек.

    Args:
        origin: (lat, lng) в градусах.
        lats: широты точек.
        lngs: долготы точек (той же длины, что и lats).

    Returns:
        Массив расстояний в километрах.
    """
    lat0, lng0 = (math.radians(c) for c in origin)
    lat = np.radians(np.asarray(lats, dtype=float))
    lng = np.radians(np.asarray(lngs, dtype=float))
    a = np.sin((lat - lat0) / 2) ** 2 + math.cos(lat0) * np.cos(lat) * np.sin((lng - lng0) / 2) ** 2
    # ошибки округления могут вывести a за [0, 1]
    a = np.clip(a, 0.0, 1.0)
    return 2 * EARTH_RADIUS_KM * np.arcsin(np.sqrt(a))


def bounding_box(origin: Coords, within_km: float) -> Tuple[float, float, float, float]:
    """
    Прямоугольник (min_lat, max_lat, min_lng, max_lng), гарантированно
    содержащий круг радиуса within_km вокруг origin. Используется как
    грубый SQL-фильтр перед точной проверкой расстояния.

    У полюсов и при переходе через 180-й меридиан долгота не ограничивается.
    """
    lat, lng = origin
    dlat = within_km / KMS_PER_LATITUDE_DEGREE
    min_lat = clamp(lat - dlat, -90.0, 90.0)
    max_lat = clamp(lat + dlat, -90.0, 90.0)

    cos_lat = math.cos(math.radians(max(abs(min_lat), abs(max_lat))))
    if cos_lat <= 1e-9:
        return min_lat, max_lat, -180.0, 180.0
    dlng = within_km / (KMS_PER_LATITUDE_DEGREE * cos_lat)
    min_lng, max_lng = lng - dlng, lng + dlng
    if min_lng < -180.0 or max_lng > 180.0:
        return min_lat, max_lat, -180.0, 180.0
    return min_lat, max_lat, min_lng, max_lng


def centroid(points: Iterable[Coords]) -> Coords:
    """
    Центр группы точек: среднее по широте и долготе. Для кластеров
    радиусом в пару километров этого достаточно.
    """
    points = list(points)
    if not points:
        raise ValueError("Cannot compute centroid of no points")
    lats, lngs = zip(*points)
    return mean(lats), mean(lngs)
