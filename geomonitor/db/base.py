from sqlalchemy.orm import declarative_base

Base = declarative_base()

# Импорт моделей, чтобы таблицы создавались автоматически
from geomonitor.db.models import (
    wisp,
    access_point,
    property_set,
    activity,
    activity_history,
    user,
)
