# Пакет моделей базы данных
# Здесь импортируются все модели, чтобы Alembic мог их обнаружить
from .wisp import Wisp
from .access_point import AccessPoint
from .property_set import PropertySet
from .activity import Activity
from .activity_history import ActivityHistory
from .user import User
