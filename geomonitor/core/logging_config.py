import logging
import os
import sys
from logging.handlers import RotatingFileHandler

from geomonitor.core.config import settings

# Сторонние логгеры, которые слишком болтливы на INFO
NOISY_LOGGERS = ("apscheduler.executors.default", "httpx")


def setup_logging() -> None:
    """
    Инициализация логгирования сервиса мониторинга:
    - создаёт каталог логов, если его нет;
    - пишет в ротирующий файл и в stdout;
    - приглушает болтливые сторонние логгеры до WARNING.
    """
    os.makedirs(settings.LOG_DIR, exist_ok=True)
    log_path = os.path.join(settings.LOG_DIR, settings.LOG_FILENAME)

    # До 10 МБ на файл, 5 архивов
    file_handler = RotatingFileHandler(
        filename=log_path,
        maxBytes=10 * 1024 * 1024,
        backupCount=5,
        encoding="utf-8"
    )
    fmt = logging.Formatter("%(asctime)s %(levelname)s [%(name)s] %(message)s")
    file_handler.setFormatter(fmt)

    stream_handler = logging.StreamHandler(sys.stdout)
    stream_handler.setFormatter(fmt)

    logging.basicConfig(
        level=getattr(logging, settings.LOG_LEVEL.upper(), logging.INFO),
        handlers=[file_handler, stream_handler]
    )
    for name in NOISY_LOGGERS:
        logging.getLogger(name).setLevel(logging.WARNING)
