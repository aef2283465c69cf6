from pydantic_settings import BaseSettings
from pydantic import Field


class Settings(BaseSettings):
    # Окружение: production, development, testing
    ENV: str = Field(
        "production",
        env="ENV",
        description="Application environment",
    )
    DEBUG: bool = Field(
        False,
        env="DEBUG",
        description="Turn on debug mode (reload, detailed errors)",
    )

    # Подключение к БД (asyncpg в проде, aiosqlite для локального запуска)
    DATABASE_URL: str = Field(
        "sqlite+aiosqlite:///./geomonitor.db",
        env="DATABASE_URL",
    )

    APP_NAME: str = Field(
        "Geographic Monitoring",
        env="APP_NAME",
        description="Application name for docs/title",
    )

    # JWT
    SECRET_KEY: str = Field(
        "change-me",
        env="SECRET_KEY",
        description="Secret used to sign access tokens",
    )
    ACCESS_TOKEN_EXPIRE_HOURS: int = Field(
        12,
        env="ACCESS_TOKEN_EXPIRE_HOURS",
    )

    # Карта и списки
    CLUSTER_RADIUS_KM: float = Field(
        2.0,
        env="CLUSTER_RADIUS_KM",
        description="Radius used to group access points on the map",
    )
    PAGE_SIZE: int = Field(
        10,
        env="PAGE_SIZE",
        description="Access points per page in admin listings",
    )

    # Внешний сервис пользователей WISP (owmw)
    OWMW_TIMEOUT: float = Field(
        10.0,
        env="OWMW_TIMEOUT",
        description="Timeout (s) for associated users lookups",
    )

    # Архивация активностей
    ACTIVITY_ARCHIVE_HOUR: int = Field(
        3,
        env="ACTIVITY_ARCHIVE_HOUR",
        description="Hour of day when raw activities are consolidated",
    )

    # Логи
    LOG_LEVEL: str = Field(
        "INFO",
        env="LOG_LEVEL",
        description="Logging level",
    )
    LOG_DIR: str = Field(
        "logs",
        env="LOG_DIR",
        description="Directory for log files",
    )
    LOG_FILENAME: str = Field(
        "geomonitor.log",
        env="LOG_FILENAME",
        description="Log file name",
    )

    model_config = {
        "env_file": ".env",
        "case_sensitive": True,
        "extra": "ignore",
    }


settings = Settings()
