from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware

from geomonitor.core.config import settings
from geomonitor.core.logging_config import setup_logging
from geomonitor.db.base import Base
from geomonitor.db.session import async_engine
from geomonitor.tasks.scheduler import start_scheduler, stop_scheduler

from geomonitor.api.routers.health import router as health_router
from geomonitor.api.routers.auth import router as auth_router
from geomonitor.api.routers.wisp import router as wisp_router
from geomonitor.api.routers.access_point import router as access_point_router
from geomonitor.api.routers.map import router as map_router
from geomonitor.api.routers.admin import router as admin_router

app = FastAPI(
    title=settings.APP_NAME,
    version="1.0.0"
)

app.add_middleware(
    CORSMiddleware,
    allow_origins=["*"],
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)

@app.on_event("startup")
async def on_startup():
    setup_logging()
    async with async_engine.begin() as conn:
        await conn.run_sync(Base.metadata.create_all)
    start_scheduler()

@app.on_event("shutdown")
async def on_shutdown():
    stop_scheduler()

# Подключаем роутеры
app.include_router(health_router, tags=["health"])
app.include_router(auth_router, tags=["auth"])
app.include_router(wisp_router, tags=["wisp"])
app.include_router(access_point_router, tags=["access_points"])
app.include_router(map_router, tags=["map"])
app.include_router(admin_router, tags=["admin"])
