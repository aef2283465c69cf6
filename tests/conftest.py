import pytest
from httpx import AsyncClient, ASGITransport
from sqlalchemy.ext.asyncio import create_async_engine, AsyncSession
from sqlalchemy.orm import sessionmaker
from sqlalchemy.pool import StaticPool

from geomonitor.api.deps import get_db_session
from geomonitor.db.base import Base
from geomonitor.db.models import AccessPoint, PropertySet, User, Wisp
from geomonitor.main import app
from geomonitor.services.security import get_current_active_user


@pytest.fixture
async def engine():
    # Одна in-memory база на тест, общая для всех сессий
    engine = create_async_engine(
        "sqlite+aiosqlite://",
        poolclass=StaticPool,
        connect_args={"check_same_thread": False},
    )
    async with engine.begin() as conn:
        await conn.run_sync(Base.metadata.create_all)
    yield engine
    await engine.dispose()


@pytest.fixture
def session_factory(engine):
    return sessionmaker(bind=engine, class_=AsyncSession, expire_on_commit=False)


@pytest.fixture
async def db(session_factory):
    async with session_factory() as session:
        yield session


@pytest.fixture
def admin_user():
    return User(id=1, username="noc", hashed_password="x", is_active=True, is_superuser=True)


@pytest.fixture
async def client(session_factory, admin_user):
    async def override_db():
        async with session_factory() as session:
            yield session

    app.dependency_overrides[get_db_session] = override_db
    app.dependency_overrides[get_current_active_user] = lambda: admin_user
    async with AsyncClient(transport=ASGITransport(app=app), base_url="http://test") as ac:
        yield ac
    app.dependency_overrides.clear()


@pytest.fixture
async def wisp(db):
    wisp = Wisp(
        name="Provincia WiFi",
        owmw_url="http://owmw.example.org",
        owmw_username="owmw",
        owmw_password="secret",
    )
    db.add(wisp)
    await db.commit()
    await db.refresh(wisp)
    return wisp


@pytest.fixture
def make_ap(db):
    """Фабрика точек доступа: make_ap("ap-1", 45.0, 9.0, reachable=True)."""
    async def _make(hostname, lat=45.0, lng=9.0, reachable=None, wisp=None, public=None, **kwargs):
        ap = AccessPoint(hostname=hostname, lat=lat, lng=lng, wisp_id=wisp.id if wisp else None)
        if reachable is not None or public is not None:
            ap.property_set = PropertySet(reachable=reachable, public=bool(public))
        # notes, activation_date и т.п.: после набора свойств
        for key, value in kwargs.items():
            setattr(ap, key, value)
        db.add(ap)
        await db.commit()
        await db.refresh(ap)
        return ap
    return _make
