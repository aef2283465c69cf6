from datetime import datetime, timedelta
from types import SimpleNamespace

import pytest
from sqlalchemy import func, insert, select
from sqlalchemy.sql.dml import Update

from geomonitor.db.models import Activity, ActivityHistory, PropertySet
from geomonitor.services.activity import archive_activities, record_activity

pytestmark = pytest.mark.asyncio


async def test_record_activity_updates_reachability(db, make_ap):
    ap = await make_ap("ap")
    activity = await record_activity(db, ap, True)
    assert activity.id is not None and activity.status is True
    assert ap.up
    await record_activity(db, ap, False)
    assert ap.down


async def test_archive_consolidates_per_day(db, make_ap):
    ap = await make_ap("ap", reachable=True)
    other = await make_ap("other", reachable=True)
    checks = [
        (ap, True, datetime(2024, 3, 1, 8)),
        (ap, False, datetime(2024, 3, 1, 12)),
        (ap, True, datetime(2024, 3, 1, 20)),
        (ap, True, datetime(2024, 3, 2, 9)),
        (other, False, datetime(2024, 3, 1, 10)),
        (ap, True, datetime(2024, 3, 5, 9)),  # после границы, не трогаем
    ]
    for target, status, at in checks:
        db.add(Activity(access_point_id=target.id, status=status, created_at=at))
    await db.commit()

    created = await archive_activities(db, before=datetime(2024, 3, 5))
    assert created == 3

    histories = (await db.execute(
        select(ActivityHistory).order_by(ActivityHistory.access_point_id, ActivityHistory.start_time)
    )).scalars().all()
    summary = [(h.access_point_id, round(h.status, 3), h.start_time, h.last_time) for h in histories]
    assert summary == [
        (ap.id, 0.667, datetime(2024, 3, 1, 8), datetime(2024, 3, 1, 20)),
        (ap.id, 1.0, datetime(2024, 3, 2, 9), datetime(2024, 3, 2, 9)),
        (other.id, 0.0, datetime(2024, 3, 1, 10), datetime(2024, 3, 1, 10)),
    ]
    remaining = (await db.execute(select(Activity))).scalars().all()
    assert [a.created_at for a in remaining] == [datetime(2024, 3, 5, 9)]


async def test_archive_without_activities(db):
    assert await archive_activities(db, before=datetime(2024, 1, 1)) == 0


async def test_record_activity_survives_concurrent_property_set(db, make_ap, monkeypatch):
    # Набор свойств уже есть в БД, но первое UPDATE "не видит" его,
    # как если бы другая сессия вставила строку между UPDATE и INSERT
    ap = await make_ap("ap", reachable=True)
    real_execute = db.execute
    skipped = []

    async def execute(statement, *args, **kwargs):
        if isinstance(statement, Update) and not skipped:
            skipped.append(statement)
            return SimpleNamespace(rowcount=0)
        return await real_execute(statement, *args, **kwargs)

    monkeypatch.setattr(db, "execute", execute)
    activity = await record_activity(db, ap, False)
    monkeypatch.undo()

    assert skipped
    assert activity.id is not None and activity.status is False
    assert ap.down
    stored = (await db.execute(select(Activity))).scalars().all()
    assert [a.id for a in stored] == [activity.id]
    count = (await db.execute(select(func.count()).select_from(PropertySet))).scalar_one()
    assert count == 1


async def test_archive_many_activities(db, make_ap):
    # больше, чем допускает число параметров одного запроса (32767)
    ap = await make_ap("ap", reachable=True)
    start = datetime(2024, 3, 1)
    rows = [
        {"access_point_id": ap.id, "status": i % 2 == 0, "created_at": start + timedelta(seconds=i)}
        for i in range(33000)
    ]
    await db.execute(insert(Activity), rows)
    await db.commit()

    assert await archive_activities(db, before=datetime(2024, 3, 2)) == 1
    history = (await db.execute(select(ActivityHistory))).scalars().one()
    assert history.status == pytest.approx(0.5)
    assert history.start_time == start
    assert history.last_time == start + timedelta(seconds=32999)
    remaining = (await db.execute(select(func.count()).select_from(Activity))).scalar_one()
    assert remaining == 0
