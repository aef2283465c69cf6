from datetime import datetime

import pytest
from sqlalchemy import select, func
from sqlalchemy.exc import NoResultFound

from geomonitor.db.models import ActivityHistory, PropertySet
from geomonitor.exceptions import NotFoundError, ValidationError
from geomonitor.schemas.ap import AccessPointCreate, AccessPointUpdate
from geomonitor.services import access_point as ap_service

pytestmark = pytest.mark.asyncio


async def _add_history(db, ap, status, start, last):
    db.add(ActivityHistory(access_point_id=ap.id, status=status, start_time=start, last_time=last))
    await db.commit()


async def test_reachable_creates_missing_property_set(db, make_ap):
    ap = await make_ap("ap-new")
    assert ap.property_set is None
    await ap_service.reachable(db, ap)
    assert ap.up and ap.status == 1
    count = (await db.execute(select(func.count()).select_from(PropertySet))).scalar_one()
    assert count == 1


async def test_unreachable_updates_existing_property_set(db, make_ap):
    ap = await make_ap("ap-old", reachable=True, notes="tower")
    await ap_service.unreachable(db, ap)
    assert ap.down and ap.status == 0
    assert ap.notes == "tower"
    count = (await db.execute(select(func.count()).select_from(PropertySet))).scalar_one()
    assert count == 1


async def test_seen_is_none_for_unknown_ap(db, make_ap):
    ap = await make_ap("ap")
    await _add_history(db, ap, 1.0, datetime(2024, 1, 1), datetime(2024, 1, 1, 23))
    assert await ap_service.latest_seen(db, ap) is None
    assert await ap_service.earliest_seen(db, ap) is None


async def test_latest_and_earliest_seen(db, make_ap):
    ap = await make_ap("ap", reachable=True)
    await _add_history(db, ap, 0.5, datetime(2024, 1, 2), datetime(2024, 1, 2, 23))
    await _add_history(db, ap, 1.0, datetime(2024, 1, 1), datetime(2024, 1, 1, 23))
    await _add_history(db, ap, 0.0, datetime(2024, 1, 3), datetime(2024, 1, 3, 23))
    # история с нулевым статусом не считается «увиденной»
    assert await ap_service.latest_seen(db, ap) == datetime(2024, 1, 2, 23)
    assert await ap_service.earliest_seen(db, ap) == datetime(2024, 1, 1, 23)


async def test_seen_without_histories(db, make_ap):
    ap = await make_ap("ap", reachable=False)
    assert await ap_service.latest_seen(db, ap) is None


async def test_up_and_down_average(db, make_ap):
    ap = await make_ap("ap", reachable=True)
    await _add_history(db, ap, 1.0, datetime(2024, 1, 1), datetime(2024, 1, 1, 23))
    await _add_history(db, ap, 0.5, datetime(2024, 1, 2), datetime(2024, 1, 2, 23))
    await _add_history(db, ap, 0.2, datetime(2024, 1, 3), datetime(2024, 1, 3, 23))
    start, end = datetime(2024, 1, 1), datetime(2024, 1, 31)
    assert await ap_service.up_average(db, ap, start, end) == 56.7
    assert await ap_service.down_average(db, ap, start, end) == 43.3


async def test_average_starts_at_activation_date(db, make_ap):
    ap = await make_ap("ap", reachable=True, activation_date=datetime(2024, 1, 2))
    await _add_history(db, ap, 0.0, datetime(2024, 1, 1), datetime(2024, 1, 1, 23))
    await _add_history(db, ap, 1.0, datetime(2024, 1, 2, 1), datetime(2024, 1, 2, 23))
    assert await ap_service.up_average(db, ap, datetime(2023, 12, 1), datetime(2024, 1, 31)) == 100.0


async def test_average_without_histories_is_none(db, make_ap):
    ap = await make_ap("ap")
    assert await ap_service.up_average(db, ap, datetime(2024, 1, 1), datetime(2024, 2, 1)) is None
    assert await ap_service.down_average(db, ap, datetime(2024, 1, 1), datetime(2024, 2, 1)) is None


async def test_average_rejects_inverted_period(db, make_ap):
    ap = await make_ap("ap")
    with pytest.raises(ValidationError):
        await ap_service.up_average(db, ap, datetime(2024, 2, 1), datetime(2024, 1, 1))


async def test_list_filters_sorts_and_counts(db, make_ap, wisp):
    await make_ap("bo-1", reachable=True, wisp=wisp)
    await make_ap("bo-2", reachable=False, wisp=wisp)
    await make_ap("bo-3", reachable=True)
    items, total = await ap_service.list_access_points(db, status="up", order_by="hostname", order_dir="desc")
    assert total == 2
    assert [ap.hostname for ap in items] == ["bo-3", "bo-1"]
    items, total = await ap_service.list_access_points(db, wisp=wisp, hostname="bo")
    assert total == 2
    items, total = await ap_service.list_access_points(db, per_page=1, page=2)
    assert total == 3 and [ap.hostname for ap in items] == ["bo-2"]
    with pytest.raises(ValidationError):
        await ap_service.list_access_points(db, status="sideways")


async def test_status_summary(db, make_ap, wisp):
    await make_ap("bo-1", reachable=True, wisp=wisp)
    await make_ap("bo-2", reachable=False, wisp=wisp)
    await make_ap("fe-1")
    assert await ap_service.status_summary(db) == {"up": 1, "down": 1, "unknown": 1, "total": 3}
    assert await ap_service.status_summary(db, wisp=wisp) == {"up": 1, "down": 1, "unknown": 0, "total": 2}
    assert (await ap_service.status_summary(db, hostname="fe"))["unknown"] == 1


async def test_create_update_delete(db, wisp):
    ap = await ap_service.create_access_point(db, AccessPointCreate(
        hostname="ap-crud", wisp_id=wisp.id, lat=44.5, lng=11.3, ip="192.168.1.10", public=True, notes="n",
    ))
    assert ap.id is not None
    assert ap.ip == "192.168.1.10"
    assert ap.public is True and ap.unknown

    ap = await ap_service.update_access_point(db, ap.id, AccessPointUpdate(city="Bologna", site_description="roof"))
    assert ap.city == "Bologna" and ap.site_description == "roof" and ap.notes == "n"

    await ap_service.delete_access_point(db, ap.id)
    assert await ap_service.get_access_point(db, ap.id) is None
    with pytest.raises(NoResultFound):
        await ap_service.delete_access_point(db, ap.id)


async def test_create_with_unknown_wisp(db):
    with pytest.raises(NotFoundError):
        await ap_service.create_access_point(db, AccessPointCreate(hostname="x", wisp_id=999, lat=0, lng=0))
