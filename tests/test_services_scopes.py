from datetime import datetime

import pytest

from geomonitor.services import scopes

pytestmark = pytest.mark.asyncio


async def _hostnames(db, stmt):
    result = await db.execute(stmt)
    return [ap.hostname for ap in result.scalars().all()]


@pytest.fixture
async def fleet(make_ap, wisp):
    return [
        await make_ap("bo-up", reachable=True, wisp=wisp, public=True),
        await make_ap("bo-down", reachable=False, wisp=wisp),
        await make_ap("fe-unknown", wisp=wisp),
        await make_ap("fe-null", reachable=None, public=True),
    ]


async def test_status_scopes(db, fleet):
    assert await _hostnames(db, scopes.up()) == ["bo-up"]
    assert await _hostnames(db, scopes.down()) == ["bo-down"]
    assert sorted(await _hostnames(db, scopes.known())) == ["bo-down", "bo-up"]
    # без набора свойств и с reachable=NULL: одинаково unknown
    assert sorted(await _hostnames(db, scopes.unknown())) == ["fe-null", "fe-unknown"]


async def test_of_wisp_skips_filter_without_wisp(db, fleet, wisp):
    assert len(await _hostnames(db, scopes.of_wisp(None, None))) == 4
    assert sorted(await _hostnames(db, scopes.of_wisp(None, wisp))) == ["bo-down", "bo-up", "fe-unknown"]


async def test_on_georss(db, fleet):
    assert sorted(await _hostnames(db, scopes.on_georss())) == ["bo-up", "fe-null"]


async def test_hostname_like_and_all_status_helpers(db, fleet):
    assert sorted(await _hostnames(db, scopes.hostname_like(None, "bo-"))) == ["bo-down", "bo-up"]
    assert await _hostnames(db, scopes.all_up("bo")) == ["bo-up"]
    assert await _hostnames(db, scopes.all_down("fe")) == []
    assert sorted(await _hostnames(db, scopes.all_unknown())) == ["fe-null", "fe-unknown"]


async def test_scopes_compose(db, fleet, wisp):
    stmt = scopes.hostname_like(scopes.unknown(scopes.of_wisp(None, wisp)), "fe")
    assert await _hostnames(db, stmt) == ["fe-unknown"]


async def test_activated(db, make_ap):
    await make_ap("old", activation_date=datetime(2020, 1, 1))
    await make_ap("new", activation_date=datetime(2024, 6, 1))
    await make_ap("never")
    assert await _hostnames(db, scopes.activated(None, datetime(2022, 1, 1))) == ["old"]
    assert sorted(await _hostnames(db, scopes.activated())) == ["new", "old"]


async def test_sort_with_status_and_fallback(db, fleet):
    ordered = await _hostnames(db, scopes.sort_with(scopes.known(), "status", "desc"))
    assert ordered == ["bo-up", "bo-down"]
    ordered = await _hostnames(db, scopes.sort_with(None, "hostname", "asc"))
    assert ordered == sorted(ordered)
    # неизвестное поле: сортировка по id, без SQL-инъекций
    ordered = await _hostnames(db, scopes.sort_with(None, "hostname; DROP TABLE access_points", "desc"))
    assert ordered == ["fe-null", "fe-unknown", "bo-down", "bo-up"]


async def test_paginate(db, make_ap):
    for i in range(25):
        await make_ap(f"ap-{i:02d}")
    stmt = scopes.sort_with(None, "id")
    assert len(await _hostnames(db, scopes.paginate(stmt, 1))) == 10
    assert await _hostnames(db, scopes.paginate(stmt, 3)) == [f"ap-{i:02d}" for i in range(20, 25)]


async def test_around_is_inclusive_and_ordered(db, make_ap):
    a = await make_ap("a", 45.0, 9.0)
    b = await make_ap("b", 45.01, 9.0)   # ~1.1 км
    await make_ap("c", 45.02, 9.0)       # ~2.2 км
    await make_ap("far", 46.0, 10.0)
    nearby = await scopes.around(db, a.coords)
    assert [ap.hostname for ap in nearby] == ["a", "b"]
    nearby = await scopes.around(db, b.coords)
    assert [ap.hostname for ap in nearby] == ["a", "b", "c"]
    assert await scopes.around(db, (0.0, 0.0)) == []


async def test_around_respects_base_statement(db, make_ap, wisp):
    await make_ap("a", 45.0, 9.0, wisp=wisp)
    await make_ap("b", 45.001, 9.0)
    nearby = await scopes.around(db, (45.0, 9.0), 1.0, stmt=scopes.of_wisp(None, wisp))
    assert [ap.hostname for ap in nearby] == ["a"]
