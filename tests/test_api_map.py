import pytest

pytestmark = pytest.mark.asyncio


async def test_map_clusters_nearby_access_points(client, make_ap):
    await make_ap("a", 45.0, 9.0, reachable=True)
    await make_ap("b", 45.01, 9.0, reachable=False)
    await make_ap("far", 46.0, 10.0)
    resp = await client.get("/v1/map/")
    assert resp.status_code == 200
    data = resp.json()
    assert data["radius_km"] == 2.0
    kinds = [item["kind"] for item in data["items"]]
    assert kinds == ["cluster", "access_point"]
    assert data["items"][0]["size"] == 2
    assert data["items"][1]["hostname"] == "far"


async def test_map_bad_wisp_returns_422(client):
    response = await client.get("/v1/map/", params={"wisp_id": "not-an-int"})
    assert response.status_code == 422


async def test_georss_lists_public_only(client, make_ap):
    await make_ap("public", public=True)
    await make_ap("private", public=False)
    await make_ap("bare")
    resp = await client.get("/v1/map/georss")
    assert [ap["hostname"] for ap in resp.json()] == ["public"]
