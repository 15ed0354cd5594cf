import pytest
from httpx import ASGITransport, AsyncClient

from app.main import app
from app.seed import SEED_VEHICLES


@pytest.mark.asyncio
async def test_get_vehicles_returns_list():
    transport = ASGITransport(app=app)
    async with AsyncClient(transport=transport, base_url="http://test") as client:
        response = await client.get("/api/v1/vehicles")

    assert response.status_code == 200
    body = response.json()
    assert body["status"] == "success"
    assert isinstance(body["data"], list)
    assert len(body["data"]) == len(SEED_VEHICLES)


@pytest.mark.asyncio
async def test_get_vehicles_item_format():
    transport = ASGITransport(app=app)
    async with AsyncClient(transport=transport, base_url="http://test") as client:
        response = await client.get("/api/v1/vehicles")

    vehicle = response.json()["data"][0]
    for key in ("id", "brand", "model", "plate", "daily_rate", "seats", "status"):
        assert key in vehicle


@pytest.mark.asyncio
async def test_seeded_plates_are_normalized():
    transport = ASGITransport(app=app)
    async with AsyncClient(transport=transport, base_url="http://test") as client:
        response = await client.get("/api/v1/vehicles/1")

    assert response.json()["data"]["plate"] == "UBA 123A"


@pytest.mark.asyncio
async def test_get_vehicles_available_filter():
    transport = ASGITransport(app=app)
    async with AsyncClient(transport=transport, base_url="http://test") as client:
        response = await client.get("/api/v1/vehicles", params={"available": "true"})

    data = response.json()["data"]
    assert len(data) == 3
    assert all(v["status"] == "AVAILABLE" for v in data)


@pytest.mark.asyncio
async def test_get_vehicles_brand_filter_is_case_insensitive():
    transport = ASGITransport(app=app)
    async with AsyncClient(transport=transport, base_url="http://test") as client:
        response = await client.get("/api/v1/vehicles", params={"brand": "toyo"})

    data = response.json()["data"]
    assert {v["brand"] for v in data} == {"Toyota"}
    assert len(data) == 2


@pytest.mark.asyncio
async def test_get_vehicles_status_filter():
    transport = ASGITransport(app=app)
    async with AsyncClient(transport=transport, base_url="http://test") as client:
        response = await client.get("/api/v1/vehicles", params={"status": "UNAVAILABLE"})

    data = response.json()["data"]
    assert [v["id"] for v in data] == [4]


@pytest.mark.asyncio
async def test_get_vehicle_detail_not_found():
    transport = ASGITransport(app=app)
    async with AsyncClient(transport=transport, base_url="http://test") as client:
        response = await client.get("/api/v1/vehicles/999")

    assert response.status_code == 404
    body = response.json()
    assert body["status"] == "error"
    assert body["data"]["code"] == "VEHICLE_NOT_FOUND"


@pytest.mark.asyncio
async def test_get_vehicle_detail_has_recent_bookings():
    transport = ASGITransport(app=app)
    async with AsyncClient(transport=transport, base_url="http://test") as client:
        response = await client.get("/api/v1/vehicles/2")

    data = response.json()["data"]
    assert data["id"] == 2
    assert data["daily_rate"] == 240000
    assert data["recent_bookings"] == []
