import pytest


@pytest.mark.asyncio
async def test_health(client):
    response = await client.get("/health")
    assert response.status_code == 200
    data = response.json()
    assert data["status"] == "operational"
    assert data["environment"] == "test"
    assert "timestamp" in data


@pytest.mark.asyncio
async def test_root_lists_endpoints(client):
    response = await client.get("/")
    assert response.status_code == 200
    assert response.json()["endpoints"] == {
        "auth": "/api/auth",
        "gadgets": "/api/gadgets",
        "health": "/health",
    }


@pytest.mark.asyncio
async def test_unknown_endpoint(client):
    response = await client.get("/api/secret-lair")
    assert response.status_code == 404
    data = response.json()
    assert data["code"] == "NOT_FOUND"
    assert data["message"] == "The requested endpoint GET /api/secret-lair does not exist"
    assert "gadgets" in data["availableEndpoints"]


@pytest.mark.asyncio
async def test_method_not_allowed(client):
    response = await client.put("/health")
    assert response.status_code == 405
    assert response.json()["code"] == "METHOD_NOT_ALLOWED"


@pytest.mark.asyncio
async def test_malformed_body(client):
    response = await client.post(
        "/api/auth/login",
        content="{not json",
        headers={"Content-Type": "application/json"},
    )
    assert response.status_code == 400
    assert response.json()["code"] == "VALIDATION_ERROR"
