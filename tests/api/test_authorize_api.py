"""Tests for the authorization check endpoint."""

from httpx import AsyncClient


async def test_authorize_allowed_and_denied(client: AsyncClient, seeded, login) -> None:
    headers = await login("admin@acme-logistics.com")
    allowed = await client.post(
        "/api/v1/authorize",
        json={
            "category": "vehicles",
            "action": "delete",
            "company_id": seeded.company.id,
            "vehicle_type": "Truck",
        },
        headers=headers,
    )
    assert allowed.status_code == 200
    assert allowed.json() == {"allowed": True, "error": None, "message": None}

    other_company = await client.post(
        "/api/v1/authorize",
        json={"category": "vehicles", "action": "read", "company_id": "elsewhere"},
        headers=headers,
    )
    assert other_company.json()["allowed"] is False
    assert other_company.json()["error"] == "TENANT_MISMATCH"


async def test_authorize_unknown_action(client: AsyncClient, seeded, login) -> None:
    headers = await login("admin@acme-logistics.com")
    response = await client.post(
        "/api/v1/authorize",
        json={"category": "vehicles", "action": "fly", "company_id": seeded.company.id},
        headers=headers,
    )
    assert response.json()["allowed"] is False
    assert response.json()["error"] == "VALIDATION_ERROR"


async def test_authorize_requires_authentication(client: AsyncClient, seeded) -> None:
    response = await client.post(
        "/api/v1/authorize", json={"category": "vehicles", "action": "read"}
    )
    assert response.status_code == 401
