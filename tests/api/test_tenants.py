"""Tests for tenant resolution and GET /api/tenants/info."""

from httpx import AsyncClient


async def test_info_for_default_tenant(client: AsyncClient) -> None:
    """Without a tenant header the default demo tenant is used."""
    response = await client.get("/api/tenants/info")
    assert response.status_code == 200
    body = response.json()
    assert body["success"] is True
    data = body["data"]
    assert data["tenantId"] == "demo-tenant"
    assert data["tier"] == "FREE"
    assert data["limits"]["skuLimit"] == 100
    assert data["features"]["hasAdvancedAnalytics"] is False


async def test_info_counts_api_calls(client: AsyncClient) -> None:
    headers = {"X-Tenant-ID": "globex-premium"}
    first = await client.get("/api/tenants/info", headers=headers)
    second = await client.get("/api/tenants/info", headers=headers)
    assert first.json()["data"]["usage"]["apiCallsToday"] == 1
    assert second.json()["data"]["usage"]["apiCallsToday"] == 2
    assert second.json()["data"]["limits"]["skuLimit"] == -1


async def test_usage_is_counted_per_tenant(client: AsyncClient) -> None:
    await client.get("/api/inventory/optimize", headers={"X-Tenant-ID": "acme-growth"})
    response = await client.get("/api/tenants/info", headers={"X-Tenant-ID": "demo-tenant"})
    assert response.json()["data"]["usage"]["apiCallsToday"] == 1


async def test_unknown_tenant_returns_404(client: AsyncClient) -> None:
    response = await client.get("/api/tenants/info", headers={"X-Tenant-ID": "nobody"})
    assert response.status_code == 404
    body = response.json()
    assert body["success"] is False
    assert body["code"] == "TENANT_NOT_FOUND"
    assert body["details"] == {"tenant_id": "nobody"}


async def test_malformed_tenant_returns_400(client: AsyncClient) -> None:
    response = await client.get("/api/tenants/info", headers={"X-Tenant-ID": "bad tenant!"})
    assert response.status_code == 400
    assert response.json()["code"] == "VALIDATION_ERROR"
