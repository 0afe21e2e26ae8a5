"""Tests for the records sync API: routing, export pagination, bulk upsert."""

from datetime import datetime, timedelta, timezone

import pytest
from httpx import AsyncClient

from app.domain.models.identity import Role

RECORDS = [{"id": "v1", "name": "Asha"}, {"id": "v2", "name": "Bhanu"}, {"id": "v3", "name": "Chitra"}]


@pytest.fixture
async def tenant(create_identity, seed_partition, provisioner):
    """Identity u1 owning a private clone of master M."""
    await seed_partition("M", RECORDS)
    await provisioner.clone("M", "tenant_u1_M")
    return await create_identity("u1", allowed=["tenant_u1_M"])


@pytest.mark.asyncio
async def test_export_uses_sole_permitted_partition(async_client: AsyncClient, tenant):
    r = await async_client.get("/records", params={"limit": 2}, headers={"X-Identity-ID": "u1"})
    assert r.status_code == 200
    data = r.json()
    assert data["partitionId"] == "tenant_u1_M"
    assert [item["id"] for item in data["items"]] == ["v1", "v2"]
    assert data["hasMore"] is True
    assert data["count"] == 3
    assert data["page"] == 1
    assert "serverTime" in data


@pytest.mark.asyncio
async def test_export_second_page(async_client: AsyncClient, tenant):
    r = await async_client.get(
        "/records",
        params={"partitionId": "tenant_u1_M", "page": 2, "limit": 2},
        headers={"X-Identity-ID": "u1"},
    )
    assert r.status_code == 200
    data = r.json()
    assert [item["id"] for item in data["items"]] == ["v3"]
    assert data["hasMore"] is False


@pytest.mark.asyncio
async def test_export_since_server_time_returns_only_later_changes(async_client: AsyncClient, tenant):
    headers = {"X-Identity-ID": "u1"}
    first = (await async_client.get("/records", headers=headers)).json()

    push = await async_client.post(
        "/records/bulk-upsert",
        json={
            "partitionId": "tenant_u1_M",
            "changes": [
                {
                    "id": "v2",
                    "op": "upsert",
                    "payload": {"mobile": "9000000002"},
                    "updatedAt": (datetime.now(timezone.utc) + timedelta(days=1)).isoformat(),
                }
            ],
        },
        headers=headers,
    )
    assert push.status_code == 200

    r = await async_client.get("/records", params={"sinceUpdatedAt": first["serverTime"]}, headers=headers)
    data = r.json()
    assert [item["id"] for item in data["items"]] == ["v2"]
    assert data["items"][0]["mobile"] == "9000000002"


@pytest.mark.asyncio
async def test_export_invalid_since_is_422(async_client: AsyncClient, tenant):
    r = await async_client.get("/records", params={"sinceUpdatedAt": "yesterday"}, headers={"X-Identity-ID": "u1"})
    assert r.status_code == 422


@pytest.mark.asyncio
async def test_export_ambiguous_for_multi_partition_identity(async_client: AsyncClient, create_identity, seed_partition):
    await seed_partition("A", RECORDS)
    await seed_partition("B", RECORDS[:1])
    await create_identity("u2", allowed=["A", "B"])
    headers = {"X-Identity-ID": "u2"}

    r = await async_client.get("/records", headers=headers)
    assert r.status_code == 400

    r = await async_client.get("/records", params={"partitionId": "B"}, headers=headers)
    assert r.status_code == 200
    assert r.json()["partitionId"] == "B"
    assert r.json()["count"] == 1


@pytest.mark.asyncio
async def test_export_legacy_database_id_param(async_client: AsyncClient, create_identity, seed_partition):
    await seed_partition("A", RECORDS)
    await seed_partition("B", RECORDS[:1])
    await create_identity("u2", allowed=["A", "B"])

    r = await async_client.get("/records", params={"databaseId": "A"}, headers={"X-Identity-ID": "u2"})
    assert r.status_code == 200
    assert r.json()["partitionId"] == "A"


@pytest.mark.asyncio
async def test_export_other_tenant_partition_forbidden(async_client: AsyncClient, tenant, create_identity, provisioner):
    await provisioner.clone("M", "tenant_u2_M")
    await create_identity("u2", allowed=["tenant_u2_M"])

    r = await async_client.get("/records", params={"partitionId": "tenant_u1_M"}, headers={"X-Identity-ID": "u2"})
    assert r.status_code == 403


@pytest.mark.asyncio
async def test_admin_can_export_any_partition(async_client: AsyncClient, tenant, create_identity):
    await create_identity("root", role=Role.ADMIN, allowed=["M"])

    r = await async_client.get("/records", params={"partitionId": "tenant_u1_M"}, headers={"X-Identity-ID": "root"})
    assert r.status_code == 200
    assert r.json()["count"] == 3


@pytest.mark.asyncio
async def test_bulk_upsert_requires_explicit_partition(async_client: AsyncClient, tenant):
    body = {"changes": [{"id": "v9", "op": "upsert", "payload": {"name": "New"}}]}
    r = await async_client.post("/records/bulk-upsert", json=body, headers={"X-Identity-ID": "u1"})
    assert r.status_code == 400


@pytest.mark.asyncio
async def test_bulk_upsert_creates_record_in_empty_partition(async_client: AsyncClient, create_identity, seed_partition):
    await seed_partition("empty")
    await create_identity("u3", allowed=["empty"])
    headers = {"X-Identity-ID": "u3"}
    body = {
        "partitionId": "empty",
        "changes": [
            {
                "id": "v1",
                "op": "upsert",
                "payload": {"mobile": "9000000001"},
                "updatedAt": datetime.now(timezone.utc).isoformat(),
            },
            {"op": "upsert", "payload": {}},
        ],
    }

    r = await async_client.post("/records/bulk-upsert", json=body, headers=headers)

    assert r.status_code == 200
    data = r.json()
    assert data == {
        "successIds": ["v1"],
        "failed": [{"id": None, "reason": "bad_change"}],
        "partitionId": "empty",
    }
    export = (await async_client.get("/records", headers=headers)).json()
    assert export["items"][0]["id"] == "v1"
    assert export["items"][0]["mobile"] == "9000000001"


@pytest.mark.asyncio
async def test_bulk_upsert_stale_change_reported_as_success(async_client: AsyncClient, tenant):
    headers = {"X-Identity-ID": "u1"}
    body = {
        "partitionId": "tenant_u1_M",
        "changes": [{"id": "v1", "op": "upsert", "payload": {"name": "Stale"}, "updatedAt": "2000-01-01T00:00:00Z"}],
    }

    r = await async_client.post("/records/bulk-upsert", json=body, headers=headers)

    assert r.status_code == 200
    assert r.json()["successIds"] == ["v1"]
    export = (await async_client.get("/records", headers=headers)).json()
    assert export["items"][0]["name"] == "Asha"


@pytest.mark.asyncio
async def test_bulk_upsert_forbidden_partition(async_client: AsyncClient, tenant):
    body = {"partitionId": "M", "changes": []}
    r = await async_client.post("/records/bulk-upsert", json=body, headers={"X-Identity-ID": "u1"})
    assert r.status_code == 403


@pytest.mark.asyncio
@pytest.mark.parametrize("param", ["database", "collection"])
async def test_export_legacy_query_aliases(async_client: AsyncClient, create_identity, seed_partition, param):
    await seed_partition("A", RECORDS)
    await seed_partition("B", RECORDS[:1])
    await create_identity("u2", allowed=["A", "B"])

    r = await async_client.get("/records", params={param: "B"}, headers={"X-Identity-ID": "u2"})

    assert r.status_code == 200
    assert r.json()["partitionId"] == "B"


@pytest.mark.asyncio
async def test_bulk_upsert_legacy_collection_body_field(async_client: AsyncClient, tenant):
    body = {
        "collection": "tenant_u1_M",
        "changes": [{"id": "v9", "op": "upsert", "payload": {"name": "New"}}],
    }

    r = await async_client.post("/records/bulk-upsert", json=body, headers={"X-Identity-ID": "u1"})

    assert r.status_code == 200
    assert r.json()["partitionId"] == "tenant_u1_M"
    assert r.json()["successIds"] == ["v9"]
