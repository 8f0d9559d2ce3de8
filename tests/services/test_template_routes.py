"""Template routes: status codes, tenant scoping and error bodies.

Tests cover:
    - Missing or blank X-Tenant-ID -> 400
    - POST 201, GET 200, PUT 200, DELETE 204, restore 200, duplicate 201
    - Validation failures -> 400 with {"error": "<field> ..."}
    - Cross-tenant reads -> 404
    - Listing query params parsed leniently
"""

import pytest

from docfactory.infrastructure import storage
from tests.factories import OTHER_TENANT, TENANT, template_payload


async def _create(client, **overrides) -> dict:
    response = await client.post(
        "/templates", json=template_payload(**overrides),
        headers={**TENANT, "X-User-ID": "alice"},
    )
    assert response.status_code == 201
    return response.json()


@pytest.mark.parametrize("headers", [{}, {"X-Tenant-ID": "   "}])
async def test_missing_tenant_header_is_400(client, headers):
    response = await client.get("/templates", headers=headers)
    assert response.status_code == 400
    assert response.json() == {"error": "X-Tenant-ID header is required"}


async def test_create_returns_version_one(client):
    body = await _create(client)
    assert body["version"] == 1
    assert body["status"] == "active"
    assert body["created_by"] == "alice"
    assert body["tenant_id"] == "t1"


async def test_create_without_user_header_uses_fallback(client):
    response = await client.post("/templates", json=template_payload(), headers=TENANT)
    assert response.status_code == 201
    assert response.json()["created_by"] == "system"


async def test_create_invalid_enum_is_400(client):
    response = await client.post(
        "/templates", json=template_payload(page_size="B5"), headers=TENANT,
    )
    assert response.status_code == 400
    assert response.json() == {"error": "page_size is invalid"}


async def test_create_short_name_is_400(client):
    response = await client.post(
        "/templates", json=template_payload(name="  ab  "), headers=TENANT,
    )
    assert response.status_code == 400
    assert "name" in response.json()["error"]


async def test_malformed_body_is_400(client):
    response = await client.post(
        "/templates", content="not json",
        headers={**TENANT, "Content-Type": "application/json"},
    )
    assert response.status_code == 400
    assert "error" in response.json()


async def test_get_other_tenant_is_404(client):
    created = await _create(client)
    response = await client.get(f"/templates/{created['template_id']}", headers=OTHER_TENANT)
    assert response.status_code == 404
    assert "not found" in response.json()["error"]


async def test_update_bumps_version_and_keeps_omitted_fields(client):
    created = await _create(client)
    response = await client.put(
        f"/templates/{created['template_id']}",
        json={"name": "Warranty EU v2", "page_size": "", "change_summary": "rename"},
        headers={**TENANT, "X-User-ID": "bob"},
    )
    assert response.status_code == 200
    body = response.json()
    assert body["version"] == 2
    assert body["name"] == "Warranty EU v2"
    assert body["page_size"] == "A4"
    assert body["updated_by"] == "bob"


async def test_update_can_clear_description(client):
    created = await _create(client)
    response = await client.put(
        f"/templates/{created['template_id']}", json={"description": ""}, headers=TENANT,
    )
    assert response.json()["description"] == ""


async def test_delete_then_update_is_400_and_restore_reactivates(client):
    created = await _create(client)
    url = f"/templates/{created['template_id']}"

    response = await client.delete(url, headers=TENANT)
    assert response.status_code == 204

    response = await client.put(url, json={"name": "Another"}, headers=TENANT)
    assert response.status_code == 400
    assert response.json() == {"error": "template is deleted"}

    response = await client.get(url, headers=TENANT)
    assert response.json()["status"] == "deleted"
    assert response.json()["deleted_at"] is not None

    response = await client.post(f"{url}/restore", headers=TENANT)
    assert response.status_code == 200
    assert response.json()["status"] == "active"
    assert response.json()["deleted_at"] is None


async def test_delete_unknown_is_404(client):
    response = await client.delete("/templates/missing", headers=TENANT)
    assert response.status_code == 404


async def test_duplicate_returns_201_with_copy_suffix(client):
    created = await _create(client)
    response = await client.post(
        f"/templates/{created['template_id']}/duplicate", json={}, headers=TENANT,
    )
    assert response.status_code == 201
    body = response.json()
    assert body["name"] == "Warranty EU Copy"
    assert body["template_id"] != created["template_id"]
    assert body["version"] == 1


async def test_list_filters_and_paginates(client):
    await _create(client, name="Warranty EU")
    await _create(client, name="Shipping label", document_type="label",
                  description="Box label")
    await _create(client, name="Warranty US")

    response = await client.get("/templates", params={"search": "warranty"}, headers=TENANT)
    body = response.json()
    assert body["total"] == 2
    assert [t["name"] for t in body["items"]] == ["Warranty US", "Warranty EU"]

    response = await client.get("/templates", params={"document_type": "label"}, headers=TENANT)
    assert [t["name"] for t in response.json()["items"]] == ["Shipping label"]

    response = await client.get("/templates", params={"limit": "1", "offset": "1"}, headers=TENANT)
    body = response.json()
    assert len(body["items"]) == 1
    assert body["total"] == 3
    assert body["limit"] == 1
    assert body["offset"] == 1


async def test_list_ignores_junk_paging(client):
    await _create(client)
    response = await client.get(
        "/templates", params={"limit": "abc", "offset": "-4"}, headers=TENANT,
    )
    body = response.json()
    assert response.status_code == 200
    assert body["limit"] == 50
    assert body["offset"] == 0
    assert body["total"] == 1


async def test_list_include_deleted(client):
    created = await _create(client)
    await client.delete(f"/templates/{created['template_id']}", headers=TENANT)
    response = await client.get("/templates", headers=TENANT)
    assert response.json()["total"] == 0
    response = await client.get("/templates", params={"include_deleted": "true"}, headers=TENANT)
    assert response.json()["total"] == 1


async def test_health(client):
    response = await client.get("/health")
    assert response.status_code == 200
    assert response.json()["status"] == "healthy"


async def test_readiness_tracks_storage_singleton(client, api_repository, monkeypatch):
    monkeypatch.setattr(storage, "repository", None)
    response = await client.get("/health/ready")
    assert response.status_code == 503

    monkeypatch.setattr(storage, "repository", api_repository)
    response = await client.get("/health/ready")
    assert response.status_code == 200
    assert response.json()["status"] == "ready"


async def test_unknown_route_uses_error_envelope(client):
    response = await client.get("/nowhere", headers=TENANT)
    assert response.status_code == 404
    assert response.json() == {"error": "Not Found"}


async def test_wrong_method_uses_error_envelope(client):
    response = await client.patch("/templates", headers=TENANT)
    assert response.status_code == 405
    assert response.json() == {"error": "Method Not Allowed"}
