"""Bulk routes: per-id outcomes and routing precedence over /templates/{id}.

Tests cover:
    - Bulk delete reports succeeded and failed ids with status 207
    - Bulk duplicate returns the new clone ids
    - Bulk export schedules and returns 202
    - "bulk" is never captured as a template id
"""

from tests.factories import OTHER_TENANT, TENANT, template_payload


async def _create(client, headers=TENANT) -> str:
    response = await client.post("/templates", json=template_payload(), headers=headers)
    return response.json()["template_id"]


async def test_bulk_delete_reports_per_id(client):
    first = await _create(client)
    second = await _create(client)
    foreign = await _create(client, headers=OTHER_TENANT)

    response = await client.post(
        "/templates/bulk/delete",
        json={"template_ids": [first, "missing", second, foreign]},
        headers=TENANT,
    )
    assert response.status_code == 207
    body = response.json()
    assert body["succeeded"] == [first, second]
    assert set(body["failed"]) == {"missing", foreign}

    listing = await client.get("/templates", headers=TENANT)
    assert listing.json()["total"] == 0
    foreign_view = await client.get(f"/templates/{foreign}", headers=OTHER_TENANT)
    assert foreign_view.json()["status"] == "active"


async def test_bulk_duplicate_returns_clone_ids(client):
    source = await _create(client)
    await client.put(f"/templates/{source}", json={"name": "Warranty EU v2"}, headers=TENANT)

    response = await client.post(
        "/templates/bulk/duplicate",
        json={"template_ids": [source, "missing"], "copy_versions": True},
        headers={**TENANT, "X-User-ID": "bob"},
    )
    assert response.status_code == 207
    body = response.json()
    assert len(body["succeeded"]) == 1
    assert list(body["failed"]) == ["missing"]

    clone_id = body["succeeded"][0]
    assert clone_id != source
    history = await client.get(f"/templates/{clone_id}/versions", headers=TENANT)
    assert [v["version_number"] for v in history.json()] == [1, 2]
    clone = await client.get(f"/templates/{clone_id}", headers=TENANT)
    assert clone.json()["created_by"] == "bob"


async def test_bulk_export_is_accepted(client):
    response = await client.post(
        "/templates/bulk/export", json={"template_ids": ["a", "b"]}, headers=TENANT,
    )
    assert response.status_code == 202
    body = response.json()
    assert body["export_id"].startswith("export-")
    assert body["template_ids"] == ["a", "b"]
    assert body["status"] == "scheduled"


async def test_bulk_requires_tenant(client):
    response = await client.post("/templates/bulk/delete", json={"template_ids": []})
    assert response.status_code == 400
