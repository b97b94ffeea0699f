"""HTTP tests for /api/categories."""

from tests.fakes import make_document


async def _create(client, headers, name="Policies", subs=("Security",)):
    return await client.post(
        "/api/categories",
        json={
            "name": name,
            "description": "Company policies",
            "subcategories": [{"name": s} for s in subs],
        },
        headers=headers,
    )


async def test_admin_creates_and_lists(client, admin_headers, employee_headers) -> None:
    created = await _create(client, admin_headers)
    assert created.status_code == 201
    category = created.json()
    assert category["subcategories"] == [{"name": "Security", "description": ""}]

    listed = await client.get("/api/categories", headers=employee_headers)
    assert listed.status_code == 200
    assert [c["name"] for c in listed.json()] == ["Policies"]

    fetched = await client.get(f"/api/categories/{category['id']}", headers=employee_headers)
    assert fetched.json()["id"] == category["id"]


async def test_employee_cannot_create(client, employee_headers) -> None:
    response = await _create(client, employee_headers)
    assert response.status_code == 403
    assert response.json()["error"] == "PERMISSION_DENIED"


async def test_list_requires_auth(client) -> None:
    response = await client.get("/api/categories")
    assert response.status_code == 401


async def test_duplicate_name_conflicts(client, admin_headers) -> None:
    await _create(client, admin_headers)
    response = await _create(client, admin_headers)
    assert response.status_code == 400
    assert response.json()["error"] == "CONFLICT"


async def test_unknown_category_404(client, admin_headers) -> None:
    response = await client.get("/api/categories/missing", headers=admin_headers)
    assert response.status_code == 404
    assert response.json()["error"] == "RESOURCE_NOT_FOUND"


async def test_subcategory_lifecycle(client, admin_headers) -> None:
    category_id = (await _create(client, admin_headers)).json()["id"]

    added = await client.post(
        f"/api/categories/{category_id}/subcategories",
        json={"name": "Privacy", "description": "GDPR"},
        headers=admin_headers,
    )
    assert added.status_code == 201
    assert {s["name"] for s in added.json()["subcategories"]} == {"Security", "Privacy"}

    renamed = await client.put(
        f"/api/categories/{category_id}/subcategories/Privacy",
        json={"new_name": "Data Protection"},
        headers=admin_headers,
    )
    assert renamed.status_code == 200
    assert "Data Protection" in {s["name"] for s in renamed.json()["subcategories"]}

    removed = await client.delete(
        f"/api/categories/{category_id}/subcategories/Data Protection",
        headers=admin_headers,
    )
    assert removed.status_code == 200
    assert [s["name"] for s in removed.json()["subcategories"]] == ["Security"]


async def test_delete_in_use_category_rejected(client, store, admin_headers) -> None:
    category_id = (await _create(client, admin_headers)).json()["id"]
    await make_document(store, category_id, "Security")

    response = await client.delete(f"/api/categories/{category_id}", headers=admin_headers)
    assert response.status_code == 400
    assert (await client.get(f"/api/categories/{category_id}", headers=admin_headers)).status_code == 200


async def test_delete_unused_category(client, admin_headers) -> None:
    category_id = (await _create(client, admin_headers)).json()["id"]
    response = await client.delete(f"/api/categories/{category_id}", headers=admin_headers)
    assert response.status_code == 204
    missing = await client.get(f"/api/categories/{category_id}", headers=admin_headers)
    assert missing.status_code == 404
