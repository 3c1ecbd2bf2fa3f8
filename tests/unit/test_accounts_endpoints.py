"""
Tests de los endpoints de cuentas sobre Airtable en memoria.
"""
from __future__ import annotations

import pytest

from app.infrastructure.external.airtable.airtable_client import AirtableApiError


@pytest.mark.asyncio
async def test_list_accounts_only_from_session(api_client, auth_headers) -> None:
    response = await api_client.get("/api/v1/accounts/", headers=auth_headers)

    assert response.status_code == 200
    data = response.json()
    assert [a["id"] for a in data] == ["acc1", "acc2"]
    assert data[0]["fields"]["Account Name"] == "Acme Corp"
    assert data[0]["createdTime"] == "2025-06-01T00:00:00.000Z"


@pytest.mark.asyncio
async def test_list_accounts_with_search_and_type(api_client, auth_headers) -> None:
    by_search = await api_client.get("/api/v1/accounts/", params={"search": "GLOB"}, headers=auth_headers)
    by_type = await api_client.get("/api/v1/accounts/", params={"account_type": "Client"}, headers=auth_headers)

    assert [a["id"] for a in by_search.json()] == ["acc2"]
    assert [a["id"] for a in by_type.json()] == ["acc1"]


@pytest.mark.asyncio
async def test_account_types(api_client, auth_headers) -> None:
    response = await api_client.get("/api/v1/accounts/types", headers=auth_headers)
    assert response.json() == ["Client", "Vendor"]


@pytest.mark.asyncio
async def test_get_account_with_projects(api_client, auth_headers) -> None:
    response = await api_client.get("/api/v1/accounts/acc1", headers=auth_headers)

    assert response.status_code == 200
    data = response.json()
    assert data["account"]["id"] == "acc1"
    assert [p["id"] for p in data["projects"]] == ["prj1"]


@pytest.mark.asyncio
async def test_get_missing_account_is_404(api_client, auth_headers) -> None:
    response = await api_client.get("/api/v1/accounts/accMISSING", headers=auth_headers)

    assert response.status_code == 404
    assert response.json()["error"] == "ENTITY_NOT_FOUND"


@pytest.mark.asyncio
async def test_list_accounts_requires_login(api_client) -> None:
    response = await api_client.get("/api/v1/accounts/")
    assert response.status_code == 401


@pytest.mark.asyncio
async def test_create_account_links_it_to_user(api_client, auth_headers, airtable_client) -> None:
    response = await api_client.post(
        "/api/v1/accounts/",
        json={"account_name": "  Hooli ", "account_type": "Technology Partner"},
        headers=auth_headers,
    )

    assert response.status_code == 201
    created = response.json()
    assert created["fields"]["Account Name"] == "Hooli"
    assert created["fields"]["Account Owner"] == ["usr1"]

    user_fields = airtable_client.tables["Users"]["usr1"]
    assert user_fields["Accounts"] == ["acc1", "acc2", created["id"]]

    listed = await api_client.get("/api/v1/accounts/", headers=auth_headers)
    assert created["id"] in [a["id"] for a in listed.json()]


@pytest.mark.asyncio
async def test_create_account_rejects_unknown_type(api_client, auth_headers, airtable_client) -> None:
    response = await api_client.post(
        "/api/v1/accounts/",
        json={"account_name": "Hooli", "account_type": "Reseller"},
        headers=auth_headers,
    )

    assert response.status_code == 422
    assert not any(call[0] == "create" for call in airtable_client.calls)


@pytest.mark.asyncio
async def test_create_account_blank_name_is_400(api_client, auth_headers) -> None:
    response = await api_client.post(
        "/api/v1/accounts/",
        json={"account_name": "   ", "account_type": "Client"},
        headers=auth_headers,
    )

    assert response.status_code == 400
    assert response.json()["details"] == {"field": "account_name"}


@pytest.mark.asyncio
async def test_failed_user_link_keeps_created_account(api_client, auth_headers, airtable_client) -> None:
    """Sin rollback: la cuenta queda creada aunque falle el PATCH del usuario."""
    airtable_client.fail_on[("update", "Users")] = AirtableApiError(
        "Airtable request falló 422", status_code=422, body='{"error":"INVALID_VALUE_FOR_COLUMN"}'
    )

    response = await api_client.post(
        "/api/v1/accounts/",
        json={"account_name": "Hooli", "account_type": "Client"},
        headers=auth_headers,
    )

    assert response.status_code == 502
    assert "INVALID_VALUE_FOR_COLUMN" in response.json()["details"]["upstream_body"]
    assert any(f["Account Name"] == "Hooli" for f in airtable_client.tables["Accounts"].values())
    assert airtable_client.tables["Users"]["usr1"]["Accounts"] == ["acc1", "acc2"]

    me = await api_client.get("/api/v1/auth/me", headers=auth_headers)
    assert me.json()["account_ids"] == ["acc1", "acc2"]
