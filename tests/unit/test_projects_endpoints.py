"""
Tests de los endpoints de proyectos y del tablero diario.

El tablero debe mostrar, por cada proyecto del usuario, el primer update
de la fecha pedida; los updates de proyectos ajenos o sin proyecto no
aparecen.
"""
from __future__ import annotations

import pytest

from app.application.services.update_aggregator import today_ist


def _board_map(payload):
    return {
        item["project"]["id"]: (item["update"] or {}).get("id")
        for item in payload["items"]
    }


@pytest.mark.asyncio
async def test_list_projects_with_filters(api_client, auth_headers) -> None:
    all_projects = await api_client.get("/api/v1/projects/", headers=auth_headers)
    by_status = await api_client.get("/api/v1/projects/", params={"status": "negotiation"}, headers=auth_headers)
    by_search = await api_client.get("/api/v1/projects/", params={"search": "audit"}, headers=auth_headers)

    assert [p["id"] for p in all_projects.json()] == ["prj1", "prj2"]
    assert [p["id"] for p in by_status.json()] == ["prj1"]
    assert [p["id"] for p in by_search.json()] == ["prj2"]


@pytest.mark.asyncio
async def test_board_picks_update_of_the_day(api_client, auth_headers) -> None:
    first_day = await api_client.get("/api/v1/projects/board", params={"date": "2025-06-01"}, headers=auth_headers)
    second_day = await api_client.get("/api/v1/projects/board", params={"date": "2025-06-02"}, headers=auth_headers)

    assert first_day.status_code == 200
    assert first_day.json()["date"] == "2025-06-01"
    assert _board_map(first_day.json()) == {"prj1": "upd1", "prj2": "upd2"}
    assert _board_map(second_day.json()) == {"prj1": "upd3", "prj2": None}


@pytest.mark.asyncio
async def test_board_defaults_to_today_ist(api_client, auth_headers) -> None:
    response = await api_client.get("/api/v1/projects/board", headers=auth_headers)

    assert response.status_code == 200
    assert response.json()["date"] == today_ist()


@pytest.mark.asyncio
async def test_board_rejects_bad_date(api_client, auth_headers) -> None:
    response = await api_client.get("/api/v1/projects/board", params={"date": "2025-13-40"}, headers=auth_headers)

    assert response.status_code == 400
    assert response.json()["details"] == {"field": "date"}


@pytest.mark.asyncio
async def test_get_project_with_updates(api_client, auth_headers) -> None:
    response = await api_client.get("/api/v1/projects/prj1", headers=auth_headers)

    assert response.status_code == 200
    assert [u["id"] for u in response.json()["updates"]] == ["upd1", "upd3"]


@pytest.mark.asyncio
async def test_get_missing_project_is_404(api_client, auth_headers) -> None:
    response = await api_client.get("/api/v1/projects/prjMISSING", headers=auth_headers)
    assert response.status_code == 404


@pytest.mark.asyncio
async def test_create_project_links_it_to_user(api_client, auth_headers, airtable_client) -> None:
    response = await api_client.post(
        "/api/v1/projects/",
        json={
            "project_name": "Acme Expansion",
            "start_date": "2025-06-01",
            "end_date": "2025-09-30",
            "account_id": "acc1",
            "project_value": 125000,
        },
        headers=auth_headers,
    )

    assert response.status_code == 201
    fields = response.json()["fields"]
    assert fields["Project Status"] == "Need Analysis"
    assert fields["Account"] == ["acc1"]
    assert fields["End Date"] == "2025-09-30"
    assert fields["Project Value"] == 125000
    assert airtable_client.tables["Users"]["usr1"]["Projects"] == ["prj1", "prj2", response.json()["id"]]


@pytest.mark.asyncio
async def test_create_project_omits_empty_optional_fields(api_client, auth_headers) -> None:
    response = await api_client.post(
        "/api/v1/projects/",
        json={"project_name": "Small deal", "start_date": "2025-06-01", "account_id": "acc2"},
        headers=auth_headers,
    )

    assert response.status_code == 201
    fields = response.json()["fields"]
    assert "End Date" not in fields
    assert "Project Value" not in fields


@pytest.mark.asyncio
async def test_create_project_requires_account(api_client, auth_headers, airtable_client) -> None:
    response = await api_client.post(
        "/api/v1/projects/",
        json={"project_name": "Orphan", "start_date": "2025-06-01"},
        headers=auth_headers,
    )

    assert response.status_code == 400
    assert response.json()["details"] == {"field": "account_id"}
    assert not any(call[0] == "create" for call in airtable_client.calls)


@pytest.mark.asyncio
async def test_create_project_rejects_end_before_start(api_client, auth_headers) -> None:
    response = await api_client.post(
        "/api/v1/projects/",
        json={
            "project_name": "Backwards",
            "start_date": "2025-06-10",
            "end_date": "2025-06-01",
            "account_id": "acc1",
        },
        headers=auth_headers,
    )

    assert response.status_code == 400
    assert response.json()["details"] == {"field": "end_date"}


@pytest.mark.asyncio
async def test_quick_update_shows_on_board(api_client, auth_headers, airtable_client) -> None:
    response = await api_client.post(
        "/api/v1/projects/prj2/updates",
        json={"notes": "Called the CFO", "date": "2025-06-02"},
        headers=auth_headers,
    )

    assert response.status_code == 201
    created = response.json()
    assert created["fields"]["Date"] == "2025-06-02"
    assert created["fields"]["Project"] == ["prj2"]
    assert created["fields"]["Update Type"] == "Call"
    assert created["id"] in airtable_client.tables["Users"]["usr1"]["Updates"]

    board = await api_client.get("/api/v1/projects/board", params={"date": "2025-06-02"}, headers=auth_headers)
    assert _board_map(board.json()) == {"prj1": "upd3", "prj2": created["id"]}


@pytest.mark.asyncio
async def test_quick_update_requires_notes(api_client, auth_headers) -> None:
    response = await api_client.post(
        "/api/v1/projects/prj1/updates",
        json={"notes": "   "},
        headers=auth_headers,
    )

    assert response.status_code == 400
    assert response.json()["details"] == {"field": "notes"}


@pytest.mark.asyncio
async def test_quick_update_rejects_bad_date(api_client, auth_headers) -> None:
    response = await api_client.post(
        "/api/v1/projects/prj1/updates",
        json={"notes": "ok", "date": "02/06/2025"},
        headers=auth_headers,
    )

    assert response.status_code == 400
