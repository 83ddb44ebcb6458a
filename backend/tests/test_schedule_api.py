import pytest
from httpx import AsyncClient
from sqlalchemy import select
from sqlalchemy.ext.asyncio import AsyncSession

from lineup.models.schedule_slot import ScheduleSlot
from lineup.models.show import Show

MONDAY = "2024-06-03"
NEXT_MONDAY = "2024-06-10"


async def _create_master(client: AsyncClient, headers: dict, **overrides) -> dict:
    body = {
        "day_of_week": 1,
        "start_time": "08:00:00",
        "end_time": "09:00:00",
        "show_name": "Morning",
        "host_name": "Dana",
    }
    body.update(overrides)
    response = await client.post(
        "/api/v1/schedule/slots?is_master_schedule=true", json=body, headers=headers
    )
    assert response.status_code == 201, response.text
    return response.json()


async def _day(client: AsyncClient, day: str) -> list[dict]:
    response = await client.get(f"/api/v1/schedule/day/{day}")
    assert response.status_code == 200
    return response.json()["slots"]


@pytest.mark.asyncio
async def test_create_master_slot(client: AsyncClient, auth_headers: dict):
    slot = await _create_master(client, auth_headers)
    assert slot["is_master"] is True
    assert slot["slot_date"] is None
    assert slot["color"] == "green"


@pytest.mark.asyncio
async def test_duplicate_master_rejected(client: AsyncClient, auth_headers: dict):
    await _create_master(client, auth_headers)
    response = await client.post(
        "/api/v1/schedule/slots?is_master_schedule=true",
        json={"day_of_week": 1, "start_time": "08:00:00", "end_time": "10:00:00", "show_name": "Other"},
        headers=auth_headers,
    )
    assert response.status_code == 400


@pytest.mark.asyncio
async def test_create_requires_auth(client: AsyncClient):
    response = await client.post(
        "/api/v1/schedule/slots?is_master_schedule=true",
        json={"day_of_week": 1, "start_time": "08:00:00", "end_time": "09:00:00"},
    )
    assert response.status_code == 401


@pytest.mark.asyncio
async def test_master_list(client: AsyncClient, auth_headers: dict):
    await _create_master(client, auth_headers, day_of_week=2, start_time="10:00:00", end_time="11:00:00")
    await _create_master(client, auth_headers)
    response = await client.get("/api/v1/schedule/slots?is_master_schedule=true")
    assert response.status_code == 200
    assert [s["day_of_week"] for s in response.json()] == [1, 2]


@pytest.mark.asyncio
async def test_weekly_view_requires_selected_date(client: AsyncClient):
    response = await client.get("/api/v1/schedule/slots")
    assert response.status_code == 400


@pytest.mark.asyncio
async def test_master_appears_on_every_matching_weekday(client: AsyncClient, auth_headers: dict):
    master = await _create_master(client, auth_headers)
    response = await client.get(f"/api/v1/schedule/slots?selected_date={MONDAY}")
    assert response.status_code == 200
    week = response.json()
    assert len(week) == 1
    assert week[0]["id"] == master["id"]
    assert week[0]["date"] == MONDAY
    assert week[0]["is_virtual"] is True


@pytest.mark.asyncio
async def test_edit_occurrence_creates_override(
    client: AsyncClient, auth_headers: dict, db_session: AsyncSession
):
    master = await _create_master(client, auth_headers)
    response = await client.put(
        f"/api/v1/schedule/slots/{master['id']}?slot_date={NEXT_MONDAY}",
        json={"show_name": "Special Morning"},
        headers=auth_headers,
    )
    assert response.status_code == 200, response.text
    override = response.json()
    assert override["id"] != master["id"]
    assert override["parent_slot_id"] == master["id"]
    assert override["is_modified"] is True
    assert override["slot_date"] == NEXT_MONDAY

    assert [s["show_name"] for s in await _day(client, NEXT_MONDAY)] == ["Special Morning"]
    assert [s["show_name"] for s in await _day(client, MONDAY)] == ["Morning"]

    # Second edit of the same date reuses the override
    response = await client.put(
        f"/api/v1/schedule/slots/{master['id']}?slot_date={NEXT_MONDAY}",
        json={"host_name": "Noa"},
        headers=auth_headers,
    )
    assert response.json()["id"] == override["id"]
    result = await db_session.execute(select(ScheduleSlot).where(ScheduleSlot.is_master == False))  # noqa: E712
    assert len(result.scalars().all()) == 1


@pytest.mark.asyncio
async def test_delete_occurrence_writes_deletion_override(client: AsyncClient, auth_headers: dict):
    master = await _create_master(client, auth_headers)
    response = await client.delete(
        f"/api/v1/schedule/slots/{master['id']}?slot_date={MONDAY}", headers=auth_headers
    )
    assert response.status_code == 200
    assert response.json()["is_deleted"] is True
    assert response.json()["parent_slot_id"] == master["id"]

    assert await _day(client, MONDAY) == []
    assert len(await _day(client, NEXT_MONDAY)) == 1


@pytest.mark.asyncio
async def test_delete_occurrence_requires_date(client: AsyncClient, auth_headers: dict):
    master = await _create_master(client, auth_headers)
    response = await client.delete(f"/api/v1/schedule/slots/{master['id']}", headers=auth_headers)
    assert response.status_code == 400


@pytest.mark.asyncio
async def test_master_delete_keeps_overrides(client: AsyncClient, auth_headers: dict):
    master = await _create_master(client, auth_headers)
    await client.put(
        f"/api/v1/schedule/slots/{master['id']}?slot_date={NEXT_MONDAY}",
        json={"show_name": "Special Morning"},
        headers=auth_headers,
    )
    response = await client.delete(
        f"/api/v1/schedule/slots/{master['id']}?is_master_schedule=true", headers=auth_headers
    )
    assert response.status_code == 200

    assert await _day(client, MONDAY) == []
    assert [s["show_name"] for s in await _day(client, NEXT_MONDAY)] == ["Special Morning"]


@pytest.mark.asyncio
async def test_master_mode_update_rejects_date_row(client: AsyncClient, auth_headers: dict):
    response = await client.post(
        f"/api/v1/schedule/slots",
        json={"day_of_week": 1, "slot_date": MONDAY, "start_time": "12:00:00", "end_time": "13:00:00", "show_name": "One-off"},
        headers=auth_headers,
    )
    one_off = response.json()
    response = await client.put(
        f"/api/v1/schedule/slots/{one_off['id']}?is_master_schedule=true",
        json={"show_name": "x"},
        headers=auth_headers,
    )
    assert response.status_code == 400


@pytest.mark.asyncio
async def test_empty_update_rejected(client: AsyncClient, auth_headers: dict):
    master = await _create_master(client, auth_headers)
    response = await client.put(
        f"/api/v1/schedule/slots/{master['id']}?is_master_schedule=true", json={}, headers=auth_headers
    )
    assert response.status_code == 400


@pytest.mark.asyncio
async def test_unknown_slot_404(client: AsyncClient, auth_headers: dict):
    response = await client.put(
        "/api/v1/schedule/slots/00000000-0000-0000-0000-000000000000?is_master_schedule=true",
        json={"show_name": "x"},
        headers=auth_headers,
    )
    assert response.status_code == 404


@pytest.mark.asyncio
async def test_one_off_slot_derives_date_from_selected_week(client: AsyncClient, auth_headers: dict):
    response = await client.post(
        "/api/v1/schedule/slots?selected_date=2024-06-05",
        json={"day_of_week": 1, "start_time": "12:00:00", "end_time": "13:00:00", "show_name": "One-off"},
        headers=auth_headers,
    )
    assert response.status_code == 201, response.text
    assert response.json()["slot_date"] == MONDAY
    assert [s["kind"] for s in await _day(client, MONDAY)] == ["one_off"]


@pytest.mark.asyncio
async def test_one_off_without_any_date_rejected(client: AsyncClient, auth_headers: dict):
    response = await client.post(
        "/api/v1/schedule/slots",
        json={"day_of_week": 1, "start_time": "12:00:00", "end_time": "13:00:00"},
        headers=auth_headers,
    )
    assert response.status_code == 400


@pytest.mark.asyncio
async def test_date_slot_conflicts(client: AsyncClient, auth_headers: dict):
    body = {"day_of_week": 1, "slot_date": MONDAY, "start_time": "12:00:00", "end_time": "13:00:00", "show_name": "A"}
    assert (await client.post("/api/v1/schedule/slots", json=body, headers=auth_headers)).status_code == 201

    same_start = dict(body, end_time="12:30:00", show_name="B")
    response = await client.post("/api/v1/schedule/slots", json=same_start, headers=auth_headers)
    assert response.status_code == 409

    overlapping = dict(body, start_time="12:30:00", end_time="14:00:00", show_name="C")
    response = await client.post("/api/v1/schedule/slots", json=overlapping, headers=auth_headers)
    assert response.status_code == 409

    adjacent = dict(body, start_time="13:00:00", end_time="14:00:00", show_name="D")
    response = await client.post("/api/v1/schedule/slots", json=adjacent, headers=auth_headers)
    assert response.status_code == 201

    deletion = dict(body, is_deleted=True, show_name="E")
    response = await client.post("/api/v1/schedule/slots", json=deletion, headers=auth_headers)
    assert response.status_code == 201


@pytest.mark.asyncio
async def test_check_conflicts(client: AsyncClient, auth_headers: dict):
    master = await _create_master(client, auth_headers)
    response = await client.post(
        "/api/v1/schedule/slots/check-conflicts",
        json={"day_of_week": 1, "start_time": "08:30:00", "end_time": "09:30:00", "is_master_schedule": True},
    )
    assert response.status_code == 200
    data = response.json()
    assert data["has_conflict"] is True
    assert data["conflicting_slots"][0]["id"] == master["id"]

    response = await client.post(
        "/api/v1/schedule/slots/check-conflicts",
        json={
            "day_of_week": 1,
            "start_time": "08:30:00",
            "end_time": "09:30:00",
            "is_master_schedule": True,
            "exclude_slot_id": master["id"],
        },
    )
    assert response.json()["has_conflict"] is False


@pytest.mark.asyncio
async def test_check_conflicts_weekly_requires_date(client: AsyncClient):
    response = await client.post(
        "/api/v1/schedule/slots/check-conflicts",
        json={"day_of_week": 1, "start_time": "08:30:00", "end_time": "09:30:00"},
    )
    assert response.status_code == 400


@pytest.mark.asyncio
async def test_has_lineup_flag_must_be_boolean(client: AsyncClient, auth_headers: dict):
    master = await _create_master(client, auth_headers)
    response = await client.put(
        f"/api/v1/schedule/slots/{master['id']}/has-lineup", json={"has_lineup": "yes"}, headers=auth_headers
    )
    assert response.status_code == 422
    response = await client.put(
        f"/api/v1/schedule/slots/{master['id']}/has-lineup", json={"has_lineup": True}, headers=auth_headers
    )
    assert response.status_code == 200
    assert response.json()["has_lineup"] is True


@pytest.mark.asyncio
async def test_day_view_binds_lineup(client: AsyncClient, auth_headers: dict, db_session: AsyncSession):
    import uuid
    from datetime import date

    master = await _create_master(client, auth_headers)
    db_session.add(Show(name="Morning lineup", date=date(2024, 6, 3), slot_id=uuid.UUID(master["id"])))
    await db_session.commit()

    [monday] = await _day(client, MONDAY)
    assert monday["has_lineup"] is True
    assert monday["show"]["name"] == "Morning lineup"
    [next_monday] = await _day(client, NEXT_MONDAY)
    assert next_monday["has_lineup"] is False
    assert next_monday["show"] is None


@pytest.mark.asyncio
async def test_autocomplete(client: AsyncClient, auth_headers: dict):
    await _create_master(client, auth_headers)
    await _create_master(client, auth_headers, day_of_week=2, host_name=None)
    response = await client.get("/api/v1/schedule/autocomplete")
    assert response.json() == {"show_names": ["Morning"], "host_names": ["Dana"]}
