import json
import uuid
import xml.etree.ElementTree as ET
from datetime import date, time

import pytest
from httpx import AsyncClient
from sqlalchemy.ext.asyncio import AsyncSession

from lineup.models.schedule_slot import ScheduleSlot
from lineup.models.system_setting import SystemSetting
from lineup.services.feed_service import (
    FeedService,
    combined_display,
    feed_entries,
    is_excluded,
    render_json,
    render_template,
    render_xml,
)
from lineup.services.slot_resolver import OccurrenceKind, SlotOccurrence

D1 = date(2024, 6, 3)
D2 = date(2024, 6, 4)


def occ(on: date, start: int, name: str, host: str | None = None, color: str | None = "green") -> SlotOccurrence:
    slot_id = uuid.uuid4()
    return SlotOccurrence(
        id=slot_id,
        master_id=slot_id,
        date=on,
        day_of_week=1,
        start_time=time(start),
        end_time=time(start + 1),
        show_name=name,
        host_name=host,
        color=color,
        kind=OccurrenceKind.DEFAULT,
    )


def test_excluded_colour_is_trimmed_and_case_insensitive():
    assert is_excluded("red")
    assert is_excluded(" RED ")
    assert not is_excluded("darkred")
    assert not is_excluded(None)


def test_feed_entries_drop_red_and_sort_by_date_then_time():
    resolved = {
        D2: [occ(D2, 7, "B")],
        D1: [occ(D1, 9, "C"), occ(D1, 6, "Hidden", color=" Red"), occ(D1, 8, "A")],
    }
    assert [o.show_name for o in feed_entries(resolved)] == ["A", "C", "B"]


def test_combined_display():
    assert combined_display("Morning", "Dana") == "Morning עם Dana"
    assert combined_display("Dana", "Dana") == "Dana"
    assert combined_display("Morning", None) == "Morning"


def test_render_template_placeholders():
    text = render_template("%scheduledate %starttime-%endtime %showcombined|%showname|%showhosts", occ(D1, 8, "Morning", "Dana"))
    assert text == "2024-06-03 08:00-09:00 Morning עם Dana|Morning|Dana"


def test_default_json_feed_shape():
    document = json.loads(render_json([occ(D1, 8, "Morning", "Dana"), occ(D1, 9, "News")]))
    assert document == {
        "schedule": [
            {"date": "2024-06-03", "startTime": "08:00", "endTime": "09:00", "showName": "Morning", "hosts": "Dana"},
            {"date": "2024-06-03", "startTime": "09:00", "endTime": "10:00", "showName": "News", "hosts": ""},
        ]
    }


def test_json_template_escapes_quotes():
    document = json.loads(render_json([occ(D1, 8, 'The "Big" Show')]))
    assert document["schedule"][0]["showName"] == 'The "Big" Show'


def test_custom_template_keeps_extra_keys():
    template = json.dumps({"station": "Kol", "schedule": [{"title": "%showcombined", "at": "%starttime"}]})
    document = json.loads(render_json([occ(D1, 8, "Morning", "Dana")], template))
    assert document == {"station": "Kol", "schedule": [{"title": "Morning עם Dana", "at": "08:00"}]}


def test_per_show_template():
    document = json.loads(render_json([occ(D1, 8, "Morning")], '{"name": "%showname"}'))
    assert document == {"schedule": [{"name": "Morning"}]}


def test_xml_feed():
    root = ET.fromstring(render_xml([occ(D1, 8, "Morning", "Dana")]).split("\n", 1)[1])
    assert root.tag == "schedule"
    show = root.find("show")
    assert show.findtext("date") == "2024-06-03"
    assert show.findtext("start_time") == "08:00"
    assert show.findtext("combined") == "Morning עם Dana"
    assert show.findtext("has_lineup") == "false"


async def _seed_master(db: AsyncSession, day: int, start: int, name: str, color: str = "green") -> ScheduleSlot:
    slot = ScheduleSlot(
        day_of_week=day,
        start_time=time(start),
        end_time=time(start + 1),
        show_name=name,
        color=color,
        is_master=True,
        is_recurring=True,
    )
    db.add(slot)
    await db.commit()
    return slot


@pytest.mark.asyncio
async def test_feed_covers_ten_days_from_offset(db_session: AsyncSession):
    for day in range(7):
        await _seed_master(db_session, day, 8, f"Show {day}")
    await _seed_master(db_session, 1, 6, "Internal", color="RED")
    db_session.add(SystemSetting(key="schedule_data_offset", value="2"))
    await db_session.commit()

    entries = await FeedService(db_session, today=date(2024, 6, 1)).entries()
    dates = [e.date for e in entries]
    assert dates[0] == date(2024, 6, 3)
    assert dates[-1] == date(2024, 6, 12)
    assert len(entries) == 10
    assert "Internal" not in {e.show_name for e in entries}


@pytest.mark.asyncio
async def test_preview_does_not_store(db_session: AsyncSession):
    from lineup.services import settings_service

    await _seed_master(db_session, 1, 8, "Morning")
    feeds = FeedService(db_session, today=date(2024, 6, 1))

    await feeds.generate("xml", preview_offset=0)
    assert await settings_service.get_value(db_session, "schedule_xml") is None

    content, count = await feeds.generate("xml")
    assert count == 2  # two Mondays in the window
    assert await settings_service.get_value(db_session, "schedule_xml") == content


@pytest.mark.asyncio
async def test_feed_endpoints(client: AsyncClient, auth_headers: dict, db_session: AsyncSession):
    for day in range(7):
        await _seed_master(db_session, day, 8, f"Show {day}")

    response = await client.post("/api/v1/schedule/generate-json", headers=auth_headers)
    assert response.status_code == 200
    assert response.headers["content-type"].startswith("application/json")
    assert len(response.json()["schedule"]) == 10

    stored = await client.get("/api/v1/schedule/json")
    assert stored.json() == response.json()

    response = await client.get("/api/v1/schedule/xml")
    assert response.status_code == 200
    assert "<schedule>" in response.text


@pytest.mark.asyncio
async def test_xml_refresh_interval(client: AsyncClient, auth_headers: dict):
    response = await client.post("/api/v1/schedule/xml-refresh", json={"refresh_interval": 15}, headers=auth_headers)
    assert response.status_code == 200
    assert response.json()["refresh_interval"] == 15

    response = await client.get("/api/v1/system-settings?key=schedule_xml_refresh_interval")
    assert response.json()["value"] == "15"
