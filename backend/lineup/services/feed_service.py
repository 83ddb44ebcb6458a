"""
Schedule feeds: the upcoming on-air schedule as JSON or XML for external sites.

The feed covers FEED_DAYS days starting today (shifted by the
`schedule_data_offset` setting), skips slots tagged with the excluded
colour and is ordered by (date, start time). The JSON form is rendered
through a per-show template with %placeholders.
"""
import json
import logging
import xml.etree.ElementTree as ET
from collections.abc import Iterable, Mapping, Sequence
from datetime import date, timedelta

from sqlalchemy.ext.asyncio import AsyncSession

from lineup.config import settings
from lineup.services import settings_service
from lineup.services.schedule_service import ScheduleService
from lineup.services.slot_resolver import SlotOccurrence

logger = logging.getLogger(__name__)

DEFAULT_JSON_TEMPLATE = """{
  "schedule": [
    {
      "date": "%scheduledate",
      "startTime": "%starttime",
      "endTime": "%endtime",
      "showName": "%showname",
      "hosts": "%showhosts"
    }
  ]
}"""

FORMAT_JSON = "json"
FORMAT_XML = "xml"


def is_excluded(color: str | None, excluded: str = settings.FEED_EXCLUDED_COLOR) -> bool:
    return bool(color) and color.strip().lower() == excluded.strip().lower()


def display_host(show_name: str, host_name: str | None) -> str:
    """Host shown next to the show; empty when it just repeats the show name."""
    if not host_name or host_name == show_name:
        return ""
    return host_name


def combined_display(show_name: str, host_name: str | None) -> str:
    host = display_host(show_name, host_name)
    return f"{show_name} עם {host}" if host else show_name


def fmt_time(t) -> str:
    return t.strftime("%H:%M")


def feed_entries(
    resolved: Mapping[date, Sequence[SlotOccurrence]],
    excluded_color: str = settings.FEED_EXCLUDED_COLOR,
) -> list[SlotOccurrence]:
    """Flatten resolved days into feed order, one entry per (date, start time)."""
    entries = [
        occ
        for occs in resolved.values()
        for occ in occs
        if not is_excluded(occ.color, excluded_color)
    ]
    entries.sort(key=lambda o: (o.date, o.start_time))

    unique: list[SlotOccurrence] = []
    seen: set[tuple[date, object]] = set()
    for occ in entries:
        key = (occ.date, occ.start_time)
        if key not in seen:
            seen.add(key)
            unique.append(occ)
    return unique


def _placeholders(occ: SlotOccurrence) -> dict[str, str]:
    return {
        "%showname": occ.show_name or "",
        "%showhosts": display_host(occ.show_name, occ.host_name),
        "%showcombined": combined_display(occ.show_name, occ.host_name),
        "%starttime": fmt_time(occ.start_time),
        "%endtime": fmt_time(occ.end_time),
        "%scheduledate": occ.date.isoformat(),
    }


def render_template(template: str, occ: SlotOccurrence, json_escape: bool = False) -> str:
    """Substitute %placeholders; with json_escape values are safe inside JSON strings."""
    # Longest first so no placeholder eats the prefix of another
    values = _placeholders(occ)
    for name in sorted(values, key=len, reverse=True):
        value = values[name]
        if json_escape:
            value = json.dumps(value, ensure_ascii=False)[1:-1]
        template = template.replace(name, value)
    return template


def _fallback_entry(occ: SlotOccurrence) -> dict[str, str]:
    return {
        "date": occ.date.isoformat(),
        "startTime": fmt_time(occ.start_time),
        "endTime": fmt_time(occ.end_time),
        "showName": occ.show_name or "",
        "hosts": display_host(occ.show_name, occ.host_name),
    }


def render_json(entries: Iterable[SlotOccurrence], template: str | None = None) -> str:
    """
    Render entries through a JSON template.

    A template shaped like {"schedule": [ {...} ], ...} uses its first
    schedule element as the per-show template and keeps the other keys.
    Anything else is treated as the per-show template itself.
    """
    template = template or DEFAULT_JSON_TEMPLATE
    document: dict = {}
    item_template = template
    try:
        parsed = json.loads(template)
    except ValueError:
        logger.warning("Feed template is not valid JSON, using it as a per-show template")
        parsed = None
    if isinstance(parsed, dict) and isinstance(parsed.get("schedule"), list) and parsed["schedule"]:
        document = parsed
        item_template = json.dumps(parsed["schedule"][0], ensure_ascii=False)

    shows = []
    for occ in entries:
        try:
            shows.append(json.loads(render_template(item_template, occ, json_escape=True)))
        except ValueError:
            logger.error("Feed template produced invalid JSON for %s %s", occ.date, occ.start_time)
            shows.append(_fallback_entry(occ))

    document["schedule"] = shows
    return json.dumps(document, ensure_ascii=False, indent=2)


def render_xml(entries: Iterable[SlotOccurrence]) -> str:
    root = ET.Element("schedule")
    for occ in entries:
        show = ET.SubElement(root, "show")
        for tag, value in (
            ("day", str(occ.day_of_week)),
            ("date", occ.date.isoformat()),
            ("start_time", fmt_time(occ.start_time)),
            ("end_time", fmt_time(occ.end_time)),
            ("name", occ.show_name or ""),
            ("host", display_host(occ.show_name, occ.host_name)),
            ("combined", combined_display(occ.show_name, occ.host_name)),
            ("has_lineup", "true" if occ.has_lineup else "false"),
        ):
            ET.SubElement(show, tag).text = value
    ET.indent(root, space="  ")
    body = ET.tostring(root, encoding="unicode")
    return '<?xml version="1.0" encoding="UTF-8"?>\n' + body + "\n"


class FeedService:
    """Builds and stores the schedule feeds."""

    def __init__(self, db: AsyncSession, today: date | None = None):
        self.db = db
        self.today = today

    async def _window_start(self, preview_offset: int | None) -> date:
        offset = preview_offset
        if offset is None:
            offset = await settings_service.get_int(self.db, settings_service.SCHEDULE_DATA_OFFSET, 0)
        return (self.today or date.today()) + timedelta(days=offset)

    async def entries(self, preview_offset: int | None = None) -> list[SlotOccurrence]:
        start = await self._window_start(preview_offset)
        resolved = await ScheduleService(self.db).resolve_range(start, settings.FEED_DAYS)
        return feed_entries(resolved)

    async def generate(self, fmt: str, preview_offset: int | None = None) -> tuple[str, int]:
        """Render a feed; stored under its setting key unless it is a preview."""
        entries = await self.entries(preview_offset)
        if fmt == FORMAT_JSON:
            template = await settings_service.get_value(self.db, settings_service.SCHEDULE_JSON_TEMPLATE)
            content = render_json(entries, template)
            key = settings_service.SCHEDULE_JSON
        elif fmt == FORMAT_XML:
            content = render_xml(entries)
            key = settings_service.SCHEDULE_XML
        else:
            raise ValueError(f"Unknown feed format: {fmt}")

        if preview_offset is None:
            await settings_service.upsert_setting(self.db, key, content)
            logger.info("Stored %s feed (%d shows)", fmt, len(entries))
        return content, len(entries)

    async def stored_or_generate(self, fmt: str) -> str:
        key = settings_service.SCHEDULE_JSON if fmt == FORMAT_JSON else settings_service.SCHEDULE_XML
        stored = await settings_service.get_value(self.db, key)
        if stored:
            return stored
        content, _ = await self.generate(fmt)
        return content
