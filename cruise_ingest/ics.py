"""
ICS-like calendar import.

Only the handful of VEVENT properties the app uses are read; everything
else in the file is ignored.
"""

from __future__ import annotations

import logging
import re
from typing import Dict, List

from .dates import compact_to_canonical
from .models import CalendarEventRecord
from .rules import (
    DEFAULT_EVENT_TITLE,
    DEFAULT_EVENT_TYPE,
    EVENT_SOURCE,
    EVENT_TYPE_RULES,
    ICS_PROPERTIES,
)

logger = logging.getLogger(__name__)

BEGIN_EVENT = "BEGIN:VEVENT"
END_EVENT = "END:VEVENT"

# "DTSTART;VALUE=DATE:20250115" -> "20250115"
_PROPERTY_PATTERNS = {
    name: re.compile(rf"^{name}[^:\r\n]*:(.*)$", re.IGNORECASE | re.MULTILINE)
    for name in ICS_PROPERTIES
}


def unescape_text(value: str) -> str:
    return value.replace("\\n", "\n").replace("\\,", ",")


def classify_event_type(summary: str) -> str:
    lower = (summary or "").lower()
    for event_type, keywords in EVENT_TYPE_RULES:
        if any(keyword in lower for keyword in keywords):
            return event_type
    return DEFAULT_EVENT_TYPE


def _read_properties(block: str) -> Dict[str, str]:
    props = {}
    for name, pattern in _PROPERTY_PATTERNS.items():
        m = pattern.search(block)
        props[name] = unescape_text(m.group(1).strip()) if m else ""
    return props


def parse_ics(content: str) -> List[CalendarEventRecord]:
    logger.info("Parsing calendar file")

    events: List[CalendarEventRecord] = []
    blocks = (content or "").split(BEGIN_EVENT)

    for ordinal, block in enumerate(blocks[1:], start=1):
        end = block.find(END_EVENT)
        props = _read_properties(block[:end] if end > -1 else block)

        summary = props["SUMMARY"]
        dtstart = props["DTSTART"]
        if not summary and not dtstart:
            logger.debug("Dropping event block %d: no summary or start", ordinal)
            continue

        start_date = compact_to_canonical(dtstart)
        event = CalendarEventRecord(
            id=props["UID"] or f"event_{ordinal}",
            title=summary or DEFAULT_EVENT_TITLE,
            start_date=start_date,
            end_date=compact_to_canonical(props["DTEND"]) or start_date,
            type=classify_event_type(summary),
            location=props["LOCATION"] or None,
            description=props["DESCRIPTION"] or None,
            source=EVENT_SOURCE,
        )
        events.append(event)
        logger.debug("Parsed event: %s - %s", event.title, event.start_date)

    logger.info("Parsed %d calendar events", len(events))
    return events
