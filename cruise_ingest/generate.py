"""
Record -> text generators, the inverse of the importers.

Tabular exports are always TAB-delimited so commas in free text never
collide with the delimiter.
"""

from __future__ import annotations

import re
from typing import Dict, Iterable, List, Optional

from .models import BookedCruiseRecord, CalendarEventRecord, CruiseRecord, OfferRecord
from .rules import (
    BOOKED_EXPORT_HEADERS,
    BOOKED_PORT_JOINER,
    DEFAULT_GUESTS,
    DEFAULT_NIGHTS,
    ICS_HEADER,
    ICS_LINE_ENDING,
    OFFER_EXPORT_HEADERS,
    OFFER_PORT_JOINER,
    PERKS_JOINER,
    PLACEHOLDER_GUESTS_INFO,
    PLACEHOLDER_PERKS,
    TAB,
)

_CELL_BREAK_RE = re.compile(r"[\t\r\n]+")


def format_number(value: Optional[float], default: float = 0) -> str:
    """Decimal string, integral values without a trailing ".0"."""
    if value is None:
        value = default
    if float(value).is_integer():
        return str(int(value))
    return str(value)


def _cell(value: Optional[str]) -> str:
    # A tab or newline inside a value would split the row.
    return _CELL_BREAK_RE.sub(" ", value or "").strip()


def _row(cells: Iterable[str]) -> str:
    return TAB.join(_cell(c) for c in cells)


def generate_offers_tsv(cruises: List[CruiseRecord], offers: List[OfferRecord]) -> str:
    by_code: Dict[str, OfferRecord] = {}
    for offer in offers:
        by_code.setdefault(offer.offer_code, offer)

    rows = [_row(OFFER_EXPORT_HEADERS)]
    for cruise in cruises:
        offer = by_code.get(cruise.offer_code) if cruise.offer_code else None
        rows.append(_row([
            cruise.ship_name,
            cruise.sail_date,
            cruise.itinerary_name or cruise.destination,
            cruise.offer_code,
            offer.offer_name if offer else "",
            cruise.cabin_type,
            cruise.guests_info or PLACEHOLDER_GUESTS_INFO,
            PERKS_JOINER.join(offer.perks) if offer and offer.perks else PLACEHOLDER_PERKS,
            cruise.category,
            format_number(offer.trade_in_value if offer else None),
            cruise.offer_expiry,
            format_number(cruise.interior_price),
            format_number(cruise.oceanview_price),
            format_number(cruise.balcony_price),
            format_number(cruise.suite_price),
            format_number(cruise.taxes),
            OFFER_PORT_JOINER.join(cruise.ports),
            offer.category if offer else "",
            format_number(cruise.nights or DEFAULT_NIGHTS),
            cruise.departure_port,
        ]))

    return "\n".join(rows)


def generate_booked_tsv(booked_cruises: List[BookedCruiseRecord]) -> str:
    rows = [_row(BOOKED_EXPORT_HEADERS)]
    for cruise in booked_cruises:
        rows.append(_row([
            cruise.id,
            cruise.ship_name,
            cruise.sail_date,
            cruise.return_date,
            format_number(cruise.nights),
            cruise.itinerary_name or cruise.destination,
            cruise.departure_port,
            BOOKED_PORT_JOINER.join(cruise.ports),
            cruise.reservation_number,
            format_number(cruise.guests or DEFAULT_GUESTS),
            cruise.booking_id or cruise.reservation_number,
            "TRUE" if cruise.status == "booked" else "FALSE",
            format_number(cruise.winnings),
            format_number(cruise.earned_points),
        ]))

    return "\n".join(rows)


def escape_text(value: str) -> str:
    return value.replace(",", "\\,").replace("\r\n", "\n").replace("\n", "\\n")


def _ics_date(value: str) -> str:
    return (value or "").replace("-", "")


def generate_ics(events: List[CalendarEventRecord]) -> str:
    lines = list(ICS_HEADER)

    for event in events:
        lines.append("BEGIN:VEVENT")
        lines.append(f"UID:{event.id}")
        lines.append(f"DTSTART:{_ics_date(event.start_date)}")
        lines.append(f"DTEND:{_ics_date(event.end_date)}")
        lines.append(f"SUMMARY:{escape_text(event.title)}")
        if event.location:
            lines.append(f"LOCATION:{escape_text(event.location)}")
        if event.description:
            lines.append(f"DESCRIPTION:{escape_text(event.description)}")
        lines.append("END:VEVENT")

    lines.append("END:VCALENDAR")
    return ICS_LINE_ENDING.join(lines)
