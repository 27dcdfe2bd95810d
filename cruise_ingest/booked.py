"""
Booked cruise sheet import.
"""

from __future__ import annotations

import logging
from datetime import date
from typing import List, Optional

from .dates import calculate_return_date, completion_state, normalize_date, parse_canonical
from .models import BookedCruiseRecord, ReportItem
from .records import make_record_id, skip_row, split_ports
from .rules import BOOKED_ALIASES, BOOKED_PORT_SEPARATORS, DEFAULT_GUESTS, DEFAULT_NIGHTS
from .tabular import Row, read_table

logger = logging.getLogger(__name__)

REQUIRED_FIELDS = ("ship", "departure_date")


def _resolve_return_date(sail_date: str, return_raw: str, nights: int, ordinal: int) -> str:
    computed = calculate_return_date(sail_date, nights)
    if not return_raw:
        return computed

    supplied = normalize_date(return_raw)
    start, end = parse_canonical(sail_date), parse_canonical(supplied)
    if start is not None and end is not None and end < start:
        logger.warning("Row %d: return date %s precedes sail date %s, using %s", ordinal, supplied, sail_date, computed)
        return computed
    return supplied


def _build_booked(row: Row, today: Optional[date]) -> BookedCruiseRecord:
    ship = row.text("ship")
    sail_date = normalize_date(row.text("departure_date"))
    nights = row.integer("nights")
    if nights <= 0:
        nights = DEFAULT_NIGHTS
    return_date = _resolve_return_date(sail_date, row.text("return_date"), nights, row.ordinal)
    itinerary_name = row.text("itinerary_name")
    reservation_number = row.text("reservation_number")
    is_booked = row.flag("is_booked")

    return BookedCruiseRecord(
        id=row.text("id") or make_record_id("booked", ship, sail_date, row.ordinal),
        ship_name=ship,
        sail_date=sail_date,
        return_date=return_date,
        departure_port=row.text("departure_port"),
        destination=itinerary_name,
        itinerary_name=itinerary_name,
        nights=nights,
        ports=split_ports(row.text("ports_route"), BOOKED_PORT_SEPARATORS),
        reservation_number=reservation_number,
        booking_id=row.text("booking_id") or reservation_number,
        guests=row.integer("guests") or DEFAULT_GUESTS,
        status="booked" if is_booked else "available",
        winnings=row.number("winnings") or None,
        earned_points=row.number("points_earned") or None,
        completion_state=completion_state(return_date, today),
    )


def parse_booked_csv(
    content: str,
    warnings: Optional[List[ReportItem]] = None,
    today: Optional[date] = None,
) -> List[BookedCruiseRecord]:
    """
    Parse a booked-cruise sheet (CSV or TSV).

    `today` fixes the reference day for completion state; defaults to the
    local current date.
    """
    logger.info("Starting to parse booked sheet")

    _, rows = read_table(content, BOOKED_ALIASES)

    booked: List[BookedCruiseRecord] = []
    for row in rows:
        missing = [field for field in REQUIRED_FIELDS if not row.text(field)]
        if missing:
            skip_row(row.ordinal, missing, warnings)
            continue

        cruise = _build_booked(row, today)
        booked.append(cruise)
        logger.debug("Parsed booked cruise: %s - %s - %s", cruise.ship_name, cruise.sail_date, cruise.itinerary_name)

    logger.info("Parsed %d booked cruises", len(booked))
    return booked
