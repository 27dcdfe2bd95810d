"""
Offer sheet import: one cruise per row, one offer per distinct offer code.
"""

from __future__ import annotations

import logging
from typing import Dict, List, Optional, Tuple

from .dates import calculate_return_date, normalize_date
from .models import CruiseRecord, OfferRecord, OfferSnapshot, ReportItem
from .records import make_record_id, price_for_cabin, skip_row, split_ports
from .rules import (
    DEFAULT_CABIN_TYPE,
    DEFAULT_NIGHTS,
    DEFAULT_OFFER_TYPE,
    OFFER_ALIASES,
    OFFER_TYPE_RULES,
    PLACEHOLDER_PERKS,
    PORT_SEPARATORS,
)
from .tabular import Row, read_table

logger = logging.getLogger(__name__)

REQUIRED_FIELDS = ("ship_name", "sailing_date")


def classify_offer_type(category: str) -> str:
    lower = (category or "").lower()
    for offer_type, keywords in OFFER_TYPE_RULES:
        if any(keyword in lower for keyword in keywords):
            return offer_type
    return DEFAULT_OFFER_TYPE


def split_perks(value: str) -> List[str]:
    if not value or value == PLACEHOLDER_PERKS:
        return []
    return [perk.strip() for perk in value.split(",") if perk.strip()]


def _build_cruise(row: Row) -> CruiseRecord:
    ship_name = row.text("ship_name")
    sail_date = normalize_date(row.text("sailing_date"))
    nights = row.integer("nights")
    if nights <= 0:
        nights = DEFAULT_NIGHTS
    room_type = row.text("room_type")
    itinerary = row.text("itinerary")
    interior = row.number("price_interior")
    oceanview = row.number("price_ocean_view")
    balcony = row.number("price_balcony")
    suite = row.number("price_suite")

    return CruiseRecord(
        id=make_record_id("cruise", ship_name, sail_date, row.ordinal),
        ship_name=ship_name,
        sail_date=sail_date,
        return_date=calculate_return_date(sail_date, nights),
        departure_port=row.text("departure_port"),
        destination=itinerary,
        itinerary_name=itinerary,
        nights=nights,
        cabin_type=room_type or DEFAULT_CABIN_TYPE,
        interior_price=interior,
        oceanview_price=oceanview,
        balcony_price=balcony,
        suite_price=suite,
        taxes=row.number("taxes_fees"),
        total_price=price_for_cabin(room_type, interior, oceanview, balcony, suite),
        offer_code=row.text("offer_code"),
        offer_expiry=normalize_date(row.text("offer_expiry_date")),
        ports=split_ports(row.text("ports_and_times"), PORT_SEPARATORS),
        guests_info=row.text("guests_info"),
        status="available",
        category=row.text("ship_class"),
    )


def _aggregate_offer(offer_map: Dict[str, OfferRecord], row: Row, cruise: CruiseRecord) -> None:
    """Seed the offer on first sighting of its code, afterwards only link the cruise."""
    code = cruise.offer_code
    if not code:
        return

    existing = offer_map.get(code)
    if existing is not None:
        if cruise.id not in existing.cruise_ids:
            existing.cruise_ids.append(cruise.id)
        return

    offer_name = row.text("offer_name")
    category = row.text("offer_type")
    offer_map[code] = OfferRecord(
        id=f"offer_{code}",
        offer_code=code,
        offer_name=offer_name or code,
        offer_type=classify_offer_type(category),
        category=category,
        trade_in_value=row.number("trade_in_value"),
        expiry_date=cruise.offer_expiry,
        perks=split_perks(row.text("perks")),
        cruise_ids=[cruise.id],
        snapshot=OfferSnapshot(
            ship_name=cruise.ship_name,
            sailing_date=cruise.sail_date,
            room_type=row.text("room_type"),
            guests_info=cruise.guests_info,
            interior_price=cruise.interior_price,
            oceanview_price=cruise.oceanview_price,
            balcony_price=cruise.balcony_price,
            suite_price=cruise.suite_price,
            taxes_fees=cruise.taxes,
        ),
    )


def parse_offers_csv(
    content: str,
    warnings: Optional[List[ReportItem]] = None,
) -> Tuple[List[CruiseRecord], List[OfferRecord]]:
    """
    Parse an offer sheet (CSV or TSV) into cruises and de-duplicated offers.

    Rows without a ship name or sailing date are skipped and, when a
    warnings list is given, reported there. Never raises on bad data.
    """
    logger.info("Starting to parse offers sheet")

    _, rows = read_table(content, OFFER_ALIASES)

    cruises: List[CruiseRecord] = []
    offer_map: Dict[str, OfferRecord] = {}

    for row in rows:
        missing = [field for field in REQUIRED_FIELDS if not row.text(field)]
        if missing:
            skip_row(row.ordinal, missing, warnings)
            continue

        cruise = _build_cruise(row)
        cruises.append(cruise)
        _aggregate_offer(offer_map, row, cruise)
        logger.debug("Parsed cruise: %s - %s - %s", cruise.ship_name, cruise.sail_date, cruise.destination)

    offers = list(offer_map.values())
    logger.info("Parsed %d cruises and %d unique offers", len(cruises), len(offers))
    return cruises, offers
