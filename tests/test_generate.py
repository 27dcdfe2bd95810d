from datetime import date

from cruise_ingest.booked import parse_booked_csv
from cruise_ingest.generate import format_number, generate_booked_tsv, generate_ics, generate_offers_tsv
from cruise_ingest.ics import parse_ics
from cruise_ingest.models import BookedCruiseRecord, CalendarEventRecord, CruiseRecord, OfferRecord
from cruise_ingest.offers import parse_offers_csv
from cruise_ingest.rules import BOOKED_EXPORT_HEADERS, OFFER_EXPORT_HEADERS


def _cruise(**overrides):
    fields = dict(
        id="cruise_wonder_2025-01-04_1",
        ship_name="Wonder of the Seas",
        sail_date="2025-01-04",
        return_date="2025-01-11",
        departure_port="Port Canaveral",
        destination="Perfect Day, Cozumel",
        itinerary_name="Perfect Day, Cozumel",
        nights=7,
        cabin_type="Interior",
        interior_price=899,
        oceanview_price=1049.5,
        balcony_price=1299,
        suite_price=2999,
        taxes=180.25,
        offer_code="ABC123",
        offer_expiry="2025-01-01",
        ports=["Port Canaveral", "CocoCay", "Cozumel", "Port Canaveral"],
        guests_info="2 Guests",
        category="Oasis",
    )
    fields.update(overrides)
    return CruiseRecord(**fields)


def test_offers_round_trip():
    cruises = [
        _cruise(),
        _cruise(id="cruise_icon_2025-02-01_2", ship_name="Icon of the Seas", sail_date="2025-02-01",
                nights=3, interior_price=0, suite_price=5100.75, offer_code=""),
    ]
    offers = [OfferRecord(
        id="offer_ABC123",
        offer_code="ABC123",
        offer_name="Winter Escape",
        offer_type="freeplay",
        category="FreePlay $250",
        trade_in_value=250,
        perks=["Drinks", "Wifi"],
        cruise_ids=[cruises[0].id],
    )]

    parsed_cruises, parsed_offers = parse_offers_csv(generate_offers_tsv(cruises, offers))

    assert len(parsed_cruises) == len(cruises)
    for before, after in zip(cruises, parsed_cruises):
        assert after.ship_name == before.ship_name
        assert after.sail_date == before.sail_date
        assert after.nights == before.nights
        assert after.interior_price == before.interior_price
        assert after.oceanview_price == before.oceanview_price
        assert after.balcony_price == before.balcony_price
        assert after.suite_price == before.suite_price
        assert after.taxes == before.taxes
        assert after.ports == before.ports
        assert after.destination == before.destination
        assert after.departure_port == before.departure_port
        assert after.offer_code == before.offer_code

    assert len(parsed_offers) == 1
    offer = parsed_offers[0]
    assert offer.offer_name == "Winter Escape"
    assert offer.offer_type == "freeplay"
    assert offer.trade_in_value == 250
    assert offer.perks == ["Drinks", "Wifi"]
    assert offer.cruise_ids == [parsed_cruises[0].id]


def test_offers_tsv_layout_and_placeholders():
    text = generate_offers_tsv([_cruise(guests_info="", offer_code="NONE")], [])
    header, row = text.split("\n")

    assert header.split("\t") == OFFER_EXPORT_HEADERS
    cells = row.split("\t")
    assert len(cells) == len(OFFER_EXPORT_HEADERS)
    assert cells[OFFER_EXPORT_HEADERS.index("Guests Info")] == "2 Guests"
    assert cells[OFFER_EXPORT_HEADERS.index("Perks")] == "-"
    assert cells[OFFER_EXPORT_HEADERS.index("Trade-In Value")] == "0"
    assert cells[OFFER_EXPORT_HEADERS.index("Ports & Times")] == "Port Canaveral → CocoCay → Cozumel → Port Canaveral"


def test_tabs_and_newlines_in_values_do_not_break_rows():
    text = generate_offers_tsv([_cruise(ship_name="Wonder\tof the\nSeas")], [])
    assert len(text.split("\n")) == 2
    cruises, _ = parse_offers_csv(text)
    assert cruises[0].ship_name == "Wonder of the Seas"


def test_booked_round_trip():
    booked = [BookedCruiseRecord(
        id="booked_1",
        ship_name="Harmony of the Seas",
        sail_date="2025-05-20",
        return_date="2025-05-27",
        nights=7,
        itinerary_name="Eastern Caribbean",
        departure_port="Miami",
        ports=["Miami", "St. Thomas", "Miami"],
        reservation_number="R123",
        booking_id="B9",
        guests=4,
        status="booked",
        winnings=1200,
    )]

    text = generate_booked_tsv(booked)
    assert text.split("\n")[0].split("\t") == BOOKED_EXPORT_HEADERS

    parsed = parse_booked_csv(text, today=date(2025, 6, 1))[0]
    assert parsed.id == "booked_1"
    assert parsed.ship_name == "Harmony of the Seas"
    assert parsed.sail_date == "2025-05-20"
    assert parsed.return_date == "2025-05-27"
    assert parsed.nights == 7
    assert parsed.ports == ["Miami", "St. Thomas", "Miami"]
    assert parsed.reservation_number == "R123"
    assert parsed.booking_id == "B9"
    assert parsed.guests == 4
    assert parsed.status == "booked"
    assert parsed.winnings == 1200
    assert parsed.earned_points is None


def test_ics_round_trip():
    events = [
        CalendarEventRecord(id="e1", title="Cruise, finally", start_date="2025-03-01", end_date="2025-03-08",
                            type="cruise", location="Miami, FL", description="Pack\nsunscreen"),
        CalendarEventRecord(id="e2", title="Dentist", start_date="2025-04-02", end_date="2025-04-02"),
    ]
    text = generate_ics(events)

    assert text.startswith("BEGIN:VCALENDAR\r\nVERSION:2.0")
    assert text.endswith("END:VCALENDAR")
    assert "SUMMARY:Cruise\\, finally" in text
    assert "DTSTART:20250301" in text

    parsed = parse_ics(text)
    assert [e.model_dump(exclude={"source"}) for e in parsed] == [
        e.model_dump(exclude={"source"}) for e in events
    ]


def test_format_number():
    assert format_number(1299.0) == "1299"
    assert format_number(1049.5) == "1049.5"
    assert format_number(None) == "0"
    assert format_number(0) == "0"


def test_booked_ports_with_commas_split_on_reimport():
    booked = [BookedCruiseRecord(
        id="booked_2",
        ship_name="Wonder of the Seas",
        sail_date="2025-05-20",
        return_date="2025-05-27",
        ports=["Miami", "Nassau, Bahamas"],
    )]
    parsed = parse_booked_csv(generate_booked_tsv(booked), today=date(2025, 6, 1))[0]
    assert parsed.ports == ["Miami", "Nassau", "Bahamas"]
