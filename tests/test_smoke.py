from fastapi.testclient import TestClient
from cruise_ingest.main import app

client = TestClient(app)

OFFERS_CSV = (
    "Ship Name,Sailing Date,Itinerary,Offer Code,Nights,Price Balcony,Ports & Times\n"
    "Wonder of the Seas,12/1/24,Western Caribbean,ABC123,7,\"1,299\",Miami → Cozumel → Miami\n"
    ",,,,,,\n"
    "Utopia of the Seas,2025-03-05,Bahamas,ABC123,3,899,Port Canaveral → Nassau\n"
)


def test_health():
    r = client.get("/health")
    assert r.status_code == 200
    assert r.json() == {"ok": True}


def test_import_offers_strips_bom_and_reports_skipped_rows():
    raw = OFFERS_CSV.replace("\n", "\r\n").encode("utf-8-sig")

    files = {"file": ("offers.csv", raw, "text/csv")}
    r = client.post("/import/offers", files=files)
    assert r.status_code == 200

    data = r.json()
    assert data["file_name"] == "offers.csv"
    assert [c["ship_name"] for c in data["cruises"]] == ["Wonder of the Seas", "Utopia of the Seas"]
    assert data["cruises"][0]["sail_date"] == "2024-12-01"
    assert data["cruises"][0]["balcony_price"] == 1299
    assert data["cruises"][0]["ports"] == ["Miami", "Cozumel", "Miami"]

    assert len(data["offers"]) == 1
    assert len(data["offers"][0]["cruise_ids"]) == 2

    report = data["report"]
    assert report["summary"]["rows"] == 3
    assert report["summary"]["records"] == 2
    assert report["summary"]["warnings"] == 1
    assert report["warnings"][0]["row"] == 2
    assert report["warnings"][0]["action"] == "skipped"
    assert report["normalizations"]["delimiter"]["detected"] == "comma"
    assert report["normalizations"]["newlines"]["changed"] is True


def test_import_rejects_unsupported_extension():
    files = {"file": ("offers.xlsx", b"anything", "application/octet-stream")}
    r = client.post("/import/offers", files=files)
    assert r.status_code == 422


def test_import_booked_and_calendar():
    booked = "ship\tdepartureDate\tnights\tisBooked\nOdyssey of the Seas\t2020-01-04\t7\tTRUE\n"
    r = client.post("/import/booked", files={"file": ("booked.tsv", booked.encode("utf-8"), "text/plain")})
    assert r.status_code == 200
    cruise = r.json()["booked_cruises"][0]
    assert cruise["return_date"] == "2020-01-11"
    assert cruise["completion_state"] == "completed"
    assert cruise["status"] == "booked"

    ics = "BEGIN:VCALENDAR\r\nBEGIN:VEVENT\r\nSUMMARY:Flight to Miami\r\nDTSTART:20250110\r\nEND:VEVENT\r\nEND:VCALENDAR"
    r = client.post("/import/calendar", files={"file": ("trips.ics", ics.encode("utf-8"), "text/calendar")})
    assert r.status_code == 200
    events = r.json()["events"]
    assert events[0]["type"] == "flight"
    assert events[0]["start_date"] == "2025-01-10"


def test_export_offers_is_an_attachment():
    payload = {
        "cruises": [{
            "id": "cruise_wonder_2024-12-01_1",
            "ship_name": "Wonder of the Seas",
            "sail_date": "2024-12-01",
            "return_date": "2024-12-08",
        }],
        "offers": [],
    }
    r = client.post("/export/offers", json=payload)
    assert r.status_code == 200
    assert r.headers["content-type"].startswith("text/tab-separated-values")
    assert "attachment" in r.headers["content-disposition"]
    assert ".tsv" in r.headers["content-disposition"]

    lines = r.text.split("\n")
    assert lines[0].startswith("Ship Name\tSailing Date")
    assert lines[1].startswith("Wonder of the Seas\t2024-12-01")


def test_export_calendar_uses_crlf():
    payload = {"events": [{"id": "e1", "title": "Cruise", "start_date": "2025-01-10", "end_date": "2025-01-17"}]}
    r = client.post("/export/calendar", json=payload)
    assert r.status_code == 200
    assert r.headers["content-type"].startswith("text/calendar")
    assert "DTSTART:20250110\r\n" in r.text
