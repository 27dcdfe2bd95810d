from __future__ import annotations

from datetime import datetime, timezone
from typing import Any, Dict, List, Literal, Optional

from pydantic import BaseModel, Field


OfferType = Literal["freeplay", "discount", "obc", "2person", "1+discount", "package"]
EventType = Literal["cruise", "flight", "hotel", "travel", "other"]
CompletionState = Literal["completed", "upcoming"]


def _utc_now_iso() -> str:
    return datetime.now(timezone.utc).isoformat()


class CruiseRecord(BaseModel):
    id: str
    ship_name: str
    sail_date: str
    return_date: str
    departure_port: str = ""
    destination: str = ""
    itinerary_name: str = ""
    nights: int = 7
    cabin_type: str = "Balcony"
    interior_price: float = 0
    oceanview_price: float = 0
    balcony_price: float = 0
    suite_price: float = 0
    taxes: float = 0
    total_price: float = 0
    offer_code: str = ""
    offer_expiry: str = ""
    ports: List[str] = Field(default_factory=list)
    guests_info: str = ""
    status: str = "available"
    category: str = ""
    created_at: str = Field(default_factory=_utc_now_iso)


class OfferSnapshot(BaseModel):
    """Ship and pricing of the sailing that first carried an offer code."""

    ship_name: str = ""
    sailing_date: str = ""
    room_type: str = ""
    guests_info: str = ""
    interior_price: float = 0
    oceanview_price: float = 0
    balcony_price: float = 0
    suite_price: float = 0
    taxes_fees: float = 0


class OfferRecord(BaseModel):
    id: str
    offer_code: str
    offer_name: str
    offer_type: OfferType = "package"
    category: str = ""
    trade_in_value: float = 0
    expiry_date: str = ""
    perks: List[str] = Field(default_factory=list)
    cruise_ids: List[str] = Field(default_factory=list)
    snapshot: OfferSnapshot = Field(default_factory=OfferSnapshot)
    status: str = "active"
    created_at: str = Field(default_factory=_utc_now_iso)


class BookedCruiseRecord(CruiseRecord):
    reservation_number: str = ""
    booking_id: str = ""
    guests: int = 2
    winnings: Optional[float] = None
    earned_points: Optional[float] = None
    completion_state: CompletionState = "upcoming"


class CalendarEventRecord(BaseModel):
    id: str
    title: str
    start_date: str
    end_date: str
    type: EventType = "other"
    location: Optional[str] = None
    description: Optional[str] = None
    source: str = "import"


# --- Import report envelope ---

class ReportItem(BaseModel):
    row: Optional[int] = None
    column: Optional[str] = None
    issue: str
    value: Optional[str] = None
    action: str


class ReportSummary(BaseModel):
    rows: Optional[int] = Field(default=None, examples=[None])
    records: int = 0
    warnings: int = 0
    errors: int = 0


class ImportReport(BaseModel):
    summary: ReportSummary
    normalizations: Dict[str, Any] = Field(default_factory=dict)
    warnings: List[ReportItem] = Field(default_factory=list)
    errors: List[ReportItem] = Field(default_factory=list)


class OffersImportResponse(BaseModel):
    file_name: str
    cruises: List[CruiseRecord] = Field(default_factory=list)
    offers: List[OfferRecord] = Field(default_factory=list)
    report: ImportReport


class BookedImportResponse(BaseModel):
    file_name: str
    booked_cruises: List[BookedCruiseRecord] = Field(default_factory=list)
    report: ImportReport


class CalendarImportResponse(BaseModel):
    file_name: str
    events: List[CalendarEventRecord] = Field(default_factory=list)
    report: ImportReport


# --- Export requests ---

class OffersExportRequest(BaseModel):
    cruises: List[CruiseRecord] = Field(default_factory=list)
    offers: List[OfferRecord] = Field(default_factory=list)


class BookedExportRequest(BaseModel):
    booked_cruises: List[BookedCruiseRecord] = Field(default_factory=list)


class CalendarExportRequest(BaseModel):
    events: List[CalendarEventRecord] = Field(default_factory=list)


class HealthResponse(BaseModel):
    ok: bool = True
