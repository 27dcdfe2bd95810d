"""
Glue between the engine and its collaborators.

A file picker hands over a SelectedFile, or None when the user cancelled;
None is a no-op, never an error. Exports come back as an ExportFile that a
share/download sink can deliver as-is.
"""

from __future__ import annotations

import logging
from datetime import date
from typing import Any, Dict, List, NamedTuple, Optional

from .booked import parse_booked_csv
from .config import settings
from .generate import generate_booked_tsv, generate_ics, generate_offers_tsv
from .ics import parse_ics
from .models import (
    BookedCruiseRecord,
    BookedImportResponse,
    CalendarEventRecord,
    CalendarImportResponse,
    CruiseRecord,
    ImportReport,
    OfferRecord,
    OffersImportResponse,
    ReportItem,
    ReportSummary,
)
from .offers import parse_offers_csv
from .tabular import detect_delimiter, split_lines

logger = logging.getLogger(__name__)

TSV_MEDIA_TYPE = "text/tab-separated-values"
ICS_MEDIA_TYPE = "text/calendar"


class SelectedFile(NamedTuple):
    content: str
    file_name: str


class ExportFile(NamedTuple):
    content: str
    file_name: str
    media_type: str


def _tabular_normalizations(content: str, extra: Optional[Dict[str, Any]]) -> Dict[str, Any]:
    normalizations = dict(extra or {})
    normalizations["delimiter"] = {
        "detected": detect_delimiter(content).name.lower(),
        "source": "header_line",
    }
    return normalizations


def _report(rows: Optional[int], records: int, warnings: List[ReportItem],
            normalizations: Optional[Dict[str, Any]]) -> ImportReport:
    return ImportReport(
        summary=ReportSummary(rows=rows, records=records, warnings=len(warnings), errors=0),
        normalizations=normalizations or {},
        warnings=warnings,
    )


def _data_rows(content: str) -> int:
    return max(len(split_lines(content)) - 1, 0)


def import_offers(selection: Optional[SelectedFile],
                  normalizations: Optional[Dict[str, Any]] = None) -> Optional[OffersImportResponse]:
    if selection is None:
        logger.info("Offer import cancelled, nothing to do")
        return None

    warnings: List[ReportItem] = []
    cruises, offers = parse_offers_csv(selection.content, warnings)
    return OffersImportResponse(
        file_name=selection.file_name,
        cruises=cruises,
        offers=offers,
        report=_report(
            _data_rows(selection.content),
            len(cruises),
            warnings,
            _tabular_normalizations(selection.content, normalizations),
        ),
    )


def import_booked(selection: Optional[SelectedFile],
                  normalizations: Optional[Dict[str, Any]] = None,
                  today: Optional[date] = None) -> Optional[BookedImportResponse]:
    if selection is None:
        logger.info("Booked import cancelled, nothing to do")
        return None

    warnings: List[ReportItem] = []
    booked = parse_booked_csv(selection.content, warnings, today=today)
    return BookedImportResponse(
        file_name=selection.file_name,
        booked_cruises=booked,
        report=_report(
            _data_rows(selection.content),
            len(booked),
            warnings,
            _tabular_normalizations(selection.content, normalizations),
        ),
    )


def import_calendar(selection: Optional[SelectedFile],
                    normalizations: Optional[Dict[str, Any]] = None) -> Optional[CalendarImportResponse]:
    if selection is None:
        logger.info("Calendar import cancelled, nothing to do")
        return None

    events = parse_ics(selection.content)
    return CalendarImportResponse(
        file_name=selection.file_name,
        events=events,
        report=_report(None, len(events), [], normalizations),
    )


def _export_name(kind: str, extension: str, today: Optional[date]) -> str:
    stamp = (today or date.today()).isoformat()
    return f"{settings.EXPORT_FILE_PREFIX}_{kind}_{stamp}.{extension}"


def export_offers(cruises: List[CruiseRecord], offers: List[OfferRecord],
                  today: Optional[date] = None) -> ExportFile:
    content = generate_offers_tsv(cruises, offers)
    logger.info("Exported %d cruises", len(cruises))
    return ExportFile(content, _export_name("offers", "tsv", today), TSV_MEDIA_TYPE)


def export_booked(booked_cruises: List[BookedCruiseRecord], today: Optional[date] = None) -> ExportFile:
    content = generate_booked_tsv(booked_cruises)
    logger.info("Exported %d booked cruises", len(booked_cruises))
    return ExportFile(content, _export_name("booked", "tsv", today), TSV_MEDIA_TYPE)


def export_calendar(events: List[CalendarEventRecord], today: Optional[date] = None) -> ExportFile:
    content = generate_ics(events)
    logger.info("Exported %d calendar events", len(events))
    return ExportFile(content, _export_name("calendar", "ics", today), ICS_MEDIA_TYPE)
