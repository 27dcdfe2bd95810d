"""Cruise offer, booking and calendar import/export engine."""

from .booked import parse_booked_csv
from .dates import calculate_return_date, normalize_date
from .generate import generate_booked_tsv, generate_ics, generate_offers_tsv
from .ics import parse_ics
from .models import BookedCruiseRecord, CalendarEventRecord, CruiseRecord, OfferRecord
from .offers import parse_offers_csv
from .tabular import Delimiter, detect_delimiter, resolve_headers, split_fields

__all__ = [
    "BookedCruiseRecord",
    "CalendarEventRecord",
    "CruiseRecord",
    "Delimiter",
    "OfferRecord",
    "calculate_return_date",
    "detect_delimiter",
    "generate_booked_tsv",
    "generate_ics",
    "generate_offers_tsv",
    "normalize_date",
    "parse_booked_csv",
    "parse_ics",
    "parse_offers_csv",
    "resolve_headers",
    "split_fields",
]
