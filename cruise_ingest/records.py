"""Helpers shared by the tabular record builders."""

from __future__ import annotations

import logging
import re
from typing import List, Optional, Sequence

from .models import ReportItem
from .rules import PRICE_TIER_FALLBACK

logger = logging.getLogger(__name__)

_SLUG_RE = re.compile(r"[^a-z0-9]+")


def slugify(name: str) -> str:
    return _SLUG_RE.sub("_", name.lower()).strip("_")


def make_record_id(prefix: str, ship_name: str, sail_date: str, ordinal: int) -> str:
    """Unique within one import even when ship and date repeat."""
    return f"{prefix}_{slugify(ship_name)}_{sail_date}_{ordinal}"


def split_ports(value: str, separators: Sequence[str]) -> List[str]:
    if not value:
        return []
    pattern = "|".join(re.escape(sep) for sep in sorted(separators, key=len, reverse=True))
    return [port.strip() for port in re.split(pattern, value) if port.strip()]


def price_for_cabin(cabin_type: str, interior: float, oceanview: float, balcony: float, suite: float) -> float:
    kind = (cabin_type or "").lower()
    if "interior" in kind:
        return interior
    if "ocean" in kind or "view" in kind:
        return oceanview
    if "balcony" in kind:
        return balcony
    if "suite" in kind:
        return suite

    tiers = {"interior": interior, "oceanview": oceanview, "balcony": balcony, "suite": suite}
    return next((tiers[name] for name in PRICE_TIER_FALLBACK if tiers[name]), 0)


def skip_row(ordinal: int, missing: List[str], warnings: Optional[List[ReportItem]]) -> None:
    logger.info("Skipping row %d: missing %s", ordinal, ", ".join(missing))
    if warnings is not None:
        warnings.append(ReportItem(
            row=ordinal,
            column=",".join(missing),
            issue="missing_required_field",
            value=None,
            action="skipped",
        ))
