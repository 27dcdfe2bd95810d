"""
Upload decoding: raw bytes -> text the importers can read.

Responsibilities:
- encoding detection (best effort) with deterministic fallbacks
- BOM removal
- newline normalization to LF
"""

from __future__ import annotations

import logging
from typing import Any, Dict, Tuple

from charset_normalizer import from_bytes

from .rules import TARGET_ENCODING

logger = logging.getLogger(__name__)

_UTF8_BOM = b"\xef\xbb\xbf"


def decode_upload(raw: bytes) -> Tuple[str, Dict[str, Any]]:
    """
    Decode uploaded bytes to a str with LF line endings.

    Rules:
    - Detect encoding best-effort via charset-normalizer.
    - If decoding with the detected encoding fails, try UTF-8.
    - If that fails too, decode with replacement characters and report it.
    """
    detected = None
    match = from_bytes(raw).best()
    if match is not None:
        detected = match.encoding

    decode_used = detected or TARGET_ENCODING
    # A UTF-8 BOM must not survive into the header cell of the first column.
    if raw.startswith(_UTF8_BOM) and decode_used.lower().replace("-", "_") in ("utf_8", "utf8"):
        decode_used = "utf-8-sig"

    decode_fallback = False
    try:
        text = raw.decode(decode_used)
    except (UnicodeDecodeError, LookupError):
        decode_fallback = True
        try:
            text = raw.decode("utf-8-sig")
            decode_used = "utf-8-sig"
        except UnicodeDecodeError:
            text = raw.decode(TARGET_ENCODING, errors="replace")
            decode_used = TARGET_ENCODING

    if decode_fallback:
        logger.warning("Upload decoded with fallback encoding %s (detected %s)", decode_used, detected)

    bom_removed = raw.startswith(_UTF8_BOM)
    if text.startswith("\ufeff"):
        text = text[1:]
        bom_removed = True

    newlines = {
        "crlf": text.count("\r\n"),
        "cr": text.count("\r") - text.count("\r\n"),
        "lf": text.count("\n") - text.count("\r\n"),
    }
    text = text.replace("\r\n", "\n").replace("\r", "\n")

    report = {
        "encoding": {
            "detected": detected,
            "decode_used": decode_used,
            "decode_fallback": decode_fallback,
            "bom_removed": bom_removed,
        },
        "newlines": {
            "policy": "lf",
            "before": newlines,
            "changed": newlines["crlf"] > 0 or newlines["cr"] > 0,
        },
    }
    return text, report
