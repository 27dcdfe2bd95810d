import logging
from typing import Tuple

from fastapi import FastAPI, UploadFile, File, HTTPException
from fastapi.responses import PlainTextResponse

from .config import settings
from .models import (
    BookedExportRequest,
    BookedImportResponse,
    CalendarExportRequest,
    CalendarImportResponse,
    HealthResponse,
    OffersExportRequest,
    OffersImportResponse,
)
from .normalize import decode_upload
from . import service

logging.basicConfig(
    level=settings.LOG_LEVEL,
    format="%(asctime)s %(levelname)s %(name)s: %(message)s",
)

TABULAR_EXTENSIONS = (".csv", ".tsv", ".txt")
CALENDAR_EXTENSIONS = (".ics", ".txt")

app = FastAPI(
    title="cruise-ingest",
    description="Cruise offer, booking and calendar import/export",
    version="0.1.0",
)


async def _read_upload(file: UploadFile, extensions: Tuple[str, ...]) -> Tuple[service.SelectedFile, dict]:
    name = file.filename or ""
    if not name.lower().endswith(extensions):
        raise HTTPException(
            status_code=422,
            detail=f"Only {', '.join(extensions)} files are supported",
        )

    raw = await file.read()
    if len(raw) > settings.MAX_UPLOAD_BYTES:
        raise HTTPException(status_code=413, detail="File too large")

    text, normalizations = decode_upload(raw)
    return service.SelectedFile(text, name), normalizations


def _attachment(export: service.ExportFile) -> PlainTextResponse:
    return PlainTextResponse(
        export.content,
        media_type=export.media_type,
        headers={"Content-Disposition": f'attachment; filename="{export.file_name}"'},
    )


@app.get("/health", response_model=HealthResponse)
def health():
    return {"ok": True}


@app.post("/import/offers", response_model=OffersImportResponse)
async def import_offers(file: UploadFile = File(...)):
    selection, normalizations = await _read_upload(file, TABULAR_EXTENSIONS)
    return service.import_offers(selection, normalizations)


@app.post("/import/booked", response_model=BookedImportResponse)
async def import_booked(file: UploadFile = File(...)):
    selection, normalizations = await _read_upload(file, TABULAR_EXTENSIONS)
    return service.import_booked(selection, normalizations)


@app.post("/import/calendar", response_model=CalendarImportResponse)
async def import_calendar(file: UploadFile = File(...)):
    selection, normalizations = await _read_upload(file, CALENDAR_EXTENSIONS)
    return service.import_calendar(selection, normalizations)


@app.post("/export/offers")
def export_offers(payload: OffersExportRequest):
    return _attachment(service.export_offers(payload.cruises, payload.offers))


@app.post("/export/booked")
def export_booked(payload: BookedExportRequest):
    return _attachment(service.export_booked(payload.booked_cruises))


@app.post("/export/calendar")
def export_calendar(payload: CalendarExportRequest):
    return _attachment(service.export_calendar(payload.events))
