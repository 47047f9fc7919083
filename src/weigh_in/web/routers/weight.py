"""Weight entry routes."""

import logging

import aiosqlite
from fastapi import APIRouter, Body, File, Query, Request, UploadFile
from fastapi.responses import JSONResponse, Response

from ...models.weight_entry import is_valid_object_id
from ...services.entries import EntryService, EntryValidationError
from ...services.importer import ImportFormatError, template_csv
from . import error_response, get_db_path

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/weight", tags=["weight"])

MAX_UPLOAD_BYTES = 5 * 1024 * 1024
CSV_MIME_TYPES = {"text/csv"}
PREVIEW_SIZE = 5


def get_service(request: Request) -> EntryService:
    return EntryService(get_db_path(request))


def _validation_response(error: EntryValidationError) -> JSONResponse:
    return JSONResponse(status_code=400, content={"errors": error.errors})


def csv_response(content: str, filename: str) -> Response:
    return Response(
        content=content,
        media_type="text/csv",
        headers={"Content-Disposition": f'attachment; filename="{filename}"'},
    )


@router.get("")
async def list_entries(request: Request):
    """Get all entries, oldest first."""
    try:
        entries = await get_service(request).list_entries()
    except aiosqlite.Error as e:
        logger.exception("Error fetching entries")
        return error_response(500, "Error fetching data", str(e))
    return [entry.to_record() for entry in entries]


@router.post("", status_code=201)
async def create_entry(request: Request, payload: dict = Body(...)):
    """Create a manual entry."""
    try:
        entry = await get_service(request).create_entry(payload)
    except EntryValidationError as e:
        return _validation_response(e)
    except aiosqlite.Error as e:
        logger.exception("Error creating entry")
        return error_response(500, "Error creating entry", str(e))
    return entry.to_record()


@router.delete("")
async def clear_entries(request: Request):
    """Delete every entry."""
    try:
        count = await get_service(request).clear_entries()
    except aiosqlite.Error as e:
        logger.exception("Error clearing entries")
        return error_response(500, "Error clearing data", str(e))
    return {"message": "All data cleared successfully", "deletedCount": count}


@router.get("/stats")
async def get_stats(request: Request):
    """Entry count with the oldest and latest entries."""
    try:
        stats = await get_service(request).get_stats()
    except aiosqlite.Error as e:
        logger.exception("Error calculating stats")
        return error_response(500, "Error calculating stats", str(e))
    return stats.to_dict()


@router.get("/ids")
async def list_ids(request: Request):
    """All entry ids with their dates, newest first."""
    try:
        return await get_service(request).list_ids()
    except aiosqlite.Error as e:
        logger.exception("Error fetching entry ids")
        return error_response(500, "Error fetching record IDs", str(e))


@router.get("/range")
async def list_range(
    request: Request,
    start_date: str | None = Query(None, alias="startDate"),
    end_date: str | None = Query(None, alias="endDate"),
):
    """Entries between two dates, inclusive."""
    if not start_date or not end_date:
        return error_response(400, "Start date and end date are required")
    try:
        entries = await get_service(request).list_range(start_date, end_date)
    except EntryValidationError as e:
        return error_response(400, "Invalid date range", str(e))
    except aiosqlite.Error as e:
        logger.exception("Error fetching date range")
        return error_response(500, "Error fetching data range", str(e))
    return [entry.to_record() for entry in entries]


@router.get("/export")
async def export_entries(request: Request):
    """Download every entry as CSV."""
    try:
        content = await get_service(request).export_csv()
    except aiosqlite.Error as e:
        logger.exception("Error exporting entries")
        return error_response(500, "Error exporting data", str(e))
    if content is None:
        return error_response(404, "No data available to export")
    return csv_response(content, "weight-data-export.csv")


@router.get("/template")
async def download_template():
    """Download an empty CSV with the expected headers."""
    return csv_response(template_csv(), "weight-data-template.csv")


@router.post("/upload")
async def upload_entries(request: Request, file: UploadFile | None = File(None)):
    """Import a CSV file (raw scale export or processed layout)."""
    if file is None:
        return error_response(400, "No file uploaded")

    filename = file.filename or ""
    media_type = (file.content_type or "").split(";")[0].strip().lower()
    if media_type not in CSV_MIME_TYPES:
        return error_response(415, "Only CSV files are allowed")

    content = await file.read(MAX_UPLOAD_BYTES + 1)
    if len(content) > MAX_UPLOAD_BYTES:
        return error_response(413, "File too large", "Maximum upload size is 5MB")

    try:
        text = content.decode("utf-8-sig")
    except UnicodeDecodeError:
        return error_response(400, "Error processing data", "File is not valid UTF-8")

    try:
        saved = await get_service(request).import_csv(text)
    except ImportFormatError as e:
        return error_response(400, "Error processing data", str(e))
    except aiosqlite.Error as e:
        logger.exception("Error importing %s", filename)
        return error_response(500, "Error processing data", str(e))

    return {
        "message": "Data processed successfully",
        "count": len(saved),
        "preview": [entry.to_record() for entry in saved[:PREVIEW_SIZE]],
    }


@router.get("/{entry_id}")
async def get_entry(request: Request, entry_id: str):
    """Get a single entry."""
    if not is_valid_object_id(entry_id):
        return error_response(400, "Invalid ID format")
    try:
        entry = await get_service(request).get_entry(entry_id)
    except aiosqlite.Error as e:
        logger.exception("Error fetching entry %s", entry_id)
        return error_response(500, "Error fetching record", str(e))
    if entry is None:
        return error_response(404, "Record not found")
    return entry.to_record()


@router.put("/{entry_id}")
async def update_entry(request: Request, entry_id: str, payload: dict = Body(...)):
    """Apply a full or partial update to an entry."""
    if not is_valid_object_id(entry_id):
        return error_response(400, "Invalid ID format")
    try:
        entry = await get_service(request).update_entry(entry_id, payload)
    except EntryValidationError as e:
        return _validation_response(e)
    except aiosqlite.Error as e:
        logger.exception("Error updating entry %s", entry_id)
        return error_response(500, "Error updating record", str(e))
    if entry is None:
        return error_response(404, "Record not found")
    return entry.to_record()


@router.delete("/{entry_id}")
async def delete_entry(request: Request, entry_id: str):
    """Delete a single entry."""
    if not is_valid_object_id(entry_id):
        return error_response(400, "Invalid ID format")
    try:
        deleted = await get_service(request).delete_entry(entry_id)
    except aiosqlite.Error as e:
        logger.exception("Error deleting entry %s", entry_id)
        return error_response(500, "Error deleting record", str(e))
    if not deleted:
        return error_response(404, "Record not found")
    return {"message": "Record deleted successfully"}
