"""API routers."""

from fastapi import Request
from fastapi.responses import JSONResponse


def get_db_path(request: Request):
    """Get the database path from app state."""
    return request.app.state.db_path


def error_response(status_code: int, error: str, message: str | None = None) -> JSONResponse:
    """Build the JSON error body shared by every endpoint."""
    content = {"error": error}
    if message is not None:
        content["message"] = message
    return JSONResponse(status_code=status_code, content=content)
