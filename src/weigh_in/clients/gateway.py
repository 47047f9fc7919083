"""HTTP client for the weigh-in REST API."""

import logging

import httpx

from ..models.weight_entry import is_valid_object_id

logger = logging.getLogger(__name__)

API_PREFIX = "/api/v1"
DEFAULT_API_URL = "http://127.0.0.1:8000"


class GatewayError(Exception):
    """Raised when an API request fails."""

    def __init__(self, message: str, status_code: int | None = None):
        super().__init__(message)
        self.status_code = status_code


class InvalidIdentifierError(GatewayError):
    """Raised before sending a request for an id that cannot exist in the store."""


def _error_message(response: httpx.Response) -> str:
    try:
        body = response.json()
    except ValueError:
        return response.text or response.reason_phrase
    if isinstance(body, dict):
        if "errors" in body:
            return "; ".join(body["errors"])
        parts = [body.get("error"), body.get("message")]
        return ": ".join(p for p in parts if p) or response.reason_phrase
    return response.reason_phrase


class WeighInClient:
    """Single-shot requests against the REST API.

    Requests are not retried. Every failure, transport or HTTP, is raised as
    ``GatewayError``.

    Args:
        http: An ``httpx.Client`` whose base URL points at the server.
            ``fastapi.testclient.TestClient`` works too.
    """

    def __init__(self, http: httpx.Client):
        self.http = http

    @classmethod
    def connect(cls, base_url: str = DEFAULT_API_URL) -> "WeighInClient":
        return cls(httpx.Client(base_url=base_url))

    def close(self) -> None:
        self.http.close()

    def _request(self, method: str, path: str, **kwargs) -> httpx.Response:
        try:
            response = self.http.request(method, f"{API_PREFIX}{path}", **kwargs)
        except httpx.HTTPError as e:
            logger.error("%s %s failed: %s", method, path, e)
            raise GatewayError(f"Request failed: {e}") from e

        if response.is_error:
            message = _error_message(response)
            logger.error("%s %s -> %d %s", method, path, response.status_code, message)
            raise GatewayError(message, status_code=response.status_code)
        return response

    def _check_id(self, entry_id: str) -> None:
        if not is_valid_object_id(entry_id):
            raise InvalidIdentifierError(f"Invalid entry id: {entry_id!r}")

    # Settings

    def get_settings(self) -> dict:
        return self._request("GET", "/settings").json()

    def update_settings(self, updates: dict) -> dict:
        """Send a partial settings payload; omitted keys stay unchanged."""
        return self._request("PUT", "/settings", json=updates).json()

    def reset_settings(self) -> dict:
        return self._request("POST", "/settings/reset").json()

    # Weight entries

    def list_entries(self) -> list[dict]:
        return self._request("GET", "/weight").json()

    def get_entry(self, entry_id: str) -> dict:
        self._check_id(entry_id)
        return self._request("GET", f"/weight/{entry_id}").json()

    def get_stats(self) -> dict:
        return self._request("GET", "/weight/stats").json()

    def create_entry(self, entry: dict) -> dict:
        return self._request("POST", "/weight", json=entry).json()

    def update_entry(self, entry_id: str, updates: dict) -> dict:
        self._check_id(entry_id)
        return self._request("PUT", f"/weight/{entry_id}", json=updates).json()

    def delete_entry(self, entry_id: str) -> bool:
        self._check_id(entry_id)
        self._request("DELETE", f"/weight/{entry_id}")
        return True

    def clear_entries(self) -> int:
        return self._request("DELETE", "/weight").json()["deletedCount"]

    def upload_csv(self, filename: str, content: bytes) -> dict:
        files = {"file": (filename, content, "text/csv")}
        return self._request("POST", "/weight/upload", files=files).json()

    def export_csv(self) -> str:
        return self._request("GET", "/weight/export").text

    def download_template(self) -> str:
        return self._request("GET", "/weight/template").text
