# portal/api_client.py

from typing import Any, Dict, Optional

import requests

from core.config import settings
from core.errors import (
    InquiryError,
    NetworkError,
    NoOpError,
    NotFoundError,
    PersistenceError,
    RequestTimeoutError,
    ValidationError,
)
from core.logging_config import logger
from models.enums import FILTER_ALL


def error_for_response(status_code: int, message: str) -> InquiryError:
    """Map a non-2xx API answer back onto the error taxonomy."""
    if status_code == 400:
        if message == NoOpError.default_message:
            return NoOpError(message)
        return ValidationError(message)
    if status_code == 404:
        return NotFoundError(message)
    if status_code == 504:
        return RequestTimeoutError(message)
    return PersistenceError(message)


class InquiryApiClient:
    """
    Thin HTTP client for the inquiries API, used by the form wizard and
    the admin dashboard.

    Transport failures raise NetworkError (or RequestTimeoutError); a
    non-2xx answer raises the matching InquiryError with the server's
    message. Nothing is retried.
    """

    def __init__(
        self,
        base_url: str = None,
        timeout: float = None,
        session: Optional[requests.Session] = None,
    ):
        self.base_url = (base_url or settings.API_BASE_URL).rstrip("/")
        self.timeout = timeout if timeout is not None else settings.API_TIMEOUT_SECONDS
        self.session = session or requests.Session()

    def _request(self, method: str, path: str, **kwargs) -> Dict[str, Any]:
        url = f"{self.base_url}{path}"
        try:
            response = self.session.request(method, url, timeout=self.timeout, **kwargs)
        except requests.Timeout as e:
            logger.warning(f"{method} {url} timed out: {e}")
            raise RequestTimeoutError(f"Request to {path} timed out") from e
        except requests.RequestException as e:
            logger.warning(f"{method} {url} failed: {e}")
            raise NetworkError(f"Could not reach the server: {e}") from e

        try:
            body = response.json()
        except ValueError:
            body = {}

        if not response.ok:
            message = body.get("error") if isinstance(body, dict) else None
            raise error_for_response(response.status_code, message or f"HTTP {response.status_code}")

        return body

    # -------------------------------------------------
    # Inquiries
    # -------------------------------------------------
    def create_inquiry(self, payload: Dict[str, Any]) -> Dict[str, Any]:
        return self._request("POST", "/inquiries", json=payload)["inquiry"]

    def list_inquiries(
        self,
        status: str = FILTER_ALL,
        category: str = FILTER_ALL,
        priority: str = FILTER_ALL,
        limit: Optional[int] = None,
        offset: Optional[int] = None,
    ) -> Dict[str, Any]:
        params = {}
        for name, value in (("status", status), ("category", category), ("priority", priority)):
            if value and value != FILTER_ALL:
                params[name] = value
        if limit is not None:
            params["limit"] = limit
        if offset is not None:
            params["offset"] = offset
        return self._request("GET", "/inquiries", params=params)

    def get_inquiry(self, inquiry_id: str) -> Dict[str, Any]:
        return self._request("GET", f"/inquiries/{inquiry_id}")["inquiry"]

    def update_inquiry(self, inquiry_id: str, changes: Dict[str, Any]) -> Dict[str, Any]:
        return self._request("PATCH", f"/inquiries/{inquiry_id}", json=changes)["inquiry"]
