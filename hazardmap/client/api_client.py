"""HTTP client for the hazardmap API.

Every method issues exactly one request and returns the decoded JSON body.
Failures raise ApiClientError carrying the server's message, or a generic
per-operation message when the server sent none (network errors, non-JSON
bodies).
"""

from __future__ import annotations

import logging
from typing import Any

import httpx

from hazardmap.core.config import settings

logger = logging.getLogger(__name__)


class ApiClientError(Exception):
    """Raised when an API call fails."""

    def __init__(self, message: str, status_code: int | None = None) -> None:
        super().__init__(message)
        self.message = message
        self.status_code = status_code


def _error_message(response: httpx.Response, fallback: str) -> str:
    try:
        body = response.json()
    except ValueError:
        return fallback
    if not isinstance(body, dict):
        return fallback
    detail = body.get("detail") or body.get("error")
    if isinstance(detail, str) and detail:
        return detail
    if isinstance(detail, list):
        msgs = [d.get("msg", "") for d in detail if isinstance(d, dict)]
        return "; ".join(m for m in msgs if m) or fallback
    return fallback


class HazardMapClient:
    """Thin wrapper over the /hazards, /users and /health endpoints."""

    def __init__(
        self,
        base_url: str | None = None,
        http: httpx.Client | None = None,
        timeout: float | None = None,
    ) -> None:
        self.base_url = (base_url or settings.api_url).rstrip("/")
        self._owns_http = http is None
        self._http = http or httpx.Client(timeout=timeout or settings.client_timeout_seconds)

    def close(self) -> None:
        if self._owns_http:
            self._http.close()

    def __enter__(self) -> HazardMapClient:
        return self

    def __exit__(self, *exc_info) -> None:
        self.close()

    def _request(self, method: str, path: str, fallback: str, json: dict[str, Any] | None = None) -> Any:
        url = self.base_url + path
        try:
            response = self._http.request(method, url, json=json)
        except httpx.HTTPError as exc:
            logger.warning("%s %s failed: %s", method, url, exc)
            raise ApiClientError(fallback) from exc

        if response.is_error:
            raise ApiClientError(_error_message(response, fallback), status_code=response.status_code)

        try:
            return response.json()
        except ValueError as exc:
            raise ApiClientError(fallback, status_code=response.status_code) from exc

    # ---- hazards ----

    def fetch_hazards(self) -> list[dict[str, Any]]:
        return self._request("GET", "/hazards", "Failed to fetch hazards")

    def get_hazard(self, hazard_id: int) -> dict[str, Any]:
        return self._request("GET", f"/hazards/{hazard_id}", "Failed to fetch hazard")

    def create_hazard(
        self,
        lat: float,
        lng: float,
        description: str,
        user_id: int | None = None,
    ) -> dict[str, Any]:
        body: dict[str, Any] = {"lat": lat, "lng": lng, "description": description}
        if user_id is not None:
            body["userId"] = user_id
        return self._request("POST", "/hazards", "Failed to create hazard", json=body)

    def claim_hazard(self, hazard_id: int, user_id: int) -> dict[str, Any]:
        return self._request("PATCH", f"/hazards/{hazard_id}/claim", "Failed to claim hazard", json={"userId": user_id})

    def complete_hazard(self, hazard_id: int, user_id: int) -> dict[str, Any]:
        return self._request(
            "PATCH", f"/hazards/{hazard_id}/complete", "Failed to complete hazard", json={"userId": user_id}
        )

    def delete_hazard(self, hazard_id: int) -> dict[str, Any]:
        return self._request("DELETE", f"/hazards/{hazard_id}", "Failed to delete hazard")

    # ---- users ----

    def fetch_users(self) -> list[dict[str, Any]]:
        return self._request("GET", "/users", "Failed to fetch users")

    def get_user(self, user_id: int) -> dict[str, Any]:
        return self._request("GET", f"/users/{user_id}", "Failed to fetch user")

    def create_user(self, username: str, email: str) -> dict[str, Any]:
        return self._request("POST", "/users", "Failed to create user", json={"username": username, "email": email})

    def health(self) -> dict[str, Any]:
        return self._request("GET", "/health", "API is unreachable")
