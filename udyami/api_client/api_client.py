"""
Backend API Client

HTTP adapter for the marketplace backend. Every operation returns None when
the backend is unreachable, answers with a non-2xx status or sends invalid
JSON; it never raises to its caller. Any other value (including an empty
list) is a real answer from the backend.

The backend speaks camelCase JSON; this client converts keys to and from the
snake_case records used everywhere else.
"""

from __future__ import annotations

import logging
import re
from typing import Any

import requests
from requests.adapters import HTTPAdapter
from urllib3.util.retry import Retry

logger = logging.getLogger(__name__)

_CAMEL_BOUNDARY = re.compile(r"(?<!^)(?=[A-Z])")


def to_camel_case(key: str) -> str:
    head, *rest = key.split("_")
    return head + "".join(part[:1].upper() + part[1:] for part in rest)


def to_snake_case(key: str) -> str:
    return _CAMEL_BOUNDARY.sub("_", key).lower()


def convert_keys(value: Any, converter) -> Any:
    """Recursively apply a key converter to every dict in a JSON value."""
    if isinstance(value, dict):
        return {
            converter(k) if isinstance(k, str) else k: convert_keys(v, converter)
            for k, v in value.items()
        }
    if isinstance(value, list):
        return [convert_keys(item, converter) for item in value]
    return value


class ApiClient:
    """
    Client for the marketplace backend API.

    Handles retries, JSON encoding and the null-on-failure contract.
    """

    def __init__(
        self,
        base_url: str = "http://localhost:3001/api",
        timeout: float = 10.0,
        max_retries: int = 2,
        retry_backoff_factor: float = 0.5,
        session: requests.Session | None = None,
    ):
        """
        Initialize the API client.

        Args:
            base_url: Base URL of the backend API
            timeout: Request timeout in seconds
            max_retries: Maximum retry attempts for idempotent requests
            retry_backoff_factor: Multiplier for exponential backoff between retries
            session: Optional preconfigured session (used by tests)
        """
        if not base_url:
            raise ValueError("Base URL is required")
        self.base_url = base_url.rstrip("/")
        self.timeout = timeout

        if session is None:
            session = requests.Session()
            retry_strategy = Retry(
                total=max_retries,
                backoff_factor=retry_backoff_factor,
                status_forcelist=[429, 500, 502, 503, 504],
                # POST is not retried so a slow create is never duplicated
                allowed_methods=["GET", "PUT", "DELETE"],
            )
            adapter = HTTPAdapter(max_retries=retry_strategy)
            session.mount("http://", adapter)
            session.mount("https://", adapter)
        self.session = session
        self.session.headers.update({"Content-Type": "application/json"})

    def _request(
        self,
        method: str,
        endpoint: str,
        body: dict[str, Any] | None = None,
        params: dict[str, Any] | None = None,
    ) -> Any | None:
        """
        Send a request and return the decoded, unwrapped response.

        Args:
            method: HTTP method
            endpoint: Path relative to base_url
            body: JSON body (snake_case keys)
            params: Query parameters (snake_case keys)

        Returns:
            Response payload with snake_case keys, or None on any failure
        """
        url = f"{self.base_url}{endpoint}"
        try:
            response = self.session.request(
                method,
                url,
                json=convert_keys(body, to_camel_case) if body is not None else None,
                params=convert_keys(params, to_camel_case) if params else None,
                timeout=self.timeout,
            )
        except requests.RequestException as e:
            logger.warning(f"API request failed: {method} {endpoint}: {e}")
            return None

        if not response.ok:
            logger.warning(
                f"API request failed: {method} {endpoint}: {response.status_code} - {response.reason}"
            )
            return None

        # 204 and other empty successes carry no body
        if response.status_code == 204 or not response.content:
            return {}

        try:
            payload = response.json()
        except ValueError as e:
            logger.warning(f"Invalid JSON response from {method} {endpoint}: {e}")
            return None

        logger.debug(f"API request: {method} {endpoint} -> {response.status_code}")
        if isinstance(payload, dict) and "data" in payload:
            payload = payload["data"]
        return convert_keys(payload, to_snake_case)

    def _request_list(self, endpoint: str, params: dict[str, Any] | None = None) -> list[Any] | None:
        payload = self._request("GET", endpoint, params=params)
        if payload is None:
            return None
        if not isinstance(payload, list):
            logger.warning(f"Expected a list from GET {endpoint}, got {type(payload).__name__}")
            return None
        return payload

    def _create(self, endpoint: str, body: dict[str, Any]) -> str | None:
        """POST a new record and return its id."""
        payload = self._request("POST", endpoint, body=body)
        if not isinstance(payload, dict) or payload.get("id") is None:
            return None
        return str(payload["id"])

    # Health

    def health_check(self) -> bool:
        """
        Probe the backend.

        Returns:
            True if the backend answered with a 2xx status
        """
        try:
            response = self.session.get(f"{self.base_url}/", timeout=self.timeout)
        except requests.RequestException as e:
            logger.warning(f"Health check failed: {e}")
            return False
        if not response.ok:
            logger.warning(f"Health check failed: {response.status_code} - {response.reason}")
        return response.ok

    # Users

    def create_user(self, user_data: dict[str, Any]) -> str | None:
        return self._create("/users", user_data)

    def get_user(self, user_id: str) -> dict[str, Any] | None:
        return self._request("GET", f"/users/{user_id}")

    def get_user_by_phone(self, phone_number: str) -> dict[str, Any] | None:
        return self._request("GET", f"/users/phone/{phone_number}")

    def get_users(self) -> list[dict[str, Any]] | None:
        return self._request_list("/users")

    def update_user(self, user_id: str, user_data: dict[str, Any]) -> dict[str, Any] | None:
        return self._request("PUT", f"/users/{user_id}", body=user_data)

    # Jobs

    def create_job(self, job_data: dict[str, Any]) -> str | None:
        return self._create("/jobs", job_data)

    def get_jobs(self, filters: dict[str, Any] | None = None) -> list[dict[str, Any]] | None:
        return self._request_list("/jobs", params=filters)

    def get_jobs_by_user(self, user_id: str) -> list[dict[str, Any]] | None:
        return self._request_list(f"/jobs/user/{user_id}")

    def update_job_status(self, job_id: str, status: str) -> dict[str, Any] | None:
        return self._request("PUT", f"/jobs/{job_id}/status", body={"status": status})

    # Sellers

    def create_seller(self, seller_data: dict[str, Any]) -> str | None:
        return self._create("/sellers", seller_data)

    def get_sellers(self, filters: dict[str, Any] | None = None) -> list[dict[str, Any]] | None:
        return self._request_list("/sellers", params=filters)

    def get_seller(self, seller_id: str) -> dict[str, Any] | None:
        return self._request("GET", f"/sellers/{seller_id}")

    # Services

    def create_service(self, service_data: dict[str, Any]) -> str | None:
        return self._create("/services", service_data)

    def get_services(self) -> list[dict[str, Any]] | None:
        return self._request_list("/services")

    def get_services_by_seller(self, seller_id: str) -> list[dict[str, Any]] | None:
        return self._request_list(f"/services/seller/{seller_id}")

    # Follows

    def follow_seller(self, seller_id: str, follower_id: str) -> dict[str, Any] | None:
        return self._request(
            "POST", "/follows", body={"seller_id": seller_id, "follower_id": follower_id}
        )

    def unfollow_seller(self, seller_id: str, follower_id: str) -> dict[str, Any] | None:
        return self._request(
            "DELETE", "/follows", body={"seller_id": seller_id, "follower_id": follower_id}
        )

    def get_followed_sellers(self, user_id: str) -> list[dict[str, Any]] | None:
        return self._request_list(f"/follows/user/{user_id}")

    # Notifications

    def create_notification(self, notification_data: dict[str, Any]) -> str | None:
        return self._create("/notifications", notification_data)

    def get_notifications(self, user_id: str) -> list[dict[str, Any]] | None:
        return self._request_list(f"/notifications/user/{user_id}")

    # Utilities

    def clear_all_data(self) -> Any | None:
        return self._request("DELETE", "/clear")

    def get_all_data(self) -> dict[str, Any] | None:
        return self._request("GET", "/data")
