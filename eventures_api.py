"""Eventures API client.

This module defines a thin client around the Eventures JSON API using
the ``requests`` library.  It is what remote clients (the mobile app
driver in :mod:`eventures_client`, scripts, tests) use to talk to the
backend.

The client exposes one method per API operation:

* :meth:`probe` – check that the API answers at the configured URL.
* :meth:`login` / :meth:`register` – authenticate or create a user.
* :meth:`list_events` / :meth:`get_event` / :meth:`count_events`.
* :meth:`create_event` / :meth:`update_event` / :meth:`patch_event` /
  :meth:`delete_event`.

No method raises on HTTP or network failures.  Each returns a tuple
``(data, error)``: on success ``error`` is ``None``; on failure
``data`` is ``None`` (or an empty value) and ``error`` is a dictionary
with keys ``status_code`` and ``message``.  ``status_code`` is
``None`` when the server could not be reached at all.

After a successful :meth:`login` the token is kept and sent as a
bearer token with every following request.
"""

from __future__ import annotations

import logging
from typing import Any, Dict, List, Optional, Tuple

import requests

from eventures.app.core.config import settings
from eventures.app.schemas.event import EventBindingModel, EventPatchModel
from eventures.app.schemas.user import RegisterUserModel

logger = logging.getLogger(__name__)

ApiError = Dict[str, Any]


class EventuresAPI:
    """Client for interacting with the Eventures API."""

    def __init__(
        self,
        *,
        base_url: str,
        session: Optional[requests.Session] = None,
        timeout: Optional[float] = None,
    ) -> None:
        """Initialise the API client.

        Args:
            base_url: Base URL of the API including the ``/api`` prefix,
                e.g. ``http://10.0.2.2:8000/api/``.
            session: Optional requests session.  If not supplied a
                session will be created automatically.
            timeout: Seconds to wait for any request.  Defaults to
                ``settings.client_timeout``.
        """
        self.base_url = base_url.rstrip("/")
        self.session = session or requests.Session()
        self.timeout = timeout if timeout is not None else settings.client_timeout
        self.token: Optional[str] = None

    # ------------------------------------------------------------------
    # Low level HTTP helpers
    # ------------------------------------------------------------------
    def _request(
        self, method: str, path: str, *, params: Dict[str, Any] | None = None,
        json_body: Any | None = None
    ) -> Tuple[Optional[Any], Optional[ApiError]]:
        """Perform an HTTP request to the API.

        Args:
            method: HTTP method (``GET``, ``POST``, ``PUT``, ``DELETE``, ...).
            path: Path relative to :attr:`base_url` (e.g. ``/events/``).
            params: Query parameters to include in the request.
            json_body: JSON body to send with the request.
        Returns:
            A tuple ``(data, error)`` as described in the module docstring.
        """
        url = f"{self.base_url}{path}"
        headers: Dict[str, str] = {}
        if self.token:
            headers["Authorization"] = f"Bearer {self.token}"
        try:
            logger.debug("Sending %s request to %s", method, url)
            response = self.session.request(
                method=method,
                url=url,
                params=params,
                json=json_body,
                headers=headers,
                timeout=self.timeout,
            )
            response.raise_for_status()
            if response.content:
                return response.json(), None
            return None, None
        except requests.HTTPError as exc:
            status = exc.response.status_code if exc.response is not None else None
            message = ""
            if exc.response is not None:
                try:
                    err_json = exc.response.json()
                    message = err_json.get("message") or err_json.get("detail") or str(err_json)
                except ValueError:
                    message = exc.response.text
            if not message:
                message = str(exc)
            logger.error("API request %s %s failed (%s): %s", method, url, status, message)
            return None, {"status_code": status, "message": message}
        except requests.RequestException as exc:
            logger.error("API request %s %s failed: %s", method, url, exc)
            return None, {"status_code": None, "message": str(exc)}

    # ------------------------------------------------------------------
    # Connectivity and users
    # ------------------------------------------------------------------
    def probe(self) -> Tuple[bool, Optional[ApiError]]:
        """Check that the API is reachable at :attr:`base_url`."""
        count, error = self.count_events()
        return error is None and isinstance(count, int), error

    def login(self, username: str, password: str) -> Tuple[Optional[Dict[str, Any]], Optional[ApiError]]:
        """Log in and remember the issued token.

        A failed login forgets any token obtained earlier.
        """
        data, error = self._request(
            "POST", "/users/login", json_body={"username": username, "password": password}
        )
        if error or not isinstance(data, dict) or not data.get("token"):
            self.token = None
            return None, error or {"status_code": None, "message": "No token in login response"}
        self.token = data["token"]
        return data, None

    def register(self, draft: RegisterUserModel) -> Tuple[Optional[Dict[str, Any]], Optional[ApiError]]:
        """Create a user account.  Does not log in."""
        return self._request(
            "POST", "/users/register", json_body=draft.model_dump(mode="json", by_alias=True)
        )

    def logout(self) -> None:
        self.token = None

    # ------------------------------------------------------------------
    # Event operations
    # ------------------------------------------------------------------
    def count_events(self) -> Tuple[Optional[int], Optional[ApiError]]:
        return self._request("GET", "/events/count")

    def list_events(self, owner_id: Optional[int] = None) -> Tuple[List[Dict[str, Any]], Optional[ApiError]]:
        """Retrieve all events, or the events of one owner."""
        params = {"ownerId": owner_id} if owner_id is not None else None
        data, error = self._request("GET", "/events/", params=params)
        if error:
            return [], error
        return data if isinstance(data, list) else [], None

    def get_event(self, event_id: Any) -> Tuple[Optional[Dict[str, Any]], Optional[ApiError]]:
        return self._request("GET", f"/events/{event_id}")

    def create_event(self, draft: EventBindingModel) -> Tuple[Optional[Dict[str, Any]], Optional[ApiError]]:
        return self._request(
            "POST", "/events/", json_body=draft.model_dump(mode="json", by_alias=True)
        )

    def update_event(self, event_id: Any, draft: EventBindingModel) -> Tuple[bool, Optional[ApiError]]:
        _, error = self._request(
            "PUT", f"/events/{event_id}", json_body=draft.model_dump(mode="json", by_alias=True)
        )
        return error is None, error

    def patch_event(self, event_id: Any, patch: EventPatchModel) -> Tuple[bool, Optional[ApiError]]:
        """Send only the fields that were explicitly set on ``patch``."""
        _, error = self._request(
            "PATCH",
            f"/events/{event_id}",
            json_body=patch.model_dump(mode="json", by_alias=True, exclude_unset=True),
        )
        return error is None, error

    def delete_event(self, event_id: Any) -> Tuple[Optional[Dict[str, Any]], Optional[ApiError]]:
        """Delete an event; returns the deleted event on success."""
        return self._request("DELETE", f"/events/{event_id}")
