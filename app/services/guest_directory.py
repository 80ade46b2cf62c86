"""
HTTP client for the external guest store
"""

from __future__ import annotations

import asyncio
import logging
from typing import Any, List, Optional

import requests
from pydantic import ValidationError

from app.core.config import settings
from app.schemas.followup import UpdateGuestRequest
from app.schemas.guest import GuestRecord

logger = logging.getLogger(__name__)


class NetworkError(Exception):
    """Transport failure or unusable response from the guest store"""


class GuestDirectoryClient:
    """Reads guest records from, and writes follow-ups to, the guest store.

    ``requests`` is blocking, so the async entry points hand the actual I/O to a
    worker thread. ``prepare_update`` stays synchronous: it is where a request
    that can never be sent (bad URL, unserializable body) fails, before
    anything goes over the wire.
    """

    def __init__(
        self,
        base_url: Optional[str] = None,
        session: Optional[requests.Session] = None,
        fetch_timeout: Optional[float] = None,
    ):
        self.base_url = (base_url or settings.GUESTS_API_BASE_URL).rstrip("/")
        self.session = session or requests.Session()
        self.fetch_timeout = fetch_timeout if fetch_timeout is not None else settings.FETCH_TIMEOUT_SECONDS

    @property
    def guests_url(self) -> str:
        return f"{self.base_url}{settings.GET_GUESTS_PATH}"

    @property
    def update_url(self) -> str:
        return f"{self.base_url}{settings.UPDATE_GUEST_PATH}"

    async def list_candidates(self) -> List[GuestRecord]:
        """Fetch every guest record, normalized to one key casing"""
        payload = await asyncio.to_thread(self._get_guests)
        if not isinstance(payload, list):
            raise NetworkError(f"Expected a JSON array from {self.guests_url}, got {type(payload).__name__}")

        records: List[GuestRecord] = []
        for item in payload:
            try:
                records.append(GuestRecord.model_validate(item))
            except ValidationError as e:
                logger.warning(f"Skipping malformed guest record: {e.error_count()} error(s)")
        return records

    def _get_guests(self) -> Any:
        try:
            response = self.session.get(self.guests_url, timeout=self.fetch_timeout)
            response.raise_for_status()
            return response.json()
        except requests.RequestException as e:
            raise NetworkError(f"Fetching guests failed: {e}") from e
        except ValueError as e:
            raise NetworkError(f"Guest list is not valid JSON: {e}") from e

    def prepare_update(self, update: UpdateGuestRequest) -> requests.PreparedRequest:
        """Build the update-guest request without sending it"""
        try:
            request = requests.Request(
                "POST",
                self.update_url,
                json=update.model_dump(by_alias=True),
                headers={"Content-Type": "application/json"},
            )
            return self.session.prepare_request(request)
        except (requests.RequestException, TypeError, ValueError) as e:
            raise NetworkError(f"Could not build update request: {e}") from e

    async def send_update(self, prepared: requests.PreparedRequest) -> int:
        """Dispatch a prepared update and return the HTTP status code"""
        return await asyncio.to_thread(self._send, prepared)

    def _send(self, prepared: requests.PreparedRequest) -> int:
        try:
            # no timeout on the write
            response = self.session.send(prepared)
        except requests.RequestException as e:
            raise NetworkError(f"Update request failed: {e}") from e
        return response.status_code
