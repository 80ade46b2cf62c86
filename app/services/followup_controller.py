"""
Follow-up form controller: guest selection, draft edits and submission
"""

from __future__ import annotations

import asyncio
import logging
from enum import Enum
from typing import Any, Coroutine, List, Optional, Set

from app.core.config import settings
from app.schemas.followup import OTHERS, FollowUpDraft, UpdateGuestRequest
from app.schemas.guest import GuestRecord
from app.services.guest_directory import GuestDirectoryClient, NetworkError

logger = logging.getLogger(__name__)

SUBMIT_ERROR_ALERT = "There was an error submitting the data. Please try again."


class SubmissionState(str, Enum):
    """What the operator is shown"""
    IDLE = "idle"
    PENDING = "pending"
    SUCCEEDED = "succeeded"


class WriteOutcome(str, Enum):
    """What actually happened to the update request"""
    IDLE = "idle"
    PENDING = "pending"
    SUCCEEDED = "succeeded"
    FAILED = "failed"


class UnknownFieldError(ValueError):
    """Raised for a field name the draft does not have"""


def apply_field(draft: FollowUpDraft, name: str, value: str) -> FollowUpDraft:
    """Return a copy of ``draft`` with one field set.

    Moving ``department`` or ``serviceDay`` off ``others`` clears the matching
    free-text override so a stale value can never be submitted.
    """
    attr = FollowUpDraft.attribute_for(name)
    if attr is None:
        raise UnknownFieldError(f"Unknown draft field: {name}")

    changes = {attr: value}
    if attr == "department" and value != OTHERS:
        changes["custom_department"] = ""
    if attr == "service_day" and value != OTHERS:
        changes["custom_service_day"] = ""
    return draft.model_copy(update=changes)


class FollowUpController:
    """State behind one operator's portal page.

    Submission is optimistic: the success screen is shown after a short fixed
    delay whether or not the store has answered, and the write itself runs as
    a background task. Only a failure while building the request (before
    anything is sent) reverts the screen; a failure after dispatch is logged
    and recorded in ``write_outcome``.
    """

    def __init__(self, directory: GuestDirectoryClient, success_delay: Optional[float] = None):
        self.directory = directory
        self.success_delay = settings.SUBMIT_SUCCESS_DELAY_SECONDS if success_delay is None else success_delay

        self.guests: List[GuestRecord] = []
        self.is_loading = True
        self.loaded = False
        self.selected_guest: Optional[GuestRecord] = None
        self.draft = FollowUpDraft()
        self.submission_state = SubmissionState.IDLE
        self.write_outcome = WriteOutcome.IDLE
        self.alert: Optional[str] = None

        self._success_handle: Optional[asyncio.TimerHandle] = None
        self._background: Set[asyncio.Task] = set()
        self._generation = 0

    # -------- Directory --------

    @property
    def candidates(self) -> List[GuestRecord]:
        return [guest for guest in self.guests if guest.is_candidate]

    async def load(self) -> None:
        """Fetch the guest directory; a failure leaves an empty list"""
        self.is_loading = True
        try:
            guests = await self.directory.list_candidates()
        except NetworkError as e:
            logger.error(f"Error fetching guests: {e}")
            guests = []
        finally:
            self.is_loading = False

        self.guests = guests
        self.loaded = True
        if self.draft.guest_id:
            self.selected_guest = self.resolve(self.draft.guest_id)
        logger.info(f"Loaded {len(guests)} guests, {len(self.candidates)} awaiting follow-up")

    async def ensure_loaded(self) -> None:
        if not self.loaded:
            await self.load()

    def resolve(self, guest_id: str) -> Optional[GuestRecord]:
        if not guest_id:
            return None
        return next((guest for guest in self.guests if guest.id == guest_id), None)

    # -------- Draft --------

    def set_field(self, name: str, value: str) -> FollowUpDraft:
        self.draft = apply_field(self.draft, name, value)
        if FollowUpDraft.attribute_for(name) == "guest_id":
            self.selected_guest = self.resolve(value)
        return self.draft

    @property
    def is_submitting(self) -> bool:
        return self.submission_state == SubmissionState.PENDING

    @property
    def is_submitted(self) -> bool:
        return self.submission_state == SubmissionState.SUCCEEDED

    def consume_alert(self) -> Optional[str]:
        alert, self.alert = self.alert, None
        return alert

    # -------- Submission --------

    def submit(self) -> bool:
        """Start submitting the draft; must run inside the event loop.

        Returns ``True`` when the update was dispatched. With no guest selected,
        or with a submission already under way, nothing happens.
        """
        guest = self.selected_guest
        if guest is None or self.submission_state != SubmissionState.IDLE:
            return False

        loop = asyncio.get_running_loop()
        self.alert = None
        self.submission_state = SubmissionState.PENDING
        self._success_handle = loop.call_later(self.success_delay, self._show_success)

        try:
            update = UpdateGuestRequest.from_draft(self.draft, guest.id)
            prepared = self.directory.prepare_update(update)
        except NetworkError as e:
            logger.error(f"Error submitting minister data: {e}")
            self._cancel_success()
            self.submission_state = SubmissionState.IDLE
            self.alert = SUBMIT_ERROR_ALERT
            return False

        self.write_outcome = WriteOutcome.PENDING
        self._spawn(self._write(prepared, guest.id, self._generation))
        logger.info(f"Follow-up for guest {guest.id} dispatched")
        return True

    def _show_success(self) -> None:
        self._success_handle = None
        if self.submission_state != SubmissionState.PENDING:
            return
        self.submission_state = SubmissionState.SUCCEEDED
        self._spawn(self.load())

    async def _write(self, prepared, guest_id: str, generation: int) -> None:
        try:
            status_code = await self.directory.send_update(prepared)
        except NetworkError as e:
            logger.error(f"Background submission error for guest {guest_id}: {e}")
            outcome = WriteOutcome.FAILED
        else:
            if status_code >= 400:
                logger.warning(f"Guest store answered {status_code} to the follow-up for guest {guest_id}")
                outcome = WriteOutcome.FAILED
            else:
                outcome = WriteOutcome.SUCCEEDED

        if generation == self._generation:
            self.write_outcome = outcome

    def reset(self) -> None:
        """Back to an empty form with no guest selected"""
        self._cancel_success()
        self._generation += 1
        self.submission_state = SubmissionState.IDLE
        self.write_outcome = WriteOutcome.IDLE
        self.selected_guest = None
        self.draft = FollowUpDraft()
        self.alert = None

    def _cancel_success(self) -> None:
        if self._success_handle is not None:
            self._success_handle.cancel()
            self._success_handle = None

    def _spawn(self, coro: Coroutine[Any, Any, None]) -> None:
        task = asyncio.get_running_loop().create_task(coro)
        self._background.add(task)
        task.add_done_callback(self._background.discard)

    @property
    def is_busy(self) -> bool:
        """A success transition or a background task is still outstanding"""
        return self._success_handle is not None or bool(self._background)

    async def drain(self) -> None:
        """Wait for outstanding background writes and refreshes"""
        while self._background:
            await asyncio.gather(*list(self._background), return_exceptions=True)
