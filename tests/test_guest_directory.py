"""
Tests for guest record normalization and the guest store client
"""

import asyncio
import json

import pytest
import requests

from app.schemas.followup import FollowUpDraft, UpdateGuestRequest
from app.schemas.guest import GuestRecord
from app.services.guest_directory import GuestDirectoryClient, NetworkError


class FakeResponse:
    def __init__(self, payload=None, status_code=200):
        self.payload = payload
        self.status_code = status_code

    def raise_for_status(self):
        if self.status_code >= 400:
            raise requests.HTTPError(f"{self.status_code} Server Error")

    def json(self):
        if isinstance(self.payload, Exception):
            raise self.payload
        return self.payload


class FakeSession:
    """requests.Session double: real request preparation, canned responses"""

    def __init__(self, response=None, error=None, send_status=200, send_error=None):
        self.response = response
        self.error = error
        self.send_status = send_status
        self.send_error = send_error
        self.gets = []
        self.sent = []

    def get(self, url, timeout=None):
        self.gets.append((url, timeout))
        if self.error:
            raise self.error
        return self.response

    def prepare_request(self, request):
        return requests.Session().prepare_request(request)

    def send(self, prepared):
        self.sent.append(prepared)
        if self.send_error:
            raise self.send_error
        return FakeResponse(status_code=self.send_status)


def test_guest_record_lowercase_keys_match_camel_case():
    """Test that lowercase payload keys normalize to the same record"""
    camel = GuestRecord.model_validate({
        "id": "g1",
        "fullName": "Ada Obi",
        "phoneNumber": "0803",
        "joinDepartment": "yes",
        "selectedDepartment": "media",
        "status": "Pending Minister Follow-up",
    })
    lower = GuestRecord.model_validate({
        "id": "g1",
        "fullname": "Ada Obi",
        "phonenumber": "0803",
        "joindepartment": "yes",
        "selecteddepartment": "media",
        "status": "Pending Minister Follow-up",
    })

    assert camel == lower
    assert lower.full_name == "Ada Obi"
    assert lower.selected_department == "media"


def test_guest_record_camel_case_wins_over_lowercase():
    """Test that camelCase beats lowercase whichever comes first"""
    first = GuestRecord.model_validate({"id": "1", "fullname": "lower", "fullName": "camel"})
    second = GuestRecord.model_validate({"id": "1", "fullName": "camel", "fullname": "lower"})

    assert first.full_name == "camel"
    assert second.full_name == "camel"


def test_guest_record_blank_camel_case_falls_back_to_lowercase():
    """Test that an empty camelCase value lets the lowercase spelling through"""
    payload = {"id": "g1", "fullName": "", "fullname": "Ada", "joinDepartment": "", "joindepartment": "no"}
    reversed_payload = dict(reversed(list(payload.items())))

    guest = GuestRecord.model_validate(payload)

    assert guest.full_name == "Ada"
    assert guest.join_department == "no"
    assert GuestRecord.model_validate(reversed_payload) == guest


def test_guest_record_both_spellings_blank():
    """Test that a blank value is kept when nothing better is sent"""
    guest = GuestRecord.model_validate({"id": "g1", "fullName": "", "fullname": ""})

    assert guest.full_name == ""


def test_guest_record_tolerates_numbers_nulls_and_unknown_keys():
    """Test numeric ids, null values and extra keys"""
    guest = GuestRecord.model_validate({"id": 42, "email": None, "rowNumber": 7})

    assert guest.id == "42"
    assert guest.email == ""
    assert guest.school_level is None


def test_guest_record_candidate_status():
    """Test that only the pending status marks a candidate"""
    assert GuestRecord(id="1", status="Pending Minister Follow-up").is_candidate
    assert not GuestRecord(id="1", status="Completed").is_candidate
    assert not GuestRecord(id="1", status="pending minister follow-up").is_candidate
    assert not GuestRecord(id="1").is_candidate


def test_list_candidates_normalizes_every_record(guest_payloads):
    """Test fetching the guest list through the client"""
    session = FakeSession(response=FakeResponse(guest_payloads))
    client = GuestDirectoryClient(base_url="http://store.test/", session=session)

    guests = asyncio.run(client.list_candidates())

    assert [guest.id for guest in guests] == ["g1", "g2", "g3"]
    assert guests[1].full_name == "Tunde Bello"
    assert session.gets == [("http://store.test/api/get-guests", None)]


def test_list_candidates_skips_malformed_records():
    """Test that a record without an id is dropped, not fatal"""
    payload = [{"fullName": "No Id"}, {"id": "g1", "fullName": "Ada Obi"}]
    client = GuestDirectoryClient(base_url="http://store.test", session=FakeSession(response=FakeResponse(payload)))

    guests = asyncio.run(client.list_candidates())

    assert [guest.id for guest in guests] == ["g1"]


@pytest.mark.parametrize("session", [
    FakeSession(error=requests.ConnectionError("refused")),
    FakeSession(response=FakeResponse([], status_code=500)),
    FakeSession(response=FakeResponse(ValueError("Expecting value"))),
    FakeSession(response=FakeResponse({"guests": []})),
])
def test_list_candidates_raises_network_error(session):
    """Test transport failures, bad statuses and bad bodies"""
    client = GuestDirectoryClient(base_url="http://store.test", session=session)

    with pytest.raises(NetworkError):
        asyncio.run(client.list_candidates())


def test_prepare_update_builds_json_post():
    """Test the update request body and headers"""
    draft = FollowUpDraft(
        guest_id="g1",
        service_day="others",
        custom_service_day="Saturday",
        department="choir",
    )
    client = GuestDirectoryClient(base_url="http://store.test", session=FakeSession())

    prepared = client.prepare_update(UpdateGuestRequest.from_draft(draft, "g1"))

    assert prepared.method == "POST"
    assert prepared.url == "http://store.test/api/update-guest"
    assert prepared.headers["Content-Type"] == "application/json"
    body = json.loads(prepared.body)
    assert body["guestId"] == "g1"
    assert body["status"] == "Completed"
    assert body["ministerData"]["serviceDay"] == "Saturday"
    assert body["ministerData"]["department"] == "choir"


def test_prepare_update_fails_before_dispatch_on_bad_url():
    """Test that an unusable base URL fails while building the request"""
    session = FakeSession()
    client = GuestDirectoryClient(base_url="not-a-url", session=session)

    with pytest.raises(NetworkError):
        client.prepare_update(UpdateGuestRequest(guest_id="g1", minister_data={}))
    assert session.sent == []


def test_send_update_returns_status_code():
    """Test that the store's status is reported, not interpreted"""
    session = FakeSession(send_status=500)
    client = GuestDirectoryClient(base_url="http://store.test", session=session)
    prepared = client.prepare_update(UpdateGuestRequest(guest_id="g1", minister_data={}))

    assert asyncio.run(client.send_update(prepared)) == 500
    assert len(session.sent) == 1


def test_send_update_wraps_transport_errors():
    """Test that a dropped connection surfaces as NetworkError"""
    session = FakeSession(send_error=requests.ConnectionError("reset"))
    client = GuestDirectoryClient(base_url="http://store.test", session=session)
    prepared = client.prepare_update(UpdateGuestRequest(guest_id="g1", minister_data={}))

    with pytest.raises(NetworkError):
        asyncio.run(client.send_update(prepared))
