"""
Shared test doubles for the guest store
"""

import pytest

from app.schemas.guest import GuestRecord
from app.services.guest_directory import NetworkError


class FakeDirectory:
    """Stands in for GuestDirectoryClient without any network"""

    def __init__(self, records=None, fail_fetch=False, fail_prepare=False, fail_send=False, status_code=200):
        self.records = records or []
        self.fail_fetch = fail_fetch
        self.fail_prepare = fail_prepare
        self.fail_send = fail_send
        self.status_code = status_code
        self.fetch_count = 0
        self.sent = []

    async def list_candidates(self):
        self.fetch_count += 1
        if self.fail_fetch:
            raise NetworkError("connection refused")
        return [GuestRecord.model_validate(record) for record in self.records]

    def prepare_update(self, update):
        if self.fail_prepare:
            raise NetworkError("Invalid URL")
        return update

    async def send_update(self, prepared):
        self.sent.append(prepared.model_dump(by_alias=True))
        if self.fail_send:
            raise NetworkError("connection reset by peer")
        return self.status_code


@pytest.fixture
def guest_payloads():
    """Guest store payload mixing both key casings"""
    return [
        {
            "id": "g1",
            "fullName": "Ada Obi",
            "email": "ada@example.com",
            "phoneNumber": "08030000001",
            "whatsappNumber": "08030000001",
            "profession": "Engineer",
            "gender": "female",
            "maritalStatus": "single",
            "houseAddress": "12 Allen Avenue",
            "joinChurch": "yes",
            "joinDepartment": "no",
            "blessings": "The worship",
            "status": "Pending Minister Follow-up",
        },
        {
            "id": "g2",
            "fullname": "Tunde Bello",
            "email": "",
            "phonenumber": "08030000002",
            "whatsappnumber": "08030000002",
            "profession": "Student",
            "schoolLevel": "200 level",
            "joindepartment": "yes",
            "selecteddepartment": "choir",
            "status": "Pending Minister Follow-up",
        },
        {
            "id": "g3",
            "fullName": "Kemi Ade",
            "email": "kemi@example.com",
            "status": "Completed",
        },
    ]


@pytest.fixture
def directory(guest_payloads):
    return FakeDirectory(records=guest_payloads)


@pytest.fixture
def make_directory(guest_payloads):
    """Factory for directories with failure switches"""
    def factory(**kwargs):
        return FakeDirectory(records=guest_payloads, **kwargs)
    return factory
