"""
Tests for the department and service-day choices
"""

import pytest

from app.schemas.guest import GuestRecord
from app.services.department_options import (
    STANDARD_DEPARTMENTS,
    department_options,
    original_department_choice,
)

STANDARD_VALUES = [option.value for option in STANDARD_DEPARTMENTS]


def values(options):
    return [option.value for option in options]


def test_standard_departments():
    """Test the fixed list of eleven departments"""
    assert STANDARD_VALUES == [
        "media", "choir", "power-sound", "ushering", "love-care", "zoe",
        "sid", "drama", "evangelism", "orison", "decoration",
    ]


def test_options_without_selection():
    """Test the options before any guest is picked"""
    assert values(department_options(None)) == STANDARD_VALUES + ["others"]


def test_options_when_guest_declined_departments():
    """Test that 'none' is offered first as the guest's own choice"""
    guest = GuestRecord(id="g1", join_department="no")

    options = department_options(guest)

    assert values(options) == ["none"] + STANDARD_VALUES + ["others"]
    assert options[0].label == "No Department (Guest's Original Choice)"
    assert options[-1].label == "Others (Specify)"


@pytest.mark.parametrize("answer,preference", [
    ("yes", "choir"),
    ("yes", None),
    ("", None),
    ("maybe", None),
])
def test_options_default_to_standard_list(answer, preference):
    """Test yes, missing and unexpected answers"""
    guest = GuestRecord(id="g1", join_department=answer, selected_department=preference)

    assert values(department_options(guest)) == STANDARD_VALUES + ["others"]


def test_options_answer_is_case_insensitive():
    """Test that ' No ' counts as a no"""
    guest = GuestRecord.model_validate({"id": "g1", "joindepartment": " No "})

    assert values(department_options(guest))[0] == "none"


def test_options_are_independent_copies():
    """Test that callers cannot mutate the table"""
    department_options(None).clear()

    assert len(department_options(None)) == 12


def test_original_department_choice():
    """Test the note shown next to the department select"""
    assert original_department_choice(None) is None
    assert original_department_choice(GuestRecord(id="1", join_department="no")) == "Did not want to join a department"
    assert original_department_choice(
        GuestRecord(id="1", join_department="yes", selected_department="drama")
    ) == "Wanted to join: drama"
    assert original_department_choice(GuestRecord(id="1", join_department="yes")) == "Wanted to join: Any department"


def test_options_use_lowercase_answer_when_camel_case_blank():
    """Test that a blank joinDepartment does not hide a lowercase 'no'"""
    guest = GuestRecord.model_validate({
        "id": "g1",
        "fullName": "",
        "fullname": "Ada",
        "joinDepartment": "",
        "joindepartment": "no",
    })

    assert values(department_options(guest))[0] == "none"
    assert original_department_choice(guest) == "Did not want to join a department"
