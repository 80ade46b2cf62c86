"""
Department and service-day choices offered to the minister
"""

from typing import Dict, List, Optional, Tuple

from app.schemas.followup import OTHERS
from app.schemas.guest import GuestRecord
from app.schemas.portal import SelectOption

NO_DEPARTMENT = "none"

STANDARD_DEPARTMENTS: List[SelectOption] = [
    SelectOption(value="media", label="Media"),
    SelectOption(value="choir", label="Choir"),
    SelectOption(value="power-sound", label="Power and Sound"),
    SelectOption(value="ushering", label="Ushering"),
    SelectOption(value="love-care", label="Love and Care"),
    SelectOption(value="zoe", label="Zoe"),
    SelectOption(value="sid", label="SID"),
    SelectOption(value="drama", label="Drama"),
    SelectOption(value="evangelism", label="Evangelism"),
    SelectOption(value="orison", label="Orison"),
    SelectOption(value="decoration", label="Decoration"),
]

OTHERS_OPTION = SelectOption(value=OTHERS, label="Others (Specify)")
NO_DEPARTMENT_OPTION = SelectOption(value=NO_DEPARTMENT, label="No Department (Guest's Original Choice)")

SERVICE_DAY_OPTIONS: List[SelectOption] = [
    SelectOption(value="friday", label="Friday"),
    SelectOption(value="sunday", label="Sunday"),
    SelectOption(value="wednesday", label="Wednesday"),
    OTHERS_OPTION,
]

JOINED_CHURCH_OPTIONS: List[SelectOption] = [
    SelectOption(value="yes", label="Yes"),
    SelectOption(value="no", label="No"),
]

# (guest selected, guest's own "join a department?" answer) -> options
_DEPARTMENT_TABLE: Dict[Tuple[bool, Optional[str]], List[SelectOption]] = {
    (False, None): STANDARD_DEPARTMENTS + [OTHERS_OPTION],
    (True, "no"): [NO_DEPARTMENT_OPTION] + STANDARD_DEPARTMENTS + [OTHERS_OPTION],
    (True, "yes"): STANDARD_DEPARTMENTS + [OTHERS_OPTION],
}


def _wants_department(guest: GuestRecord) -> str:
    answer = (guest.join_department or "").strip().lower()
    # anything but an explicit "no" is treated as a yes
    return "no" if answer == "no" else "yes"


def department_options(guest: Optional[GuestRecord]) -> List[SelectOption]:
    """Departments to offer for the selected guest (or for no selection)"""
    if guest is None:
        key = (False, None)
    else:
        key = (True, _wants_department(guest))
    return list(_DEPARTMENT_TABLE[key])


def original_department_choice(guest: Optional[GuestRecord]) -> Optional[str]:
    """Short note on what the guest said about joining a department"""
    if guest is None:
        return None
    if _wants_department(guest) == "no":
        return "Did not want to join a department"
    return f"Wanted to join: {guest.selected_department or 'Any department'}"
