"""
Guest-related Pydantic schemas
"""

from enum import Enum
from typing import Any, Dict, Optional
from pydantic import BaseModel, Field, model_validator

class GuestStatus(str, Enum):
    """Statuses the portal acts on; the store may hold others"""
    PENDING_FOLLOW_UP = "Pending Minister Follow-up"
    COMPLETED = "Completed"

class GuestRecord(BaseModel):
    """First-time guest intake record as served by the guest store.

    The store is inconsistent about key casing: a field may arrive as
    ``fullName`` or ``fullname``. Keys are folded onto the camelCase alias
    once, on receipt. When both are sent the camelCase spelling wins unless
    it is blank, in which case the lowercase one fills in.
    """
    id: str
    full_name: str = Field("", alias="fullName")
    email: str = ""
    phone_number: str = Field("", alias="phoneNumber")
    whatsapp_number: str = Field("", alias="whatsappNumber")
    profession: str = ""
    school_level: Optional[str] = Field(None, alias="schoolLevel")
    school_department: Optional[str] = Field(None, alias="schoolDepartment")
    birthday: str = ""
    invited_by: str = Field("", alias="invitedBy")
    how_did_you_hear: str = Field("", alias="howDidYouHear")
    gender: str = ""
    marital_status: str = Field("", alias="maritalStatus")
    house_address: str = Field("", alias="houseAddress")
    office_address: Optional[str] = Field(None, alias="officeAddress")
    best_reach_method: str = Field("", alias="bestReachMethod")
    join_church: str = Field("", alias="joinChurch")
    join_department: str = Field("", alias="joinDepartment")
    selected_department: Optional[str] = Field(None, alias="selectedDepartment")
    blessings: str = ""
    submission_date: str = Field("", alias="submissionDate")
    status: str = ""

    class Config:
        populate_by_name = True
        coerce_numbers_to_str = True

    @model_validator(mode="before")
    @classmethod
    def fold_key_casing(cls, data: Any) -> Any:
        if not isinstance(data, dict):
            return data

        lookup: Dict[str, str] = {}
        for name, field in cls.model_fields.items():
            wire = field.alias or name
            lookup[wire.lower()] = wire
            lookup[name.lower()] = wire

        normalized: Dict[str, Any] = {}
        for key, value in data.items():
            wire = lookup.get(str(key).lower())
            if wire is None or value is None:
                continue
            current = normalized.get(wire)
            # a blank value only stands when no spelling has anything better
            if wire not in normalized or current == "" or (key == wire and value != ""):
                normalized[wire] = value
        return normalized

    @property
    def is_candidate(self) -> bool:
        return self.status == GuestStatus.PENDING_FOLLOW_UP.value

    @property
    def contact_summary(self) -> str:
        return f"{self.email} • {self.phone_number}"
