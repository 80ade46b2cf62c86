"""
Follow-up draft and update payload schemas
"""

from typing import Any, Dict, List, Optional
from pydantic import BaseModel, Field

from app.schemas.guest import GuestStatus

OTHERS = "others"

REQUIRED_FIELDS = [
    "guestId",
    "serviceDay",
    "ministerName",
    "lifeClassTeacher",
    "joinedChurch",
    "department",
    "hodInCharge",
    "ministerComment",
]

class FollowUpDraft(BaseModel):
    """Minister's answers for one guest, held in memory until submit"""
    guest_id: str = Field("", alias="guestId")
    service_day: str = Field("", alias="serviceDay")
    custom_service_day: str = Field("", alias="customServiceDay")
    minister_name: str = Field("", alias="ministerName")
    life_class_teacher: str = Field("", alias="lifeClassTeacher")
    joined_church: str = Field("", alias="joinedChurch")
    department: str = ""
    custom_department: str = Field("", alias="customDepartment")
    hod_in_charge: str = Field("", alias="hodInCharge")
    minister_comment: str = Field("", alias="ministerComment")

    class Config:
        populate_by_name = True

    @classmethod
    def attribute_for(cls, name: str) -> Optional[str]:
        """Map a wire name (``serviceDay``) or attribute name to the attribute"""
        for attr, field in cls.model_fields.items():
            if name == attr or name == field.alias:
                return attr
        return None

    def resolved_service_day(self) -> str:
        if self.service_day == OTHERS:
            return self.custom_service_day
        return self.service_day

    def resolved_department(self) -> str:
        if self.department == OTHERS:
            return self.custom_department
        return self.department

    def missing_fields(self) -> List[str]:
        """Wire names of required fields that are still blank"""
        values = self.model_dump(by_alias=True)
        required = list(REQUIRED_FIELDS)
        if self.service_day == OTHERS:
            required.insert(required.index("serviceDay") + 1, "customServiceDay")
        if self.department == OTHERS:
            required.insert(required.index("department") + 1, "customDepartment")
        return [name for name in required if not values[name].strip()]

    def to_minister_data(self) -> Dict[str, Any]:
        """Draft as sent to the store, with the ``others`` overrides applied"""
        data = self.model_dump(by_alias=True)
        data["serviceDay"] = self.resolved_service_day()
        data["department"] = self.resolved_department()
        return data

class UpdateGuestRequest(BaseModel):
    """Body of the update-guest call"""
    guest_id: str = Field(..., alias="guestId")
    minister_data: Dict[str, Any] = Field(..., alias="ministerData")
    status: str = GuestStatus.COMPLETED.value

    class Config:
        populate_by_name = True

    @classmethod
    def from_draft(cls, draft: FollowUpDraft, guest_id: str) -> "UpdateGuestRequest":
        return cls(guest_id=guest_id, minister_data=draft.to_minister_data())

class FieldUpdate(BaseModel):
    """Single draft field change posted by the portal"""
    name: str
    value: str = ""
