"""
Portal presentation schemas
"""

from typing import List, Optional
from pydantic import BaseModel, Field

from app.schemas.followup import FollowUpDraft

class SelectOption(BaseModel):
    """Option of a select control"""
    value: str
    label: str

class GuestOption(SelectOption):
    """Entry of the guest selector"""
    detail: str = ""

class InfoRow(BaseModel):
    """Labelled line of the selected-guest panel"""
    label: str
    value: str

class PortalView(BaseModel):
    """Everything the portal template needs to draw one screen"""
    screen: str  # "form" or "success"
    title: str
    church_name: str
    minister_name: str
    is_loading: bool = False
    selector_placeholder: str = ""
    guest_options: List[GuestOption] = []
    candidate_count: int = 0
    show_candidate_count: bool = False
    no_candidates_notice: Optional[str] = None
    guest_info: List[InfoRow] = []
    original_department_choice: Optional[str] = None
    service_day_options: List[SelectOption] = []
    joined_church_options: List[SelectOption] = []
    department_options: List[SelectOption] = []
    show_custom_service_day: bool = False
    show_custom_department: bool = False
    draft: FollowUpDraft = Field(default_factory=FollowUpDraft)
    submit_disabled: bool = True
    submit_label: str = "Submit"
    alert: Optional[str] = None
    missing_fields: List[str] = []
    auto_refresh: bool = False
