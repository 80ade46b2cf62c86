"""
Builds the presentation model for the minister portal page
"""

from typing import List, Optional, Sequence

from app.core.config import settings
from app.schemas.followup import OTHERS, FollowUpDraft
from app.schemas.guest import GuestRecord
from app.schemas.portal import GuestOption, InfoRow, PortalView
from app.services.department_options import (
    JOINED_CHURCH_OPTIONS,
    SERVICE_DAY_OPTIONS,
    department_options,
    original_department_choice,
)
from app.services.followup_controller import FollowUpController


def guest_info_rows(guest: Optional[GuestRecord]) -> List[InfoRow]:
    """Lines of the selected-guest panel; optional answers left blank are skipped"""
    if guest is None:
        return []

    rows = [
        ("Name", guest.full_name),
        ("Phone", guest.phone_number),
        ("WhatsApp", guest.whatsapp_number),
        ("Email", guest.email or "Not provided"),
        ("Profession", guest.profession),
        ("School Level", guest.school_level),
        ("School Department", guest.school_department),
        ("Gender", guest.gender),
        ("Marital Status", guest.marital_status),
        ("How they heard about us", guest.how_did_you_hear),
        ("Invited By", guest.invited_by),
        ("Home Address", guest.house_address),
        ("Office Address", guest.office_address),
        ("Birthday", guest.birthday),
        ("Best Contact Method", guest.best_reach_method),
        ("Wants to Join Church", guest.join_church),
        ("Wants to Join Department", guest.join_department),
        ("Preferred Department", guest.selected_department),
        ("What Blessed Them", guest.blessings),
    ]
    optional = {"School Level", "School Department", "Invited By", "Office Address", "Preferred Department"}
    return [
        InfoRow(label=label, value=value or "")
        for label, value in rows
        if value or label not in optional
    ]


def build_portal_view(
    *,
    is_loading: bool,
    guests: Sequence[GuestRecord],
    selected_guest: Optional[GuestRecord],
    draft: FollowUpDraft,
    is_submitting: bool,
    is_submitted: bool,
    minister_name: Optional[str] = None,
    alert: Optional[str] = None,
    missing_fields: Optional[List[str]] = None,
) -> PortalView:
    """Project portal state onto what the page shows"""
    common = dict(
        title=settings.PORTAL_TITLE,
        church_name=settings.CHURCH_NAME,
        minister_name=minister_name or settings.MINISTER_DISPLAY_NAME,
    )

    if is_submitted:
        return PortalView(screen="success", **common)

    candidates = [guest for guest in guests if guest.is_candidate]
    return PortalView(
        screen="form",
        is_loading=is_loading,
        selector_placeholder="Loading guests..." if is_loading else "Click here to select a guest",
        guest_options=[
            GuestOption(value=guest.id, label=guest.full_name, detail=guest.contact_summary)
            for guest in candidates
        ],
        candidate_count=len(candidates),
        show_candidate_count=len(guests) > 0,
        no_candidates_notice=None if candidates or is_loading else "No pending guests found",
        guest_info=guest_info_rows(selected_guest),
        original_department_choice=original_department_choice(selected_guest),
        service_day_options=SERVICE_DAY_OPTIONS,
        joined_church_options=JOINED_CHURCH_OPTIONS,
        department_options=department_options(selected_guest),
        show_custom_service_day=draft.service_day == OTHERS,
        show_custom_department=draft.department == OTHERS,
        draft=draft,
        submit_disabled=selected_guest is None or is_submitting,
        submit_label="Submitting..." if is_submitting else "Submit Follow-up",
        alert=alert,
        missing_fields=missing_fields or [],
        auto_refresh=is_submitting,
        **common,
    )


def portal_view_for(
    controller: FollowUpController,
    minister_name: Optional[str] = None,
    missing_fields: Optional[List[str]] = None,
) -> PortalView:
    """View of a controller's current state; hands over any pending alert"""
    return build_portal_view(
        is_loading=controller.is_loading,
        guests=controller.guests,
        selected_guest=controller.selected_guest,
        draft=controller.draft,
        is_submitting=controller.is_submitting,
        is_submitted=controller.is_submitted,
        minister_name=minister_name,
        alert=controller.consume_alert(),
        missing_fields=missing_fields,
    )
