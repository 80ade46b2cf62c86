"""
Minister portal routes: the HTML page and its JSON counterpart
"""

import logging
from pathlib import Path
from typing import List, Optional

from fastapi import APIRouter, Depends, Request
from fastapi.responses import HTMLResponse, RedirectResponse, Response
from fastapi.templating import Jinja2Templates

from app.core.config import settings
from app.schemas.followup import OTHERS, FieldUpdate, FollowUpDraft
from app.services.followup_controller import FollowUpController, SubmissionState, UnknownFieldError
from app.services.portal_view import portal_view_for
from app.services.sessions import PortalSessions, get_portal_sessions
from app.utils.responses import success_response, error_response

logger = logging.getLogger(__name__)

router = APIRouter()
api_router = APIRouter()

templates = Jinja2Templates(directory=str(Path(__file__).resolve().parents[2] / "templates"))

# Wire names in model order: each choice comes before its free-text override
DRAFT_FORM_FIELDS = [field.alias or name for name, field in FollowUpDraft.model_fields.items()]

# Free-text override -> the choice it belongs to
FORM_OVERRIDES = {"customServiceDay": "serviceDay", "customDepartment": "department"}


async def portal_controller(
    request: Request,
    sessions: PortalSessions = Depends(get_portal_sessions)
) -> FollowUpController:
    """Resolve (or open) the caller's portal session and load its guests"""
    session_id, controller = sessions.get_or_create(request.cookies.get(settings.SESSION_COOKIE_NAME))
    request.state.portal_session = session_id
    await controller.ensure_loaded()
    return controller


def _with_session(request: Request, response: Response) -> Response:
    response.set_cookie(
        settings.SESSION_COOKIE_NAME,
        request.state.portal_session,
        httponly=True,
        samesite="lax"
    )
    return response


def _redirect_to_portal(request: Request) -> Response:
    return _with_session(request, RedirectResponse(url="/minister", status_code=303))


def _render(
    request: Request,
    controller: FollowUpController,
    missing_fields: Optional[List[str]] = None,
    status_code: int = 200
) -> Response:
    view = portal_view_for(controller, missing_fields=missing_fields)
    response = templates.TemplateResponse(
        request,
        "minister_portal.html",
        {"view": view},
        status_code=status_code
    )
    return _with_session(request, response)


def _state(controller: FollowUpController) -> dict:
    view = portal_view_for(controller)
    return {
        "submissionState": controller.submission_state.value,
        "writeOutcome": controller.write_outcome.value,
        "view": view.model_dump(mode="json", by_alias=True),
    }


# -------- HTML page --------

@router.get("", response_class=HTMLResponse)
async def portal_page(
    request: Request,
    controller: FollowUpController = Depends(portal_controller)
):
    """Follow-up form, or the success screen after a submission"""
    return _render(request, controller)


@router.post("", response_class=HTMLResponse)
async def portal_form(
    request: Request,
    controller: FollowUpController = Depends(portal_controller)
):
    """Apply posted form fields; submit when ``action`` is ``submit``"""
    if controller.submission_state != SubmissionState.IDLE:
        return _redirect_to_portal(request)

    form = await request.form()
    for name in DRAFT_FORM_FIELDS:
        if name not in form:
            continue
        choice = FORM_OVERRIDES.get(name)
        # an override input still on the page must not revive a cleared value
        if choice and controller.draft.model_dump(by_alias=True)[choice] != OTHERS:
            continue
        controller.set_field(name, str(form[name]))

    if form.get("action") == "submit":
        missing = controller.draft.missing_fields()
        if missing:
            logger.info(f"Submission blocked, missing fields: {missing}")
            return _render(request, controller, missing_fields=missing, status_code=422)
        controller.submit()

    return _redirect_to_portal(request)


@router.post("/refresh")
async def portal_refresh(
    request: Request,
    controller: FollowUpController = Depends(portal_controller)
):
    await controller.load()
    return _redirect_to_portal(request)


@router.post("/reset")
async def portal_reset(
    request: Request,
    controller: FollowUpController = Depends(portal_controller)
):
    """Start a new entry from the success screen"""
    controller.reset()
    return _redirect_to_portal(request)


# -------- JSON API --------

@api_router.get("/state")
async def get_state(
    request: Request,
    controller: FollowUpController = Depends(portal_controller)
):
    return _with_session(request, success_response(
        message="Portal state",
        data=_state(controller)
    ))


@api_router.post("/field")
async def set_field(
    request: Request,
    update: FieldUpdate,
    controller: FollowUpController = Depends(portal_controller)
):
    """Set one draft field"""
    if controller.submission_state != SubmissionState.IDLE:
        return _with_session(request, error_response(
            message="A submission is in progress; reset before editing",
            error_code="submission_in_progress",
            status_code=409
        ))

    try:
        controller.set_field(update.name, update.value)
    except UnknownFieldError as e:
        return _with_session(request, error_response(
            message=str(e),
            error_code="unknown_field",
            status_code=400
        ))

    return _with_session(request, success_response(
        message="Field updated",
        data=_state(controller)
    ))


@api_router.post("/submit")
async def submit(
    request: Request,
    controller: FollowUpController = Depends(portal_controller)
):
    """Submit the draft for the selected guest"""
    if controller.selected_guest is None:
        return _with_session(request, error_response(
            message="Select a guest before submitting",
            error_code="no_guest_selected",
            status_code=400
        ))

    missing = controller.draft.missing_fields()
    if missing:
        return _with_session(request, error_response(
            message="Please fill in every required field",
            error_code="missing_fields",
            details=missing,
            status_code=422
        ))

    if controller.submission_state != SubmissionState.IDLE:
        return _with_session(request, error_response(
            message="A submission is already in progress",
            error_code="submission_in_progress",
            status_code=409
        ))

    if not controller.submit():
        return _with_session(request, error_response(
            message=controller.consume_alert() or "Submission failed",
            error_code="submit_failed",
            status_code=502
        ))

    return _with_session(request, success_response(
        message="Follow-up submitted",
        data=_state(controller),
        status_code=202
    ))


@api_router.post("/reset")
async def reset(
    request: Request,
    controller: FollowUpController = Depends(portal_controller)
):
    controller.reset()
    return _with_session(request, success_response(
        message="Form reset",
        data=_state(controller)
    ))


@api_router.post("/refresh")
async def refresh(
    request: Request,
    controller: FollowUpController = Depends(portal_controller)
):
    """Re-fetch the guest directory"""
    await controller.load()
    return _with_session(request, success_response(
        message="Guests refreshed",
        data=_state(controller)
    ))
