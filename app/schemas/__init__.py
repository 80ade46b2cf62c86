"""
Pydantic schemas package
"""

from .common import *
from .guest import *
from .followup import *
from .portal import *

__all__ = [
    "StandardResponse",
    "ErrorResponse",
    "GuestStatus",
    "GuestRecord",
    "FollowUpDraft",
    "UpdateGuestRequest",
    "FieldUpdate",
    "SelectOption",
    "GuestOption",
    "InfoRow",
    "PortalView",
]
