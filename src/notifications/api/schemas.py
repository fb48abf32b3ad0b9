"""Pydantic request/response models for the Notifications API.

API schemas are separate from Protean commands (anti-corruption pattern).
"""

from pydantic import BaseModel, Field


# ---------------------------------------------------------------------------
# Request Models
# ---------------------------------------------------------------------------
class RegisterStaffMemberRequest(BaseModel):
    user_id: str
    name: str = Field(..., min_length=1, max_length=255)
    role: str = Field(..., examples=["ADMIN"], description="ADMIN or RIDER")


# ---------------------------------------------------------------------------
# Response Models
# ---------------------------------------------------------------------------
class StatusResponse(BaseModel):
    status: str = "ok"


class StaffMemberIdResponse(BaseModel):
    staff_member_id: str


class NotificationResponse(BaseModel):
    notification_id: str
    title: str
    message: str
    notification_type: str
    data: dict = {}
    click_action: str | None = None
    status: str
    is_read: bool
    created_at: str | None = None
    read_at: str | None = None


class NotificationListResponse(BaseModel):
    notifications: list[NotificationResponse]
    unread_count: int = 0
