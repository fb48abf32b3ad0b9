"""FastAPI routes for the Notifications domain.

Thin adapters that translate HTTP requests into domain commands.
No business logic, just schema→command→response translation.
"""

from fastapi import APIRouter, Query
from notifications.api.schemas import (
    NotificationListResponse,
    NotificationResponse,
    RegisterStaffMemberRequest,
    StaffMemberIdResponse,
    StatusResponse,
)
from notifications.notification.notification import Notification
from notifications.notification.reading import MarkNotificationRead
from notifications.staff.management import DeactivateStaffMember, RegisterStaffMember
from protean.utils.globals import current_domain

router = APIRouter(prefix="/notifications", tags=["notifications"])
staff_router = APIRouter(prefix="/staff", tags=["staff"])


# ---------------------------------------------------------------------------
# Staff directory
# ---------------------------------------------------------------------------
@staff_router.post("", status_code=201, response_model=StaffMemberIdResponse)
async def register_staff_member(body: RegisterStaffMemberRequest) -> StaffMemberIdResponse:
    command = RegisterStaffMember(user_id=body.user_id, name=body.name, role=body.role)
    result = current_domain.process(command, asynchronous=False)
    return StaffMemberIdResponse(staff_member_id=result)


@staff_router.put("/{user_id}/deactivate", response_model=StatusResponse)
async def deactivate_staff_member(user_id: str) -> StatusResponse:
    current_domain.process(DeactivateStaffMember(user_id=user_id), asynchronous=False)
    return StatusResponse()


# ---------------------------------------------------------------------------
# Notification inbox
# ---------------------------------------------------------------------------
@router.get("/{user_id}", response_model=NotificationListResponse)
async def get_user_notifications(
    user_id: str,
    unread_only: bool = False,
    limit: int = Query(50, ge=1, le=200),
) -> NotificationListResponse:
    """A user's notifications, newest first."""
    repo = current_domain.repository_for(Notification)
    criteria = {"user_id": user_id}
    if unread_only:
        criteria["is_read"] = False
    results = repo._dao.query.filter(**criteria).order_by("-created_at").limit(limit).all().items

    return NotificationListResponse(
        notifications=[
            NotificationResponse(
                notification_id=str(n.id),
                title=n.title,
                message=n.message,
                notification_type=n.notification_type,
                data=n.payload,
                click_action=n.click_action,
                status=n.status,
                is_read=n.is_read,
                created_at=str(n.created_at) if n.created_at else None,
                read_at=str(n.read_at) if n.read_at else None,
            )
            for n in results
        ],
        unread_count=sum(1 for n in results if not n.is_read),
    )


@router.put("/{notification_id}/read", response_model=StatusResponse)
async def mark_notification_read(notification_id: str) -> StatusResponse:
    current_domain.process(MarkNotificationRead(notification_id=notification_id), asynchronous=False)
    return StatusResponse()
