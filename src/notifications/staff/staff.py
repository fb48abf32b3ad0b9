"""StaffMember aggregate (CQRS): the directory of users who receive order notifications.

Admin notifications (deliveries, rider cancellations) fan out to every
active ADMIN in this directory.
"""

from datetime import UTC, datetime
from enum import Enum

from notifications.domain import notifications
from protean.exceptions import ValidationError
from protean.fields import Boolean, DateTime, Identifier, String


class StaffRole(Enum):
    ADMIN = "ADMIN"
    RIDER = "RIDER"


@notifications.aggregate
class StaffMember:
    user_id: Identifier(required=True, unique=True)
    name: String(required=True, max_length=255)
    role: String(choices=StaffRole, required=True)
    is_active: Boolean(default=True)
    registered_at: DateTime()

    @classmethod
    def register(cls, user_id, name, role):
        return cls(user_id=user_id, name=name, role=role, is_active=True, registered_at=datetime.now(UTC))

    def deactivate(self):
        if not self.is_active:
            raise ValidationError({"is_active": ["Staff member is already inactive"]})
        self.is_active = False


@notifications.repository(part_of=StaffMember)
class StaffMemberRepository:
    def find_by_user(self, user_id) -> StaffMember | None:
        results = self._dao.query.filter(user_id=str(user_id)).all().items
        return results[0] if results else None

    def active_admin_user_ids(self) -> list[str]:
        admins = self._dao.query.filter(role=StaffRole.ADMIN.value, is_active=True).all().items
        return [str(a.user_id) for a in admins]
