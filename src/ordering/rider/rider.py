"""Rider aggregate: a delivery rider that orders can be assigned to."""

from datetime import UTC, datetime

from protean.exceptions import ValidationError
from protean.fields import Boolean, DateTime, Identifier, String

from ordering.domain import ordering


@ordering.aggregate
class Rider:
    """A delivery rider. ``user_id`` is the login that receives push notifications."""

    name = String(required=True, max_length=255)
    phone = String(max_length=50)
    user_id = Identifier()
    is_active = Boolean(default=True)
    registered_at = DateTime()

    @classmethod
    def register(cls, name, phone=None, user_id=None):
        return cls(
            name=name,
            phone=phone,
            user_id=user_id,
            registered_at=datetime.now(UTC),
        )

    def assert_available(self):
        if not self.is_active:
            raise ValidationError({"rider_id": [f"Rider {self.name} is not active"]})

    def deactivate(self):
        self.is_active = False
