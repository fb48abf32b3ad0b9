"""Domain events for the Customer aggregate."""

from protean.fields import Boolean, DateTime, Identifier, String

from ordering.domain import ordering


@ordering.event(part_of="Customer")
class CustomerRegistered:
    """A customer account was opened with a zero balance."""

    __version__ = 1

    customer_id = Identifier(required=True)
    name = String(required=True)
    is_walkin = Boolean(default=False)
    registered_at = DateTime(required=True)


@ordering.event(part_of="Customer")
class CustomerDeactivated:
    __version__ = 1

    customer_id = Identifier(required=True)
    deactivated_at = DateTime(required=True)


@ordering.event(part_of="Customer")
class CustomerReactivated:
    __version__ = 1

    customer_id = Identifier(required=True)
    reactivated_at = DateTime(required=True)
