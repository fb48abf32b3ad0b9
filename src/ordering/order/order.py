"""Order aggregate: the order state machine and the balance arithmetic of each step.

Every order carries a snapshot of its customer's balance taken just before
the order was placed (``customer_balance``) and the amount this order adds
(``current_order_amount``); ``total_amount`` is always their sum and is
what a settlement is measured against.

Initial state by order type:
    DELIVERY / ENROUTE with a rider → ASSIGNED, without → PENDING
    WALKIN                          → CREATED
    CLEARBILL                       → COMPLETED (a settlement, never delivered)

State Machine (7 states):
    PENDING → ASSIGNED → IN_PROGRESS → DELIVERED
    PENDING → IN_PROGRESS
    CREATED → COMPLETED                (walk-in paid at the counter)
    any state except DELIVERED / CANCELLED → CANCELLED

Amendment rewrites the amounts of PENDING, ASSIGNED and IN_PROGRESS orders
without moving them. The aggregate never touches the customer's ledger
itself; ``ordering.order.ledger`` posts the matching entries in the same
unit of work.
"""

from datetime import UTC, datetime
from decimal import Decimal
from enum import Enum

from protean import atomic_change, invariant
from protean.exceptions import ValidationError
from protean.fields import DateTime, Identifier, Integer, String, Text

from ordering.domain import ordering
from ordering.ledger.money import ZERO, format_amount, to_amount
from ordering.ledger.reconciliation import (
    PaymentStatus,
    Settlement,
    reconcile,
    reconcile_clear_bill,
)
from ordering.order.events import (
    BillCleared,
    OrderAmended,
    OrderCancelled,
    OrderCreated,
    OrderDelivered,
    OrderStatusChanged,
    RiderAssigned,
    RiderReassigned,
    WalkInCompleted,
)


# ---------------------------------------------------------------------------
# Enums
# ---------------------------------------------------------------------------
class OrderType(Enum):
    DELIVERY = "DELIVERY"
    WALKIN = "WALKIN"
    CLEARBILL = "CLEARBILL"
    ENROUTE = "ENROUTE"


class OrderStatus(Enum):
    PENDING = "PENDING"
    ASSIGNED = "ASSIGNED"
    CREATED = "CREATED"
    IN_PROGRESS = "IN_PROGRESS"
    DELIVERED = "DELIVERED"
    COMPLETED = "COMPLETED"
    CANCELLED = "CANCELLED"


class Priority(Enum):
    LOW = "LOW"
    NORMAL = "NORMAL"
    HIGH = "HIGH"
    URGENT = "URGENT"


class PaymentMethod(Enum):
    CASH = "CASH"
    CARD = "CARD"
    BANK_TRANSFER = "BANK_TRANSFER"
    ONLINE = "ONLINE"


class CancelledBy(Enum):
    ADMIN = "ADMIN"
    RIDER = "RIDER"


# State machine transition map
_VALID_TRANSITIONS = {
    OrderStatus.PENDING: {OrderStatus.ASSIGNED, OrderStatus.IN_PROGRESS, OrderStatus.CANCELLED},
    OrderStatus.ASSIGNED: {
        OrderStatus.ASSIGNED,  # Reassignment
        OrderStatus.IN_PROGRESS,
        OrderStatus.DELIVERED,
        OrderStatus.CANCELLED,
    },
    OrderStatus.IN_PROGRESS: {
        OrderStatus.IN_PROGRESS,  # Reassignment
        OrderStatus.DELIVERED,
        OrderStatus.CANCELLED,
    },
    OrderStatus.CREATED: {OrderStatus.COMPLETED, OrderStatus.CANCELLED},
    OrderStatus.COMPLETED: {OrderStatus.CANCELLED},
    OrderStatus.DELIVERED: set(),  # Terminal
    OrderStatus.CANCELLED: set(),  # Terminal
}

# Statuses a plain status update may set; settlement and cancellation have their own operations
_MANUAL_STATUSES = {OrderStatus.ASSIGNED, OrderStatus.IN_PROGRESS}

_AMENDABLE_STATES = {OrderStatus.PENDING, OrderStatus.ASSIGNED, OrderStatus.IN_PROGRESS}

# En-route sales are settled on the spot, straight from PENDING
_ENROUTE_TRANSITIONS = {OrderStatus.PENDING: {OrderStatus.DELIVERED}}

_RIDER_ORDER_TYPES = {OrderType.DELIVERY}

_DELIVERABLE_TYPES = {OrderType.DELIVERY, OrderType.ENROUTE}


def initial_status_for(order_type: OrderType, has_rider: bool) -> OrderStatus:
    if order_type == OrderType.WALKIN:
        return OrderStatus.CREATED
    if order_type == OrderType.CLEARBILL:
        return OrderStatus.COMPLETED
    if order_type == OrderType.DELIVERY and has_rider:
        return OrderStatus.ASSIGNED
    return OrderStatus.PENDING


# ---------------------------------------------------------------------------
# Aggregate Root
# ---------------------------------------------------------------------------
@ordering.aggregate
class Order:
    customer_id = Identifier(required=True)
    customer_name = String(required=True, max_length=255)
    delivery_address = String(max_length=500)
    order_type = String(choices=OrderType, default=OrderType.DELIVERY.value)
    status = String(choices=OrderStatus, default=OrderStatus.PENDING.value)
    priority = String(choices=Priority, default=Priority.NORMAL.value)

    rider_id = Identifier()
    rider_name = String(max_length=255)
    rider_user_id = Identifier()

    number_of_bottles = Integer(default=0, min_value=0)
    unit_price = String(max_length=32, default="0.00")
    current_order_amount = String(max_length=32, default="0.00")
    customer_balance = String(max_length=32, default="0.00")  # Snapshot before this order
    total_amount = String(max_length=32, default="0.00")

    paid_amount = String(max_length=32, default="0.00")
    payment_status = String(choices=PaymentStatus, default=PaymentStatus.NOT_PAID.value)
    receivable = String(max_length=32, default="0.00")
    payable = String(max_length=32, default="0.00")
    payment_method = String(choices=PaymentMethod)
    payment_notes = Text()

    notes = Text()
    delivered_at = DateTime()
    cancelled_at = DateTime()
    cancelled_by = String(choices=CancelledBy)
    created_at = DateTime()
    updated_at = DateTime()

    # -------------------------------------------------------------------
    # Invariants
    # -------------------------------------------------------------------
    @invariant.post
    def total_is_snapshot_plus_order_amount(self):
        expected = to_amount(self.customer_balance) + to_amount(self.current_order_amount)
        if to_amount(self.total_amount) != expected:
            raise ValidationError(
                {"total_amount": [f"Total {self.total_amount} must equal balance snapshot plus order amount"]}
            )

    @invariant.post
    def receivable_and_payable_are_exclusive(self):
        receivable = to_amount(self.receivable)
        payable = to_amount(self.payable)
        if receivable < ZERO or payable < ZERO:
            raise ValidationError({"receivable": ["Receivable and payable cannot be negative"]})
        if receivable != ZERO and payable != ZERO:
            raise ValidationError({"receivable": ["An order cannot be both receivable and payable"]})

    @invariant.post
    def walkin_orders_have_no_rider(self):
        if self.order_type == OrderType.WALKIN.value and self.rider_id:
            raise ValidationError({"rider_id": ["Walk-in orders cannot have a rider"]})

    @invariant.post
    def enroute_orders_have_no_rider(self):
        if self.order_type == OrderType.ENROUTE.value and self.rider_id:
            raise ValidationError({"rider_id": ["En-route orders cannot have a rider"]})

    # -------------------------------------------------------------------
    # Factory methods
    # -------------------------------------------------------------------
    @classmethod
    def create(
        cls,
        customer,
        number_of_bottles,
        unit_price,
        order_type=OrderType.DELIVERY.value,
        rider=None,
        notes=None,
        priority=Priority.NORMAL.value,
    ):
        """Place an order for ``customer``, snapshotting their current balance.

        Args:
            customer: The ``Customer`` aggregate being charged.
            number_of_bottles: Bottles sold, at least 1.
            unit_price: Price per bottle, greater than zero.
            order_type: DELIVERY, WALKIN or ENROUTE. Bills are cleared via ``clear_bill``.
            rider: Optional ``Rider`` aggregate. Required for DELIVERY, forbidden for
                WALKIN and ignored for ENROUTE, which the seller hands over in person.
        """
        kind = _parse(OrderType, order_type, "order_type")
        if kind == OrderType.CLEARBILL:
            raise ValidationError({"order_type": ["Clear-bill orders are created through clear_bill"]})
        if kind == OrderType.DELIVERY and rider is None:
            raise ValidationError({"rider_id": ["Rider ID is required for delivery orders"]})
        if kind == OrderType.WALKIN and rider is not None:
            raise ValidationError({"rider_id": ["Rider ID should not be provided for walk-in orders"]})
        if kind == OrderType.ENROUTE:
            rider = None
        if number_of_bottles is None or int(number_of_bottles) < 1:
            raise ValidationError({"number_of_bottles": ["Number of bottles must be at least 1"]})

        price = to_amount(unit_price, "unit_price")
        if price <= ZERO:
            raise ValidationError({"unit_price": ["Unit price must be greater than zero"]})
        if not customer.is_active:
            raise ValidationError({"customer_id": [f"Customer {customer.name} is inactive"]})
        if rider is not None:
            rider.assert_available()

        current_order_amount = to_amount(price * int(number_of_bottles))
        snapshot = customer.balance
        status = initial_status_for(kind, rider is not None)
        now = datetime.now(UTC)

        order = cls(
            customer_id=str(customer.id),
            customer_name=customer.name,
            delivery_address=customer.formatted_address(),
            order_type=kind.value,
            status=status.value,
            priority=_parse(Priority, priority or Priority.NORMAL.value, "priority").value,
            rider_id=str(rider.id) if rider is not None else None,
            rider_name=rider.name if rider is not None else None,
            rider_user_id=str(rider.user_id) if rider is not None and rider.user_id else None,
            number_of_bottles=int(number_of_bottles),
            unit_price=format_amount(price),
            current_order_amount=format_amount(current_order_amount),
            customer_balance=format_amount(snapshot),
            total_amount=format_amount(snapshot + current_order_amount),
            notes=notes,
            created_at=now,
            updated_at=now,
        )
        order.raise_(
            OrderCreated(
                order_id=str(order.id),
                customer_id=order.customer_id,
                customer_name=order.customer_name,
                order_type=order.order_type,
                status=order.status,
                priority=order.priority,
                number_of_bottles=order.number_of_bottles,
                unit_price=order.unit_price,
                current_order_amount=order.current_order_amount,
                customer_balance=order.customer_balance,
                total_amount=order.total_amount,
                rider_id=order.rider_id,
                created_at=now,
            )
        )
        if rider is not None:
            order._raise_rider_assigned(now)
        return order

    @classmethod
    def clear_bill(
        cls,
        customer,
        paid_amount,
        payment_method=PaymentMethod.CASH.value,
        payment_notes=None,
        priority=Priority.NORMAL.value,
    ):
        """Settle a customer's outstanding balance without delivering anything.

        The order is created directly as COMPLETED. Its snapshot and total
        are both the customer's current balance.
        """
        if paid_amount is None:
            raise ValidationError({"paid_amount": ["Paid amount is required"]})
        paid = to_amount(paid_amount, "paid_amount")
        if paid < ZERO:
            raise ValidationError({"paid_amount": ["Paid amount cannot be negative"]})

        balance = customer.balance
        if balance == ZERO:
            raise ValidationError({"customer_id": ["Customer balance is already zero, nothing to clear"]})

        settlement = reconcile_clear_bill(balance, paid)
        method = _parse(PaymentMethod, payment_method or PaymentMethod.CASH.value, "payment_method")
        now = datetime.now(UTC)

        order = cls(
            customer_id=str(customer.id),
            customer_name=customer.name,
            delivery_address=customer.formatted_address(),
            order_type=OrderType.CLEARBILL.value,
            status=OrderStatus.COMPLETED.value,
            priority=_parse(Priority, priority or Priority.NORMAL.value, "priority").value,
            number_of_bottles=0,
            unit_price=format_amount(ZERO),
            current_order_amount=format_amount(ZERO),
            customer_balance=format_amount(balance),
            total_amount=format_amount(balance),
            paid_amount=format_amount(settlement.paid_amount),
            payment_status=settlement.payment_status.value,
            receivable=format_amount(settlement.receivable),
            payable=format_amount(settlement.payable),
            payment_method=method.value,
            payment_notes=payment_notes,
            delivered_at=now,
            created_at=now,
            updated_at=now,
        )
        order.raise_(
            BillCleared(
                order_id=str(order.id),
                customer_id=order.customer_id,
                customer_name=order.customer_name,
                balance_before=order.customer_balance,
                paid_amount=order.paid_amount,
                receivable=order.receivable,
                payable=order.payable,
                payment_status=order.payment_status,
                payment_method=order.payment_method,
                cleared_at=now,
            )
        )
        return order

    # -------------------------------------------------------------------
    # State transition helpers
    # -------------------------------------------------------------------
    def _assert_can_transition(self, target_status):
        """Validate that the current state allows transition to target."""
        current = OrderStatus(self.status)
        allowed = _VALID_TRANSITIONS.get(current, set())
        if self.order_type == OrderType.ENROUTE.value:
            allowed = allowed | _ENROUTE_TRANSITIONS.get(current, set())
        if target_status not in allowed:
            raise ValidationError({"status": [f"Cannot transition from {current.value} to {target_status.value}"]})

    def _assert_type(self, *order_types):
        if OrderType(self.order_type) not in order_types:
            allowed = ", ".join(t.value for t in order_types)
            raise ValidationError({"order_type": [f"Operation is only allowed for {allowed} orders"]})

    @property
    def snapshot_balance(self) -> Decimal:
        return to_amount(self.customer_balance)

    @property
    def order_amount(self) -> Decimal:
        return to_amount(self.current_order_amount)

    @property
    def amount_due(self) -> Decimal:
        return to_amount(self.total_amount)

    @property
    def paid_amount_value(self) -> Decimal:
        return to_amount(self.paid_amount)

    # -------------------------------------------------------------------
    # Assignment
    # -------------------------------------------------------------------
    def update_status(self, status, rider=None):
        """Move the order forward and/or hand it to a rider.

        Only ASSIGNED and IN_PROGRESS can be set here. A rider change on an
        order that already had one is a reassignment.
        """
        target = _parse(OrderStatus, status, "status")
        if target not in _MANUAL_STATUSES:
            raise ValidationError(
                {"status": [f"{target.value} cannot be set directly; use the deliver, complete or cancel operation"]}
            )
        current = OrderStatus(self.status)
        self._assert_can_transition(target)

        rider_changes = rider is not None and str(rider.id) != str(self.rider_id or "")
        if rider is not None:
            self._assert_type(*_RIDER_ORDER_TYPES)
            rider.assert_available()
        if target == current and not rider_changes:
            raise ValidationError({"status": [f"Order is already {current.value}"]})
        if target == OrderStatus.ASSIGNED and rider is None and not self.rider_id:
            raise ValidationError({"rider_id": ["A rider is required to assign an order"]})
        if (
            target == OrderStatus.IN_PROGRESS
            and OrderType(self.order_type) == OrderType.DELIVERY
            and rider is None
            and not self.rider_id
        ):
            raise ValidationError({"rider_id": ["A delivery order needs a rider before it can start"]})

        now = datetime.now(UTC)
        if rider_changes:
            self._change_rider(rider, now)
        if target != current:
            self.status = target.value
            self.raise_(
                OrderStatusChanged(
                    order_id=str(self.id),
                    previous_status=current.value,
                    new_status=target.value,
                    changed_at=now,
                )
            )
        self.updated_at = now

    def _change_rider(self, rider, now):
        previous = (self.rider_id, self.rider_name, self.rider_user_id)
        with atomic_change(self):
            self.rider_id = str(rider.id)
            self.rider_name = rider.name
            self.rider_user_id = str(rider.user_id) if rider.user_id else None

        if previous[0]:
            self.raise_(
                RiderReassigned(
                    order_id=str(self.id),
                    customer_id=self.customer_id,
                    customer_name=self.customer_name,
                    delivery_address=self.delivery_address or "",
                    number_of_bottles=self.number_of_bottles,
                    priority=self.priority,
                    total_amount=self.total_amount,
                    previous_rider_id=previous[0],
                    previous_rider_name=previous[1] or "",
                    previous_rider_user_id=previous[2],
                    rider_id=self.rider_id,
                    rider_name=self.rider_name,
                    rider_user_id=self.rider_user_id,
                    reassigned_at=now,
                )
            )
        else:
            self._raise_rider_assigned(now)

    def _raise_rider_assigned(self, now):
        self.raise_(
            RiderAssigned(
                order_id=str(self.id),
                customer_id=self.customer_id,
                customer_name=self.customer_name,
                delivery_address=self.delivery_address or "",
                number_of_bottles=self.number_of_bottles,
                priority=self.priority,
                total_amount=self.total_amount,
                rider_id=self.rider_id,
                rider_name=self.rider_name,
                rider_user_id=self.rider_user_id,
                assigned_at=now,
            )
        )

    # -------------------------------------------------------------------
    # Settlement
    # -------------------------------------------------------------------
    def _settle(self, payment_amount, payment_method, payment_notes, target_status) -> Settlement:
        settlement = reconcile(self.amount_due, to_amount(payment_amount, "payment_amount"))
        method = _parse(PaymentMethod, payment_method or PaymentMethod.CASH.value, "payment_method")
        now = datetime.now(UTC)

        with atomic_change(self):
            self.status = target_status.value
            self.paid_amount = format_amount(settlement.paid_amount)
            self.payment_status = settlement.payment_status.value
            self.receivable = format_amount(settlement.receivable)
            self.payable = format_amount(settlement.payable)
            self.payment_method = method.value
            self.payment_notes = payment_notes
            self.delivered_at = now
            self.updated_at = now
        return settlement

    def deliver(self, payment_amount=0, payment_method=PaymentMethod.CASH.value, payment_notes=None) -> Settlement:
        """Record delivery and what the customer paid the rider.

        Returns the settlement; the customer's balance drops by the paid amount.
        """
        self._assert_type(*_DELIVERABLE_TYPES)
        self._assert_can_transition(OrderStatus.DELIVERED)

        settlement = self._settle(payment_amount, payment_method, payment_notes, OrderStatus.DELIVERED)
        self.raise_(
            OrderDelivered(
                order_id=str(self.id),
                customer_id=self.customer_id,
                customer_name=self.customer_name,
                delivery_address=self.delivery_address or "",
                number_of_bottles=self.number_of_bottles,
                rider_id=self.rider_id,
                rider_name=self.rider_name,
                total_amount=self.total_amount,
                paid_amount=self.paid_amount,
                receivable=self.receivable,
                payable=self.payable,
                payment_status=self.payment_status,
                payment_method=self.payment_method,
                delivered_at=self.delivered_at,
            )
        )
        return settlement

    def complete_walkin(
        self, payment_amount=0, payment_method=PaymentMethod.CASH.value, payment_notes=None
    ) -> Settlement:
        """Take payment for a walk-in sale at the counter."""
        self._assert_type(OrderType.WALKIN)
        if OrderStatus(self.status) != OrderStatus.CREATED:
            raise ValidationError({"status": ["Order is not in CREATED status"]})

        settlement = self._settle(payment_amount, payment_method, payment_notes, OrderStatus.COMPLETED)
        self.raise_(
            WalkInCompleted(
                order_id=str(self.id),
                customer_id=self.customer_id,
                number_of_bottles=self.number_of_bottles,
                total_amount=self.total_amount,
                paid_amount=self.paid_amount,
                receivable=self.receivable,
                payable=self.payable,
                payment_status=self.payment_status,
                payment_method=self.payment_method,
                completed_at=self.delivered_at,
            )
        )
        return settlement

    # -------------------------------------------------------------------
    # Cancellation & amendment
    # -------------------------------------------------------------------
    def cancel(self, cancelled_by=CancelledBy.ADMIN.value, reversed_amount=ZERO):
        """Cancel the order. ``reversed_amount`` is what the ledger gives back to the customer."""
        current = OrderStatus(self.status)
        if current == OrderStatus.CANCELLED:
            raise ValidationError({"status": ["Order is already cancelled"]})
        if current == OrderStatus.DELIVERED:
            raise ValidationError({"status": ["Cannot cancel a delivered order"]})
        self._assert_can_transition(OrderStatus.CANCELLED)

        actor = _parse(CancelledBy, cancelled_by or CancelledBy.ADMIN.value, "cancelled_by")
        now = datetime.now(UTC)
        with atomic_change(self):
            self.status = OrderStatus.CANCELLED.value
            self.cancelled_by = actor.value
            self.cancelled_at = now
            self.updated_at = now

        self.raise_(
            OrderCancelled(
                order_id=str(self.id),
                customer_id=self.customer_id,
                customer_name=self.customer_name,
                delivery_address=self.delivery_address or "",
                number_of_bottles=self.number_of_bottles,
                rider_id=self.rider_id,
                rider_name=self.rider_name,
                rider_user_id=self.rider_user_id,
                previous_status=current.value,
                cancelled_by=actor.value,
                reversed_amount=format_amount(reversed_amount),
                cancelled_at=now,
            )
        )

    def amend(self, number_of_bottles, unit_price, notes=None, priority=None, rider=None) -> Decimal:
        """Rewrite the bottle count and price of an in-progress order.

        The balance snapshot is kept; only this order's own amount changes.
        Returns the previous order amount so the ledger can replace it.
        """
        current = OrderStatus(self.status)
        if current not in _AMENDABLE_STATES:
            raise ValidationError({"status": ["Only in-progress orders can be amended"]})
        if number_of_bottles is None or unit_price is None:
            raise ValidationError({"number_of_bottles": ["Number of bottles and unit price are required"]})
        if int(number_of_bottles) < 1:
            raise ValidationError({"number_of_bottles": ["Number of bottles must be at least 1"]})
        price = to_amount(unit_price, "unit_price")
        if price <= ZERO:
            raise ValidationError({"unit_price": ["Unit price must be greater than zero"]})
        if rider is not None:
            self._assert_type(*_RIDER_ORDER_TYPES)
            rider.assert_available()

        previous_bottles = self.number_of_bottles
        previous_amount = self.order_amount
        new_amount = to_amount(price * int(number_of_bottles))
        now = datetime.now(UTC)

        with atomic_change(self):
            self.number_of_bottles = int(number_of_bottles)
            self.unit_price = format_amount(price)
            self.current_order_amount = format_amount(new_amount)
            self.total_amount = format_amount(self.snapshot_balance + new_amount)
            if notes is not None:
                self.notes = notes
            if priority is not None:
                self.priority = _parse(Priority, priority, "priority").value
            self.updated_at = now

        self.raise_(
            OrderAmended(
                order_id=str(self.id),
                customer_id=self.customer_id,
                previous_number_of_bottles=previous_bottles,
                number_of_bottles=self.number_of_bottles,
                unit_price=self.unit_price,
                previous_order_amount=format_amount(previous_amount),
                current_order_amount=self.current_order_amount,
                total_amount=self.total_amount,
                amended_at=now,
            )
        )

        if rider is not None and str(rider.id) != str(self.rider_id or ""):
            self._change_rider(rider, now)

        return previous_amount


def _parse(enum_cls, value, field):
    """Validate a boundary string against a closed enumeration (case-insensitive)."""
    if isinstance(value, enum_cls):
        return value
    try:
        return enum_cls(str(value).upper())
    except ValueError:
        allowed = ", ".join(e.value for e in enum_cls)
        raise ValidationError({field: [f"'{value}' is not one of {allowed}"]}) from None
