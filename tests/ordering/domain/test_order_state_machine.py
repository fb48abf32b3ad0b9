"""Tests for the Order state machine guards."""

from decimal import Decimal

import pytest
from ordering.customer.customer import Customer
from ordering.order.events import (
    OrderCancelled,
    OrderDelivered,
    OrderStatusChanged,
    RiderReassigned,
    WalkInCompleted,
)
from ordering.order.order import CancelledBy, Order, OrderStatus
from ordering.rider.rider import Rider
from protean.exceptions import ValidationError


def _customer():
    return Customer.register(name="Ali Khan", house_no="H-12", city="Lahore")


def _rider(name="Bilal", user_id="user-rider-1"):
    return Rider.register(name=name, user_id=user_id)


def _delivery(rider=None):
    order = Order.create(_customer(), number_of_bottles=2, unit_price="50", rider=rider or _rider())
    order._events.clear()
    return order


def _enroute():
    order = Order.create(_customer(), number_of_bottles=2, unit_price="50", order_type="ENROUTE")
    order._events.clear()
    return order


def _walkin():
    order = Order.create(_customer(), number_of_bottles=2, unit_price="50", order_type="WALKIN")
    order._events.clear()
    return order


class TestAssignment:
    def test_enroute_cannot_take_rider(self):
        order = _enroute()
        with pytest.raises(ValidationError) as exc:
            order.update_status("ASSIGNED", rider=_rider())

        assert "order_type" in exc.value.messages
        assert order.status == OrderStatus.PENDING.value
        assert order.rider_id is None
        assert order._events == []

    def test_pending_to_assigned_needs_rider(self):
        with pytest.raises(ValidationError) as exc:
            _enroute().update_status("ASSIGNED")
        assert "rider_id" in exc.value.messages

    def test_pending_to_in_progress(self):
        order = _enroute()
        order.update_status("IN_PROGRESS")
        assert order.status == OrderStatus.IN_PROGRESS.value

    def test_assigned_to_in_progress(self):
        order = _delivery()
        order.update_status("IN_PROGRESS")

        assert order.status == OrderStatus.IN_PROGRESS.value
        event = order._events[-1]
        assert isinstance(event, OrderStatusChanged)
        assert (event.previous_status, event.new_status) == ("ASSIGNED", "IN_PROGRESS")

    def test_reassign_while_assigned(self):
        order = _delivery()
        order.update_status("ASSIGNED", rider=_rider("Imran", "user-rider-2"))

        assert order.status == OrderStatus.ASSIGNED.value
        assert order.rider_name == "Imran"
        [event] = order._events
        assert isinstance(event, RiderReassigned)
        assert event.previous_rider_name == "Bilal"
        assert event.previous_rider_user_id == "user-rider-1"
        assert event.rider_user_id == "user-rider-2"

    def test_reassign_while_in_progress(self):
        order = _delivery()
        order.update_status("IN_PROGRESS")
        order._events.clear()

        order.update_status("IN_PROGRESS", rider=_rider("Imran", "user-rider-2"))

        assert order.status == OrderStatus.IN_PROGRESS.value
        assert isinstance(order._events[0], RiderReassigned)

    def test_same_status_without_rider_change_rejected(self):
        with pytest.raises(ValidationError):
            _delivery().update_status("ASSIGNED")

    @pytest.mark.parametrize("status", ["DELIVERED", "COMPLETED", "CANCELLED"])
    def test_settlement_states_not_settable(self, status):
        with pytest.raises(ValidationError) as exc:
            _delivery().update_status(status)
        assert "status" in exc.value.messages

    def test_unknown_status_rejected(self):
        with pytest.raises(ValidationError):
            _delivery().update_status("SHIPPED")

    def test_walkin_cannot_be_assigned(self):
        with pytest.raises(ValidationError):
            _walkin().update_status("ASSIGNED", rider=_rider())

    def test_inactive_rider_cannot_be_assigned(self):
        rider = _rider()
        rider.deactivate()
        with pytest.raises(ValidationError):
            _delivery().update_status("ASSIGNED", rider=rider)


class TestDeliver:
    def test_deliver_full_payment(self):
        order = _delivery()
        settlement = order.deliver(payment_amount="100")

        assert order.status == OrderStatus.DELIVERED.value
        assert order.payment_status == "PAID"
        assert (order.receivable, order.payable) == ("0.00", "0.00")
        assert settlement.paid_amount == Decimal("100.00")
        assert order.delivered_at is not None
        assert isinstance(order._events[-1], OrderDelivered)

    def test_deliver_partial_payment(self):
        order = _delivery()
        order.deliver(payment_amount="60", payment_method="card", payment_notes="rest tomorrow")

        assert order.payment_status == "PARTIAL"
        assert order.receivable == "40.00"
        assert order.payment_method == "CARD"
        assert order.payment_notes == "rest tomorrow"

    def test_deliver_overpayment(self):
        order = _delivery()
        order.deliver(payment_amount="120")
        assert order.payment_status == "OVERPAID"
        assert order.payable == "20.00"

    def test_deliver_defaults_to_unpaid_cash(self):
        order = _delivery()
        order.deliver()
        assert order.payment_status == "NOT_PAID"
        assert order.payment_method == "CASH"
        assert order.receivable == "100.00"

    def test_deliver_from_in_progress(self):
        order = _delivery()
        order.update_status("IN_PROGRESS")
        order.deliver(payment_amount="100")
        assert order.status == OrderStatus.DELIVERED.value

    def test_enroute_delivered_from_pending(self):
        order = _enroute()
        order.deliver(payment_amount="100")

        assert order.status == OrderStatus.DELIVERED.value
        assert order.payment_status == "PAID"
        event = order._events[-1]
        assert isinstance(event, OrderDelivered)
        assert event.rider_id is None

    def test_enroute_delivered_from_in_progress(self):
        order = _enroute()
        order.update_status("IN_PROGRESS")
        order.deliver(payment_amount="100")
        assert order.status == OrderStatus.DELIVERED.value

    def test_cancelled_enroute_cannot_be_delivered(self):
        order = _enroute()
        order.cancel()
        with pytest.raises(ValidationError) as exc:
            order.deliver(payment_amount="100")
        assert "status" in exc.value.messages

    def test_deliver_twice_rejected(self):
        order = _delivery()
        order.deliver(payment_amount="100")
        with pytest.raises(ValidationError):
            order.deliver(payment_amount="100")

    def test_walkin_cannot_be_delivered(self):
        with pytest.raises(ValidationError) as exc:
            _walkin().deliver(payment_amount="100")
        assert "order_type" in exc.value.messages


class TestCompleteWalkIn:
    def test_complete(self):
        order = _walkin()
        order.complete_walkin(payment_amount="100")

        assert order.status == OrderStatus.COMPLETED.value
        assert order.payment_status == "PAID"
        assert isinstance(order._events[-1], WalkInCompleted)

    def test_complete_twice_rejected(self):
        order = _walkin()
        order.complete_walkin(payment_amount="100")
        with pytest.raises(ValidationError):
            order.complete_walkin(payment_amount="100")

    def test_delivery_order_cannot_be_completed(self):
        with pytest.raises(ValidationError):
            _delivery().complete_walkin(payment_amount="100")


class TestCancel:
    @pytest.mark.parametrize("factory", [_delivery, _enroute, _walkin])
    def test_cancel_open_orders(self, factory):
        order = factory()
        order.cancel(reversed_amount=Decimal("-100"))

        assert order.status == OrderStatus.CANCELLED.value
        assert order.cancelled_by == CancelledBy.ADMIN.value
        assert order.cancelled_at is not None
        event = order._events[-1]
        assert isinstance(event, OrderCancelled)
        assert event.reversed_amount == "-100.00"

    def test_cancel_completed_walkin(self):
        order = _walkin()
        order.complete_walkin(payment_amount="100")
        order.cancel()
        assert order.status == OrderStatus.CANCELLED.value

    def test_cancel_by_rider(self):
        order = _delivery()
        order.cancel(cancelled_by="rider")
        assert order.cancelled_by == "RIDER"
        assert order._events[-1].rider_user_id == "user-rider-1"

    def test_cancel_delivered_rejected(self):
        order = _delivery()
        order.deliver(payment_amount="100")
        with pytest.raises(ValidationError):
            order.cancel()

    def test_cancel_twice_rejected(self):
        order = _delivery()
        order.cancel()
        with pytest.raises(ValidationError):
            order.cancel()

    def test_unknown_canceller_rejected(self):
        with pytest.raises(ValidationError):
            _delivery().cancel(cancelled_by="CUSTOMER")
