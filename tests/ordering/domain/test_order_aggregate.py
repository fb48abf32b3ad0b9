"""Tests for Order creation and the amounts it snapshots."""

from decimal import Decimal

import pytest
from ordering.customer.customer import Customer, EntryKind
from ordering.order.events import OrderCreated, RiderAssigned
from ordering.order.order import Order, OrderStatus, OrderType, initial_status_for
from ordering.rider.rider import Rider
from protean.exceptions import ValidationError


def _customer(balance=None):
    customer = Customer.register(name="Ali Khan", house_no="H-12", area="Gulberg", city="Lahore")
    if balance is not None:
        customer.post("earlier-order", EntryKind.CHARGE, balance)
    return customer


def _rider(**kwargs):
    return Rider.register(name=kwargs.get("name", "Bilal"), user_id=kwargs.get("user_id", "user-rider-1"))


class TestCreateDeliveryOrder:
    def test_amounts_for_new_customer(self):
        order = Order.create(_customer(), number_of_bottles=2, unit_price="50", rider=_rider())

        assert order.current_order_amount == "100.00"
        assert order.customer_balance == "0.00"
        assert order.total_amount == "100.00"
        assert order.status == OrderStatus.ASSIGNED.value

    def test_total_includes_existing_balance(self):
        order = Order.create(_customer(balance="40"), number_of_bottles=3, unit_price="20", rider=_rider())

        assert order.customer_balance == "40.00"
        assert order.current_order_amount == "60.00"
        assert order.total_amount == "100.00"

    def test_credit_balance_reduces_total(self):
        order = Order.create(_customer(balance="-30"), number_of_bottles=1, unit_price="50", rider=_rider())
        assert order.total_amount == "20.00"

    def test_denormalizes_customer_and_rider(self):
        order = Order.create(_customer(), number_of_bottles=1, unit_price="50", rider=_rider())

        assert order.customer_name == "Ali Khan"
        assert order.delivery_address == "H-12 Gulberg Lahore"
        assert order.rider_name == "Bilal"
        assert order.rider_user_id == "user-rider-1"

    def test_raises_created_and_assigned_events(self):
        order = Order.create(_customer(), number_of_bottles=1, unit_price="50", rider=_rider())

        assert [type(e) for e in order._events] == [OrderCreated, RiderAssigned]
        assigned = order._events[1]
        assert assigned.rider_name == "Bilal"
        assert assigned.delivery_address == "H-12 Gulberg Lahore"

    def test_delivery_requires_rider(self):
        with pytest.raises(ValidationError) as exc:
            Order.create(_customer(), number_of_bottles=1, unit_price="50")
        assert "rider_id" in exc.value.messages

    def test_inactive_rider_rejected(self):
        rider = _rider()
        rider.deactivate()
        with pytest.raises(ValidationError):
            Order.create(_customer(), number_of_bottles=1, unit_price="50", rider=rider)

    def test_inactive_customer_rejected(self):
        customer = _customer()
        customer.deactivate()
        with pytest.raises(ValidationError) as exc:
            Order.create(customer, number_of_bottles=1, unit_price="50", rider=_rider())
        assert "customer_id" in exc.value.messages


class TestCreateOtherTypes:
    def test_walkin_starts_created(self):
        order = Order.create(_customer(), number_of_bottles=1, unit_price="50", order_type="WALKIN")
        assert order.status == OrderStatus.CREATED.value
        assert [type(e) for e in order._events] == [OrderCreated]

    def test_walkin_forbids_rider(self):
        with pytest.raises(ValidationError):
            Order.create(_customer(), number_of_bottles=1, unit_price="50", order_type="WALKIN", rider=_rider())

    def test_enroute_without_rider_is_pending(self):
        order = Order.create(_customer(), number_of_bottles=1, unit_price="50", order_type="ENROUTE")
        assert order.status == OrderStatus.PENDING.value

    def test_enroute_drops_rider(self):
        order = Order.create(
            _customer(), number_of_bottles=1, unit_price="50", order_type="ENROUTE", rider=_rider()
        )

        assert order.status == OrderStatus.PENDING.value
        assert order.rider_id is None
        assert [type(e) for e in order._events] == [OrderCreated]

    def test_order_type_is_case_insensitive(self):
        order = Order.create(_customer(), number_of_bottles=1, unit_price="50", order_type="walkin")
        assert order.order_type == OrderType.WALKIN.value

    def test_unknown_order_type_rejected(self):
        with pytest.raises(ValidationError) as exc:
            Order.create(_customer(), number_of_bottles=1, unit_price="50", order_type="PICKUP")
        assert "order_type" in exc.value.messages

    def test_clearbill_type_not_created_here(self):
        with pytest.raises(ValidationError):
            Order.create(_customer(), number_of_bottles=1, unit_price="50", order_type="CLEARBILL")


class TestCreateValidation:
    @pytest.mark.parametrize("bottles", [0, -1])
    def test_bottles_at_least_one(self, bottles):
        with pytest.raises(ValidationError) as exc:
            Order.create(_customer(), number_of_bottles=bottles, unit_price="50", rider=_rider())
        assert "number_of_bottles" in exc.value.messages

    @pytest.mark.parametrize("price", ["0", "-5"])
    def test_unit_price_positive(self, price):
        with pytest.raises(ValidationError) as exc:
            Order.create(_customer(), number_of_bottles=1, unit_price=price, rider=_rider())
        assert "unit_price" in exc.value.messages

    def test_invalid_priority_rejected(self):
        with pytest.raises(ValidationError):
            Order.create(_customer(), number_of_bottles=1, unit_price="50", rider=_rider(), priority="ASAP")


class TestInitialStatus:
    @pytest.mark.parametrize(
        "order_type,has_rider,expected",
        [
            (OrderType.DELIVERY, True, OrderStatus.ASSIGNED),
            (OrderType.ENROUTE, True, OrderStatus.PENDING),
            (OrderType.ENROUTE, False, OrderStatus.PENDING),
            (OrderType.WALKIN, False, OrderStatus.CREATED),
            (OrderType.CLEARBILL, False, OrderStatus.COMPLETED),
        ],
    )
    def test_initial_status(self, order_type, has_rider, expected):
        assert initial_status_for(order_type, has_rider) == expected


class TestInvariants:
    def test_total_must_equal_snapshot_plus_amount(self):
        order = Order.create(_customer(), number_of_bottles=1, unit_price="50", rider=_rider())
        with pytest.raises(ValidationError) as exc:
            order.total_amount = "75.00"
        assert "total_amount" in exc.value.messages

    def test_receivable_and_payable_cannot_both_be_set(self):
        order = Order.create(_customer(), number_of_bottles=1, unit_price="50", rider=_rider())
        order.receivable = "10.00"
        with pytest.raises(ValidationError):
            order.payable = "5.00"

    def test_enroute_order_cannot_hold_rider(self):
        order = Order.create(_customer(), number_of_bottles=1, unit_price="50", order_type="ENROUTE")
        with pytest.raises(ValidationError) as exc:
            order.rider_id = "rider-1"
        assert "rider_id" in exc.value.messages

    def test_amount_properties(self):
        order = Order.create(_customer(balance="10"), number_of_bottles=1, unit_price="50", rider=_rider())
        assert order.snapshot_balance == Decimal("10.00")
        assert order.order_amount == Decimal("50.00")
        assert order.amount_due == Decimal("60.00")
