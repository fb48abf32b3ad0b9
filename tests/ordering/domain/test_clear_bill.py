"""Tests for clear-bill orders."""

import pytest
from ordering.customer.customer import Customer, EntryKind
from ordering.order.events import BillCleared
from ordering.order.order import Order, OrderStatus, OrderType
from protean.exceptions import ValidationError


def _customer(balance):
    customer = Customer.register(name="Ali Khan")
    if balance:
        customer.post("earlier-order", EntryKind.CHARGE, balance)
    return customer


class TestClearBill:
    def test_creates_completed_clearbill_order(self):
        order = Order.clear_bill(_customer("500"), paid_amount="500")

        assert order.order_type == OrderType.CLEARBILL.value
        assert order.status == OrderStatus.COMPLETED.value
        assert order.number_of_bottles == 0
        assert order.current_order_amount == "0.00"
        assert order.customer_balance == "500.00"
        assert order.total_amount == "500.00"
        assert order.payment_status == "PAID"
        assert order.delivered_at is not None

    def test_partial_settlement(self):
        order = Order.clear_bill(_customer("500"), paid_amount="200", payment_method="BANK_TRANSFER")
        assert order.payment_status == "PARTIAL"
        assert order.receivable == "300.00"
        assert order.payment_method == "BANK_TRANSFER"

    def test_payable_balance_stores_negative_paid(self):
        order = Order.clear_bill(_customer("-30"), paid_amount="30")

        assert order.paid_amount == "-30.00"
        assert order.payment_status == "PAID"
        assert (order.receivable, order.payable) == ("0.00", "0.00")

    def test_raises_bill_cleared(self):
        order = Order.clear_bill(_customer("500"), paid_amount="100")
        [event] = order._events
        assert isinstance(event, BillCleared)
        assert event.balance_before == "500.00"
        assert event.paid_amount == "100.00"

    def test_zero_balance_rejected(self):
        with pytest.raises(ValidationError) as exc:
            Order.clear_bill(_customer(None), paid_amount="10")
        assert "customer_id" in exc.value.messages

    def test_negative_payment_rejected(self):
        with pytest.raises(ValidationError) as exc:
            Order.clear_bill(_customer("500"), paid_amount="-10")
        assert "paid_amount" in exc.value.messages

    def test_missing_payment_rejected(self):
        with pytest.raises(ValidationError):
            Order.clear_bill(_customer("500"), paid_amount=None)
