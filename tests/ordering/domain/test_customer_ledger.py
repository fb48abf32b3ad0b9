"""Tests for the Customer aggregate and its ledger entries."""

from decimal import Decimal

import pytest
from ordering.customer.customer import Customer, EntryKind
from ordering.customer.events import CustomerDeactivated, CustomerRegistered
from protean.exceptions import ValidationError


def _customer(**kwargs):
    defaults = {"name": "Ali Khan", "house_no": "H-12", "street_no": "St 4", "area": "Gulberg", "city": "Lahore"}
    defaults.update(kwargs)
    return Customer.register(**defaults)


class TestRegistration:
    def test_starts_with_zero_balance_and_no_entries(self):
        customer = _customer()
        assert customer.balance == Decimal("0.00")
        assert customer.current_balance == "0.00"
        assert len(customer.entries) == 0
        assert customer.is_active is True

    def test_raises_registered_event(self):
        customer = _customer()
        assert isinstance(customer._events[0], CustomerRegistered)

    def test_formatted_address_skips_blanks(self):
        assert _customer(street_no=None).formatted_address() == "H-12 Gulberg Lahore"

    def test_address_placeholder(self):
        customer = Customer.register(name="Nobody")
        assert customer.formatted_address() == "Address not provided"


class TestPosting:
    def test_post_moves_balance(self):
        customer = _customer()
        customer.post("order-1", EntryKind.CHARGE, "100")
        customer.post("order-1", EntryKind.PAYMENT, "-60")
        assert customer.balance == Decimal("40.00")
        assert [e.sequence for e in customer.entries_for("order-1")] == [1, 2]

    def test_net_effect_is_per_order(self):
        customer = _customer()
        customer.post("order-1", EntryKind.CHARGE, "100")
        customer.post("order-2", EntryKind.CHARGE, "50")
        assert customer.net_effect_of("order-1") == Decimal("100.00")
        assert customer.net_effect_of("order-2") == Decimal("50.00")

    def test_reverse_undoes_only_that_order(self):
        customer = _customer()
        customer.post("order-1", EntryKind.CHARGE, "100")
        customer.post("order-2", EntryKind.CHARGE, "50")

        entry = customer.reverse("order-1")

        assert entry.kind == EntryKind.REVERSAL.value
        assert entry.amount == "-100.00"
        assert customer.balance == Decimal("50.00")
        assert customer.net_effect_of("order-1") == Decimal("0.00")

    def test_reverse_of_nothing_posts_nothing(self):
        customer = _customer()
        assert customer.reverse("order-x") is None
        assert len(customer.entries) == 0

    def test_balance_must_match_ledger(self):
        customer = _customer()
        with pytest.raises(ValidationError) as exc:
            customer.current_balance = "10.00"
        assert "current_balance" in exc.value.messages


class TestAccountStatus:
    def test_deactivate(self):
        customer = _customer()
        customer.deactivate()
        assert customer.is_active is False
        assert isinstance(customer._events[-1], CustomerDeactivated)

    def test_deactivate_twice_rejected(self):
        customer = _customer()
        customer.deactivate()
        with pytest.raises(ValidationError):
            customer.deactivate()

    def test_reactivate(self):
        customer = _customer()
        customer.deactivate()
        customer.reactivate()
        assert customer.is_active is True

    def test_reactivate_active_rejected(self):
        with pytest.raises(ValidationError):
            _customer().reactivate()
