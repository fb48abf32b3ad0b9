"""Application tests for customer account and rider commands."""

import pytest
from ordering.customer.customer import Customer
from ordering.customer.registration import DeactivateCustomer, ReactivateCustomer, RegisterCustomer
from ordering.customer.repository import walkin_alias
from ordering.rider.management import DeactivateRider, RegisterRider
from ordering.rider.rider import Rider
from protean import current_domain
from protean.exceptions import ObjectNotFoundError, ValidationError


class TestCustomerCommands:
    def test_register_customer(self, customer_id):
        customer = current_domain.repository_for(Customer).get(customer_id)

        assert customer.name == "Ali Khan"
        assert customer.current_balance == "0.00"
        assert customer.is_active is True
        assert customer.formatted_address() == "H-12 St 4 Gulberg Lahore"

    def test_register_requires_name(self):
        with pytest.raises(ValidationError):
            current_domain.process(RegisterCustomer(phone="0300"), asynchronous=False)

    def test_deactivate_and_reactivate(self, customer_id):
        current_domain.process(DeactivateCustomer(customer_id=customer_id), asynchronous=False)
        assert current_domain.repository_for(Customer).get(customer_id).is_active is False

        current_domain.process(ReactivateCustomer(customer_id=customer_id), asynchronous=False)
        assert current_domain.repository_for(Customer).get(customer_id).is_active is True

    def test_deactivate_unknown_customer(self):
        with pytest.raises(ObjectNotFoundError):
            current_domain.process(DeactivateCustomer(customer_id="missing"), asynchronous=False)


class TestWalkinResolution:
    def test_alias_comes_from_config(self):
        assert walkin_alias() == "walkin"

    def test_resolve_alias(self, walkin_customer_id):
        repo = current_domain.repository_for(Customer)
        assert repo.resolve("walkin").id == walkin_customer_id

    def test_resolve_regular_id(self, customer_id):
        repo = current_domain.repository_for(Customer)
        assert repo.resolve(customer_id).id == customer_id


class TestRiderCommands:
    def test_register_rider(self, rider_id):
        rider = current_domain.repository_for(Rider).get(rider_id)
        assert rider.name == "Bilal"
        assert rider.user_id == "user-rider-1"
        assert rider.is_active is True

    def test_deactivate_rider(self, rider_id):
        current_domain.process(DeactivateRider(rider_id=rider_id), asynchronous=False)
        assert current_domain.repository_for(Rider).get(rider_id).is_active is False

    def test_register_rider_requires_name(self):
        with pytest.raises(ValidationError):
            current_domain.process(RegisterRider(phone="0311"), asynchronous=False)
