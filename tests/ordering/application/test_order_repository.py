"""Tests for the OrderRepository listing and reporting queries."""

from datetime import UTC, datetime, timedelta

from ordering.order.creation import CreateOrder
from ordering.order.delivery import CompleteWalkInOrder, DeliverOrder
from ordering.order.order import Order
from ordering.order.repository import OrderPage
from protean import current_domain


def _create(customer_id, **kwargs):
    params = {"number_of_bottles": 1, "unit_price": "50"}
    params.update(kwargs)
    return current_domain.process(CreateOrder(customer_id=customer_id, **params), asynchronous=False)


class TestListing:
    def test_newest_first(self, customer_id, rider_id):
        ids = [_create(customer_id, rider_id=rider_id) for _ in range(3)]

        page = current_domain.repository_for(Order).listing()

        assert [o.id for o in page.orders] == list(reversed(ids))
        assert page.total == 3

    def test_pagination(self, customer_id, rider_id):
        for _ in range(5):
            _create(customer_id, rider_id=rider_id)

        page = current_domain.repository_for(Order).listing(page=2, limit=2)

        assert len(page.orders) == 2
        assert page.total == 5
        assert page.pages == 3

    def test_filter_by_status_and_type(self, customer_id, rider_id):
        _create(customer_id, rider_id=rider_id)
        enroute_id = _create(customer_id, order_type="ENROUTE")

        repo = current_domain.repository_for(Order)
        assert [o.id for o in repo.listing(status="PENDING").orders] == [enroute_id]
        assert [o.id for o in repo.listing(order_type="ENROUTE").orders] == [enroute_id]

    def test_filter_by_rider(self, customer_id, rider_id, second_rider_id):
        _create(customer_id, rider_id=rider_id)
        theirs = _create(customer_id, rider_id=second_rider_id)

        page = current_domain.repository_for(Order).listing(rider_id=second_rider_id)
        assert [o.id for o in page.orders] == [theirs]

    def test_filter_by_payment_status(self, customer_id, rider_id):
        paid = _create(customer_id, rider_id=rider_id)
        _create(customer_id, rider_id=rider_id)
        current_domain.process(DeliverOrder(order_id=paid, payment_amount="50"), asynchronous=False)

        page = current_domain.repository_for(Order).listing(payment_status="PAID")
        assert [o.id for o in page.orders] == [paid]

    def test_date_window(self, customer_id, rider_id):
        _create(customer_id, rider_id=rider_id)
        repo = current_domain.repository_for(Order)

        tomorrow = datetime.now(UTC) + timedelta(days=1)
        assert repo.listing(start=tomorrow).total == 0
        assert repo.listing(end=tomorrow).total == 1

    def test_empty_page(self):
        page = current_domain.repository_for(Order).listing()
        assert page == OrderPage(orders=[], total=0, page=1, limit=50)
        assert page.pages == 0


class TestSettledBetween:
    def test_only_settled_orders(self, customer_id, walkin_customer_id, rider_id):
        delivered = _create(customer_id, rider_id=rider_id)
        _create(customer_id, rider_id=rider_id)
        walkin = _create("walkin", order_type="WALKIN")
        current_domain.process(DeliverOrder(order_id=delivered, payment_amount="50"), asynchronous=False)
        current_domain.process(CompleteWalkInOrder(order_id=walkin, payment_amount="50"), asynchronous=False)

        start = datetime.now(UTC) - timedelta(hours=1)
        end = datetime.now(UTC) + timedelta(hours=1)
        settled = current_domain.repository_for(Order).settled_between(start, end)

        assert {o.id for o in settled} == {delivered, walkin}
