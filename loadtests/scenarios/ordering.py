"""Ordering load test scenarios.

Stateful SequentialTaskSet journeys that walk orders through the ledger:
delivery with payment, walk-in and en-route sales, reassignment, amendment with
cancellation, and clearing a bill. Every journey registers its own
customer and riders so that balances never collide across users.
"""

from locust import HttpUser, SequentialTaskSet, between, task

from loadtests.data_generators import (
    admin_data,
    customer_data,
    order_data,
    payment_data,
    rider_data,
    walkin_customer_data,
)
from loadtests.helpers.response import failure
from loadtests.helpers.state import OrderState


class _OrderJourney(SequentialTaskSet):
    def on_start(self):
        self.state = OrderState()

    def _register_customer(self, payload=None):
        with self.client.post(
            "/customers", json=payload or customer_data(), catch_response=True, name="POST /customers"
        ) as resp:
            if resp.status_code == 201:
                self.state.customer_id = resp.json()["customer_id"]
            else:
                resp.failure(failure("Register customer", resp))
                self.interrupt()

    def _register_rider(self):
        with self.client.post("/riders", json=rider_data(), catch_response=True, name="POST /riders") as resp:
            if resp.status_code == 201:
                return resp.json()["rider_id"]
            resp.failure(failure("Register rider", resp))
            self.interrupt()

    def _create_order(self, payload):
        with self.client.post("/orders", json=payload, catch_response=True, name="POST /orders") as resp:
            if resp.status_code == 201:
                self.state.order_id = resp.json()["order_id"]
            else:
                resp.failure(failure("Create order", resp))
                self.interrupt()

    def _refresh_order(self):
        with self.client.get(
            f"/orders/{self.state.order_id}", catch_response=True, name="GET /orders/{id}"
        ) as resp:
            if resp.status_code == 200:
                body = resp.json()
                self.state.total_amount = body["current_order_amount"]
                self.state.current_status = body["status"]
            else:
                resp.failure(failure("Get order", resp))

    def _post(self, path, name, action, payload=None):
        with self.client.post(path, json=payload, catch_response=True, name=name) as resp:
            if resp.status_code not in (200, 201):
                resp.failure(failure(action, resp))
            return resp


class DeliveryJourney(_OrderJourney):
    """Register -> Create (assigned) -> In progress -> Deliver with payment -> Check balance."""

    @task
    def setup(self):
        self._register_customer()
        self.state.rider_id = self._register_rider()

    @task
    def create_order(self):
        self._create_order(order_data(self.state.customer_id, self.state.rider_id))
        self._refresh_order()

    @task
    def start_delivery(self):
        with self.client.patch(
            f"/orders/{self.state.order_id}/status",
            json={"status": "IN_PROGRESS"},
            catch_response=True,
            name="PATCH /orders/{id}/status",
        ) as resp:
            if resp.status_code != 200:
                resp.failure(failure("Start delivery", resp))

    @task
    def deliver(self):
        self._post(
            f"/orders/{self.state.order_id}/deliver",
            "POST /orders/{id}/deliver",
            "Deliver order",
            payment_data(self.state.total_amount),
        )

    @task
    def check_balance(self):
        self.client.get(f"/customers/{self.state.customer_id}", name="GET /customers/{id}")

    @task
    def done(self):
        self.interrupt()


class WalkInJourney(_OrderJourney):
    """Walk-in sale paid at the counter. The walk-in account may already exist."""

    @task
    def setup(self):
        with self.client.get("/customers/walkin", catch_response=True, name="GET /customers/walkin") as resp:
            if resp.status_code == 200:
                self.state.customer_id = resp.json()["customer_id"]
                return
            resp.success()
        self._register_customer(walkin_customer_data())

    @task
    def create_order(self):
        self._create_order(order_data("walkin", order_type="WALKIN"))
        self._refresh_order()

    @task
    def complete(self):
        self._post(
            f"/orders/{self.state.order_id}/complete-walkin",
            "POST /orders/{id}/complete-walkin",
            "Complete walk-in",
            payment_data(self.state.total_amount),
        )

    @task
    def done(self):
        self.interrupt()


class EnRouteJourney(_OrderJourney):
    """Sale from the van: Create (pending, no rider) -> Deliver with payment."""

    @task
    def setup(self):
        self._register_customer()

    @task
    def create_order(self):
        self._create_order(order_data(self.state.customer_id, order_type="ENROUTE"))
        self._refresh_order()

    @task
    def deliver(self):
        self._post(
            f"/orders/{self.state.order_id}/deliver",
            "POST /orders/{id}/deliver",
            "Deliver en-route sale",
            payment_data(self.state.total_amount),
        )

    @task
    def done(self):
        self.interrupt()


class ReassignAmendCancelJourney(_OrderJourney):
    """Delivery order -> Start -> Reassign -> Amend -> Cancel by rider."""

    @task
    def setup(self):
        self._register_customer()
        self.state.rider_id = self._register_rider()
        self.state.second_rider_id = self._register_rider()

    @task
    def create_order(self):
        self._create_order(order_data(self.state.customer_id, rider_id=self.state.rider_id))

    @task
    def reassign(self):
        for update in (
            {"status": "IN_PROGRESS"},
            {"status": "IN_PROGRESS", "rider_id": self.state.second_rider_id},
        ):
            with self.client.patch(
                f"/orders/{self.state.order_id}/status",
                json=update,
                catch_response=True,
                name="PATCH /orders/{id}/status",
            ) as resp:
                if resp.status_code != 200:
                    resp.failure(failure("Update order status", resp))

    @task
    def amend(self):
        payload = order_data(self.state.customer_id)
        self._post(
            f"/orders/{self.state.order_id}/amend",
            "POST /orders/{id}/amend",
            "Amend order",
            {"number_of_bottles": payload["number_of_bottles"], "unit_price": payload["unit_price"]},
        )

    @task
    def cancel(self):
        self._post(
            f"/orders/{self.state.order_id}/cancel",
            "POST /orders/{id}/cancel",
            "Cancel order",
            {"cancelled_by": "RIDER"},
        )

    @task
    def done(self):
        self.interrupt()


class ClearBillJourney(_OrderJourney):
    """Unpaid delivery -> Clear the outstanding bill."""

    @task
    def setup(self):
        self._register_customer()
        self.state.rider_id = self._register_rider()

    @task
    def unpaid_delivery(self):
        self._create_order(order_data(self.state.customer_id, self.state.rider_id))
        self._post(f"/orders/{self.state.order_id}/deliver", "POST /orders/{id}/deliver", "Deliver order", {})

    @task
    def clear_bill(self):
        with self.client.get(
            f"/customers/{self.state.customer_id}", catch_response=True, name="GET /customers/{id}"
        ) as resp:
            balance = resp.json()["current_balance"] if resp.status_code == 200 else "0"
        self._post(
            "/orders/clear-bill",
            "POST /orders/clear-bill",
            "Clear bill",
            {"customer_id": self.state.customer_id, "paid_amount": balance.lstrip("-")},
        )

    @task
    def done(self):
        self.interrupt()


class OrderingUser(HttpUser):
    """Order desk and rider traffic, weighted towards plain deliveries."""

    wait_time = between(0.5, 2)
    tasks = {
        DeliveryJourney: 6,
        WalkInJourney: 2,
        EnRouteJourney: 1,
        ReassignAmendCancelJourney: 1,
        ClearBillJourney: 1,
    }

    def on_start(self):
        # Admins receive delivery and rider-cancellation notifications
        self.client.post("/staff", json=admin_data(), name="POST /staff")
