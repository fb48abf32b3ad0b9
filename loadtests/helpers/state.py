"""Per-user state for the Locust scenarios.

Each simulated user tracks the ids returned by creation endpoints so that
follow-up requests can reference them. Nothing is shared across users.
"""

from dataclasses import dataclass


@dataclass
class OrderState:
    customer_id: str | None = None
    rider_id: str | None = None
    second_rider_id: str | None = None
    order_id: str | None = None
    total_amount: str = "0.00"
    current_status: str | None = None
