"""Faker-based payload generators for the Locust scenarios.

Payloads match the field names of the API's Pydantic request schemas and
stay inside the domain's validation rules (at least one bottle, a positive
unit price, non-negative payments).
"""

import random
import uuid

from faker import Faker

fake = Faker()

UNIT_PRICES = ["40.00", "50.00", "60.00", "75.50"]


def customer_data() -> dict:
    return {
        "name": fake.name(),
        "phone": fake.numerify("03##-#######"),
        "house_no": f"H-{random.randint(1, 999)}",
        "street_no": f"St {random.randint(1, 40)}",
        "area": fake.city_suffix(),
        "city": fake.city(),
    }


def walkin_customer_data() -> dict:
    return {"name": "Walk-in", "is_walkin": True}


def rider_data() -> dict:
    return {
        "name": fake.first_name(),
        "phone": fake.numerify("031#-#######"),
        "user_id": f"rider-lt-{uuid.uuid4().hex[:8]}",
    }


def admin_data() -> dict:
    return {"user_id": f"admin-lt-{uuid.uuid4().hex[:8]}", "name": fake.first_name(), "role": "ADMIN"}


def order_data(customer_id, rider_id=None, order_type="DELIVERY") -> dict:
    return {
        "customer_id": customer_id,
        "number_of_bottles": random.randint(1, 6),
        "unit_price": random.choice(UNIT_PRICES),
        "order_type": order_type,
        "rider_id": rider_id,
        "priority": random.choice(["NORMAL", "NORMAL", "HIGH", "URGENT"]),
    }


def payment_data(total_amount) -> dict:
    """Pay in full, partly or over the total, roughly as riders do."""
    total = float(total_amount)
    amount = random.choice([total, total, round(total * 0.5, 2), total + 20, 0])
    return {"payment_amount": f"{amount:.2f}", "payment_method": random.choice(["CASH", "CASH", "ONLINE"])}
