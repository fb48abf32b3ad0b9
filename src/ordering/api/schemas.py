"""Pydantic request/response schemas for the Ordering API.

These are external contracts (anti-corruption layer), separate from
internal Protean commands. Amount and range checks are left to the domain
so that they surface as 400 validation errors with field messages.
"""

from decimal import Decimal

from pydantic import BaseModel, Field


# ---------------------------------------------------------------------------
# Customer & Rider Request Schemas
# ---------------------------------------------------------------------------
class RegisterCustomerRequest(BaseModel):
    name: str = Field(..., min_length=1, max_length=255)
    phone: str | None = None
    house_no: str | None = None
    street_no: str | None = None
    area: str | None = None
    city: str | None = None
    is_walkin: bool = False

    model_config = {
        "json_schema_extra": {
            "examples": [
                {
                    "name": "Ali Khan",
                    "phone": "0300-1234567",
                    "house_no": "H-12",
                    "street_no": "St 4",
                    "area": "Gulberg",
                    "city": "Lahore",
                }
            ]
        }
    }


class RegisterRiderRequest(BaseModel):
    name: str = Field(..., min_length=1, max_length=255)
    phone: str | None = None
    user_id: str | None = None


# ---------------------------------------------------------------------------
# Order Request Schemas
# ---------------------------------------------------------------------------
class CreateOrderRequest(BaseModel):
    customer_id: str
    number_of_bottles: int
    unit_price: Decimal
    order_type: str = "DELIVERY"
    rider_id: str | None = None
    notes: str | None = None
    priority: str = "NORMAL"

    model_config = {
        "json_schema_extra": {
            "examples": [
                {
                    "customer_id": "walkin",
                    "number_of_bottles": 2,
                    "unit_price": "50.00",
                    "order_type": "WALKIN",
                }
            ]
        }
    }


class UpdateOrderStatusRequest(BaseModel):
    status: str = Field(..., examples=["ASSIGNED"])
    rider_id: str | None = None


class SettleOrderRequest(BaseModel):
    payment_amount: Decimal = Decimal("0")
    payment_method: str = "CASH"
    payment_notes: str | None = None


class CancelOrderRequest(BaseModel):
    cancelled_by: str = "ADMIN"


class AmendOrderRequest(BaseModel):
    number_of_bottles: int
    unit_price: Decimal
    notes: str | None = None
    priority: str | None = None
    rider_id: str | None = None


class ClearBillRequest(BaseModel):
    customer_id: str
    paid_amount: Decimal
    payment_method: str = "CASH"
    payment_notes: str | None = None
    priority: str = "NORMAL"


# ---------------------------------------------------------------------------
# Response Schemas
# ---------------------------------------------------------------------------
class StatusResponse(BaseModel):
    status: str = "ok"


class CustomerIdResponse(BaseModel):
    customer_id: str


class RiderIdResponse(BaseModel):
    rider_id: str


class OrderIdResponse(BaseModel):
    order_id: str


class LedgerEntryResponse(BaseModel):
    order_id: str
    kind: str
    amount: str
    sequence: int
    recorded_at: str | None = None


class CustomerResponse(BaseModel):
    customer_id: str
    name: str
    phone: str | None = None
    address: str
    current_balance: str
    is_active: bool
    is_walkin: bool
    entries: list[LedgerEntryResponse] = []


class OrderResponse(BaseModel):
    order_id: str
    customer_id: str
    customer_name: str
    delivery_address: str | None = None
    order_type: str
    status: str
    priority: str
    rider_id: str | None = None
    rider_name: str | None = None
    number_of_bottles: int
    unit_price: str
    current_order_amount: str
    customer_balance: str
    total_amount: str
    paid_amount: str
    payment_status: str
    receivable: str
    payable: str
    payment_method: str | None = None
    payment_notes: str | None = None
    notes: str | None = None
    delivered_at: str | None = None
    cancelled_at: str | None = None
    cancelled_by: str | None = None
    created_at: str | None = None


class OrderListResponse(BaseModel):
    orders: list[OrderResponse]
    total: int
    page: int
    limit: int
    pages: int
