"""FastAPI routes for the Ordering domain: customers, riders and orders.

Thin adapters that translate HTTP requests into domain commands.
"""

from datetime import datetime

from fastapi import APIRouter, Query
from protean.utils.globals import current_domain

from ordering.api.schemas import (
    AmendOrderRequest,
    CancelOrderRequest,
    ClearBillRequest,
    CreateOrderRequest,
    CustomerIdResponse,
    CustomerResponse,
    LedgerEntryResponse,
    OrderIdResponse,
    OrderListResponse,
    OrderResponse,
    RegisterCustomerRequest,
    RegisterRiderRequest,
    RiderIdResponse,
    SettleOrderRequest,
    StatusResponse,
    UpdateOrderStatusRequest,
)
from ordering.customer.customer import Customer
from ordering.customer.registration import DeactivateCustomer, ReactivateCustomer, RegisterCustomer
from ordering.order.amendment import AmendOrder
from ordering.order.assignment import UpdateOrderStatus
from ordering.order.billing import ClearBill
from ordering.order.cancellation import CancelOrder
from ordering.order.creation import CreateOrder
from ordering.order.delivery import CompleteWalkInOrder, DeliverOrder
from ordering.order.order import Order
from ordering.order.repository import DEFAULT_PAGE_SIZE
from ordering.rider.management import RegisterRider


def _iso(value):
    return value.isoformat() if value else None


def _order_response(order) -> OrderResponse:
    return OrderResponse(
        order_id=str(order.id),
        customer_id=str(order.customer_id),
        customer_name=order.customer_name,
        delivery_address=order.delivery_address,
        order_type=order.order_type,
        status=order.status,
        priority=order.priority,
        rider_id=str(order.rider_id) if order.rider_id else None,
        rider_name=order.rider_name,
        number_of_bottles=order.number_of_bottles,
        unit_price=order.unit_price,
        current_order_amount=order.current_order_amount,
        customer_balance=order.customer_balance,
        total_amount=order.total_amount,
        paid_amount=order.paid_amount,
        payment_status=order.payment_status,
        receivable=order.receivable,
        payable=order.payable,
        payment_method=order.payment_method,
        payment_notes=order.payment_notes,
        notes=order.notes,
        delivered_at=_iso(order.delivered_at),
        cancelled_at=_iso(order.cancelled_at),
        cancelled_by=order.cancelled_by,
        created_at=_iso(order.created_at),
    )


# ---------------------------------------------------------------------------
# Customer Router
# ---------------------------------------------------------------------------
customer_router = APIRouter(prefix="/customers", tags=["customers"])


@customer_router.post("", status_code=201, response_model=CustomerIdResponse)
async def register_customer(body: RegisterCustomerRequest) -> CustomerIdResponse:
    command = RegisterCustomer(**body.model_dump())
    result = current_domain.process(command, asynchronous=False)
    return CustomerIdResponse(customer_id=result)


@customer_router.get("/{customer_id}", response_model=CustomerResponse)
async def get_customer(customer_id: str) -> CustomerResponse:
    """Customer account with its running balance and ledger."""
    customer = current_domain.repository_for(Customer).resolve(customer_id)
    return CustomerResponse(
        customer_id=str(customer.id),
        name=customer.name,
        phone=customer.phone,
        address=customer.formatted_address(),
        current_balance=customer.current_balance,
        is_active=customer.is_active,
        is_walkin=customer.is_walkin,
        entries=[
            LedgerEntryResponse(
                order_id=str(e.order_id),
                kind=e.kind,
                amount=e.amount,
                sequence=e.sequence,
                recorded_at=_iso(e.recorded_at),
            )
            for e in sorted(customer.entries, key=lambda e: e.sequence)
        ],
    )


@customer_router.put("/{customer_id}/deactivate", response_model=StatusResponse)
async def deactivate_customer(customer_id: str) -> StatusResponse:
    current_domain.process(DeactivateCustomer(customer_id=customer_id), asynchronous=False)
    return StatusResponse()


@customer_router.put("/{customer_id}/reactivate", response_model=StatusResponse)
async def reactivate_customer(customer_id: str) -> StatusResponse:
    current_domain.process(ReactivateCustomer(customer_id=customer_id), asynchronous=False)
    return StatusResponse()


# ---------------------------------------------------------------------------
# Rider Router
# ---------------------------------------------------------------------------
rider_router = APIRouter(prefix="/riders", tags=["riders"])


@rider_router.post("", status_code=201, response_model=RiderIdResponse)
async def register_rider(body: RegisterRiderRequest) -> RiderIdResponse:
    command = RegisterRider(name=body.name, phone=body.phone, user_id=body.user_id)
    result = current_domain.process(command, asynchronous=False)
    return RiderIdResponse(rider_id=result)


# ---------------------------------------------------------------------------
# Order Router
# ---------------------------------------------------------------------------
order_router = APIRouter(prefix="/orders", tags=["orders"])


@order_router.post("", status_code=201, response_model=OrderIdResponse)
async def create_order(body: CreateOrderRequest) -> OrderIdResponse:
    command = CreateOrder(
        customer_id=body.customer_id,
        order_type=body.order_type,
        number_of_bottles=body.number_of_bottles,
        unit_price=str(body.unit_price),
        rider_id=body.rider_id,
        notes=body.notes,
        priority=body.priority,
    )
    result = current_domain.process(command, asynchronous=False)
    return OrderIdResponse(order_id=result)


@order_router.post("/clear-bill", status_code=201, response_model=OrderIdResponse)
async def clear_bill(body: ClearBillRequest) -> OrderIdResponse:
    command = ClearBill(
        customer_id=body.customer_id,
        paid_amount=str(body.paid_amount),
        payment_method=body.payment_method,
        payment_notes=body.payment_notes,
        priority=body.priority,
    )
    result = current_domain.process(command, asynchronous=False)
    return OrderIdResponse(order_id=result)


@order_router.get("", response_model=OrderListResponse)
async def list_orders(
    status: str | None = None,
    rider_id: str | None = None,
    customer_id: str | None = None,
    payment_status: str | None = None,
    order_type: str | None = None,
    start: datetime | None = None,
    end: datetime | None = None,
    page: int = Query(1, ge=1),
    limit: int = Query(DEFAULT_PAGE_SIZE, ge=1, le=500),
) -> OrderListResponse:
    """Orders newest first, filtered and paginated."""
    result = current_domain.repository_for(Order).listing(
        status=status,
        rider_id=rider_id,
        customer_id=customer_id,
        payment_status=payment_status,
        order_type=order_type,
        start=start,
        end=end,
        page=page,
        limit=limit,
    )
    return OrderListResponse(
        orders=[_order_response(o) for o in result.orders],
        total=result.total,
        page=result.page,
        limit=result.limit,
        pages=result.pages,
    )


@order_router.get("/{order_id}", response_model=OrderResponse)
async def get_order(order_id: str) -> OrderResponse:
    return _order_response(current_domain.repository_for(Order).get(order_id))


@order_router.patch("/{order_id}/status", response_model=StatusResponse)
async def update_order_status(order_id: str, body: UpdateOrderStatusRequest) -> StatusResponse:
    command = UpdateOrderStatus(order_id=order_id, status=body.status, rider_id=body.rider_id)
    current_domain.process(command, asynchronous=False)
    return StatusResponse()


@order_router.post("/{order_id}/deliver", response_model=StatusResponse)
async def deliver_order(order_id: str, body: SettleOrderRequest) -> StatusResponse:
    command = DeliverOrder(
        order_id=order_id,
        payment_amount=str(body.payment_amount),
        payment_method=body.payment_method,
        payment_notes=body.payment_notes,
    )
    current_domain.process(command, asynchronous=False)
    return StatusResponse()


@order_router.post("/{order_id}/complete-walkin", response_model=StatusResponse)
async def complete_walkin_order(order_id: str, body: SettleOrderRequest) -> StatusResponse:
    command = CompleteWalkInOrder(
        order_id=order_id,
        payment_amount=str(body.payment_amount),
        payment_method=body.payment_method,
        payment_notes=body.payment_notes,
    )
    current_domain.process(command, asynchronous=False)
    return StatusResponse()


@order_router.post("/{order_id}/cancel", response_model=StatusResponse)
async def cancel_order(order_id: str, body: CancelOrderRequest | None = None) -> StatusResponse:
    cancelled_by = body.cancelled_by if body else "ADMIN"
    current_domain.process(CancelOrder(order_id=order_id, cancelled_by=cancelled_by), asynchronous=False)
    return StatusResponse()


@order_router.post("/{order_id}/amend", response_model=StatusResponse)
async def amend_order(order_id: str, body: AmendOrderRequest) -> StatusResponse:
    command = AmendOrder(
        order_id=order_id,
        number_of_bottles=body.number_of_bottles,
        unit_price=str(body.unit_price),
        notes=body.notes,
        priority=body.priority,
        rider_id=body.rider_id,
    )
    current_domain.process(command, asynchronous=False)
    return StatusResponse()
