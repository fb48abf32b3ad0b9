"""Repository for the Order aggregate: listing and reporting queries."""

from dataclasses import dataclass

from ordering.domain import ordering
from ordering.order.order import Order, OrderStatus

DEFAULT_PAGE_SIZE = 50


@dataclass(frozen=True)
class OrderPage:
    orders: list
    total: int
    page: int
    limit: int

    @property
    def pages(self) -> int:
        return (self.total + self.limit - 1) // self.limit if self.limit else 0


@ordering.repository(part_of=Order)
class OrderRepository:
    def listing(
        self,
        status=None,
        rider_id=None,
        customer_id=None,
        payment_status=None,
        order_type=None,
        start=None,
        end=None,
        page: int = 1,
        limit: int = DEFAULT_PAGE_SIZE,
    ) -> OrderPage:
        """Orders matching every given filter, newest first.

        ``start``/``end`` bound ``created_at`` inclusively.
        """
        page = max(int(page or 1), 1)
        limit = max(int(limit or DEFAULT_PAGE_SIZE), 1)

        criteria = {}
        if status:
            criteria["status"] = status
        if rider_id:
            criteria["rider_id"] = str(rider_id)
        if customer_id:
            criteria["customer_id"] = str(customer_id)
        if payment_status:
            criteria["payment_status"] = payment_status
        if order_type:
            criteria["order_type"] = order_type
        if start:
            criteria["created_at__gte"] = start
        if end:
            criteria["created_at__lte"] = end

        query = self._dao.query.filter(**criteria) if criteria else self._dao.query
        results = query.order_by("-created_at").offset((page - 1) * limit).limit(limit).all()
        return OrderPage(orders=results.items, total=results.total, page=page, limit=limit)

    def settled_between(self, start, end, limit: int = 10_000) -> list[Order]:
        """DELIVERED and COMPLETED orders whose settlement time falls in [start, end]."""
        return (
            self._dao.query.filter(
                status__in=[OrderStatus.DELIVERED.value, OrderStatus.COMPLETED.value],
                delivered_at__gte=start,
                delivered_at__lte=end,
            )
            .order_by("delivered_at")
            .limit(limit)
            .all()
            .items
        )
