"""Ordering bounded context: customer ledger accounts, riders and orders.

Handles the order lifecycle for bottle deliveries, walk-in sales and bill
clearing, keeping every customer's running balance consistent with the
orders applied to it. Orders and the customer ledger they touch are always
persisted together in one unit of work.
"""

from protean.domain import Domain

from ordering.utils.logging import configure_logging, get_logger

configure_logging()

logger = get_logger(__name__)

ordering = Domain(name="ordering")
