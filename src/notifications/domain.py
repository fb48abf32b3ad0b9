"""Notifications bounded context: tells riders and admins what happened to orders.

Consumes Ordering events (assignment, reassignment, delivery, cancellation)
and records one in-app notification per recipient, then pushes it through
the push channel. Keeps a small staff directory so admin notifications can
fan out to every active admin.
"""

import structlog
from protean.domain import Domain

notifications = Domain(name="notifications")

logger = structlog.get_logger(__name__)
