"""Protean Engine runner for the ordering and notifications domains.

Starts Engine workers that process events asynchronously:
- OutboxProcessor: polls outbox table, publishes events to Redis Streams
- StreamSubscriptions: reads Redis Streams, invokes event handlers
  (Ordering events → rider/admin notifications → push dispatch)

Usage:
    python src/server.py                        # Run both domain engines
    python src/server.py --domain notifications # Run only notifications engine
"""

import argparse
import asyncio

from protean.server.engine import Engine

DOMAINS = ["ordering", "notifications"]


def _get_domain(name):
    """Import and initialize a domain by name."""
    if name == "ordering":
        from ordering.domain import ordering

        ordering.init()
        return ordering
    elif name == "notifications":
        from notifications.domain import notifications

        notifications.init()
        return notifications
    else:
        raise ValueError(f"Unknown domain: {name}")


async def run(domain_names):
    engines = [Engine(_get_domain(name)) for name in domain_names]
    await asyncio.gather(*(engine.run() for engine in engines))


def main():
    parser = argparse.ArgumentParser(description="Bottle delivery Engine runner")
    parser.add_argument(
        "--domain",
        choices=DOMAINS,
        help="Run a single domain engine (default: run all)",
    )
    args = parser.parse_args()

    domain_names = [args.domain] if args.domain else DOMAINS

    asyncio.run(run(domain_names))


if __name__ == "__main__":
    main()
