"""Example service logging structured entries through stdlib logging.

Run with:
    python examples/basic_usage.py

Settings:
    LOGTREE_MAX_DEPTH         - deepest nesting level allowed (default 8)
    LOGTREE_CAUSE_IN_MESSAGE  - fold exceptions into the payload (default false)
"""

import logging
import time

from logtree import get_logger
from logtree.core.lifecycle import SERVICE_TYPE, BasicLifecycle

logging.basicConfig(level=logging.DEBUG, format="%(levelname)s %(name)s %(message)s")

logger = get_logger("examples.orders")


def place_order(order_id: int, items: list[str]) -> None:
    start = time.perf_counter()
    logger.info(
        "order placed",
        lambda e: (
            e.attach_metric("order_id", order_id)
            .attach_metric("items", items)
            .namespace("timing")
            .attach_metric("elapsed_seconds", time.perf_counter() - start)
        ),
    )


def refund_order(order_id: int) -> None:
    try:
        raise RuntimeError("payment provider unavailable")
    except RuntimeError as e:
        logger.error(
            "refund failed",
            lambda entry: entry.attach_metric("order_id", order_id).attach_cause(e),
        )


if __name__ == "__main__":
    logger.info(BasicLifecycle.starting.log_message(SERVICE_TYPE))
    place_order(42, ["book", "pen"])
    refund_order(42)
    # Skipped entirely: TRACE is below the configured DEBUG level
    logger.trace("never built", lambda e: e.attach_metric("expensive", sum(range(10**7))))
    logger.info(BasicLifecycle.stopped.log_message(SERVICE_TYPE))
