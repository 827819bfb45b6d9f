"""Protean Engine runner for the quality domain.

Starts the Engine that processes events asynchronously when the production
overlay is active:
- OutboxProcessor: polls the outbox table, publishes events to Redis Streams
- StreamSubscriptions: reads Redis Streams, invokes the SellerInbox projector

Usage:
    PROTEAN_ENV=production python src/server.py
    python src/server.py --test-mode   # drain pending work and exit
"""

import argparse
import asyncio

from protean.server.engine import Engine

from quality.utils.logging import get_logger

logger = get_logger(__name__)


def _get_domain():
    from quality.domain import quality

    quality.init()
    return quality


async def run(test_mode=False):
    domain = _get_domain()
    logger.info("Starting engine", domain=domain.name, test_mode=test_mode)
    await Engine(domain, test_mode=test_mode).run()


def main():
    parser = argparse.ArgumentParser(description="Marketgate Engine runner")
    parser.add_argument(
        "--test-mode",
        action="store_true",
        help="Process pending messages once and exit",
    )
    args = parser.parse_args()

    asyncio.run(run(test_mode=args.test_mode))


if __name__ == "__main__":
    main()
