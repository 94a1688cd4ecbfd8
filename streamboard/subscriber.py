"""Subscriber loop: polls a publisher's stream and logs records not seen before."""

import asyncio
import logging
from typing import Optional

import httpx

from streamboard.config import Config
from streamboard.context import AppContext
from streamboard.errors import ConfigError, StreamboardError
from streamboard.logging_setup import configure_logging
from streamboard.models import Record
from streamboard.services import DedupLogTracker, RecordService

logger = logging.getLogger(__name__)


async def poll_once(
    service: RecordService,
    tracker: DedupLogTracker,
    publisher: Optional[str] = None,
) -> list[Record]:
    """
    Read the full stream once and return the records new to the tracker.

    A decode failure aborts the whole cycle, so the tracker never holds
    half of a fetch.
    """
    records = await service.fetch_records(publisher)
    fresh = [record for record in records if tracker.observe(record)]

    for record in fresh:
        logger.info(
            f"Player: {record.player} | Score: {record.score} | "
            f"PlayTime: {record.playTime}s"
        )
    return fresh


async def run_subscriber(
    context: AppContext,
    tracker: Optional[DedupLogTracker] = None,
    iterations: Optional[int] = None,
) -> DedupLogTracker:
    """
    Poll the configured publisher until cancelled.

    Args:
        context: Bootstrapped application context
        tracker: Tracker to continue with, a new one if None
        iterations: Stop after this many polls, None to run forever

    Returns:
        The tracker holding every record seen
    """
    if not context.config.publisher_wallet:
        raise ConfigError("PUBLISHER_WALLET is required for the subscriber")

    tracker = tracker or DedupLogTracker()
    service = RecordService(context)
    interval = context.config.poll_interval
    count = 0

    while iterations is None or count < iterations:
        count += 1
        try:
            await poll_once(service, tracker)
        except (StreamboardError, httpx.HTTPError) as e:
            logger.error(f"Poll {count} failed: {e}")
        if iterations is None or count < iterations:
            await asyncio.sleep(interval)

    return tracker


async def _main() -> None:
    config = Config.from_env()
    config.validate()
    context = AppContext.create(config)
    try:
        await context.bootstrap(register=False)
        await run_subscriber(context)
    finally:
        await context.close()


def main():
    """Run the subscriber."""
    configure_logging()
    asyncio.run(_main())


if __name__ == "__main__":
    main()
