"""Publisher loop: writes a random score for the signer every few seconds."""

import asyncio
import logging
import random
from typing import Optional

import httpx

from streamboard.config import Config
from streamboard.context import AppContext
from streamboard.errors import StreamboardError
from streamboard.logging_setup import configure_logging
from streamboard.services import RecordService

logger = logging.getLogger(__name__)

MAX_SCORE = 1000
MAX_PLAY_TIME = 600


async def publish_random_score(
    service: RecordService,
    count: int,
    rng: random.Random,
) -> str:
    """Publish one random record for the signing account as stream ``player-<count>``."""
    player = service.context.datasource.account_address
    score = rng.randrange(MAX_SCORE)
    play_time = rng.randrange(MAX_PLAY_TIME)
    return await service.publish(
        player=player,
        score=score,
        play_time=play_time,
        stream_key=f"player-{count}",
    )


async def run_publisher(
    context: AppContext,
    iterations: Optional[int] = None,
    rng: Optional[random.Random] = None,
) -> int:
    """
    Publish random scores until cancelled.

    Args:
        context: Bootstrapped application context with a signer
        iterations: Stop after this many cycles, None to run forever
        rng: Random source, a fresh one if None

    Returns:
        Number of records published
    """
    rng = rng or random.Random()
    service = RecordService(context)
    interval = context.config.publish_interval
    published = 0
    count = 0

    while iterations is None or count < iterations:
        count += 1
        try:
            await publish_random_score(service, count, rng)
            published += 1
        except (StreamboardError, httpx.HTTPError) as e:
            logger.error(f"Publish cycle {count} failed: {e}")
        if iterations is None or count < iterations:
            await asyncio.sleep(interval)

    return published


async def _main() -> None:
    config = Config.from_env()
    config.validate(require_signer=True)
    context = AppContext.create(config)
    try:
        await context.bootstrap()
        await run_publisher(context)
    finally:
        await context.close()


def main():
    """Run the publisher."""
    configure_logging()
    asyncio.run(_main())


if __name__ == "__main__":
    main()
