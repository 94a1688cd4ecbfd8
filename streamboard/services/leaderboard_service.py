"""Leaderboard service for ranking players by their best score."""

import logging
from collections.abc import Iterable
from typing import TYPE_CHECKING, Optional

from streamboard.models import Record, LeaderboardEntry, LeaderboardResponse
from .record_service import RecordService

if TYPE_CHECKING:
    from streamboard.context import AppContext

logger = logging.getLogger(__name__)


def compute_leaderboard(records: Iterable[Record]) -> list[LeaderboardEntry]:
    """
    Rank players by their best score.

    Records without a player are skipped. For each player only the record
    with the highest score is kept; on equal scores the first one seen
    stays. Entries are sorted by score descending and players with the same
    best score keep the order in which they first appeared.

    Args:
        records: Decoded records in stream order

    Returns:
        List of LeaderboardEntry sorted by rank (1 = best)
    """
    best_scores: dict[str, Record] = {}

    for record in records:
        if not record.player:
            continue
        current = best_scores.get(record.player)
        if current is None or record.score > current.score:
            best_scores[record.player] = record

    # Integer keys; sorted() is stable so ties keep first-seen order
    ranked = sorted(best_scores.values(), key=lambda r: r.score, reverse=True)

    return [
        LeaderboardEntry(
            rank=i + 1,
            player=record.player,
            score=str(record.score),
            playTime=str(record.playTime),
        )
        for i, record in enumerate(ranked)
    ]


class LeaderboardService:
    """Service for building the leaderboard of a publisher's stream."""

    def __init__(self, context: "AppContext"):
        self.context = context
        self.records = RecordService(context)

    async def get_leaderboard(self, publisher: Optional[str] = None) -> LeaderboardResponse:
        """
        Fetch every record of a publisher and rank them.

        Args:
            publisher: Publisher address, defaults to the configured wallet

        Returns:
            LeaderboardResponse with player count and ranked entries
        """
        records = await self.records.fetch_records(publisher)
        leaderboard = compute_leaderboard(records)

        logger.info(
            f"Leaderboard built from {len(records)} records: "
            f"{len(leaderboard)} players"
        )

        return LeaderboardResponse(
            totalPlayers=len(leaderboard),
            leaderboard=leaderboard,
        )
