"""
Dedup log tracker - suppresses records the subscriber has already shown.

A polling subscriber re-reads the whole publisher history on every cycle,
so the same record arrives again and again. The tracker turns that
at-least-once feed into exactly-once output for display.
"""

import logging

from streamboard.models import Record

logger = logging.getLogger(__name__)


class DedupLogTracker:
    """
    Remembers every (player, score, playTime) tuple it has observed.

    Limitations:
    - The seen set lives in memory only; a restarted process shows the
      full history again.
    - The seen set is never evicted and grows with every unique record.

    Not thread-safe: use one instance per poll loop.
    """

    def __init__(self):
        self._seen: set[str] = set()

    @staticmethod
    def key_for(record: Record) -> str:
        """Composite key with numbers in canonical decimal form."""
        return f"{record.player}-{record.score}-{record.playTime}"

    def observe(self, record: Record) -> bool:
        """
        Record an observation.

        Returns:
            True the first time this exact tuple is seen, False afterwards
        """
        key = self.key_for(record)
        if key in self._seen:
            logger.debug(f"Duplicate record suppressed: {key}")
            return False
        self._seen.add(key)
        return True

    def __contains__(self, record: Record) -> bool:
        return self.key_for(record) in self._seen

    @property
    def size(self) -> int:
        """Number of distinct observations so far."""
        return len(self._seen)
