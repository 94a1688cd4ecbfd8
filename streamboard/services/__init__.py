from .normalization import normalize_fields, normalize_many
from .dedup_tracker import DedupLogTracker
from .record_service import RecordService
from .leaderboard_service import LeaderboardService, compute_leaderboard

__all__ = [
    "normalize_fields",
    "normalize_many",
    "DedupLogTracker",
    "RecordService",
    "LeaderboardService",
    "compute_leaderboard",
]
