"""Match-history statistics: playtime, hit distribution, and win rates."""

from match_stats.common import (
    Damage,
    Economy,
    Kill,
    MatchDetails,
    MatchInfo,
    Player,
    PlayerStats,
    RoundResult,
    RoundStructure,
    Team,
)
from match_stats.hit_distribution import (
    HitDistributionAggregator,
    HitDistributionSummary,
    MatchHitTally,
    compute_hit_distribution,
)
from match_stats.playtime import PlaytimeAggregator, PlaytimeSummary, compute_playtime
from match_stats.protocol import MatchAggregator, Outcome, RoundOutcome, Side
from match_stats.statistics import Statistics
from match_stats.tally import HitTally, WinTally
from match_stats.win_rate import DayBucketing, WinRateAggregator, WinRateSummary, compute_win_rate

__all__ = [
    "Damage",
    "DayBucketing",
    "Economy",
    "HitDistributionAggregator",
    "HitDistributionSummary",
    "HitTally",
    "Kill",
    "MatchAggregator",
    "MatchDetails",
    "MatchHitTally",
    "MatchInfo",
    "Outcome",
    "PlaytimeAggregator",
    "PlaytimeSummary",
    "Player",
    "PlayerStats",
    "RoundOutcome",
    "RoundResult",
    "RoundStructure",
    "Side",
    "Statistics",
    "Team",
    "WinRateAggregator",
    "WinRateSummary",
    "WinTally",
    "compute_hit_distribution",
    "compute_playtime",
    "compute_win_rate",
]
