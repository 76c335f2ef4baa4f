"""Top-level statistics bundle for one player's match history."""

from __future__ import annotations

from collections.abc import Mapping, Sequence
from dataclasses import dataclass
from types import MappingProxyType

from match_stats.common import MatchDetails
from match_stats.hit_distribution import HitDistributionSummary, compute_hit_distribution
from match_stats.playtime import PlaytimeSummary, compute_playtime
from match_stats.win_rate import DayBucketing, WinRateSummary, compute_win_rate


@dataclass(frozen=True)
class Statistics:
    """All derived statistics for one player over one fixed match list."""

    player_id: str
    matches: tuple[MatchDetails, ...]
    # for display only; the first game mode seen for a queue wins
    mode_by_queue: Mapping[str | None, str]
    playtime: PlaytimeSummary
    hit_distribution: HitDistributionSummary
    win_rate: WinRateSummary

    @classmethod
    def from_matches(
        cls,
        player_id: str,
        matches: Sequence[MatchDetails],
        *,
        day_bucketing: DayBucketing | None = None,
    ) -> Statistics:
        matches = tuple(matches)
        mode_by_queue: dict[str | None, str] = {}
        for match in matches:
            mode_by_queue.setdefault(match.info.queue_id, match.info.mode_id)

        return cls(
            player_id=player_id,
            matches=matches,
            mode_by_queue=MappingProxyType(mode_by_queue),
            playtime=compute_playtime(player_id, matches),
            hit_distribution=compute_hit_distribution(player_id, matches),
            win_rate=compute_win_rate(player_id, matches, day_bucketing=day_bucketing),
        )


__all__ = ["Statistics"]
