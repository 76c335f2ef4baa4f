"""Playtime totals by queue and by premade teammate."""

from __future__ import annotations

from collections import defaultdict
from collections.abc import Iterable, Mapping
from dataclasses import dataclass
from types import MappingProxyType

from match_stats.common import MatchDetails


@dataclass(frozen=True)
class PlaytimeSummary:
    """Time played in seconds."""

    total: float
    by_queue: Mapping[str | None, float]
    by_premade: Mapping[str, float]


class PlaytimeAggregator:
    """Stateful match-by-match playtime accumulator for one player."""

    def __init__(self, player_id: str) -> None:
        self.player_id = player_id
        self._total = 0.0
        self._by_queue: defaultdict[str | None, float] = defaultdict(float)
        self._by_premade: defaultdict[str, float] = defaultdict(float)
        self._processed = 0

    def processed_match_count(self) -> int:
        return self._processed

    def process_match(self, match: MatchDetails) -> None:
        game_length = match.info.game_length
        user = match.player(self.player_id)

        self._total += game_length
        self._by_queue[match.info.queue_id] += game_length
        for player in match.players:
            if player.party_id != user.party_id or player.player_id == self.player_id:
                continue
            self._by_premade[player.player_id] += game_length
        self._processed += 1

    def summary(self) -> PlaytimeSummary:
        return PlaytimeSummary(
            total=self._total,
            by_queue=MappingProxyType(dict(self._by_queue)),
            by_premade=MappingProxyType(dict(self._by_premade)),
        )


def compute_playtime(player_id: str, matches: Iterable[MatchDetails]) -> PlaytimeSummary:
    aggregator = PlaytimeAggregator(player_id)
    for match in matches:
        aggregator.process_match(match)
    return aggregator.summary()


__all__ = ["PlaytimeAggregator", "PlaytimeSummary", "compute_playtime"]
