"""Hit-location distribution overall, per weapon, and per match."""

from __future__ import annotations

from collections import defaultdict
from collections.abc import Iterable, Mapping
from dataclasses import dataclass
from datetime import datetime
from types import MappingProxyType

from match_stats.common import MatchDetails, RoundResult
from match_stats.tally import HitTally


@dataclass(frozen=True)
class MatchHitTally:
    game_start: datetime
    tally: HitTally


@dataclass(frozen=True)
class HitDistributionSummary:
    overall: HitTally
    by_weapon: Mapping[str, HitTally]
    by_match: tuple[MatchHitTally, ...]


def attribute_round_damage(round_result: RoundResult, player_id: str) -> dict[str, HitTally]:
    """Approximate which weapon dealt each of a player's damage records in one round.

    The payload only records the weapon a player bought into the round and the
    finishing weapon of each kill. We track the last known weapon while walking
    the round's kills in time order, and attribute all damage dealt to a victim
    to the weapon held when that victim died. Damage to victims who survived,
    or who died to someone else after we lost track, goes to the weapon held at
    the end of the round. Ability kills leave the last known weapon unchanged.

    Returns an empty mapping when the player has no starting weapon for the round.
    """
    stats = round_result.stats_for(player_id)
    if stats is None or stats.economy.weapon is None:
        return {}

    pending: dict[str, HitTally] = {}
    for damage in stats.damage:
        pending[damage.receiver] = pending.get(damage.receiver, HitTally.ZERO) + HitTally.from_damage(damage)

    attributed: defaultdict[str, HitTally] = defaultdict(HitTally)
    last_known_weapon = stats.economy.weapon
    kills_in_order = sorted(
        (kill for player_stats in round_result.player_stats for kill in player_stats.kills),
        key=lambda kill: kill.round_time_millis,
    )
    for kill in kills_in_order:
        if kill.killer == player_id and kill.finishing_weapon is not None:
            last_known_weapon = kill.finishing_weapon
        damage_tally = pending.pop(kill.victim, None)
        if damage_tally is not None:
            attributed[last_known_weapon] += damage_tally

    for damage_tally in pending.values():
        attributed[last_known_weapon] += damage_tally

    return dict(attributed)


class HitDistributionAggregator:
    """Stateful match-by-match hit-location accumulator for one player."""

    def __init__(self, player_id: str) -> None:
        self.player_id = player_id
        self._overall = HitTally.ZERO
        self._by_weapon: defaultdict[str, HitTally] = defaultdict(HitTally)
        self._by_match: list[MatchHitTally] = []
        self._processed = 0

    def processed_match_count(self) -> int:
        return self._processed

    def process_match(self, match: MatchDetails) -> None:
        match_tally = HitTally.ZERO
        for round_result in match.round_results:
            stats = round_result.stats_for(self.player_id)
            if stats is None:
                continue
            round_tally = sum((HitTally.from_damage(damage) for damage in stats.damage), HitTally.ZERO)
            match_tally += round_tally

            if stats.economy.weapon is None:
                continue
            self._overall += round_tally
            for weapon, tally in attribute_round_damage(round_result, self.player_id).items():
                self._by_weapon[weapon] += tally

        if match_tally != HitTally.ZERO:
            self._by_match.append(MatchHitTally(game_start=match.info.game_start, tally=match_tally))
        self._processed += 1

    def summary(self) -> HitDistributionSummary:
        # Ability-only damage leaves weapon buckets without any countable hits.
        by_weapon = {weapon: tally for weapon, tally in self._by_weapon.items() if tally != HitTally.ZERO}
        return HitDistributionSummary(
            overall=self._overall,
            by_weapon=MappingProxyType(by_weapon),
            by_match=tuple(self._by_match),
        )


def compute_hit_distribution(
    player_id: str,
    matches: Iterable[MatchDetails],
) -> HitDistributionSummary:
    aggregator = HitDistributionAggregator(player_id)
    for match in matches:
        aggregator.process_match(match)
    return aggregator.summary()


__all__ = [
    "HitDistributionAggregator",
    "HitDistributionSummary",
    "MatchHitTally",
    "attribute_round_damage",
    "compute_hit_distribution",
]
