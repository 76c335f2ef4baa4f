"""Win-rate breakdowns by day, map, side, and round loadout-value delta."""

from __future__ import annotations

from collections import defaultdict
from collections.abc import Iterable, Mapping
from dataclasses import dataclass
from datetime import date, datetime, tzinfo
from types import MappingProxyType

from match_stats.common import MatchDetails, RoundResult, RoundStructure
from match_stats.protocol import Outcome, RoundOutcome, Side
from match_stats.tally import WinTally


@dataclass(frozen=True)
class DayBucketing:
    """Which timezone's calendar decides the day a match was played on.

    ``timezone=None`` uses the local timezone of the machine running the aggregation.
    """

    timezone: tzinfo | None = None

    def day_of(self, moment: datetime) -> date:
        return moment.astimezone(self.timezone).date()


@dataclass(frozen=True)
class WinRateSummary:
    by_day: Mapping[date, WinTally]
    by_map: Mapping[str, WinTally]
    by_starting_side: Mapping[Side, Mapping[str, WinTally]]
    rounds_by_side: Mapping[str, Mapping[Side, WinTally]]
    rounds_by_loadout_delta: Mapping[int, WinTally]


def match_outcome(match: MatchDetails, team_id: str) -> Outcome:
    winner = match.winning_team()
    if winner is None:
        return Outcome.DRAW
    return Outcome.WIN if winner.team_id == team_id else Outcome.LOSS


def average_loadout_values(round_result: RoundResult, player_teams: Mapping[str, str]) -> dict[str, int]:
    """Per-team average loadout value of one round, truncated to whole credits."""
    values_by_team: defaultdict[str, list[int]] = defaultdict(list)
    for stats in round_result.player_stats:
        try:
            team_id = player_teams[stats.subject]
        except KeyError as exc:
            raise ValueError(
                f"round_number={round_result.round_number} has stats for "
                f"player_id={stats.subject} who is not on the roster"
            ) from exc
        values_by_team[team_id].append(stats.economy.loadout_value)
    return {team_id: sum(values) // len(values) for team_id, values in values_by_team.items()}


def loadout_delta(round_result: RoundResult, player_teams: Mapping[str, str], team_id: str) -> int:
    """Own team's average loadout value minus the single opposing team's."""
    averages = average_loadout_values(round_result, player_teams)
    if team_id not in averages:
        raise ValueError(
            f"round_number={round_result.round_number} has no stats for team_id={team_id}"
        )
    enemies = [value for other_team_id, value in averages.items() if other_team_id != team_id]
    if len(enemies) != 1:
        raise ValueError(
            f"round_number={round_result.round_number} has {len(enemies)} opposing teams, expected 1"
        )
    return averages[team_id] - enemies[0]


class WinRateAggregator:
    """Stateful match-by-match win-rate accumulator for one player."""

    def __init__(self, player_id: str, *, day_bucketing: DayBucketing | None = None) -> None:
        self.player_id = player_id
        self.day_bucketing = day_bucketing or DayBucketing()
        self._by_day: defaultdict[date, WinTally] = defaultdict(WinTally)
        self._by_map: defaultdict[str, WinTally] = defaultdict(WinTally)
        self._by_starting_side: defaultdict[Side, defaultdict[str, WinTally]] = defaultdict(
            lambda: defaultdict(WinTally)
        )
        self._rounds_by_side: defaultdict[str, defaultdict[Side, WinTally]] = defaultdict(
            lambda: defaultdict(WinTally)
        )
        self._rounds_by_loadout_delta: defaultdict[int, WinTally] = defaultdict(WinTally)
        self._processed = 0

    def processed_match_count(self) -> int:
        return self._processed

    def process_match(self, match: MatchDetails) -> None:
        team_id = match.player(self.player_id).team_id
        outcome = match_outcome(match, team_id)
        map_id = match.info.map_id

        day = self.day_bucketing.day_of(match.info.game_start)
        self._by_day[day] = self._by_day[day].with_outcome(outcome)
        self._by_map[map_id] = self._by_map[map_id].with_outcome(outcome)

        starting_side = Side.for_team(team_id)
        structure = match.round_structure
        if starting_side is not None and structure is not None:
            by_map = self._by_starting_side[starting_side]
            by_map[map_id] = by_map[map_id].with_outcome(outcome)
            self._process_rounds(match, structure, team_id=team_id, starting_side=starting_side)

        self._processed += 1

    def _process_rounds(
        self,
        match: MatchDetails,
        structure: RoundStructure,
        *,
        team_id: str,
        starting_side: Side,
    ) -> None:
        player_teams = {player.player_id: player.team_id for player in match.players}

        for round_result in match.round_results:
            if round_result.outcome is RoundOutcome.SURRENDERED:
                break
            side = starting_side.flipped(structure.are_roles_swapped(round_result.round_number))
            outcome = Outcome.WIN if round_result.winning_team == team_id else Outcome.LOSS
            rounds_by_side = self._rounds_by_side[match.info.map_id]
            rounds_by_side[side] = rounds_by_side[side].with_outcome(outcome)

            try:
                delta = loadout_delta(round_result, player_teams, team_id)
            except ValueError as exc:
                raise ValueError(f"match_id={match.match_id}: {exc}") from exc
            self._rounds_by_loadout_delta[delta] = self._rounds_by_loadout_delta[delta].with_outcome(
                outcome
            )

    def summary(self) -> WinRateSummary:
        return WinRateSummary(
            by_day=MappingProxyType(dict(self._by_day)),
            by_map=MappingProxyType(dict(self._by_map)),
            by_starting_side=MappingProxyType(
                {side: MappingProxyType(dict(by_map)) for side, by_map in self._by_starting_side.items()}
            ),
            rounds_by_side=MappingProxyType(
                {map_id: MappingProxyType(dict(by_side)) for map_id, by_side in self._rounds_by_side.items()}
            ),
            rounds_by_loadout_delta=MappingProxyType(dict(self._rounds_by_loadout_delta)),
        )


def compute_win_rate(
    player_id: str,
    matches: Iterable[MatchDetails],
    *,
    day_bucketing: DayBucketing | None = None,
) -> WinRateSummary:
    aggregator = WinRateAggregator(player_id, day_bucketing=day_bucketing)
    for match in matches:
        aggregator.process_match(match)
    return aggregator.summary()


__all__ = [
    "DayBucketing",
    "WinRateAggregator",
    "WinRateSummary",
    "average_loadout_values",
    "compute_win_rate",
    "loadout_delta",
    "match_outcome",
]
