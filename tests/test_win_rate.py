"""Unit tests for win-rate slicing by day, map, side, and loadout delta."""

from __future__ import annotations

from datetime import UTC, date, datetime
from zoneinfo import ZoneInfo

import pytest

from match_stats.common import (
    Economy,
    MatchDetails,
    MatchInfo,
    Player,
    PlayerStats,
    RoundResult,
    Team,
)
from match_stats.protocol import Outcome, RoundOutcome, Side
from match_stats.round_structure import STANDARD
from match_stats.tally import WinTally
from match_stats.win_rate import (
    DayBucketing,
    WinRateAggregator,
    compute_win_rate,
    loadout_delta,
)

USER = "user"
ASCENT = "/Game/Maps/Ascent/Ascent"
HAVEN = "/Game/Maps/Triad/Triad"
UTC_DAYS = DayBucketing(timezone=UTC)

PLAYERS = (
    Player(player_id=USER, team_id="Red", party_id="p1"),
    Player(player_id="mate", team_id="Red", party_id="p2"),
    Player(player_id="e1", team_id="Blue", party_id="p3"),
    Player(player_id="e2", team_id="Blue", party_id="p4"),
)

LOADOUTS = {USER: 3900, "mate": 3900, "e1": 2000, "e2": 2000}


def _round(
    number: int,
    *,
    winning_team: str = "Red",
    outcome: RoundOutcome = RoundOutcome.ELIMINATION,
    loadouts: dict[str, int] | None = None,
) -> RoundResult:
    return RoundResult(
        round_number=number,
        outcome=outcome,
        winning_team=winning_team,
        player_stats=tuple(
            PlayerStats(subject=subject, economy=Economy(loadout_value=value, weapon="vandal"))
            for subject, value in (loadouts or LOADOUTS).items()
        ),
    )


def _match(
    *rounds: RoundResult,
    match_id: str = "m1",
    map_id: str = ASCENT,
    winner: str | None = "Red",
    game_start: datetime = datetime(2026, 1, 1, 12, 0, 0, tzinfo=UTC),
    players: tuple[Player, ...] = PLAYERS,
    with_structure: bool = True,
) -> MatchDetails:
    team_ids = sorted({player.team_id for player in players})
    return MatchDetails(
        info=MatchInfo(
            match_id=match_id,
            map_id=map_id,
            mode_id="/Game/GameModes/Bomb/BombGameMode.BombGameMode_C",
            game_start=game_start,
            game_length=1800.0,
            queue_id="competitive",
        ),
        players=players,
        teams=tuple(Team(team_id=team_id, won=team_id == winner) for team_id in team_ids),
        round_results=rounds,
        round_structure=STANDARD if with_structure else None,
    )


def test_surrender_stops_round_slicing() -> None:
    summary = compute_win_rate(
        USER,
        [
            _match(
                _round(0, winning_team="Red"),
                _round(1, winning_team="Blue"),
                _round(2, winning_team="Red", outcome=RoundOutcome.SURRENDERED),
                _round(3, winning_team="Red"),
            )
        ],
        day_bucketing=UTC_DAYS,
    )

    assert dict(summary.by_map) == {ASCENT: WinTally(wins=1)}
    assert dict(summary.by_starting_side[Side.ATTACKING]) == {ASCENT: WinTally(wins=1)}
    assert dict(summary.rounds_by_side[ASCENT]) == {Side.ATTACKING: WinTally(wins=1, losses=1)}
    assert sum(summary.rounds_by_loadout_delta.values(), WinTally.ZERO).total == 2


def test_round_side_flips_after_the_half() -> None:
    summary = compute_win_rate(
        USER,
        [_match(_round(11, winning_team="Red"), _round(12, winning_team="Red"), _round(13, winning_team="Blue"))],
        day_bucketing=UTC_DAYS,
    )

    assert dict(summary.rounds_by_side[ASCENT]) == {
        Side.ATTACKING: WinTally(wins=1),
        Side.DEFENDING: WinTally(wins=1, losses=1),
    }


def test_blue_team_starts_defending() -> None:
    players = (
        Player(player_id=USER, team_id="Blue", party_id="p1"),
        Player(player_id="e1", team_id="Red", party_id="p2"),
    )
    summary = compute_win_rate(
        USER,
        [
            _match(
                _round(0, winning_team="Blue", loadouts={USER: 1000, "e1": 1000}),
                winner="Blue",
                players=players,
            )
        ],
        day_bucketing=UTC_DAYS,
    )

    assert {side: dict(by_map) for side, by_map in summary.by_starting_side.items()} == {
        Side.DEFENDING: {ASCENT: WinTally(wins=1)}
    }
    assert dict(summary.rounds_by_side[ASCENT]) == {Side.DEFENDING: WinTally(wins=1)}


def test_match_without_round_structure_only_counts_match_level() -> None:
    summary = compute_win_rate(
        USER,
        [_match(_round(0), _round(1), winner="Blue", with_structure=False)],
        day_bucketing=UTC_DAYS,
    )

    assert dict(summary.by_map) == {ASCENT: WinTally(losses=1)}
    assert sum(tally.total for tally in summary.by_day.values()) == 1
    assert dict(summary.by_starting_side) == {}
    assert dict(summary.rounds_by_side) == {}
    assert dict(summary.rounds_by_loadout_delta) == {}


def test_unmapped_team_skips_side_slices() -> None:
    players = (
        Player(player_id=USER, team_id=USER, party_id="p1"),
        Player(player_id="e1", team_id="e1", party_id="p2"),
    )
    summary = compute_win_rate(
        USER,
        [_match(_round(0, winning_team=USER, loadouts={USER: 0, "e1": 0}), winner=USER, players=players)],
        day_bucketing=UTC_DAYS,
    )

    assert dict(summary.by_map) == {ASCENT: WinTally(wins=1)}
    assert dict(summary.by_starting_side) == {}
    assert dict(summary.rounds_by_loadout_delta) == {}


def test_no_winning_team_is_a_draw() -> None:
    summary = compute_win_rate(USER, [_match(_round(0), winner=None)], day_bucketing=UTC_DAYS)
    assert dict(summary.by_map) == {ASCENT: WinTally(draws=1)}


def test_per_day_totals_equal_match_count() -> None:
    matches = [
        _match(match_id="m1", winner="Red", game_start=datetime(2026, 1, 1, 10, 0, tzinfo=UTC)),
        _match(match_id="m2", winner="Blue", game_start=datetime(2026, 1, 1, 23, 0, tzinfo=UTC)),
        _match(match_id="m3", winner=None, map_id=HAVEN, game_start=datetime(2026, 1, 2, 1, 0, tzinfo=UTC)),
    ]

    summary = compute_win_rate(USER, matches, day_bucketing=UTC_DAYS)

    assert dict(summary.by_day) == {
        date(2026, 1, 1): WinTally(wins=1, losses=1),
        date(2026, 1, 2): WinTally(draws=1),
    }
    assert sum(tally.total for tally in summary.by_day.values()) == len(matches)
    assert dict(summary.by_map) == {ASCENT: WinTally(wins=1, losses=1), HAVEN: WinTally(draws=1)}


def test_day_bucketing_follows_configured_timezone() -> None:
    match = _match(game_start=datetime(2026, 1, 1, 3, 0, tzinfo=UTC))

    utc_summary = compute_win_rate(USER, [match], day_bucketing=UTC_DAYS)
    la_summary = compute_win_rate(
        USER,
        [match],
        day_bucketing=DayBucketing(timezone=ZoneInfo("America/Los_Angeles")),
    )

    assert list(utc_summary.by_day) == [date(2026, 1, 1)]
    assert list(la_summary.by_day) == [date(2025, 12, 31)]


def test_loadout_delta_uses_integer_average_per_team() -> None:
    players = PLAYERS + (Player(player_id="e3", team_id="Blue", party_id="p5"),)
    round_result = _round(0, loadouts={USER: 3900, "mate": 2900, "e1": 4000, "e2": 4000, "e3": 3999})
    player_teams = {player.player_id: player.team_id for player in players}

    # red averages 3400; blue averages 11999 // 3 == 3999, not 4000
    assert loadout_delta(round_result, player_teams, "Red") == -599

    summary = compute_win_rate(
        USER,
        [_match(round_result, players=players)],
        day_bucketing=UTC_DAYS,
    )
    assert dict(summary.rounds_by_loadout_delta) == {-599: WinTally(wins=1)}


def test_loadout_delta_buckets_round_outcomes() -> None:
    summary = compute_win_rate(
        USER,
        [
            _match(
                _round(0, winning_team="Red", loadouts={USER: 800, "mate": 800, "e1": 800, "e2": 800}),
                _round(1, winning_team="Blue", loadouts={USER: 3900, "mate": 3900, "e1": 2000, "e2": 2000}),
                _round(2, winning_team="Red", loadouts={USER: 4000, "mate": 3800, "e1": 2000, "e2": 2000}),
            )
        ],
        day_bucketing=UTC_DAYS,
    )

    assert dict(summary.rounds_by_loadout_delta) == {
        0: WinTally(wins=1),
        1900: WinTally(wins=1, losses=1),
    }


def test_round_without_opposing_team_fails_fast() -> None:
    aggregator = WinRateAggregator(USER, day_bucketing=UTC_DAYS)
    with pytest.raises(ValueError, match=r"match_id=m1: round_number=0 has 0 opposing teams"):
        aggregator.process_match(_match(_round(0, loadouts={USER: 1000, "mate": 1000})))


def test_missing_player_fails_fast() -> None:
    aggregator = WinRateAggregator("nobody", day_bucketing=UTC_DAYS)
    with pytest.raises(ValueError, match=r"has no player with player_id=nobody"):
        aggregator.process_match(_match(_round(0)))


def test_side_flip_helper() -> None:
    assert Side.ATTACKING.flipped() is Side.DEFENDING
    assert Side.DEFENDING.flipped(True) is Side.ATTACKING
    assert Side.ATTACKING.flipped(False) is Side.ATTACKING
    assert Side.for_team("Red") is Side.ATTACKING
    assert Side.for_team("Blue") is Side.DEFENDING
    assert Side.for_team("Neutral") is None
    assert Outcome.WIN.value == "win"
