"""Unit tests for side-swap schedules."""

from __future__ import annotations

import pytest

from match_stats.common import RoundStructure
from match_stats.round_structure import (
    SPIKE_RUSH,
    STANDARD,
    StandardRoundStructure,
    round_structure_for_mode,
)


def test_standard_structure_swaps_after_twelve_rounds() -> None:
    assert [STANDARD.are_roles_swapped(number) for number in (0, 11, 12, 23)] == [False, False, True, True]


def test_overtime_alternates_every_round() -> None:
    assert [STANDARD.are_roles_swapped(number) for number in range(24, 28)] == [False, True, False, True]


def test_spike_rush_swaps_after_three_rounds() -> None:
    assert [SPIKE_RUSH.are_roles_swapped(number) for number in range(7)] == [
        False,
        False,
        False,
        True,
        True,
        True,
        False,
    ]


def test_structures_satisfy_protocol() -> None:
    assert isinstance(STANDARD, RoundStructure)


def test_invalid_structure_raises() -> None:
    with pytest.raises(ValueError, match=r"rounds_per_half must be > 0"):
        StandardRoundStructure(rounds_per_half=0, overtime_start=0)
    with pytest.raises(ValueError, match=r"overtime_start must be >= 2 \* rounds_per_half"):
        StandardRoundStructure(rounds_per_half=12, overtime_start=20)


def test_structure_lookup_by_game_mode() -> None:
    assert round_structure_for_mode("/Game/GameModes/Bomb/BombGameMode.BombGameMode_C") is STANDARD
    assert round_structure_for_mode("/Game/GameModes/QuickBomb/QuickBombGameMode.QuickBombGameMode_C") is SPIKE_RUSH
    assert round_structure_for_mode("/Game/GameModes/Deathmatch/DeathmatchGameMode.DeathmatchGameMode_C") is None
    assert round_structure_for_mode("") is None
    assert round_structure_for_mode(None) is None
