"""Side-swap schedules for game modes played in attack/defense halves."""

from __future__ import annotations

from dataclasses import dataclass


@dataclass(frozen=True)
class StandardRoundStructure:
    """Two halves of ``rounds_per_half`` rounds, then alternating overtime rounds.

    Round numbers are 0-based. Overtime starts unswapped and alternates every round.
    """

    rounds_per_half: int
    overtime_start: int

    def __post_init__(self) -> None:
        if self.rounds_per_half <= 0:
            raise ValueError("rounds_per_half must be > 0")
        if self.overtime_start < 2 * self.rounds_per_half:
            raise ValueError("overtime_start must be >= 2 * rounds_per_half")

    def are_roles_swapped(self, round_number: int) -> bool:
        if round_number < self.rounds_per_half:
            return False
        if round_number < self.overtime_start:
            return True
        return (round_number - self.overtime_start) % 2 == 1


STANDARD = StandardRoundStructure(rounds_per_half=12, overtime_start=24)
SPIKE_RUSH = StandardRoundStructure(rounds_per_half=3, overtime_start=6)
SWIFTPLAY = StandardRoundStructure(rounds_per_half=4, overtime_start=8)

# Keyed by the game-mode blueprint name, e.g. "/Game/GameModes/Bomb/BombGameMode.BombGameMode_C".
_STRUCTURES_BY_MODE = {
    "BombGameMode": STANDARD,
    "QuickBombGameMode": SPIKE_RUSH,
    "Swiftplay_EoRCredits_GameMode": SWIFTPLAY,
}


def round_structure_for_mode(mode_id: str | None) -> StandardRoundStructure | None:
    """Return the side-swap schedule of a game mode, or None for modes without sides."""
    if not mode_id:
        return None
    blueprint = mode_id.rsplit("/", 1)[-1].split(".", 1)[0]
    return _STRUCTURES_BY_MODE.get(blueprint)


__all__ = [
    "SPIKE_RUSH",
    "STANDARD",
    "SWIFTPLAY",
    "StandardRoundStructure",
    "round_structure_for_mode",
]
