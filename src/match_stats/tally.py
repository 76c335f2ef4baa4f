"""Additive tallies shared by the hit-distribution and win-rate aggregators."""

from __future__ import annotations

from dataclasses import dataclass, fields
from typing import ClassVar, Self

from match_stats.common import Damage
from match_stats.protocol import Outcome


class _Tally:
    """Mixin for frozen count dataclasses: non-negative fields, derived total, ``+``."""

    def __post_init__(self) -> None:
        for field in fields(self):
            value = getattr(self, field.name)
            if value < 0:
                raise ValueError(f"{type(self).__name__}.{field.name} must be >= 0, got {value}")

    @property
    def total(self) -> int:
        return sum(getattr(self, field.name) for field in fields(self))

    def __add__(self, other: object) -> Self:
        if not isinstance(other, type(self)):
            return NotImplemented
        return type(self)(
            **{
                field.name: getattr(self, field.name) + getattr(other, field.name)
                for field in fields(self)
            }
        )


@dataclass(frozen=True)
class HitTally(_Tally):
    """Shot counts by hit location."""

    ZERO: ClassVar[HitTally]

    headshots: int = 0
    bodyshots: int = 0
    legshots: int = 0

    @classmethod
    def from_damage(cls, damage: Damage) -> HitTally:
        return cls(
            headshots=damage.headshots,
            bodyshots=damage.bodyshots,
            legshots=damage.legshots,
        )

    @property
    def headshot_rate(self) -> float:
        total = self.total
        return self.headshots / total if total else 0.0


@dataclass(frozen=True)
class WinTally(_Tally):
    """Win/draw/loss counts."""

    ZERO: ClassVar[WinTally]

    wins: int = 0
    draws: int = 0
    losses: int = 0

    def with_outcome(self, outcome: Outcome) -> WinTally:
        if outcome is Outcome.WIN:
            return WinTally(wins=self.wins + 1, draws=self.draws, losses=self.losses)
        if outcome is Outcome.DRAW:
            return WinTally(wins=self.wins, draws=self.draws + 1, losses=self.losses)
        return WinTally(wins=self.wins, draws=self.draws, losses=self.losses + 1)

    @property
    def win_rate(self) -> float:
        total = self.total
        return self.wins / total if total else 0.0


HitTally.ZERO = HitTally()
WinTally.ZERO = WinTally()


__all__ = ["HitTally", "WinTally"]
