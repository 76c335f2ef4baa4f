"""Shared protocols and enums for match statistics."""

from __future__ import annotations

from enum import Enum
from typing import TYPE_CHECKING, Protocol, TypeVar, runtime_checkable

if TYPE_CHECKING:
    from match_stats.common import MatchDetails


class RoundOutcome(str, Enum):
    """How a round ended, as reported by the match-details payload."""

    ELIMINATION = "Eliminated"
    BOMB_DETONATED = "Bomb detonated"
    BOMB_DEFUSED = "Bomb defused"
    ROUND_TIMER_EXPIRED = "Round timer expired"
    SURRENDERED = "Surrendered"
    UNKNOWN = "Unknown"

    @classmethod
    def parse(cls, value: str | None) -> RoundOutcome:
        for outcome in cls:
            if outcome.value == value:
                return outcome
        return cls.UNKNOWN


class Outcome(str, Enum):
    """Outcome of a match or round from the target player's point of view."""

    WIN = "win"
    DRAW = "draw"
    LOSS = "loss"


class Side(str, Enum):
    ATTACKING = "attacking"
    DEFENDING = "defending"

    def flipped(self, condition: bool = True) -> Side:
        if not condition:
            return self
        return Side.DEFENDING if self is Side.ATTACKING else Side.ATTACKING

    @classmethod
    def for_team(cls, team_id: str) -> Side | None:
        """Starting side of a team; only the two standard teams have one."""
        return _STARTING_SIDES.get(team_id)


_STARTING_SIDES = {
    "Red": Side.ATTACKING,
    "Blue": Side.DEFENDING,
}


S = TypeVar("S", covariant=True)


@runtime_checkable
class MatchAggregator(Protocol[S]):
    """Base contract all statistics aggregators satisfy."""

    def process_match(self, match: MatchDetails) -> None: ...

    def processed_match_count(self) -> int: ...

    def summary(self) -> S: ...


__all__ = [
    "MatchAggregator",
    "Outcome",
    "RoundOutcome",
    "Side",
]
