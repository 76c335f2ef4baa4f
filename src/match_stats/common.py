"""Shared match-history payloads consumed by the statistics aggregators."""

from __future__ import annotations

from dataclasses import dataclass
from datetime import datetime
from typing import Protocol, runtime_checkable

from match_stats.protocol import RoundOutcome


@runtime_checkable
class RoundStructure(Protocol):
    """Side-swap schedule attached to matches that have attack/defense halves."""

    def are_roles_swapped(self, round_number: int) -> bool: ...


@dataclass(frozen=True)
class MatchInfo:
    """Match metadata needed by the aggregators."""

    match_id: str
    map_id: str
    mode_id: str
    game_start: datetime
    game_length: float
    queue_id: str | None = None


@dataclass(frozen=True)
class Player:
    player_id: str
    team_id: str
    party_id: str


@dataclass(frozen=True)
class Team:
    team_id: str
    won: bool


@dataclass(frozen=True)
class Damage:
    """Damage dealt by one player to one receiver during a round."""

    receiver: str
    headshots: int = 0
    bodyshots: int = 0
    legshots: int = 0


@dataclass(frozen=True)
class Kill:
    """One kill; ``finishing_weapon`` is None for ability and environment kills."""

    killer: str
    victim: str
    round_time_millis: int
    finishing_weapon: str | None = None


@dataclass(frozen=True)
class Economy:
    loadout_value: int
    weapon: str | None = None


@dataclass(frozen=True)
class PlayerStats:
    """Per-player round payload."""

    subject: str
    economy: Economy
    damage: tuple[Damage, ...] = ()
    kills: tuple[Kill, ...] = ()


@dataclass(frozen=True)
class RoundResult:
    round_number: int
    outcome: RoundOutcome
    winning_team: str
    player_stats: tuple[PlayerStats, ...] = ()

    def stats_for(self, player_id: str) -> PlayerStats | None:
        """Return the stats entry of one player, or None when they sat the round out."""
        matching = [stats for stats in self.player_stats if stats.subject == player_id]
        if len(matching) > 1:
            raise ValueError(
                f"round_number={self.round_number} has {len(matching)} stats entries "
                f"for player_id={player_id}"
            )
        return matching[0] if matching else None


@dataclass(frozen=True)
class MatchDetails:
    """Canonical completed-match payload used by the aggregators."""

    info: MatchInfo
    players: tuple[Player, ...]
    teams: tuple[Team, ...]
    round_results: tuple[RoundResult, ...] = ()
    round_structure: RoundStructure | None = None

    @property
    def match_id(self) -> str:
        return self.info.match_id

    def player(self, player_id: str) -> Player:
        """Return the roster entry of a player who must be part of this match."""
        for player in self.players:
            if player.player_id == player_id:
                return player
        raise ValueError(f"match_id={self.match_id} has no player with player_id={player_id}")

    def winning_team(self) -> Team | None:
        return next((team for team in self.teams if team.won), None)
