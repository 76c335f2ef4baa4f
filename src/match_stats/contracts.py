"""Pydantic models for match-details API documents.

Field aliases follow the camelCase keys of the game API. ``to_*`` methods map
each model onto the frozen payloads in ``match_stats.common``.
"""

from __future__ import annotations

from datetime import UTC, datetime

from pydantic import AliasChoices, BaseModel, Field

from match_stats.common import (
    Damage,
    Economy,
    Kill,
    MatchDetails,
    MatchInfo,
    Player,
    PlayerStats,
    RoundResult,
    Team,
)
from match_stats.protocol import RoundOutcome
from match_stats.round_structure import round_structure_for_mode

WEAPON_DAMAGE_TYPE = "Weapon"


def _optional_str(value: str | None) -> str | None:
    if value is None:
        return None
    text = value.strip()
    return text or None


def _weapon_id(value: str | None) -> str | None:
    # economy and kill payloads disagree on the case of weapon UUIDs
    text = _optional_str(value)
    return None if text is None else text.lower()


class MatchInfoDTO(BaseModel):
    match_id: str = Field(..., alias="matchId")
    map_id: str = Field(..., alias="mapId")
    game_mode: str = Field("", alias="gameMode")
    game_start_millis: int = Field(..., alias="gameStartMillis")
    game_length_millis: int = Field(..., ge=0, alias="gameLengthMillis")
    queue_id: str | None = Field(None, validation_alias=AliasChoices("queueID", "queueId"))


class PlayerDTO(BaseModel):
    subject: str
    team_id: str = Field(..., alias="teamId")
    party_id: str = Field(..., alias="partyId")

    def to_player(self) -> Player:
        return Player(player_id=self.subject, team_id=self.team_id, party_id=self.party_id)


class TeamDTO(BaseModel):
    team_id: str = Field(..., alias="teamId")
    won: bool

    def to_team(self) -> Team:
        return Team(team_id=self.team_id, won=self.won)


class FinishingDamageDTO(BaseModel):
    """What dealt the final blow; ``damage_item`` is a weapon UUID only for weapon kills."""

    damage_type: str = Field("", alias="damageType")
    damage_item: str = Field("", alias="damageItem")


class KillDTO(BaseModel):
    killer: str
    victim: str
    round_time: int = Field(0, ge=0, validation_alias=AliasChoices("roundTime", "roundTimeMillis"))
    finishing_damage: FinishingDamageDTO | None = Field(None, alias="finishingDamage")

    def to_kill(self) -> Kill:
        finishing_weapon = None
        if self.finishing_damage is not None and self.finishing_damage.damage_type == WEAPON_DAMAGE_TYPE:
            finishing_weapon = _weapon_id(self.finishing_damage.damage_item)
        return Kill(
            killer=self.killer,
            victim=self.victim,
            round_time_millis=self.round_time,
            finishing_weapon=finishing_weapon,
        )


class DamageDTO(BaseModel):
    receiver: str
    headshots: int = Field(0, ge=0)
    bodyshots: int = Field(0, ge=0)
    legshots: int = Field(0, ge=0)

    def to_damage(self) -> Damage:
        return Damage(
            receiver=self.receiver,
            headshots=self.headshots,
            bodyshots=self.bodyshots,
            legshots=self.legshots,
        )


class EconomyDTO(BaseModel):
    loadout_value: int = Field(0, ge=0, alias="loadoutValue")
    weapon: str | None = None

    def to_economy(self) -> Economy:
        return Economy(loadout_value=self.loadout_value, weapon=_weapon_id(self.weapon))


class PlayerStatsDTO(BaseModel):
    subject: str
    economy: EconomyDTO | None = None
    damage: list[DamageDTO] | None = None
    kills: list[KillDTO] | None = None

    def to_player_stats(self) -> PlayerStats:
        economy = self.economy or EconomyDTO()
        return PlayerStats(
            subject=self.subject,
            economy=economy.to_economy(),
            damage=tuple(damage.to_damage() for damage in self.damage or []),
            kills=tuple(kill.to_kill() for kill in self.kills or []),
        )


class RoundResultDTO(BaseModel):
    round_num: int = Field(..., ge=0, alias="roundNum")
    round_result: str | None = Field(None, alias="roundResult")
    winning_team: str = Field(..., alias="winningTeam")
    player_stats: list[PlayerStatsDTO] | None = Field(None, alias="playerStats")

    def to_round_result(self) -> RoundResult:
        return RoundResult(
            round_number=self.round_num,
            outcome=RoundOutcome.parse(self.round_result),
            winning_team=self.winning_team,
            player_stats=tuple(stats.to_player_stats() for stats in self.player_stats or []),
        )


class MatchDetailsDTO(BaseModel):
    """One completed match as returned by the match-details endpoint."""

    match_info: MatchInfoDTO = Field(..., alias="matchInfo")
    players: list[PlayerDTO] | None = None
    teams: list[TeamDTO] | None = None
    round_results: list[RoundResultDTO] | None = Field(None, alias="roundResults")

    def to_match_details(self) -> MatchDetails:
        info = self.match_info
        mode_id = info.game_mode
        return MatchDetails(
            info=MatchInfo(
                match_id=info.match_id,
                map_id=info.map_id,
                mode_id=mode_id,
                game_start=_millis_to_datetime(info.game_start_millis),
                game_length=info.game_length_millis / 1000.0,
                queue_id=_optional_str(info.queue_id),
            ),
            players=tuple(player.to_player() for player in self.players or []),
            teams=tuple(team.to_team() for team in self.teams or []),
            round_results=tuple(round_result.to_round_result() for round_result in self.round_results or []),
            round_structure=round_structure_for_mode(mode_id),
        )


def _millis_to_datetime(millis: int) -> datetime:
    return datetime.fromtimestamp(millis / 1000.0, tz=UTC)


__all__ = [
    "DamageDTO",
    "EconomyDTO",
    "FinishingDamageDTO",
    "KillDTO",
    "MatchDetailsDTO",
    "MatchInfoDTO",
    "PlayerDTO",
    "PlayerStatsDTO",
    "RoundResultDTO",
    "TeamDTO",
]
