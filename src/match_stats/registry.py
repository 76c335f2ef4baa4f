"""Registry of available statistics aggregators."""

from __future__ import annotations

from dataclasses import dataclass
from typing import Any, Callable

from match_stats.config import StatisticsConfig
from match_stats.hit_distribution import HitDistributionAggregator, HitDistributionSummary
from match_stats.playtime import PlaytimeAggregator, PlaytimeSummary
from match_stats.protocol import MatchAggregator
from match_stats.tally import WinTally
from match_stats.win_rate import WinRateAggregator, WinRateSummary

CreateAggregatorFn = Callable[[str, StatisticsConfig], MatchAggregator[Any]]
FormatSummaryFn = Callable[[Any], list[str]]


@dataclass(frozen=True)
class AggregatorDescriptor:
    """Everything required to run and report one aggregator."""

    name: str
    description: str
    create: CreateAggregatorFn
    format_lines: FormatSummaryFn


_REGISTRY: dict[str, AggregatorDescriptor] = {}


def register(descriptor: AggregatorDescriptor) -> None:
    """Register one aggregator descriptor."""
    key = descriptor.name.lower()
    if key in _REGISTRY:
        raise ValueError(f"Duplicate aggregator registration for name={key}")
    _REGISTRY[key] = descriptor


def get_all() -> list[AggregatorDescriptor]:
    """Return all registered descriptors in deterministic order."""
    return [_REGISTRY[key] for key in sorted(_REGISTRY)]


def get(name: str) -> AggregatorDescriptor:
    """Get one registered descriptor by name."""
    try:
        return _REGISTRY[name.lower()]
    except KeyError as exc:
        available = ", ".join(sorted(_REGISTRY)) or "none"
        raise KeyError(f"Unknown aggregator '{name}'. Available: {available}") from exc


def _format_duration(seconds: float) -> str:
    minutes, secs = divmod(int(round(seconds)), 60)
    hours, minutes = divmod(minutes, 60)
    return f"{hours}h{minutes:02d}m{secs:02d}s"


def _format_playtime(summary: PlaytimeSummary) -> list[str]:
    lines = [f"total={_format_duration(summary.total)}"]
    for queue_id, seconds in sorted(summary.by_queue.items(), key=lambda item: -item[1]):
        lines.append(f"queue={queue_id or 'custom'} time={_format_duration(seconds)}")
    for player_id, seconds in sorted(summary.by_premade.items(), key=lambda item: -item[1]):
        lines.append(f"premade={player_id} time={_format_duration(seconds)}")
    return lines


def _format_hit_distribution(summary: HitDistributionSummary) -> list[str]:
    overall = summary.overall
    lines = [
        f"overall headshots={overall.headshots} bodyshots={overall.bodyshots} "
        f"legshots={overall.legshots} headshot_rate={overall.headshot_rate:.1%}"
    ]
    for weapon, tally in sorted(summary.by_weapon.items(), key=lambda item: -item[1].total):
        lines.append(
            f"weapon={weapon} hits={tally.total} headshot_rate={tally.headshot_rate:.1%}"
        )
    lines.append(f"matches_with_damage={len(summary.by_match)}")
    return lines


def _format_win_rate(summary: WinRateSummary) -> list[str]:
    lines = []
    for day, tally in sorted(summary.by_day.items()):
        lines.append(f"day={day.isoformat()} {_format_wins(tally)}")
    for map_id, tally in sorted(summary.by_map.items()):
        lines.append(f"map={map_id} {_format_wins(tally)}")
    for side, by_map in sorted(summary.by_starting_side.items(), key=lambda item: item[0].value):
        for map_id, tally in sorted(by_map.items()):
            lines.append(f"starting_side={side.value} map={map_id} {_format_wins(tally)}")
    for map_id, by_side in sorted(summary.rounds_by_side.items()):
        for side, tally in sorted(by_side.items(), key=lambda item: item[0].value):
            lines.append(f"rounds map={map_id} side={side.value} {_format_wins(tally)}")
    for delta, tally in sorted(summary.rounds_by_loadout_delta.items()):
        lines.append(f"rounds loadout_delta={delta:+d} {_format_wins(tally)}")
    return lines


def _format_wins(tally: WinTally) -> str:
    return (
        f"wins={tally.wins} draws={tally.draws} losses={tally.losses} "
        f"win_rate={tally.win_rate:.1%}"
    )


register(
    AggregatorDescriptor(
        name="playtime",
        description="Total time played, per queue and per premade teammate.",
        create=lambda player_id, config: PlaytimeAggregator(player_id),
        format_lines=_format_playtime,
    )
)
register(
    AggregatorDescriptor(
        name="hit_distribution",
        description="Head/body/leg shot counts overall, per weapon, and per match.",
        create=lambda player_id, config: HitDistributionAggregator(player_id),
        format_lines=_format_hit_distribution,
    )
)
register(
    AggregatorDescriptor(
        name="win_rate",
        description="Wins/draws/losses by day, map, side, and round loadout delta.",
        create=lambda player_id, config: WinRateAggregator(
            player_id,
            day_bucketing=config.day_bucketing(),
        ),
        format_lines=_format_win_rate,
    )
)


__all__ = ["AggregatorDescriptor", "get", "get_all", "register"]
