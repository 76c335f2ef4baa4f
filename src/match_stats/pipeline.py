"""Generic aggregation pipeline for registered statistics aggregators."""

from __future__ import annotations

import logging
from collections.abc import Callable, Mapping, Sequence
from dataclasses import dataclass
from datetime import UTC, datetime, timedelta
from types import MappingProxyType
from typing import Any

from match_stats.common import MatchDetails
from match_stats.config import StatisticsConfig
from match_stats.registry import AggregatorDescriptor

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class AggregationSummary:
    """Outcome of running a set of aggregators under one config."""

    config_name: str
    player_id: str
    processed_matches: int
    skipped_matches: int
    summaries: Mapping[str, Any]


def filter_by_lookback(
    matches: Sequence[MatchDetails],
    *,
    lookback_days: int,
    as_of_time: datetime | None = None,
) -> list[MatchDetails]:
    """Keep matches started within ``lookback_days`` of ``as_of_time``; 0 keeps everything."""
    if lookback_days <= 0:
        return list(matches)
    cutoff_time = (as_of_time or datetime.now(UTC)) - timedelta(days=lookback_days)
    kept: list[MatchDetails] = []
    for match in matches:
        if match.info.game_start >= cutoff_time:
            kept.append(match)
        else:
            logger.debug("match_id=%s outside lookback window, skipping", match.match_id)
    return kept


def run_aggregators(
    *,
    player_id: str,
    matches: Sequence[MatchDetails],
    config: StatisticsConfig,
    descriptors: Sequence[AggregatorDescriptor],
    as_of_time: datetime | None = None,
    echo: Callable[[str], None] | None = None,
) -> AggregationSummary:
    """Feed every match inside the config's lookback window to each aggregator."""
    if not descriptors:
        raise ValueError("at least one aggregator is required")

    selected = filter_by_lookback(
        matches,
        lookback_days=config.lookback_days,
        as_of_time=as_of_time,
    )
    skipped = len(matches) - len(selected)

    summaries: dict[str, Any] = {}
    for descriptor in descriptors:
        aggregator = descriptor.create(player_id, config)
        for match in selected:
            aggregator.process_match(match)
        summaries[descriptor.name] = aggregator.summary()

        logger.info(
            "aggregator=%s config=%s processed_matches=%d",
            descriptor.name,
            config.name,
            aggregator.processed_match_count(),
        )
        if echo is not None:
            echo(
                f"completed aggregator={descriptor.name} "
                f"config={config.file_path.name} "
                f"processed_matches={aggregator.processed_match_count()} "
                f"skipped_matches={skipped}"
            )

    return AggregationSummary(
        config_name=config.name,
        player_id=player_id,
        processed_matches=len(selected),
        skipped_matches=skipped,
        summaries=MappingProxyType(summaries),
    )


__all__ = ["AggregationSummary", "filter_by_lookback", "run_aggregators"]
