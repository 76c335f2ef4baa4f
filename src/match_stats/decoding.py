"""Decode match-details JSON documents into the canonical match payloads."""

from __future__ import annotations

import json
import logging
from pathlib import Path
from typing import Any

from pydantic import ValidationError

from match_stats.common import MatchDetails
from match_stats.contracts import MatchDetailsDTO

logger = logging.getLogger(__name__)


def decode_match_details(raw: dict[str, Any]) -> MatchDetails:
    """Convert one camelCase match-details document into a MatchDetails payload."""
    try:
        dto = MatchDetailsDTO.model_validate(raw)
    except ValidationError as exc:
        raise ValueError(f"Malformed match-details document: {exc}") from exc
    return dto.to_match_details()


def load_matches(matches_dir: Path) -> list[MatchDetails]:
    """Load every ``*.json`` match-details file in a directory, oldest match first."""
    if not matches_dir.exists():
        raise FileNotFoundError(f"Matches directory not found: {matches_dir}")
    if not matches_dir.is_dir():
        raise NotADirectoryError(f"Matches path is not a directory: {matches_dir}")

    matches: list[MatchDetails] = []
    for file_path in sorted(matches_dir.glob("*.json")):
        try:
            with file_path.open("r", encoding="utf-8") as file:
                raw = json.load(file)
        except (json.JSONDecodeError, UnicodeDecodeError) as exc:
            raise ValueError(f"{file_path}: invalid JSON ({exc})") from exc
        try:
            matches.append(decode_match_details(raw))
        except ValueError as exc:
            raise ValueError(f"{file_path}: {exc}") from exc
        logger.debug("decoded match file=%s", file_path.name)

    matches.sort(key=lambda match: match.info.game_start)
    return matches


__all__ = ["decode_match_details", "load_matches"]
