"""Tip split across the crew, by equal shares or a custom percentage table."""

from typing import Dict, Iterable, Mapping

from crewledger.core.exceptions import InvalidAmountError, InvalidTipSplitError
from crewledger.models.season import Season, TipSplitType


def equal_split(crew_ids: Iterable[str]) -> Dict[str, float]:
    crew_ids = list(crew_ids)
    if not crew_ids:
        return {}
    share = 100 / len(crew_ids)
    return {crew_id: share for crew_id in crew_ids}


def is_valid_split(percentages: Mapping[str, float]) -> bool:
    """Percentages must add up to 100 (within a cent of a percent)."""
    if any(pct < 0 for pct in percentages.values()):
        return False
    return abs(sum(percentages.values()) - 100) < 0.01


def split_amounts(total: float, percentages: Mapping[str, float]) -> Dict[str, float]:
    return {crew_id: total * (pct / 100) for crew_id, pct in percentages.items()}


def tip_shares(season: Season, crew_ids: Iterable[str], tip: float) -> Dict[str, float]:
    if tip is None or tip < 0:
        raise InvalidAmountError(f"Tip must be a non-negative amount (got {tip!r})")

    crew_ids = list(crew_ids)
    if season.tip_split_type == TipSplitType.CUSTOM and season.tip_split_config:
        config = {crew_id: season.tip_split_config.get(crew_id, 0.0) for crew_id in crew_ids}
        if not is_valid_split(config):
            raise InvalidTipSplitError(
                f"Custom tip split for season {season.id} does not add up to 100%"
            )
        return split_amounts(tip, config)

    return split_amounts(tip, equal_split(crew_ids))
