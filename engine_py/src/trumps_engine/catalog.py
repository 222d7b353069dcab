"""
Catalog adapter: turns upstream card and booster rows into typed game data.

Upstream rows carry stats as numbers or numeric strings, either as flat
columns (``Runs_Scored``, ``Economy_Rate``...) or under a ``stats`` map.
Everything is normalized to floats here, once, so the engine only ever sees
fully typed ``Card`` objects.
"""

import logging
from pathlib import Path
from typing import Any, Dict, List, Optional, Sequence, Union

import orjson
from pydantic import AliasChoices, BaseModel, ConfigDict, Field, ValidationError, field_validator, model_validator

from .constants import (
    DEFAULT_ORANGE_CAP, DEFAULT_PURPLE_CAP, DEFAULT_TEAM_RANKINGS, STAT_KEYS,
    STORE_STAT_DEFAULTS, UNKNOWN_TEAM
)
from .errors import CatalogError
from .models import Card, GameData
from .scoring import parse_stat_value

logger = logging.getLogger(__name__)


class CatalogRecord(BaseModel):
    """One player row from the card store."""
    model_config = ConfigDict(extra='ignore', populate_by_name=True)

    id: Optional[str] = Field(default=None, validation_alias=AliasChoices('id', '_id'))
    name: str = Field(..., min_length=1, validation_alias=AliasChoices('name', 'Player_Name'))
    team: str = UNKNOWN_TEAM
    stats: Dict[str, float] = Field(default_factory=dict)

    @model_validator(mode='before')
    @classmethod
    def collect_flat_stats(cls, data: Any) -> Any:
        """Fold flat stat columns into the stats map."""
        if not isinstance(data, dict):
            return data
        raw_stats = data.get('stats')
        if raw_stats is not None and not isinstance(raw_stats, dict):
            return data
        stats = dict(raw_stats or {})
        for key in STAT_KEYS:
            if key in data and _missing(stats.get(key)):
                stats[key] = data[key]
        return {**data, 'stats': stats}

    @field_validator('id', mode='before')
    @classmethod
    def stringify_id(cls, v):
        if v is None or v == '':
            return None
        return str(v)

    @field_validator('team', mode='before')
    @classmethod
    def default_team(cls, v):
        return v or UNKNOWN_TEAM

    @field_validator('stats', mode='before')
    @classmethod
    def normalize_stats(cls, v):
        if not isinstance(v, dict):
            raise ValueError('stats must be a mapping of stat name to value')
        return {str(key): parse_stat_value(value) for key, value in v.items()}


class BoosterRow(BaseModel):
    """One row of the store's boosters table (cap holders and team ranks)."""
    model_config = ConfigDict(extra='ignore')

    Orange_Cap: Optional[str] = None
    Purple_Cap: Optional[str] = None
    RANK: Optional[int] = None
    team_ranking: Optional[str] = None


def _missing(value: Any) -> bool:
    return value is None or value == ''


def _with_store_defaults(row: Dict[str, Any]) -> Dict[str, Any]:
    """Fill missing flat stat columns with the card store's fallback values."""
    filled = dict(row)
    stats = row.get('stats')
    for key, default in STORE_STAT_DEFAULTS.items():
        if isinstance(stats, dict):
            if _missing(stats.get(key)) and _missing(row.get(key)):
                filled[key] = default
        elif _missing(row.get(key)):
            filled[key] = default
    return filled


def normalize_card(row: Dict[str, Any], index: int = 0, fill_defaults: bool = False) -> Card:
    """Normalize a single upstream row into a Card."""
    if not isinstance(row, dict):
        raise CatalogError(f"Catalog row {index} is not an object")
    if fill_defaults:
        row = _with_store_defaults(row)
    try:
        record = CatalogRecord.model_validate(row)
    except ValidationError as e:
        raise CatalogError(f"Catalog row {index} is invalid: {e}") from e

    stats = {key: record.stats.get(key, 0.0) for key in STAT_KEYS}
    # Keep any extra stats the store sends under the stats map
    for key, value in record.stats.items():
        stats.setdefault(key, value)

    return Card(
        id=record.id or f"card-{index}",
        name=record.name,
        team=record.team,
        stats=stats,
    )


def normalize_cards(rows: Sequence[Dict[str, Any]], fill_defaults: bool = False) -> List[Card]:
    """
    Normalize upstream rows into Cards, preserving order.

    Args:
        rows: Raw card rows
        fill_defaults: Use the card store's fallback values for missing stats
            instead of 0

    Raises:
        CatalogError: If a row is malformed or two rows share an id
    """
    cards = [normalize_card(row, index, fill_defaults) for index, row in enumerate(rows)]
    seen = set()
    for card in cards:
        if card.id in seen:
            raise CatalogError(f"Duplicate card id in catalog: {card.id}")
        seen.add(card.id)
    logger.debug(f"Normalized {len(cards)} catalog cards")
    return cards


def build_game_data(
    booster_rows: Optional[Sequence[Dict[str, Any]]] = None,
    ranking_rows: Optional[Sequence[Dict[str, Any]]] = None,
) -> GameData:
    """
    Build booster metadata from the store's rows.

    Empty inputs fall back to the store's defaults. The first row naming a cap
    holder wins; ranking rows need both a team and a non-zero rank.
    """
    try:
        boosters = [BoosterRow.model_validate(r) for r in (booster_rows or [])]
        rankings = [BoosterRow.model_validate(r) for r in (ranking_rows or [])]
    except ValidationError as e:
        raise CatalogError(f"Invalid booster data: {e}") from e

    if not boosters:
        boosters = [BoosterRow(Orange_Cap=DEFAULT_ORANGE_CAP, Purple_Cap=DEFAULT_PURPLE_CAP)]
    if not rankings:
        rankings = [BoosterRow.model_validate(r) for r in DEFAULT_TEAM_RANKINGS]

    orange_cap = next((b.Orange_Cap for b in boosters if b.Orange_Cap), None)
    purple_cap = next((b.Purple_Cap for b in boosters if b.Purple_Cap), None)
    team_rankings = {
        r.team_ranking: r.RANK
        for r in rankings
        if r.team_ranking and r.RANK
    }
    return GameData(
        orange_cap_player=orange_cap,
        purple_cap_player=purple_cap,
        team_rankings=team_rankings,
    )


def read_json(path: Union[str, Path]) -> Any:
    path = Path(path)
    try:
        return orjson.loads(path.read_bytes())
    except FileNotFoundError as e:
        raise CatalogError(f"Missing catalog file: {path}") from e
    except orjson.JSONDecodeError as e:
        raise CatalogError(f"Invalid JSON in {path}: {e}") from e


def load_catalog(path: Union[str, Path], fill_defaults: bool = False) -> List[Card]:
    """Load cards from a JSON file holding a list of rows or ``{"cards": [...]}``."""
    raw = read_json(path)
    if isinstance(raw, dict):
        raw = raw.get('cards')
    if not isinstance(raw, list):
        raise CatalogError(f"Catalog file {path} must hold a list of cards")
    return normalize_cards(raw, fill_defaults=fill_defaults)


def load_game_data(path: Union[str, Path]) -> GameData:
    """Load booster metadata from a JSON file with ``boosters`` and ``rankings`` lists."""
    raw = read_json(path)
    if not isinstance(raw, dict):
        raise CatalogError(f"Game data file {path} must hold an object")
    return build_game_data(raw.get('boosters'), raw.get('rankings'))
