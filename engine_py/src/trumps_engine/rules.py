"""
Game rule configuration and validation.
"""

from typing import Literal

from pydantic import BaseModel, Field, field_validator

from .constants import BOOSTER_POLICY_CONSUMED, BOOSTER_POLICY_REUSABLE, HAND_SIZE


class RuleConfig(BaseModel):
    """Configuration for game rules and settings."""

    hand_size: int = Field(
        default=HAND_SIZE,
        ge=1,
        le=20,
        description="Number of cards dealt to each player"
    )
    min_players: int = Field(
        default=2,
        ge=2,
        le=8,
        description="Minimum number of players in a game"
    )
    max_players: int = Field(
        default=6,
        ge=2,
        le=8,
        description="Maximum number of players in a game"
    )
    booster_policy: Literal["reusable", "consumed"] = Field(
        default=BOOSTER_POLICY_REUSABLE,
        description="Whether a booster stays available after use or is spent for the rest of the game"
    )
    enforce_turn_order: bool = Field(
        default=False,
        description="Reject plays from anyone but the player whose turn it is"
    )

    @field_validator('max_players')
    @classmethod
    def validate_max_players(cls, v, info):
        """Validate maximum players doesn't fall below minimum."""
        min_players = info.data.get('min_players', 2)
        if v < min_players:
            raise ValueError(f'max_players ({v}) must be >= min_players ({min_players})')
        return v

    @property
    def consumes_boosters(self) -> bool:
        return self.booster_policy == BOOSTER_POLICY_CONSUMED

    def validate_player_count(self, player_count: int) -> bool:
        """Check if a player count is valid for this configuration."""
        return self.min_players <= player_count <= self.max_players

    def cards_needed(self, player_count: int) -> int:
        """Number of catalog cards a full deal uses."""
        return self.hand_size * player_count


# Default configuration instance
default_rules = RuleConfig()


def create_rules(**overrides) -> RuleConfig:
    """Create a RuleConfig with optional overrides."""
    config_dict = default_rules.model_dump()
    config_dict.update(overrides)
    return RuleConfig(**config_dict)
