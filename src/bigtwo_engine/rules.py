"""
Game rule configuration and validation.
"""

from pydantic import BaseModel, Field, field_validator


class RuleConfig(BaseModel):
    """Configuration for table limits and end-of-round scoring."""

    min_players: int = Field(
        default=2,
        ge=2,
        le=4,
        description="Minimum number of players required to start"
    )
    max_players: int = Field(
        default=4,
        ge=2,
        le=8,
        description="Roster size at which a game in progress refuses new players"
    )
    win_bonus: int = Field(
        default=20,
        ge=0,
        description="Points awarded to the player who empties their hand"
    )
    penalty_double_threshold: int = Field(
        default=10,
        ge=1,
        description="Remaining card count from which the penalty is doubled"
    )
    untouched_hand_size: int = Field(
        default=13,
        ge=1,
        description="Remaining card count treated as a hand never played from"
    )
    untouched_hand_multiplier: int = Field(
        default=3,
        ge=1,
        description="Extra multiplier applied on top of doubling for an untouched hand"
    )

    @field_validator('max_players')
    @classmethod
    def validate_max_players(cls, v, info):
        """Validate maximum players isn't below minimum."""
        min_players = info.data.get('min_players', 2)
        if v < min_players:
            raise ValueError(f'max_players ({v}) must be >= min_players ({min_players})')
        return v

    def can_start(self, player_count: int) -> bool:
        """Check if a player count is enough to start a game."""
        return player_count >= self.min_players

    def validate_player_count(self, player_count: int) -> bool:
        """Check if a player count is valid for this configuration."""
        return self.min_players <= player_count <= self.max_players


# Default configuration instance
default_rules = RuleConfig()


def create_rules(**overrides) -> RuleConfig:
    """Create a RuleConfig with optional overrides."""
    config_dict = default_rules.model_dump()
    config_dict.update(overrides)
    return RuleConfig(**config_dict)
