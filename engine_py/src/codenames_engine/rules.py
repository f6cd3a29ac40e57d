"""
Game rule configuration and validation.
"""

from typing import Literal

from pydantic import BaseModel, Field, field_validator


class RuleConfig(BaseModel):
    """Configuration for game rules and house-rule knobs."""

    hint_min: int = Field(
        default=0,
        ge=0,
        le=9,
        description="Smallest number a spymaster may attach to a hint"
    )
    hint_max: int = Field(
        default=9,
        ge=1,
        le=9,
        description="Largest number a spymaster may attach to a hint"
    )
    hint_history_limit: int = Field(
        default=3,
        ge=1,
        le=25,
        description="How many past hints are kept on the room (most recent first)"
    )
    starting_team: Literal["random", "red", "blue"] = Field(
        default="random",
        description="Which team moves first on a new board; it also receives 9 cards"
    )
    max_write_retries: int = Field(
        default=10,
        ge=1,
        le=100,
        description="Compare-and-swap attempts before a write gives up"
    )

    @field_validator('hint_max')
    @classmethod
    def validate_hint_max(cls, v, info):
        """Validate hint range is not empty."""
        hint_min = info.data.get('hint_min', 0)
        if v < hint_min:
            raise ValueError(f'hint_max ({v}) must be >= hint_min ({hint_min})')
        return v

    def validate_hint_number(self, number: int) -> bool:
        """Check if a hint number is inside the allowed range."""
        return self.hint_min <= number <= self.hint_max


# Default configuration instance
default_rules = RuleConfig()


def create_rules(**overrides) -> RuleConfig:
    """Create a RuleConfig with optional overrides."""
    config_dict = default_rules.model_dump()
    config_dict.update(overrides)
    return RuleConfig(**config_dict)
