"""
Game configuration - balance constants and runtime settings.

Balance values are plain module constants so tests and content modules can
import them directly. Runtime settings (seed, logging) come from the
environment; the CLI loads a .env file before calling Settings.from_env().
"""

import logging
import os
from dataclasses import dataclass
from typing import Optional


# =============================================================================
# PLAYER
# =============================================================================

PLAYER_START_HEALTH = 10
PLAYER_START_MAX_HEALTH = 10
MAX_INVENTORY_SIZE = 6


# =============================================================================
# ENEMY AI WEIGHTS
# =============================================================================

# Base weight of each of the three attack directions
BASE_ATTACK_WEIGHT = 20
# Added to each attack weight, scaled by the player's missing health fraction
AGGRESSION_WEIGHT = 20
# Extra weight per attack once the player is low on health
LOW_HEALTH_BONUS = 10

# Base weight of each of the two dodge directions
BASE_DODGE_WEIGHT = 10
# Added to each dodge weight, scaled by the enemy's missing health fraction
CAUTION_WEIGHT = 30

# A combatant is low on health at or below 1/LOW_HEALTH_DIVISOR of its maximum
LOW_HEALTH_DIVISOR = 3

# Enemy lunges straight after this many moves without a straight attack
LUNGE_AFTER = 2


# =============================================================================
# BATTLE LOOP
# =============================================================================

# How many times the enemy policy is re-invoked after an invalid action
MAX_ACTION_RETRIES = 5


# =============================================================================
# RUNTIME SETTINGS
# =============================================================================

DEFAULT_SEED = "ESCAPE"
DEFAULT_LOG_LEVEL = "WARNING"


@dataclass
class Settings:
    """Runtime settings for a game session."""
    seed: str = DEFAULT_SEED
    log_level: str = DEFAULT_LOG_LEVEL
    log_file: Optional[str] = None

    @classmethod
    def from_env(cls) -> "Settings":
        """Build settings from ESCAPE_* environment variables."""
        return cls(
            seed=os.environ.get("ESCAPE_SEED", DEFAULT_SEED),
            log_level=os.environ.get("ESCAPE_LOG_LEVEL", DEFAULT_LOG_LEVEL).upper(),
            log_file=os.environ.get("ESCAPE_LOG_FILE") or None,
        )

    @property
    def numeric_log_level(self) -> int:
        """Log level as a logging constant, WARNING if unrecognised."""
        level = logging.getLevelName(self.log_level.upper())
        return level if isinstance(level, int) else logging.WARNING
