"""Configuration management for the recipe recommendation engine.

Loads environment variables from system environment and .env file.
Priority order: system environment > .env file > hardcoded defaults
"""

import os

from dotenv import load_dotenv


# Load .env file (if exists, silently continues if missing)
load_dotenv()


class Config:
    """Engine configuration loaded from environment variables."""

    def __init__(self) -> None:
        """Initialize configuration from environment variables."""
        # Number of recommendations returned when the caller does not ask for a count. Default: 5
        self.DEFAULT_RECIPE_COUNT: int = int(os.getenv("DEFAULT_RECIPE_COUNT", "5"))
        # Hard cap on augmenting paths per max-flow run. Reaching it stops early, it is not an error.
        self.MAX_AUGMENTING_PATHS: int = int(os.getenv("MAX_AUGMENTING_PATHS", "100"))
        # Items expiring within this many days get the expiry boost and count as "expiring". Default: 7
        self.EXPIRY_WINDOW_DAYS: int = int(os.getenv("EXPIRY_WINDOW_DAYS", "7"))
        # Sentinel days-until-expiry for items without a tracked expiry date (dry goods). Default: 999
        self.NO_EXPIRY_DAYS: int = int(os.getenv("NO_EXPIRY_DAYS", "999"))
        # Size of the per-process memo of pairwise ingredient matches. 0 disables caching.
        self.MATCH_CACHE_SIZE: int = int(os.getenv("MATCH_CACHE_SIZE", "4096"))
        # Largest recipe corpus scored per request; extra recipes are dropped with a warning.
        self.MAX_RECIPE_CORPUS: int = int(os.getenv("MAX_RECIPE_CORPUS", "1000"))

    def validate(self) -> None:
        """Validate configuration values.

        Raises:
            ValueError: If a value is out of its allowed range.
        """
        if self.DEFAULT_RECIPE_COUNT < 1:
            raise ValueError(
                f"DEFAULT_RECIPE_COUNT must be at least 1, got: {self.DEFAULT_RECIPE_COUNT}"
            )
        if self.MAX_AUGMENTING_PATHS < 1:
            raise ValueError(
                f"MAX_AUGMENTING_PATHS must be at least 1, got: {self.MAX_AUGMENTING_PATHS}"
            )
        if self.EXPIRY_WINDOW_DAYS < 0:
            raise ValueError(
                f"EXPIRY_WINDOW_DAYS must be 0 or greater, got: {self.EXPIRY_WINDOW_DAYS}"
            )
        if self.NO_EXPIRY_DAYS <= self.EXPIRY_WINDOW_DAYS:
            raise ValueError(
                f"NO_EXPIRY_DAYS must be greater than EXPIRY_WINDOW_DAYS, got: {self.NO_EXPIRY_DAYS}"
            )
        if self.MATCH_CACHE_SIZE < 0:
            raise ValueError(
                f"MATCH_CACHE_SIZE must be 0 or greater, got: {self.MATCH_CACHE_SIZE}"
            )
        if self.MAX_RECIPE_CORPUS < 1:
            raise ValueError(
                f"MAX_RECIPE_CORPUS must be at least 1, got: {self.MAX_RECIPE_CORPUS}"
            )


# Create module-level config instance and validate immediately
config = Config()
config.validate()
