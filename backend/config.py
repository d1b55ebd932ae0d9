"""
Application configuration.

Settings are read from environment variables (optionally from a .env file).
The default plan is tuned to stay solvent through age 85.
"""

import os
from dataclasses import dataclass
from functools import lru_cache

from dotenv import load_dotenv

# Load environment variables
load_dotenv()

APP_NAME = "Retirement Corpus Planner API"
APP_VERSION = "1.0.0"

# Starting inputs of the planner: solvent through 85
DEFAULT_INPUTS = {
    "current_age": 34,
    "retirement_age": 40,
    "life_expectancy_age": 85,
    "current_savings": 13_000_000,
    "monthly_investment": 180_000,
    "annual_step_up_rate": 0.1,
    "post_retirement_monthly_expense": 90_000,
    "inflation_rate": 0.05,
    "pre_retirement_return_rate": 0.095,
    "post_retirement_return_rate": 0.085,
}


@dataclass(frozen=True)
class Settings:
    cors_origins: tuple[str, ...]
    log_level: str
    max_scenarios: int


def _split_origins(raw: str) -> tuple[str, ...]:
    return tuple(origin.strip() for origin in raw.split(",") if origin.strip())


@lru_cache(maxsize=1)
def get_settings() -> Settings:
    """Build settings from the environment, once per process."""
    return Settings(
        cors_origins=_split_origins(os.getenv("PLANNER_CORS_ORIGINS", "http://localhost:3000")),
        log_level=os.getenv("PLANNER_LOG_LEVEL", "INFO").upper(),
        max_scenarios=int(os.getenv("PLANNER_MAX_SCENARIOS", "10")),
    )
