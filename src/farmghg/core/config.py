from functools import lru_cache
from pathlib import Path
from typing import Literal

from pydantic_settings import BaseSettings, SettingsConfigDict

# .env file sits at the project root (parent of src/)
# Only use if it exists (CI uses environment variables directly)
# Path: core/config.py -> farmghg -> src -> project root -> .env
_ENV_FILE = Path(__file__).parent.parent.parent.parent / ".env"
_ENV_FILE = _ENV_FILE if _ENV_FILE.exists() else None


@lru_cache
def get_cache_dir() -> Path:
    """Get the cache directory (.cache/ in workspace root).

    Looks for project root by finding .git or pyproject.toml,
    then returns .cache/ within that root.
    """
    current = Path(__file__).resolve()
    for parent in current.parents:
        if (parent / ".git").exists() or (parent / "pyproject.toml").exists():
            cache_dir = parent / ".cache"
            cache_dir.mkdir(exist_ok=True)
            return cache_dir
    # Fallback to current working directory
    cache_dir = Path.cwd() / ".cache"
    cache_dir.mkdir(exist_ok=True)
    return cache_dir


class Settings(BaseSettings):
    model_config = SettingsConfigDict(
        env_file=_ENV_FILE,
        env_file_encoding="utf-8",
        env_prefix="FARMGHG_",
        extra="ignore",
    )

    # Equation set used for housing/storage ammonia:
    # "v1" = constant per-head loss from the yearly TAN excretion rate
    # "v2" = temperature-adjusted TAN pool carried over from the previous day
    methodology_version: Literal["v1", "v2"] = "v2"

    # Region used for electricity and land-application factors when
    # the farm file does not name one
    region: str = "default"

    # Default location for climate fetches (Open-Meteo)
    latitude: float = 49.69
    longitude: float = -112.84

    # Display units for CLI output ("imperial" = lb/inches, "metric" = kg/mm)
    # Note: all calculations are metric internally
    display_units: Literal["imperial", "metric"] = "metric"


settings = Settings()
