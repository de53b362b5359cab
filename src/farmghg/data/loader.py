"""Load a farm from its JSON description."""

import json
from pathlib import Path

from farmghg.core.config import settings
from farmghg.core.errors import FarmConfigError
from farmghg.data.models import Farm


def load_farm(path: Path | str, default_region: str | None = None) -> Farm:
    """
    Read a farm JSON file into a Farm.

    Args:
        path: Path to the farm file
        default_region: Region used when the file does not name one
            (defaults to settings.region)

    Raises:
        FarmConfigError: If the file is missing, not JSON, or has missing/invalid fields
    """
    path = Path(path)
    if not path.exists():
        raise FarmConfigError(f"Farm file not found: {path}")

    try:
        with open(path) as f:
            data = json.load(f)
    except json.JSONDecodeError as e:
        raise FarmConfigError(f"{path}: invalid JSON ({e})") from e

    return farm_from_dict(data, default_region)


def farm_from_dict(data: dict, default_region: str | None = None) -> Farm:
    """Build a Farm from already-parsed JSON, wrapping any field error in FarmConfigError."""
    try:
        return Farm.from_dict(data, default_region=default_region or settings.region)
    except KeyError as e:
        raise FarmConfigError(f"Missing required field {e}") from e
    except (TypeError, ValueError) as e:
        raise FarmConfigError(f"Invalid farm data: {e}") from e
