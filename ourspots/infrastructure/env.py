"""Environment variable helpers for numeric tunables."""
import os


def env_int(name: str, default: int) -> int:
    """Read an integer tunable; blank or invalid values fall back to *default*."""
    raw = os.environ.get(name, "").strip()
    if not raw:
        return default
    try:
        return int(raw)
    except ValueError:
        return default


def env_float(name: str, default: float) -> float:
    raw = os.environ.get(name, "").strip()
    if not raw:
        return default
    try:
        return float(raw)
    except ValueError:
        return default
