"""Enums shared across the domain."""
from enum import Enum


class LimitScope(str, Enum):
    LOCKOUT = "lockout"
    COOLDOWN = "cooldown"
    PER_KEY = "per_key"
    GLOBAL = "global"


class PlaceType(str, Enum):
    RESTAURANT = "RESTAURANT"
    KIDS_PLAYGROUND = "KIDS_PLAYGROUND"


class Rating(str, Enum):
    """Verdict on one item tried at a place."""
    GOOD = "GOOD"
    NORMAL = "NORMAL"
    BAD = "BAD"
