"""Player rating lookup."""

from scrimmage.core.attributes.registry import (
    DEFAULT_RATING,
    POSITION_SLOT_NAMES,
    AttributeResolver,
    clamp_rating,
)

__all__ = [
    "AttributeResolver",
    "DEFAULT_RATING",
    "POSITION_SLOT_NAMES",
    "clamp_rating",
]
