"""Matching strategies with explicit score polarity."""

from .condition import MatchingCondition
from .strategies import (
    CenterDistance,
    Iou2D,
    Iou3D,
    MatchingMode,
    MatchingStrategy,
    PlaneDistance,
    Polarity,
    get_matching_strategy,
)

__all__ = [
    "CenterDistance",
    "Iou2D",
    "Iou3D",
    "MatchingCondition",
    "MatchingMode",
    "MatchingStrategy",
    "PlaneDistance",
    "Polarity",
    "get_matching_strategy",
]
