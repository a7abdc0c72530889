"""Per-frame match results and scene aggregation."""

from .aggregation import SceneResultAggregator
from .frame_result import PerceptionFrameResult
from .matcher import match_objects, match_with_condition
from .perception_result import PerceptionResult, ResultType

__all__ = [
    "PerceptionFrameResult",
    "PerceptionResult",
    "ResultType",
    "SceneResultAggregator",
    "match_objects",
    "match_with_condition",
]
