"""
3D perception evaluation.

Matches estimated objects against ground truth frame by frame, scores
AP/APH under distance and overlap criteria, and decides a scenario
pass/fail verdict.
"""

__version__ = "0.1.0"

from .common import DynamicObject, FrameID, Label, LabelConverter
from .config import (
    FilterConfig,
    MetricsConfig,
    PassFailConfig,
    PerceptionEvaluationConfig,
    load_scenario,
)
from .errors import (
    ConfigurationError,
    FilterError,
    MatchingError,
    MetricsError,
    PerceptionEvalError,
)
from .evaluation import PerceptionEvaluationManager, ScenarioVerdict
from .matching import MatchingCondition, MatchingMode
from .metrics import MetricsScore

__all__ = [
    "ConfigurationError",
    "DynamicObject",
    "FilterConfig",
    "FilterError",
    "FrameID",
    "Label",
    "LabelConverter",
    "MatchingCondition",
    "MatchingError",
    "MatchingMode",
    "MetricsConfig",
    "MetricsError",
    "MetricsScore",
    "PassFailConfig",
    "PerceptionEvalError",
    "PerceptionEvaluationConfig",
    "PerceptionEvaluationManager",
    "ScenarioVerdict",
    "load_scenario",
]
