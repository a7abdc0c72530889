"""Validated evaluation configuration and scenario loading."""

from .evaluation_config import PassFailConfig, PerceptionEvaluationConfig
from .filter_config import FilterConfig
from .label_values import broadcast_label_values, get_label_value
from .metrics_config import MetricsConfig
from .scenario import load_scenario, parse_scenario

__all__ = [
    "FilterConfig",
    "MetricsConfig",
    "PassFailConfig",
    "PerceptionEvaluationConfig",
    "broadcast_label_values",
    "get_label_value",
    "load_scenario",
    "parse_scenario",
]
