"""Scenario evaluation manager and pass/fail verdict."""

from .manager import FrameEvaluation, PerceptionEvaluationManager, evaluate_frame
from .verdict import FramePassFailResult, ScenarioVerdict

__all__ = [
    "FrameEvaluation",
    "FramePassFailResult",
    "PerceptionEvaluationManager",
    "ScenarioVerdict",
    "evaluate_frame",
]
