"""Classified outcome of matching one object pair."""

from dataclasses import dataclass
from enum import Enum
from typing import Optional

import numpy as np

from ..common.label import Label
from ..common.object import DynamicObject, normalize_angle


class ResultType(Enum):
    """Match classification."""
    TRUE_POSITIVE = "TP"
    FALSE_POSITIVE = "FP"
    FALSE_NEGATIVE = "FN"

    def __str__(self) -> str:
        return self.value


@dataclass(frozen=True)
class PerceptionResult:
    """
    One TP, FP or FN.

    Attributes:
        result_type: Classification.
        estimated: Estimated object (None for FN).
        ground_truth: Ground truth object (None for FP).
        score: Matching score of a TP (None otherwise).
    """
    result_type: ResultType
    estimated: Optional[DynamicObject] = None
    ground_truth: Optional[DynamicObject] = None
    score: Optional[float] = None

    @classmethod
    def true_positive(
        cls, estimated: DynamicObject, ground_truth: DynamicObject, score: float
    ) -> "PerceptionResult":
        return cls(ResultType.TRUE_POSITIVE, estimated, ground_truth, float(score))

    @classmethod
    def false_positive(cls, estimated: DynamicObject) -> "PerceptionResult":
        return cls(ResultType.FALSE_POSITIVE, estimated=estimated)

    @classmethod
    def false_negative(cls, ground_truth: DynamicObject) -> "PerceptionResult":
        return cls(ResultType.FALSE_NEGATIVE, ground_truth=ground_truth)

    @property
    def is_true_positive(self) -> bool:
        return self.result_type is ResultType.TRUE_POSITIVE

    @property
    def is_false_positive(self) -> bool:
        return self.result_type is ResultType.FALSE_POSITIVE

    @property
    def is_false_negative(self) -> bool:
        return self.result_type is ResultType.FALSE_NEGATIVE

    @property
    def label(self) -> Label:
        obj = self.estimated if self.estimated is not None else self.ground_truth
        return obj.label

    @property
    def confidence(self) -> float:
        """Confidence of the estimate; 0 for false negatives."""
        if self.estimated is None:
            return 0.0
        return self.estimated.score

    @property
    def heading_error(self) -> Optional[float]:
        """Absolute yaw difference of a TP in [0, pi]."""
        if not self.is_true_positive:
            return None
        return abs(normalize_angle(self.estimated.yaw - self.ground_truth.yaw))

    @property
    def heading_weight(self) -> float:
        """(1 + cos(dyaw)) / 2 for a TP, 0 otherwise."""
        error = self.heading_error
        if error is None:
            return 0.0
        return float((1.0 + np.cos(error)) / 2.0)
