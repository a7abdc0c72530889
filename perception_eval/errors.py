"""Exception types raised by the evaluation engine."""

from typing import Any, Optional


class PerceptionEvalError(ValueError):
    """
    Base class for evaluation errors.

    Carries optional context so a caller can log a precise diagnostic.

    Attributes:
        label: Label involved in the failure, if any.
        frame_index: Index of the frame being processed, if any.
        value: Offending value, if any.
    """

    def __init__(
        self,
        message: str,
        label: Optional[Any] = None,
        frame_index: Optional[int] = None,
        value: Optional[Any] = None,
    ):
        self.message = message
        self.label = label
        self.frame_index = frame_index
        self.value = value
        super().__init__(self._format())

    def _format(self) -> str:
        context = []
        if self.label is not None:
            context.append(f"label={self.label}")
        if self.frame_index is not None:
            context.append(f"frame_index={self.frame_index}")
        if self.value is not None:
            context.append(f"value={self.value!r}")

        if not context:
            return self.message
        return f"{self.message} ({', '.join(context)})"


class ConfigurationError(PerceptionEvalError):
    """Invalid evaluation configuration (label arrays, thresholds, task)."""


class FilterError(PerceptionEvalError):
    """Malformed filter bounds."""


class MatchingError(PerceptionEvalError):
    """Matching requested without a usable threshold or with malformed input."""


class MetricsError(PerceptionEvalError):
    """Metric requested that cannot be computed in strict mode."""
