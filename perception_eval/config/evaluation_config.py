"""Top level evaluation configuration and pass/fail criteria."""

from numbers import Number
from typing import Any, Dict, List, Optional, Sequence, Union

from ..common.evaluation_task import EvaluationTask, FrameID
from ..common.label import Label, convert_labels
from ..errors import ConfigurationError
from ..matching import MatchingCondition, MatchingMode
from .filter_config import FilterConfig
from .label_values import broadcast_label_values
from .metrics_config import MetricsConfig


class PassFailConfig:
    """
    Frame-level acceptance rule.

    A frame succeeds when every critical ground truth is matched and no
    critical estimate is left unmatched under plane distance matching.

    Args:
        target_labels: Labels the thresholds are indexed by.
        plane_distance_threshold_list: Plane distance threshold per label [m].
        pass_rate: Required share of successful frames, in percent.
    """

    def __init__(
        self,
        target_labels: Sequence[Union[str, Label]],
        plane_distance_threshold_list: Any,
        pass_rate: float = 100.0,
    ):
        self.target_labels: List[Label] = convert_labels(target_labels or [])
        if not self.target_labels:
            raise ConfigurationError("PassFailConfig requires at least one target label")

        thresholds = broadcast_label_values(
            "plane_distance_threshold_list", plane_distance_threshold_list, self.target_labels
        )
        if thresholds is None:
            raise ConfigurationError("plane_distance_threshold_list is required")
        for label, value in thresholds.items():
            if not isinstance(value, Number) or value < 0:
                raise ConfigurationError("Invalid plane distance threshold", label=label, value=value)

        if not isinstance(pass_rate, Number) or not 0.0 <= pass_rate <= 100.0:
            raise ConfigurationError("PassRate must be a percentage in [0, 100]", value=pass_rate)

        self.pass_rate = float(pass_rate)
        self.matching_condition = MatchingCondition.from_mapping(
            MatchingMode.PLANE_DISTANCE, thresholds
        )

    @classmethod
    def from_dict(cls, params: Dict[str, Any], pass_rate: float = 100.0) -> "PassFailConfig":
        thresholds = params.get("plane_distance_threshold_list")
        if thresholds is None:
            thresholds = params.get("matching_threshold_list")
        return cls(
            target_labels=params.get("target_labels") or [],
            plane_distance_threshold_list=thresholds,
            pass_rate=pass_rate,
        )


def _check_label_coverage(name: str, filter_config: FilterConfig, labels: Sequence[Label]) -> None:
    """Every label a filter keeps must have a matching threshold."""
    if not filter_config.restricts_labels:
        raise ConfigurationError(f"{name} must list target_labels covered by the matching thresholds")
    for label in filter_config.target_labels:
        if label not in labels:
            raise ConfigurationError(f"{name} keeps a label without a matching threshold", label=label)


class PerceptionEvaluationConfig:
    """
    Complete, validated configuration of one scenario evaluation.

    All sections are checked on construction; nothing is re-validated per
    frame.

    Args:
        metrics_config: Matching conditions to score.
        filter_config: Filter applied before metric matching.
        critical_object_filter_config: Filter selecting objects for the
            pass/fail verdict. Defaults to `filter_config`.
        pass_fail_config: Frame acceptance rule. None disables the verdict.
        frame_id: Coordinate frame the objects are expressed in.
        name: Scenario name for reporting.

    Raises:
        ConfigurationError: A filter keeps labels (or every label) that have
            no matching threshold in the section it feeds.
    """

    def __init__(
        self,
        metrics_config: MetricsConfig,
        filter_config: Optional[FilterConfig] = None,
        critical_object_filter_config: Optional[FilterConfig] = None,
        pass_fail_config: Optional[PassFailConfig] = None,
        frame_id: Union[str, FrameID] = FrameID.BASE_LINK,
        name: str = "",
    ):
        self.metrics_config = metrics_config
        self.filter_config = filter_config or FilterConfig(target_labels=metrics_config.target_labels)
        self.critical_object_filter_config = critical_object_filter_config or self.filter_config
        self.pass_fail_config = pass_fail_config
        self.frame_id = frame_id if isinstance(frame_id, FrameID) else FrameID.from_name(frame_id)
        self.name = name

        _check_label_coverage(
            "filter_config", self.filter_config, self.metrics_config.target_labels
        )
        if self.pass_fail_config is not None:
            _check_label_coverage(
                "critical_object_filter_config",
                self.critical_object_filter_config,
                self.pass_fail_config.target_labels,
            )

    @property
    def evaluation_task(self) -> EvaluationTask:
        return self.metrics_config.evaluation_task

    @property
    def target_labels(self) -> List[Label]:
        return self.metrics_config.target_labels

    @property
    def matching_conditions(self) -> List[MatchingCondition]:
        return self.metrics_config.matching_conditions
