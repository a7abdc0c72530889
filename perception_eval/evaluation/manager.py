"""
Scenario evaluation: filtering, matching, aggregation and scoring.

Frames are independent of each other, so `evaluate_frame` is a module
level function that can run in worker processes. The manager stores its
outputs in frame index order and computes metrics over whatever has been
collected so far.
"""

from concurrent.futures import ProcessPoolExecutor
from dataclasses import dataclass, field
from functools import partial
from typing import Dict, List, Optional, Sequence

from ..common.evaluation_task import FrameID
from ..common.object import DynamicObject
from ..config.evaluation_config import PerceptionEvaluationConfig
from ..data.frame_loader import Frame, get_current_frame
from ..errors import ConfigurationError
from ..filtering import filter_objects
from ..matching import MatchingCondition
from ..metrics.score import MetricsScore, evaluate_scene
from ..result.aggregation import SceneResultAggregator
from ..result.frame_result import PerceptionFrameResult
from ..result.matcher import match_with_condition
from ..utils.logger import LoggerMixin, ProgressLogger
from .verdict import FramePassFailResult, ScenarioVerdict


@dataclass
class FrameEvaluation:
    """Everything computed for one frame."""

    frame_index: int
    timestamp: float
    frame_results: Dict[MatchingCondition, PerceptionFrameResult] = field(default_factory=dict)
    pass_fail_result: Optional[FramePassFailResult] = None


def evaluate_frame(
    config: PerceptionEvaluationConfig,
    estimated: Sequence[DynamicObject],
    ground_truth: Sequence[DynamicObject],
    frame_index: int,
    frame_id: FrameID = FrameID.BASE_LINK,
    timestamp: float = 0.0,
) -> FrameEvaluation:
    """
    Filter and match one frame under every configured condition.

    Args:
        config: Scenario configuration.
        estimated: Raw estimated objects.
        ground_truth: Raw ground truth objects.
        frame_index: Position of the frame in the scenario.
        frame_id: Coordinate frame of the objects.
        timestamp: Frame timestamp in seconds.

    Returns:
        FrameEvaluation with one PerceptionFrameResult per condition and,
        when pass/fail is configured, the critical object result.
    """
    filtered_est = filter_objects(estimated, config.filter_config, is_gt=False)
    filtered_gt = filter_objects(ground_truth, config.filter_config, is_gt=True)

    evaluation = FrameEvaluation(frame_index=frame_index, timestamp=timestamp)
    for condition in config.matching_conditions:
        evaluation.frame_results[condition] = match_with_condition(
            filtered_est,
            filtered_gt,
            condition,
            frame_index=frame_index,
            frame_id=frame_id,
            timestamp=timestamp,
        )

    if config.pass_fail_config is not None:
        critical_filter = config.critical_object_filter_config
        critical_result = match_with_condition(
            filter_objects(estimated, critical_filter, is_gt=False),
            filter_objects(ground_truth, critical_filter, is_gt=True),
            config.pass_fail_config.matching_condition,
            frame_index=frame_index,
            frame_id=frame_id,
            timestamp=timestamp,
        )
        evaluation.pass_fail_result = FramePassFailResult(frame_index, timestamp, critical_result)

    return evaluation


def _evaluate_indexed_frame(config: PerceptionEvaluationConfig, indexed_frame) -> FrameEvaluation:
    index, frame = indexed_frame
    return evaluate_frame(
        config, frame.estimated, frame.ground_truth, index, frame.frame_id, frame.timestamp
    )


class PerceptionEvaluationManager(LoggerMixin):
    """
    Evaluate a scenario frame by frame.

    Frames can be added one at a time with `add_frame_result` or in bulk
    with `evaluate_frames`. Metrics and the verdict can be requested at
    any point and cover the frames added so far.

    Args:
        config: Validated scenario configuration.
        frame_ground_truths: Optional ground truth frames for
            timestamp lookup with `get_frame_ground_truth`.
    """

    def __init__(
        self,
        config: PerceptionEvaluationConfig,
        frame_ground_truths: Optional[Sequence[Frame]] = None,
    ):
        self.config = config
        self.frame_ground_truths: List[Frame] = list(frame_ground_truths or [])

        self.aggregator = SceneResultAggregator(config.matching_conditions)
        self._pass_fail_results: Dict[int, FramePassFailResult] = {}
        self._next_index = 0

        self.logger.debug(
            f"Evaluation '{config.name}': {len(config.matching_conditions)} matching conditions, "
            f"labels {[str(label) for label in config.target_labels]}"
        )

    @property
    def num_frames(self) -> int:
        return self._next_index

    def _store(self, evaluation: FrameEvaluation) -> None:
        for condition, frame_result in evaluation.frame_results.items():
            self.aggregator.add(condition, frame_result, evaluation.frame_index)
        if evaluation.pass_fail_result is not None:
            self._pass_fail_results[evaluation.frame_index] = evaluation.pass_fail_result
        self._next_index = max(self._next_index, evaluation.frame_index + 1)

    def add_frame_result(
        self,
        estimated: Sequence[DynamicObject],
        ground_truth: Sequence[DynamicObject],
        frame_id: Optional[FrameID] = None,
        timestamp: Optional[float] = None,
    ) -> FrameEvaluation:
        """
        Evaluate and store the next frame.

        Args:
            estimated: Raw estimated objects.
            ground_truth: Raw ground truth objects.
            frame_id: Coordinate frame (defaults to the configured one).
            timestamp: Frame timestamp in seconds (defaults to 0).

        Returns:
            FrameEvaluation of the frame.

        Raises:
            MatchingError: Malformed input or a label without threshold.
        """
        frame_index = self._next_index
        evaluation = evaluate_frame(
            self.config,
            estimated,
            ground_truth,
            frame_index,
            frame_id or self.config.frame_id,
            0.0 if timestamp is None else timestamp,
        )
        self._store(evaluation)

        self.logger.debug(
            f"Frame {frame_index}: {len(estimated)} estimated, {len(ground_truth)} ground truth"
        )
        return evaluation

    def evaluate_frames(self, frames: Sequence[Frame], num_workers: int = 1) -> List[FrameEvaluation]:
        """
        Evaluate many frames, optionally in worker processes.

        Results are stored in input order regardless of completion order.

        Args:
            frames: Frames to evaluate, appended after those already added.
            num_workers: Worker processes; 1 evaluates in this process.

        Returns:
            FrameEvaluation per frame, in input order.
        """
        start = self._next_index
        indexed = [(start + i, frame) for i, frame in enumerate(frames)]
        worker = partial(_evaluate_indexed_frame, self.config)

        evaluations: List[FrameEvaluation] = []
        with ProgressLogger(len(indexed), self.logger, description="Evaluating frames") as progress:
            if num_workers > 1 and len(indexed) > 1:
                with ProcessPoolExecutor(max_workers=num_workers) as executor:
                    # map() yields in submission order
                    for evaluation in executor.map(worker, indexed):
                        self._store(evaluation)
                        evaluations.append(evaluation)
                        progress.update()
            else:
                for item in indexed:
                    evaluation = worker(item)
                    self._store(evaluation)
                    evaluations.append(evaluation)
                    progress.update()

        return evaluations

    @property
    def frame_results(self) -> Dict[MatchingCondition, List[PerceptionFrameResult]]:
        """Stored frame results per condition, in frame order."""
        return {condition: results for condition, results in self.aggregator.items()}

    @property
    def pass_fail_results(self) -> List[FramePassFailResult]:
        return [self._pass_fail_results[index] for index in sorted(self._pass_fail_results)]

    def get_scene_result(self) -> MetricsScore:
        """Compute metrics over all frames added so far."""
        score = evaluate_scene(
            self.aggregator,
            self.config.target_labels,
            self.config.metrics_config.interpolation,
        )
        self.logger.debug(f"Scene result over {score.num_frames} frames")
        return score

    def get_scenario_verdict(self) -> ScenarioVerdict:
        """
        Compare the share of successful frames with the pass rate.

        Raises:
            ConfigurationError: No pass/fail criteria configured.
        """
        if self.config.pass_fail_config is None:
            raise ConfigurationError("No PerceptionPassFailConfig configured")
        verdict = ScenarioVerdict.from_frames(
            self.pass_fail_results, self.config.pass_fail_config.pass_rate
        )
        self.logger.debug(str(verdict))
        return verdict

    def get_frame_ground_truth(self, timestamp: float) -> Optional[Frame]:
        """Ground truth frame nearest to `timestamp`, if within the time window."""
        return get_current_frame(self.frame_ground_truths, timestamp)
