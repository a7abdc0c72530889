"""Accumulation of frame results across a scenario."""

from typing import Dict, Iterator, List, Optional, Sequence

from ..matching import MatchingCondition
from .frame_result import PerceptionFrameResult


class SceneResultAggregator:
    """
    Frame results per matching condition, kept in frame index order.

    Frames may arrive out of order (e.g. from a worker pool); they are
    re-joined by `frame_index` on read.

    Args:
        conditions: Matching conditions to accumulate for.
    """

    def __init__(self, conditions: Sequence[MatchingCondition]):
        self.conditions: List[MatchingCondition] = list(conditions)
        self._frames: Dict[MatchingCondition, Dict[int, PerceptionFrameResult]] = {
            condition: {} for condition in self.conditions
        }

    def add(
        self,
        condition: MatchingCondition,
        frame_result: PerceptionFrameResult,
        frame_index: Optional[int] = None,
    ):
        """
        Store one frame result.

        Args:
            condition: Condition the frame was matched under.
            frame_result: Result to store.
            frame_index: Explicit position; defaults to `frame_result.frame_index`.
        """
        if condition not in self._frames:
            self.conditions.append(condition)
            self._frames[condition] = {}
        index = frame_result.frame_index if frame_index is None else frame_index
        self._frames[condition][index] = frame_result

    def frame_results(self, condition: MatchingCondition) -> List[PerceptionFrameResult]:
        """Frame results of a condition in frame index order."""
        frames = self._frames.get(condition, {})
        return [frames[index] for index in sorted(frames)]

    def items(self) -> Iterator:
        for condition in self.conditions:
            yield condition, self.frame_results(condition)

    @property
    def num_frames(self) -> int:
        if not self._frames:
            return 0
        return max(len(frames) for frames in self._frames.values())

    def reset(self):
        self._frames = {condition: {} for condition in self.conditions}
