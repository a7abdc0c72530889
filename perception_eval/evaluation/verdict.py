"""Scenario pass/fail verdict."""

from dataclasses import dataclass
from typing import Any, Dict, Sequence

from ..result.frame_result import PerceptionFrameResult


@dataclass
class FramePassFailResult:
    """
    Critical object matching of one frame.

    A frame succeeds iff no critical estimate is unmatched (FP) and no
    critical ground truth is missed (FN).
    """
    frame_index: int
    timestamp: float
    critical_result: PerceptionFrameResult

    @property
    def num_fp(self) -> int:
        return len(self.critical_result.false_positives)

    @property
    def num_fn(self) -> int:
        return len(self.critical_result.false_negatives)

    @property
    def is_success(self) -> bool:
        return self.critical_result.is_success


@dataclass
class ScenarioVerdict:
    """
    Result of comparing the frame success fraction with the pass rate.

    Attributes:
        passed: Whether `success_rate >= pass_rate / 100`.
        success_rate: Fraction of successful frames in [0, 1].
        num_frames: Frames evaluated.
        num_success: Successful frames.
        pass_rate: Required success share, in percent.
    """
    passed: bool
    success_rate: float
    num_frames: int
    num_success: int
    pass_rate: float

    @classmethod
    def from_frames(cls, frames: Sequence[FramePassFailResult], pass_rate: float) -> "ScenarioVerdict":
        num_frames = len(frames)
        num_success = sum(1 for frame in frames if frame.is_success)
        success_rate = num_success / num_frames if num_frames > 0 else 0.0
        return cls(
            passed=num_frames > 0 and success_rate >= pass_rate / 100.0,
            success_rate=success_rate,
            num_frames=num_frames,
            num_success=num_success,
            pass_rate=pass_rate,
        )

    def to_dict(self) -> Dict[str, Any]:
        return {
            "passed": self.passed,
            "success_rate": self.success_rate,
            "num_frames": self.num_frames,
            "num_success": self.num_success,
            "pass_rate": self.pass_rate,
        }

    def __str__(self) -> str:
        status = "PASSED" if self.passed else "FAILED"
        return (
            f"{status}: {self.num_success}/{self.num_frames} frames succeeded "
            f"({100.0 * self.success_rate:.2f}% vs required {self.pass_rate:.2f}%)"
        )
