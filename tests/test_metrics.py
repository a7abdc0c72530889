"""Tests for AP/APH computation."""

import numpy as np
import pytest

from perception_eval.common import Label
from perception_eval.errors import MetricsError
from perception_eval.matching import MatchingCondition, MatchingMode
from perception_eval.metrics import (
    compute_ap,
    compute_ap_11point,
    compute_ap_all_point,
    compute_label_score,
    evaluate_scene,
    precision_envelope,
    precision_recall_curve,
)
from perception_eval.result import PerceptionResult, SceneResultAggregator, match_with_condition


@pytest.fixture
def condition():
    return MatchingCondition.from_mapping(
        MatchingMode.CENTER_DISTANCE, {Label.CAR: 1.0, Label.PEDESTRIAN: 1.0}
    )


class TestAPIntegration:
    """Tests for AP integration methods."""

    def test_perfect_curve(self):
        recalls = np.array([0.5, 1.0])
        precisions = np.array([1.0, 1.0])

        assert np.isclose(compute_ap_all_point(recalls, precisions), 1.0)
        assert np.isclose(compute_ap_11point(recalls, precisions), 1.0)

    def test_envelope_integration(self):
        """TP, FP, TP over two ground truth instances."""
        recalls = np.array([0.5, 0.5, 1.0])
        precisions = np.array([1.0, 0.5, 2.0 / 3.0])

        # 0.5 * 1.0 + 0.5 * 2/3
        assert np.isclose(compute_ap_all_point(recalls, precisions), 5.0 / 6.0)

    def test_eleven_point_partial_recall(self):
        """Levels 0.0 to 0.5 see precision 1, levels 0.6 to 1.0 see nothing."""
        recalls = np.array([0.5])
        precisions = np.array([1.0])

        assert np.isclose(compute_ap_11point(recalls, precisions), 6.0 / 11.0)
        assert np.isclose(compute_ap_all_point(recalls, precisions), 0.5)

    def test_eleven_point_uses_envelope(self):
        recalls = np.array([0.5, 0.5, 1.0])
        precisions = np.array([1.0, 0.5, 2.0 / 3.0])

        # six levels at 1.0, five at 2/3
        expected = (6 * 1.0 + 5 * 2.0 / 3.0) / 11
        assert np.isclose(compute_ap_11point(recalls, precisions), expected)

    def test_envelope_is_non_increasing(self):
        recalls, envelope = precision_envelope(np.array([1.0, 0.25, 0.5]), np.array([0.8, 0.4, 0.9]))

        assert np.allclose(recalls, [0.0, 0.25, 0.5, 1.0, 1.0])
        assert np.allclose(envelope, [0.9, 0.9, 0.9, 0.8, 0.0])

    def test_empty_curve(self):
        assert compute_ap_all_point(np.zeros(0), np.zeros(0)) == 0.0
        assert compute_ap_11point(np.zeros(0), np.zeros(0)) == 0.0

    def test_unknown_interpolation(self):
        with pytest.raises(ValueError):
            compute_ap(np.array([1.0]), np.array([1.0]), interpolation="101point")


class TestPrecisionRecallCurve:
    """Tests for PR curve construction."""

    def test_global_confidence_sort(self, make_object):
        gt = make_object()
        results = [
            PerceptionResult.false_positive(make_object(confidence=0.8)),
            PerceptionResult.true_positive(make_object(confidence=0.9), gt, 0.0),
            PerceptionResult.true_positive(make_object(confidence=0.7), gt, 0.0),
        ]

        precisions, recalls, _ = precision_recall_curve(results, num_gt=2)

        assert np.allclose(precisions, [1.0, 0.5, 2.0 / 3.0])
        assert np.allclose(recalls, [0.5, 0.5, 1.0])

    def test_heading_weight(self, make_object):
        gt = make_object(yaw=0.0)
        est = make_object(yaw=np.pi / 2, confidence=0.9)
        result = PerceptionResult.true_positive(est, gt, 0.0)

        _, _, heading_precisions = precision_recall_curve([result], num_gt=1)

        assert np.isclose(result.heading_weight, 0.5)
        assert np.allclose(heading_precisions, [0.5])

    def test_false_negatives_only(self, make_object):
        results = [PerceptionResult.false_negative(make_object())]

        precisions, recalls, heading_precisions = precision_recall_curve(results, num_gt=1)

        assert len(precisions) == len(recalls) == len(heading_precisions) == 0


class TestLabelScore:
    """Tests for per-label AP/APH."""

    def _frames(self, condition, pairs):
        return [
            match_with_condition(ests, gts, condition, frame_index=i)
            for i, (ests, gts) in enumerate(pairs)
        ]

    def test_perfect_detection_ap_one(self, make_object, condition):
        frames = self._frames(condition, [
            ([make_object(x=10.0, confidence=0.9)], [make_object(x=10.0)]),
            ([make_object(x=20.0, confidence=0.6)], [make_object(x=20.0)]),
        ])

        score = compute_label_score(frames, Label.CAR, condition)

        assert score.num_gt == 2
        assert score.num_tp == 2
        assert np.isclose(score.ap, 1.0)
        assert np.isclose(score.aph, 1.0)

    def test_opposite_heading_zeroes_aph(self, make_object, condition):
        frames = self._frames(condition, [
            ([make_object(x=10.0, yaw=np.pi, confidence=0.9)], [make_object(x=10.0, yaw=0.0)]),
        ])

        score = compute_label_score(frames, Label.CAR, condition)

        assert np.isclose(score.ap, 1.0)
        assert np.isclose(score.aph, 0.0)
        assert score.aph < score.ap

    def test_zero_ground_truth_undefined(self, make_object, condition):
        frames = self._frames(condition, [
            ([make_object(label=Label.PEDESTRIAN, confidence=0.9)], []),
        ])

        score = compute_label_score(frames, Label.PEDESTRIAN, condition)

        assert score.ap is None
        assert score.aph is None
        assert score.num_fp == 1
        assert not score.is_defined

    def test_missed_ground_truth(self, make_object, condition):
        frames = self._frames(condition, [
            ([make_object(x=10.0, confidence=0.9)], [make_object(x=10.0), make_object(x=40.0)]),
        ])

        score = compute_label_score(frames, Label.CAR, condition)

        assert np.isclose(score.ap, 0.5)
        assert np.isclose(score.recall, 0.5)
        assert np.isclose(score.precision, 1.0)


class TestMetricsScore:
    """Tests for scene level scores."""

    @pytest.fixture
    def aggregator(self, make_object, condition):
        aggregator = SceneResultAggregator([condition])
        pairs = [
            ([make_object(x=10.0, confidence=0.9)], [make_object(x=10.0)]),
            ([make_object(x=20.0, confidence=0.4)], [make_object(x=25.0)]),
        ]
        for i, (ests, gts) in enumerate(pairs):
            aggregator.add(condition, match_with_condition(ests, gts, condition, frame_index=i))
        return aggregator

    def test_map_excludes_zero_gt_labels(self, aggregator, condition):
        score = evaluate_scene(aggregator, [Label.CAR, Label.PEDESTRIAN])

        car_ap = score.get_ap(Label.CAR, condition)
        assert score.get_ap(Label.PEDESTRIAN, condition) is None
        assert np.isclose(score.map(condition), car_ap)
        assert np.isclose(score.maph(condition), score.get_aph(Label.CAR, condition))

    def test_strict_access_raises(self, aggregator, condition):
        score = evaluate_scene(aggregator, [Label.CAR, Label.PEDESTRIAN])

        with pytest.raises(MetricsError):
            score.get_ap(Label.PEDESTRIAN, condition, strict=True)
        with pytest.raises(MetricsError):
            score.get_aph(Label.PEDESTRIAN, condition, strict=True)
        assert score.get_ap(Label.CAR, condition, strict=True) is not None

    def test_map_undefined_without_ground_truth(self, condition):
        score = evaluate_scene(SceneResultAggregator([condition]), [Label.CAR])

        assert score.map(condition) is None
        assert score.maph(condition) is None

    def test_idempotent(self, aggregator):
        first = evaluate_scene(aggregator, [Label.CAR, Label.PEDESTRIAN])
        second = evaluate_scene(aggregator, [Label.CAR, Label.PEDESTRIAN])

        assert first.to_dict() == second.to_dict()

    def test_report(self, aggregator, condition):
        score = evaluate_scene(aggregator, [Label.CAR, Label.PEDESTRIAN])
        summary = score.to_dict()

        assert str(condition) in summary
        assert summary[str(condition)]["labels"]["pedestrian"]["ap"] is None
        assert "center_distance@1.0" in str(score)
        assert score.num_frames == 2

    def test_ap_monotone_in_threshold(self, make_object):
        loose = MatchingCondition.from_mapping(MatchingMode.CENTER_DISTANCE, {Label.CAR: 2.0})
        tight = MatchingCondition.from_mapping(MatchingMode.CENTER_DISTANCE, {Label.CAR: 0.5})
        aggregator = SceneResultAggregator([loose, tight])
        ests = [make_object(x=11.0, confidence=0.9), make_object(x=30.2, confidence=0.5)]
        gts = [make_object(x=10.0), make_object(x=30.0)]
        for condition in (loose, tight):
            aggregator.add(condition, match_with_condition(ests, gts, condition))

        score = evaluate_scene(aggregator, [Label.CAR])

        assert score.get_ap(Label.CAR, loose) >= score.get_ap(Label.CAR, tight)
        assert np.isclose(score.get_ap(Label.CAR, loose), 1.0)
