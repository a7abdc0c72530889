"""Tests for PR curve plotting."""

from perception_eval.common import Label
from perception_eval.matching import MatchingCondition, MatchingMode
from perception_eval.metrics import evaluate_scene
from perception_eval.result import SceneResultAggregator, match_with_condition
from perception_eval.viz import plot_all_pr_curves, plot_pr_curves


def test_plot_pr_curves(tmp_path, make_object):
    condition = MatchingCondition.from_mapping(
        MatchingMode.CENTER_DISTANCE, {Label.CAR: 1.0, Label.PEDESTRIAN: 1.0}
    )
    aggregator = SceneResultAggregator([condition])
    aggregator.add(
        condition,
        match_with_condition(
            [make_object(x=10.0, confidence=0.9), make_object(x=30.0, confidence=0.3)],
            [make_object(x=10.0)],
            condition,
        ),
    )
    score = evaluate_scene(aggregator, [Label.CAR, Label.PEDESTRIAN])

    path = plot_pr_curves(score, condition, tmp_path / "plots" / "pr.png")
    assert path.exists()

    paths = plot_all_pr_curves(score, tmp_path / "all")
    assert len(paths) == 1
    assert paths[0].name == "pr_curve_center_distance_1.0.png"
    assert paths[0].exists()
