"""Precision-recall curve plots."""

from pathlib import Path
from typing import List, Union

import matplotlib

matplotlib.use("Agg")
import matplotlib.pyplot as plt  # noqa: E402

from ..matching import MatchingCondition  # noqa: E402
from ..metrics.score import MetricsScore  # noqa: E402


def _condition_filename(condition: MatchingCondition) -> str:
    name = str(condition)
    for char in "@[]:, ":
        name = name.replace(char, "_")
    return f"pr_curve_{name.strip('_')}.png"


def plot_pr_curves(
    score: MetricsScore,
    condition: MatchingCondition,
    save_path: Union[str, Path],
) -> Path:
    """
    Plot PR and heading-weighted PR curves of every label for one condition.

    Labels without ground truth are left out.

    Args:
        score: Computed metrics.
        condition: Condition to plot.
        save_path: Output image path.

    Returns:
        Path of the written image.
    """
    save_path = Path(save_path)
    save_path.parent.mkdir(parents=True, exist_ok=True)
    map_score = score[condition]

    fig, axes = plt.subplots(1, 2, figsize=(14, 5))

    # Precision-Recall
    ax = axes[0]
    for label, label_score in map_score.label_scores.items():
        if not label_score.is_defined:
            continue
        ax.plot(
            label_score.recalls,
            label_score.precisions,
            linewidth=2,
            label=f"{label} (AP={label_score.ap:.3f})",
        )
    ax.set_xlabel('Recall', fontsize=12)
    ax.set_ylabel('Precision', fontsize=12)
    ax.set_title(f'Precision-Recall [{condition}]', fontsize=14)
    ax.set_xlim(0, 1)
    ax.set_ylim(0, 1.05)
    ax.grid(True, alpha=0.3)
    ax.legend(loc='lower left')

    # Heading-weighted Precision-Recall
    ax = axes[1]
    for label, label_score in map_score.label_scores.items():
        if not label_score.is_defined:
            continue
        ax.plot(
            label_score.recalls,
            label_score.heading_precisions,
            linewidth=2,
            linestyle='--',
            label=f"{label} (APH={label_score.aph:.3f})",
        )
    ax.set_xlabel('Recall', fontsize=12)
    ax.set_ylabel('Heading-weighted Precision', fontsize=12)
    ax.set_title(f'APH curve [{condition}]', fontsize=14)
    ax.set_xlim(0, 1)
    ax.set_ylim(0, 1.05)
    ax.grid(True, alpha=0.3)
    ax.legend(loc='lower left')

    plt.tight_layout()
    plt.savefig(save_path, dpi=150, bbox_inches='tight')
    plt.close(fig)

    return save_path


def plot_all_pr_curves(score: MetricsScore, output_dir: Union[str, Path]) -> List[Path]:
    """Write one PR plot per condition into `output_dir`."""
    output_dir = Path(output_dir)
    return [
        plot_pr_curves(score, condition, output_dir / _condition_filename(condition))
        for condition in score.conditions
    ]
