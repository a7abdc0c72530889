"""Plotting of evaluation results."""

from .pr_curve import plot_all_pr_curves, plot_pr_curves

__all__ = ["plot_all_pr_curves", "plot_pr_curves"]
