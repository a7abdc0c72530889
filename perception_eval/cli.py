"""
Command line evaluation of a recorded scenario.

Usage:
    # Evaluate a frames file against a scenario
    perception-eval configs/scenario.yaml data/frames.json

    # Parallel frame matching, PR plots and a log file
    perception-eval configs/scenario.yaml data/frames.json \
        --num-workers 4 --plot-dir plots --log-dir outputs
"""

import argparse
import json
import sys
from pathlib import Path

from tqdm import tqdm

from .config import load_scenario
from .data import load_frames
from .errors import PerceptionEvalError
from .evaluation import PerceptionEvaluationManager
from .utils.logger import setup_logger


def parse_args(argv=None):
    """Parse command line arguments."""
    parser = argparse.ArgumentParser(
        description="3D Perception Evaluation",
        formatter_class=argparse.RawDescriptionHelpFormatter,
    )

    parser.add_argument(
        "scenario",
        type=str,
        help="Path to scenario YAML file",
    )
    parser.add_argument(
        "frames",
        type=str,
        help="Path to JSON frames file",
    )
    parser.add_argument(
        "--num-workers",
        type=int,
        default=1,
        help="Worker processes for frame matching",
    )
    parser.add_argument(
        "--output",
        type=str,
        default=None,
        help="Write scores and verdict as JSON to this path",
    )
    parser.add_argument(
        "--plot-dir",
        type=str,
        default=None,
        help="Directory for PR curve plots",
    )
    parser.add_argument(
        "--log-dir",
        type=str,
        default=None,
        help="Directory for the log file",
    )
    parser.add_argument(
        "--log-level",
        type=str,
        default="INFO",
        choices=["DEBUG", "INFO", "WARNING", "ERROR"],
        help="Logging level",
    )

    return parser.parse_args(argv)


def run(args) -> int:
    logger = setup_logger(level=args.log_level, log_dir=args.log_dir)

    config = load_scenario(args.scenario)
    frames = load_frames(args.frames)
    logger.info(f"Scenario '{config.name}': {len(frames)} frames")

    manager = PerceptionEvaluationManager(config, frame_ground_truths=frames)
    if args.num_workers > 1:
        manager.evaluate_frames(frames, num_workers=args.num_workers)
    else:
        for frame in tqdm(frames, desc="Evaluating"):
            manager.add_frame_result(
                frame.estimated,
                frame.ground_truth,
                frame_id=frame.frame_id,
                timestamp=frame.timestamp,
            )

    score = manager.get_scene_result()
    logger.info("\n" + str(score))

    summary = {"scenario": config.name, "scores": score.to_dict()}
    if config.pass_fail_config is not None:
        verdict = manager.get_scenario_verdict()
        logger.info(str(verdict))
        summary["verdict"] = verdict.to_dict()

    if args.output:
        output_path = Path(args.output)
        output_path.parent.mkdir(parents=True, exist_ok=True)
        with open(output_path, "w") as f:
            json.dump(summary, f, indent=2)
        logger.info(f"Saved: {output_path}")

    if args.plot_dir:
        from .viz import plot_all_pr_curves

        for path in plot_all_pr_curves(score, args.plot_dir):
            logger.info(f"Saved: {path}")

    if "verdict" in summary and not summary["verdict"]["passed"]:
        return 2
    return 0


def main(argv=None):
    """Main entry point."""
    args = parse_args(argv)
    try:
        code = run(args)
    except (PerceptionEvalError, FileNotFoundError) as e:
        setup_logger().error(str(e))
        code = 1
    sys.exit(code)


if __name__ == "__main__":
    main()
