#!/usr/bin/env python3
"""
Evaluate recorded perception output against ground truth.

Outputs:
- AP/APH table per matching condition (logged)
- Scenario pass/fail verdict (logged, exit code 2 on failure)
- Optional JSON summary and PR curve plots

Usage:
    # Evaluate the sample scenario
    python scripts/run_evaluation.py configs/scenario.yaml data/frames.json

    # Parallel matching with plots
    python scripts/run_evaluation.py configs/scenario.yaml data/frames.json \
        --num-workers 4 --plot-dir plots --output outputs/result.json
"""

import sys
from pathlib import Path

# Add project root to path
PROJECT_ROOT = Path(__file__).parent.parent
sys.path.insert(0, str(PROJECT_ROOT))

from perception_eval.cli import main  # noqa: E402


if __name__ == "__main__":
    main()
