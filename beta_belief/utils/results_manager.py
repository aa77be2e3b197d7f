import json
from pathlib import Path
from typing import Dict, Any, List, Optional
import logging
from datetime import datetime

from beta_belief.core.belief import BetaBelief
from beta_belief.experiments.batch_experiment import BatchResult

logger = logging.getLogger(__name__)


class ResultsManager:
    """Manages belief trajectories and experiment summaries"""

    def __init__(self, output_dir: Path):
        self.output_dir = Path(output_dir)
        self.output_dir.mkdir(parents=True, exist_ok=True)
        self.trajectory: List[Dict[str, Any]] = []

    def log_belief(self, step: int, belief: BetaBelief) -> None:
        """Record the belief after ``step`` observations"""
        self.trajectory.append({"step": step, **belief.as_dict()})

    def save_results(
        self, experiment_results: Optional[Dict[int, BatchResult]] = None
    ) -> Dict[str, Any]:
        """Save trajectory and summary to files"""
        trajectory_file = self.output_dir / "trajectory.json"
        with open(trajectory_file, 'w') as f:
            json.dump(self.trajectory, f, indent=2)

        summary = self._generate_summary(experiment_results or {})
        summary_file = self.output_dir / "summary.json"
        with open(summary_file, 'w') as f:
            json.dump(summary, f, indent=2)

        logger.info("Results saved to %s", self.output_dir)
        return summary

    def _generate_summary(self, experiment_results: Dict[int, BatchResult]) -> Dict[str, Any]:
        """Generate a summary of the final belief and batch experiments"""
        final = self.trajectory[-1] if self.trajectory else None
        return {
            "num_observations": final["step"] if final else 0,
            "final_belief": final,
            "batch_experiments": {
                str(batch_size): result.summary()
                for batch_size, result in experiment_results.items()
            },
            "timestamp": datetime.now().isoformat(),
        }
