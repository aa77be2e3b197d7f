import logging
from pathlib import Path
from typing import Dict, Optional

import matplotlib

matplotlib.use("Agg")
import matplotlib.pyplot as plt
import numpy as np

from beta_belief.core.belief import BetaBelief
from beta_belief.core.updater import ConjugateBetaBernoulliUpdater
from beta_belief.experiments.batch_experiment import BatchResult

logger = logging.getLogger(__name__)


class BeliefVisualizer:
    """Plots posterior densities and learning curves."""

    def __init__(
        self,
        updater: Optional[ConjugateBetaBernoulliUpdater] = None,
        grid_points: int = 200,
    ):
        self.updater = updater or ConjugateBetaBernoulliUpdater()
        self.grid_points = grid_points
        self.fig_size = (12, 6)

    def plot_posterior_evolution(
        self,
        beliefs_by_count: Dict[int, BetaBelief],
        output_path: Path,
        true_prob: Optional[float] = None,
    ) -> Optional[Path]:
        """
        Draws the posterior density after each number of flips.

        Args:
            beliefs_by_count: Beliefs keyed by the number of flips seen
            output_path: Where to write the PNG
            true_prob: Optional true probability of heads, drawn as a line
        """
        if not beliefs_by_count:
            logger.warning("No beliefs to visualize")
            return None

        fig, ax = plt.subplots(figsize=self.fig_size)
        try:
            colors = matplotlib.colormaps["viridis"](np.linspace(0, 1, len(beliefs_by_count)))
            for color, (count, belief) in zip(colors, sorted(beliefs_by_count.items())):
                grid, values = self.updater.density_curve(belief, self.grid_points)
                label = f"{count} flips: Beta({belief.alpha:g}, {belief.beta:g})"
                ax.plot(grid, values, color=color, linewidth=2, label=label)

            if true_prob is not None:
                ax.axvline(x=true_prob, color="r", linestyle="--", label="True Probability")

            ax.set_title("Posterior Belief After Observing Flips")
            ax.set_xlabel("Probability of Heads")
            ax.set_ylabel("Density")
            ax.grid(True, alpha=0.3)
            ax.legend()
            fig.tight_layout()
            return self._save(fig, output_path)
        finally:
            plt.close(fig)

    def plot_learning_curves(
        self,
        results: Dict[int, BatchResult],
        output_path: Path,
        true_prob: Optional[float] = None,
    ) -> Optional[Path]:
        """Posterior mean per batch next to the final densities"""
        if not results:
            logger.warning("No experiment results to visualize")
            return None

        fig, (ax1, ax2) = plt.subplots(1, 2, figsize=(15, 6))
        try:
            for batch_size, result in sorted(results.items()):
                flips_seen = np.minimum(
                    np.arange(1, len(result.history) + 1) * batch_size,
                    result.num_flips,
                )
                ax1.plot(flips_seen, result.history, label=f"Batch ({batch_size})")

                grid, values = self.updater.density_curve(
                    result.final_belief, self.grid_points
                )
                ax2.plot(grid, values, label=f"Batch ({batch_size})")

            if true_prob is not None:
                ax1.axhline(y=true_prob, color="r", linestyle="--", label="True Probability")
                ax2.axvline(x=true_prob, color="r", linestyle="--", label="True Probability")

            ax1.set_title("Learning Curves: Effect of Batch Size")
            ax1.set_xlabel("Number of Coin Flips")
            ax1.set_ylabel("Estimated P(Heads)")
            ax1.grid(True)
            ax1.legend()

            ax2.set_title("Final Beliefs")
            ax2.set_xlabel("Probability of Heads")
            ax2.set_ylabel("Density")
            ax2.grid(True)
            ax2.legend()

            fig.tight_layout()
            return self._save(fig, output_path)
        finally:
            plt.close(fig)

    def _save(self, fig, output_path: Path) -> Path:
        output_path = Path(output_path)
        try:
            fig.savefig(output_path, dpi=150, bbox_inches="tight")
        except Exception as e:
            raise IOError(f"Failed to save plot to {output_path}: {str(e)}") from e
        logger.info("Saved plot to %s", output_path)
        return output_path
