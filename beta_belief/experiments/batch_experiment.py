"""
Batch Size Experiment
---------------------
Compares how quickly the posterior mean approaches the true probability of
heads when the same flips are fed to the updater in batches of different
sizes. Because the conjugate update only depends on counts, every batch
size ends at the same final belief; what differs is the learning curve
along the way.

Metrics per batch size:
- mean_error: average distance of the posterior mean from the truth
- final_error: distance after the last batch
- confidence: 1 / (alpha + beta), lower is more confident
- convergence_speed: sum of squared error differences, lower is smoother
"""

import logging
from dataclasses import dataclass, field
from typing import Any, Dict, Iterable, List, Optional, Sequence, Tuple

import numpy as np

from beta_belief.core.belief import BetaBelief
from beta_belief.core.errors import DomainError, InvalidParameterError
from beta_belief.core.updater import ConjugateBetaBernoulliUpdater
from beta_belief.inputs.observations import generate_flips, validate_observations

logger = logging.getLogger(__name__)


@dataclass
class BatchResult:
    """Learning trajectory of one batch size"""

    batch_size: int
    history: List[float]
    errors: List[float]
    final_belief: BetaBelief
    credible_interval: Tuple[float, float]
    num_flips: int = 0
    beliefs: List[BetaBelief] = field(default_factory=list, repr=False)

    @property
    def mean_error(self) -> float:
        return float(np.mean(self.errors)) if self.errors else 0.0

    @property
    def final_error(self) -> float:
        return self.errors[-1] if self.errors else 0.0

    @property
    def confidence(self) -> float:
        return 1.0 / self.final_belief.total

    @property
    def convergence_speed(self) -> float:
        return float(np.sum(np.diff(self.errors) ** 2))

    def summary(self) -> Dict[str, Any]:
        return {
            "batch_size": self.batch_size,
            "num_updates": len(self.history),
            "num_flips": self.num_flips,
            "mean_error": self.mean_error,
            "final_error": self.final_error,
            "confidence": self.confidence,
            "convergence_speed": self.convergence_speed,
            "credible_interval": list(self.credible_interval),
            "final_belief": self.final_belief.as_dict(),
        }


class BatchExperiment:
    def __init__(
        self,
        true_prob: float = 0.7,
        total_flips: int = 200,
        prior_alpha: float = 1.0,
        prior_beta: float = 1.0,
        credible_level: float = 0.95,
    ):
        """
        Parameters:
        - true_prob: Actual probability of heads
        - total_flips: Fixed experiment length so batch sizes compare fairly
        """
        if not 0.0 <= true_prob <= 1.0:
            raise DomainError(f"true_prob must lie in [0, 1], got {true_prob}")
        if total_flips < 1:
            raise InvalidParameterError(f"total_flips must be >= 1, got {total_flips}")
        self.true_prob = true_prob
        self.total_flips = total_flips
        self.credible_level = credible_level
        self.updater = ConjugateBetaBernoulliUpdater()
        self.prior = self.updater.initialize(prior_alpha, prior_beta)

    def run(self, batch_size: int, flips: Optional[Iterable[Any]] = None) -> BatchResult:
        """Feed the flips to a fresh prior ``batch_size`` at a time"""
        if flips is None:
            flips = generate_flips(self.true_prob, self.total_flips)
        flips = validate_observations(flips)

        beliefs = self.updater.replay_batches(self.prior, flips, batch_size)
        history = [self.updater.mean(b) for b in beliefs[1:]]
        errors = [abs(estimate - self.true_prob) for estimate in history]
        final_belief = beliefs[-1]

        return BatchResult(
            batch_size=batch_size,
            history=history,
            errors=errors,
            final_belief=final_belief,
            credible_interval=self.updater.credible_interval(
                final_belief, self.credible_level
            ),
            num_flips=len(flips),
            beliefs=beliefs,
        )

    def compare(
        self, batch_sizes: Sequence[int], seed: Optional[int] = None
    ) -> Dict[int, BatchResult]:
        """Run every batch size on the same pre-generated flips"""
        flips = generate_flips(self.true_prob, self.total_flips, seed=seed)

        results = {}
        for batch_size in batch_sizes:
            result = self.run(batch_size, flips)
            lower, upper = result.credible_interval
            logger.info(
                "Batch size %d: mean error %.4f, final error %.4f, interval %.3f to %.3f",
                batch_size,
                result.mean_error,
                result.final_error,
                lower,
                upper,
            )
            results[batch_size] = result
        return results
