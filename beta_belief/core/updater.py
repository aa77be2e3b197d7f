"""
Closed-form Bayesian updating for coin flips
============================================

The Beta distribution is the conjugate prior of the Bernoulli likelihood:
starting from Beta(alpha, beta) and observing ``h`` heads and ``t`` tails
gives the posterior Beta(alpha + h, beta + t). No sampling is needed, and
only the counts matter, so the order in which flips arrive never changes
the result.

Density evaluation works in log space,

    log f(p) = (alpha - 1) log p + (beta - 1) log(1 - p) - log B(alpha, beta)

with ``B`` evaluated through ``scipy.special.betaln``. The direct formula
overflows the gamma functions once a few hundred flips have been seen.

Usage:
------

```python
updater = ConjugateBetaBernoulliUpdater()
prior = updater.initialize(1, 1)
posterior = updater.update(prior, [True, True, False])
updater.mean(posterior)          # 0.6
updater.density(posterior, 0.5)
```
"""

import logging
from typing import Any, Iterable, List, Tuple

import numpy as np
from scipy import special, stats

from beta_belief.core.belief import BetaBelief
from beta_belief.core.errors import DomainError, InvalidParameterError
from beta_belief.inputs.observations import count_outcomes, validate_observations

logger = logging.getLogger(__name__)


def _check_probability(p: Any) -> float:
    try:
        p = float(p)
    except (TypeError, ValueError) as e:
        raise DomainError(f"p must be a real number in [0, 1], got {p!r}") from e
    if not 0.0 <= p <= 1.0:
        # NaN fails the comparison as well
        raise DomainError(f"p must lie in [0, 1], got {p}")
    return p


def _log_pdf(alpha: float, beta: float, p):
    with np.errstate(divide="ignore", invalid="ignore"):
        return (
            special.xlogy(alpha - 1.0, p)
            + special.xlog1py(beta - 1.0, -p)
            - special.betaln(alpha, beta)
        )


class ConjugateBetaBernoulliUpdater:
    """Maintains Beta posteriors over a Bernoulli success probability."""

    def initialize(self, prior_alpha: float, prior_beta: float) -> BetaBelief:
        """Create the prior belief; Beta(1, 1) is the uniform prior"""
        belief = BetaBelief(prior_alpha, prior_beta)
        logger.debug("Initialized prior Beta(%s, %s)", belief.alpha, belief.beta)
        return belief

    def update(self, belief: BetaBelief, observations: Iterable[Any]) -> BetaBelief:
        """
        Conjugate update rule:
        - New alpha = old alpha + observed heads
        - New beta = old beta + observed tails

        Returns a new belief; the input belief is left untouched.
        """
        heads, tails = count_outcomes(observations)
        if heads == 0 and tails == 0:
            return belief

        posterior = BetaBelief(belief.alpha + heads, belief.beta + tails)
        logger.debug(
            "Updated Beta(%s, %s) with %d heads, %d tails -> Beta(%s, %s)",
            belief.alpha,
            belief.beta,
            heads,
            tails,
            posterior.alpha,
            posterior.beta,
        )
        return posterior

    def mean(self, belief: BetaBelief) -> float:
        return belief.mean

    def variance(self, belief: BetaBelief) -> float:
        return belief.variance

    def log_density(self, belief: BetaBelief, p: float) -> float:
        """Log of the Beta pdf at p; -inf where the density vanishes"""
        p = _check_probability(p)
        return float(_log_pdf(belief.alpha, belief.beta, p))

    def density(self, belief: BetaBelief, p: float) -> float:
        """
        Beta pdf at p.

        At p = 0 (and symmetrically p = 1) the density is 0 when the
        matching parameter exceeds 1 and infinite when it is below 1.
        """
        log_value = self.log_density(belief, p)
        with np.errstate(over="ignore"):
            return float(np.exp(log_value))

    def density_curve(
        self, belief: BetaBelief, num_points: int = 200
    ) -> Tuple[np.ndarray, np.ndarray]:
        """Density over an evenly spaced grid on [0, 1], for plotting"""
        if num_points < 2:
            raise InvalidParameterError(f"num_points must be >= 2, got {num_points}")
        grid = np.linspace(0.0, 1.0, num_points)
        with np.errstate(over="ignore"):
            values = np.exp(_log_pdf(belief.alpha, belief.beta, grid))
        return grid, values

    def credible_interval(
        self, belief: BetaBelief, level: float = 0.95
    ) -> Tuple[float, float]:
        """Equal-tailed credible interval holding ``level`` of the mass"""
        if not 0.0 < level < 1.0:
            raise InvalidParameterError(f"level must lie in (0, 1), got {level}")
        lower, upper = stats.beta.interval(level, belief.alpha, belief.beta)
        return float(lower), float(upper)

    def replay(self, belief: BetaBelief, observations: Iterable[Any]) -> List[BetaBelief]:
        """
        Belief after every prefix of the observations.

        Entry ``n`` is the posterior after the first ``n`` flips, so the
        result has one more entry than there are observations and entry 0
        is the starting belief.
        """
        outcomes = np.asarray(validate_observations(observations), dtype=int)
        heads = np.cumsum(outcomes)
        tails = np.arange(1, len(outcomes) + 1) - heads

        beliefs = [belief]
        for h, t in zip(heads, tails):
            beliefs.append(BetaBelief(belief.alpha + int(h), belief.beta + int(t)))
        return beliefs

    def replay_batches(
        self, belief: BetaBelief, observations: Iterable[Any], batch_size: int
    ) -> List[BetaBelief]:
        """Belief after each batch of ``batch_size`` flips; the last batch may be short"""
        if batch_size < 1:
            raise InvalidParameterError(f"batch_size must be >= 1, got {batch_size}")
        outcomes = validate_observations(observations)

        beliefs = [belief]
        for start in range(0, len(outcomes), batch_size):
            beliefs.append(self.update(beliefs[-1], outcomes[start : start + batch_size]))
        return beliefs
