import math
from dataclasses import dataclass
from typing import Any, Dict

from beta_belief.core.errors import InvalidParameterError


def _check_parameter(name: str, value: float) -> float:
    try:
        value = float(value)
    except (TypeError, ValueError) as e:
        raise InvalidParameterError(f"{name} must be a real number, got {value!r}") from e
    if not math.isfinite(value) or value <= 0:
        raise InvalidParameterError(f"{name} must be a finite number > 0, got {value}")
    return value


@dataclass(frozen=True)
class BetaBelief:
    """
    Beta(alpha, beta) belief over the success probability of a coin.

    alpha : float
        Pseudo-count of successes (heads), prior included
    beta : float
        Pseudo-count of failures (tails), prior included

    Instances are immutable; every update produces a new belief, so a
    belief can be kept as a snapshot for plotting without copying.
    """

    alpha: float
    beta: float

    def __post_init__(self):
        object.__setattr__(self, "alpha", _check_parameter("alpha", self.alpha))
        object.__setattr__(self, "beta", _check_parameter("beta", self.beta))
        if not math.isfinite(self.alpha + self.beta):
            raise InvalidParameterError(
                f"alpha + beta must be finite, got {self.alpha} + {self.beta}"
            )

    @property
    def total(self) -> float:
        return self.alpha + self.beta

    @property
    def mean(self) -> float:
        return self.alpha / self.total

    @property
    def variance(self) -> float:
        total = self.total
        return (self.alpha / total) * (self.beta / total) / (total + 1.0)

    @property
    def std(self) -> float:
        return math.sqrt(self.variance)

    def as_dict(self) -> Dict[str, Any]:
        """JSON-friendly view of the belief"""
        return {
            "alpha": self.alpha,
            "beta": self.beta,
            "mean": self.mean,
            "variance": self.variance,
        }
