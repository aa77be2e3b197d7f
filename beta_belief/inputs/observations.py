"""
Coin-flip observations.

An observation is a single binary outcome: ``True`` for heads (success),
``False`` for tails (failure). Flips generated with numpy come out as
boolean arrays (``rng.random(n) < p``), so numpy booleans and the integers
0/1 are accepted alongside Python booleans.
"""

import logging
from pathlib import Path
from typing import Any, Iterable, List, Optional, Tuple

import numpy as np
import yaml

from beta_belief.core.errors import (
    DomainError,
    InvalidObservationError,
    InvalidParameterError,
)

logger = logging.getLogger(__name__)


def _as_outcome(value: Any, index: int) -> bool:
    if isinstance(value, (bool, np.bool_)):
        return bool(value)
    if isinstance(value, (int, np.integer)) and value in (0, 1):
        return bool(value)
    raise InvalidObservationError(
        f"Observation {index} is not a binary outcome: {value!r}"
    )


def validate_observations(observations: Iterable[Any]) -> List[bool]:
    """Return the observations as a list of plain booleans"""
    if observations is None:
        raise InvalidObservationError("Observations must be a sequence, got None")
    if isinstance(observations, (str, bytes)):
        raise InvalidObservationError("Observations must be a sequence of outcomes, not a string")
    try:
        items = list(observations)
    except TypeError as e:
        raise InvalidObservationError(
            f"Observations must be iterable, got {type(observations).__name__}"
        ) from e
    return [_as_outcome(value, i) for i, value in enumerate(items)]


def count_outcomes(observations: Iterable[Any]) -> Tuple[int, int]:
    """Sufficient statistics of a flip sequence: (successes, failures)"""
    outcomes = validate_observations(observations)
    successes = sum(outcomes)
    return successes, len(outcomes) - successes


def generate_flips(
    true_prob: float, num_flips: int, seed: Optional[int] = None
) -> List[bool]:
    """Draw ``num_flips`` Bernoulli(true_prob) outcomes"""
    if not 0.0 <= true_prob <= 1.0:
        raise DomainError(f"true_prob must lie in [0, 1], got {true_prob}")
    if num_flips < 0:
        raise InvalidParameterError(f"num_flips must be >= 0, got {num_flips}")

    rng = np.random.default_rng(seed)
    flips = rng.random(num_flips) < true_prob
    logger.debug(
        "Generated %d flips with p=%.3f (%d heads)", num_flips, true_prob, int(flips.sum())
    )
    return flips.tolist()


def load_observations(path: Path) -> List[bool]:
    """
    Load observations from a YAML file.

    The file holds either a plain list of outcomes or a mapping with an
    ``observations`` key:

        observations: [true, true, false, 1, 0]
    """
    with open(path, "r") as f:
        try:
            content = yaml.safe_load(f)
        except yaml.YAMLError as e:
            raise InvalidObservationError(f"Could not parse {path}: {e}") from e

    if isinstance(content, dict):
        if "observations" not in content:
            raise InvalidObservationError(f"{path} has no 'observations' key")
        content = content["observations"]
    if content is None:
        content = []
    if not isinstance(content, list):
        raise InvalidObservationError(
            f"{path} must contain a list of outcomes, got {type(content).__name__}"
        )

    outcomes = validate_observations(content)
    logger.info("Loaded %d observations from %s", len(outcomes), path)
    return outcomes
