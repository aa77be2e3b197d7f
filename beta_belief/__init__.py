from beta_belief.core.belief import BetaBelief
from beta_belief.core.errors import (
    BeliefError,
    DomainError,
    InvalidObservationError,
    InvalidParameterError,
)
from beta_belief.core.updater import ConjugateBetaBernoulliUpdater

__all__ = [
    "BetaBelief",
    "BeliefError",
    "ConjugateBetaBernoulliUpdater",
    "DomainError",
    "InvalidObservationError",
    "InvalidParameterError",
]
