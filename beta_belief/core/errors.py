class BeliefError(Exception):
    """Base exception for belief updating errors."""

    pass


class InvalidParameterError(BeliefError, ValueError):
    """Raised for non-positive Beta parameters and other invalid settings."""

    pass


class DomainError(BeliefError, ValueError):
    """Raised when a probability lies outside [0, 1]."""

    pass


class InvalidObservationError(BeliefError, ValueError):
    """Raised for observations that are not binary outcomes."""

    pass
