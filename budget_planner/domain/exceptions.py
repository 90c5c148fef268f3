"""Domain-specific exceptions"""


class DomainException(Exception):
    """Base exception for domain layer"""

    pass


class InvalidInput(DomainException):
    """Request violates a precondition (e.g. amount below minimum)"""

    pass


class UnreachableGoal(DomainException):
    """Goal cannot be reached with the given savings rate"""

    pass


class UnrealisticTimeframe(DomainException):
    """Solved timeframe is non-finite or beyond the 50 year horizon"""

    pass


class RetriesExhausted(DomainException):
    """External call kept failing with retryable errors until the attempt cap"""

    def __init__(self, attempts: int, last_error: BaseException | None):
        self.attempts = attempts
        self.last_error = last_error
        super().__init__(f"Gave up after {attempts} attempts: {last_error}")


class NarrativeError(DomainException):
    """Narrative service returned an error or is unavailable"""

    pass


class NarrativeOverloadedError(NarrativeError):
    """Narrative service signalled overload or rate limiting (retryable)"""

    pass


class NarrativeAPIError(NarrativeError):
    """Narrative service failed with a non-transient error"""

    pass


class NarrativeResponseError(NarrativeError):
    """Narrative service response is malformed"""

    pass


class AllocationInvariantError(RuntimeError):
    """Allocation percentages or future values do not add up (programming error)"""

    pass
