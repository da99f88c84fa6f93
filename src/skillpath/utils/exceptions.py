"""
Custom exceptions for the SkillPath wizard.
"""


class InvalidStep(ValueError):
    """Raised when navigating to a step outside [1, TOTAL_STEPS]."""

    def __init__(self, step, total_steps: int):
        self.step = step
        self.total_steps = total_steps
        super().__init__(f"Step must be between 1 and {total_steps}, got {step!r}")


class AnswerRejected(ValueError):
    """Raised when an answer does not satisfy the current question's guard."""

    pass


class SessionNotFound(KeyError):
    """Raised when a wizard session id is unknown."""

    pass


class ExternalServiceError(Exception):
    """Raised when an external dependency returns an unusable result."""

    pass
