class BaseEligibilityException(Exception):
    """Base class for the hold eligibility service's exceptions.

    `message` is the text the exception was raised with, or None.
    """

    def __init__(self, message: str | None = None) -> None:
        super().__init__(message)
        self.message = message


class EligibilityValueError(BaseEligibilityException, ValueError):
    """An argument was out of range, for example a malformed Sierra path."""


class IntegrationException(BaseEligibilityException):
    """Something went wrong with a service we depend on: Sierra, KMS or the
    patron type mapping.

    `debug_message` says more about what went wrong. It is logged, but never
    returned to API clients.
    """

    def __init__(self, message: str | None, debug_message: str | None = None) -> None:
        super().__init__(message)
        self.debug_message = debug_message


class CannotLoadConfiguration(IntegrationException):
    """The service's settings are missing or unusable, so it can't start."""
