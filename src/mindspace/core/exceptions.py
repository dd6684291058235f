"""Custom exceptions for MindSpace."""


class MindspaceError(Exception):
    """Base exception for all MindSpace errors."""

    def __init__(self, message: str, *args: object) -> None:
        self.message = message
        super().__init__(message, *args)


# Analysis errors
class AnalysisError(MindspaceError):
    """Base error for the analysis layer."""


class InvalidInputError(AnalysisError):
    """Input is not analysable text."""


class InputTooLargeError(AnalysisError):
    """Input exceeds the configured length bound."""

    def __init__(self, length: int, limit: int) -> None:
        self.length = length
        self.limit = limit
        super().__init__(f"Text too long: {length} characters (maximum {limit})")


class ExternalAnalysisError(AnalysisError):
    """An externally produced analysis could not be parsed or validated."""


# Tracking errors
class TrackingError(MindspaceError):
    """Base error for the continuous tracking layer."""


class UnknownUserError(TrackingError):
    """No tracked history exists for the requested user."""
