"""Custom exceptions for nuget-inspector."""


class InspectorError(Exception):
    """Base exception for all inspector errors."""


class ConfigurationError(InspectorError):
    """Raised when an inspector is constructed without usable options."""


class NotFoundError(InspectorError):
    """Raised when a referenced solution or project file does not exist."""


class PatternError(InspectorError):
    """An include/exclude entry could not be used as a regular expression."""

    def __init__(self, pattern: str, reason: str):
        self.pattern = pattern
        self.reason = reason
        super().__init__(f"Unable to use '{pattern}' as a regular expression: {reason}")


class ResolutionError(InspectorError):
    """Raised when a project's packages and dependencies cannot be determined."""


class ProbeError(InspectorError):
    """Raised when output paths cannot be evaluated for a project."""
