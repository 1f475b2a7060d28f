class DomainError(Exception):
    """Base exception for business rule violations."""


class ValidationError(DomainError):
    """Raised when input data is invalid or violates domain rules."""


class ConfigurationError(DomainError):
    """Raised when the caller supplied an unusable configuration."""


class InvalidTimezoneError(ConfigurationError):
    """Raised for a timezone name that is not a known IANA zone."""

    def __init__(self, timezone: str):
        super().__init__(f"Unknown timezone: {timezone!r}")
        self.timezone = timezone
