"""Domain error types for portfolio computations."""


class PortfolioError(Exception):
    """Base class for portfolio engine errors."""


class DataIntegrityError(PortfolioError):
    """Raised when a balance or price field cannot be trusted.

    Attributes:
        field: Name of the offending field.
        value: Raw value that failed validation.
        context: Identity of the record being processed, if known.
    """

    def __init__(
        self,
        message: str,
        *,
        field: str | None = None,
        value: object = None,
        context: str | None = None,
    ) -> None:
        self.field = field
        self.value = value
        self.context = context
        details = message
        if context:
            details = f"{message} ({context})"
        super().__init__(details)


class ConfigurationError(PortfolioError, RuntimeError):
    """Raised when required configuration is missing or invalid."""


__all__ = ["PortfolioError", "DataIntegrityError", "ConfigurationError"]
