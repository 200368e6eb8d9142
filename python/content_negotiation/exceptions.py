"""Exceptions raised by the content negotiation middleware."""


class ContentNegotiationError(Exception):
    """Base class for content negotiation errors."""


class UnsupportedStrategyError(ContentNegotiationError, ValueError):
    """Raised when a versioning strategy name is not recognized."""

    def __init__(self, strategy: str):
        self.strategy = strategy
        super().__init__(f"Unsupported versioning strategy: {strategy!r}")


class EncodingError(ContentNegotiationError):
    """Raised when a response value cannot be serialized for the negotiated format."""

    def __init__(self, format_key: str, message: str):
        self.format_key = format_key
        super().__init__(f"Unable to encode response as {format_key}: {message}")
