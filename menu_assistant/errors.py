from __future__ import annotations


class MenuAssistantError(Exception):
    """Base class for errors raised by this package."""


class ConfigurationError(MenuAssistantError):
    """Required configuration is missing or invalid."""


class StoreUnavailable(MenuAssistantError):
    """The menu store could not be reached or a query failed."""


class CompletionFailed(MenuAssistantError):
    """The completion API call failed (transport, HTTP status or payload shape)."""

    def __init__(self, message: str, status_code: int | None = None) -> None:
        super().__init__(message)
        self.status_code = status_code


class MalformedCompletionOutput(MenuAssistantError):
    """Completion text did not have the expected format."""
