"""Exception hierarchy for the toast agent."""

from typing import Optional


class TelegramToastError(Exception):
    """Base class for every error raised by the agent."""


class ConfigError(TelegramToastError):
    """Invalid configuration value."""


class TelegramError(TelegramToastError):
    """Fetching updates from the Bot API failed."""


class NetworkError(TelegramError):
    """The HTTP request itself failed (connection, timeout, transport)."""


class DecodeError(TelegramError):
    """The response body is not JSON of the expected shape."""


class APIError(TelegramError):
    """The Bot API answered with ``ok: false``."""

    def __init__(
        self,
        message: str,
        error_code: Optional[int] = None,
        description: Optional[str] = None,
    ):
        super().__init__(message)
        self.error_code = error_code
        self.description = description


class NotificationError(TelegramToastError):
    """Displaying the toast notification failed."""


class InitializationError(NotificationError):
    """The platform notification subsystem could not be initialized."""


class RenderError(NotificationError):
    """A step of building or submitting the toast failed."""

    def __init__(self, message: str, step):
        super().__init__(message)
        self.step = step
