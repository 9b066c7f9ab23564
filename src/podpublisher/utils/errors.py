"""Custom exceptions for Podpublisher.

Every pipeline error carries a ``kind`` naming its category. The kind is
what ends up in the ``type`` field of a failed run's result line.
"""

from typing import Any


class PublisherError(Exception):
    """Base exception for all Podpublisher errors."""

    kind = "PublisherError"


class ConfigError(PublisherError):
    """Configuration-related errors."""

    kind = "ConfigError"


class InvalidConfigError(ConfigError):
    """Invalid configuration data."""

    kind = "InvalidConfigError"


class ConfigNotFoundError(ConfigError):
    """Configuration file not found."""

    kind = "ConfigNotFoundError"


class FetchError(PublisherError):
    """Remote content could not be retrieved."""

    kind = "FetchError"

    def __init__(self, message: str, url: str, status_code: int | None = None) -> None:
        super().__init__(message)
        self.url = url
        self.status_code = status_code


class ContentUnavailableError(PublisherError):
    """No usable page content to generate metadata from."""

    kind = "ContentUnavailable"


class MetadataServiceError(PublisherError):
    """The LLM service rejected the request or could not be reached."""

    kind = "MetadataServiceError"

    def __init__(
        self,
        message: str,
        status_code: int | None = None,
        details: Any = None,
    ) -> None:
        super().__init__(message)
        self.status_code = status_code
        self.details = details


class MetadataParseError(PublisherError):
    """The LLM answered, but not with the expected JSON object."""

    kind = "MetadataParseError"

    def __init__(self, message: str, raw_output: str | None = None) -> None:
        super().__init__(message)
        self.raw_output = raw_output


class ConversionError(PublisherError):
    """Converting content (HTML to markdown, or audio to MP3) failed."""

    kind = "ConversionError"

    def __init__(self, message: str, stderr: str | None = None) -> None:
        super().__init__(message)
        self.stderr = stderr


class TimeParseError(PublisherError):
    """Publish date and time do not form a valid timestamp."""

    kind = "TimeParseError"


class UploadError(PublisherError):
    """The hosting service did not accept the episode."""

    kind = "UploadError"

    def __init__(
        self,
        message: str,
        status_code: int | None = None,
        details: Any = None,
    ) -> None:
        super().__init__(message)
        self.status_code = status_code
        self.details = details


def error_kind(error: BaseException) -> str:
    """Return the category name reported for an error."""
    if isinstance(error, PublisherError):
        return error.kind
    return type(error).__name__
