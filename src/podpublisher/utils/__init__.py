"""Utility functions and helpers for Podpublisher."""

from podpublisher.utils.errors import (
    ConfigError,
    ConfigNotFoundError,
    ContentUnavailableError,
    ConversionError,
    FetchError,
    InvalidConfigError,
    MetadataParseError,
    MetadataServiceError,
    PublisherError,
    TimeParseError,
    UploadError,
    error_kind,
)

__all__ = [
    "PublisherError",
    "ConfigError",
    "InvalidConfigError",
    "ConfigNotFoundError",
    "FetchError",
    "ContentUnavailableError",
    "MetadataServiceError",
    "MetadataParseError",
    "ConversionError",
    "TimeParseError",
    "UploadError",
    "error_kind",
]
