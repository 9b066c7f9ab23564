"""Tests for the error taxonomy."""

import pytest

from podpublisher.utils.errors import (
    ContentUnavailableError,
    ConversionError,
    FetchError,
    MetadataParseError,
    MetadataServiceError,
    PublisherError,
    TimeParseError,
    UploadError,
    error_kind,
)


class TestErrorKinds:
    """Tests for error categories."""

    @pytest.mark.parametrize(
        ("error", "kind"),
        [
            (ContentUnavailableError("x"), "ContentUnavailable"),
            (MetadataServiceError("x", status_code=500), "MetadataServiceError"),
            (MetadataParseError("x"), "MetadataParseError"),
            (ConversionError("x"), "ConversionError"),
            (TimeParseError("x"), "TimeParseError"),
            (UploadError("x", status_code=400), "UploadError"),
            (FetchError("x", url="https://example.com"), "FetchError"),
        ],
    )
    def test_kind(self, error: PublisherError, kind: str) -> None:
        """Test each error reports its category."""
        assert isinstance(error, PublisherError)
        assert error_kind(error) == kind

    def test_foreign_error_uses_class_name(self) -> None:
        """Test other exceptions report their class name."""
        assert error_kind(KeyError("x")) == "KeyError"

    def test_service_error_fields(self) -> None:
        """Test status and details are kept."""
        error = MetadataServiceError("boom", status_code=429, details={"raw": "slow down"})

        assert str(error) == "boom"
        assert error.status_code == 429
        assert error.details == {"raw": "slow down"}
