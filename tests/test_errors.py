"""Tests for perch.errors — exception hierarchy."""

from perch.errors import ConfigurationError, InvalidURL, PerchError


class TestHierarchy:
    def test_invalid_url_is_perch_error(self) -> None:
        assert issubclass(InvalidURL, PerchError)

    def test_configuration_error_is_perch_error(self) -> None:
        assert issubclass(ConfigurationError, PerchError)


class TestInvalidURL:
    def test_fields(self) -> None:
        err = InvalidURL("s/t", "missing scheme")
        assert err.url == "s/t"
        assert err.reason == "missing scheme"

    def test_str(self) -> None:
        assert str(InvalidURL("", "empty string")) == "Invalid URL '': empty string"
