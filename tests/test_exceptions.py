"""Tests for igor exception classes."""

import pytest

from igor.exceptions import (
    ConfigParseError,
    ConfigReadError,
    ConfigWriteError,
    IgorConfigError,
    IgorDirectoryError,
    IgorError,
    IgorFileOperationError,
    IgorHomeDirError,
    IgorSymlinkError,
    IgorValidationError,
)


class TestExceptionHierarchy:
    """Test exception class hierarchy and behavior."""

    def test_base_exception(self):
        """Test base IgorError exception."""
        error = IgorError("Test error")
        assert str(error) == "Test error"
        assert isinstance(error, Exception)

    @pytest.mark.parametrize(
        "exc_class", [ConfigReadError, ConfigParseError, ConfigWriteError]
    )
    def test_config_errors(self, exc_class):
        """Config store errors share a common parent."""
        error = exc_class("bad config")
        assert isinstance(error, IgorConfigError)
        assert isinstance(error, IgorError)

    @pytest.mark.parametrize("exc_class", [IgorDirectoryError, IgorSymlinkError])
    def test_file_operation_errors(self, exc_class):
        """Directory and symlink errors are file operation errors."""
        error = exc_class("nope")
        assert isinstance(error, IgorFileOperationError)
        assert isinstance(error, IgorError)

    def test_other_errors(self):
        """Remaining errors derive straight from IgorError."""
        assert isinstance(IgorHomeDirError("no home"), IgorError)
        assert isinstance(IgorValidationError("bad path"), IgorError)


class TestExceptionUsage:
    """Test exception usage patterns."""

    def test_catching_by_base_class(self):
        """Specific errors can be caught through IgorError."""
        with pytest.raises(IgorError, match="cannot parse"):
            raise ConfigParseError("cannot parse")

    def test_exception_chaining(self):
        """Wrapped OS errors keep their cause."""
        try:
            try:
                raise OSError("disk full")
            except OSError as e:
                raise ConfigWriteError("Failed to write config file") from e
        except ConfigWriteError as e:
            assert isinstance(e.__cause__, OSError)
            assert str(e.__cause__) == "disk full"
