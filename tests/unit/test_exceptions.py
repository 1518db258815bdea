"""
Tests for custom exceptions.
"""

import pytest


class TestLocatorEngineError:
    """Test the base LocatorEngineError exception."""

    def test_create_base_error(self):
        """Test creating a LocatorEngineError."""
        from semantic_locator.exceptions import LocatorEngineError
        error = LocatorEngineError("Something went wrong")
        assert str(error) == "Something went wrong"
        assert error.details == {}

    def test_details_in_message(self):
        """Test details are appended to the message."""
        from semantic_locator.exceptions import LocatorEngineError
        error = LocatorEngineError("Bad input", {"locator": "#a"})
        assert str(error) == "Bad input - Details: {'locator': '#a'}"
        assert error.message == "Bad input"

    def test_configuration_error_is_base_error(self):
        """Test that ConfigurationError is subclass of LocatorEngineError."""
        from semantic_locator.exceptions import ConfigurationError, LocatorEngineError
        assert issubclass(ConfigurationError, LocatorEngineError)


class TestLocatorErrors:
    """Test classification and composition errors."""

    @pytest.mark.parametrize("name", [
        "InvalidLocatorError",
        "InvalidCompositionError",
        "UnconvertibleLocatorError",
        "NullLocatorError",
        "InvalidPositionError",
    ])
    def test_hierarchy(self, name):
        """Test every locator error is a LocatorError."""
        import semantic_locator.exceptions as exceptions
        assert issubclass(getattr(exceptions, name), exceptions.LocatorError)
        assert issubclass(exceptions.LocatorError, exceptions.LocatorEngineError)

    def test_composition_error_details(self):
        """Test composition errors carry the operation and XPath."""
        from semantic_locator.exceptions import InvalidCompositionError
        error = InvalidCompositionError("round brackets", operation="with_child", xpath="(.//td)[1]")
        assert error.operation == "with_child"
        assert error.details == {"operation": "with_child", "xpath": "(.//td)[1]"}

    def test_position_error(self):
        """Test position errors carry the position."""
        from semantic_locator.exceptions import InvalidPositionError
        error = InvalidPositionError("0 is not valid", position=0)
        assert error.position == 0


class TestSearchErrors:
    """Test search errors."""

    def test_element_not_found(self):
        """Test creating an ElementNotFoundError."""
        from semantic_locator.exceptions import ElementNotFoundError, SearchError
        error = ElementNotFoundError('Element "Save" was not found', locator="Save", description="Element")
        assert "not found" in str(error).lower()
        assert error.locator == "Save"
        assert isinstance(error, SearchError)
