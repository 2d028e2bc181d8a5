"""Tests for time unit conversion functionality."""

import pytest

from dbbench.time_units import TimeUnitConverter


class TestTimeUnitConverter:
    """Test TimeUnitConverter utility class."""

    def test_basic_conversion(self):
        """Test basic time unit conversions."""
        assert TimeUnitConverter.convert_value(1.5, "s", "ms") == pytest.approx(1500.0)
        assert TimeUnitConverter.convert_value(2.0, "s", "us") == pytest.approx(2e6)
        assert TimeUnitConverter.convert_value(1500.0, "ms", "s") == pytest.approx(1.5)
        assert TimeUnitConverter.convert_value(1.0, "ms", "us") == pytest.approx(1000.0)

        # Same unit (no conversion)
        assert TimeUnitConverter.convert_value(5.0, "s", "s") == 5.0

    def test_none_values(self):
        assert TimeUnitConverter.convert_value(None, "s", "ms") is None

    def test_invalid_conversion(self):
        with pytest.raises(ValueError):
            TimeUnitConverter.convert_value(1.0, "s", "invalid")

        with pytest.raises(ValueError):
            TimeUnitConverter.convert_value(1.0, "invalid", "s")

    def test_format_elapsed(self):
        assert TimeUnitConverter.format_elapsed(0.0123456, "ms") == "12.346 ms"
        assert TimeUnitConverter.format_elapsed(2, "s") == "2.000 s"
        assert TimeUnitConverter.format_elapsed(None, "s") == "running"

    def test_unit_label(self):
        assert TimeUnitConverter.get_unit_label("Elapsed", "us") == "Elapsed (us)"

    def test_validate_unit(self):
        assert TimeUnitConverter.validate_unit("S") == "s"
        assert TimeUnitConverter.validate_unit(" milliseconds ") == "ms"
        assert TimeUnitConverter.validate_unit("microseconds") == "us"

        with pytest.raises(ValueError, match="Unsupported time unit"):
            TimeUnitConverter.validate_unit("h")
