"""Time unit conversion utilities for dbbench elapsed times."""

from typing import Optional


class TimeUnitConverter:
    """Utility class for converting elapsed times between different units."""

    # Factor to convert seconds into each unit
    FACTORS = {"s": 1.0, "ms": 1_000.0, "us": 1_000_000.0}

    @classmethod
    def convert_value(
        cls, value: Optional[float], from_unit: str, to_unit: str
    ) -> Optional[float]:
        """
        Convert a time value between units.

        Args:
            value: The time value to convert (can be None)
            from_unit: Source unit ('s', 'ms' or 'us')
            to_unit: Target unit ('s', 'ms' or 'us')

        Returns:
            Converted value or None if input was None
        """
        if value is None:
            return None

        if from_unit not in cls.FACTORS or to_unit not in cls.FACTORS:
            raise ValueError(f"Unsupported unit conversion: {from_unit} -> {to_unit}")

        if from_unit == to_unit:
            return value

        return value / cls.FACTORS[from_unit] * cls.FACTORS[to_unit]

    @classmethod
    def format_elapsed(cls, seconds: Optional[float], unit: str) -> str:
        """Render an elapsed time in seconds for display, e.g. '12.345 ms'."""
        value = cls.convert_value(seconds, "s", unit)
        if value is None:
            return "running"
        return f"{value:.3f} {unit}"

    @staticmethod
    def get_unit_label(base_label: str, unit: str) -> str:
        """Append the time unit to a column label, e.g. 'Elapsed (ms)'."""
        return f"{base_label} ({unit})"

    @staticmethod
    def validate_unit(unit: str) -> str:
        """
        Validate and normalize a time unit string.

        Raises:
            ValueError: If unit is not supported
        """
        unit = unit.lower().strip()
        if unit in ["s", "sec", "second", "seconds"]:
            return "s"
        elif unit in ["ms", "millisecond", "milliseconds"]:
            return "ms"
        elif unit in ["us", "µs", "microsecond", "microseconds"]:
            return "us"
        else:
            raise ValueError(
                f"Unsupported time unit: {unit}. Supported units: s, ms, us"
            )
