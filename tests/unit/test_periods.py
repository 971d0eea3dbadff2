"""
Unit tests for MM-YYYY period validation.
"""

import pytest

from src.api.periods import is_valid_period, validate_period
from src.common.exceptions import ValidationError


@pytest.mark.parametrize("month", [f"{value:02d}" for value in range(1, 13)])
def test_every_calendar_month_is_accepted(month: str) -> None:
    assert is_valid_period(f"{month}-2025")


@pytest.mark.parametrize("year", ["0000", "1999", "9999"])
def test_year_range_is_not_checked(year: str) -> None:
    assert is_valid_period(f"06-{year}")


@pytest.mark.parametrize(
    "value",
    [
        "00-2025",
        "13-2025",
        "1-2025",
        "001-2025",
        "07-25",
        "07-20255",
        "072025",
        "07/2025",
        "2025-07",
        " 07-2025",
        "07-2025\n",
        "",
        "ab-cdef",
    ],
)
def test_malformed_periods_are_rejected(value: str) -> None:
    assert not is_valid_period(value)


def test_validate_period_names_the_field() -> None:
    assert validate_period("12-2024", field_name="period") == "12-2024"
    with pytest.raises(ValidationError, match="end_date must be in MM-YYYY format"):
        validate_period("12/2024", field_name="end_date")
