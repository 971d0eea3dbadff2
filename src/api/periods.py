# This file validates billing period strings in MM-YYYY form.
# Periods bound subscriptions and filter cost queries, so both paths share these checks.

from __future__ import annotations

import re

from src.common.exceptions import ValidationError

PERIOD_RE = re.compile(r"^(0[1-9]|1[0-2])-[0-9]{4}$")


def is_valid_period(value: str) -> bool:
    """Return True when `value` is a two-digit month 01-12, a dash, and a four-digit year."""

    return PERIOD_RE.fullmatch(value) is not None


def validate_period(value: str, *, field_name: str) -> str:
    if not is_valid_period(value):
        raise ValidationError(f"{field_name} must be in MM-YYYY format")
    return value
