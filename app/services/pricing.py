"""Booking cost from the rented interval, the vehicle's daily rate and the hire type."""
import math
from datetime import timedelta
from decimal import Decimal, ROUND_HALF_UP

from app.models.booking import HireType
from app.utils.exceptions import InvalidHireTypeError
from app.utils.time_range import TimeRange

HOURS_PER_DAY = 24
HOURS_PER_WEEK = 24 * 7

_CENT = Decimal("0.01")


def _hours(duration: timedelta) -> Decimal:
    return Decimal(duration // timedelta(microseconds=1)) / Decimal(3_600_000_000)


def compute_cost(time_range: TimeRange, daily_rate: Decimal | int | str, hire_type: HireType | str) -> Decimal:
    """Partial days and weeks are charged in full (ceil, never round-to-nearest)."""
    try:
        hire_type = HireType(hire_type)
    except ValueError:
        raise InvalidHireTypeError(f"Unknown hire type: {hire_type!r}") from None

    rate = Decimal(daily_rate)
    hours = _hours(time_range.duration)

    if hire_type is HireType.HOURLY:
        cost = rate / HOURS_PER_DAY * hours
    elif hire_type is HireType.DAILY:
        cost = rate * math.ceil(hours / HOURS_PER_DAY)
    else:
        cost = rate * 7 * math.ceil(hours / HOURS_PER_WEEK)

    return cost.quantize(_CENT, rounding=ROUND_HALF_UP)
