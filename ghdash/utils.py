"""Shared utilities (UTC timestamp rendering from epoch seconds)."""

import math

SECONDS_PER_DAY = 86_400


def civil_from_days(days: int) -> tuple[int, int, int]:
    """Convert days since 1970-01-01 to (year, month, day).

    Proleptic Gregorian calendar, Howard Hinnant's civil_from_days
    algorithm. Works for negative day counts too.

    Args:
        days: Days since the Unix epoch.

    Returns:
        Tuple (year, month, day) with month and day 1-based.
    """
    z = days + 719_468
    era = z // 146_097  # floor division, so no negative-era correction
    doe = z - era * 146_097  # [0, 146096]
    yoe = (doe - doe // 1460 + doe // 36_524 - doe // 146_096) // 365  # [0, 399]
    y = yoe + era * 400
    doy = doe - (365 * yoe + yoe // 4 - yoe // 100)  # [0, 365]
    mp = (5 * doy + 2) // 153  # [0, 11], March-based
    d = doy - (153 * mp + 2) // 5 + 1
    m = mp + 3 if mp < 10 else mp - 9
    if m <= 2:
        y += 1
    return y, m, d


def _split_day(epoch_seconds: int | float) -> tuple[int, int, int, int]:
    days, secs = divmod(math.floor(epoch_seconds), SECONDS_PER_DAY)
    return days, secs // 3600, (secs % 3600) // 60, secs % 60


def format_timestamp(epoch_seconds: int | float) -> str:
    """Render epoch seconds as ``YYYY-MM-DDTHH:MM:SSZ`` (UTC, no leap seconds).

    Fractional seconds are dropped by rounding down, also before the epoch.
    """
    days, hours, minutes, seconds = _split_day(epoch_seconds)
    year, month, day = civil_from_days(days)
    return f"{year:04d}-{month:02d}-{day:02d}T{hours:02d}:{minutes:02d}:{seconds:02d}Z"


def format_clock(epoch_seconds: int | float) -> str:
    """Render the time of day of epoch seconds as ``HH:MM:SS UTC``."""
    _, hours, minutes, seconds = _split_day(epoch_seconds)
    return f"{hours:02d}:{minutes:02d}:{seconds:02d} UTC"
