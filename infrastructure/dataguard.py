# ============================================================================
# DATA GUARD LAG PARSER
# ============================================================================
# EPOCH: 1 - FLEET PROBING
# STATUS: Infrastructure - V$DATAGUARD_STATS value parsing
# PURPOSE: Convert day-to-second interval literals into seconds
# CREATED: 18 OCT 2026
# ============================================================================
"""
Data Guard Lag Parser

V$DATAGUARD_STATS reports 'transport lag' and 'apply lag' as
INTERVAL DAY TO SECOND literals rendered as text:

    +00 00:00:00    no lag
    +01 02:03:04    1 day, 2 hours, 3 minutes, 4 seconds

The value is already an elapsed duration: no rounding, no timezone.
"""

from typing import Optional

from core.errors import LagFormatError

ZERO_LAG = "+00 00:00:00"


def parse_lag(lag: Optional[str]) -> int:
    """
    Parse a '+DD HH:MI:SS' literal into total seconds.

    Args:
        lag: Interval text; None or empty means no lag

    Returns:
        days*86400 + hours*3600 + minutes*60 + seconds

    Raises:
        LagFormatError: Missing '+', wrong field count, non-integer field
    """
    lag = (lag or "").strip()

    if lag == "" or lag == ZERO_LAG:
        return 0

    if not lag.startswith("+"):
        raise LagFormatError(
            f"invalid lag format: expected '+DD HH:MI:SS', got '{lag}'",
            fragment=lag,
        )

    parts = lag[1:].split(" ", 1)
    if len(parts) != 2:
        raise LagFormatError(
            f"invalid lag format structure (days part): '{lag}'",
            fragment=lag,
        )
    day_part, time_part = parts

    days = _parse_field(day_part, "days", lag)

    time_fields = time_part.split(":")
    if len(time_fields) != 3:
        raise LagFormatError(
            f"invalid time format structure in lag '{lag}': '{time_part}'",
            fragment=time_part,
        )

    hours = _parse_field(time_fields[0], "hours", lag)
    minutes = _parse_field(time_fields[1], "minutes", lag)
    seconds = _parse_field(time_fields[2], "seconds", lag)

    return days * 86400 + hours * 3600 + minutes * 60 + seconds


def _parse_field(value: str, label: str, lag: str) -> int:
    # int() alone would accept '+5', ' 5' and '1_0'
    if not (value.isascii() and value.isdigit()):
        raise LagFormatError(
            f"invalid {label} value in lag '{lag}': '{value}'",
            fragment=value,
        )
    return int(value)


__all__ = [
    "ZERO_LAG",
    "parse_lag",
]
