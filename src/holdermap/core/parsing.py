from __future__ import annotations

import re
from datetime import datetime, timezone
from decimal import ROUND_HALF_UP, Decimal, InvalidOperation
from typing import Any, Optional

import structlog

logger = structlog.get_logger(__name__)

# fromisoformat() before 3.11 only takes 3 or 6 fractional digits
_FRACTION_RE = re.compile(r"(\d{2}:\d{2}:\d{2})\.(\d+)")


def to_decimal(val: Any) -> Optional[Decimal]:
    if val is None or isinstance(val, bool):
        return None
    try:
        d = Decimal(str(val))
    except (InvalidOperation, ValueError):
        return None
    if not d.is_finite():
        return None
    return d


def to_int(val: Any) -> Optional[int]:
    d = to_decimal(val)
    if d is None:
        return None
    return int(d)


def round_half_up(val: Decimal) -> int:
    # to_integral_value ignores context precision; quantize would trap above 28 digits
    return int(val.to_integral_value(rounding=ROUND_HALF_UP))


def _six_digit_fraction(match: re.Match) -> str:
    return f"{match.group(1)}.{(match.group(2) + '000000')[:6]}"


def to_unix_seconds(raw: Any) -> Optional[int]:
    """
    Accepts epoch seconds, epoch milliseconds or an ISO-8601 string
    ("2024-03-01 10:00:00.123" style included). Naive datetimes are UTC.
    """
    if raw is None or raw == "":
        return None
    if isinstance(raw, (int, float, Decimal)) and not isinstance(raw, bool):
        val = int(raw)
        # treat large values as ms
        if val > 10_000_000_000:
            return val // 1000
        return val
    if isinstance(raw, str):
        text = raw.strip()
        if text.isdigit():
            return to_unix_seconds(int(text))
        text = _FRACTION_RE.sub(_six_digit_fraction, text.replace("Z", "+00:00"), count=1)
        try:
            dt = datetime.fromisoformat(text)
        except ValueError:
            logger.debug("timestamp_unparsed", raw=raw)
            return None
        if dt.tzinfo is None:
            dt = dt.replace(tzinfo=timezone.utc)
        return int(dt.timestamp())
    return None
