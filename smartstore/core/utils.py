from datetime import date, datetime
from decimal import Decimal, ROUND_HALF_UP
from typing import Union

from smartstore.core.exceptions import ValidationError

Number = Union[int, float, Decimal, str]

CENT = Decimal("0.01")
SQLITE_DATETIME_FORMAT = "%Y-%m-%d %H:%M:%S"


def to_decimal(value: Number | None) -> Decimal:
    # floats go through str() so 0.1 stays 0.1
    if value is None:
        return Decimal("0")
    if isinstance(value, Decimal):
        return value
    return Decimal(str(value))


def money(value: Number | None) -> Decimal:
    """Round to currency precision (2 places, half up)."""
    return to_decimal(value).quantize(CENT, rounding=ROUND_HALF_UP)


def money_float(value: Number | None) -> float:
    """Value as stored in the REAL money columns."""
    return float(money(value))


def to_sqlite_datetime(moment: datetime) -> str:
    return moment.strftime(SQLITE_DATETIME_FORMAT)


def iso_date(value: Union[date, str]) -> str:
    if isinstance(value, datetime):
        return value.date().isoformat()
    if isinstance(value, date):
        return value.isoformat()
    try:
        return date.fromisoformat(str(value)).isoformat()
    except ValueError:
        raise ValidationError(f"Invalid date: {value!r}. Use YYYY-MM-DD.")


def safe_div(n: Decimal, d: Decimal) -> Decimal:
    return n / d if d else Decimal("0")


def escape_like(text: str) -> str:
    return text.replace("\\", "\\\\").replace("%", "\\%").replace("_", "\\_")
