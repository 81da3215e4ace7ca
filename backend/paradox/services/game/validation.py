import math

from paradox.errors import ValidationError

# Ids are stored as signed 64-bit integers
MAX_RECORD_ID = 2 ** 63 - 1


def finite_number(value, field: str) -> float:
    """Coerce a JSON value to a finite float or raise ValidationError."""
    if value is None or isinstance(value, bool):
        raise ValidationError(f'{field} must be a number')
    if isinstance(value, str):
        value = value.strip()
    try:
        number = float(value)
    except (TypeError, ValueError, OverflowError):
        raise ValidationError(f'{field} must be a number')
    if not math.isfinite(number):
        raise ValidationError(f'{field} must be a finite number')
    return number


def record_id(value, field: str) -> int:
    if value is None or isinstance(value, bool):
        raise ValidationError(f'{field} is required')
    try:
        ident = int(value)
    except (TypeError, ValueError, OverflowError):
        raise ValidationError(f'{field} must be an integer id')
    if isinstance(value, float) and value != ident:
        raise ValidationError(f'{field} must be an integer id')
    if not -MAX_RECORD_ID - 1 <= ident <= MAX_RECORD_ID:
        raise ValidationError(f'{field} is out of range')
    return ident


def required_text(value, field: str) -> str:
    if not isinstance(value, str) or not value.strip():
        raise ValidationError(f'{field} is required')
    return value
