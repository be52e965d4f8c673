import math
from datetime import datetime
from typing import Optional, Union

from config.attribute_config import RANGE_REFLECT

NumberLike = Union[int, float, str]


def current_year() -> int:
    """Current calendar year, read at call time."""
    return datetime.now().year


def to_number(value: NumberLike) -> Optional[float]:
    """
    Convert a number or numeric string to a float.
    
    Args:
        value: Draw number as int, float or string (e.g. 7, "07", " 7")
        
    Returns:
        The numeric value, or None for anything that is not numeric
    """
    if value is None or isinstance(value, bool):
        return None
    try:
        number = float(str(value).strip())
    except ValueError:
        return None
    if not math.isfinite(number):
        return None
    return number


def pad_zero(value: NumberLike, width: int = 2) -> Optional[str]:
    """
    Zero-pad a numeric value to the given width.
    
    Already padded strings come back unchanged and wider values are not
    truncated: pad_zero(7) == "07", pad_zero("07") == "07", pad_zero(123) == "123".
    
    Returns:
        Padded string, or None if the value is not numeric
    """
    number = to_number(value)
    if number is None:
        return None
    # 35.0 pads as "35", not "35.0"
    if not isinstance(value, str) and number.is_integer():
        value = int(number)
    return str(value).strip().rjust(width, '0')


def pad_zero_period(value: NumberLike) -> Optional[str]:
    """Zero-pad a draw period number to width 3."""
    return pad_zero(value, width=3)


def resolve_range(number_type: NumberLike) -> Optional[str]:
    """
    Resolve a lottery type id or range to the range digits "49" or "60".
    
    Accepts 49/60 directly and the lottery type ids 1-4, as int or str.
    Returns None for anything else.
    """
    if number_type is None or isinstance(number_type, bool):
        return None
    return RANGE_REFLECT.get(str(number_type).strip())


def normalize_year(year: Optional[NumberLike]) -> Optional[int]:
    """Year as int; None means the current year. Non-numeric years give None."""
    if year is None:
        return current_year()
    number = to_number(year)
    if number is None:
        return None
    return int(number)
