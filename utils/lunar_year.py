"""Gregorian date to Chinese lunar year."""

from datetime import date, datetime
from typing import Union

# Spring Festival (month, day) per Gregorian year
SPRING_FESTIVAL_DATES = {
    2024: (2, 10),
    2025: (1, 29),
    2026: (2, 17),
    2027: (2, 6),
    2028: (1, 26),
    2029: (2, 13),
    2030: (2, 3),
    2031: (1, 23),
    2032: (2, 11),
    2033: (1, 31),
    2034: (2, 19),
    2035: (2, 8),
    2036: (1, 28),
}

# Assumed Spring Festival outside the table
DEFAULT_SPRING_FESTIVAL = (2, 1)


def get_lunar_year(value: Union[date, datetime, str]) -> int:
    """
    Return the lunar year a Gregorian date belongs to.
    
    Dates before that year's Spring Festival belong to the previous lunar year:
    
        >>> get_lunar_year('2024/1/1')
        2023
        >>> get_lunar_year('2024-03-05')
        2024
    
    Args:
        value: date, datetime, or a 'YYYY-MM-DD' / 'YYYY/MM/DD' string
    """
    if isinstance(value, datetime):
        day = value.date()
    elif isinstance(value, date):
        day = value
    else:
        parts = str(value).strip().replace('/', '-').split('-')
        if len(parts) != 3:
            raise ValueError(f"Unrecognized date: {value!r}")
        day = date(int(parts[0]), int(parts[1]), int(parts[2][:2]))
    
    month, festival_day = SPRING_FESTIVAL_DATES.get(day.year, DEFAULT_SPRING_FESTIVAL)
    if day < date(day.year, month, festival_day):
        return day.year - 1
    return day.year
