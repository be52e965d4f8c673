import math
from datetime import date, datetime

import pytest

from utils import get_lunar_year
from utils.validation import (current_year, normalize_year, pad_zero, pad_zero_period,
                              resolve_range, to_number)


@pytest.mark.parametrize('value, expected', [
    (7, 7.0),
    ('07', 7.0),
    (' 7 ', 7.0),
    (7.5, 7.5),
    ('inf', None),
    ('-Infinity', None),
    ('1e400', None),
    (math.inf, None),
    ('abc', None),
    ('', None),
    (None, None),
    (True, None),
    (math.nan, None),
])
def test_to_number(value, expected):
    assert to_number(value) == expected


@pytest.mark.parametrize('value, expected', [
    (7, '07'),
    ('7', '07'),
    ('07', '07'),
    (10, '10'),
    (123, '123'),
    (35.0, '35'),
    (7.0, '07'),
    ('inf', None),
    ('abc', None),
    (None, None),
])
def test_pad_zero(value, expected):
    assert pad_zero(value) == expected


def test_pad_zero_is_idempotent():
    for value in (1, '5', 49, '60'):
        assert pad_zero(pad_zero(value)) == pad_zero(value)


def test_pad_zero_period():
    assert pad_zero_period(5) == '005'
    assert pad_zero_period('42') == '042'
    assert pad_zero_period(123) == '123'


@pytest.mark.parametrize('value, expected', [
    (1, '49'), ('2', '49'), (3, '60'), ('4', '60'),
    (49, '49'), ('60', '60'), (5, None), ('x', None), (None, None),
])
def test_resolve_range(value, expected):
    assert resolve_range(value) == expected


def test_normalize_year():
    assert normalize_year(None) == current_year()
    assert normalize_year('2024') == 2024
    assert normalize_year(2023.0) == 2023
    assert normalize_year('soon') is None


@pytest.mark.parametrize('value, expected', [
    ('2024/1/1', 2023),
    ('2024-02-09', 2023),
    ('2024-02-10', 2024),
    ('2025-01-28', 2024),
    (date(2025, 1, 29), 2025),
    (datetime(2026, 3, 1, 21, 30), 2026),
    # Outside the table the festival is taken as Feb 1
    (date(2040, 1, 31), 2039),
    (date(2040, 2, 1), 2040),
])
def test_get_lunar_year(value, expected):
    assert get_lunar_year(value) == expected


def test_get_lunar_year_rejects_garbage():
    with pytest.raises(ValueError):
        get_lunar_year('yesterday')
