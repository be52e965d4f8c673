import pytest

from attributes.dispatcher import AttributeType, category_values
from config.attribute_config import UNKNOWN_ATTRIBUTE


@pytest.mark.parametrize('tag, number, expected', [
    ('color', '07', '红'),
    ('animal', '13', '鼠'),
    ('wuxin', '07', '木'),
    ('tenDigit', '07', '0头'),
    ('tenDigit', 42, '4头'),
    ('onesDigit', '07', '7尾'),
    ('mergeType', '07', '07合'),
    ('sizeByNumber', '25', '大'),
    ('isEven', '08', '双'),
    ('door', '15', '2门'),
    ('segment', '15', '3段'),
    ('colorAndParity', '20', '蓝双'),
])
def test_classify_routes_every_tag(loaded_engine, tag, number, expected):
    assert loaded_engine.classify(tag, number, 49, 2024) == expected


def test_every_tag_has_a_handler(loaded_engine):
    for attribute_type in AttributeType:
        assert loaded_engine.classify(attribute_type.value, '07', 49, 2024) != UNKNOWN_ATTRIBUTE


def test_enum_members_are_accepted(loaded_engine):
    assert loaded_engine.classify(AttributeType.COLOR, '07', 49, 2024) == '红'


@pytest.mark.parametrize('tag', ['', 'zodiac', 'COLOR', None, 42])
def test_unknown_tag_returns_sentinel(loaded_engine, tag):
    assert loaded_engine.classify(tag, '07', 49, 2024) == UNKNOWN_ATTRIBUTE


def test_invalid_digit_input_returns_sentinel(loaded_engine):
    assert loaded_engine.classify('tenDigit', 'abc') == UNKNOWN_ATTRIBUTE
    assert loaded_engine.classify('onesDigit', 0) == UNKNOWN_ATTRIBUTE


def test_category_values_by_range():
    assert category_values('color') == ['红', '绿', '蓝']
    assert len(category_values('animal')) == 12
    assert category_values('tenDigit', 49)[-1] == '4头'
    assert category_values('tenDigit', 60)[-1] == '6头'
    assert category_values('mergeType', 49)[-1] == '13合'
    assert category_values('mergeType', '3')[-1] == '14合'
    assert category_values('door', 60) == ['1门', '2门', '3门', '4门', '5门', '6门']
    assert category_values('segment', 49)[-1] == '7段'
    assert category_values('segment', 60)[-1] == '10段'
    assert category_values('colorAndParity') == ['红单', '红双', '绿单', '绿双', '蓝单', '蓝双']


def test_category_values_unknown_tag_is_number_axis():
    axis = category_values('num', 60)
    assert axis[0] == '01'
    assert axis[-1] == '60'
    assert len(category_values('whatever', 49)) == 49


@pytest.mark.parametrize('tag, expected', [
    ('tenDigit', UNKNOWN_ATTRIBUTE),
    ('onesDigit', UNKNOWN_ATTRIBUTE),
    ('sizeByNumber', '小'),
    ('isEven', '单'),
])
@pytest.mark.parametrize('number', ['inf', 'infinity', '1e400', float('nan')])
def test_non_finite_numbers_fall_back(loaded_engine, tag, number, expected):
    assert loaded_engine.classify(tag, number, 49, 2024) == expected


def test_integral_float_matches_like_int(loaded_engine):
    assert loaded_engine.classify('color', 35.0, 49, 2024) == '绿'
    assert loaded_engine.classify('color', 35, 49, 2024) == '绿'
