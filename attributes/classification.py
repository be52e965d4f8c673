"""
Number classification against the reference tables.

Table-driven categories (color, zodiac, element, digit-sum parity and the
code-11 composite bands) consult the ReferenceStore; size, parity and the
tens/ones digits are plain arithmetic. Every classification falls back to
its category default instead of raising.
"""

import logging
from typing import Callable, List, Optional, Union

from config.attribute_config import (
    CATEGORY_DEFAULTS,
    COLOR_CATEGORY,
    ELEMENT_CATEGORY,
    NUMBER_ATTRIBUTE_CODE,
    SEGMENT_PREFIXES,
    SIZE_THRESHOLDS,
    SUM_PARITY_CATEGORY,
    TYPE_CODES,
    ZODIAC_CATEGORY,
)
from utils.validation import current_year, normalize_year, pad_zero, resolve_range, to_number
from .models import AttributeEntry
from .query_cache import AttributeKey, NumbersKey, QueryCache
from .reference_store import ReferenceStore

logger = logging.getLogger(__name__)

NumberLike = Union[int, float, str]

ZODIAC_QUALIFIER = '肖'


def strip_zodiac_qualifier(zodiac: str) -> str:
    return zodiac.replace(ZODIAC_QUALIFIER, '', 1)


class AttributeClassifier:
    """Classification functions sharing one store and one query cache."""
    
    def __init__(self, store: ReferenceStore, cache: QueryCache):
        self.store = store
        self.cache = cache
    
    def _attribute_key(self, number, tag: str, number_type, year) -> AttributeKey:
        padded = pad_zero(number)
        range_digits = resolve_range(number_type)
        year_value = normalize_year(year)
        return AttributeKey(
            number=padded if padded is not None else str(number),
            category=tag,
            number_type=range_digits if range_digits is not None else str(number_type),
            year=year_value if year_value is not None else str(year),
        )
    
    def _numbers_key(self, kind: str, selector: str, number_type, year) -> NumbersKey:
        range_digits = resolve_range(number_type)
        year_value = normalize_year(year)
        return NumbersKey(
            kind=kind,
            selector=selector,
            number_type=range_digits if range_digits is not None else str(number_type),
            year=year_value if year_value is not None else str(year),
        )
    
    # ----- table-driven lookup -----
    
    def classify_by_category(self, number: NumberLike, category: str,
                             number_type=49, year=None) -> str:
        """
        Name of the first entry of ``category`` whose members include the number.
        
        Returns:
            The entry name, or '' when the number, table or entry is missing
        """
        key = self._attribute_key(number, category, number_type, year)
        return self.cache.get_attribute(
            key, lambda: self._lookup_category(number, category, number_type, year))
    
    def _lookup_category(self, number, category, number_type, year) -> str:
        formatted = pad_zero(number)
        code = TYPE_CODES.get(category)
        if formatted is None or code is None:
            return ''
        table = self.store.get_table(number_type, year)
        for entry in table.section(code).values():
            if entry.category == category and entry.contains(formatted):
                return entry.name
        logger.debug(f"No {category} entry holds {formatted} ({number_type}, {year})")
        return ''
    
    def _category_or_default(self, number, tag: str, category: str, number_type, year) -> str:
        key = self._attribute_key(number, tag, number_type, year)
        return self.cache.get_attribute(
            key,
            lambda: self.classify_by_category(number, category, number_type, year)
            or CATEGORY_DEFAULTS[tag])
    
    def color(self, number: NumberLike, number_type=49, year=None) -> str:
        """波色 of a number; years after the current one are always 红."""
        year_value = normalize_year(year)
        if year_value is not None and year_value > current_year():
            return CATEGORY_DEFAULTS['color']
        return self._category_or_default(number, 'color', COLOR_CATEGORY, number_type, year)
    
    def zodiac(self, number: NumberLike, number_type=49, year=None) -> str:
        return self._category_or_default(number, 'zodiac', ZODIAC_CATEGORY, number_type, year)
    
    def element(self, number: NumberLike, number_type=49, year=None) -> str:
        return self._category_or_default(number, 'element', ELEMENT_CATEGORY, number_type, year)
    
    def sum_parity(self, number: NumberLike, number_type=49, year=None) -> str:
        return self._category_or_default(number, 'sum_parity', SUM_PARITY_CATEGORY, number_type, year)
    
    # ----- arithmetic categories -----
    
    @staticmethod
    def size(number: NumberLike, number_type=49) -> str:
        value = to_number(number)
        if value is None or value < 1:
            return CATEGORY_DEFAULTS['size']
        threshold = SIZE_THRESHOLDS['49'] if resolve_range(number_type) == '49' else SIZE_THRESHOLDS['60']
        return '大' if value >= threshold else '小'
    
    @staticmethod
    def parity(number: NumberLike) -> str:
        value = to_number(number)
        if value is None or value < 1:
            return CATEGORY_DEFAULTS['parity']
        return '双' if value % 2 == 0 else '单'
    
    @staticmethod
    def tens_digit(number: NumberLike) -> Optional[int]:
        value = to_number(number)
        if value is None or value < 1:
            return None
        return int(value // 10)
    
    @staticmethod
    def ones_digit(number: NumberLike) -> Optional[Union[int, float]]:
        value = to_number(number)
        if value is None or value < 1:
            return None
        ones = value % 10
        return int(ones) if ones.is_integer() else ones
    
    # ----- code-11 composite bands -----
    
    def _scan_number_attributes(self, number, tag: str, number_type, year,
                                matches: Callable[[str], bool],
                                label: Callable[[AttributeEntry], str] = lambda entry: entry.name) -> str:
        default = CATEGORY_DEFAULTS[tag]
        
        def compute() -> str:
            formatted = pad_zero(number)
            section = self.store.get_table(number_type, year).section(NUMBER_ATTRIBUTE_CODE)
            if formatted is None or not section:
                return default
            for name, entry in section.items():
                if matches(name) and entry.contains(formatted):
                    return label(entry)
            return default
        
        return self.cache.get_attribute(self._attribute_key(number, tag, number_type, year), compute)
    
    def door(self, number: NumberLike, number_type=49, year=None) -> str:
        """门 band, from code-11 entries whose name contains 门."""
        return self._scan_number_attributes(number, 'door', number_type, year,
                                            lambda name: '门' in name)
    
    def segment(self, number: NumberLike, number_type=49, year=None) -> str:
        """
        段 band. Range 49 uses entries named 7段<n>, range 60 uses 10段<n>;
        the result is "<n>段".
        """
        prefix = SEGMENT_PREFIXES.get(resolve_range(number_type), SEGMENT_PREFIXES['60'])
        return self._scan_number_attributes(
            number, 'segment', number_type, year,
            lambda name: name.startswith(prefix),
            lambda entry: f"{entry.name[len(prefix):]}段")
    
    def color_parity(self, number: NumberLike, number_type=49, year=None) -> str:
        """半波 composite: color followed by parity, e.g. 蓝双."""
        wanted = self.color(number, number_type, year) + self.parity(number)
        return self._scan_number_attributes(number, 'color_parity', number_type, year,
                                            lambda name: name == wanted)
    
    def sum_value(self, number: NumberLike, number_type=49, year=None) -> str:
        """合 band (01合, 02合...). Names containing 合数 or 合尾 belong to other categories."""
        return self._scan_number_attributes(
            number, 'sum_value', number_type, year,
            lambda name: '合' in name and '合数' not in name and '合尾' not in name)
    
    # ----- derived number lists -----
    
    def numbers_in_color(self, color: str, number_type=49, year=None) -> List[str]:
        def compute() -> List[str]:
            entry = self.store.get_table(number_type, year).get(TYPE_CODES[COLOR_CATEGORY], color)
            return list(entry.member_numbers) if entry else []
        
        return self.cache.get_numbers(self._numbers_key('color', color, number_type, year), compute)
    
    def numbers_in_zodiac(self, zodiac: str, number_type=49, year=None) -> List[str]:
        name = strip_zodiac_qualifier(zodiac)
        
        def compute() -> List[str]:
            entry = self.store.get_table(number_type, year).get(TYPE_CODES[ZODIAC_CATEGORY], name)
            return list(entry.member_numbers) if entry else []
        
        return self.cache.get_numbers(self._numbers_key('zodiac', name, number_type, year), compute)
    
    def zodiac_pair_value(self, zodiac: str, number_type=49, year=None) -> str:
        """Secondary content of a zodiac entry; '' when absent."""
        name = strip_zodiac_qualifier(zodiac)
        
        def compute() -> str:
            entry = self.store.get_table(number_type, year).get(TYPE_CODES[ZODIAC_CATEGORY], name)
            return entry.secondary_content if entry else ''
        
        key = self._attribute_key('pair', name, number_type, year)
        return self.cache.get_attribute(key, compute)
    
    def is_matching_color(self, number: NumberLike, color: str, number_type=49, year=None) -> bool:
        return self.color(number, number_type, year) == color
    
    def is_matching_zodiac(self, number: NumberLike, zodiac: str, number_type=49, year=None) -> bool:
        actual = strip_zodiac_qualifier(self.zodiac(number, number_type, year))
        return actual == zodiac
