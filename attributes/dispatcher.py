"""Category tag -> classification routing, plus the value axis of each tag."""

import logging
from enum import Enum
from typing import Callable, Dict, List, Optional

from config.attribute_config import UNKNOWN_ATTRIBUTE
from utils.validation import resolve_range
from .classification import AttributeClassifier

logger = logging.getLogger(__name__)


class AttributeType(str, Enum):
    """Category tags accepted by classify()."""
    
    ANIMAL = 'animal'
    WUXIN = 'wuxin'
    COLOR = 'color'
    TEN_DIGIT = 'tenDigit'
    ONES_DIGIT = 'onesDigit'
    MERGE_TYPE = 'mergeType'
    SIZE_BY_NUMBER = 'sizeByNumber'
    IS_EVEN = 'isEven'
    DOOR = 'door'
    SEGMENT = 'segment'
    COLOR_AND_PARITY = 'colorAndParity'
    
    @classmethod
    def from_tag(cls, tag) -> Optional['AttributeType']:
        try:
            return cls(tag)
        except (TypeError, ValueError):
            return None


ZODIACS = ['鼠', '牛', '虎', '兔', '龙', '蛇', '马', '羊', '猴', '鸡', '狗', '猪']
ELEMENTS = ['金', '木', '水', '火', '土']
COLORS = ['红', '绿', '蓝']


def _digit_label(digit, suffix: str) -> str:
    # Non-numeric input gets the sentinel rather than a "None头" style label
    return f"{digit}{suffix}" if digit is not None else UNKNOWN_ATTRIBUTE


class AttributeDispatcher:
    """Routes a category tag to the matching AttributeClassifier method."""
    
    def __init__(self, classifier: AttributeClassifier):
        c = classifier
        self._handlers: Dict[AttributeType, Callable[..., str]] = {
            AttributeType.ANIMAL: c.zodiac,
            AttributeType.WUXIN: c.element,
            AttributeType.COLOR: c.color,
            AttributeType.TEN_DIGIT: lambda n, t=49, y=None: _digit_label(c.tens_digit(n), '头'),
            AttributeType.ONES_DIGIT: lambda n, t=49, y=None: _digit_label(c.ones_digit(n), '尾'),
            AttributeType.MERGE_TYPE: c.sum_value,
            AttributeType.SIZE_BY_NUMBER: lambda n, t=49, y=None: c.size(n, t),
            AttributeType.IS_EVEN: lambda n, t=49, y=None: c.parity(n),
            AttributeType.DOOR: c.door,
            AttributeType.SEGMENT: c.segment,
            AttributeType.COLOR_AND_PARITY: c.color_parity,
        }
        missing = set(AttributeType) - set(self._handlers)
        if missing:
            raise RuntimeError(f"No handler for attribute types: {sorted(m.value for m in missing)}")
    
    def classify(self, tag, number, number_type=49, year=None) -> str:
        """
        Classify a number under a category tag.
        
        Returns:
            The category value, or the 未知 sentinel for an unknown tag
        """
        attribute_type = AttributeType.from_tag(tag)
        if attribute_type is None:
            logger.warning(f"Unknown attribute tag {tag!r}")
            return UNKNOWN_ATTRIBUTE
        return self._handlers[attribute_type](number, number_type, year)


def category_values(tag, number_type=49) -> List[str]:
    """
    Every value a tag can produce, in display order.
    
    Unknown tags get the number axis 01..N.
    """
    is_49 = resolve_range(number_type) != '60'
    size = 49 if is_49 else 60
    numbers = [str(i).zfill(2) for i in range(1, size + 1)]
    
    attribute_type = AttributeType.from_tag(tag)
    if attribute_type is AttributeType.ANIMAL:
        return list(ZODIACS)
    if attribute_type is AttributeType.WUXIN:
        return list(ELEMENTS)
    if attribute_type is AttributeType.COLOR:
        return list(COLORS)
    if attribute_type is AttributeType.TEN_DIGIT:
        return [f"{i}头" for i in range(5 if is_49 else 7)]
    if attribute_type is AttributeType.ONES_DIGIT:
        return [f"{i}尾" for i in range(10)]
    if attribute_type is AttributeType.MERGE_TYPE:
        return [f"{i:02d}合" for i in range(1, (13 if is_49 else 14) + 1)]
    if attribute_type is AttributeType.SIZE_BY_NUMBER:
        return ['大', '小']
    if attribute_type is AttributeType.IS_EVEN:
        return ['单', '双']
    if attribute_type is AttributeType.DOOR:
        return [f"{i}门" for i in range(1, (5 if is_49 else 6) + 1)]
    if attribute_type is AttributeType.SEGMENT:
        return [f"{i}段" for i in range(1, (7 if is_49 else 10) + 1)]
    if attribute_type is AttributeType.COLOR_AND_PARITY:
        return [color + parity for color in COLORS for parity in ('单', '双')]
    return numbers
