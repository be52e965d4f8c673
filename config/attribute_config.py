"""
Configuration for the draw attribute classification engine.
Holds the category codes, per-category defaults and transport settings.
"""

import os

# Category name -> category code used as the first level of a reference table
TYPE_CODES = {
    '波色': '3',          # color
    '生肖对应号码': '1',   # zodiac
    '五行对照': '2',       # element
    '合数单双': '4',       # digit-sum parity
    '生肖属性': '5',       # zodiac attribute
    '号码属性': '11',      # composite numeric attributes (门, 段, 合, 半波)
}

COLOR_CATEGORY = '波色'
ZODIAC_CATEGORY = '生肖对应号码'
ELEMENT_CATEGORY = '五行对照'
SUM_PARITY_CATEGORY = '合数单双'
NUMBER_ATTRIBUTE_CODE = TYPE_CODES['号码属性']

# Value returned when a classification finds nothing
CATEGORY_DEFAULTS = {
    'color': '红',
    'zodiac': '鼠',
    'element': '金',
    'sum_parity': '合数单',
    'size': '小',
    'parity': '单',
    'door': '1门',
    'segment': '1段',
    'color_parity': '红单',
    'sum_value': '01合',
}

# Dispatcher sentinel for tags it does not know
UNKNOWN_ATTRIBUTE = '未知'

# Lottery type / range identifier -> range digits of the reference table
RANGE_REFLECT = {
    '1': '49',
    '2': '49',
    '3': '60',
    '4': '60',
    '49': '49',
    '60': '60',
}

# Size threshold: numbers at or above it are 大
SIZE_THRESHOLDS = {
    '49': 25,
    '60': 31,
}

# Segment entries are named "<prefix><n>" under code 11
SEGMENT_PREFIXES = {
    '49': '7段',
    '60': '10段',
}

LOTTERY_TYPES = {
    '1': '澳门六合彩',
    '2': '香港六合彩',
    '3': '澳门六十彩',
    '4': '香港六十彩',
}

# Latest-N history windows; 366 means the whole year
PERIOD_OPTIONS = [50, 100, 150, 200, 366]
DEFAULT_PERIOD = 50

FETCH_CONFIG = {
    'base_url': 'http://localhost:8000',
    'attribute_endpoint': '/api/attribute?year={year}&number_type={number_type}',
    'history_endpoint': '/api/history?lottery_type={lottery_type}&year={year}',
    'timeout': 10.0,
    'max_workers': 4,
}


def get_fetch_config():
    """Return a copy of FETCH_CONFIG with environment overrides applied."""
    config = dict(FETCH_CONFIG)
    if os.environ.get('DRAW_ATTR_BASE_URL'):
        config['base_url'] = os.environ['DRAW_ATTR_BASE_URL']
    if os.environ.get('DRAW_ATTR_TIMEOUT'):
        config['timeout'] = float(os.environ['DRAW_ATTR_TIMEOUT'])
    return config
