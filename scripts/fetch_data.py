"""
Draw history loading.

The history endpoint uses the same obfuscated transport as the reference
tables; the decoded payload is a JSON list of draws, oldest first.
"""

import logging
from typing import Any, Dict, List, Optional

import pandas as pd

from attributes.decoder import decode_payload
from attributes.exceptions import DecodeError
from attributes.transport import Fetcher
from config.attribute_config import DEFAULT_PERIOD, LOTTERY_TYPES, get_fetch_config
from utils.validation import current_year

logger = logging.getLogger(__name__)

BALL_COLUMNS = [f'num_{i}' for i in range(1, 8)]
PERIOD_COLUMNS = ['period_now', 'period_now_year', 'period_now_month', 'period_now_day', 'period_now_hour']
HISTORY_COLUMNS = ['id'] + BALL_COLUMNS + PERIOD_COLUMNS

# Special number (特码) is the seventh ball
SPECIAL_BALL = 'num_7'


def parse_history(records: Any, period: int = DEFAULT_PERIOD) -> pd.DataFrame:
    """
    Turn decoded history records into a DataFrame, newest draw first.
    
    Args:
        records: List of draw dicts with id, num_1..num_7 and period_now* keys
        period: Number of latest draws to keep
        
    Returns:
        DataFrame with HISTORY_COLUMNS; missing keys become NaN/None
        
    Raises:
        DecodeError: If records is not a list of objects
    """
    if not isinstance(records, list) or not all(isinstance(r, dict) for r in records):
        raise DecodeError("History payload must be a list of draw objects")
    
    rows: List[Dict[str, Any]] = [{column: record.get(column) for column in HISTORY_COLUMNS}
                                  for record in records]
    df = pd.DataFrame(rows, columns=HISTORY_COLUMNS)
    
    df = df.iloc[::-1].head(period).reset_index(drop=True)
    for column in BALL_COLUMNS:
        df[column] = pd.to_numeric(df[column], errors='coerce').astype('Int64')
    return df


def fetch_draw_history(fetch: Fetcher, lottery_type: str = '1', year: Optional[int] = None,
                       period: int = DEFAULT_PERIOD, endpoint_template: Optional[str] = None) -> pd.DataFrame:
    """
    Fetch and decode the draw history of one lottery type.
    
    Args:
        fetch: Transport callable, fetch(endpoint) -> FetchResponse
        lottery_type: One of LOTTERY_TYPES ('1'..'4')
        year: Draw year, defaults to the current year
        period: Number of latest draws to keep (366 keeps the whole year)
        endpoint_template: Overrides the configured history endpoint
        
    Raises:
        ValueError: For an unknown lottery type
        FetchError, DecodeError: When the history cannot be loaded
    """
    lottery_type = str(lottery_type)
    if lottery_type not in LOTTERY_TYPES:
        raise ValueError(f"Unknown lottery type {lottery_type!r}; expected one of {sorted(LOTTERY_TYPES)}")
    year = year or current_year()
    template = endpoint_template or get_fetch_config()['history_endpoint']
    endpoint = template.format(lottery_type=lottery_type, year=year)
    
    logger.info(f"Fetching {LOTTERY_TYPES[lottery_type]} history for {year} (latest {period})")
    response = fetch(endpoint)
    records = decode_payload(response.encoded_payload, response.epoch_seconds)
    df = parse_history(records, period=period)
    logger.info(f"Loaded {len(df)} draws")
    return df


def history_years(df: pd.DataFrame) -> List[int]:
    """Distinct draw years in a history frame, ascending."""
    if df.empty or 'period_now_year' not in df.columns:
        return []
    years = pd.to_numeric(df['period_now_year'], errors='coerce').dropna().astype(int)
    return sorted(years.unique().tolist())
