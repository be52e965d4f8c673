"""Attribute annotation and frequency analysis over draw history."""

import logging
from typing import Iterable, Optional

import numpy as np
import pandas as pd

from attributes.dispatcher import category_values
from attributes.engine import AttributeEngine
from scripts.fetch_data import SPECIAL_BALL
from utils.validation import to_number

logger = logging.getLogger(__name__)


def _draw_year(row: pd.Series, year_column: str) -> Optional[int]:
    value = to_number(row.get(year_column))
    return None if value is None else int(value)


def annotate_draws(df: pd.DataFrame, engine: AttributeEngine, tag: str, lottery_type='1',
                   balls: Iterable[str] = (SPECIAL_BALL,),
                   year_column: str = 'period_now_year') -> pd.DataFrame:
    """
    Add one "<ball>_<tag>" column per ball with the attribute of that ball.
    
    Each draw is classified with its own year, so a history spanning a year
    boundary uses both years' reference tables.
    
    Args:
        df: Draw history with ball columns and a year column
        engine: Loaded AttributeEngine
        tag: Category tag, e.g. 'color' or 'animal'
        lottery_type: Lottery type id or range (1-4, 49 or 60)
        balls: Ball columns to classify
        
    Returns:
        Copy of df with the added columns
    """
    balls = list(balls)
    missing = [ball for ball in balls if ball not in df.columns]
    if missing:
        raise ValueError(f"DataFrame lacks ball columns: {missing}")
    
    df = df.copy()
    for ball in balls:
        df[f'{ball}_{tag}'] = [
            engine.classify(tag, row[ball], lottery_type, _draw_year(row, year_column))
            if not pd.isna(row[ball]) else None
            for _, row in df.iterrows()
        ]
    logger.debug(f"Annotated {len(df)} draws with '{tag}' for balls {balls}")
    return df


def attribute_frequency(df: pd.DataFrame, engine: AttributeEngine, tag: str, lottery_type='1',
                        ball: str = SPECIAL_BALL, year_column: str = 'period_now_year') -> pd.Series:
    """
    Count how often each attribute value occurs for one ball.
    
    Returns:
        Series indexed by the tag's full value axis (zero-filled, axis order);
        values outside the axis are appended after it
    """
    column = f'{ball}_{tag}'
    annotated = df if column in df.columns else annotate_draws(df, engine, tag, lottery_type, [ball], year_column)
    counts = annotated[column].dropna().value_counts()
    
    axis = category_values(tag, lottery_type)
    extra = [value for value in counts.index if value not in axis]
    frequency = counts.reindex(axis + extra, fill_value=0).astype(np.int64)
    frequency.name = column
    return frequency
