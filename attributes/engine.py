"""
AttributeEngine: the object presentation code talks to.

One engine owns one ReferenceStore and one QueryCache; create it once per
process or session and pass it to every call site.
"""

import logging
from typing import Callable, Dict, Iterable, List, Optional, Set

import pandas as pd

from .classification import AttributeClassifier
from .dispatcher import AttributeDispatcher, category_values
from .query_cache import QueryCache
from .reference_store import LoadingState, ReferenceStore
from .transport import Fetcher, HttpFetcher

logger = logging.getLogger(__name__)


class AttributeEngine:
    """
    Facade over loading, classification and caching.
    
    Args:
        fetch: Transport callable; defaults to an HttpFetcher built from config
        endpoint_template: Attribute endpoint, formatted with year and number_type
        max_workers: Concurrent fetches per year
    """
    
    def __init__(self, fetch: Optional[Fetcher] = None, endpoint_template: Optional[str] = None,
                 max_workers: Optional[int] = None):
        self.cache = QueryCache()
        self.store = ReferenceStore(fetch or HttpFetcher(), self.cache,
                                    endpoint_template=endpoint_template, max_workers=max_workers)
        self.classifier = AttributeClassifier(self.store, self.cache)
        self.dispatcher = AttributeDispatcher(self.classifier)
    
    # ----- loading -----
    
    def ensure_year_loaded(self, year) -> bool:
        return self.store.ensure_year_loaded(year)
    
    def ensure_years_loaded(self, years: Iterable, show_progress: bool = False) -> bool:
        return self.store.ensure_years_loaded(years, show_progress=show_progress)
    
    def refresh_year(self, year) -> bool:
        return self.store.refresh_year(year)
    
    def initialize_from_history(self, history: pd.DataFrame, year_column: str = 'period_now_year') -> bool:
        """
        Load every year that appears in a draw history frame.
        
        Never raises: failures are logged and kept in last_error.
        """
        if history is None or history.empty or year_column not in history.columns:
            logger.warning(f"No '{year_column}' values to initialize from")
            return False
        years = pd.to_numeric(history[year_column], errors='coerce').dropna().astype(int).unique()
        logger.info(f"Initializing reference tables for years {sorted(years.tolist())}")
        return self.store.ensure_years_loaded(years.tolist())
    
    @property
    def is_loading(self) -> bool:
        return self.store.is_loading
    
    @property
    def last_error(self) -> Optional[Exception]:
        return self.store.last_error
    
    @property
    def loaded_years(self) -> Set[int]:
        return self.store.loaded_years
    
    def subscribe(self, listener: Callable[[LoadingState], None]) -> None:
        self.store.subscribe(listener)
    
    def unsubscribe(self, listener: Callable[[LoadingState], None]) -> None:
        self.store.unsubscribe(listener)
    
    def clear_cache(self) -> None:
        self.cache.clear()
    
    def cache_stats(self) -> Dict[str, int]:
        return self.cache.stats()
    
    # ----- queries -----
    
    def classify(self, tag, number, number_type=49, year=None) -> str:
        return self.dispatcher.classify(tag, number, number_type, year)
    
    def classify_by_category(self, number, category: str, number_type=49, year=None) -> str:
        return self.classifier.classify_by_category(number, category, number_type, year)
    
    def numbers_in_color(self, color: str, number_type=49, year=None) -> List[str]:
        return self.classifier.numbers_in_color(color, number_type, year)
    
    def numbers_in_zodiac(self, zodiac: str, number_type=49, year=None) -> List[str]:
        return self.classifier.numbers_in_zodiac(zodiac, number_type, year)
    
    def zodiac_pair_value(self, zodiac: str, number_type=49, year=None) -> str:
        return self.classifier.zodiac_pair_value(zodiac, number_type, year)
    
    def is_matching_color(self, number, color: str, number_type=49, year=None) -> bool:
        return self.classifier.is_matching_color(number, color, number_type, year)
    
    def is_matching_zodiac(self, number, zodiac: str, number_type=49, year=None) -> bool:
        return self.classifier.is_matching_zodiac(number, zodiac, number_type, year)
    
    @staticmethod
    def category_values(tag, number_type=49) -> List[str]:
        return category_values(tag, number_type)
