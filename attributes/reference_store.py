"""
Per-(year, range) reference table store.

Tables are kept under composite keys "{year}{range}" such as "202449".
A key exists only once its payload was fetched, decoded and parsed; the
store never edits a table in place. Every mutation swaps in a new key
map and clears the query cache.
"""

import logging
import threading
from concurrent.futures import ThreadPoolExecutor, as_completed
from typing import Callable, Dict, Iterable, List, NamedTuple, Optional, Set, Tuple

from tqdm import tqdm

from config.attribute_config import get_fetch_config
from utils.decorators import log_duration
from utils.validation import normalize_year, resolve_range
from .decoder import decode_payload
from .exceptions import AttributeDataError, FetchError
from .models import EMPTY_TABLE, AttributeTable
from .query_cache import QueryCache
from .transport import Fetcher

logger = logging.getLogger(__name__)

RANGES = ('49', '60')


class LoadingState(NamedTuple):
    is_loading: bool
    last_error: Optional[Exception]


def composite_key(year: int, range_digits: str) -> str:
    return f"{year}{range_digits}"


def year_window(year: int) -> List[Tuple[int, str]]:
    """The four (year, range) pairs loaded together for a year."""
    return [(year, '49'), (year - 1, '60'), (year - 1, '49'), (year, '60')]


class ReferenceStore:
    """
    Holds decoded reference tables and loads missing ones on demand.
    
    Args:
        fetch: Transport callable, fetch(endpoint) -> FetchResponse
        cache: Query cache cleared after every mutation
        endpoint_template: Formatted with ``year`` and ``number_type``
        max_workers: Concurrent fetches per year
    """
    
    def __init__(self, fetch: Fetcher, cache: Optional[QueryCache] = None,
                 endpoint_template: Optional[str] = None, max_workers: Optional[int] = None):
        config = get_fetch_config()
        self.fetch = fetch
        self.cache = cache if cache is not None else QueryCache()
        self.endpoint_template = endpoint_template or config['attribute_endpoint']
        self.max_workers = max_workers or config['max_workers']
        
        self._tables: Dict[str, AttributeTable] = {}
        self._write_lock = threading.Lock()
        
        self._state_lock = threading.Lock()
        self._active_loads = 0
        self._last_error: Optional[Exception] = None
        self._listeners: List[Callable[[LoadingState], None]] = []
    
    # ----- reads -----
    
    @property
    def keys(self) -> Set[str]:
        return set(self._tables)
    
    @property
    def loaded_years(self) -> Set[int]:
        return {int(key[:4]) for key in self._tables}
    
    def has_key(self, key: str) -> bool:
        return key in self._tables
    
    def get_table(self, number_type=49, year=None) -> AttributeTable:
        """
        Table for a range (or lottery type id) and year; empty when not loaded.
        """
        range_digits = resolve_range(number_type)
        year_value = normalize_year(year)
        if range_digits is None or year_value is None:
            return EMPTY_TABLE
        # A single dict read; writers replace the whole map
        return self._tables.get(composite_key(year_value, range_digits), EMPTY_TABLE)
    
    # ----- writes -----
    
    def store_table(self, year: int, range_digits: str, table: AttributeTable) -> None:
        """Store or replace one table, then invalidate the query cache."""
        self._store_many({composite_key(int(year), str(range_digits)): table})
    
    def _store_many(self, tables: Dict[str, AttributeTable]) -> None:
        with self._write_lock:
            updated = dict(self._tables)
            updated.update(tables)
            self._tables = updated
            self.cache.clear()
        logger.info(f"Stored reference tables {sorted(tables)}; query cache cleared")
    
    # ----- loading -----
    
    def _fetch_table(self, year: int, range_digits: str) -> AttributeTable:
        endpoint = self.endpoint_template.format(year=year, number_type=range_digits)
        try:
            response = self.fetch(endpoint)
        except AttributeDataError:
            raise
        except OSError as e:
            raise FetchError(f"Fetching {endpoint} failed: {e}") from e
        payload = decode_payload(response.encoded_payload, response.epoch_seconds)
        return AttributeTable.from_payload(payload)
    
    def _load_pairs(self, pairs: List[Tuple[int, str]]) -> Optional[Exception]:
        """
        Fetch pairs concurrently and store every table that succeeded.
        
        Returns:
            The error of the first failed pair in the given order, or None
        """
        loaded: Dict[str, AttributeTable] = {}
        errors: Dict[str, Exception] = {}
        
        with ThreadPoolExecutor(max_workers=min(len(pairs), self.max_workers)) as executor:
            future_to_key = {
                executor.submit(self._fetch_table, year, range_digits): composite_key(year, range_digits)
                for year, range_digits in pairs
            }
            for future in as_completed(future_to_key):
                key = future_to_key[future]
                try:
                    loaded[key] = future.result()
                    logger.info(f"Loaded reference table {key}")
                except AttributeDataError as e:
                    logger.error(f"Failed to load reference table {key}: {e}")
                    errors[key] = e
                except Exception as e:
                    logger.error(f"Unexpected error loading reference table {key}: {e!r}")
                    error = FetchError(f"Loading {key} failed: {e!r}")
                    error.__cause__ = e
                    errors[key] = error
        
        # Tables that did load are kept even when a sibling failed
        if loaded:
            self._store_many(loaded)
        for year, range_digits in pairs:
            key = composite_key(year, range_digits)
            if key in errors:
                return errors[key]
        return None
    
    def ensure_year_loaded(self, year) -> bool:
        """
        Load the year's four-table window, fetching only keys not yet stored.
        
        Returns:
            True if all four tables are available afterwards
        """
        year_value = normalize_year(year)
        if year_value is None:
            error = ValueError(f"Invalid year: {year!r}")
            logger.error(str(error))
            self._set_error(error)
            return False
        
        missing = [pair for pair in year_window(year_value) if composite_key(*pair) not in self._tables]
        if not missing:
            logger.debug(f"Reference tables for {year_value} already loaded")
            return True
        
        logger.info(f"Loading reference tables for {year_value}: {[composite_key(*p) for p in missing]}")
        self._begin_load()
        try:
            error = self._load_pairs(missing)
            if error is not None:
                self._set_error(error)
                return False
            return True
        finally:
            self._end_load()
    
    @log_duration
    def ensure_years_loaded(self, years: Iterable, show_progress: bool = False) -> bool:
        """
        Load several years independently of each other.
        
        Returns:
            True only if every year loaded
        """
        distinct = set()
        for year in years:
            year_value = normalize_year(year)
            distinct.add(year_value if year_value is not None else str(year))
        distinct = sorted(distinct, key=str)
        if not distinct:
            return True
        
        results = []
        with ThreadPoolExecutor(max_workers=len(distinct)) as executor:
            futures = [executor.submit(self.ensure_year_loaded, year) for year in distinct]
            for future in tqdm(as_completed(futures), total=len(futures),
                               desc='Loading years', disable=not show_progress):
                results.append(future.result())
        
        success = all(results)
        if not success:
            logger.warning(f"Not every year loaded: {distinct}")
        return success
    
    def refresh_year(self, year) -> bool:
        """Refetch the year's whole window, replacing any stored tables."""
        year_value = normalize_year(year)
        if year_value is None:
            self._set_error(ValueError(f"Invalid year: {year!r}"))
            return False
        self._begin_load()
        try:
            error = self._load_pairs(year_window(year_value))
            if error is not None:
                self._set_error(error)
                return False
            return True
        finally:
            self._end_load()
    
    # ----- loading state -----
    
    @property
    def is_loading(self) -> bool:
        with self._state_lock:
            return self._active_loads > 0
    
    @property
    def last_error(self) -> Optional[Exception]:
        with self._state_lock:
            return self._last_error
    
    @property
    def state(self) -> LoadingState:
        with self._state_lock:
            return LoadingState(self._active_loads > 0, self._last_error)
    
    def subscribe(self, listener: Callable[[LoadingState], None]) -> None:
        """Call listener with the new LoadingState whenever it changes."""
        with self._state_lock:
            self._listeners.append(listener)
    
    def unsubscribe(self, listener: Callable[[LoadingState], None]) -> None:
        with self._state_lock:
            if listener in self._listeners:
                self._listeners.remove(listener)
    
    def _begin_load(self) -> None:
        with self._state_lock:
            if self._active_loads == 0:
                self._last_error = None
            self._active_loads += 1
        self._notify()
    
    def _end_load(self) -> None:
        with self._state_lock:
            self._active_loads -= 1
        self._notify()
    
    def _set_error(self, error: Exception) -> None:
        with self._state_lock:
            self._last_error = error
        self._notify()
    
    def _notify(self) -> None:
        with self._state_lock:
            listeners = list(self._listeners)
            state = LoadingState(self._active_loads > 0, self._last_error)
        for listener in listeners:
            try:
                listener(state)
            except Exception as e:
                logger.warning(f"Loading state listener {listener!r} failed: {e}")
