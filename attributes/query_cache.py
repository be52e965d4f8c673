"""Read-through memoization of classification results."""

import logging
import threading
from dataclasses import dataclass
from typing import Callable, Dict, List, Tuple, Union

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class AttributeKey:
    """Key of a single classification result."""
    
    number: str
    category: str
    number_type: str
    year: Union[int, str]
    
    def __str__(self) -> str:
        return f"{self.number}:{self.category}:{self.number_type}:{self.year}"


@dataclass(frozen=True)
class NumbersKey:
    """Key of a derived number list, e.g. every number of color 红."""
    
    kind: str
    selector: str
    number_type: str
    year: Union[int, str]
    
    def __str__(self) -> str:
        return f"{self.kind}:{self.selector}:{self.number_type}:{self.year}"


class QueryCache:
    """
    Two unbounded maps: classification results and number lists.
    
    Entries are created on first query and only ever removed all at once
    by clear(), which the reference store calls after every mutation.
    A result computed across a clear() is returned but not stored.
    """
    
    def __init__(self):
        self._attributes: Dict[AttributeKey, str] = {}
        self._numbers: Dict[NumbersKey, Tuple[str, ...]] = {}
        self._lock = threading.Lock()
        self._generation = 0
        self.hits = 0
        self.misses = 0
    
    def get_attribute(self, key: AttributeKey, compute: Callable[[], str]) -> str:
        with self._lock:
            if key in self._attributes:
                self.hits += 1
                return self._attributes[key]
            self.misses += 1
            generation = self._generation
        
        result = compute()
        with self._lock:
            if generation == self._generation:
                self._attributes[key] = result
        return result
    
    def get_numbers(self, key: NumbersKey, compute: Callable[[], List[str]]) -> List[str]:
        """Cached number list; the caller always gets its own copy."""
        with self._lock:
            cached = self._numbers.get(key)
            if cached is not None:
                self.hits += 1
                return list(cached)
            self.misses += 1
            generation = self._generation
        
        result = tuple(compute())
        with self._lock:
            if generation == self._generation:
                self._numbers[key] = result
        return list(result)
    
    def clear(self) -> None:
        with self._lock:
            dropped = len(self._attributes) + len(self._numbers)
            self._attributes.clear()
            self._numbers.clear()
            self._generation += 1
        logger.debug(f"Query cache cleared ({dropped} entries)")
    
    def __len__(self) -> int:
        with self._lock:
            return len(self._attributes) + len(self._numbers)
    
    def stats(self) -> Dict[str, int]:
        with self._lock:
            return {
                'hits': self.hits,
                'misses': self.misses,
                'size': len(self._attributes) + len(self._numbers),
            }
