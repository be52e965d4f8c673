"""Decorators for timing and logging engine operations."""

import functools
import logging
import time
from typing import Callable

logger = logging.getLogger(__name__)

def log_duration(func: Callable) -> Callable:
    """Decorator to log how long a call took.
    
    Args:
        func: Function to time
        
    Returns:
        Wrapped function that logs its duration at INFO
    """
    @functools.wraps(func)
    def wrapper(*args, **kwargs):
        start_time = time.time()
        try:
            return func(*args, **kwargs)
        finally:
            elapsed = time.time() - start_time
            logger.info(f"{func.__qualname__} finished in {elapsed:.3f}s")
    
    return wrapper
