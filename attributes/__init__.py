"""
Draw number attribute classification.

Decodes obfuscated reference tables, stores them per (year, range) and
classifies draw numbers into color, zodiac, element, parity and band
categories with a shared query cache.
"""

from .decoder import decode, decode_payload, encode
from .dispatcher import AttributeDispatcher, AttributeType, category_values
from .classification import AttributeClassifier
from .engine import AttributeEngine
from .exceptions import AttributeDataError, DecodeError, FetchError
from .models import AttributeEntry, AttributeTable
from .query_cache import AttributeKey, NumbersKey, QueryCache
from .reference_store import LoadingState, ReferenceStore, composite_key, year_window
from .transport import FetchResponse, HttpFetcher

__version__ = '0.1.0'

__all__ = ['AttributeEngine', 'AttributeClassifier', 'AttributeDispatcher', 'AttributeType',
           'AttributeEntry', 'AttributeTable', 'AttributeKey', 'NumbersKey', 'QueryCache',
           'ReferenceStore', 'LoadingState', 'FetchResponse', 'HttpFetcher',
           'AttributeDataError', 'DecodeError', 'FetchError',
           'category_values', 'composite_key', 'year_window', 'decode', 'decode_payload', 'encode']
