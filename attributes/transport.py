"""HTTP transport returning encoded payloads."""

import logging
from dataclasses import dataclass
from typing import Callable, Optional

import requests

from config.attribute_config import get_fetch_config
from .exceptions import FetchError

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class FetchResponse:
    """Encoded payload plus the timestamp it was obfuscated with."""
    
    encoded_payload: str
    epoch_seconds: int


# fetch(endpoint) -> FetchResponse, raising FetchError on failure
Fetcher = Callable[[str], FetchResponse]


class HttpFetcher:
    """
    Fetch encoded payloads with a shared requests session.
    
    The endpoint is appended to base_url. The JSON body must carry the
    payload under ``checkstr`` and the timestamp under ``timestamp``.
    """
    
    def __init__(self, base_url: Optional[str] = None, timeout: Optional[float] = None,
                 session: Optional[requests.Session] = None):
        config = get_fetch_config()
        self.base_url = (base_url or config['base_url']).rstrip('/')
        self.timeout = timeout if timeout is not None else config['timeout']
        self.session = session or requests.Session()
    
    def __call__(self, endpoint: str) -> FetchResponse:
        url = f"{self.base_url}/{endpoint.lstrip('/')}"
        try:
            response = self.session.get(url, timeout=self.timeout)
            response.raise_for_status()
            body = response.json()
        except requests.exceptions.RequestException as e:
            logger.error(f"Request to {url} failed: {e}")
            raise FetchError(f"Request to {url} failed: {e}") from e
        except ValueError as e:
            raise FetchError(f"Response from {url} is not JSON: {e}") from e
        
        if not isinstance(body, dict) or 'checkstr' not in body or 'timestamp' not in body:
            raise FetchError(f"Response from {url} lacks checkstr/timestamp")
        try:
            epoch_seconds = int(body['timestamp'])
        except (TypeError, ValueError) as e:
            raise FetchError(f"Response from {url} has a bad timestamp: {body['timestamp']!r}") from e
        return FetchResponse(encoded_payload=str(body['checkstr']), epoch_seconds=epoch_seconds)
    
    def close(self) -> None:
        self.session.close()
