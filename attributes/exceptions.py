"""Errors raised below the reference store boundary."""


class AttributeDataError(Exception):
    """Base class for failures while loading reference tables."""


class DecodeError(AttributeDataError):
    """Obfuscated payload could not be turned into a reference table."""


class FetchError(AttributeDataError):
    """Transport failure: network error, timeout or malformed response."""
