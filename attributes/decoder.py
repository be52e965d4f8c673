"""
Payload decoder for the obfuscated transport format.

The server sends every character as a 7-digit decimal chunk holding
``code point + shift``, where ``shift`` is the first 7 digits of the
response timestamp. This is obfuscation only, not encryption.
"""

import json
import logging
from typing import Any

from .exceptions import DecodeError

logger = logging.getLogger(__name__)

CHUNK_SIZE = 7


def _shift_for(epoch_seconds: int) -> int:
    digits = str(epoch_seconds)
    if len(digits) < CHUNK_SIZE:
        return -1
    return int(digits[:CHUNK_SIZE])


def decode(obfuscated_digits: str, epoch_seconds: int) -> str:
    """
    Reverse the character-shift obfuscation.
    
    Args:
        obfuscated_digits: Concatenated 7-digit chunks. A trailing shorter
            chunk is parsed as a smaller integer, never dropped.
        epoch_seconds: Response timestamp the shift is derived from
        
    Returns:
        Decoded text, or an empty string when the timestamp has fewer than 7 digits
        
    Raises:
        DecodeError: If a chunk is not a decimal integer or maps to an invalid code point
    """
    shift = _shift_for(epoch_seconds)
    if shift < 0:
        logger.warning(f"Timestamp {epoch_seconds!r} is shorter than {CHUNK_SIZE} digits")
        return ''
    
    chars = []
    for start in range(0, len(obfuscated_digits), CHUNK_SIZE):
        chunk = obfuscated_digits[start:start + CHUNK_SIZE]
        try:
            code_point = int(chunk, 10) - shift
        except ValueError:
            raise DecodeError(f"Non-numeric chunk {chunk!r} at offset {start}") from None
        if not 0 <= code_point <= 0x10FFFF:
            raise DecodeError(f"Chunk {chunk!r} at offset {start} gives invalid code point {code_point}")
        chars.append(chr(code_point))
    
    # Servers emitting UTF-16 code units send astral characters as surrogate pairs
    return ''.join(chars).encode('utf-16', 'surrogatepass').decode('utf-16', 'surrogatepass')


def encode(text: str, epoch_seconds: int) -> str:
    """
    Inverse of decode, used to build fixtures and fake transports.
    
    Raises:
        ValueError: If the timestamp is too short or a character does not fit in 7 digits
    """
    shift = _shift_for(epoch_seconds)
    if shift < 0:
        raise ValueError(f"Timestamp {epoch_seconds!r} is shorter than {CHUNK_SIZE} digits")
    chunks = []
    for char in text:
        value = ord(char) + shift
        if value >= 10 ** CHUNK_SIZE:
            raise ValueError(f"Character {char!r} does not fit a {CHUNK_SIZE}-digit chunk with shift {shift}")
        chunks.append(str(value).zfill(CHUNK_SIZE))
    return ''.join(chunks)


def decode_payload(obfuscated_digits: str, epoch_seconds: int) -> Any:
    """
    Decode a payload and parse it as JSON.
    
    Raises:
        DecodeError: On an unusable timestamp, bad chunk or invalid JSON
    """
    text = decode(obfuscated_digits, epoch_seconds)
    if not text:
        raise DecodeError(f"Payload decoded to empty text (timestamp {epoch_seconds!r})")
    try:
        return json.loads(text)
    except (ValueError, RecursionError) as e:
        raise DecodeError(f"Decoded payload is not valid JSON: {e}") from e
