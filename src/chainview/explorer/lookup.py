# File: src/chainview/explorer/lookup.py
import re
from dataclasses import dataclass
from typing import Union

_HEIGHT_PATTERN = re.compile(r'[+-]?[0-9]+')

# Heights are stored as signed 64-bit integers
MIN_HEIGHT = -2 ** 63
MAX_HEIGHT = 2 ** 63 - 1


@dataclass(frozen=True)
class ByHash:
    value: str


@dataclass(frozen=True)
class ByHeight:
    value: int


BlockKey = Union[ByHash, ByHeight]


def parse_block_key(value: Union[str, int]) -> BlockKey:
    """Classify a block lookup key as a height or a hash.

    Integers and all-digit strings are heights; everything else, including
    malformed input and numbers too large to be a stored height, is looked
    up as a hash.
    """
    if isinstance(value, bool):
        return ByHash(str(value))
    if isinstance(value, int):
        return _height_or_hash(value, str(value))
    text = str(value)
    if _HEIGHT_PATTERN.fullmatch(text):
        return _height_or_hash(int(text), text)
    return ByHash(text)


def _height_or_hash(height: int, text: str) -> BlockKey:
    if MIN_HEIGHT <= height <= MAX_HEIGHT:
        return ByHeight(height)
    return ByHash(text)
