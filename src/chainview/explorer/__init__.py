# File: src/chainview/explorer/__init__.py
from .assets import AssetResolver
from .listing import ListingPolicy
from .lookup import ByHash, ByHeight, parse_block_key
from .projector import EntityProjector

__all__ = [
    'AssetResolver',
    'ListingPolicy',
    'ByHash',
    'ByHeight',
    'parse_block_key',
    'EntityProjector',
]
