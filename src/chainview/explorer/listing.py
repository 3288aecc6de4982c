# File: src/chainview/explorer/listing.py
import time
from dataclasses import dataclass, field
from typing import Any, Callable, Dict, List, Optional

from ..storage.database import LedgerStore
from ..utils.config import Config


@dataclass
class ListingPolicy:
    """Selection rules for the collection endpoints.

    Blocks are listed above a fixed height floor, transactions inside a
    recency window; both newest first and capped at ``limit`` rows.
    """
    block_height_floor: int = Config.BLOCK_HEIGHT_FLOOR
    recent_window: float = Config.RECENT_TRANSACTION_WINDOW
    limit: int = Config.LISTING_LIMIT
    clock: Callable[[], float] = field(default=time.time, repr=False)

    def __post_init__(self):
        if self.limit < 1:
            raise ValueError("limit must be positive")
        if self.recent_window <= 0:
            raise ValueError("recent_window must be positive")

    def transaction_cutoff(self) -> float:
        return self.clock() - self.recent_window

    def last_blocks(self, store: LedgerStore) -> List[Dict[str, Any]]:
        return store.list_blocks(min_index=self.block_height_floor, limit=self.limit)

    def highest_block(self, store: LedgerStore) -> Optional[Dict[str, Any]]:
        blocks = store.list_blocks(min_index=self.block_height_floor, limit=1)
        return blocks[0] if blocks else None

    def last_transactions(self, store: LedgerStore,
                          tx_type: Optional[str] = None) -> List[Dict[str, Any]]:
        return store.list_transactions(
            since=self.transaction_cutoff(),
            limit=self.limit,
            tx_type=tx_type,
        )

    @classmethod
    def from_settings(cls, settings) -> 'ListingPolicy':
        return cls(
            block_height_floor=int(settings.get('listing.block_height_floor', Config.BLOCK_HEIGHT_FLOOR)),
            recent_window=float(settings.get('listing.recent_window', Config.RECENT_TRANSACTION_WINDOW)),
            limit=int(settings.get('listing.limit', Config.LISTING_LIMIT)),
        )
