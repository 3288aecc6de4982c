# File: src/chainview/explorer/api.py
from contextlib import nullcontext
from typing import List, Optional, Union

from .assets import AssetResolver
from .listing import ListingPolicy
from .lookup import ByHeight, parse_block_key
from .models import (
    AddressView,
    AssetView,
    BalanceView,
    BlockView,
    ClaimedView,
    HeightView,
    NodesView,
    NodeView,
    TransactionView,
)
from .projector import EntityProjector
from ..monitoring.metrics import ExplorerMetrics
from ..network.status import Monitor, NetworkStatusAdapter
from ..storage.database import LedgerStore
from ..utils.logger import get_logger

logger = get_logger(__name__)


class ExplorerAPI:
    def __init__(
        self,
        store: LedgerStore,
        monitor: Monitor,
        policy: Optional[ListingPolicy] = None,
        resolver: Optional[AssetResolver] = None,
        metrics: Optional[ExplorerMetrics] = None
    ):
        self.store = store
        self.policy = policy or ListingPolicy()
        self.resolver = resolver or AssetResolver(store)
        self.projector = EntityProjector(self.resolver)
        self.network = NetworkStatusAdapter(monitor, metrics)
        self.metrics = metrics

    def _track(self, operation: str):
        return self.metrics.track(operation) if self.metrics else nullcontext()

    def _found(self, view, entity: str):
        if not view.is_found():
            logger.debug(f"{entity} not found")
            if self.metrics:
                self.metrics.record_not_found(entity)
        return view

    def get_balance(self, address: str) -> BalanceView:
        """Get the resolved balance of an address."""
        with self._track('get_balance'):
            record = self.store.get_address(address)
            return self._found(self.projector.project_balance(record), 'address')

    def get_claimed(self, address: str) -> ClaimedView:
        """Get the claimed transactions of an address."""
        with self._track('get_claimed'):
            record = self.store.get_address(address)
            return self._found(self.projector.project_claimed(record), 'address')

    def get_address(self, address: str) -> AddressView:
        """Get address details with balance history."""
        with self._track('get_address'):
            record = self.store.get_address(address, with_histories=True)
            return self._found(self.projector.project_address(record), 'address')

    def get_assets(self) -> List[AssetView]:
        """Get all registered assets."""
        with self._track('get_assets'):
            return [self.projector.project_asset(asset) for asset in self.store.list_assets()]

    def get_asset(self, txid: str) -> AssetView:
        """Get asset by registration txid."""
        with self._track('get_asset'):
            return self._found(self.projector.project_asset(self.store.get_asset(txid)), 'asset')

    def get_block(self, hash_or_height: Union[str, int]) -> BlockView:
        """Get block by height or hash."""
        with self._track('get_block'):
            key = parse_block_key(hash_or_height)
            if isinstance(key, ByHeight):
                record = self.store.get_block_by_index(key.value)
            else:
                record = self.store.get_block_by_hash(key.value)
            return self._found(self.projector.project_block(record), 'block')

    def get_last_blocks(self) -> List[BlockView]:
        """Get latest blocks."""
        with self._track('get_last_blocks'):
            return [self.projector.project_block(block) for block in self.policy.last_blocks(self.store)]

    def get_highest_block(self) -> BlockView:
        """Get the highest listed block, or the block sentinel on an empty ledger."""
        with self._track('get_highest_block'):
            record = self.policy.highest_block(self.store)
            return self._found(self.projector.project_block(record), 'block')

    def get_transaction(self, txid: str) -> TransactionView:
        """Get transaction by hash."""
        with self._track('get_transaction'):
            record = self.store.get_transaction(txid)
            return self._found(self.projector.project_transaction(record), 'transaction')

    def get_last_transactions(self, tx_type: Optional[str] = None) -> List[TransactionView]:
        """Get latest transactions, optionally of one type."""
        with self._track('get_last_transactions'):
            records = self.policy.last_transactions(self.store, tx_type)
            return self.projector.project_transactions(records)

    def get_all_nodes(self) -> List[NodeView]:
        """Get every tracked node with its height."""
        with self._track('get_all_nodes'):
            return self.network.list_nodes()

    def get_nodes(self) -> NodesView:
        """Get the nodes agreeing on the majority height."""
        with self._track('get_nodes'):
            return NodesView(urls=self.network.consensus_nodes())

    def get_height(self) -> HeightView:
        """Get the network height; raises MonitorUnavailableError without one."""
        with self._track('get_height'):
            return HeightView(height=self.network.consensus_height())
