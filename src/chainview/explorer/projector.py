# File: src/chainview/explorer/projector.py
from typing import Any, Dict, Iterable, List, Mapping, Optional

from .assets import AssetResolver
from .models import (
    AddressView,
    AssetView,
    BalanceView,
    BlockView,
    ClaimedView,
    TransactionView,
)

# Storage-only fields never exposed in a response
INTERNAL_FIELDS = frozenset({
    'id', 'inserted_at', 'updated_at', 'block', 'block_id',
    'address_id', 'transaction_id', 'histories',
})


def strip_internal(record: Mapping[str, Any], extra: Iterable[str] = ()) -> Dict[str, Any]:
    dropped = INTERNAL_FIELDS.union(extra)
    return {key: value for key, value in record.items() if key not in dropped}


class EntityProjector:
    """Turns ledger-store records into public views.

    A missing record (``None``) projects to the view's not-found sentinel.
    """

    def __init__(self, resolver: AssetResolver):
        self.resolver = resolver

    def project_balance(self, record: Optional[Dict[str, Any]]) -> BalanceView:
        if record is None:
            return BalanceView.not_found()
        names = self.resolver.resolve_names(_balance_assets(record.get('balance')))
        return BalanceView(
            address=record['address'],
            balance=_filter_balance(record.get('balance'), names),
        )

    def project_claimed(self, record: Optional[Dict[str, Any]]) -> ClaimedView:
        if record is None:
            return ClaimedView.not_found()
        return ClaimedView(address=record['address'], claimed=record.get('claimed') or [])

    def project_address(self, record: Optional[Dict[str, Any]]) -> AddressView:
        if record is None:
            return AddressView.not_found()

        histories = record.get('histories') or []
        asset_ids = list(_balance_assets(record.get('balance')))
        for history in histories:
            asset_ids.extend(_balance_assets(history.get('balance')))
        names = self.resolver.resolve_names(asset_ids)

        txids = [
            {
                'txid': history['txid'],
                'balance': _filter_balance(history.get('balance'), names),
                'block_height': history.get('block_height'),
            }
            for history in histories
        ]
        fields = strip_internal(record, extra=('vouts',))
        fields.update(
            balance=_filter_balance(record.get('balance'), names),
            claimed=record.get('claimed') or [],
            txids=txids,
        )
        return AddressView(**fields)

    def project_asset(self, record: Optional[Dict[str, Any]]) -> AssetView:
        if record is None:
            return AssetView.not_found()
        return AssetView(**strip_internal(record))

    def project_block(self, record: Optional[Dict[str, Any]]) -> BlockView:
        if record is None:
            return BlockView.not_found()
        fields = strip_internal(record)
        transactions = list(fields.get('transactions') or [])
        fields.update(transactions=transactions, tx_count=len(transactions))
        return BlockView(**fields)

    def project_transaction(self, record: Optional[Dict[str, Any]]) -> TransactionView:
        if record is None:
            return TransactionView.not_found()
        return self.project_transactions([record])[0]

    def project_transactions(self, records: List[Dict[str, Any]]) -> List[TransactionView]:
        """Project several transactions, resolving all their asset ids at once."""
        asset_ids = []
        for record in records:
            asset_ids.extend(entry.get('asset') for entry in record.get('vouts') or [])
            asset_ids.extend(entry.get('asset') for entry in record.get('vin') or [])
        names = self.resolver.resolve_names(asset_id for asset_id in asset_ids if asset_id is not None)

        views = []
        for record in records:
            fields = strip_internal(record)
            fields['vouts'] = [_with_asset_name(vout, names) for vout in record.get('vouts') or []]
            fields['vin'] = [_with_asset_name(vin, names) for vin in record.get('vin') or []]
            views.append(TransactionView(**fields))
        return views


def _balance_assets(balance: Optional[Mapping[str, Any]]) -> List[str]:
    return [entry['asset'] for entry in (balance or {}).values()]


def _filter_balance(balance: Optional[Mapping[str, Any]],
                    names: Mapping[str, str]) -> List[Dict[str, Any]]:
    """Slot-keyed balance map to an ``[{asset, amount}]`` list ordered by slot."""
    return [
        {'asset': names.get(entry['asset'], entry['asset']), 'amount': entry.get('amount')}
        for _, entry in sorted((balance or {}).items())
    ]


def _with_asset_name(entry: Mapping[str, Any], names: Mapping[str, str]) -> Dict[str, Any]:
    resolved = dict(entry)
    asset = resolved.get('asset')
    if asset is not None:
        resolved['asset'] = names.get(asset, asset)
    return resolved
