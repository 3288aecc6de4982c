# tests/conftest.py
import os
import shutil
import tempfile

import pytest

from chainview.storage.database import LedgerStore

NOW = 1_700_000_000.0

NEO = "c56f33fc6ecfcd0c225c4ab356fee59390af8560be0e930faebe74a6daff7c9b"
GAS = "602c79718b16e442de58778e148d0b1084e3b2dffd5de6b7b16cee7969282de7"
UNKNOWN_ASSET = "0000000000000000000000000000000000000000000000000000000000dead"

ADDRESS = "AQVh2pG732YvtNaxEGkQUei3YA4cvo7d2i"
BLOCK_HEIGHT = 1_200_050
BLOCK_TXIDS = ["txid-a", "txid-b", "txid-c"]


def block_hash(index):
    return f"{index:064x}"


def make_block(index):
    return {
        "hash": block_hash(index),
        "index": index,
        "version": 0,
        "size": 686,
        "time": 1_500_000_000 + index,
        "merkleroot": f"merkle-{index}",
        "previousblockhash": block_hash(index - 1),
        "nextblockhash": block_hash(index + 1),
        "nextconsensus": "APyEx5f4Zm4oCHwFWiSTaph1fPBxZacYVR",
        "nonce": "4c1d7ad6e2d1d1a5",
        "script": {"verification": f"verify-{index}", "invocation": f"invoke-{index}"},
        "confirmations": 10,
    }


def make_transaction(txid, block_index=BLOCK_HEIGHT, tx_type="contract", vin=None):
    return {
        "txid": txid,
        "block_hash": block_hash(block_index),
        "block_height": block_index,
        "type": tx_type,
        "version": 0,
        "size": 202,
        "time": 1_500_000_000 + block_index,
        "sys_fee": "0",
        "net_fee": "0",
        "nonce": 7,
        "pubkey": None,
        "description": None,
        "scripts": [{"verification": "v", "invocation": "i"}],
        "attributes": [],
        "claims": [],
        "contract": None,
        "asset": None,
        "vin": vin if vin is not None else [],
    }


def seed_assets(store):
    store.insert_asset({
        "txid": NEO,
        "type": "GoverningToken",
        "precision": 0,
        "owner": "00",
        "admin": "Abf2qMs1pzQb8kYk9RuxtUb9jtRKJVuBJt",
        "issued": 100_000_000.0,
        "amount": 100_000_000.0,
        "name": [{"lang": "zh-CN", "name": "小蚁股"}, {"lang": "en", "name": "AntShare"}],
    })
    store.insert_asset({
        "txid": GAS,
        "type": "UtilityToken",
        "precision": 8,
        "owner": "00",
        "admin": "AWKECj9RD8rS8RPcpCgYVjk1DeYyHwxZm3",
        "issued": 30_000_000.0,
        "amount": 100_000_000.0,
        "name": [{"lang": "zh-CN", "name": "小蚁币"}, {"lang": "en", "name": "AntCoin"}],
    })


def seed_ledger(store):
    seed_assets(store)

    for index in range(1_199_995, BLOCK_HEIGHT + 1):
        store.insert_block(make_block(index), inserted_at=NOW - 600)

    vin = [{"n": 0, "value": 5.0, "txid": "prev-tx", "asset": NEO, "address_hash": ADDRESS}]
    store.insert_transaction(
        make_transaction("txid-a", vin=vin),
        vouts=[
            {"n": 1, "value": 3.0, "asset": NEO, "address_hash": "AddrTwo"},
            {"n": 0, "value": 2.0, "asset": NEO, "address_hash": ADDRESS},
        ],
        inserted_at=NOW - 180,
    )
    store.insert_transaction(
        make_transaction("txid-b", tx_type="claim", vin=[
            {"n": 1, "value": 1.0, "txid": "prev-tx-2", "asset": UNKNOWN_ASSET, "address_hash": ADDRESS},
        ]),
        vouts=[{"n": 0, "value": 0.5, "asset": GAS, "address_hash": ADDRESS}],
        inserted_at=NOW - 120,
    )
    store.insert_transaction(
        make_transaction("txid-c"),
        vouts=[{"n": 0, "value": 7.0, "asset": UNKNOWN_ASSET, "address_hash": ADDRESS}],
        inserted_at=NOW - 60,
    )
    store.insert_transaction(
        make_transaction("txid-old", block_index=BLOCK_HEIGHT - 1, tx_type="claim"),
        vouts=[{"n": 0, "value": 0.1, "asset": GAS, "address_hash": ADDRESS}],
        inserted_at=NOW - 7200,
    )

    store.insert_address({
        "address": ADDRESS,
        "balance": {
            "slot_b": {"asset": GAS, "amount": 1.5},
            "slot_a": {"asset": NEO, "amount": 10.0},
            "slot_c": {"asset": UNKNOWN_ASSET, "amount": 2.0},
        },
        "claimed": [{"txids": ["txid-b"], "asset": GAS, "amount": 0.5}],
    })
    store.insert_history(ADDRESS, {
        "txid": "txid-a",
        "balance": {"slot_a": {"asset": NEO, "amount": 12.0}},
        "block_height": BLOCK_HEIGHT,
    })
    store.insert_history(ADDRESS, {
        "txid": "txid-old",
        "balance": {"slot_a": {"asset": NEO, "amount": 5.0}},
        "block_height": BLOCK_HEIGHT - 1,
    })
    return store


@pytest.fixture
def temp_dir():
    """Create a temporary directory for test databases"""
    tmp_dir = tempfile.mkdtemp()
    yield tmp_dir
    shutil.rmtree(tmp_dir)


@pytest.fixture
def db_path(temp_dir):
    return os.path.join(temp_dir, "ledger", "test.db")


@pytest.fixture
def store(db_path):
    """Empty ledger store"""
    ledger = LedgerStore(db_path)
    yield ledger
    ledger.close()


@pytest.fixture
def seeded_store(store):
    """Ledger with assets, blocks 1,199,995..1,200,050, four transactions and one address"""
    return seed_ledger(store)
