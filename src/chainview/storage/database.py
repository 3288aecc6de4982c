# src/chainview/storage/database.py
from typing import Any, Dict, Iterable, List, Optional, Sequence
import json
import os
import sqlite3
import threading
import time

from ..exceptions import DatabaseError
from ..utils.logger import get_logger

logger = get_logger(__name__)

SCHEMA = [
    """
    CREATE TABLE IF NOT EXISTS assets (
        id INTEGER PRIMARY KEY AUTOINCREMENT,
        txid TEXT NOT NULL UNIQUE,
        type TEXT,
        precision INTEGER,
        owner TEXT,
        admin TEXT,
        issued REAL,
        amount REAL,
        name TEXT NOT NULL DEFAULT '[]',
        inserted_at REAL NOT NULL,
        updated_at REAL NOT NULL
    )
    """,
    """
    CREATE TABLE IF NOT EXISTS blocks (
        id INTEGER PRIMARY KEY AUTOINCREMENT,
        hash TEXT NOT NULL UNIQUE,
        "index" INTEGER NOT NULL UNIQUE,
        version INTEGER,
        size INTEGER,
        time INTEGER,
        merkleroot TEXT,
        previousblockhash TEXT,
        nextblockhash TEXT,
        nextconsensus TEXT,
        nonce TEXT,
        script TEXT,
        confirmations INTEGER,
        inserted_at REAL NOT NULL,
        updated_at REAL NOT NULL
    )
    """,
    """
    CREATE TABLE IF NOT EXISTS transactions (
        id INTEGER PRIMARY KEY AUTOINCREMENT,
        txid TEXT NOT NULL UNIQUE,
        block_id INTEGER REFERENCES blocks(id),
        block_hash TEXT,
        block_height INTEGER,
        type TEXT,
        version INTEGER,
        size INTEGER,
        time INTEGER,
        sys_fee TEXT,
        net_fee TEXT,
        nonce INTEGER,
        pubkey TEXT,
        description TEXT,
        scripts TEXT NOT NULL DEFAULT '[]',
        attributes TEXT NOT NULL DEFAULT '[]',
        claims TEXT NOT NULL DEFAULT '[]',
        contract TEXT,
        asset TEXT,
        vin TEXT NOT NULL DEFAULT '[]',
        inserted_at REAL NOT NULL,
        updated_at REAL NOT NULL
    )
    """,
    """
    CREATE TABLE IF NOT EXISTS vouts (
        id INTEGER PRIMARY KEY AUTOINCREMENT,
        transaction_id INTEGER NOT NULL REFERENCES transactions(id),
        txid TEXT NOT NULL,
        n INTEGER NOT NULL,
        asset TEXT NOT NULL,
        address_hash TEXT NOT NULL,
        value REAL NOT NULL,
        inserted_at REAL NOT NULL,
        updated_at REAL NOT NULL,
        UNIQUE (transaction_id, n)
    )
    """,
    """
    CREATE TABLE IF NOT EXISTS addresses (
        id INTEGER PRIMARY KEY AUTOINCREMENT,
        address TEXT NOT NULL UNIQUE,
        balance TEXT NOT NULL DEFAULT '{}',
        claimed TEXT NOT NULL DEFAULT '[]',
        inserted_at REAL NOT NULL,
        updated_at REAL NOT NULL
    )
    """,
    """
    CREATE TABLE IF NOT EXISTS histories (
        id INTEGER PRIMARY KEY AUTOINCREMENT,
        address_id INTEGER NOT NULL REFERENCES addresses(id),
        txid TEXT NOT NULL,
        balance TEXT NOT NULL DEFAULT '{}',
        block_height INTEGER,
        inserted_at REAL NOT NULL,
        updated_at REAL NOT NULL
    )
    """,
    'CREATE INDEX IF NOT EXISTS idx_blocks_index ON blocks("index")',
    'CREATE INDEX IF NOT EXISTS idx_transactions_block ON transactions(block_id)',
    'CREATE INDEX IF NOT EXISTS idx_transactions_inserted ON transactions(inserted_at)',
    'CREATE INDEX IF NOT EXISTS idx_vouts_transaction ON vouts(transaction_id)',
    'CREATE INDEX IF NOT EXISTS idx_histories_address ON histories(address_id)',
]

# Columns holding JSON documents, per table
JSON_FIELDS = {
    'assets': ('name',),
    'blocks': ('script',),
    'transactions': ('scripts', 'attributes', 'claims', 'contract', 'asset', 'vin'),
    'addresses': ('balance', 'claimed'),
    'histories': ('balance',),
}

BLOCK_COLUMNS = (
    'hash', 'index', 'version', 'size', 'time', 'merkleroot', 'previousblockhash',
    'nextblockhash', 'nextconsensus', 'nonce', 'script', 'confirmations',
)
TRANSACTION_COLUMNS = (
    'txid', 'block_hash', 'block_height', 'type', 'version', 'size', 'time',
    'sys_fee', 'net_fee', 'nonce', 'pubkey', 'description', 'scripts',
    'attributes', 'claims', 'contract', 'asset', 'vin',
)
ASSET_COLUMNS = ('txid', 'type', 'precision', 'owner', 'admin', 'issued', 'amount', 'name')


class LedgerStore:
    """Read access to the persisted ledger.

    Records come back as plain dicts that still carry storage-only fields
    (``id``, ``inserted_at``, ``updated_at``, foreign keys). Associations are
    preloaded with one batched query per association, never per row.
    """

    def __init__(self, db_path: str):
        """Initialize database connection"""
        self.db_path = db_path
        directory = os.path.dirname(db_path)
        if directory:
            os.makedirs(directory, exist_ok=True)
        self._local = threading.local()
        self._connections: List[sqlite3.Connection] = []
        self._lock = threading.Lock()
        self._init_db()

    def _get_conn(self) -> sqlite3.Connection:
        """Get thread-local database connection"""
        if not hasattr(self._local, 'conn'):
            # Each thread uses only its own connection; close() may run elsewhere
            conn = sqlite3.connect(self.db_path, check_same_thread=False)
            conn.row_factory = sqlite3.Row
            with self._lock:
                self._connections.append(conn)
            self._local.conn = conn
        return self._local.conn

    def _init_db(self):
        """Initialize database tables"""
        try:
            conn = self._get_conn()
            with conn:
                for statement in SCHEMA:
                    conn.execute(statement)
        except sqlite3.Error as e:
            raise DatabaseError(f"Error initializing ledger schema: {str(e)}") from e

    def _query(self, sql: str, params: Sequence[Any] = ()) -> List[sqlite3.Row]:
        try:
            conn = self._get_conn()
            with conn:
                return conn.execute(sql, tuple(params)).fetchall()
        except sqlite3.Error as e:
            raise DatabaseError(f"Error reading ledger: {str(e)}") from e

    def _execute(self, sql: str, params: Sequence[Any] = ()) -> int:
        try:
            conn = self._get_conn()
            with conn:
                return conn.execute(sql, tuple(params)).lastrowid
        except sqlite3.Error as e:
            raise DatabaseError(f"Error writing ledger: {str(e)}") from e

    @staticmethod
    def _decode(row: sqlite3.Row, table: str) -> Dict[str, Any]:
        record = dict(row)
        for field in JSON_FIELDS.get(table, ()):
            if field in record and record[field] is not None:
                record[field] = json.loads(record[field])
        return record

    # Addresses

    def get_address(self, address: str, with_histories: bool = False) -> Optional[Dict[str, Any]]:
        rows = self._query("SELECT * FROM addresses WHERE address = ? LIMIT 1", (address,))
        if not rows:
            return None
        record = self._decode(rows[0], 'addresses')
        if with_histories:
            record['histories'] = self._histories_for([record['id']]).get(record['id'], [])
        return record

    def _histories_for(self, address_ids: List[int]) -> Dict[int, List[Dict[str, Any]]]:
        grouped: Dict[int, List[Dict[str, Any]]] = {address_id: [] for address_id in address_ids}
        if not address_ids:
            return grouped
        rows = self._query(
            f"SELECT address_id, txid, balance, block_height FROM histories "
            f"WHERE address_id IN ({_placeholders(address_ids)}) "
            f"ORDER BY block_height, id",
            address_ids
        )
        for row in rows:
            history = self._decode(row, 'histories')
            grouped[history.pop('address_id')].append(history)
        return grouped

    # Assets

    def get_asset(self, txid: str) -> Optional[Dict[str, Any]]:
        rows = self._query("SELECT * FROM assets WHERE txid = ? LIMIT 1", (txid,))
        return self._decode(rows[0], 'assets') if rows else None

    def list_assets(self) -> List[Dict[str, Any]]:
        rows = self._query("SELECT * FROM assets ORDER BY id")
        return [self._decode(row, 'assets') for row in rows]

    def get_assets_by_ids(self, txids: Iterable[str]) -> List[Dict[str, Any]]:
        txids = list(dict.fromkeys(txids))
        if not txids:
            return []
        rows = self._query(
            f"SELECT txid, name FROM assets WHERE txid IN ({_placeholders(txids)})",
            txids
        )
        return [self._decode(row, 'assets') for row in rows]

    # Blocks

    def get_block_by_hash(self, block_hash: str) -> Optional[Dict[str, Any]]:
        return self._first_block("SELECT * FROM blocks WHERE hash = ? LIMIT 1", (block_hash,))

    def get_block_by_index(self, index: int) -> Optional[Dict[str, Any]]:
        return self._first_block('SELECT * FROM blocks WHERE "index" = ? LIMIT 1', (index,))

    def list_blocks(self, min_index: int, limit: int) -> List[Dict[str, Any]]:
        """Blocks with ``index > min_index``, highest first."""
        rows = self._query(
            'SELECT * FROM blocks WHERE "index" > ? ORDER BY "index" DESC LIMIT ?',
            (min_index, limit)
        )
        return self._with_transactions([self._decode(row, 'blocks') for row in rows])

    def _first_block(self, sql: str, params: Sequence[Any]) -> Optional[Dict[str, Any]]:
        rows = self._query(sql, params)
        if not rows:
            return None
        return self._with_transactions([self._decode(rows[0], 'blocks')])[0]

    def _with_transactions(self, blocks: List[Dict[str, Any]]) -> List[Dict[str, Any]]:
        block_ids = [block['id'] for block in blocks]
        grouped: Dict[int, List[str]] = {block_id: [] for block_id in block_ids}
        if block_ids:
            rows = self._query(
                f"SELECT block_id, txid FROM transactions "
                f"WHERE block_id IN ({_placeholders(block_ids)}) ORDER BY id",
                block_ids
            )
            for row in rows:
                grouped[row['block_id']].append(row['txid'])
        for block in blocks:
            block['transactions'] = grouped[block['id']]
        return blocks

    # Transactions

    def get_transaction(self, txid: str) -> Optional[Dict[str, Any]]:
        rows = self._query("SELECT * FROM transactions WHERE txid = ? LIMIT 1", (txid,))
        if not rows:
            return None
        return self._with_vouts([self._decode(rows[0], 'transactions')])[0]

    def list_transactions(self, since: float, limit: int,
                          tx_type: Optional[str] = None) -> List[Dict[str, Any]]:
        """Transactions inserted after ``since``, newest first."""
        sql = "SELECT * FROM transactions WHERE inserted_at > ?"
        params: List[Any] = [since]
        if tx_type is not None:
            sql += " AND type = ?"
            params.append(tx_type)
        sql += " ORDER BY inserted_at DESC, id DESC LIMIT ?"
        params.append(limit)
        rows = self._query(sql, params)
        return self._with_vouts([self._decode(row, 'transactions') for row in rows])

    def _with_vouts(self, transactions: List[Dict[str, Any]]) -> List[Dict[str, Any]]:
        tx_ids = [tx['id'] for tx in transactions]
        grouped: Dict[int, List[Dict[str, Any]]] = {tx_id: [] for tx_id in tx_ids}
        if tx_ids:
            rows = self._query(
                f"SELECT transaction_id, asset, address_hash AS address, n, value FROM vouts "
                f"WHERE transaction_id IN ({_placeholders(tx_ids)}) ORDER BY n",
                tx_ids
            )
            for row in rows:
                vout = dict(row)
                grouped[vout.pop('transaction_id')].append(vout)
        for tx in transactions:
            tx['vouts'] = grouped[tx['id']]
            tx['vin'] = [_string_keys(vin) for vin in tx.get('vin') or []]
        return transactions

    # Ingestion helpers

    def insert_asset(self, asset: Dict[str, Any], inserted_at: Optional[float] = None) -> int:
        return self._insert('assets', ASSET_COLUMNS, asset, inserted_at)

    def insert_block(self, block: Dict[str, Any], inserted_at: Optional[float] = None) -> int:
        return self._insert('blocks', BLOCK_COLUMNS, block, inserted_at)

    def insert_transaction(self, transaction: Dict[str, Any],
                           vouts: Iterable[Dict[str, Any]] = (),
                           inserted_at: Optional[float] = None) -> int:
        record = dict(transaction)
        block_rows = self._query(
            "SELECT id FROM blocks WHERE hash = ? LIMIT 1", (record.get('block_hash'),)
        )
        tx_id = self._insert(
            'transactions', TRANSACTION_COLUMNS + ('block_id',),
            {**record, 'block_id': block_rows[0]['id'] if block_rows else None},
            inserted_at
        )
        now = time.time() if inserted_at is None else inserted_at
        for vout in vouts:
            self._execute(
                "INSERT INTO vouts (transaction_id, txid, n, asset, address_hash, value, "
                "inserted_at, updated_at) VALUES (?, ?, ?, ?, ?, ?, ?, ?)",
                (tx_id, record['txid'], vout['n'], vout['asset'],
                 vout.get('address_hash', vout.get('address')), vout['value'], now, now)
            )
        return tx_id

    def insert_address(self, address: Dict[str, Any], inserted_at: Optional[float] = None) -> int:
        return self._insert('addresses', ('address', 'balance', 'claimed'), address, inserted_at)

    def insert_history(self, address: str, history: Dict[str, Any],
                       inserted_at: Optional[float] = None) -> int:
        rows = self._query("SELECT id FROM addresses WHERE address = ? LIMIT 1", (address,))
        if not rows:
            raise DatabaseError(f"Unknown address {address}")
        return self._insert(
            'histories', ('address_id', 'txid', 'balance', 'block_height'),
            {**history, 'address_id': rows[0]['id']}, inserted_at
        )

    def _insert(self, table: str, columns: Sequence[str], values: Dict[str, Any],
                inserted_at: Optional[float]) -> int:
        now = time.time() if inserted_at is None else inserted_at
        json_fields = JSON_FIELDS.get(table, ())
        present = [column for column in columns if column in values]
        row = [
            json.dumps(values[column]) if column in json_fields else values[column]
            for column in present
        ]
        names = ", ".join(f'"{column}"' for column in present + ['inserted_at', 'updated_at'])
        return self._execute(
            f"INSERT INTO {table} ({names}) VALUES ({_placeholders(row + [now, now])})",
            row + [now, now]
        )

    def close(self):
        """Close the connections opened by every thread"""
        with self._lock:
            connections, self._connections = self._connections, []
            self._local = threading.local()
        for conn in connections:
            conn.close()


def _placeholders(values: Sequence[Any]) -> str:
    return ", ".join("?" for _ in values)


def _string_keys(entry: Any) -> Any:
    if isinstance(entry, dict):
        return {str(key): value for key, value in entry.items()}
    return entry
