# File: src/chainview/explorer/models.py
from pydantic import BaseModel
from typing import Any, ClassVar, List, Optional

from ..utils.config import Config

NOT_FOUND = Config.NOT_FOUND


class AssetAmount(BaseModel):
    asset: str
    amount: Optional[float] = None


class HistoryEntry(BaseModel):
    txid: str
    balance: List[AssetAmount]
    block_height: Optional[int] = None


class Claim(BaseModel):
    txids: List[str] = []
    asset: Optional[str] = None
    amount: Optional[float] = None


class AssetName(BaseModel):
    name: str
    lang: Optional[str] = None


class Script(BaseModel):
    verification: Optional[str] = None
    invocation: Optional[str] = None


class Vout(BaseModel):
    asset: str
    address: Optional[str] = None
    n: int
    value: float


class Vin(BaseModel):
    asset: Optional[str] = None
    address_hash: Optional[str] = None
    n: int
    value: Optional[float] = None
    txid: Optional[str] = None


class View(BaseModel):
    """Public response shape with a field-complete not-found form."""

    # Field that carries NOT_FOUND in the sentinel
    IDENTIFIER: ClassVar[str]

    @classmethod
    def not_found(cls):
        fields = {name: None for name in cls.model_fields}
        fields[cls.IDENTIFIER] = NOT_FOUND
        return cls.model_construct(**fields)

    def is_found(self) -> bool:
        return getattr(self, self.IDENTIFIER) != NOT_FOUND


class BalanceView(View):
    address: str
    balance: Optional[List[AssetAmount]] = None

    IDENTIFIER: ClassVar[str] = 'address'


class ClaimedView(View):
    address: str
    claimed: Optional[List[Claim]] = None

    IDENTIFIER: ClassVar[str] = 'address'


class AddressView(View):
    address: str
    balance: Optional[List[AssetAmount]] = None
    claimed: Optional[List[Claim]] = None
    txids: Optional[List[HistoryEntry]] = None

    IDENTIFIER: ClassVar[str] = 'address'


class AssetView(View):
    txid: str
    type: Optional[str] = None
    precision: Optional[int] = None
    owner: Optional[str] = None
    admin: Optional[str] = None
    issued: Optional[float] = None
    amount: Optional[float] = None
    name: Optional[List[AssetName]] = None

    IDENTIFIER: ClassVar[str] = 'txid'


class BlockView(View):
    hash: str
    index: Optional[int] = None
    version: Optional[int] = None
    size: Optional[int] = None
    time: Optional[int] = None
    merkleroot: Optional[str] = None
    previousblockhash: Optional[str] = None
    nextblockhash: Optional[str] = None
    nextconsensus: Optional[str] = None
    nonce: Optional[str] = None
    script: Optional[Script] = None
    confirmations: Optional[int] = None
    tx_count: Optional[int] = None
    transactions: Optional[List[str]] = None

    IDENTIFIER: ClassVar[str] = 'hash'


class TransactionView(View):
    txid: str
    type: Optional[str] = None
    version: Optional[int] = None
    size: Optional[int] = None
    time: Optional[int] = None
    sys_fee: Optional[str] = None
    net_fee: Optional[str] = None
    scripts: Optional[List[Script]] = None
    attributes: Optional[List[Any]] = None
    claims: Optional[List[Any]] = None
    contract: Optional[Any] = None
    description: Optional[str] = None
    pubkey: Optional[str] = None
    nonce: Optional[int] = None
    asset: Optional[Any] = None
    block_height: Optional[int] = None
    block_hash: Optional[str] = None
    vouts: Optional[List[Vout]] = None
    vin: Optional[List[Vin]] = None

    IDENTIFIER: ClassVar[str] = 'txid'


class NodeView(BaseModel):
    url: str
    height: int


class NodesView(BaseModel):
    urls: List[str]


class HeightView(BaseModel):
    height: int
