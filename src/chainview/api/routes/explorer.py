# File: src/chainview/api/routes/explorer.py
from typing import Any, Dict, List, Optional

from fastapi import APIRouter, Depends, Request

from ...explorer.api import ExplorerAPI

router = APIRouter()


def get_explorer(request: Request) -> ExplorerAPI:
    return request.app.state.explorer


@router.get("/get_balance/{address}")
def get_balance(address: str, explorer: ExplorerAPI = Depends(get_explorer)) -> Dict[str, Any]:
    return explorer.get_balance(address).model_dump()

@router.get("/get_claimed/{address}")
def get_claimed(address: str, explorer: ExplorerAPI = Depends(get_explorer)) -> Dict[str, Any]:
    return explorer.get_claimed(address).model_dump()

@router.get("/get_address/{address}")
def get_address(address: str, explorer: ExplorerAPI = Depends(get_explorer)) -> Dict[str, Any]:
    return explorer.get_address(address).model_dump()

@router.get("/get_assets")
def get_assets(explorer: ExplorerAPI = Depends(get_explorer)) -> List[Dict[str, Any]]:
    return [asset.model_dump() for asset in explorer.get_assets()]

@router.get("/get_asset/{txid}")
def get_asset(txid: str, explorer: ExplorerAPI = Depends(get_explorer)) -> Dict[str, Any]:
    return explorer.get_asset(txid).model_dump()

@router.get("/get_block/{hash_or_height}")
def get_block(hash_or_height: str, explorer: ExplorerAPI = Depends(get_explorer)) -> Dict[str, Any]:
    return explorer.get_block(hash_or_height).model_dump()

@router.get("/get_last_blocks")
def get_last_blocks(explorer: ExplorerAPI = Depends(get_explorer)) -> List[Dict[str, Any]]:
    return [block.model_dump() for block in explorer.get_last_blocks()]

@router.get("/get_highest_block")
def get_highest_block(explorer: ExplorerAPI = Depends(get_explorer)) -> Dict[str, Any]:
    return explorer.get_highest_block().model_dump()

@router.get("/get_transaction/{txid}")
def get_transaction(txid: str, explorer: ExplorerAPI = Depends(get_explorer)) -> Dict[str, Any]:
    return explorer.get_transaction(txid).model_dump()

@router.get("/get_last_transactions")
@router.get("/get_last_transactions/{tx_type}")
def get_last_transactions(
    tx_type: Optional[str] = None,
    explorer: ExplorerAPI = Depends(get_explorer)
) -> List[Dict[str, Any]]:
    return [tx.model_dump() for tx in explorer.get_last_transactions(tx_type)]
