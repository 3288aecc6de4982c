# File: src/chainview/api/routes/network.py
from typing import Any, Dict, List

from fastapi import APIRouter, Depends

from .explorer import get_explorer
from ...explorer.api import ExplorerAPI

router = APIRouter()


@router.get("/get_all_nodes")
def get_all_nodes(explorer: ExplorerAPI = Depends(get_explorer)) -> List[Dict[str, Any]]:
    return [node.model_dump() for node in explorer.get_all_nodes()]

@router.get("/get_nodes")
def get_nodes(explorer: ExplorerAPI = Depends(get_explorer)) -> Dict[str, Any]:
    return explorer.get_nodes().model_dump()

@router.get("/get_height")
def get_height(explorer: ExplorerAPI = Depends(get_explorer)) -> Dict[str, Any]:
    return explorer.get_height().model_dump()
