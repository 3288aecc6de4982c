# File: src/chainview/network/monitor.py

import asyncio
import time
from collections import Counter
from dataclasses import dataclass
from typing import Dict, List, Optional, Sequence, Tuple

import aiohttp

from ..exceptions import NodeRequestError
from ..utils.config import Config
from ..utils.logger import get_logger

logger = get_logger(__name__)


@dataclass(frozen=True)
class NetworkSnapshot:
    """Heights reported by the seed nodes at one refresh."""
    data: Tuple[Tuple[str, int], ...] = ()
    nodes: Tuple[str, ...] = ()
    height: Optional[int] = None
    refreshed_at: Optional[float] = None


def compute_consensus(data: Sequence[Tuple[str, int]]) -> Tuple[List[str], Optional[int]]:
    """Majority height and the urls reporting it.

    Ties between equally common heights go to the higher one.
    """
    if not data:
        return [], None
    counts = Counter(height for _, height in data)
    height = max(counts, key=lambda h: (counts[h], h))
    return [url for url, reported in data if reported == height], height


class NodeMonitor:
    """Polls seed nodes for their height on a fixed interval.

    Readers always get the last completed snapshot; a refresh in progress
    never blocks them.
    """

    def __init__(
        self,
        seed_nodes: Optional[Sequence[str]] = None,
        refresh_interval: float = Config.MONITOR_REFRESH_INTERVAL,
        request_timeout: float = Config.NODE_REQUEST_TIMEOUT
    ):
        self.seed_nodes = list(Config.SEED_NODES if seed_nodes is None else seed_nodes)
        self.refresh_interval = refresh_interval
        self.request_timeout = request_timeout
        self.snapshot = NetworkSnapshot()
        self.running = False
        self._task: Optional[asyncio.Task] = None

    async def fetch_height(self, session: aiohttp.ClientSession, url: str) -> int:
        """Ask one node for its block count over JSON-RPC."""
        payload = {"jsonrpc": "2.0", "method": "getblockcount", "params": [], "id": 1}
        try:
            async with session.post(url, json=payload) as response:
                if response.status != 200:
                    raise NodeRequestError(url, f"HTTP {response.status}")
                body = await response.json(content_type=None)
        except (aiohttp.ClientError, asyncio.TimeoutError, ValueError) as e:
            raise NodeRequestError(url, str(e) or type(e).__name__) from e

        count = body.get("result") if isinstance(body, dict) else None
        if not isinstance(count, int) or isinstance(count, bool) or count < 1:
            raise NodeRequestError(url, f"unexpected response {body!r}")
        # Block count includes the genesis block
        return count - 1

    async def refresh(self) -> NetworkSnapshot:
        timeout = aiohttp.ClientTimeout(total=self.request_timeout)
        async with aiohttp.ClientSession(timeout=timeout) as session:
            results = await asyncio.gather(
                *(self.fetch_height(session, url) for url in self.seed_nodes),
                return_exceptions=True
            )

        data: List[Tuple[str, int]] = []
        for url, result in zip(self.seed_nodes, results):
            if isinstance(result, NodeRequestError):
                logger.warning(f"Dropping node {result.url}: {result.reason}")
            elif isinstance(result, BaseException):
                raise result
            else:
                data.append((url, result))

        nodes, height = compute_consensus(data)
        self.snapshot = NetworkSnapshot(
            data=tuple(data),
            nodes=tuple(nodes),
            height=height,
            refreshed_at=time.time()
        )
        logger.info(f"Network refresh: {len(data)}/{len(self.seed_nodes)} nodes, height {height}")
        return self.snapshot

    async def run(self):
        """Refresh until stopped."""
        self.running = True
        while self.running:
            try:
                await self.refresh()
            except asyncio.CancelledError:
                raise
            except Exception as e:
                logger.error(f"Network refresh failed: {e}")
            await asyncio.sleep(self.refresh_interval)

    def start(self) -> asyncio.Task:
        if self._task is None or self._task.done():
            self._task = asyncio.create_task(self.run())
        return self._task

    async def stop(self):
        self.running = False
        if self._task is not None:
            self._task.cancel()
            try:
                await self._task
            except asyncio.CancelledError:
                pass
            self._task = None

    def get_data(self) -> List[Tuple[str, int]]:
        return list(self.snapshot.data)

    def get_nodes(self) -> List[str]:
        return list(self.snapshot.nodes)

    def get_height(self) -> Optional[int]:
        return self.snapshot.height


class StaticMonitor:
    """Monitor with fixed node heights, for offline use."""

    def __init__(self, heights: Optional[Dict[str, int]] = None):
        data = list((heights or {}).items())
        nodes, height = compute_consensus(data)
        self.snapshot = NetworkSnapshot(
            data=tuple(data), nodes=tuple(nodes), height=height, refreshed_at=time.time()
        )

    def get_data(self) -> List[Tuple[str, int]]:
        return list(self.snapshot.data)

    def get_nodes(self) -> List[str]:
        return list(self.snapshot.nodes)

    def get_height(self) -> Optional[int]:
        return self.snapshot.height
