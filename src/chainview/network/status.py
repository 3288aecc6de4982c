# File: src/chainview/network/status.py
from typing import List, Optional, Protocol, Tuple

from ..exceptions import MonitorUnavailableError
from ..explorer.models import NodeView
from ..monitoring.metrics import ExplorerMetrics
from ..utils.logger import get_logger
from .monitor import NetworkSnapshot

logger = get_logger(__name__)


class Monitor(Protocol):
    snapshot: NetworkSnapshot

    def get_data(self) -> List[Tuple[str, int]]: ...

    def get_nodes(self) -> List[str]: ...

    def get_height(self) -> Optional[int]: ...


class NetworkStatusAdapter:
    """Reads the monitor's current view and reshapes it for the API."""

    def __init__(self, monitor: Monitor, metrics: Optional[ExplorerMetrics] = None):
        self.monitor = monitor
        self.metrics = metrics

    def list_nodes(self) -> List[NodeView]:
        snapshot = self.monitor.snapshot
        nodes = [NodeView(url=url, height=height) for url, height in snapshot.data]
        if self.metrics:
            self.metrics.update_network_metrics(snapshot.height, len(nodes))
        return nodes

    def consensus_nodes(self) -> List[str]:
        return list(self.monitor.get_nodes())

    def consensus_height(self) -> int:
        height = self.monitor.get_height()
        if height is None:
            logger.warning("Consensus height requested before the monitor produced one")
            raise MonitorUnavailableError("Network height is not available yet")
        return height
