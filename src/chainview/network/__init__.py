# File: src/chainview/network/__init__.py
from .monitor import NetworkSnapshot, NodeMonitor, StaticMonitor, compute_consensus
from .status import Monitor, NetworkStatusAdapter

__all__ = [
    'NetworkSnapshot',
    'NodeMonitor',
    'StaticMonitor',
    'compute_consensus',
    'Monitor',
    'NetworkStatusAdapter',
]
