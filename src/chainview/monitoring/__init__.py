from .logging_config import LogConfig
from .metrics import ExplorerMetrics

__all__ = ['LogConfig', 'ExplorerMetrics']
