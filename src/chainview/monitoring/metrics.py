# File: src/chainview/monitoring/metrics.py

import time
from contextlib import contextmanager
from typing import Iterator, Optional

import psutil
from prometheus_client import CollectorRegistry, Counter, Gauge, Histogram, start_http_server

class ExplorerMetrics:
    def __init__(self, port: Optional[int] = None, registry: Optional[CollectorRegistry] = None):
        self.registry = registry or CollectorRegistry()

        # Request metrics
        self.requests = Counter(
            'explorer_requests', 'Explorer operations served', ['operation'],
            registry=self.registry
        )
        self.not_found = Counter(
            'explorer_not_found', 'Lookups answered with a not-found sentinel', ['entity'],
            registry=self.registry
        )
        self.query_time = Histogram(
            'explorer_query_seconds', 'Ledger store query time', ['operation'],
            registry=self.registry
        )

        # Network metrics
        self.consensus_height = Gauge(
            'network_consensus_height', 'Height agreed by the majority of nodes',
            registry=self.registry
        )
        self.tracked_nodes = Gauge(
            'network_tracked_nodes', 'Number of nodes reporting a height',
            registry=self.registry
        )

        # System metrics, read from the process at scrape time
        self.process = psutil.Process()
        self.cpu_usage = Gauge('cpu_usage', 'CPU usage percentage', registry=self.registry)
        self.cpu_usage.set_function(self.process.cpu_percent)
        self.memory_usage = Gauge('memory_usage', 'Memory usage percentage', registry=self.registry)
        self.memory_usage.set_function(self.process.memory_percent)

        if port is not None:
            start_http_server(port, registry=self.registry)

    @contextmanager
    def track(self, operation: str) -> Iterator[None]:
        self.requests.labels(operation=operation).inc()
        start = time.perf_counter()
        try:
            yield
        finally:
            self.query_time.labels(operation=operation).observe(time.perf_counter() - start)

    def record_not_found(self, entity: str):
        self.not_found.labels(entity=entity).inc()

    def update_network_metrics(self, height: Optional[int], node_count: int):
        if height is not None:
            self.consensus_height.set(height)
        self.tracked_nodes.set(node_count)
