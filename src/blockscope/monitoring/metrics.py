# File: src/blockscope/monitoring/metrics.py

from prometheus_client import CollectorRegistry, Counter, Gauge, Histogram, generate_latest

class MetricsCollector:
    def __init__(self, registry: CollectorRegistry = None):
        self.registry = registry if registry is not None else CollectorRegistry()

        # Provider metrics
        self.provider_requests = Counter(
            'provider_requests', 'Chain data provider requests issued',
            ['operation'], registry=self.registry
        )
        self.provider_failures = Counter(
            'provider_failures', 'Chain data provider requests that failed',
            ['operation'], registry=self.registry
        )
        self.provider_latency = Histogram(
            'provider_request_seconds', 'Chain data provider request latency',
            ['operation'], registry=self.registry
        )

        # Explorer metrics
        self.window_size = Gauge('blocks_window_size', 'Blocks in the recent blocks window',
                                 registry=self.registry)
        self.discarded_details = Counter('detail_loads_discarded',
                                         'Block detail responses dropped as superseded',
                                         registry=self.registry)

    def observe_request(self, operation: str, duration: float):
        self.provider_requests.labels(operation=operation).inc()
        self.provider_latency.labels(operation=operation).observe(duration)

    def record_failure(self, operation: str):
        self.provider_failures.labels(operation=operation).inc()

    def set_window_size(self, size: int):
        self.window_size.set(size)

    def record_discarded_detail(self):
        self.discarded_details.inc()

    def export(self) -> bytes:
        return generate_latest(self.registry)
