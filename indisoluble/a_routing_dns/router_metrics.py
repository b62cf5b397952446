#!/usr/bin/env python3

"""Per-router counters.

Keeps how many queries were routed to each resolver, how many of those
failed and how many rules are available. Each router owns its instance,
backed by its own Prometheus registry, so several routers can coexist in
the same process.
"""

from prometheus_client import CollectorRegistry, Counter, Gauge, generate_latest

from typing import Any, Dict


_LABEL_TARGET = "target"
_NAME_AVAILABLE = "available"
_NAME_FAILURE = "failure"
_NAME_ROUTE = "route"


class RouterMetrics:
    """Routing counters for a single router."""

    @property
    def router_id(self) -> str:
        return self._router_id

    @property
    def registry(self) -> CollectorRegistry:
        return self._registry

    @property
    def route(self) -> Dict[str, int]:
        """Get routed query counts per resolver."""
        return self._collect_by_target(_NAME_ROUTE)

    @property
    def failure(self) -> Dict[str, int]:
        """Get failed query counts per resolver."""
        return self._collect_by_target(_NAME_FAILURE)

    @property
    def available(self) -> int:
        """Get the number of configured rules."""
        return int(self._registry.get_sample_value(_NAME_AVAILABLE) or 0)

    def __init__(self, router_id: str):
        self._router_id = router_id
        self._registry = CollectorRegistry()
        self._route = Counter(
            _NAME_ROUTE,
            "Queries routed per resolver",
            [_LABEL_TARGET],
            registry=self._registry,
        )
        self._failure = Counter(
            _NAME_FAILURE,
            "Routed queries that failed per resolver",
            [_LABEL_TARGET],
            registry=self._registry,
        )
        self._available = Gauge(
            _NAME_AVAILABLE, "Configured routing rules", registry=self._registry
        )

    def _collect_by_target(self, name: str) -> Dict[str, int]:
        return {
            sample.labels[_LABEL_TARGET]: int(sample.value)
            for metric in self._registry.collect()
            if metric.name == name
            for sample in metric.samples
            if sample.name == f"{name}_total"
        }

    def add_route(self, resolver_name: str):
        self._route.labels(resolver_name).inc()

    def add_failure(self, resolver_name: str):
        self._failure.labels(resolver_name).inc()

    def add_available(self, count: int = 1):
        self._available.inc(count)

    def snapshot(self) -> Dict[str, Any]:
        """Export all counters keyed by their metric path."""
        prefix = f"router.{self._router_id}"
        return {
            f"{prefix}.{_NAME_ROUTE}": self.route,
            f"{prefix}.{_NAME_FAILURE}": self.failure,
            f"{prefix}.{_NAME_AVAILABLE}": self.available,
        }

    def export(self) -> bytes:
        """Export all counters in Prometheus text format."""
        return generate_latest(self._registry)

    def __repr__(self):
        return f"RouterMetrics(router_id='{self._router_id}')"
