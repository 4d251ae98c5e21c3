"""
Request metrics for Craftgate client.

Filled in by the tracing stage of the HTTP pipeline, once per logical call
(retries of the same call are not counted separately). A call that ended
without a response (network failure, cancellation) is recorded with
status_code None and the name of the exception that ended it.
"""

import time
from collections import Counter, deque
from dataclasses import dataclass, field
from typing import Deque, Dict, List, Optional, Tuple


@dataclass(frozen=True)
class RequestMetrics:
    """One traced call."""
    endpoint: str
    method: str
    status_code: Optional[int]
    duration_ms: float
    timestamp: float
    error: Optional[str] = None

    @property
    def succeeded(self) -> bool:
        return self.error is None and self.status_code is not None and self.status_code < 400

    @property
    def status_class(self) -> str:
        """`2xx`, `4xx`, `5xx` ... or `none` when no response arrived."""
        if self.status_code is None:
            return "none"
        return f"{self.status_code // 100}xx"


@dataclass
class Statistics:
    """Totals over every call since the last reset."""
    total_requests: int = 0
    successful_requests: int = 0
    total_duration_ms: float = 0.0
    min_duration_ms: float = float("inf")
    max_duration_ms: float = 0.0
    by_status_class: Counter = field(default_factory=Counter)
    by_error: Counter = field(default_factory=Counter)

    @property
    def failed_requests(self) -> int:
        return self.total_requests - self.successful_requests

    @property
    def avg_duration_ms(self) -> float:
        if not self.total_requests:
            return 0.0
        return self.total_duration_ms / self.total_requests

    def add(self, metrics: RequestMetrics) -> None:
        self.total_requests += 1
        if metrics.succeeded:
            self.successful_requests += 1
        self.total_duration_ms += metrics.duration_ms
        self.min_duration_ms = min(self.min_duration_ms, metrics.duration_ms)
        self.max_duration_ms = max(self.max_duration_ms, metrics.duration_ms)
        self.by_status_class[metrics.status_class] += 1
        if metrics.error is not None:
            self.by_error[metrics.error] += 1


class PerformanceMonitor:
    """Aggregate statistics plus a bounded history of recent calls."""

    def __init__(self, max_history: int = 1000):
        self._statistics = Statistics()
        self._history: Deque[RequestMetrics] = deque(maxlen=max_history)
        self._per_endpoint: Dict[Tuple[str, str], Statistics] = {}

    def record_request(
        self,
        endpoint: str,
        method: str,
        status_code: Optional[int],
        duration_ms: float,
        error: Optional[str] = None,
    ) -> None:
        metrics = RequestMetrics(endpoint, method, status_code, duration_ms, time.time(), error)
        self._statistics.add(metrics)
        self._per_endpoint.setdefault((method, endpoint), Statistics()).add(metrics)
        self._history.append(metrics)

    @property
    def statistics(self) -> Statistics:
        return self._statistics

    def get_endpoint_stats(self, endpoint: str, method: str) -> Dict[str, float]:
        """Count, mean duration and success rate of one endpoint."""
        stats = self._per_endpoint.get((method, endpoint))
        if stats is None:
            return {"count": 0, "avg_duration_ms": 0.0, "success_rate": 0.0}
        return {
            "count": stats.total_requests,
            "avg_duration_ms": stats.avg_duration_ms,
            "success_rate": stats.successful_requests / stats.total_requests,
        }

    def get_recent_requests(self, count: int = 10) -> List[RequestMetrics]:
        return list(self._history)[-count:]

    def reset(self) -> None:
        self._statistics = Statistics()
        self._per_endpoint.clear()
        self._history.clear()
