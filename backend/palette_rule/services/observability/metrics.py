"""
Stage timing for the palette analysis pipeline.

Each pipeline stage runs inside ``performance_monitor``; the resulting
measurements are kept in a bounded, thread-safe history for inspection.
"""

import time
import threading
from collections import defaultdict, deque
from contextlib import contextmanager
from dataclasses import dataclass, asdict
from typing import Dict, Any, Optional, List

import numpy as np
import psutil
from loguru import logger

from ...config import config


@dataclass
class PerformanceMetrics:
    """Performance metrics for one pipeline stage."""
    operation_name: str
    duration_ms: float
    memory_usage_mb: float
    cpu_percent: float
    pixel_count: int
    cluster_count: int
    timestamp: float
    error: Optional[str] = None


class MetricsCollector:
    """Thread-safe metrics collector for pipeline stages."""

    def __init__(self, max_history: int = 1000):
        self.max_history = max_history
        self._lock = threading.Lock()
        self._history: deque = deque(maxlen=max_history)
        self._calls = defaultdict(int)
        self._errors = defaultdict(int)
        self._durations = defaultdict(lambda: deque(maxlen=100))

    def record_performance(self, metrics: PerformanceMetrics) -> None:
        with self._lock:
            self._history.append(metrics)
            self._calls[metrics.operation_name] += 1
            if metrics.error:
                self._errors[metrics.operation_name] += 1
            self._durations[metrics.operation_name].append(metrics.duration_ms)

    def _stats_locked(self, operation_name: str) -> Dict[str, Any]:
        durations = list(self._durations.get(operation_name, ()))
        if not durations:
            return {}
        calls = self._calls[operation_name]
        return {
            'operation_name': operation_name,
            'total_calls': calls,
            'error_count': self._errors[operation_name],
            'error_rate': self._errors[operation_name] / max(1, calls),
            'duration_stats': {
                'mean_ms': float(np.mean(durations)),
                'median_ms': float(np.median(durations)),
                'p95_ms': float(np.percentile(durations, 95)),
                'max_ms': float(np.max(durations)),
            },
        }

    def get_operation_stats(self, operation_name: str) -> Dict[str, Any]:
        """Aggregated duration statistics for one stage, or {} if never seen."""
        with self._lock:
            return self._stats_locked(operation_name)

    def get_all_stats(self) -> Dict[str, Any]:
        with self._lock:
            total_calls = sum(self._calls.values())
            total_errors = sum(self._errors.values())
            return {
                'operations': {name: self._stats_locked(name) for name in self._calls},
                'total_operations': total_calls,
                'total_errors': total_errors,
                'overall_error_rate': total_errors / max(1, total_calls),
            }

    def get_recent_metrics(self, limit: int = 10) -> List[Dict[str, Any]]:
        with self._lock:
            return [asdict(m) for m in list(self._history)[-limit:]]

    def reset(self) -> None:
        with self._lock:
            self._history.clear()
            self._calls.clear()
            self._errors.clear()
            self._durations.clear()


# Global metrics collector instance
_metrics_collector = MetricsCollector(max_history=config.METRICS_HISTORY)


def get_metrics_collector() -> MetricsCollector:
    """Get the global metrics collector instance."""
    return _metrics_collector


def _rss_mb() -> float:
    return psutil.Process().memory_info().rss / 1024 / 1024


@contextmanager
def performance_monitor(operation_name: str, pixel_count: int = 0, cluster_count: int = 0):
    """Context manager timing one pipeline stage. No-op when metrics are disabled."""
    if not config.METRICS_ENABLED:
        yield
        return

    start_time = time.time()
    start_memory = _rss_mb()
    error_msg = None

    try:
        yield
    except Exception as e:
        error_msg = str(e)
        raise
    finally:
        end_time = time.time()
        metrics = PerformanceMetrics(
            operation_name=operation_name,
            duration_ms=(end_time - start_time) * 1000,
            memory_usage_mb=max(_rss_mb(), start_memory),
            cpu_percent=psutil.cpu_percent(),
            pixel_count=pixel_count,
            cluster_count=cluster_count,
            timestamp=end_time,
            error=error_msg
        )
        _metrics_collector.record_performance(metrics)

        if error_msg:
            logger.error(f"Operation {operation_name} failed after {metrics.duration_ms:.1f}ms: {error_msg}")
        else:
            logger.debug(f"Operation {operation_name} completed in {metrics.duration_ms:.1f}ms "
                         f"(memory: {metrics.memory_usage_mb:.1f}MB)")
