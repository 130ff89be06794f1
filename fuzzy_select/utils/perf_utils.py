"""Performance utilities for fuzzy_select.

This module provides call timing and counting around scorers and
selection functions, plus the stage timer used by the CLI.
"""

import functools
import logging
import time
import tracemalloc
from collections.abc import Callable, Iterator
from contextlib import contextmanager
from dataclasses import dataclass
from typing import Any, Optional, TypeVar, cast

logger = logging.getLogger(__name__)

F = TypeVar("F", bound=Callable[..., Any])


@dataclass
class PerformanceMetrics:
    """Accumulated timings for one named operation (durations in seconds)."""

    operation: str
    duration: float
    call_count: int
    memory_delta: Optional[float] = None

    @property
    def average_duration(self) -> float:
        return self.duration / self.call_count if self.call_count else 0.0


def _traced_memory() -> Optional[int]:
    # Only meaningful while tracemalloc is tracing
    if not tracemalloc.is_tracing():
        return None
    current, _ = tracemalloc.get_traced_memory()
    return current


class PerformanceProfiler:
    """Collects duration and call counts per operation name."""

    def __init__(self) -> None:
        self._metrics: dict[str, PerformanceMetrics] = {}

    def measure(self, operation: str, fn: Callable[..., Any], *args: Any, **kwargs: Any) -> Any:
        """Call fn(*args, **kwargs) and record its duration under operation.

        Exceptions from fn propagate; a failed call is not recorded.
        """
        start_memory = _traced_memory()
        start = time.perf_counter()

        result = fn(*args, **kwargs)

        duration = time.perf_counter() - start
        end_memory = _traced_memory()
        memory_delta = (
            float(end_memory - start_memory)
            if start_memory is not None and end_memory is not None
            else None
        )

        existing = self._metrics.get(operation)
        if existing is None:
            self._metrics[operation] = PerformanceMetrics(
                operation=operation,
                duration=duration,
                call_count=1,
                memory_delta=memory_delta,
            )
        else:
            existing.duration += duration
            existing.call_count += 1
            if memory_delta is not None:
                if existing.memory_delta is None:
                    existing.memory_delta = memory_delta
                else:
                    existing.memory_delta = (existing.memory_delta + memory_delta) / 2

        return result

    def get_metrics(self) -> list[PerformanceMetrics]:
        return list(self._metrics.values())

    def get_metric(self, operation: str) -> Optional[PerformanceMetrics]:
        return self._metrics.get(operation)

    def reset(self) -> None:
        self._metrics.clear()

    def report(self) -> str:
        """Render collected metrics as a plain-text report."""
        metrics = self.get_metrics()
        if not metrics:
            return "No metrics collected"

        lines = ["Performance Report:", "=" * 50]
        for metric in metrics:
            lines.append(f"{metric.operation}:")
            lines.append(f"  Calls: {metric.call_count}")
            lines.append(f"  Total: {metric.duration * 1000:.2f}ms")
            lines.append(f"  Average: {metric.average_duration * 1000:.2f}ms")
            if metric.memory_delta is not None:
                lines.append(f"  Memory: {metric.memory_delta / 1024:.2f}KB")
            lines.append("")
        return "\n".join(lines)


profiler = PerformanceProfiler()


def profile(
    operation: Optional[str] = None,
    instance: Optional[PerformanceProfiler] = None,
) -> Callable[[F], F]:
    """Record every call of the decorated function in a profiler.

    Args:
        operation: Metric name (default: the function's qualified name)
        instance: Profiler to record into (default: the module profiler)

    """

    def decorator(func: F) -> F:
        name = operation or func.__qualname__

        @functools.wraps(func)
        def wrapper(*args: Any, **kwargs: Any) -> Any:
            target = instance if instance is not None else profiler
            return target.measure(name, func, *args, **kwargs)

        return cast(F, wrapper)

    return decorator


@contextmanager
def time_stage(stage: str, logger: logging.Logger) -> Iterator[None]:
    """Context manager for timing named stages.

    Args:
        stage: Stage name for logging
        logger: Logger instance

    Yields:
        None

    """
    start_time = time.time()
    logger.info(f"[stage:start] {stage}")
    try:
        yield
    finally:
        duration = time.time() - start_time
        logger.info(f"[stage:end] {stage} ({duration:.2f}s)")
