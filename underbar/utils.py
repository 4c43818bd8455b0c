"""
Utility functions for underbar

Logging setup and lightweight performance measurement for running the
collection operations and decorators outside of the test suite.
"""

import sys
import time
import gc
import logging
import tracemalloc
from dataclasses import dataclass
from typing import Any, Dict, Optional

from .models import LibrarySettings, PerformanceReport

LOG_FORMAT = '%(asctime)s - %(name)s - %(levelname)s - [%(funcName)s:%(lineno)d] - %(message)s'


@dataclass
class PerformanceTotals:
    """Running aggregates of every measured call; individual reports are not kept"""
    operation_count: int = 0
    failed_count: int = 0
    total_time_ms: float = 0.0
    total_memory_mb: float = 0.0

    def add(self, report: PerformanceReport):
        self.operation_count += 1
        if not report.success:
            self.failed_count += 1
        self.total_time_ms += report.execution_time_ms
        self.total_memory_mb += report.memory_usage_mb

    def summary(self) -> Dict[str, Any]:
        count = self.operation_count or 1
        return {
            "total_operations": self.operation_count,
            "failed_operations": self.failed_count,
            "total_time_ms": self.total_time_ms,
            "total_memory_mb": self.total_memory_mb,
            "avg_time_ms": self.total_time_ms / count,
            "avg_memory_mb": self.total_memory_mb / count
        }


_totals = PerformanceTotals()


def setup_logging(settings: Optional[LibrarySettings] = None) -> logging.Logger:
    """Setup structured logging for underbar (level/file from UNDERBAR_* env vars)"""
    settings = settings or LibrarySettings.from_env()
    handlers = [logging.StreamHandler(sys.stdout)]
    if settings.log_file:
        handlers.append(logging.FileHandler(settings.log_file))

    logging.basicConfig(
        level=settings.log_level,
        format=LOG_FORMAT,
        handlers=handlers,
        force=True
    )
    return logging.getLogger('underbar')


def measure_performance(operation_name: str, func, *args, **kwargs) -> PerformanceReport:
    """Measure a function call with memory tracking; errors are recorded then re-raised"""
    tracemalloc.start()
    gc.collect()
    start_time = time.perf_counter()

    try:
        result = func(*args, **kwargs)
        execution_time_ms = (time.perf_counter() - start_time) * 1000
        _, peak = tracemalloc.get_traced_memory()
        report = PerformanceReport(
            operation=operation_name,
            execution_time_ms=execution_time_ms,
            memory_usage_mb=peak / 1024 / 1024,
            success=True,
            result_size=len(result) if hasattr(result, "__len__") else None,
            timestamp=time.time()
        )
        _totals.add(report)
        return report

    except Exception as e:
        execution_time_ms = (time.perf_counter() - start_time) * 1000
        _, peak = tracemalloc.get_traced_memory()
        _totals.add(PerformanceReport(
            operation=operation_name,
            execution_time_ms=execution_time_ms,
            memory_usage_mb=peak / 1024 / 1024,
            success=False,
            error=str(e),
            timestamp=time.time()
        ))
        raise

    finally:
        tracemalloc.stop()


def get_performance_summary() -> Dict[str, Any]:
    """Aggregate timing and memory over every measured call since the last clear"""
    return _totals.summary()


def clear_performance_metrics():
    """Reset the running aggregates"""
    global _totals
    _totals = PerformanceTotals()
