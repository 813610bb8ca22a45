"""Performance profiler for batch conversions."""

import json
import time
import psutil
import logging
from typing import Dict, Any, Optional, List
from dataclasses import dataclass
from contextlib import contextmanager


@dataclass
class PerformanceMetrics:
    """Performance metrics for one batch conversion."""
    operation_name: str
    start_time: float
    end_time: float
    duration: float
    records_in: int
    records_out: int
    memory_peak_mb: float
    memory_start_mb: float
    memory_end_mb: float
    cpu_percent: float
    throughput_rps: float


class PerformanceProfiler:
    """
    Profiler for monitoring batch conversions.

    Records duration, memory usage, CPU utilization and record throughput
    per operation.
    """

    def __init__(self, logger: Optional[logging.Logger] = None):
        """
        Initialize the performance profiler.

        Args:
            logger: Optional logger instance
        """
        self.logger = logger or logging.getLogger(__name__)
        self.metrics_history: List[PerformanceMetrics] = []
        self.current_operation: Optional[str] = None
        self.start_time: Optional[float] = None
        self.start_memory: Optional[float] = None
        self.peak_memory: float = 0
        self.cpu_samples: List[float] = []
        self.records_in = 0
        self.records_out = 0

    @contextmanager
    def profile_operation(self, operation_name: str, records_in: int = 0):
        """
        Context manager for profiling operations.

        The caller sets ``records_out`` on the yielded profiler before the
        block exits.

        Args:
            operation_name: Name of the operation being profiled
            records_in: Number of input records
        """
        self.start_profiling(operation_name, records_in)
        try:
            yield self
        finally:
            self.stop_profiling(self.records_out)

    def start_profiling(self, operation_name: str, records_in: int = 0):
        """Start profiling an operation."""
        self.current_operation = operation_name
        self.start_time = time.time()
        self.records_in = records_in
        self.records_out = 0

        process = psutil.Process()
        self.start_memory = process.memory_info().rss / 1024 / 1024  # MB
        self.peak_memory = self.start_memory
        self.cpu_samples = []

        self.logger.debug(f"Started profiling: {operation_name}")

    def sample_performance(self):
        """Sample current performance metrics."""
        if not self.current_operation:
            return

        try:
            process = psutil.Process()
            current_memory = process.memory_info().rss / 1024 / 1024  # MB
            cpu_percent = process.cpu_percent()

            self.peak_memory = max(self.peak_memory, current_memory)
            self.cpu_samples.append(cpu_percent)

        except psutil.Error as e:
            self.logger.warning(f"Performance sampling failed: {e}")

    def stop_profiling(self, records_out: int = 0) -> PerformanceMetrics:
        """
        Stop profiling and return metrics.

        Args:
            records_out: Number of records produced

        Returns:
            PerformanceMetrics object with collected data
        """
        if not self.current_operation or not self.start_time:
            raise ValueError("No active profiling session")

        end_time = time.time()
        duration = end_time - self.start_time

        try:
            process = psutil.Process()
            end_memory = process.memory_info().rss / 1024 / 1024  # MB
        except psutil.Error:
            end_memory = self.start_memory
        avg_cpu = sum(self.cpu_samples) / len(self.cpu_samples) if self.cpu_samples else 0

        throughput = self.records_in / duration if duration > 0 else 0

        metrics = PerformanceMetrics(
            operation_name=self.current_operation,
            start_time=self.start_time,
            end_time=end_time,
            duration=duration,
            records_in=self.records_in,
            records_out=records_out,
            memory_peak_mb=max(self.peak_memory, end_memory),
            memory_start_mb=self.start_memory,
            memory_end_mb=end_memory,
            cpu_percent=avg_cpu,
            throughput_rps=throughput
        )

        self.metrics_history.append(metrics)

        self.logger.info(
            f"Performance Summary - {self.current_operation}: "
            f"{self.records_in} in, {records_out} out, {duration:.3f}s, "
            f"{throughput:.0f} records/s, peak {metrics.memory_peak_mb:.1f} MB"
        )

        self.current_operation = None
        self.start_time = None
        self.start_memory = None

        return metrics

    def get_performance_summary(self) -> Dict[str, Any]:
        """
        Get summary of all performance metrics.

        Returns:
            Dictionary with performance summary
        """
        if not self.metrics_history:
            return {"total_operations": 0}

        count = len(self.metrics_history)
        total_duration = sum(m.duration for m in self.metrics_history)

        return {
            "total_operations": count,
            "total_duration": total_duration,
            "total_records_in": sum(m.records_in for m in self.metrics_history),
            "total_records_out": sum(m.records_out for m in self.metrics_history),
            "average_throughput_rps": sum(m.throughput_rps for m in self.metrics_history) / count,
            "average_memory_peak_mb": sum(m.memory_peak_mb for m in self.metrics_history) / count,
            "average_cpu_percent": sum(m.cpu_percent for m in self.metrics_history) / count,
            "operations": [
                {
                    "name": m.operation_name,
                    "duration": m.duration,
                    "records_in": m.records_in,
                    "records_out": m.records_out,
                }
                for m in self.metrics_history
            ]
        }

    def export_metrics(self, format: str = "json") -> str:
        """
        Export performance metrics in specified format.

        Args:
            format: Export format ("json", "csv", "summary")

        Returns:
            Formatted metrics string
        """
        if format == "json":
            return json.dumps([
                {
                    "operation": m.operation_name,
                    "duration": m.duration,
                    "records_in": m.records_in,
                    "records_out": m.records_out,
                    "memory_peak_mb": m.memory_peak_mb,
                    "throughput_rps": m.throughput_rps
                }
                for m in self.metrics_history
            ], indent=2)

        elif format == "csv":
            lines = ["operation,duration,records_in,records_out,memory_peak_mb,throughput_rps"]
            for m in self.metrics_history:
                lines.append(f"{m.operation_name},{m.duration},{m.records_in},{m.records_out},"
                             f"{m.memory_peak_mb},{m.throughput_rps}")
            return "\n".join(lines)

        elif format == "summary":
            summary = self.get_performance_summary()
            if not summary["total_operations"]:
                return "Performance Summary:\n  Total Operations: 0"
            lines = [
                "Performance Summary:",
                f"  Total Operations: {summary['total_operations']}",
                f"  Total Duration: {summary['total_duration']:.2f}s",
                f"  Records In: {summary['total_records_in']}",
                f"  Records Out: {summary['total_records_out']}",
                f"  Average Throughput: {summary['average_throughput_rps']:.0f} records/s",
                f"  Average Memory Peak: {summary['average_memory_peak_mb']:.1f} MB"
            ]
            return "\n".join(lines)

        else:
            raise ValueError(f"Unsupported export format: {format}")
