"""
Performance monitoring utilities for savings analysis runs.

Tracks the elapsed time of an analysis run and of its individual stages
(detection, matching, external merge, report) and logs them with the
counts produced by each stage.
"""

import time
import logging
from typing import Dict, Any, Optional
from dataclasses import dataclass, field
from datetime import datetime, timezone

logger = logging.getLogger(__name__)

SLOW_OPERATION_MS = 1000
VERY_SLOW_OPERATION_MS = 5000


@dataclass
class AnalysisMetrics:
    """Container for analysis run metrics."""
    operation_name: str
    start_time: float = field(default_factory=time.perf_counter)
    end_time: Optional[float] = None
    elapsed_ms: Optional[float] = None
    transaction_count: int = 0
    recurring_charges_detected: int = 0
    services_matched: int = 0
    external_matches_applied: int = 0
    stage_timings_ms: Dict[str, float] = field(default_factory=dict)

    def finish(self):
        """Mark the operation as finished and calculate elapsed time."""
        self.end_time = time.perf_counter()
        self.elapsed_ms = (self.end_time - self.start_time) * 1000

    def to_dict(self) -> Dict[str, Any]:
        """Convert metrics to dictionary for logging."""
        return {
            'operation_name': self.operation_name,
            'elapsed_ms': self.elapsed_ms,
            'transaction_count': self.transaction_count,
            'recurring_charges_detected': self.recurring_charges_detected,
            'services_matched': self.services_matched,
            'external_matches_applied': self.external_matches_applied,
            'stage_timings_ms': dict(self.stage_timings_ms),
            'timestamp': datetime.now(timezone.utc).isoformat()
        }

    def log_metrics(self):
        """Log the metrics, escalating the level for slow runs."""
        metrics = self.to_dict()
        elapsed = self.elapsed_ms or 0.0

        if elapsed > VERY_SLOW_OPERATION_MS:
            logger.error(
                f"SLOW ANALYSIS: {self.operation_name} took {elapsed:.2f}ms",
                extra={'analysis_metrics': metrics}
            )
        elif elapsed > SLOW_OPERATION_MS:
            logger.warning(
                f"Slow analysis: {self.operation_name} took {elapsed:.2f}ms",
                extra={'analysis_metrics': metrics}
            )
        else:
            logger.info(
                f"Analysis completed: {self.operation_name} in {elapsed:.2f}ms "
                f"({self.transaction_count} transactions, "
                f"{self.recurring_charges_detected} recurring, "
                f"{self.services_matched} matched)",
                extra={'analysis_metrics': metrics}
            )

        if self.stage_timings_ms:
            breakdown = ", ".join(
                f"{stage}: {ms:.2f}ms" for stage, ms in self.stage_timings_ms.items()
            )
            logger.debug(
                f"Analysis breakdown for {self.operation_name}: {breakdown}",
                extra={'analysis_metrics': metrics}
            )


class StageTimer:
    """Context manager recording the duration of one stage."""

    def __init__(self, metrics: AnalysisMetrics, stage: str):
        self.metrics = metrics
        self.stage = stage
        self.start_time: float = 0.0

    def __enter__(self):
        self.start_time = time.perf_counter()
        logger.debug(f"Starting stage: {self.stage}")
        return self

    def __exit__(self, exc_type, exc_val, exc_tb):
        elapsed_ms = (time.perf_counter() - self.start_time) * 1000
        self.metrics.stage_timings_ms[self.stage] = elapsed_ms
        logger.debug(f"Completed stage {self.stage} in {elapsed_ms:.2f}ms")


class AnalysisPerformanceTracker:
    """
    Context manager for analysis run tracking.

    Usage:
        with AnalysisPerformanceTracker("savings_analysis") as tracker:
            tracker.set_transaction_count(len(transactions))

            with tracker.stage('detection'):
                recurring = detector.detect_recurring_charges(transactions)
            tracker.set_recurring_charges_detected(len(recurring))
    """

    def __init__(self, operation_name: str):
        self.metrics = AnalysisMetrics(operation_name=operation_name)

    def __enter__(self):
        logger.debug(f"Starting analysis: {self.metrics.operation_name}")
        return self

    def __exit__(self, exc_type, exc_val, exc_tb):
        self.metrics.finish()
        self.metrics.log_metrics()

    def stage(self, stage_name: str) -> StageTimer:
        """Create a context manager for tracking a stage."""
        return StageTimer(self.metrics, stage_name)

    def set_transaction_count(self, count: int):
        self.metrics.transaction_count = count

    def set_recurring_charges_detected(self, count: int):
        self.metrics.recurring_charges_detected = count

    def set_services_matched(self, count: int):
        self.metrics.services_matched = count

    def set_external_matches_applied(self, count: int):
        self.metrics.external_matches_applied = count
