"""Breach Log Analyzer - Detection policy"""

import math
from dataclasses import dataclass

from .patterns import (
    SIMILARITY_WINDOW_MS,
    REGULARITY_RATIO_THRESHOLD,
    MAX_MEAN_INTERVAL_MS,
    MIN_INTERVALS,
)


@dataclass(frozen=True)
class DetectionPolicy:
    """Thresholds used by the interval regularity detector.

    similarity_window_ms: an interval is "similar" when it is strictly closer
        than this to the mean interval.
    regularity_ratio: share of similar intervals that must be exceeded.
    max_mean_interval_ms: the mean interval must stay below this.
    min_intervals: regularity is only checked with more intervals than this.
    """
    similarity_window_ms: float = SIMILARITY_WINDOW_MS
    regularity_ratio: float = REGULARITY_RATIO_THRESHOLD
    max_mean_interval_ms: float = MAX_MEAN_INTERVAL_MS
    min_intervals: int = MIN_INTERVALS

    def __post_init__(self):
        if not math.isfinite(self.similarity_window_ms) or self.similarity_window_ms < 0:
            raise ValueError("similarity_window_ms must be a non-negative number")
        if not 0 <= self.regularity_ratio <= 1:
            raise ValueError("regularity_ratio must be between 0 and 1")
        if not math.isfinite(self.max_mean_interval_ms) or self.max_mean_interval_ms < 0:
            raise ValueError("max_mean_interval_ms must be a non-negative number")
        if self.min_intervals < 0:
            raise ValueError("min_intervals must be non-negative")


DEFAULT_POLICY = DetectionPolicy()
