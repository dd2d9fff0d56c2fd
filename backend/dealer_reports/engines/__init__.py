"""Report aggregation engines."""

from dealer_reports.engines.daily_aggregator import DailyAggregator
from dealer_reports.engines.generation_tracker import GenerationTracker
from dealer_reports.engines.monthly_aggregator import MonthlyAggregator
from dealer_reports.engines.yearly_aggregator import YearlyAggregator

__all__ = [
    "DailyAggregator",
    "MonthlyAggregator",
    "YearlyAggregator",
    "GenerationTracker",
]
