"""Workout statistics: overview, weekday histogram, type breakdown, trend."""

from app.stats.aggregator import StatsAggregator, normalize_owner, resolve_period

__all__ = ["StatsAggregator", "normalize_owner", "resolve_period"]
