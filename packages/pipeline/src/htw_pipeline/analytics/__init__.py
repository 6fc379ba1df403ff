"""
htw_pipeline.analytics — dashboard aggregations, builder, and refresh guard.
"""

from htw_pipeline.analytics.dashboard import DashboardAnalytics, build_dashboard
from htw_pipeline.analytics.refresh import DashboardRefresher

__all__ = ["DashboardAnalytics", "DashboardRefresher", "build_dashboard"]
