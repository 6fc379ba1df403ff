"""
htw_shared — shared utilities, models, and configuration for the HTW network platform.

Usage:
    from htw_shared.config import settings
    from htw_shared.datastore import get_datastore, InMemoryStore
    from htw_shared.models import Industry, Company, Member
    from htw_shared.constants import ISLANDS, TIMEFRAME_MONTHS
    from htw_shared.result import Result
"""

__version__ = "0.1.0"
