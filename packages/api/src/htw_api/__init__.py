"""
htw_api — FastAPI service for the HTW network dashboard.

Run locally:
    uvicorn htw_api.main:app --reload --port 8000
"""

__version__ = "0.1.0"
