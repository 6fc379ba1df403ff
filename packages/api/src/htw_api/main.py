"""ASGI entrypoint.

Run locally:
    uvicorn htw_api.main:app --reload --port 8000
"""

from htw_api.app import create_app

app = create_app()
