"""ASGI entry point.

Run with:  uvicorn api.asgi:app --app-dir src
"""

from api.main import create_app
from utils.logging import setup_structured_logging

setup_structured_logging()

app = create_app()
