"""ASGI entrypoint for uvicorn.

This file is at the project root to make running uvicorn simpler:
  python -m uvicorn asgi:app --reload
"""
from jwt_redirect.main import app_factory

app = app_factory()

__all__ = ["app"]
