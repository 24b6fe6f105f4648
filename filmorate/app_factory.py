"""Entry points for the FastAPI app."""
from filmorate.app import app, create_app

__all__ = ["app", "create_app"]
