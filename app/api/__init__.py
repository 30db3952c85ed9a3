"""HTTP API for the travel chat assistant."""
from .routes import router

__all__ = ["router"]
