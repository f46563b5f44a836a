"""Route group exports."""

from . import health, plans, session

__all__ = ["health", "plans", "session"]
