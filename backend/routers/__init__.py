"""
FastAPI routers for the CoFound Backend API.
"""

from . import health
from . import notifications
from . import auth
from . import matches
from . import connections

__all__ = [
    "health",
    "notifications",
    "auth",
    "matches",
    "connections",
]
