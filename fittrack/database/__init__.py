"""
Database engine, sessions and declarative base
"""

from fittrack.database.session import get_db, engine, AsyncSessionLocal
from fittrack.database.base import Base

__all__ = ["get_db", "engine", "AsyncSessionLocal", "Base"]
