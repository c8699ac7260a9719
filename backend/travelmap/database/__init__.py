"""
Database package for the travel map backend.

This package provides composition-based database operations.

Usage:
    from travelmap.database import async_db
    from travelmap.database.location_operations import LocationOperations

    location_ops = LocationOperations(async_db)
"""

from .core import AsyncDatabase

# Shared database instance
async_db = AsyncDatabase()

__all__ = ["AsyncDatabase", "async_db"]
