"""
Database package for data access and indexes.
"""
from devconnector.database.database import Database
from devconnector.database.indexes import create_indexes

__all__ = [
    "Database",
    "create_indexes"
]
