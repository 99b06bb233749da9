"""
Database definitions and collection constants.
"""
from app.database.databases import accounts_db

__all__ = ["accounts_db"]
