"""
Accounts database configuration.
Stores user identity and authentication data.
"""
from app.config import get_settings

DB_NAME = get_settings().mongo_db_name


class Collections:
    """Collection names in accounts_db."""
    USERS = "users"


# Indexes created on startup: (collection, field, options)
INDEXES = [
    (Collections.USERS, "username", {"unique": True}),
    (Collections.USERS, "email", {"unique": True}),
    (Collections.USERS, "country", {}),
]
