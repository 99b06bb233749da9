"""
Staff Accounts Backend - FastAPI Application

Account registration, cookie-based sessions and role-gated access to user
profiles for Admin and Staff accounts.
"""
import logging
from contextlib import asynccontextmanager

from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware

from app.config import get_settings
from app.core.errors import register_exception_handlers
from app.database.connections import get_mongo_client, close_connections
from app.database.registry import create_indexes
from app.routers import health, users

settings = get_settings()

logging.basicConfig(
    level=getattr(logging, settings.log_level.upper(), logging.INFO),
    format="%(asctime)s | %(levelname)s | %(message)s",
    datefmt="%Y-%m-%d %H:%M:%S",
)
logger = logging.getLogger("staff_accounts")


@asynccontextmanager
async def lifespan(app: FastAPI):
    """
    Application lifespan manager.

    Startup:
    - Initialize the database connection
    - Create unique indexes on username and email

    Shutdown:
    - Close the database connection
    """
    logger.info("Starting up Staff Accounts Backend...")

    try:
        client = await get_mongo_client()
        await create_indexes(client)
        logger.info("Database indexes created")
    except Exception as e:
        logger.warning(f"Database initialization warning: {e}")

    yield

    logger.info("Shutting down Staff Accounts Backend...")
    await close_connections()
    logger.info("Database connections closed")


# Create FastAPI application
app = FastAPI(
    title="Staff Accounts API",
    description="""
## Staff Accounts API

User accounts with two roles, **Admin** and **Staff**.

### Features
- **Registration**: unique username and email, bcrypt-hashed passwords
- **Sessions**: JWT issued on login, valid for one hour
- **Profiles**: Staff read their own account, Admins read any account
- **Directory**: Admin-only listing filtered by username, email or country

### Authentication
`POST /login` sets an httpOnly `token` cookie. Protected endpoints read the
session from that cookie; `POST /logout` clears it.

### Responses
Every account endpoint answers with an envelope:
```
{"status_code": 200, "data": ..., "message": "...", "success": true}
```
    """,
    version="0.1.0",
    lifespan=lifespan,
)

# Configure CORS
app.add_middleware(
    CORSMiddleware,
    allow_origins=settings.cors_origins,
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)

register_exception_handlers(app)

# Include routers
app.include_router(health.router)
app.include_router(users.router, prefix=settings.api_prefix)


@app.get("/", tags=["Root"])
async def root():
    """Root endpoint with API information."""
    return {
        "name": "Staff Accounts API",
        "version": "0.1.0",
        "docs": "/docs",
        "health": "/health",
        "accounts": settings.api_prefix,
    }
