"""
CoFound Central Asia Backend API
FastAPI server for co-founder matching, Telegram notifications and Telegram login
"""

import logging
from contextlib import asynccontextmanager

from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware

from backend.backend_config import settings
from backend.dependencies import (
    close_async_supabase,
    close_telegram_client,
    init_async_supabase,
    init_telegram_client,
)
from backend.routers import auth, connections, health, matches, notifications

logging.basicConfig(
    level=logging.INFO,
    format="%(asctime)s - %(name)s - %(levelname)s - %(message)s",
)
logger = logging.getLogger(__name__)


@asynccontextmanager
async def lifespan(app: FastAPI):
    """Manage async Supabase and Bot API client lifecycle."""
    # Use service role key to bypass RLS for backend operations
    init_async_supabase()
    init_telegram_client()
    if not settings.telegram_configured:
        logger.warning("TELEGRAM_BOT_TOKEN not set - notifications and Telegram login are disabled")
    yield
    await close_async_supabase()
    close_telegram_client()


app = FastAPI(
    title="CoFound API",
    description="Backend API for CoFound Central Asia co-founder matching",
    version="1.0.0",
    lifespan=lifespan
)

app.add_middleware(
    CORSMiddleware,
    allow_origins=list(settings.cors_origins),
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)

app.include_router(health.router)
app.include_router(notifications.router)
app.include_router(auth.router)
app.include_router(matches.router)
app.include_router(connections.router)


if __name__ == "__main__":
    import uvicorn
    uvicorn.run(app, host="0.0.0.0", port=8000)
