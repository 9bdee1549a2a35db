"""
FastAPI dependencies for the CoFound Backend API.
Provides shared database clients and services.
"""

from typing import Optional

from fastapi import Depends

from cofound_core.config import Settings
from cofound_core.services import (
    NotificationDispatcher,
    SupabaseAuthAdmin,
    SupabaseClient,
    TelegramBotClient,
    TelegramLoginService,
    WidgetAuthVerifier,
)

from backend.async_supabase import AsyncSupabaseClient
from backend.backend_config import settings


# Global async Supabase client (initialized in app lifespan)
async_supabase_client: Optional[AsyncSupabaseClient] = None

# Global Bot API client; one pooled HTTP session per process
telegram_client: Optional[TelegramBotClient] = None


def get_settings() -> Settings:
    return settings


def get_async_supabase() -> AsyncSupabaseClient:
    """Get the global async Supabase client."""
    if async_supabase_client is None:
        raise RuntimeError("Async Supabase client not initialized")
    return async_supabase_client


def init_async_supabase() -> AsyncSupabaseClient:
    """Initialize the async Supabase client. Called during app startup."""
    global async_supabase_client
    async_supabase_client = AsyncSupabaseClient(settings.supabase_url, settings.supabase_service_role_key)
    return async_supabase_client


async def close_async_supabase():
    """Close the async Supabase client. Called during app shutdown."""
    global async_supabase_client
    if async_supabase_client:
        await async_supabase_client.close()
        async_supabase_client = None


def init_telegram_client() -> TelegramBotClient:
    """Initialize the shared Bot API client. Called during app startup."""
    global telegram_client
    telegram_client = TelegramBotClient(settings)
    return telegram_client


def close_telegram_client():
    """Close the shared Bot API client. Called during app shutdown."""
    global telegram_client
    if telegram_client:
        telegram_client.close()
        telegram_client = None


def get_telegram_client() -> TelegramBotClient:
    """Get the shared Bot API client, creating it when running without the lifespan."""
    if telegram_client is None:
        return init_telegram_client()
    return telegram_client


def get_supabase(settings: Settings = Depends(get_settings)) -> SupabaseClient:
    """Get a new synchronous Supabase client (service role)."""
    return SupabaseClient(settings)


def get_dispatcher(
    settings: Settings = Depends(get_settings),
    supabase: SupabaseClient = Depends(get_supabase),
    telegram: TelegramBotClient = Depends(get_telegram_client),
) -> NotificationDispatcher:
    return NotificationDispatcher(
        settings,
        profiles=supabase,
        sender=telegram,
        notifications=supabase,
    )


def get_widget_verifier(settings: Settings = Depends(get_settings)) -> WidgetAuthVerifier:
    return WidgetAuthVerifier(settings)


def get_login_service(
    settings: Settings = Depends(get_settings),
    supabase: SupabaseClient = Depends(get_supabase),
) -> TelegramLoginService:
    return TelegramLoginService(profiles=supabase, sessions=SupabaseAuthAdmin(settings))
