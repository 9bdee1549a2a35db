"""
Health check endpoints.
"""

from fastapi import APIRouter, Depends

from cofound_core.services import SupabaseClient

from backend.dependencies import get_supabase

router = APIRouter(tags=["Health"])


@router.get("/")
async def root():
    """Health check endpoint."""
    return {"status": "ok", "service": "CoFound API"}


@router.get("/health")
def health(supabase: SupabaseClient = Depends(get_supabase)):
    """Health check with Supabase connection test."""
    try:
        supabase.ping()
        return {"status": "healthy", "database": "connected"}
    except Exception as e:
        return {"status": "unhealthy", "database": "disconnected", "error": str(e)}
