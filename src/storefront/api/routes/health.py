"""Health endpoints."""

from __future__ import annotations

from fastapi import APIRouter, status

from ...config import settings
from ...data.zones_repository import get_zones

router = APIRouter(tags=["health"])


@router.get("/health", status_code=status.HTTP_200_OK)
def health_root() -> dict:
    """Simple health check endpoint that doesn't require any dependencies."""
    return {"status": "ok"}


@router.get("/health/database", status_code=status.HTTP_200_OK)
def check_database() -> dict:
    """Report whether carts and orders go to Supabase or to the local data root."""
    from ...db.supabase import get_supabase_client

    supabase = get_supabase_client()
    if not supabase:
        return {
            "configured": False,
            "storage": "filesystem",
            "data_root": str(settings.data_root),
            "message": "Supabase not configured. Set STORE_SUPABASE_URL and STORE_SUPABASE_KEY environment variables.",
        }

    try:
        supabase.table("orders").select("order_id", count="exact").limit(1).execute()
    except Exception as exc:
        return {
            "configured": True,
            "connected": False,
            "error": str(exc),
            "message": f"Database connection error: {exc}",
        }
    return {"configured": True, "connected": True, "storage": "supabase"}


@router.get("/health/zones", status_code=status.HTTP_200_OK)
def check_zones() -> dict:
    zones = get_zones()
    return {"zones_count": len(zones), "fallback_policy": settings.zone_fallback}
