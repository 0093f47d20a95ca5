import platform

from fastapi import APIRouter, Response

from ..core.config import get_settings

router = APIRouter(tags=["health"])


@router.get("/")
def root():
    return {"service": "oddsdash-api"}


@router.head("/")
def head_root():
    return Response(status_code=200)


@router.get("/api/health")
def health():
    """Configuration presence only; never touches the database or redis."""
    s = get_settings()
    return {
        "ok": True,
        "python": platform.python_version(),
        "supabaseUrl": bool(s.supabase_url),
        "anonKey": bool(s.supabase_anon_key),
        "serviceRole": bool(s.supabase_service_role_key),
        "redis": bool(s.redis_url),
        "env": s.environment,
    }
