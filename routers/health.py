# routers/health.py

from fastapi import APIRouter
from fastapi.responses import JSONResponse

from core.config import settings
from core.supabase_client import ping_supabase

router = APIRouter(
    prefix="/health",
    tags=["Health"],
)


@router.get("/app", summary="Liveness check")
def health_app():
    return {
        "service": settings.PROJECT_NAME,
        "environment": settings.ENV,
        "status": "ok",
    }


@router.get("/db", summary="Inquiries table reachability")
def health_db():
    """
    Reads one row of the inquiries table. Answers 503 unless the table
    could be read, so an uptime monitor can alert on the status code.
    """
    report = ping_supabase()
    status_code = 200 if report.get("status") == "ok" else 503
    return JSONResponse(status_code=status_code, content=report)
