import logging
import time
from datetime import datetime

from fastapi import APIRouter
from fastapi.responses import FileResponse

from ..core.config import Config
from ..infrastructure.templating import STATIC_DIR
from ..services import supabase_service


logger = logging.getLogger(__name__)

router = APIRouter()


@router.get("/")
async def index():
    """Serve the static welcome page."""
    return FileResponse(STATIC_DIR / "welcome.html", media_type="text/html")


@router.get("/health")
async def health_check():
    """Basic health and dependency checks for the site."""
    health_start_time = time.time()

    try:
        # Check configuration and Supabase connection
        Config.validate()
        supabase_service.ping("pages")

        health_duration = time.time() - health_start_time

        return {
            "status": "healthy",
            "service": "cms",
            "timestamp": datetime.now().isoformat(),
            "response_time_ms": round(health_duration * 1000, 2)
        }
    except Exception as e:
        health_duration = time.time() - health_start_time
        logger.error(f"Health check failed: {str(e)} - Duration: {health_duration:.1f}s")

        return {
            "status": "unhealthy",
            "service": "cms",
            "timestamp": datetime.now().isoformat(),
            "error": str(e),
            "response_time_ms": round(health_duration * 1000, 2)
        }
