import logging

from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware
from fastapi.staticfiles import StaticFiles

from .core.config import Config
from .core.middleware import log_requests, global_exception_handler
from .controllers import account_controller, admin_controller, cms_controller, home_controller
from .infrastructure.templating import STATIC_DIR

logger = logging.getLogger(__name__)

# Initialize FastAPI
# The catch-all owns every unclaimed path, so the generated docs routes stay off
app = FastAPI(title="GenieCMS", docs_url=None, redoc_url=None, openapi_url=None)

# CORS setup
ALLOWED_ORIGINS = Config.allowed_origins()

app.add_middleware(
    CORSMiddleware,
    allow_origins=ALLOWED_ORIGINS,
    allow_credentials=True,
    allow_methods=["GET", "POST", "OPTIONS"],
    allow_headers=["*"],
)

@app.middleware("http")
async def _log_requests(request, call_next):
    return await log_requests(request, call_next)

@app.exception_handler(Exception)
async def _global_exception_handler(request, exc):
    return await global_exception_handler(request, exc)


app.include_router(home_controller.router)
app.include_router(account_controller.router)
app.include_router(admin_controller.router)
app.mount("/static", StaticFiles(directory=str(STATIC_DIR)), name="static")

# Catch-all CMS route goes last so it never shadows the routes above
app.include_router(cms_controller.router)
