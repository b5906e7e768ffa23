"""
3win Incubator Backend
Authentication, project submissions and the AI-guided Business Model Canvas
"""

from datetime import datetime, timezone
from pathlib import Path
import logging
import traceback

from fastapi import Depends, FastAPI
from fastapi.middleware.cors import CORSMiddleware
from fastapi.staticfiles import StaticFiles
from starlette.middleware.base import BaseHTTPMiddleware
from starlette.responses import JSONResponse

# Import routers
from auth import auth_router
from routers.projects_router import router as projects_router
from routers.bmc_router import bmc_router
from routers.design_router import design_router
from database import init_db
from config.settings import settings, UPLOADS_DIR
from services.session_store import SessionStore, SessionSweeper
from services.text_generation_client import TextGenerationClient
from services.retry_policy import RetryPolicy
from deps import get_session_store, get_text_client
from utils.responses import success_response, envelope

# ============================================================================
# LOGGING
# ============================================================================

# Write ALL events to ./logs/app.log and stderr
LOGS_DIR = Path("./logs")
LOGS_DIR.mkdir(exist_ok=True)
logging.basicConfig(
    level=logging.INFO,
    format='%(asctime)s - %(name)s - %(levelname)s - %(message)s',
    handlers=[
        logging.FileHandler(LOGS_DIR / "app.log", encoding="utf-8"),
        logging.StreamHandler()
    ]
)
logger = logging.getLogger(__name__)

# ============================================================================
# FASTAPI APP SETUP
# ============================================================================

app = FastAPI(title="3win Incubator - BMC Assistant")

# Process-wide collaborators, created once and reached through deps.py
app.state.session_store = SessionStore(max_sessions=settings.max_sessions)
app.state.text_client = TextGenerationClient()
app.state.retry_policy = RetryPolicy(app.state.text_client)
app.state.session_sweeper = SessionSweeper(
    app.state.session_store,
    interval_seconds=settings.session_sweep_interval_seconds,
    ttl_seconds=settings.session_ttl_seconds,
)


# Uncaught exception middleware - logs all unhandled exceptions and returns 500
class UncaughtExceptionMiddleware(BaseHTTPMiddleware):
    async def dispatch(self, request, call_next):
        try:
            return await call_next(request)
        except Exception as e:
            logger.error(f"Uncaught exception: {e}\n{traceback.format_exc()}")
            return JSONResponse(
                status_code=500,
                content=envelope(False, error="internal_error", message="Internal Server Error")
            )


class SecurityHeadersMiddleware(BaseHTTPMiddleware):
    """Add X-Frame-Options and X-Content-Type-Options to all responses"""
    async def dispatch(self, request, call_next):
        response = await call_next(request)
        response.headers["X-Frame-Options"] = "DENY"
        response.headers["X-Content-Type-Options"] = "nosniff"
        return response


app.add_middleware(UncaughtExceptionMiddleware)
app.add_middleware(SecurityHeadersMiddleware)

# CORS MUST be near the bottom
app.add_middleware(
    CORSMiddleware,
    allow_origins=[settings.frontend_url],
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)

# Serve uploaded logos and documents
UPLOADS_DIR.mkdir(parents=True, exist_ok=True)
app.mount("/uploads", StaticFiles(directory=str(UPLOADS_DIR)), name="uploads")

# ============================================================================
# STARTUP / SHUTDOWN
# ============================================================================
@app.on_event("startup")
async def check_env_keys_on_startup():
    """Warn about missing environment variables (non-fatal)"""
    missing = [
        name for name, value in {
            "JWT_SECRET_KEY": settings.jwt_secret_key,
            "OPENAI_API_KEY": settings.openai_api_key,
        }.items()
        if not value
    ]
    if missing:
        logger.warning(f"Startup check: Missing environment variables: {', '.join(missing)}")
    else:
        logger.info("Startup check: All critical environment variables are set")


@app.on_event("startup")
async def initialize_database():
    """Initialize the database and create all tables."""
    try:
        await init_db()
        logger.info("✅ Database initialized successfully")
    except Exception as e:
        logger.error(f"❌ Database initialization failed: {e}")
        raise


@app.on_event("startup")
async def start_session_sweeper():
    app.state.session_sweeper.start()


@app.on_event("shutdown")
async def stop_session_sweeper():
    await app.state.session_sweeper.stop()

# ============================================================================
# INCLUDE ROUTERS
# ============================================================================
app.include_router(auth_router)
app.include_router(projects_router)
app.include_router(bmc_router)
app.include_router(design_router)


@app.get("/api/health")
async def health(
    store: SessionStore = Depends(get_session_store),
    text_client: TextGenerationClient = Depends(get_text_client),
):
    return success_response(data={
        "status": "✅ Server is running",
        "timestamp": datetime.now(timezone.utc).isoformat(),
        "activeSessions": store.count(),
        "aiConfigured": text_client.is_configured,
        "features": ["BMC Assistant", "Design Assistant", "Authentication", "File Upload"],
    })


if __name__ == "__main__":
    import uvicorn
    uvicorn.run(app, host="0.0.0.0", port=8000)
