"""EventEase session and attendance web application."""
import logging
from contextlib import asynccontextmanager

from fastapi import Depends, FastAPI, Request
from fastapi.middleware.cors import CORSMiddleware

from eventease.core.config import settings
from eventease.core.context import SessionRegistry
from eventease.core.dependencies import get_registry
from eventease.routes import events, session

# Configure logging
settings.log_dir.mkdir(parents=True, exist_ok=True)
log_file = settings.log_dir / "latest.log"

logging.basicConfig(
    level=logging.DEBUG if settings.debug else logging.INFO,
    format="%(asctime)s - %(name)s - %(levelname)s - %(message)s",
    filename=str(log_file),
)
logger = logging.getLogger(__name__)


@asynccontextmanager
async def lifespan(app: FastAPI):
    """Application startup and shutdown lifecycle."""
    logger.info("Starting EventEase application")
    yield
    # Shutdown: session state is volatile, end every live session
    app.state.registry.end_all()
    logger.info("EventEase application shut down")


app = FastAPI(
    title=settings.app_name,
    description="Session state and event attendance tracking for EventEase clients",
    version="0.1.0",
    lifespan=lifespan,
)
app.state.registry = SessionRegistry()

# Configure CORS for external access
origins = (
    ["*"]
    if settings.allowed_origins == "*"
    else [o.strip() for o in settings.allowed_origins.split(",")]
)
app.add_middleware(
    CORSMiddleware,
    allow_origins=origins,
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)


@app.middleware("http")
async def session_cookie(request: Request, call_next):
    """Send the session cookie for contexts started during this request."""
    response = await call_next(request)
    session_id = getattr(request.state, "new_session_id", None)
    if session_id:
        response.set_cookie(
            settings.session_cookie_name,
            session_id,
            httponly=True,
            samesite="lax",
        )
    return response


# Include routers
app.include_router(session.router)
app.include_router(events.router)


@app.get("/health")
async def health(registry: SessionRegistry = Depends(get_registry)):
    """Health check endpoint."""
    return {
        "status": "healthy",
        "app": settings.app_name,
        "active_sessions": len(registry),
    }
