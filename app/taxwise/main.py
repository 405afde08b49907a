"""
FastAPI application for the TaxWise service.

Provides endpoints for:
- Merging uploaded tax documents and comparing old vs new regimes with AI
- Calculating tax liability from user-entered data
- Server-rendered pages (home, dashboard, learn)
"""

import logging
from contextlib import asynccontextmanager
from pathlib import Path

import uvicorn
from fastapi import FastAPI, Request, status
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse
from fastapi.staticfiles import StaticFiles

from . import __version__
from .config import get_settings
from .dependencies import NOT_READY_MESSAGE, ServiceNotReadyError
from .models import ErrorResponse, HealthResponse
from .routers import tax, views
from .services.ai import get_ai_service
from .services.pdf_service import get_pdf_merger
from .services.storage import TempStorage

PUBLIC_DIR = Path(__file__).resolve().parent / "public"

settings = get_settings()

# Configure logging
logging.basicConfig(
    level=logging.DEBUG if settings.debug else logging.INFO,
    format="%(asctime)s - %(name)s - %(levelname)s - %(message)s",
)
logger = logging.getLogger(__name__)


@asynccontextmanager
async def lifespan(app: FastAPI):
    """Initialize every adapter before the server starts accepting requests."""
    logger.info("Starting TaxWise service...")
    current = get_settings()
    app.state.storage = TempStorage(
        current.uploads_dir, keep_merged=current.keep_merged_pdfs
    )
    app.state.pdf_merger = get_pdf_merger()
    app.state.ai_service = get_ai_service()
    logger.info(
        "Services initialized (model=%s, uploads=%s)",
        app.state.ai_service.model,
        current.uploads_dir,
    )
    yield
    logger.info("Shutting down TaxWise service...")
    app.state.storage = None
    app.state.pdf_merger = None
    app.state.ai_service = None


# Create FastAPI application
app = FastAPI(
    title="TaxWise API",
    description="Old vs new Indian tax regime comparison from uploaded documents",
    version=__version__,
    lifespan=lifespan,
)

# Configure CORS for frontend development
app.add_middleware(
    CORSMiddleware,
    allow_origins=settings.cors_origins,
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)


@app.get("/health", response_model=HealthResponse)
async def health_check() -> HealthResponse:
    """Health check endpoint."""
    return HealthResponse(status="healthy", version=__version__)


# =============================================================================
# Include Routers
# =============================================================================

app.include_router(views.router)
app.include_router(tax.router)

app.mount("/static", StaticFiles(directory=PUBLIC_DIR), name="static")


# =============================================================================
# Exception Handlers
# =============================================================================


@app.exception_handler(ServiceNotReadyError)
async def service_not_ready_handler(request: Request, exc: ServiceNotReadyError):
    """Refuse requests that arrive before the adapters are initialized."""
    logger.warning("Rejected %s: %s", request.url.path, exc)
    return JSONResponse(
        status_code=status.HTTP_503_SERVICE_UNAVAILABLE,
        content=ErrorResponse(error=NOT_READY_MESSAGE).model_dump(),
    )


def run() -> None:
    """Serve the application with uvicorn on the configured port."""
    logger.info("Server listening on port %d...", settings.port)
    uvicorn.run(app, host=settings.host, port=settings.port)


if __name__ == "__main__":
    run()
