# main.py
"""
Application entrypoint. Includes routers and error handlers.
"""
import logging
from contextlib import asynccontextmanager

from fastapi import FastAPI, Request
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse

from farm.api.routers import animals, barns
from farm.config.settings import settings
from farm.domain.errors import CapacityInvariantViolation, NotFoundError, StoreFailure
from farm.infrastructure.db.init_db import init_db
from farm.infrastructure.db.session import engine

logging.basicConfig(
    level=getattr(logging, settings.LOG_LEVEL.upper(), logging.INFO),
    format="%(asctime)s - %(name)s - %(levelname)s - %(message)s",
)
logger = logging.getLogger(__name__)


@asynccontextmanager
async def lifespan(app: FastAPI):
    init_db()
    logger.info("Farm backend started (env=%s)", settings.ENV)
    yield
    engine.dispose()


app = FastAPI(title="Farm Barn Allocation", lifespan=lifespan)

# Basic CORS (adjust origins in production)
app.add_middleware(
    CORSMiddleware,
    allow_origins=["*"],
    allow_methods=["*"],
    allow_headers=["*"],
)

# include routers
app.include_router(animals.router, prefix="/api/v1/animals", tags=["animals"])
app.include_router(barns.router, prefix="/api/v1/barns", tags=["barns"])


@app.exception_handler(NotFoundError)
async def not_found_handler(request: Request, exc: NotFoundError):
    return JSONResponse(status_code=404, content={"detail": str(exc)})


@app.exception_handler(StoreFailure)
async def store_failure_handler(request: Request, exc: StoreFailure):
    return JSONResponse(status_code=503, content={"detail": "storage unavailable, nothing was changed"})


@app.exception_handler(CapacityInvariantViolation)
async def invariant_handler(request: Request, exc: CapacityInvariantViolation):
    logger.error("Capacity invariant violated: %s", exc)
    return JSONResponse(status_code=500, content={"detail": str(exc)})


@app.get("/")
async def index():
    """Health / basic info endpoint."""
    return {"status": "ok", "service": "farm-backend", "env": settings.ENV}
