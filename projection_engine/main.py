"""FastAPI application entry point.

Serves the investment projection engine on port 5477.

Usage:
    uvicorn projection_engine.main:app --host 0.0.0.0 --port 5477 --reload
"""

from __future__ import annotations

import logging
import time
from contextlib import asynccontextmanager

from fastapi import FastAPI, Request
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse

from projection_engine.config import DEFAULT_RATES, settings
from projection_engine.routers import calculations, performance
from projection_engine.routers.performance import record_response_time, reset_start_time

# ── Logging ──────────────────────────────────────────────────────────────
logging.basicConfig(
    level=settings.LOG_LEVEL,
    format="%(asctime)s | %(levelname)-7s | %(name)s | %(message)s",
)
logger = logging.getLogger(__name__)


# ── Lifespan (startup + shutdown) ────────────────────────────────────────

@asynccontextmanager
async def lifespan(app: FastAPI):
    logger.info("Starting Investment Projection API on port %s …", settings.APP_PORT)
    logger.info("Rate table: %s", DEFAULT_RATES)
    reset_start_time()
    yield
    logger.info("Application shutdown complete.")


# ── Application ──────────────────────────────────────────────────────────

app = FastAPI(
    title="Investment Projection API",
    description=(
        "Projects terminal value, profit, profit percentage and annualized "
        "return for deposits, bonds, stocks, gold, the auto-invest piggy "
        "bank and individual investment accounts (IIS type A and base)."
    ),
    version="1.0.0",
    lifespan=lifespan,
)

app.add_middleware(
    CORSMiddleware,
    allow_origins=["*"],
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)


# ── Request timing middleware ────────────────────────────────────────────

@app.middleware("http")
async def timing_middleware(request: Request, call_next):
    start = time.perf_counter()
    response = await call_next(request)
    elapsed_ms = (time.perf_counter() - start) * 1000
    response.headers["X-Response-Time-Ms"] = f"{elapsed_ms:.2f}"
    record_response_time(elapsed_ms)
    logger.debug("%s %s -> %s in %.2f ms", request.method, request.url.path, response.status_code, elapsed_ms)
    return response


# ── Global exception handler ─────────────────────────────────────────────

@app.exception_handler(Exception)
async def global_exception_handler(request: Request, exc: Exception):
    logger.error("Unhandled exception on %s: %s", request.url.path, exc, exc_info=True)
    return JSONResponse(
        status_code=500,
        content={"detail": "Internal server error. Please check the logs."},
    )


# ── Register routers ─────────────────────────────────────────────────────
app.include_router(calculations.router)
app.include_router(performance.router)


@app.get("/health", tags=["Health"])
async def health_check():
    return {"status": "healthy", "port": settings.APP_PORT}


if __name__ == "__main__":
    import uvicorn

    uvicorn.run(
        "projection_engine.main:app",
        host=settings.APP_HOST,
        port=settings.APP_PORT,
        reload=True,
    )
