"""Process metrics endpoint:
    GET  /api/v1/performance
"""

from __future__ import annotations

import logging
import os
import threading
import time

import psutil
from fastapi import APIRouter

from projection_engine.models.schemas import PerformanceResponse

logger = logging.getLogger(__name__)

router = APIRouter(
    prefix="/api/v1",
    tags=["Performance"],
)

_started_at: float = time.monotonic()
_last_response_ms: float = 0.0  # written by the timing middleware in main.py


def reset_start_time() -> None:
    global _started_at
    _started_at = time.monotonic()


def record_response_time(elapsed_ms: float) -> None:
    global _last_response_ms
    _last_response_ms = elapsed_ms


def format_duration(milliseconds: float) -> str:
    """Render a duration as HH:mm:ss.SSS."""
    whole_ms = int(milliseconds)
    seconds, millis = divmod(whole_ms, 1000)
    minutes, secs = divmod(seconds, 60)
    hours, minutes = divmod(minutes, 60)
    return f"{hours:02d}:{minutes:02d}:{secs:02d}.{millis:03d}"


def _rss_megabytes() -> str:
    rss = psutil.Process(os.getpid()).memory_info().rss
    return f"{rss / (1024 * 1024):.2f} MB"


@router.get(
    "/performance",
    response_model=PerformanceResponse,
    summary="Process performance metrics",
)
async def performance_report() -> PerformanceResponse:
    """Last response time, uptime, resident memory and live thread count."""
    return PerformanceResponse(
        time=format_duration(_last_response_ms),
        uptime=format_duration((time.monotonic() - _started_at) * 1000),
        memory=_rss_megabytes(),
        threads=threading.active_count(),
    )
