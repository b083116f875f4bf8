"""Liveness, readiness and Prometheus scrape endpoints.

/health reports whether the process is up and which optional
integrations are configured. /ready answers whether this instance can
take traffic; with all state in memory that is true once it responds.
"""

from __future__ import annotations

from fastapi import APIRouter, Request, Response
from prometheus_client import CONTENT_TYPE_LATEST, generate_latest

router = APIRouter(tags=["health"])


@router.get("/health")
async def health(request: Request) -> dict:
    provider = request.app.state.conference_provider
    return {
        "status": "ok",
        "checks": {
            "conference_provider": (
                "configured" if provider is not None else "not_configured"
            ),
        },
    }


@router.get("/ready")
async def ready() -> Response:
    return Response(status_code=200)


@router.get("/metrics", include_in_schema=False)
async def metrics() -> Response:
    return Response(content=generate_latest(), media_type=CONTENT_TYPE_LATEST)
