"""
Health check API endpoints.

Routes: GET /health, GET /health/ready

Dependencies: docchat.api.deps
System role: Health check HTTP API
"""

from fastapi import APIRouter, Depends
from fastapi.responses import JSONResponse

from docchat.api.deps import get_rag_application
from docchat.application.rag_application import RAGApplication
from docchat.models.common import HealthResponse

router = APIRouter(prefix="/health", tags=["health"])


@router.get("", response_model=HealthResponse)
async def health_check() -> HealthResponse:
    """Basic liveness check."""
    return HealthResponse(status="healthy", message="Server Healthy")


@router.get("/ready", response_model=HealthResponse)
async def readiness_check(application: RAGApplication = Depends(get_rag_application)):
    """Readiness check: 200 once the vector index is built, 503 before."""
    if not application.is_ready:
        body = HealthResponse(status="starting", message="Vector index not ready")
        return JSONResponse(status_code=503, content=body.model_dump())
    return HealthResponse(
        status="healthy",
        message="Vector index ready",
        chunks=len(application.index) if application.index is not None else 0,
    )
