"""Health check route - API v1."""

from fastapi import APIRouter
from pydantic import BaseModel

router = APIRouter(tags=["health-v1"])


class HealthResponse(BaseModel):
    status: str


@router.get("/health", response_model=HealthResponse)
async def health() -> HealthResponse:
    return HealthResponse(status="ok")
