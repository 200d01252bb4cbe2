from fastapi import APIRouter
from pydantic import BaseModel

from src.config.settings import settings

router = APIRouter()


class HealthCheckResponse(BaseModel):
    status: str
    version: str = "0.1.0"
    demo_mode: bool = False


@router.get("/", response_model=HealthCheckResponse)
async def health_check() -> HealthCheckResponse:
    """
    Health check endpoint to verify the API is running.
    Reports whether lookups are served from the demo fixture.
    """
    return HealthCheckResponse(status="healthy", demo_mode=settings.demo_mode)
