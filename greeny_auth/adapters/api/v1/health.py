from fastapi import APIRouter
from pydantic import BaseModel

router = APIRouter()


class HealthResponse(BaseModel):
    status: str


@router.get("", response_model=HealthResponse)
async def health_check() -> HealthResponse:
    """Liveness check. Does not touch the database or Redis."""
    return HealthResponse(status="ok")
