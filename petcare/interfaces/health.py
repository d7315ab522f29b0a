"""
Liveness endpoint for the PetCare API.

Reports the running version and whether the pets database answers.
The process itself is up whenever this route responds, so a failed
database ping yields "degraded" with HTTP 200 rather than an error.
"""

from fastapi import APIRouter, Depends

from petcare.core.config import settings
from petcare.infrastructure.pets.database import SqlDatabase
from petcare.interfaces.pets.dependencies import get_database
from petcare.interfaces.pets.schemas import HealthResponse

router = APIRouter(tags=["health"])


@router.get(
    "/health",
    response_model=HealthResponse,
    summary="Health check",
    description="Service version and database reachability.",
)
def health_check(database: SqlDatabase = Depends(get_database)) -> HealthResponse:
    reachable = database.ping()
    return HealthResponse(
        status="ok" if reachable else "degraded",
        version=settings.version,
        database="up" if reachable else "down",
    )
