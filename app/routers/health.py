# app/routers/health.py
from fastapi import APIRouter, Depends, status
from fastapi.responses import JSONResponse

from app.core.errors import StorageUnavailableError
from app.database import ConnectionManager, get_connection_manager

router = APIRouter(tags=["Health"])


@router.get("/health")
def health_check(connections: ConnectionManager = Depends(get_connection_manager)):
    """
    Liveness of the database pool.

    - 200 {"status": "healthy"} when a ping succeeds.
    - 503 with a reason otherwise.
    """
    try:
        connections.ping()
    except StorageUnavailableError:
        return JSONResponse(
            status_code=status.HTTP_503_SERVICE_UNAVAILABLE,
            content={"status": "unhealthy", "reason": "Database connection failed"},
        )
    return {"status": "healthy"}
