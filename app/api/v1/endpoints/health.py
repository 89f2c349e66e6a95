from fastapi import APIRouter, Depends, status

from app.utils.deps import get_health_status

router = APIRouter(tags=["Health"])


@router.get("/health", status_code=status.HTTP_200_OK, summary="Health check")
async def health_check(health: dict = Depends(get_health_status)):
    """Health check endpoint."""
    return health
