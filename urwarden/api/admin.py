"""
Admin API endpoints for blocklist management.
"""

from fastapi import APIRouter, Depends, HTTPException, Request, status

from urwarden.api.security import verify_api_token
from urwarden.exceptions import BlocklistLoadError
from urwarden.schemas.api_schemas import BlocklistStats
from urwarden.utils.logging_config import StructuredLogger

logger = StructuredLogger(__name__)

router = APIRouter(
    prefix="/admin",
    tags=["admin"],
    dependencies=[Depends(verify_api_token)],
)


@router.get("/blocklist", response_model=BlocklistStats)
def blocklist_stats(request: Request):
    """Current blocklist file and number of loaded domains."""
    blocklist = request.app.state.blocklist
    return BlocklistStats(path=blocklist.path, size=blocklist.size())


@router.post("/blocklist/reload", response_model=BlocklistStats)
def reload_blocklist(request: Request):
    """
    Reload the blocklist file.

    Lookups keep running during the reload; on failure the previous
    blocklist stays active.
    """
    blocklist = request.app.state.blocklist
    try:
        size = blocklist.reload()
    except BlocklistLoadError as e:
        logger.error("Blocklist reload failed", error=str(e))
        raise HTTPException(
            status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
            detail=f"Blocklist reload failed: {e}",
        )
    return BlocklistStats(path=blocklist.path, size=size)
