import logging
from fastapi import APIRouter, Query

from vidhisahayak.core.response_utils import create_success_response, ResponseTimer
from vidhisahayak.schemas import StandardResponse
from vidhisahayak.services.search_service import search

logger = logging.getLogger(__name__)
router = APIRouter()


@router.get("", response_model=StandardResponse)
async def site_search(q: str = Query("", max_length=200, description="Search text")):
    """Search categories, their guidance and the lawyer directory."""
    with ResponseTimer() as timer:
        return create_success_response(
            data=search(q),
            status_code=200,
            execution_time=timer.get_execution_time()
        )
