import logging
from typing import Optional
from fastapi import APIRouter, Depends, Query
from sqlalchemy.orm import Session

from vidhisahayak.core.database import get_db, require_db
from vidhisahayak.core.constants import VERIFICATION_STATUSES
from vidhisahayak.core.response_utils import create_success_response, create_error_response, ResponseTimer
from vidhisahayak.models.user import User
from vidhisahayak.schemas import LawyerListResponse, VerificationUpdate, StandardResponse
from vidhisahayak.services.lawyer_service import ALL, LawyerService, profile_response
from vidhisahayak.api.v1.auth import require_admin_role

logger = logging.getLogger(__name__)
router = APIRouter()


@router.get("", response_model=StandardResponse)
async def list_lawyers(
    q: str = Query("", max_length=200, description="Text matched against name or location"),
    practice: str = Query(ALL, description="Practice area, or 'all'"),
    location: str = Query(ALL, description="Office location, or 'all'"),
    max_fee: Optional[int] = Query(None, alias="maxFee", ge=0, description="Maximum fee per session in INR"),
    db: Optional[Session] = Depends(get_db)
):
    """List verified lawyers matching the filters."""
    with ResponseTimer() as timer:
        items, source = LawyerService(db).list_lawyers(q, practice, location, max_fee)
        return create_success_response(
            data=LawyerListResponse(items=items, source=source),
            status_code=200,
            execution_time=timer.get_execution_time()
        )


@router.get("/filters", response_model=StandardResponse)
async def get_lawyer_filters(db: Optional[Session] = Depends(get_db)):
    """Practice areas and locations to filter by."""
    with ResponseTimer() as timer:
        service = LawyerService(db)
        return create_success_response(
            data={"practices": service.practice_options(), "locations": service.location_options()},
            status_code=200,
            execution_time=timer.get_execution_time()
        )


@router.get("/{lawyer_id}", response_model=StandardResponse)
async def get_lawyer(lawyer_id: str, db: Optional[Session] = Depends(get_db)):
    """Get a lawyer's public profile."""
    with ResponseTimer() as timer:
        lawyer = LawyerService(db).get_lawyer(lawyer_id)
        if lawyer is None:
            return create_error_response(
                message="Lawyer not found",
                status_code=404,
                execution_time=timer.get_execution_time()
            )

        return create_success_response(
            data=lawyer,
            status_code=200,
            execution_time=timer.get_execution_time()
        )


@router.put("/{lawyer_id}/verification", response_model=StandardResponse)
async def update_verification_status(
    lawyer_id: int,
    update: VerificationUpdate,
    current_user: User = Depends(require_admin_role),
    db: Session = Depends(require_db)
):
    """Approve or reject a lawyer profile (admin only)."""
    with ResponseTimer() as timer:
        if update.verification_status not in VERIFICATION_STATUSES:
            return create_error_response(
                message=f"Invalid verification status. Must be one of: {list(VERIFICATION_STATUSES)}",
                status_code=400,
                execution_time=timer.get_execution_time()
            )

        try:
            profile = LawyerService(db).set_verification_status(lawyer_id, update.verification_status)
            if profile is None:
                return create_error_response(
                    message="Lawyer not found",
                    status_code=404,
                    execution_time=timer.get_execution_time()
                )

            logger.info(f"Admin {current_user.id} set lawyer {lawyer_id} to {update.verification_status}")
            return create_success_response(
                data={
                    **profile_response(profile).model_dump(),
                    "verification_status": profile.verification_status,
                },
                status_code=200,
                execution_time=timer.get_execution_time()
            )

        except Exception as e:
            logger.error(f"Error updating lawyer {lawyer_id} verification: {e}")
            return create_error_response(
                message="Failed to update verification status",
                status_code=500,
                execution_time=timer.get_execution_time()
            )
