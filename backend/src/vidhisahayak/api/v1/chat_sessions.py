import logging
from fastapi import APIRouter, Depends, Query
from sqlalchemy.orm import Session

from vidhisahayak.core.database import require_db
from vidhisahayak.core.response_utils import create_success_response, create_error_response, ResponseTimer
from vidhisahayak.models.user import User
from vidhisahayak.schemas import ChatSessionUpdate, StandardResponse
from vidhisahayak.services.chat_session_service import ChatSessionService
from vidhisahayak.api.v1.auth import get_current_user

logger = logging.getLogger(__name__)
router = APIRouter()


@router.get("/sessions", response_model=StandardResponse)
async def list_chat_sessions(
    page: int = Query(1, ge=1, description="Page number"),
    per_page: int = Query(20, ge=1, le=100, description="Items per page"),
    current_user: User = Depends(get_current_user),
    db: Session = Depends(require_db)
):
    """List chat sessions for the current user."""
    with ResponseTimer() as timer:
        try:
            service = ChatSessionService(db)
            sessions = service.list_sessions(current_user, page, per_page)

            return create_success_response(
                data=sessions,
                status_code=200,
                execution_time=timer.get_execution_time()
            )

        except Exception as e:
            logger.error(f"Error listing chat sessions: {e}")
            return create_error_response(
                message="Failed to list chat sessions",
                status_code=500,
                execution_time=timer.get_execution_time()
            )


@router.get("/sessions/{session_id}", response_model=StandardResponse)
async def get_chat_session(
    session_id: str,
    current_user: User = Depends(get_current_user),
    db: Session = Depends(require_db)
):
    """Get a chat session with all its messages."""
    with ResponseTimer() as timer:
        try:
            service = ChatSessionService(db)
            session = service.get_session_with_messages(session_id, current_user)

            if not session:
                return create_error_response(
                    message="Chat session not found",
                    status_code=404,
                    execution_time=timer.get_execution_time()
                )

            return create_success_response(
                data=session,
                status_code=200,
                execution_time=timer.get_execution_time()
            )

        except Exception as e:
            logger.error(f"Error getting chat session {session_id}: {e}")
            return create_error_response(
                message="Failed to get chat session",
                status_code=500,
                execution_time=timer.get_execution_time()
            )


@router.put("/sessions/{session_id}", response_model=StandardResponse)
async def update_chat_session(
    session_id: str,
    update_data: ChatSessionUpdate,
    current_user: User = Depends(get_current_user),
    db: Session = Depends(require_db)
):
    """Rename a chat session."""
    with ResponseTimer() as timer:
        try:
            service = ChatSessionService(db)
            session = service.update_session(session_id, current_user, update_data)

            if not session:
                return create_error_response(
                    message="Chat session not found",
                    status_code=404,
                    execution_time=timer.get_execution_time()
                )

            return create_success_response(
                data=session,
                status_code=200,
                message="Chat session updated successfully",
                execution_time=timer.get_execution_time()
            )

        except Exception as e:
            logger.error(f"Error updating chat session {session_id}: {e}")
            return create_error_response(
                message="Failed to update chat session",
                status_code=500,
                execution_time=timer.get_execution_time()
            )


@router.delete("/sessions/{session_id}", response_model=StandardResponse)
async def delete_chat_session(
    session_id: str,
    current_user: User = Depends(get_current_user),
    db: Session = Depends(require_db)
):
    """Delete a chat session and its messages."""
    with ResponseTimer() as timer:
        try:
            service = ChatSessionService(db)
            deleted = service.delete_session(session_id, current_user)

            if not deleted:
                return create_error_response(
                    message="Chat session not found",
                    status_code=404,
                    execution_time=timer.get_execution_time()
                )

            return create_success_response(
                data=None,
                status_code=200,
                message="Chat session deleted successfully",
                execution_time=timer.get_execution_time()
            )

        except Exception as e:
            logger.error(f"Error deleting chat session {session_id}: {e}")
            return create_error_response(
                message="Failed to delete chat session",
                status_code=500,
                execution_time=timer.get_execution_time()
            )


@router.get("/sessions/{session_id}/history", response_model=StandardResponse)
async def get_chat_history(
    session_id: str,
    current_user: User = Depends(get_current_user),
    db: Session = Depends(require_db)
):
    """Get the session transcript as plain text."""
    with ResponseTimer() as timer:
        try:
            service = ChatSessionService(db)
            if service.get_session_with_messages(session_id, current_user) is None:
                return create_error_response(
                    message="Chat session not found",
                    status_code=404,
                    execution_time=timer.get_execution_time()
                )

            return create_success_response(
                data={"session_id": session_id, "history": service.get_chat_history(session_id, current_user)},
                status_code=200,
                execution_time=timer.get_execution_time()
            )

        except Exception as e:
            logger.error(f"Error getting chat history {session_id}: {e}")
            return create_error_response(
                message="Failed to get chat history",
                status_code=500,
                execution_time=timer.get_execution_time()
            )
