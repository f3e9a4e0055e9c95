import logging
from typing import Optional
from fastapi import APIRouter, Depends
from sqlalchemy.orm import Session

from vidhisahayak.core.database import get_db
from vidhisahayak.core.response_utils import create_success_response, create_error_response, ResponseTimer
from vidhisahayak.core.security import InputValidator
from vidhisahayak.models.user import User
from vidhisahayak.schemas import ChatRequest, LanguageOption, StandardResponse
from vidhisahayak.services.chat_service import ChatService
from vidhisahayak.services.language import LANG_OPTIONS
from vidhisahayak.services.llm_providers import get_provider_chain
from vidhisahayak.api.v1.auth import get_current_user_optional

logger = logging.getLogger(__name__)
router = APIRouter()


@router.post("", response_model=StandardResponse)
def chat(
    request: ChatRequest,
    current_user: Optional[User] = Depends(get_current_user_optional),
    db: Optional[Session] = Depends(get_db)
):
    """
    Answer a legal question typed or spoken by the user.

    Works for anonymous users and without a database; the reply then carries
    no session id.
    """
    with ResponseTimer() as timer:
        validation = InputValidator.validate_query(request.message)
        if not validation['is_valid']:
            return create_error_response(
                message=validation['error'],
                status_code=400,
                execution_time=timer.get_execution_time()
            )

        try:
            service = ChatService(db=db, chain=get_provider_chain())
            reply = service.handle(
                validation['sanitized_data'],
                session_id=request.session_id,
                lang=request.lang,
                user=current_user,
            )

            return create_success_response(
                data=reply,
                status_code=200,
                execution_time=timer.get_execution_time()
            )

        except Exception as e:
            logger.error(f"Chat request failed: {e}")
            return create_error_response(
                message="Failed to process chat message",
                status_code=500,
                execution_time=timer.get_execution_time()
            )


@router.get("/languages", response_model=StandardResponse)
async def list_languages():
    """Reply languages the client can choose from."""
    with ResponseTimer() as timer:
        return create_success_response(
            data=[LanguageOption(**option) for option in LANG_OPTIONS],
            status_code=200,
            execution_time=timer.get_execution_time()
        )
