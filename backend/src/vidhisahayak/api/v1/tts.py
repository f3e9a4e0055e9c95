import logging
from fastapi import APIRouter, Depends
from fastapi.responses import Response

from vidhisahayak.core.config import get_config
from vidhisahayak.core.response_utils import create_error_response, ResponseTimer
from vidhisahayak.schemas import TTSRequest
from vidhisahayak.services.tts_service import TTSError, TTSService

logger = logging.getLogger(__name__)
router = APIRouter()


def get_tts_service() -> TTSService:
    return TTSService()


@router.post("")
def synthesize_speech(request: TTSRequest, service: TTSService = Depends(get_tts_service)):
    """Speak the text as MP3 audio. Errors come back in the standard envelope."""
    with ResponseTimer() as timer:
        max_length = get_config().application.max_tts_text_length
        if request.text and len(request.text) > max_length:
            return create_error_response(
                message=f"Text too long. Max length: {max_length} characters",
                status_code=400,
                execution_time=timer.get_execution_time()
            )

        try:
            audio = service.synthesize(request.text, request.lang, request.voice_name)
        except TTSError as e:
            logger.error(f"TTS failed: {e.message}")
            return create_error_response(
                message=e.message,
                status_code=e.status_code,
                execution_time=timer.get_execution_time()
            )

        return Response(
            content=audio,
            media_type="audio/mpeg",
            headers={"Cache-Control": "no-store"},
        )
