"""
Google Text-to-Speech client.
"""

import base64
import logging
from typing import Optional

import httpx

from vidhisahayak.core.config import AIConfig, get_config
from vidhisahayak.core.constants import DEFAULT_LANGUAGE, TTS_AUDIO_ENCODING

logger = logging.getLogger(__name__)


class TTSError(Exception):
    """Speech synthesis failed; status_code is the HTTP status to answer with."""

    def __init__(self, message: str, status_code: int = 500):
        super().__init__(message)
        self.message = message
        self.status_code = status_code


class TTSService:
    """Synthesizes MP3 audio through the Google TTS REST API."""

    def __init__(self, settings: Optional[AIConfig] = None, client: Optional[httpx.Client] = None):
        self.settings = settings or get_config().ai
        self._client = client

    def _build_body(self, text: str, lang: Optional[str], voice_name: Optional[str]) -> dict:
        voice = {"languageCode": lang or DEFAULT_LANGUAGE}
        if voice_name:
            voice["name"] = voice_name
        return {
            "input": {"text": text},
            "voice": voice,
            "audioConfig": {"audioEncoding": TTS_AUDIO_ENCODING},
        }

    def synthesize(self, text: Optional[str], lang: Optional[str] = None, voice_name: Optional[str] = None) -> bytes:
        if not text or not isinstance(text, str) or not text.strip():
            raise TTSError("Missing text", 400)
        if not self.settings.google_tts_api_key:
            raise TTSError("GOOGLE_TTS_API_KEY not set", 400)

        body = self._build_body(text, lang, voice_name)
        client = self._client or httpx.Client(timeout=self.settings.ai_request_timeout)
        try:
            response = client.post(
                self.settings.tts_endpoint,
                params={"key": self.settings.google_tts_api_key},
                json=body,
            )
            response.raise_for_status()
            data = response.json()
        except httpx.HTTPStatusError as e:
            logger.error(f"Google TTS HTTP {e.response.status_code}")
            raise TTSError(f"Google TTS HTTP {e.response.status_code}: {e.response.text}", 502) from e
        except httpx.HTTPError as e:
            logger.error(f"Google TTS request failed: {e}")
            raise TTSError(f"Google TTS request failed: {e}", 502) from e
        except ValueError as e:
            logger.error(f"Google TTS returned a non-JSON body: {e}")
            raise TTSError("Google TTS returned an invalid response", 502) from e
        finally:
            if self._client is None:
                client.close()

        audio_b64 = data.get("audioContent") if isinstance(data, dict) else None
        if not audio_b64:
            raise TTSError("No audio content returned", 500)

        try:
            audio = base64.b64decode(audio_b64, validate=True)
        except (TypeError, ValueError) as e:
            logger.error(f"Google TTS audio content is not base64: {e}")
            raise TTSError("Google TTS returned an invalid response", 502) from e

        logger.info(f"Synthesized {len(audio)} bytes of audio ({body['voice']['languageCode']})")
        return audio
