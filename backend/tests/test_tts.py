"""
Tests for Google TTS synthesis. The HTTP layer is served by httpx.MockTransport.
"""
import base64
import json

import httpx
import pytest

from vidhisahayak.api.v1.tts import get_tts_service
from vidhisahayak.core.config import AIConfig
from vidhisahayak.services.tts_service import TTSError, TTSService

TTS_URL = "/api/v1/tts"
AUDIO = b"ID3-fake-mp3-bytes"


def service_with(handler, key="tts-key"):
    client = httpx.Client(transport=httpx.MockTransport(handler))
    return TTSService(AIConfig(google_tts_api_key=key), client=client)


def audio_handler(requests):
    def handler(request):
        requests.append(request)
        return httpx.Response(200, json={"audioContent": base64.b64encode(AUDIO).decode()})
    return handler


def test_synthesize_sends_google_request():
    requests = []
    audio = service_with(audio_handler(requests)).synthesize("నమస్కారం", "te-IN", "te-IN-Standard-A")

    assert audio == AUDIO
    request = requests[0]
    assert request.url.params["key"] == "tts-key"
    assert request.url.path == "/v1/text:synthesize"
    assert json.loads(request.content) == {
        "input": {"text": "నమస్కారం"},
        "voice": {"languageCode": "te-IN", "name": "te-IN-Standard-A"},
        "audioConfig": {"audioEncoding": "MP3"},
    }


def test_language_defaults_to_indian_english():
    requests = []
    service_with(audio_handler(requests)).synthesize("hello")
    assert json.loads(requests[0].content)["voice"] == {"languageCode": "en-IN"}


@pytest.mark.parametrize("text", [None, "", "   "])
def test_missing_text(text):
    with pytest.raises(TTSError) as exc:
        service_with(audio_handler([])).synthesize(text)
    assert (exc.value.message, exc.value.status_code) == ("Missing text", 400)


def test_missing_key():
    with pytest.raises(TTSError) as exc:
        service_with(audio_handler([]), key=None).synthesize("hello")
    assert (exc.value.message, exc.value.status_code) == ("GOOGLE_TTS_API_KEY not set", 400)


def test_upstream_error_is_bad_gateway():
    service = service_with(lambda request: httpx.Response(403, text="API key not valid"))
    with pytest.raises(TTSError) as exc:
        service.synthesize("hello")
    assert exc.value.status_code == 502
    assert exc.value.message == "Google TTS HTTP 403: API key not valid"


def test_transport_error_is_bad_gateway():
    def handler(request):
        raise httpx.ConnectError("connection refused", request=request)

    with pytest.raises(TTSError) as exc:
        service_with(handler).synthesize("hello")
    assert exc.value.status_code == 502


def test_empty_audio():
    service = service_with(lambda request: httpx.Response(200, json={}))
    with pytest.raises(TTSError) as exc:
        service.synthesize("hello")
    assert (exc.value.message, exc.value.status_code) == ("No audio content returned", 500)


@pytest.mark.parametrize("body", [
    {"text": "<html>Service Unavailable</html>"},
    {"json": {"audioContent": "!!not-base64!!"}},
])
def test_malformed_upstream_body_is_bad_gateway(body):
    service = service_with(lambda request: httpx.Response(200, **body))
    with pytest.raises(TTSError) as exc:
        service.synthesize("hello")
    assert (exc.value.message, exc.value.status_code) == ("Google TTS returned an invalid response", 502)


@pytest.fixture
def tts_client(stateless_client):
    from vidhisahayak.main import app

    def install(service):
        app.dependency_overrides[get_tts_service] = lambda: service
        return stateless_client
    return install


def test_endpoint_returns_mp3(tts_client):
    client = tts_client(service_with(audio_handler([])))
    response = client.post(TTS_URL, json={"text": "Namaste", "lang": "hi-IN"})

    assert response.status_code == 200
    assert response.headers["content-type"] == "audio/mpeg"
    assert response.headers["cache-control"] == "no-store"
    assert response.content == AUDIO


def test_endpoint_reports_errors_in_envelope(tts_client):
    client = tts_client(service_with(audio_handler([]), key=None))
    response = client.post(TTS_URL, json={"text": "Namaste"})

    assert response.status_code == 400
    assert response.json()["data"]["message"] == "GOOGLE_TTS_API_KEY not set"


def test_endpoint_rejects_long_text(tts_client):
    client = tts_client(service_with(audio_handler([])))
    response = client.post(TTS_URL, json={"text": "a" * 5001})
    assert response.status_code == 400
