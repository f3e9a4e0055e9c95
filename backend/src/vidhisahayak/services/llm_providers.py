"""
LLM provider clients and the sequential fallback chain.

Gemini is tried first (each configured model in turn), then Perplexity, then
OpenAI. A provider answering with HTTP 429 is retried after a fixed sleep;
any other failure moves on to the next provider. When every provider fails
the caller gets a deterministic reply instead of an error.
"""

import logging
import time
from dataclasses import dataclass, field
from typing import Callable, Dict, List, Optional, Sequence

import openai
from google import genai
from google.genai import errors as genai_errors
from tenacity import Retrying, stop_after_attempt, wait_fixed, retry_if_exception_type, before_sleep_log

from vidhisahayak.core.config import AIConfig, get_config
from vidhisahayak.core.constants import (
    PROVIDER_GEMINI, PROVIDER_PERPLEXITY, PROVIDER_OPENAI, PROVIDER_NONE, PROVIDER_ORDER,
    GEMINI_SKIP_MODEL_STATUS, RATE_LIMIT_STATUS, ROLE_USER, FALLBACK_REPLY,
)
from vidhisahayak.services.prompt_builder import PromptMessage

logger = logging.getLogger(__name__)


class ProviderError(Exception):
    """A provider failed to produce a reply."""

    def __init__(self, provider: str, message: str, status_code: Optional[int] = None):
        super().__init__(f"{provider}: {message}")
        self.provider = provider
        self.status_code = status_code


class ProviderRateLimited(ProviderError):
    """The provider answered 429."""


class ModelUnavailable(ProviderError):
    """The model does not exist or the key may not use it (403/404)."""


@dataclass
class ProviderResult:
    """Text produced by one provider."""
    text: str
    provider: str
    model: str


@dataclass
class ChainResult:
    """Outcome of running the fallback chain."""
    text: str
    provider: str = PROVIDER_NONE
    model: Optional[str] = None
    attempted: List[str] = field(default_factory=list)

    @property
    def used_fallback(self) -> bool:
        return self.provider == PROVIDER_NONE


class LLMProvider:
    """Base class for a chat-completion provider."""

    name = PROVIDER_NONE

    def __init__(
        self,
        api_key: Optional[str],
        settings: AIConfig,
        sleep: Callable[[float], None] = time.sleep,
    ):
        self.api_key = api_key
        self.settings = settings
        self._sleep = sleep

    @property
    def is_configured(self) -> bool:
        return bool(self.api_key)

    def _with_rate_limit_retry(self, call: Callable[[], ProviderResult]) -> ProviderResult:
        """Run call, sleeping a fixed interval and retrying while the provider is rate limited."""
        retrying = Retrying(
            stop=stop_after_attempt(self.settings.ai_rate_limit_attempts),
            wait=wait_fixed(self.settings.ai_rate_limit_sleep),
            retry=retry_if_exception_type(ProviderRateLimited),
            sleep=self._sleep,
            before_sleep=before_sleep_log(logger, logging.WARNING),
            reraise=True,
        )
        return retrying(call)

    def generate(self, system_prompt: str, messages: Sequence[PromptMessage]) -> ProviderResult:
        raise NotImplementedError


class GeminiProvider(LLMProvider):
    """Google Gemini through the google-genai SDK, falling back across models."""

    name = PROVIDER_GEMINI

    def __init__(
        self,
        api_key: Optional[str],
        settings: AIConfig,
        client=None,
        sleep: Callable[[float], None] = time.sleep,
    ):
        super().__init__(api_key, settings, sleep)
        self.models = list(settings.gemini_models)
        self._client = client

    @property
    def client(self):
        if self._client is None:
            self._client = genai.Client(
                api_key=self.api_key,
                http_options={"timeout": int(self.settings.ai_request_timeout * 1000)},
            )
        return self._client

    @staticmethod
    def _to_contents(messages: Sequence[PromptMessage]) -> List[Dict]:
        return [
            {"role": "user" if m.role == ROLE_USER else "model", "parts": [{"text": m.content}]}
            for m in messages
        ]

    def _call_model(self, model: str, system_prompt: str, messages: Sequence[PromptMessage]) -> ProviderResult:
        try:
            response = self.client.models.generate_content(
                model=model,
                contents=self._to_contents(messages),
                config={
                    "system_instruction": system_prompt,
                    "temperature": self.settings.ai_temperature,
                    "max_output_tokens": self.settings.ai_max_output_tokens,
                },
            )
        except genai_errors.APIError as e:
            if e.code == RATE_LIMIT_STATUS:
                raise ProviderRateLimited(self.name, f"{model} rate limited", e.code) from e
            if e.code in GEMINI_SKIP_MODEL_STATUS:
                raise ModelUnavailable(self.name, f"{model} unavailable (HTTP {e.code})", e.code) from e
            raise ProviderError(self.name, f"Gemini HTTP {e.code}", e.code) from e
        except Exception as e:
            # Transport failures (timeouts, DNS) surface as httpx errors
            raise ProviderError(self.name, f"{model} request failed: {e}") from e

        text = ""
        if response and getattr(response, "candidates", None):
            candidate = response.candidates[0]
            content = getattr(candidate, "content", None)
            parts = getattr(content, "parts", None) if content is not None else None
            if parts:
                text = (parts[0].text or "").strip()

        return ProviderResult(text=text, provider=self.name, model=model)

    def generate(self, system_prompt: str, messages: Sequence[PromptMessage]) -> ProviderResult:
        for model in self.models:
            try:
                result = self._with_rate_limit_retry(
                    lambda: self._call_model(model, system_prompt, messages)
                )
            except ModelUnavailable as e:
                logger.info(f"Gemini model skipped: {e}")
                continue

            if result.text:
                return result
            logger.info(f"Gemini model {model} returned no content")

        raise ProviderError(self.name, "No Gemini model returned content")


class OpenAICompatibleProvider(LLMProvider):
    """Chat completions over the OpenAI wire format (OpenAI itself and Perplexity)."""

    def __init__(
        self,
        name: str,
        api_key: Optional[str],
        model: str,
        settings: AIConfig,
        base_url: Optional[str] = None,
        client=None,
        sleep: Callable[[float], None] = time.sleep,
    ):
        super().__init__(api_key, settings, sleep)
        self.name = name
        self.model = model
        self.base_url = base_url
        self._client = client

    @property
    def client(self):
        if self._client is None:
            self._client = openai.OpenAI(
                api_key=self.api_key,
                base_url=self.base_url,
                timeout=self.settings.ai_request_timeout,
                # Rate limits are retried here, with a fixed sleep
                max_retries=0,
            )
        return self._client

    def _call(self, system_prompt: str, messages: Sequence[PromptMessage]) -> ProviderResult:
        payload = [{"role": "system", "content": system_prompt}] + [m.to_dict() for m in messages]
        try:
            completion = self.client.chat.completions.create(
                model=self.model,
                messages=payload,
                max_tokens=self.settings.ai_max_output_tokens,
                temperature=self.settings.ai_temperature,
            )
        except openai.RateLimitError as e:
            raise ProviderRateLimited(self.name, "rate limited", RATE_LIMIT_STATUS) from e
        except openai.APIStatusError as e:
            raise ProviderError(self.name, f"HTTP {e.status_code}", e.status_code) from e
        except openai.APIError as e:
            raise ProviderError(self.name, str(e)) from e

        text = ""
        if completion and completion.choices:
            text = (completion.choices[0].message.content or "").strip()
        if not text:
            raise ProviderError(self.name, "empty completion")

        return ProviderResult(text=text, provider=self.name, model=self.model)

    def generate(self, system_prompt: str, messages: Sequence[PromptMessage]) -> ProviderResult:
        return self._with_rate_limit_retry(lambda: self._call(system_prompt, messages))


class ProviderChain:
    """Tries providers in order until one produces text."""

    def __init__(self, providers: Sequence[LLMProvider]):
        self.providers = list(providers)

    @classmethod
    def from_settings(cls, settings: AIConfig, sleep: Callable[[float], None] = time.sleep) -> "ProviderChain":
        by_name = {
            PROVIDER_GEMINI: GeminiProvider(settings.gemini_api_key, settings, sleep=sleep),
            PROVIDER_PERPLEXITY: OpenAICompatibleProvider(
                PROVIDER_PERPLEXITY,
                settings.perplexity_api_key,
                settings.perplexity_model,
                settings,
                base_url=settings.perplexity_base_url,
                sleep=sleep,
            ),
            PROVIDER_OPENAI: OpenAICompatibleProvider(
                PROVIDER_OPENAI,
                settings.openai_api_key,
                settings.openai_model,
                settings,
                sleep=sleep,
            ),
        }
        return cls([by_name[name] for name in PROVIDER_ORDER])

    def configured_providers(self) -> Dict[str, bool]:
        """Which providers have a key configured."""
        return {p.name: p.is_configured for p in self.providers}

    def generate(self, system_prompt: str, messages: Sequence[PromptMessage]) -> ChainResult:
        attempted = []
        for provider in self.providers:
            if not provider.is_configured:
                continue

            attempted.append(provider.name)
            start = time.time()
            try:
                result = provider.generate(system_prompt, messages)
            except ProviderError as e:
                logger.warning(f"Provider {provider.name} failed, trying next: {e}")
                continue

            logger.info(f"Reply from {result.provider} ({result.model}) in {time.time() - start:.3f}s")
            return ChainResult(text=result.text, provider=result.provider, model=result.model, attempted=attempted)

        last_user = next((m.content for m in reversed(messages) if m.role == ROLE_USER), "")
        if attempted:
            logger.error(f"All providers failed ({', '.join(attempted)}), using canned reply")
        else:
            logger.warning("No AI provider configured, using canned reply")
        return ChainResult(text=FALLBACK_REPLY.format(message=last_user), attempted=attempted)


# Global provider chain instance
_provider_chain: Optional[ProviderChain] = None


def initialize_provider_chain() -> ProviderChain:
    """Build the provider chain from configuration."""
    global _provider_chain
    _provider_chain = ProviderChain.from_settings(get_config().ai)
    configured = [name for name, ok in _provider_chain.configured_providers().items() if ok]
    logger.info(f"Provider chain initialized, configured: {', '.join(configured) or 'none'}")
    return _provider_chain


def get_provider_chain() -> ProviderChain:
    """Get the provider chain, building it on first use."""
    if _provider_chain is None:
        return initialize_provider_chain()
    return _provider_chain
