"""
Chat pipeline for VidhiSahayak.

A chat turn resolves the reply language, matches the message to a legal
category, builds the prompt with that category's guidance and runs the
provider chain. Sessions and messages are stored when a database is
configured; otherwise the turn runs stateless.
"""

import logging
import time
from typing import List, Optional, Tuple

from sqlalchemy.orm import Session

from vidhisahayak.core.config import get_config
from vidhisahayak.core.security import SecureLogger
from vidhisahayak.core.constants import (
    ROLE_USER, ROLE_ASSISTANT, PROMPT_LOG_CHARS, PROVIDER_GEMINI, PROVIDER_PERPLEXITY, PROVIDER_OPENAI
)
from vidhisahayak.models.user import User
from vidhisahayak.schemas import ChatReply, ProvidersConfigured, CategoryMatchResponse
from vidhisahayak.services.category_matcher import CategoryMatcher, get_category_matcher
from vidhisahayak.services.chat_session_service import ChatSessionService
from vidhisahayak.services.language import resolve_language
from vidhisahayak.services.llm_providers import ProviderChain, get_provider_chain
from vidhisahayak.services.prompt_builder import PromptMessage, build_messages, build_system_prompt

logger = logging.getLogger(__name__)


class ChatService:
    """Runs one chat turn end to end."""

    def __init__(
        self,
        db: Optional[Session] = None,
        chain: Optional[ProviderChain] = None,
        matcher: Optional[CategoryMatcher] = None,
        history_limit: Optional[int] = None,
    ):
        self.db = db
        self.chain = chain or get_provider_chain()
        self.matcher = matcher or get_category_matcher()
        self.history_limit = history_limit or get_config().ai.chat_history_limit

    def _record_user_turn(
        self, message: str, session_id: Optional[str], user: Optional[User], language: str
    ) -> Tuple[Optional[str], List[PromptMessage]]:
        """Store the user message and load recent history. Returns (None, []) when stateless."""
        if self.db is None:
            return None, []

        try:
            sessions = ChatSessionService(self.db)
            session = sessions.get_or_create_session(session_id, user, message)
            sessions.append_message(session.id, ROLE_USER, message, language=language)
            history = sessions.recent_messages(session.id, self.history_limit)
            return session.id, history
        except Exception as e:
            logger.error(f"Chat persistence failed, continuing stateless: {e}")
            return None, []

    def _record_reply(self, session_id: Optional[str], reply: str, language: str, provider: str) -> None:
        if self.db is None or session_id is None:
            return
        try:
            ChatSessionService(self.db).append_message(
                session_id, ROLE_ASSISTANT, reply, language=language, provider=provider
            )
        except Exception as e:
            logger.error(f"Failed to store assistant reply for session {session_id}: {e}")

    def handle(
        self,
        message: str,
        session_id: Optional[str] = None,
        lang: Optional[str] = None,
        user: Optional[User] = None,
    ) -> ChatReply:
        """Answer a user message, optionally continuing a stored session."""
        start = time.time()
        text = message.strip()
        logger.info(f"Chat turn: {SecureLogger.sanitize_log_message(text[:PROMPT_LOG_CHARS])!r}")

        language = resolve_language(text, lang)
        stored_session_id, history = self._record_user_turn(text, session_id, user, language)

        match = self.matcher.match(text)
        system_prompt = build_system_prompt(language, match)
        messages = build_messages(history, text)

        result = self.chain.generate(system_prompt, messages)
        self._record_reply(stored_session_id, result.text, language, result.provider)

        flags = self.chain.configured_providers()
        logger.info(
            f"Chat turn answered by {result.provider} in {time.time() - start:.3f}s "
            f"(lang={language}, category={match.slug if match else None})"
        )

        return ChatReply(
            reply=result.text,
            session_id=stored_session_id,
            providers=ProvidersConfigured(
                gemini=flags.get(PROVIDER_GEMINI, False),
                perplexity=flags.get(PROVIDER_PERPLEXITY, False),
                openai=flags.get(PROVIDER_OPENAI, False),
            ),
            provider_used=result.provider,
            model_used=result.model,
            detected_lang=language,
            category=CategoryMatchResponse(
                slug=match.slug,
                name=match.name,
                confidence=match.confidence,
                matched_terms=match.matched_terms,
            ) if match else None,
        )
