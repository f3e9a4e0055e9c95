"""
Prompt construction for the chat pipeline.

The system prompt is the assistant persona, followed by the static guidance
of the matched category (if any) and a reply-language instruction for
non-English conversations.
"""

import logging
from dataclasses import dataclass
from typing import Dict, List, Optional, Sequence

from vidhisahayak.core.constants import (
    SYSTEM_PROMPT, GUIDANCE_PROMPT, LANGUAGE_PROMPT, ROLE_USER, CHAT_ROLES
)
from vidhisahayak.services.catalog import get_guidance
from vidhisahayak.services.category_matcher import CategoryMatch
from vidhisahayak.services.language import is_english, language_name

logger = logging.getLogger(__name__)


@dataclass
class PromptMessage:
    """A conversation turn sent to a provider."""
    role: str
    content: str

    def to_dict(self) -> Dict[str, str]:
        return {"role": self.role, "content": self.content}


def _join(items: List[str]) -> str:
    return "; ".join(items) if items else "Not specified"


def build_guidance_block(match: CategoryMatch) -> str:
    """Render the guidance checklist for a matched category."""
    guidance = get_guidance(match.slug)
    if guidance is None:
        return ""

    steps = "\n".join(f"{i}. {step}" for i, step in enumerate(guidance.steps, start=1))
    return GUIDANCE_PROMPT.format(
        category_name=match.name,
        where_to_get=_join(guidance.where_to_get),
        type_required=_join(guidance.type_required),
        verification_contacts=_join(guidance.verification_contacts),
        submission_offices=_join(guidance.submission_offices),
        print_guidance=_join(guidance.print_guidance),
        steps=steps,
    ).strip()


def build_system_prompt(language: str, match: Optional[CategoryMatch] = None) -> str:
    """Build the system instruction for a chat turn."""
    parts = [SYSTEM_PROMPT]

    if match is not None:
        block = build_guidance_block(match)
        if block:
            parts.append(block)

    if not is_english(language):
        parts.append(LANGUAGE_PROMPT.format(language_name=language_name(language)))

    return "\n\n".join(parts)


def build_messages(history: Sequence[PromptMessage], user_text: str) -> List[PromptMessage]:
    """
    Chronological conversation ending with the current user turn.

    History already holding the current turn (it is stored before the
    providers are called) is not extended again. Unknown roles are dropped.
    """
    messages = [PromptMessage(m.role, m.content) for m in history if m.role in CHAT_ROLES and m.content]

    if not messages or messages[-1].role != ROLE_USER or messages[-1].content != user_text:
        messages.append(PromptMessage(ROLE_USER, user_text))

    return messages
