"""
Tests for system prompt and message construction.
"""
from vidhisahayak.core.constants import SYSTEM_PROMPT
from vidhisahayak.services.category_matcher import CategoryMatch
from vidhisahayak.services.prompt_builder import (
    PromptMessage, build_guidance_block, build_messages, build_system_prompt,
)

RENTAL = CategoryMatch(slug="rental", name="Rental", confidence=0.95, matched_terms=["rent agreement"])


def test_english_prompt_without_category_is_the_base_persona():
    assert build_system_prompt("en-IN") == SYSTEM_PROMPT


def test_guidance_block_lists_checklist_and_numbered_steps():
    block = build_guidance_block(RENTAL)
    assert "Rental" in block
    assert "Owner and tenant KYC; Property details, rent, tenure" in block
    assert "Notary public; Lawyer" in block
    assert "1. Draft agreement" in block
    assert "4. Share copies with parties" in block


def test_guidance_block_for_unknown_slug_is_empty():
    assert build_guidance_block(CategoryMatch(slug="unknown", name="Unknown", confidence=0.5)) == ""


def test_matched_category_adds_guidance():
    prompt = build_system_prompt("en-IN", RENTAL)
    assert prompt.startswith(SYSTEM_PROMPT)
    assert "RELEVANT CATEGORY: Rental" in prompt
    assert "Reply entirely in" not in prompt


def test_non_english_adds_language_instruction():
    prompt = build_system_prompt("te-IN", RENTAL)
    assert prompt.endswith(
        "Reply entirely in Telugu, using its native script, even if the question was written in another language."
    )


def test_messages_end_with_current_turn():
    history = [PromptMessage("user", "hi"), PromptMessage("assistant", "Hello! How can I help?")]
    messages = build_messages(history, "rent agreement")
    assert [m.role for m in messages] == ["user", "assistant", "user"]
    assert messages[-1].content == "rent agreement"


def test_current_turn_already_in_history_is_not_repeated():
    history = [PromptMessage("user", "hi"), PromptMessage("assistant", "Hello"), PromptMessage("user", "rent agreement")]
    messages = build_messages(history, "rent agreement")
    assert len(messages) == 3


def test_unknown_roles_and_empty_messages_are_dropped():
    history = [PromptMessage("system", "ignore me"), PromptMessage("assistant", ""), PromptMessage("user", "hello")]
    messages = build_messages(history, "next")
    assert [m.to_dict() for m in messages] == [
        {"role": "user", "content": "hello"},
        {"role": "user", "content": "next"},
    ]


def test_stateless_turn_is_a_single_message():
    assert [m.to_dict() for m in build_messages([], "affidavit")] == [{"role": "user", "content": "affidavit"}]
