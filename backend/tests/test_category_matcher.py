"""
Tests for routing queries to legal categories.
"""
import pytest

from vidhisahayak.services.catalog import list_categories
from vidhisahayak.services.category_matcher import (
    CategoryMatcher, CategoryRule, NAME_CONFIDENCE, PHRASE_CONFIDENCE, get_category_matcher,
)


@pytest.fixture
def matcher():
    return CategoryMatcher()


@pytest.mark.parametrize("query,slug", [
    ("I need a rent agreement for my flat", "rental"),
    ("How do I draft a rental agreement?", "rental"),
    ("My landlord is not returning the security deposit", "rental"),
    ("Sale deed registration at the sub-registrar office", "land"),
    ("How to register a trademark for my brand name", "ipr"),
    ("Someone copied my blog, how do I send a DMCA takedown?", "copyright"),
    ("Affidavit for name change", "affidavit"),
    ("income certificate for scholarship", "income-declaration"),
    ("Draft an MOU between two startups", "mou"),
    ("Who can be a guarantor for a bail bond?", "surety"),
])
def test_queries_route_to_expected_category(matcher, query, slug):
    match = matcher.match(query)
    assert match is not None
    assert match.slug == slug


def test_multi_word_phrase_reports_phrase_confidence(matcher):
    match = matcher.match("rent agreement")
    assert match.slug == "rental"
    assert match.confidence == PHRASE_CONFIDENCE
    assert "rent agreement" in match.matched_terms


def test_category_name_match(matcher):
    match = matcher.match("Tell me about affidavits")
    assert match.slug == "affidavit"
    assert match.confidence == NAME_CONFIDENCE


def test_matching_is_case_insensitive(matcher):
    assert matcher.match("LEAVE AND LICENSE").slug == "rental"


def test_hyphenated_and_spaced_phrases_both_match(matcher):
    assert matcher.match("appointment at the sub registrar").slug == "land"
    assert matcher.match("appointment at the sub-registrar").slug == "land"


def test_tie_goes_to_earliest_mention(matcher):
    # "rental" and "agreement" are both bare category names
    assert matcher.match("rental agreement").slug == "rental"
    assert matcher.match("agreement about rental").slug == "agreement"


def test_no_match_returns_none(matcher):
    assert matcher.match("What is the weather in Chennai today?") is None


@pytest.mark.parametrize("text", ["", "   ", None])
def test_empty_text_returns_none(matcher, text):
    assert matcher.match(text) is None


def test_words_inside_other_words_do_not_match(matcher):
    # "rent" inside "current" and "parent" is not a rental query
    assert matcher.match("current parent") is None


def test_every_category_has_rules(matcher):
    slugs = {rule.slug for rule in matcher.get_rules()}
    assert slugs == {c.slug for c in list_categories()}


def test_add_rule(matcher):
    matcher.add_rule(CategoryRule(
        pattern=r"\b(bhadekaru)\b", slug="rental", confidence=0.99,
        description="Rental by Marathi transliteration", terms=["bhadekaru"],
    ))
    match = matcher.match("bhadekaru problem")
    assert match.slug == "rental"
    assert match.confidence == 0.99


def test_add_rule_rejects_unknown_category(matcher):
    with pytest.raises(ValueError):
        matcher.add_rule(CategoryRule(pattern=r"\b(x)\b", slug="nope", confidence=0.5, description="x"))


def test_singleton():
    assert get_category_matcher() is get_category_matcher()
