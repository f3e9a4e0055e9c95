"""
Category Matcher Module for VidhiSahayak.

Routes free-text and voice queries to one of the legal document categories
so the matching guidance can be injected into the prompt.
"""

import logging
import re
from dataclasses import dataclass, field
from typing import List, Optional

from vidhisahayak.services.catalog import Category, list_categories

logger = logging.getLogger(__name__)

# Multi-word phrases ("rent agreement") outrank bare category names ("agreement")
PHRASE_CONFIDENCE = 0.95
NAME_CONFIDENCE = 0.9
KEYWORD_CONFIDENCE = 0.7


@dataclass
class CategoryRule:
    """Rule for matching queries to a category."""
    pattern: str
    slug: str
    confidence: float
    description: str
    terms: List[str] = field(default_factory=list)


@dataclass
class CategoryMatch:
    """Best category for a query."""
    slug: str
    name: str
    confidence: float
    matched_terms: List[str] = field(default_factory=list)


def _phrase_pattern(phrases: List[str]) -> str:
    """Whole-word alternation of literal phrases; inner spaces match any whitespace or hyphen."""
    parts = []
    # Longest first so "rent agreement" wins over "rent"
    for phrase in sorted(phrases, key=len, reverse=True):
        words = [re.escape(w) for w in re.split(r"[\s-]+", phrase.strip()) if w]
        parts.append(r"[\s-]+".join(words))
    # Plurals ("tenants", "deeds") count as hits
    return r"\b(" + "|".join(parts) + r")s?\b"


class CategoryMatcher:
    """Matches queries to legal categories."""

    def __init__(self, categories: Optional[List[Category]] = None):
        """Initialize the category matcher."""
        self.categories = categories if categories is not None else list_categories()
        self._order = {c.slug: i for i, c in enumerate(self.categories)}
        self._names = {c.slug: c.name for c in self.categories}
        self.rules: List[CategoryRule] = []
        self._load_rules()

    def _load_rules(self) -> None:
        """Build matching rules from the category catalog."""
        for category in self.categories:
            name_terms = sorted({category.name.lower(), category.slug.replace("-", " ")})
            self.rules.append(
                CategoryRule(
                    pattern=_phrase_pattern(name_terms),
                    slug=category.slug,
                    confidence=NAME_CONFIDENCE,
                    description=f"{category.name} by name",
                    terms=name_terms,
                )
            )
            phrases = [k for k in category.keywords if len(re.split(r"[\s-]+", k.strip())) > 1]
            words = [k for k in category.keywords if k not in phrases]
            for terms, confidence, kind in ((phrases, PHRASE_CONFIDENCE, "phrase"), (words, KEYWORD_CONFIDENCE, "keyword")):
                if not terms:
                    continue
                self.rules.append(
                    CategoryRule(
                        pattern=_phrase_pattern(terms),
                        slug=category.slug,
                        confidence=confidence,
                        description=f"{category.name} by {kind}",
                        terms=terms,
                    )
                )

        logger.info(f"Loaded {len(self.rules)} category rules")

    def match(self, text: str) -> Optional[CategoryMatch]:
        """Return the best matching category for the text, or None."""
        if not text or not text.strip():
            return None

        # slug -> [best confidence, summed score, distinct terms, first position]
        scores = {}
        for rule in self.rules:
            for m in re.finditer(rule.pattern, text, re.IGNORECASE):
                term = m.group(1).lower()
                entry = scores.setdefault(rule.slug, [0.0, 0.0, set(), m.start()])
                entry[0] = max(entry[0], rule.confidence)
                if term not in entry[2]:
                    entry[1] += rule.confidence
                    entry[2].add(term)
                entry[3] = min(entry[3], m.start())

        if not scores:
            logger.info("No category matched the query")
            return None

        best_slug = min(
            scores,
            key=lambda slug: (-scores[slug][1], scores[slug][3], self._order[slug]),
        )
        confidence, _, terms, _ = scores[best_slug]

        logger.info(f"Matched query to category '{best_slug}' with confidence {confidence}")
        return CategoryMatch(
            slug=best_slug,
            name=self._names[best_slug],
            confidence=confidence,
            matched_terms=sorted(terms),
        )

    def get_rules(self) -> List[CategoryRule]:
        """Get all matching rules."""
        return self.rules.copy()

    def add_rule(self, rule: CategoryRule) -> None:
        """Add a new matching rule."""
        if rule.slug not in self._order:
            raise ValueError(f"Unknown category: {rule.slug}")
        self.rules.append(rule)
        logger.info(f"Added category rule: {rule.description}")


# Global category matcher instance
_category_matcher: Optional[CategoryMatcher] = None


def get_category_matcher() -> CategoryMatcher:
    """Get the global category matcher instance."""
    global _category_matcher
    if _category_matcher is None:
        _category_matcher = CategoryMatcher()
    return _category_matcher
