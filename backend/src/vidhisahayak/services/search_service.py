"""
Site search over categories, their guidance and the lawyer directory.
"""

import logging
from typing import List

from vidhisahayak.schemas import CategorySearchHit, SearchResponse
from vidhisahayak.services.catalog import get_guidance, list_categories
from vidhisahayak.services.lawyer_service import filter_sample

logger = logging.getLogger(__name__)

DEFAULT_SNIPPET = "Guidance and templates"


def _snippet(slug: str) -> str:
    guidance = get_guidance(slug)
    if guidance is None:
        return DEFAULT_SNIPPET
    for section in (guidance.steps, guidance.where_to_get, guidance.type_required):
        if section:
            return section[0]
    return DEFAULT_SNIPPET


def search_categories(query: str) -> List[CategorySearchHit]:
    """Categories whose name or slug contains the query, else whose guidance does. Empty query lists all."""
    needle = (query or "").strip().lower()
    hits = []
    for category in list_categories():
        matched = not needle or needle in f"{category.name} {category.slug}".lower()
        if not matched:
            guidance = get_guidance(category.slug)
            matched = guidance is not None and needle in guidance.as_text().lower()
        if matched:
            hits.append(CategorySearchHit(slug=category.slug, name=category.name, snippet=_snippet(category.slug)))
    return hits


def search(query: str) -> SearchResponse:
    hits = search_categories(query)
    lawyers = filter_sample(query)
    logger.info(f"Search '{query}': {len(hits)} categories, {len(lawyers)} lawyers")
    return SearchResponse(query=query or "", categories=hits, lawyers=lawyers)
