"""
Tests for site search.
"""
from vidhisahayak.services.catalog import list_categories
from vidhisahayak.services.search_service import search, search_categories


def test_empty_query_lists_every_category():
    hits = search_categories("")
    assert [h.slug for h in hits] == [c.slug for c in list_categories()]


def test_name_match_with_first_step_as_snippet():
    hits = search_categories("rental")
    assert hits[0].slug == "rental"
    assert hits[0].snippet == "Draft agreement"


def test_guidance_text_match():
    slugs = [h.slug for h in search_categories("encumbrance")]
    assert slugs == ["land"]


def test_slug_match():
    assert [h.slug for h in search_categories("income-declaration")] == ["income-declaration"]


def test_no_match():
    assert search_categories("zzzz") == []


def test_search_includes_lawyers():
    result = search("Property")
    assert [l.id for l in result.lawyers] == ["l1"]
    assert result.query == "Property"


def test_search_endpoint(client):
    response = client.get("/api/v1/search", params={"q": "notary"})
    assert response.status_code == 200

    data = response.json()["data"]
    slugs = [hit["slug"] for hit in data["categories"]]
    assert "affidavit" in slugs
    assert "rental" in slugs
    assert data["lawyers"] == []
