"""
Tests for category endpoints and the health check.
"""
CATEGORIES_URL = "/api/v1/categories"


def test_list_categories(client):
    response = client.get(CATEGORIES_URL)
    assert response.status_code == 200

    data = response.json()["data"]
    assert len(data) == 12
    assert data[0]["slug"] == "land"
    assert {"slug", "name", "image", "create_hint"} <= set(data[0])


def test_category_detail_with_guidance(client):
    data = client.get(f"{CATEGORIES_URL}/rental").json()["data"]
    assert data["name"] == "Rental"
    assert data["guidance"]["verification_contacts"] == ["Notary public", "Lawyer"]
    assert data["guidance"]["steps"][-1] == "Share copies with parties"


def test_unknown_category(client):
    response = client.get(f"{CATEGORIES_URL}/parking-ticket")
    assert response.status_code == 404
    assert response.json()["success"] == 0


def test_match(client):
    data = client.post(f"{CATEGORIES_URL}/match", json={"query": "leave and license for my flat"}).json()["data"]
    assert data["slug"] == "rental"
    assert data["confidence"] > 0.5


def test_match_nothing(client):
    response = client.post(f"{CATEGORIES_URL}/match", json={"query": "weather today"})
    assert response.status_code == 200
    assert response.json()["data"] is None


def test_match_requires_query(client):
    assert client.post(f"{CATEGORIES_URL}/match", json={"query": ""}).status_code == 422


def test_health(client):
    for path in ("/health", "/api/v1/health"):
        data = client.get(path).json()["data"]
        assert data["status"] == "healthy"
        assert data["persistence"] is True
        assert set(data["providers"]) == {"gemini", "perplexity", "openai"}
