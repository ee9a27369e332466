"""
Tests for the page context API routes.
"""

import pytest
from pathlib import Path
import sys

sys.path.insert(0, str(Path(__file__).parent.parent.parent / "app"))

from fastapi import FastAPI
from fastapi.testclient import TestClient

from page_context.api import router
from page_context.resolver import ContextResolver
from page_context.settings import get_resolver


@pytest.fixture
def resolver(make_instructions, sample_instruction_set):
    return ContextResolver(instructions_dir=make_instructions(sample_instruction_set))


@pytest.fixture
def client(resolver):
    app = FastAPI()
    app.include_router(router)
    app.dependency_overrides[get_resolver] = lambda: resolver
    return TestClient(app)


class TestResolveEndpoint:

    def test_resolves_context(self, client):
        response = client.get("/api/page-context", params={"url": "https://example.com/seo"})

        assert response.status_code == 200
        data = response.json()
        assert data["url"] == "https://example.com/seo"
        assert "SEO section" in data["context"]
        assert data["formatted"].startswith("## Page Context")

    def test_absent_context(self, client):
        response = client.get("/api/page-context", params={"url": "https://unrelated.org/"})

        assert response.status_code == 200
        assert response.json() == {"url": "https://unrelated.org/", "context": None, "formatted": None}

    def test_url_required(self, client):
        assert client.get("/api/page-context").status_code == 422


class TestOtherEndpoints:

    def test_format(self, client):
        response = client.post(
            "/api/page-context/format",
            json={"instructions": "Be careful", "url": "https://example.com/"}
        )

        assert response.status_code == 200
        assert "Be careful" in response.json()["prompt"]

    def test_clear_cache(self, client, resolver):
        resolver.resolve("https://example.com/seo")

        response = client.post("/api/page-context/cache/clear")

        assert response.json() == {"cleared": True}
        assert len(resolver.cache) == 0

    def test_stats(self, client):
        client.get("/api/page-context", params={"url": "https://example.com/seo"})
        client.get("/api/page-context", params={"url": "https://example.com/seo"})

        stats = client.get("/api/page-context/stats").json()

        assert stats["hits"] == 1
        assert stats["entries"] == 1

    def test_instruction_sets(self, client):
        response = client.get("/api/page-context/instruction-sets")

        assert response.json() == {"instruction_sets": {"app": ["example.com", "*.example.com"]}}
