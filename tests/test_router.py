"""
Tests for the HTTP layer (JSON and form endpoints).
"""

from __future__ import annotations

import pytest
from fastapi import FastAPI
from fastapi.testclient import TestClient

from trustcheck.article_checker.router import create_router
from trustcheck.core.schemas import ArticleConflicts, ArticleFairness, Conflict, FairnessIssue

from conftest import ARTICLE_URL


@pytest.fixture
def make_client():
    def _make(llm):
        app = FastAPI()
        app.include_router(create_router(lambda: llm))
        return TestClient(app)

    return _make


def test_json_endpoint_returns_request_state(fake_llm, fixed_content, make_client):
    fixed_content("Body text.")
    client = make_client(fake_llm)

    r = client.post("/article-trust-check", json={"url": ARTICLE_URL})

    assert r.status_code == 200
    data = r.json()
    assert data["url"] == ARTICLE_URL
    assert data["article"]["title"] == "Council approves budget"
    assert set(data["result"]) == {
        "TruthAndAccuracy", "Independence", "FairnessAndImpartiality", "Accountability",
        "HarmMinimization", "Attribution", "OriginalReporting",
    }
    assert data["trustLevel"] == {
        "TrustLevel": "Medium",
        "TrustDescription": "The article is somewhat trustworthy.",
    }
    assert data["aspects"]["Independence"]["label"] == "Independence"


def test_form_endpoint_reads_url_field(fake_llm, fixed_content, make_client):
    fetched = fixed_content("Body text.")
    client = make_client(fake_llm)

    r = client.post("/article-trust-check/form", data={"url": ARTICLE_URL})

    assert r.status_code == 200
    assert fetched == [ARTICLE_URL]


def test_invalid_url_returns_state_with_error(fake_llm, fixed_content, make_client):
    fixed_content("Body text.")
    client = make_client(fake_llm)

    r = client.post("/article-trust-check", json={"url": "not a url"})

    assert r.status_code == 400
    data = r.json()
    assert data["error"].startswith("Invalid URL")
    assert data["url"] == "not a url"
    assert data["article"] is None
    assert all(items == [] for items in data["result"].values())
    assert data["trustLevel"] == {"TrustLevel": None, "TrustDescription": None}


def test_unloadable_article_returns_degraded_state(fake_llm, fixed_content, make_client):
    fixed_content("")
    client = make_client(fake_llm)

    r = client.post("/article-trust-check", json={"url": ARTICLE_URL})

    assert r.status_code == 400
    data = r.json()
    assert data["error"] == "Failed to load article"
    assert data["url"] == ARTICLE_URL
    assert len(data["result"]) == 7
    assert all(items == [] for items in data["result"].values())
    assert {summary["status"] for summary in data["aspects"].values()} == {"degraded"}
    assert data["trustLevel"] == {"TrustLevel": None, "TrustDescription": None}


def test_search_filters_result_rows(make_llm, fixed_content, make_client):
    fixed_content("Body text.")
    llm = make_llm(
        ArticleConflicts=ArticleConflicts(conflicts=[Conflict(title="Sponsor", source="Acme", description="Paid")]),
        ArticleFairness=ArticleFairness(fairness=[FairnessIssue(title="One-sided", source="Editorial", description="x")]),
    )
    client = make_client(llm)

    r = client.post("/article-trust-check", json={"url": ARTICLE_URL, "search": "acme"})

    result = r.json()["result"]
    assert [item["Title"] for item in result["Independence"]] == ["Sponsor"]
    assert result["FairnessAndImpartiality"] == []


def test_missing_chat_model_is_service_unavailable(fixed_content, make_client):
    fixed_content("Body text.")
    client = make_client(None)

    r = client.post("/article-trust-check", json={"url": ARTICLE_URL})

    assert r.status_code == 503


def test_root_reports_running():
    from trustcheck import main

    r = TestClient(main.app).get("/")
    assert r.status_code == 200
    assert "running" in r.json()["message"]
