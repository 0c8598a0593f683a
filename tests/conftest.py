"""
Pytest fixtures for the trust-check pipeline.

FakeChatModel stands in for the Azure chat model: ``with_structured_output``
returns a real langchain ``RunnableLambda`` so prompts are rendered exactly as
in production, and every call is recorded as (schema name, human text).
"""

from __future__ import annotations

import threading

import pytest
from langchain_core.runnables import RunnableLambda

from trustcheck.article_checker.aspects import ASPECTS
from trustcheck.core.schemas import (
    ArticleAccountabilities,
    ArticleAttributions,
    ArticleClaims,
    ArticleConflicts,
    ArticleFairness,
    ArticleHarmMinimizations,
    ArticleOriginalReporting,
    NewsArticle,
    TrustResult,
)

ARTICLE_URL = "https://example.com/a1"

ASPECTS_BY_KEY = {spec.key: spec for spec in ASPECTS}

ASPECT_SCHEMAS = (
    ArticleClaims,
    ArticleConflicts,
    ArticleFairness,
    ArticleAccountabilities,
    ArticleHarmMinimizations,
    ArticleAttributions,
    ArticleOriginalReporting,
)


class FakeChatModel:
    def __init__(self, responses: dict):
        self.responses = dict(responses)
        self.calls: list[tuple[str, str]] = []
        self._lock = threading.Lock()

    def with_structured_output(self, schema, **kwargs):
        def respond(prompt_value):
            human = prompt_value.to_messages()[-1].content
            with self._lock:
                self.calls.append((schema.__name__, human))
            response = self.responses[schema.__name__]
            if isinstance(response, BaseException):
                raise response
            if callable(response) and not isinstance(response, type):
                return response(human)
            return response

        return RunnableLambda(respond)

    def calls_for(self, schema) -> list[str]:
        return [text for name, text in self.calls if name == schema.__name__]


def empty_aspect(schema):
    """An aspect container with no issues and conclusion 'ok'."""
    field = next(name for name in schema.model_fields if name != "conclusion")
    return schema(**{field: [], "conclusion": "ok"})


def default_responses() -> dict:
    responses = {schema.__name__: empty_aspect(schema) for schema in ASPECT_SCHEMAS}
    responses[NewsArticle.__name__] = NewsArticle(
        title="Council approves budget", url=ARTICLE_URL, body="Body text.", author="A. Writer"
    )
    responses[TrustResult.__name__] = TrustResult(
        trust_level="Medium", trust_description="The article is somewhat trustworthy."
    )
    return responses


@pytest.fixture
def make_llm():
    """Factory: make_llm(**overrides) where overrides are keyed by schema class name."""

    def _make(**overrides):
        responses = default_responses()
        responses.update(overrides)
        return FakeChatModel(responses)

    return _make


@pytest.fixture
def fake_llm(make_llm):
    return make_llm()


@pytest.fixture
def fixed_content(monkeypatch):
    """Replace the content fetcher used by the pipeline with a canned markdown body."""
    from trustcheck.article_checker import article_trust_checker

    fetched: list[str] = []

    def _install(text: str = "Body text."):
        async def fake_get_content(url):
            fetched.append(url)
            return text

        monkeypatch.setattr(article_trust_checker, "get_content_as_markdown", fake_get_content)
        return fetched

    return _install
