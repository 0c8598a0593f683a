import os
import json
import asyncio
import logging
from typing import Type

from pydantic import BaseModel, ValidationError

from trustcheck.article_checker.aspects import AspectOutcome, AspectSpec
from trustcheck.core.errors import ClassificationError, ExtractionError
from trustcheck.core.llm_chains import (
    EXTRACTION_SYSTEM_PROMPT,
    METADATA_SYSTEM_PROMPT,
    TRUST_SYSTEM_PROMPT,
    build_prompt,
)
from trustcheck.core.schemas import AnalysisResult, NewsArticle, TrustResult


def _llm_call_timeout() -> float:
    return float(os.environ.get("LLM_CALL_TIMEOUT", "120"))


def build_structured_chain(llm, system_prompt: str, schema: Type[BaseModel], name: str):
    """LLM chain: fixed system prompt + one human turn, answered as ``schema``."""
    structured_llm = llm.with_structured_output(schema, method="function_calling")
    return build_prompt(system_prompt) | structured_llm.with_config(run_name=name)


async def _invoke_structured(chain, schema: Type[BaseModel], text: str) -> BaseModel:
    result = await asyncio.wait_for(chain.ainvoke({"text": text}), timeout=_llm_call_timeout())
    if isinstance(result, schema):
        return result
    return schema.model_validate(result)


async def extract_article_metadata(llm, article_text: str) -> NewsArticle:
    chain = build_structured_chain(llm, METADATA_SYSTEM_PROMPT, NewsArticle, "news-article")
    try:
        return await _invoke_structured(chain, NewsArticle, article_text)
    except asyncio.TimeoutError as e:
        raise ExtractionError("Article metadata extraction timed out") from e
    except ValidationError as e:
        raise ExtractionError(f"Article metadata did not match its schema: {e}") from e
    except Exception as e:
        raise ExtractionError(f"Article metadata extraction failed: {e}") from e


async def extract_aspect(llm, spec: AspectSpec, article_text: str) -> AspectOutcome:
    """Run one aspect extraction. Never raises; failures come back as a degraded outcome."""
    logging.info(f"{spec.activity}...")
    chain = build_structured_chain(llm, EXTRACTION_SYSTEM_PROMPT, spec.schema, spec.name)
    try:
        parsed = await _invoke_structured(chain, spec.schema, article_text)
    except asyncio.TimeoutError:
        logging.error(f"❌ {spec.label}: extraction timed out")
        return AspectOutcome.degraded(spec, "timeout")
    except Exception as e:
        logging.error(f"❌ {spec.label}: extraction failed -> {type(e).__name__}: {e}")
        return AspectOutcome.degraded(spec, f"{type(e).__name__}: {e}")

    outcome = AspectOutcome.ok(spec, parsed)
    logging.info(f"✅ {spec.label}: {len(outcome.issues)} issue(s) extracted")
    return outcome


async def classify_trust_level(llm, result: AnalysisResult) -> TrustResult:
    chain = build_structured_chain(llm, TRUST_SYSTEM_PROMPT, TrustResult, "news-article-trust-level")
    payload = json.dumps(result.model_dump(by_alias=True), ensure_ascii=False, sort_keys=True)
    try:
        return await _invoke_structured(chain, TrustResult, payload)
    except asyncio.TimeoutError as e:
        raise ClassificationError("Trust level classification timed out") from e
    except Exception as e:
        raise ClassificationError(f"Trust level classification failed: {e}") from e
