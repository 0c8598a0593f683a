"""High-level article trust-check pipeline.

fetch content -> extract article metadata -> seven aspect extractions in
parallel -> normalize into an AnalysisResult -> classify the trust level.

``run_article_trust_check`` never raises. Every failure degrades to an empty
or absent field of the returned RequestState; the conditions that make the
rest of the pipeline pointless (invalid URL, no content) are reported in
``RequestState.error``.
"""

import logging

from trustcheck.article_checker.aggregator import (
    build_analysis_result,
    run_aspect_extractors,
    summarize_aspects,
)
from trustcheck.article_checker.aspects import ASPECTS, AspectOutcome
from trustcheck.article_checker.chains import classify_trust_level, extract_article_metadata
from trustcheck.core.errors import ClassificationError, ExtractionError, InvalidInput
from trustcheck.core.lambdas import get_content_as_markdown, validate_url
from trustcheck.core.llm_chains import get_chat_llm
from trustcheck.core.schemas import RequestState, TrustLevelResult


def _unanalyzed_state(url: str, reason: str, error: str) -> RequestState:
    outcomes = [AspectOutcome.degraded(spec, reason) for spec in ASPECTS]
    return RequestState(
        url=url,
        result=build_analysis_result(outcomes),
        aspects=summarize_aspects(outcomes),
        trust_level=TrustLevelResult(),
        error=error,
    )


async def run_article_trust_check(url: str, llm=None) -> RequestState:
    logging.info(f"Article analysis started: {url}")

    # 1) Validate before any network call
    try:
        url = validate_url(url)
    except InvalidInput as e:
        logging.warning(f"⚠️ {e}")
        return _unanalyzed_state(url or "", "invalid url", str(e))

    # 2) Fetch article body
    content = await get_content_as_markdown(url)
    if not content.strip():
        logging.warning(f"⚠️ No article content for {url}; skipping LLM analysis")
        return _unanalyzed_state(url, "no article content", "Failed to load article")

    if llm is None:
        try:
            llm = get_chat_llm()
        except Exception as e:
            logging.exception(f"Chat model could not be built: {e}")
            return _unanalyzed_state(url, "chat model unavailable", "Analysis service unavailable")

    # 3) Article metadata
    article = None
    try:
        article = await extract_article_metadata(llm, content)
        logging.info(f"Article metadata extracted: '{article.title}'")
    except ExtractionError as e:
        logging.error(f"❌ {e}")

    # 4) Seven aspects in parallel, then normalize
    outcomes = await run_aspect_extractors(llm, content)
    result = build_analysis_result(outcomes)

    # 5) Trust level from the complete result
    trust_level = TrustLevelResult()
    try:
        trust = await classify_trust_level(llm, result)
        trust_level = TrustLevelResult(
            trust_level=trust.trust_level,
            trust_description=trust.trust_description or "",
        )
        logging.info(f"Trust level extracted: {trust.trust_level}")
    except ClassificationError as e:
        logging.error(f"❌ Error extracting trust level: {e}")

    logging.info(f"Article analysis done: {url}")
    return RequestState(
        url=url,
        article=article,
        result=result,
        trust_level=trust_level,
        aspects=summarize_aspects(outcomes),
    )
