import asyncio
import logging
from typing import Dict, Iterable, List

from trustcheck.article_checker.aspects import ASPECTS, AspectOutcome
from trustcheck.article_checker.chains import extract_aspect
from trustcheck.core.schemas import AnalysisResult, AspectSummary, ResultItem


async def run_aspect_extractors(llm, article_text: str) -> List[AspectOutcome]:
    """Run all seven aspect extractors concurrently and wait until every one has settled."""
    gathered = await asyncio.gather(
        *[extract_aspect(llm, spec, article_text) for spec in ASPECTS],
        return_exceptions=True,
    )

    outcomes: List[AspectOutcome] = []
    for spec, res in zip(ASPECTS, gathered):
        if isinstance(res, BaseException):
            # extract_aspect absorbs its own errors, so this is only reached on cancellation
            logging.error(f"🛑 {spec.label}: unexpected failure -> {type(res).__name__}: {res}")
            outcomes.append(AspectOutcome.degraded(spec, f"{type(res).__name__}: {res}"))
        else:
            outcomes.append(res)

    degraded = [o.spec.label for o in outcomes if o.is_degraded]
    if degraded:
        logging.warning(f"⚠️ Degraded aspects: {', '.join(degraded)}")
    return outcomes


def build_analysis_result(outcomes: Iterable[AspectOutcome]) -> AnalysisResult:
    items: Dict[str, List[ResultItem]] = {spec.key: [] for spec in ASPECTS}
    for outcome in outcomes:
        items[outcome.spec.key] = [outcome.spec.normalize(issue) for issue in outcome.issues]
    return AnalysisResult(**items)


def summarize_aspects(outcomes: Iterable[AspectOutcome]) -> Dict[str, AspectSummary]:
    return {
        o.spec.key: AspectSummary(label=o.spec.label, conclusion=o.conclusion, status=o.status, error=o.error)
        for o in outcomes
    }


def filter_analysis_result(result: AnalysisResult, search: str) -> AnalysisResult:
    """Keep only items whose title or source contains ``search`` (case-insensitive)."""
    term = (search or "").strip().lower()
    if not term:
        return result
    filtered = {
        spec.key: [
            item for item in result.items_for(spec.key)
            if term in item.title.lower() or term in item.source.lower()
        ]
        for spec in ASPECTS
    }
    return AnalysisResult(**filtered)
