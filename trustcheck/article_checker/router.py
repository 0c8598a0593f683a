import logging
from typing import Callable, Optional

from fastapi import APIRouter, Form, HTTPException
from fastapi.responses import JSONResponse
from pydantic import BaseModel

from trustcheck.article_checker.aggregator import filter_analysis_result
from trustcheck.article_checker.article_trust_checker import run_article_trust_check


class ArticleTrustCheckRequest(BaseModel):
    url: str
    search: Optional[str] = None


def create_router(get_llm: Callable[[], object]) -> APIRouter:
    router = APIRouter()

    async def _check(url: str, search: Optional[str]):
        llm = get_llm()
        if llm is None:
            raise HTTPException(status_code=503, detail="Server is not ready yet: the chat model is not configured.")

        try:
            state = await run_article_trust_check(url, llm)
        except Exception as e:
            logging.error(f"Article trust check failed unexpectedly: {e}", exc_info=True)
            raise HTTPException(status_code=500, detail=f"Internal server error: {e}")

        if state.error:
            # the degraded state is still the response body
            return JSONResponse(status_code=400, content=state.model_dump(by_alias=True))
        if search and state.result is not None:
            state.result = filter_analysis_result(state.result, search)
        return state.model_dump(by_alias=True)

    @router.post("/article-trust-check")
    async def article_trust_check_endpoint(req: ArticleTrustCheckRequest):
        return await _check(req.url, req.search)

    @router.post("/article-trust-check/form")
    async def article_trust_check_form_endpoint(url: str = Form(...), search: Optional[str] = Form(None)):
        return await _check(url, search)

    return router
