from __future__ import annotations

import logging
from typing import Any

from fastapi import APIRouter, Request, Response
from fastapi.responses import JSONResponse

from ..middleware.auth import AuthError, verify_bearer_token
from ..schemas import SearchRequest


logger = logging.getLogger(__name__)

SEARCH_PATH = "/functions/v1/search-papers"
CORS_HEADERS = {
    "Access-Control-Allow-Origin": "*",
    "Access-Control-Allow-Headers": "authorization, x-client-info, apikey, content-type",
}


router = APIRouter(tags=["search"])


def _json(content: Any, status_code: int = 200) -> JSONResponse:
    return JSONResponse(content=content, status_code=status_code, headers=CORS_HEADERS)


@router.options(SEARCH_PATH)
async def search_preflight() -> Response:
    return Response(status_code=200, headers=CORS_HEADERS)


@router.post(SEARCH_PATH)
async def search_papers(request: Request) -> JSONResponse:
    try:
        verify_bearer_token(request, request.app.state.settings)
    except AuthError as exc:
        return _json({"error": "Unauthorized", "details": str(exc)}, status_code=401)

    try:
        payload = SearchRequest.model_validate(await request.json())

        if payload.search_type == "trends":
            trends = await request.app.state.trends_client.fetch()
            return _json({"trends": trends})

        if payload.query is None:
            raise ValueError("query is required for a search request")

        papers = await request.app.state.aggregator.search(payload.query, payload.search_type)
        return _json({"papers": [paper.to_payload() for paper in papers]})
    except Exception as exc:
        logger.exception("search_request_failed error_type=%s", type(exc).__name__)
        return _json(
            {"error": "Failed to fetch results", "details": str(exc)},
            status_code=500,
        )
