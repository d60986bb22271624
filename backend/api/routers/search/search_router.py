"""
Image search API endpoints.

Routes:
- GET /search/images - Relevance-ranked image search

Query parameters:
    q (required), page, limit, exactOnly, minScore, tagFilter, tags, matchType

Examples:
    GET /search/images?q=sunset
    GET /search/images?q=cat&exactOnly=true
    GET /search/images?q=nature&tagFilter=with
    GET /search/images?q=mountain&minScore=50
    GET /search/images?q=landscape&tags=sunset,mountain

Dependencies: backend.application.services, backend.models.search
System role: Image search HTTP API
"""

import logging
import time
from uuid import UUID

from fastapi import APIRouter, Depends, Request, status
from fastapi.responses import JSONResponse

from backend.api.deps.dependencies import get_current_user_id, get_search_service
from backend.application.services.search_service import SearchService
from backend.core.search.models import SearchValidationFailure
from backend.models.search import SearchErrorResponse, SearchFailureResponse, SearchResponse
from backend.observability.log_utils import log_request_start, log_request_success

from .search_error_handling import handle_search_errors, resolve_request_id
from .search_params import SearchQueryParams, get_search_params

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/search", tags=["search"])

STAGE = "Search Images"


@router.get(
    "/images",
    response_model=SearchResponse,
    responses={
        status.HTTP_400_BAD_REQUEST: {"model": SearchFailureResponse},
        status.HTTP_500_INTERNAL_SERVER_ERROR: {"model": SearchErrorResponse},
    },
)
@handle_search_errors(STAGE)
async def search_images(
    request: Request,
    params: SearchQueryParams = Depends(get_search_params),
    user_id: UUID | None = Depends(get_current_user_id),
    search_service: SearchService = Depends(get_search_service),
):
    """
    Search images across prompt, original prompt, provider, model and tags.

    Anonymous callers see public images; authenticated callers also see
    their own private images.

    Args:
        request: FastAPI request (carries the request ID)
        params: Raw query-string parameters
        user_id: Authenticated caller, None for anonymous
        search_service: Injected search facade

    Returns:
        SearchResponse, or a 400 envelope for an empty or overlong query
    """
    request_id = resolve_request_id(request)
    start_time = time.perf_counter()

    options = search_service.validator.parse_options(
        exact_only=params.exact_only,
        min_score=params.min_score,
        tag_filter=params.tag_filter,
        tags=params.tags,
        match_type=params.match_type,
    )

    log_request_start(
        logger,
        request_id,
        STAGE,
        user_id=str(user_id) if user_id else "anonymous",
        options=options.as_applied(),
        **params.to_log_context(),
    )

    result = await search_service.search(
        query=params.q,
        page=params.page,
        limit=params.limit,
        user_id=user_id,
        options=options,
    )

    if isinstance(result, SearchValidationFailure):
        return JSONResponse(
            status_code=result.status,
            content=SearchFailureResponse(message=result.error).model_dump(),
        )

    duration_ms = (time.perf_counter() - start_time) * 1000
    response = search_service.build_response(result, request_id=request_id, duration_ms=duration_ms)

    log_request_success(
        logger,
        request_id,
        STAGE,
        duration_ms,
        query=result.search_term,
        filter=result.filter,
        result_count=len(result.items),
        total=result.total,
        page=result.pagination.page,
    )
    return response
