"""
Guild Quest Matching API

FastAPI wrapper around the matcher and recommender.
"""

import logging
import os
from typing import Optional

from fastapi import Depends, FastAPI, Query, Request
from fastapi.exceptions import RequestValidationError
from fastapi.responses import JSONResponse
from pydantic import BaseModel, Field

from guild_matching.errors import MatchingError
from guild_matching.services.matching_service import MatchingService
from guild_matching.utils.constants import (
    DEFAULT_MATCH_LIMIT,
    DEFAULT_NUM_RECOMMENDATIONS,
)


logging.basicConfig(
    level=os.getenv('LOG_LEVEL', 'INFO').upper(),
    format="%(asctime)s %(levelname)s %(name)s: %(message)s",
)
logger = logging.getLogger(__name__)

app = FastAPI(
    title="Guild Quest Matching",
    description="Rank open quests for adventurers by fit and by completion history",
    version="1.0.0",
)

_service: Optional[MatchingService] = None


def get_matching_service() -> MatchingService:
    """Shared service backed by the DATABASE_URL quest store."""
    global _service
    if _service is None:
        _service = MatchingService()
    return _service


class RecommendationRequest(BaseModel):
    """Body of POST /api/matching."""
    user_id: Optional[str] = None
    num_recommendations: int = Field(default=DEFAULT_NUM_RECOMMENDATIONS, ge=1)


def _error_response(status_code: int, error: str, error_type: str) -> JSONResponse:
    return JSONResponse(
        status_code=status_code,
        content={"success": False, "error": error, "type": error_type},
    )


@app.exception_handler(MatchingError)
async def matching_error_handler(request: Request, exc: MatchingError) -> JSONResponse:
    """Map matching errors to their status and the standard error body."""
    if exc.status_code >= 500:
        logger.error("Matching error in %s: %s", request.url.path, exc)
    return _error_response(exc.status_code, str(exc), exc.__class__.__name__)


@app.exception_handler(RequestValidationError)
async def validation_error_handler(
    request: Request, exc: RequestValidationError
) -> JSONResponse:
    """Answer malformed requests as client errors."""
    errors = exc.errors()
    message = errors[0].get('msg', 'Invalid request') if errors else 'Invalid request'
    return _error_response(400, message, "ValidationError")


@app.exception_handler(Exception)
async def general_exception_handler(request: Request, exc: Exception) -> JSONResponse:
    """Catch-all for unexpected failures."""
    logger.exception("Unexpected error in %s", request.url.path)
    return _error_response(500, "Internal server error", "InternalError")


@app.get("/")
def health_check():
    """Health check endpoint."""
    return {
        "status": "healthy",
        "service": "guild-quest-matching",
        "version": "1.0.0",
    }


@app.get("/health")
def health():
    """Alias for health check."""
    return health_check()


@app.get("/api/matching")
def match_quests(
    user_id: Optional[str] = Query(default=None),
    limit: int = Query(default=DEFAULT_MATCH_LIMIT, ge=1),
    service: MatchingService = Depends(get_matching_service),
):
    """
    Best current quest matches for a user.

    Returns quests with a 0-100 matchScore, highest first.
    """
    matches = service.match_quests(user_id, limit)
    return {"matches": [m.to_dict() for m in matches], "success": True}


@app.post("/api/matching")
def recommend_quests(
    body: RecommendationRequest,
    service: MatchingService = Depends(get_matching_service),
):
    """
    Personalized quest recommendations from completion history.

    Returns quests with an unbounded recommendationScore, highest first.
    """
    recommendations = service.recommend_quests(body.user_id, body.num_recommendations)
    return {
        "recommendations": [r.to_dict() for r in recommendations],
        "success": True,
    }


if __name__ == "__main__":
    import uvicorn
    uvicorn.run(app, host="0.0.0.0", port=int(os.getenv('PORT', '8000')))
