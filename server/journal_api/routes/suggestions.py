"""Activity suggestion API routes."""
from fastapi import APIRouter, Depends

from journal_core.suggestions import SuggestionEngine

from ..dependencies import get_suggestion_engine
from ..models.suggestion import SuggestionModel, SuggestionRequest

router = APIRouter(prefix="/api/journal", tags=["Suggestions"])


@router.post("/suggestions", response_model=list[SuggestionModel])
async def get_suggestions(
    payload: SuggestionRequest,
    engine: SuggestionEngine = Depends(get_suggestion_engine),
):
    """Get up to five suggestions for a mood analysis."""
    suggestions = engine.generate_suggestions(
        payload.mood, payload.energy * 10, payload.sentiment
    )
    return [SuggestionModel.from_domain(s) for s in suggestions]
