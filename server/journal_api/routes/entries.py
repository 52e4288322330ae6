"""Journal entry API routes."""
import logging
from datetime import date

from fastapi import APIRouter, Depends, HTTPException, Path, Response

from journal_core.classifier import MoodClassifier
from journal_core.errors import ClassificationError
from journal_core.store import JournalStore
from journal_core.suggestions import SuggestionEngine

from ..dependencies import get_classifier, get_store, get_suggestion_engine
from ..models.entry import EntryCreate, JournalEntryModel, TodayEntryResponse
from ..models.suggestion import SuggestionModel

log = logging.getLogger(__name__)

router = APIRouter(prefix="/api/journal", tags=["Journal Entries"])


@router.post("/entries/today", response_model=TodayEntryResponse)
async def submit_today_entry(
    payload: EntryCreate,
    store: JournalStore = Depends(get_store),
    classifier: MoodClassifier = Depends(get_classifier),
    engine: SuggestionEngine = Depends(get_suggestion_engine),
):
    """
    Analyze the text and save it as today's entry.

    Creates the entry on the first submission of the day and overwrites it
    afterwards. Nothing is stored when classification fails.
    """
    try:
        analysis = await classifier.analyze(payload.text)
    except ClassificationError as e:
        log.warning(f"[API] Classification failed, entry not saved: {e}")
        raise HTTPException(status_code=502, detail=str(e))

    entry = store.upsert_for_today(payload.text, analysis)
    suggestions = engine.suggestions_for(analysis)

    return TodayEntryResponse(
        entry=JournalEntryModel.from_domain(entry),
        suggestions=[SuggestionModel.from_domain(s) for s in suggestions],
    )


@router.get("/entries", response_model=list[JournalEntryModel])
async def list_entries(store: JournalStore = Depends(get_store)):
    """Get all journal entries, newest first."""
    return [JournalEntryModel.from_domain(e) for e in store.fetch_all()]


@router.get("/entries/day/{day}", response_model=JournalEntryModel)
async def get_entry_for_day(day: date, store: JournalStore = Depends(get_store)):
    """Get the entry written on a given calendar day."""
    entry = store.fetch_for_day(day)
    if entry is None:
        raise HTTPException(status_code=404, detail=f"No entry for {day}")
    return JournalEntryModel.from_domain(entry)


@router.get("/entries/month/{year}/{month}", response_model=list[JournalEntryModel])
async def get_entries_for_month(
    year: int = Path(ge=1, le=9999),
    month: int = Path(ge=1, le=12),
    store: JournalStore = Depends(get_store),
):
    """Get a month's entries, oldest first."""
    return [JournalEntryModel.from_domain(e) for e in store.fetch_for_month(year, month)]


@router.delete("/entries/{entry_id}", status_code=204)
async def delete_entry(entry_id: str, store: JournalStore = Depends(get_store)):
    """Delete an entry. Unknown ids are ignored."""
    store.delete(entry_id)
    return Response(status_code=204)
