"""Mood statistics API routes."""
from fastapi import APIRouter, Depends, Query

from journal_core.analytics import TimePeriod, filter_by_period, summarize
from journal_core.store import JournalStore

from ..dependencies import get_store
from ..models.statistics import StatisticsResponse

router = APIRouter(prefix="/api/journal", tags=["Mood Statistics"])


@router.get("/statistics", response_model=StatisticsResponse)
async def get_statistics(
    period: TimePeriod = Query(default=TimePeriod.WEEK, description="Statistics window"),
    keyword_limit: int = Query(default=10, ge=1, le=50),
    store: JournalStore = Depends(get_store),
):
    """Get mood trend, distribution, keywords, averages and streak for a period."""
    now = store.now()
    entries = filter_by_period(store.fetch_all(), period, now)
    summary = summarize(entries, today=store.day_of(now), tz=store.tz, keyword_limit=keyword_limit)
    return StatisticsResponse.from_summary(period, summary)
