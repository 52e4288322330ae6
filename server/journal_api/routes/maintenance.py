"""Journal maintenance API routes."""
from fastapi import APIRouter, Depends

from journal_core.store import JournalStore

from ..dependencies import get_store

router = APIRouter(prefix="/api/journal/maintenance", tags=["Maintenance"])


@router.post("/reconcile")
async def reconcile_duplicates(store: JournalStore = Depends(get_store)):
    """Remove extra entries so every day keeps only its latest one."""
    removed = store.reconcile_duplicates()
    return {
        "removed": removed,
        "failed_days": [str(day) for day, _ in store.last_reconcile_errors],
    }
