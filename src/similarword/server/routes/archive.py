"""
Saved query routes: /api/archive
"""

from fastapi import APIRouter, Depends, HTTPException
from pydantic import BaseModel

from similarword.core.archive import PersistenceError, QueryArchive, SortOrder
from similarword.core.dictionary import DictionaryStore
from similarword.core.entry import QueryRecord, SearchKind, WordEntry
from similarword.server.deps import get_archive, get_dictionary


router = APIRouter(prefix="/api/archive", tags=["archive"])


class EntryModel(BaseModel):
    word: str
    pos: str
    meaning_native: str
    meaning_external: str | None = None


class SaveQueryRequest(BaseModel):
    word: str
    kind: SearchKind
    results: list[EntryModel]


def _summary(record: QueryRecord) -> dict:
    return {
        "id": record.id,
        "label": record.label,
        "saved_at": record.saved_at.isoformat(),
        "result_count": len(record.results),
    }


@router.get("")
async def list_records(sort: SortOrder = SortOrder.SAVED_AT, archive: QueryArchive = Depends(get_archive)):
    """List saved queries."""
    return {"records": [_summary(r) for r in archive.list(sort)]}


@router.post("")
async def save_record(req: SaveQueryRequest, archive: QueryArchive = Depends(get_archive)):
    """Save a result set. `saved` is false if the label was already taken."""
    results = [WordEntry.from_dict(e.model_dump()) for e in req.results]
    label = req.kind.label(req.word)
    try:
        saved = archive.save(label, results)
    except PersistenceError as e:
        raise HTTPException(status_code=503, detail=str(e))

    record = archive.find_by_label(label)
    return {"saved": saved, "id": record.id if record else None, "label": label}


@router.get("/{record_id}")
async def get_record(
    record_id: str,
    archive: QueryArchive = Depends(get_archive),
    store: DictionaryStore = Depends(get_dictionary),
):
    """A saved query with its results and the entry for the input word."""
    record = archive.get(record_id)
    if record is None:
        raise HTTPException(status_code=404, detail="Saved query not found")

    original = store.find_by_word(record.word)
    data = record.to_dict()
    data["kind"] = record.kind.value if record.kind else None
    data["original"] = original.to_dict() if original else None
    return data


@router.delete("/{record_id}")
async def delete_record(record_id: str, archive: QueryArchive = Depends(get_archive)):
    """Delete a saved query. Deleting a missing id is not an error."""
    try:
        archive.delete(record_id)
    except PersistenceError as e:
        raise HTTPException(status_code=503, detail=str(e))
    return {"deleted": record_id}
