"""Event API routes."""
import logging
from datetime import datetime, timezone
from fastapi import APIRouter, Depends, Query, Response, status

from qplan.dependencies import get_current_identity, get_store, require_admin
from qplan.schemas.event import EventCreate, EventOut
from qplan.schemas.identity import Identity
from qplan.store.entity_store import EntityStore

logger = logging.getLogger(__name__)
router = APIRouter()


@router.get("/", response_model=list[EventOut])
def list_events(
    upcoming: bool = Query(False, description="Only events dated from now on"),
    store: EntityStore = Depends(get_store),
    _: Identity = Depends(get_current_identity),
):
    """List events ordered by date."""
    start_after = datetime.now(timezone.utc) if upcoming else None
    return store.list_events(start_after=start_after)


@router.post("/", response_model=EventOut, status_code=status.HTTP_201_CREATED)
def create_event(
    payload: EventCreate,
    store: EntityStore = Depends(get_store),
    _: Identity = Depends(require_admin),
):
    return store.create_event(payload.title, payload.description, payload.date)


@router.delete("/{event_id}", status_code=status.HTTP_204_NO_CONTENT)
def delete_event(
    event_id: str,
    store: EntityStore = Depends(get_store),
    _: Identity = Depends(require_admin),
):
    store.delete_event(event_id)
    return Response(status_code=status.HTTP_204_NO_CONTENT)
