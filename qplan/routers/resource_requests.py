"""Resource request API routes — submit, review, approve, deny."""
import logging
from typing import Optional
from fastapi import APIRouter, Depends, Query, status

from qplan.dependencies import get_current_identity, get_store, get_workflow, require_admin
from qplan.models.resource_request import RequestStatus
from qplan.schemas.identity import Identity
from qplan.schemas.resource_request import ResourceRequestCreate, ResourceRequestOut
from qplan.services.request_workflow import RequestWorkflow
from qplan.store.entity_store import EntityStore

logger = logging.getLogger(__name__)
router = APIRouter()


@router.post("/", response_model=ResourceRequestOut, status_code=status.HTTP_201_CREATED)
def submit_request(
    payload: ResourceRequestCreate,
    workflow: RequestWorkflow = Depends(get_workflow),
    identity: Identity = Depends(get_current_identity),
):
    """Request a resource. A second pending request for the same resource → 409."""
    return workflow.submit(payload.resource_id, identity)


@router.get("/", response_model=list[ResourceRequestOut])
def list_requests(
    status_filter: Optional[RequestStatus] = Query(RequestStatus.pending),
    include_all: bool = Query(False, description="Ignore status_filter and return every request"),
    store: EntityStore = Depends(get_store),
    _: Identity = Depends(require_admin),
):
    return store.list_requests(None if include_all else status_filter)


@router.post("/{request_id}/approve", response_model=ResourceRequestOut)
def approve_request(
    request_id: str,
    workflow: RequestWorkflow = Depends(get_workflow),
    _: Identity = Depends(require_admin),
):
    """Approve a pending request — the resource becomes Unavailable in the same write."""
    return workflow.approve(request_id)


@router.post("/{request_id}/deny", response_model=ResourceRequestOut)
def deny_request(
    request_id: str,
    workflow: RequestWorkflow = Depends(get_workflow),
    _: Identity = Depends(require_admin),
):
    return workflow.deny(request_id)
