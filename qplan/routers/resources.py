"""Resource API routes."""
import logging
from fastapi import APIRouter, Depends, status

from qplan.dependencies import get_current_identity, get_store, get_workflow, require_admin
from qplan.schemas.identity import Identity
from qplan.schemas.resource import ResourceCreate, ResourceOut, ResourceStatusUpdate
from qplan.services.request_workflow import RequestWorkflow
from qplan.store.entity_store import EntityStore

logger = logging.getLogger(__name__)
router = APIRouter()


@router.get("/", response_model=list[ResourceOut])
def list_resources(
    store: EntityStore = Depends(get_store),
    _: Identity = Depends(get_current_identity),
):
    return store.list_resources()


@router.post("/", response_model=ResourceOut, status_code=status.HTTP_201_CREATED)
def create_resource(
    payload: ResourceCreate,
    store: EntityStore = Depends(get_store),
    _: Identity = Depends(require_admin),
):
    return store.create_resource(payload.name, payload.location, payload.status)


@router.patch("/{resource_id}/status", response_model=ResourceOut)
def set_resource_status(
    resource_id: str,
    payload: ResourceStatusUpdate,
    workflow: RequestWorkflow = Depends(get_workflow),
    admin: Identity = Depends(require_admin),
):
    """Admin toggle between Available and Unavailable."""
    logger.info("Admin %s sets resource %s to %s", admin.user_id, resource_id, payload.status)
    return workflow.set_resource_status(resource_id, payload.status)
