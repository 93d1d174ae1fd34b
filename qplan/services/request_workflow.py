"""Resource request workflow — pending → approved / denied.

Rules:
- A user holds at most one pending request per resource (``DuplicateRequest``)
- ``resourceName`` / ``userName`` are copied at submission and never resynced
- Approve flips the request and marks the resource Unavailable atomically
- Deny only touches the request
- Terminal requests are retained with their status, not deleted
"""
import logging

from qplan.exceptions import DuplicateRequest, RequestNotPending
from qplan.models.resource import ResourceStatus
from qplan.models.resource_request import RequestStatus
from qplan.schemas.identity import Identity
from qplan.schemas.resource import ResourceOut
from qplan.schemas.resource_request import ResourceRequestDraft, ResourceRequestOut
from qplan.store.entity_store import EntityStore

logger = logging.getLogger(__name__)


class RequestWorkflow:
    def __init__(self, store: EntityStore):
        self.store = store

    def _pending(self, request_id: str) -> ResourceRequestOut:
        request = self.store.get_request(request_id)
        if request.status != RequestStatus.pending.value:
            raise RequestNotPending(request_id, request.status)
        return request

    def submit(self, resource_id: str, requester: Identity) -> ResourceRequestOut:
        """Create a pending request for ``resource_id`` on behalf of ``requester``."""
        resource = self.store.get_resource(resource_id)

        existing = self.store.find_pending_request(requester.user_id, resource.id)
        if existing is not None:
            logger.info(
                "Duplicate request from user %s for resource %s (pending %s)",
                requester.user_id, resource.id, existing.id,
            )
            raise DuplicateRequest(requester.user_id, resource.id)

        draft = ResourceRequestDraft(
            resource_id=resource.id,
            resource_name=resource.name,
            user_id=requester.user_id,
            user_name=requester.display_name,
        )
        return self.store.create_request(draft)

    def approve(self, request_id: str) -> ResourceRequestOut:
        request = self._pending(request_id)
        self.store.approve(request.id, request.resource_id)
        logger.info("Resource request %s approved; resource %s now Unavailable", request.id, request.resource_id)
        return self.store.get_request(request.id)

    def deny(self, request_id: str) -> ResourceRequestOut:
        request = self._pending(request_id)
        self.store.deny(request.id)
        logger.info("Resource request %s denied", request.id)
        return self.store.get_request(request.id)

    def set_resource_status(self, resource_id: str, status: ResourceStatus) -> ResourceOut:
        """Admin toggle. Bypasses the request flow and its uniqueness check."""
        self.store.set_resource_status(resource_id, status)
        return self.store.get_resource(resource_id)
