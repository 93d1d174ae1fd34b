"""Entity store adapter — typed access to events, resources and resourceRequests.

Responsibilities:
- One transaction per call; ``approve`` writes the request and the resource in
  the same transaction so neither half is ever visible alone
- Store failures surface as ``StoreUnavailable`` (no retries here)
- Every row read is validated into a value object; rows that do not match the
  schema raise ``MalformedRecord``
- Dates are converted to UTC on write and back to aware datetimes on read
"""
import logging
from contextlib import contextmanager
from datetime import datetime, timezone
from typing import Iterator, Optional

from pydantic import ValidationError
from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.orm import Session, sessionmaker

from qplan.exceptions import MalformedRecord, NotFound, RequestNotPending, StoreUnavailable
from qplan.models.event import Event
from qplan.models.resource import Resource, ResourceStatus
from qplan.models.resource_request import RequestStatus, ResourceRequest
from qplan.schemas.event import EventOut
from qplan.schemas.resource import ResourceOut
from qplan.schemas.resource_request import ResourceRequestDraft, ResourceRequestOut
from qplan.store.timestamps import from_store_timestamp, to_store_timestamp

logger = logging.getLogger(__name__)


def _event_out(row: Event) -> EventOut:
    try:
        return EventOut.model_validate({
            "id": row.id,
            "title": row.title,
            "description": row.description,
            "date": from_store_timestamp(row.date) if row.date is not None else None,
        })
    except ValidationError as e:
        raise MalformedRecord("events", row.id, str(e)) from e


def _resource_out(row: Resource) -> ResourceOut:
    try:
        return ResourceOut.model_validate(row)
    except ValidationError as e:
        raise MalformedRecord("resources", row.id, str(e)) from e


def _request_out(row: ResourceRequest) -> ResourceRequestOut:
    try:
        return ResourceRequestOut.model_validate({
            "id": row.id,
            "resource_id": row.resource_id,
            "resource_name": row.resource_name,
            "user_id": row.user_id,
            "user_name": row.user_name,
            "status": row.status,
            "created_at": from_store_timestamp(row.created_at) if row.created_at is not None else None,
            "decided_at": from_store_timestamp(row.decided_at) if row.decided_at is not None else None,
        })
    except ValidationError as e:
        raise MalformedRecord("resourceRequests", row.id, str(e)) from e


class EntityStore:
    """Adapter over a SQLAlchemy session factory.

    The factory is injected so tests can bind the adapter to a throwaway
    database.
    """

    def __init__(self, session_factory: sessionmaker):
        self._session_factory = session_factory

    @contextmanager
    def _transaction(self) -> Iterator[Session]:
        session = self._session_factory()
        try:
            yield session
            session.commit()
        except SQLAlchemyError as e:
            session.rollback()
            logger.error("Store operation failed: %s", e)
            raise StoreUnavailable() from e
        except Exception:
            session.rollback()
            raise
        finally:
            session.close()

    # ── Events ─────────────────────────────────────────────────────

    def list_events(self, start_after: Optional[datetime] = None) -> list[EventOut]:
        """All events ordered by date, optionally only those on/after ``start_after``."""
        with self._transaction() as db:
            query = db.query(Event)
            if start_after is not None:
                query = query.filter(Event.date >= to_store_timestamp(start_after))
            return [_event_out(row) for row in query.order_by(Event.date).all()]

    def create_event(self, title: str, description: str, date: datetime) -> EventOut:
        with self._transaction() as db:
            row = Event(title=title, description=description, date=to_store_timestamp(date))
            db.add(row)
            db.flush()
            event = _event_out(row)
        logger.info("Created event %s (%s)", event.id, event.title)
        return event

    def delete_event(self, event_id: str) -> None:
        with self._transaction() as db:
            row = db.get(Event, event_id)
            if row is None:
                raise NotFound("Event", event_id)
            db.delete(row)
        logger.info("Deleted event %s", event_id)

    # ── Resources ──────────────────────────────────────────────────

    def list_resources(self) -> list[ResourceOut]:
        with self._transaction() as db:
            return [_resource_out(row) for row in db.query(Resource).order_by(Resource.name).all()]

    def get_resource(self, resource_id: str) -> ResourceOut:
        with self._transaction() as db:
            row = db.get(Resource, resource_id)
            if row is None:
                raise NotFound("Resource", resource_id)
            return _resource_out(row)

    def create_resource(
        self,
        name: str,
        location: str,
        status: ResourceStatus = ResourceStatus.available,
    ) -> ResourceOut:
        with self._transaction() as db:
            row = Resource(name=name, location=location, status=ResourceStatus(status).value)
            db.add(row)
            db.flush()
            resource = _resource_out(row)
        logger.info("Created resource %s (%s)", resource.id, resource.name)
        return resource

    def set_resource_status(self, resource_id: str, status: ResourceStatus) -> None:
        with self._transaction() as db:
            row = db.get(Resource, resource_id)
            if row is None:
                raise NotFound("Resource", resource_id)
            row.status = ResourceStatus(status).value
        logger.info("Resource %s set to %s", resource_id, ResourceStatus(status).value)

    # ── Resource requests ──────────────────────────────────────────

    def list_pending_requests(self) -> list[ResourceRequestOut]:
        return self.list_requests(RequestStatus.pending)

    def list_requests(self, status: Optional[RequestStatus] = None) -> list[ResourceRequestOut]:
        """Requests filtered by status in the query; ``None`` returns every request."""
        with self._transaction() as db:
            query = db.query(ResourceRequest)
            if status is not None:
                query = query.filter(ResourceRequest.status == RequestStatus(status).value)
            rows = query.order_by(ResourceRequest.created_at, ResourceRequest.id).all()
            return [_request_out(row) for row in rows]

    def get_request(self, request_id: str) -> ResourceRequestOut:
        with self._transaction() as db:
            row = db.get(ResourceRequest, request_id)
            if row is None:
                raise NotFound("Resource request", request_id)
            return _request_out(row)

    def find_pending_request(self, user_id: str, resource_id: str) -> Optional[ResourceRequestOut]:
        with self._transaction() as db:
            row = db.query(ResourceRequest).filter(
                ResourceRequest.user_id == user_id,
                ResourceRequest.resource_id == resource_id,
                ResourceRequest.status == RequestStatus.pending.value,
            ).first()
            return _request_out(row) if row is not None else None

    def create_request(self, draft: ResourceRequestDraft) -> ResourceRequestOut:
        with self._transaction() as db:
            row = ResourceRequest(
                resource_id=draft.resource_id,
                resource_name=draft.resource_name,
                user_id=draft.user_id,
                user_name=draft.user_name,
                status=RequestStatus(draft.status).value,
            )
            db.add(row)
            db.flush()
            db.refresh(row)
            request = _request_out(row)
        logger.info(
            "Resource request %s created for resource %s by user %s",
            request.id, request.resource_id, request.user_id,
        )
        return request

    def delete_request(self, request_id: str) -> None:
        with self._transaction() as db:
            row = db.get(ResourceRequest, request_id)
            if row is None:
                raise NotFound("Resource request", request_id)
            db.delete(row)
        logger.info("Deleted resource request %s", request_id)

    def deny(self, request_id: str) -> None:
        """Mark a request denied. The referenced resource is not touched."""
        with self._transaction() as db:
            row = db.get(ResourceRequest, request_id)
            if row is None:
                raise NotFound("Resource request", request_id)
            if row.status != RequestStatus.pending.value:
                raise RequestNotPending(request_id, row.status)
            row.status = RequestStatus.denied.value
            row.decided_at = datetime.now(timezone.utc)

    def approve(self, request_id: str, resource_id: str) -> None:
        """Mark the request approved and the resource Unavailable in one transaction."""
        with self._transaction() as db:
            request_row = db.get(ResourceRequest, request_id)
            if request_row is None:
                raise NotFound("Resource request", request_id)
            if request_row.status != RequestStatus.pending.value:
                raise RequestNotPending(request_id, request_row.status)
            resource_row = db.get(Resource, resource_id)
            if resource_row is None:
                raise NotFound("Resource", resource_id)

            request_row.status = RequestStatus.approved.value
            request_row.decided_at = datetime.now(timezone.utc)
            db.flush()
            resource_row.status = ResourceStatus.unavailable.value
