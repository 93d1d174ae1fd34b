"""Pydantic schemas for ResourceRequests."""
from datetime import datetime
from typing import Optional
from pydantic import BaseModel

from qplan.models.resource_request import RequestStatus


class ResourceRequestCreate(BaseModel):
    """Body of a submit call — the requester comes from the identity headers."""

    resource_id: str


class ResourceRequestDraft(BaseModel):
    """A request about to be written; names are already denormalized."""

    resource_id: str
    resource_name: str
    user_id: str
    user_name: str
    status: RequestStatus = RequestStatus.pending


class ResourceRequestOut(BaseModel):
    id: str
    resource_id: str
    resource_name: str
    user_id: str
    user_name: str
    status: RequestStatus
    created_at: Optional[datetime] = None
    decided_at: Optional[datetime] = None

    model_config = {"from_attributes": True, "use_enum_values": True}
