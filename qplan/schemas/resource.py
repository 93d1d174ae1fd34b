"""Pydantic schemas for Resources."""
from pydantic import BaseModel, Field

from qplan.models.resource import ResourceStatus


class ResourceCreate(BaseModel):
    name: str = Field(min_length=1, max_length=255)
    location: str = ""
    status: ResourceStatus = ResourceStatus.available


class ResourceStatusUpdate(BaseModel):
    status: ResourceStatus


class ResourceOut(BaseModel):
    id: str
    name: str
    location: str
    status: ResourceStatus

    model_config = {"from_attributes": True, "use_enum_values": True}
