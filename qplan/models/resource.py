"""Resource ORM model — the ``resources`` collection."""
import uuid
import enum
from sqlalchemy import Column, String
from qplan.database import Base


class ResourceStatus(str, enum.Enum):
    available = "Available"
    unavailable = "Unavailable"


class Resource(Base):
    __tablename__ = "resources"

    id = Column(String(36), primary_key=True, default=lambda: str(uuid.uuid4()))
    name = Column(String(255), nullable=False)
    location = Column(String(255), nullable=False, default="")
    # Plain string so rows written by other clients are validated on read
    status = Column(String(20), nullable=False, default=ResourceStatus.available.value)
