"""ResourceRequest ORM model — the ``resourceRequests`` collection.

``resourceName`` and ``userName`` are snapshots taken at submission time and
are never resynced with later renames.
"""
import uuid
import enum
from datetime import datetime, timezone
from sqlalchemy import Column, String, DateTime, Index
from qplan.database import Base


class RequestStatus(str, enum.Enum):
    pending = "pending"
    approved = "approved"
    denied = "denied"


class ResourceRequest(Base):
    __tablename__ = "resourceRequests"
    __table_args__ = (
        Index("ix_resource_requests_claim", "userId", "resourceId", "status"),
    )

    id = Column(String(36), primary_key=True, default=lambda: str(uuid.uuid4()))
    resource_id = Column("resourceId", String(36), nullable=False)
    resource_name = Column("resourceName", String(255), nullable=False)
    user_id = Column("userId", String(255), nullable=False)
    user_name = Column("userName", String(255), nullable=False)
    status = Column(String(20), nullable=False, default=RequestStatus.pending.value)
    # Python-side default keeps microseconds so list order is stable on SQLite
    created_at = Column(DateTime(timezone=True), default=lambda: datetime.now(timezone.utc))
    decided_at = Column(DateTime(timezone=True), nullable=True)
