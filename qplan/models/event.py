"""Event ORM model — the ``events`` collection."""
import uuid
from sqlalchemy import Column, String, Text, DateTime
from qplan.database import Base


class Event(Base):
    __tablename__ = "events"

    id = Column(String(36), primary_key=True, default=lambda: str(uuid.uuid4()))
    title = Column(String(255), nullable=False)
    description = Column(Text, nullable=True, default="")  # other writers may omit it; reads validate
    date = Column(DateTime(timezone=True), nullable=False)  # stored as UTC
