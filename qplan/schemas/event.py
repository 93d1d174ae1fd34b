"""Pydantic schemas for Events."""
from datetime import datetime
from pydantic import BaseModel, Field


class EventCreate(BaseModel):
    title: str = Field(min_length=1, max_length=255)
    description: str = ""
    date: datetime


class EventOut(BaseModel):
    id: str
    title: str
    description: str
    date: datetime

    model_config = {"from_attributes": True}
