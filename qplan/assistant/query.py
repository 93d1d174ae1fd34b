"""Assistant query function — grounds a question in the current events/resources.

Stateless: every call builds its context from the snapshots it is given.
Conversation history is the caller's concern.
"""
import logging
from typing import Optional, Sequence

import pytz

from qplan.assistant.answer_service import AnswerService, OpenAIAnswerService
from qplan.config import settings
from qplan.schemas.event import EventOut
from qplan.schemas.resource import ResourceOut

logger = logging.getLogger(__name__)

FALLBACK_ANSWER = "Sorry, I encountered an error. Please try again."


def format_event_date(event: EventOut, tz_name: Optional[str] = None) -> str:
    """Render the date as e.g. ``Mon Oct 19 2026`` in the display timezone."""
    tz = pytz.timezone(tz_name or settings.DISPLAY_TIMEZONE)
    return event.date.astimezone(tz).strftime("%a %b %d %Y")


def build_event_details(events: Sequence[EventOut], tz_name: Optional[str] = None) -> str:
    return "\n".join(
        f"- Event: {e.title}, Date: {format_event_date(e, tz_name)}, Description: {e.description}"
        for e in events
    )


def build_resource_status(resources: Sequence[ResourceOut]) -> str:
    return "\n".join(
        f"- Resource: {r.name}, Status: {r.status}, Location: {r.location}"
        for r in resources
    )


def answer(
    question: str,
    events: Sequence[EventOut],
    resources: Sequence[ResourceOut],
    service: Optional[AnswerService] = None,
) -> str:
    """Answer ``question`` from the given snapshots; never raises on service failure."""
    service = service or OpenAIAnswerService()

    try:
        event_details = build_event_details(events)
        resource_status = build_resource_status(resources)
        return service(question, event_details, resource_status)
    except Exception as e:
        logger.exception("Assistant answer failed: %s", e)
        return FALLBACK_ANSWER
