"""FastAPI dependencies — store handle, caller identity and the admin guard."""
from typing import Optional

from fastapi import Depends, Header

from qplan.assistant.answer_service import AnswerService, OpenAIAnswerService
from qplan.config import settings
from qplan.database import SessionLocal
from qplan.exceptions import Forbidden, Unauthenticated
from qplan.schemas.identity import Identity
from qplan.services.request_workflow import RequestWorkflow
from qplan.store.entity_store import EntityStore


def get_store() -> EntityStore:
    return EntityStore(SessionLocal)


def get_workflow(store: EntityStore = Depends(get_store)) -> RequestWorkflow:
    return RequestWorkflow(store)


def get_answer_service() -> AnswerService:
    return OpenAIAnswerService()


def get_current_identity(
    x_user_id: Optional[str] = Header(None),
    x_user_name: Optional[str] = Header(None),
    x_user_email: Optional[str] = Header(None),
) -> Identity:
    """Identity asserted by the identity provider in front of the API.

    The display name falls back to the email, then the id, as the UI does.
    """
    if not x_user_id:
        raise Unauthenticated()
    return Identity(
        user_id=x_user_id,
        display_name=x_user_name or x_user_email or x_user_id,
        email=x_user_email,
    )


def require_admin(identity: Identity = Depends(get_current_identity)) -> Identity:
    if not identity.is_admin(settings.ADMIN_EMAIL):
        raise Forbidden()
    return identity
