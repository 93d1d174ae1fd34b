"""Assistant chat route — wires the query function to the HTTP layer."""
import logging
from fastapi import APIRouter, Depends

from qplan.assistant.answer_service import AnswerService
from qplan.assistant.query import answer
from qplan.dependencies import get_answer_service, get_current_identity, get_store
from qplan.schemas.assistant import ChatMessage, ChatRequest, ChatResponse
from qplan.schemas.identity import Identity
from qplan.store.entity_store import EntityStore

logger = logging.getLogger(__name__)
router = APIRouter()


@router.post("/chat", response_model=ChatResponse)
def chat(
    payload: ChatRequest,
    store: EntityStore = Depends(get_store),
    service: AnswerService = Depends(get_answer_service),
    identity: Identity = Depends(get_current_identity),
):
    """Answer one question and append the exchange to the caller's transcript."""
    question = payload.question.strip()
    if not question:
        return ChatResponse(answer=None, messages=payload.messages)

    logger.info("Assistant question from user %s", identity.user_id)
    events = store.list_events()
    resources = store.list_resources()
    reply = answer(question, events, resources, service=service)

    messages = [
        *payload.messages,
        ChatMessage(role="user", content=question),
        ChatMessage(role="bot", content=reply),
    ]
    return ChatResponse(answer=reply, messages=messages)
