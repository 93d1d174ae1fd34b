"""Language-model answer service — one templated chat-completion call.

The service is text in / text out: it receives the question plus the two
grounding blocks and returns the model's answer. Every failure (missing
key, API error, timeout, malformed output) is raised as
``AssistantUnavailable`` for the caller to handle.
"""
import json
import logging
from typing import Optional, Protocol

from openai import OpenAI

from qplan.config import settings
from qplan.exceptions import AssistantUnavailable

logger = logging.getLogger(__name__)

SYSTEM_PROMPT = (
    'You are a chatbot for QPlan. Reply with a JSON object of the form '
    '{"answer": "<your answer>"} and nothing else.'
)

PROMPT_TEMPLATE = """Use the following information to answer the user's question about upcoming events and resource availability.

Question: {question}

Event Details: {eventDetails}

Resource Status: {resourceStatus}

Answer: """


class AnswerService(Protocol):
    def __call__(self, question: str, event_details: str, resource_status: str) -> str: ...


def render_prompt(question: str, event_details: str, resource_status: str) -> str:
    return PROMPT_TEMPLATE.format(
        question=question,
        eventDetails=event_details,
        resourceStatus=resource_status,
    )


def parse_answer(content: Optional[str]) -> str:
    """Pull ``answer`` out of the model's JSON reply."""
    if not content:
        raise AssistantUnavailable("Empty response from the answer service")
    try:
        payload = json.loads(content)
    except json.JSONDecodeError as e:
        raise AssistantUnavailable(f"Malformed response from the answer service: {e}") from e
    if not isinstance(payload, dict) or not isinstance(payload.get("answer"), str):
        raise AssistantUnavailable("Answer service response has no 'answer' text")
    return payload["answer"]


class OpenAIAnswerService:
    """Answer service backed by the OpenAI chat-completions API."""

    def __init__(
        self,
        api_key: Optional[str] = None,
        model: Optional[str] = None,
        client: Optional[OpenAI] = None,
    ):
        self.api_key = settings.OPENAI_API_KEY if api_key is None else api_key
        self.model = model or settings.OPENAI_MODEL
        self._client = client

    def _get_client(self) -> OpenAI:
        if self._client is None:
            if not self.api_key or self.api_key == "your-api-key-here":
                raise AssistantUnavailable("OpenAI API key not configured")
            self._client = OpenAI(api_key=self.api_key, timeout=settings.OPENAI_TIMEOUT_SECONDS)
        return self._client

    def __call__(self, question: str, event_details: str, resource_status: str) -> str:
        client = self._get_client()
        try:
            response = client.chat.completions.create(
                model=self.model,
                messages=[
                    {"role": "system", "content": SYSTEM_PROMPT},
                    {"role": "user", "content": render_prompt(question, event_details, resource_status)},
                ],
                response_format={"type": "json_object"},
            )
        except Exception as e:
            raise AssistantUnavailable(f"LLM API error: {e}") from e

        if response.usage:
            logger.info("Answer service used %d tokens", response.usage.total_tokens)
        if not response.choices:
            raise AssistantUnavailable("Answer service returned no choices")
        return parse_answer(response.choices[0].message.content)
