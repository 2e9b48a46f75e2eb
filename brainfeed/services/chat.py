"""Chat assistant: persist conversation turns and proxy them to an OpenAI-compatible completion API."""

import json
import logging
import time
from typing import TYPE_CHECKING, Any

import httpx
from sqlalchemy import select
from sqlalchemy.exc import IntegrityError
from sqlalchemy.orm import Session

from brainfeed.models import Conversation, ConversationMessage

if TYPE_CHECKING:
    from brainfeed.core.config import Settings

logger = logging.getLogger(__name__)

FALLBACK_REPLY = "I couldn't generate a response."


class ChatServiceError(Exception):
    """Raised when the completion API cannot answer (unreachable, timeout, bad status or body)."""

    def __init__(
        self,
        message: str,
        cause: Exception | None = None,
        upstream_unavailable: bool = False,
    ) -> None:
        self.message = message
        self.cause = cause
        self.upstream_unavailable = upstream_unavailable
        super().__init__(message)


def get_or_create_conversation(db: Session, session_id: str) -> Conversation:
    """Conversation for session_id, created on first use. Safe against a concurrent first message."""
    conversation = find_conversation(db, session_id)
    if conversation is not None:
        return conversation
    conversation = Conversation(session_id=session_id)
    db.add(conversation)
    try:
        db.commit()
    except IntegrityError:
        # Another request created it between the lookup and the insert
        db.rollback()
        existing = find_conversation(db, session_id)
        if existing is None:
            raise
        return existing
    db.refresh(conversation)
    return conversation


def add_message(
    db: Session,
    conversation: Conversation,
    role: str,
    content: str,
) -> ConversationMessage:
    message = ConversationMessage(
        conversation_id=conversation.id,
        role=role,
        content=content,
    )
    db.add(message)
    db.commit()
    db.refresh(message)
    return message


def get_history(db: Session, conversation_id: int) -> list[ConversationMessage]:
    """Messages of a conversation, oldest first."""
    stmt = (
        select(ConversationMessage)
        .where(ConversationMessage.conversation_id == conversation_id)
        .order_by(ConversationMessage.created_at, ConversationMessage.id)
    )
    return list(db.execute(stmt).scalars().all())


def find_conversation(db: Session, session_id: str) -> Conversation | None:
    return db.execute(
        select(Conversation).where(Conversation.session_id == session_id)
    ).scalar_one_or_none()


def _log_failure(elapsed: float, message_count: int, settings: "Settings") -> None:
    logger.info(
        "LLM chat request failed",
        extra={
            "llm_latency_seconds": elapsed,
            "message_count": message_count,
            "model": settings.LLM_MODEL,
            "status": "error",
        },
    )


async def request_completion(
    history: list[dict[str, str]],
    settings: "Settings",
) -> str:
    """
    Send the chat history to the completion API and return the assistant's text.

    Raises ChatServiceError on connection failure, timeout, non-200 status or a
    response body that is not a chat completion.
    """
    url = f"{settings.LLM_BASE_URL}/chat/completions"
    payload: dict[str, Any] = {
        "model": settings.LLM_MODEL,
        "messages": history,
        "max_completion_tokens": settings.LLM_MAX_COMPLETION_TOKENS,
    }
    headers: dict[str, str] = {}
    if settings.LLM_API_KEY is not None:
        headers["Authorization"] = f"Bearer {settings.LLM_API_KEY.get_secret_value()}"
    timeout = httpx.Timeout(settings.LLM_REQUEST_TIMEOUT_SEC)
    start = time.perf_counter()

    try:
        async with httpx.AsyncClient(timeout=timeout) as client:
            response = await client.post(url, json=payload, headers=headers)
        elapsed = time.perf_counter() - start
    except httpx.ConnectError as e:
        _log_failure(time.perf_counter() - start, len(history), settings)
        raise ChatServiceError(
            "Chat model is unreachable. Check LLM_BASE_URL.",
            cause=e,
            upstream_unavailable=True,
        ) from e
    except httpx.TimeoutException as e:
        _log_failure(time.perf_counter() - start, len(history), settings)
        raise ChatServiceError(
            "Chat model request timed out. Try increasing LLM_REQUEST_TIMEOUT_SEC.",
            cause=e,
            upstream_unavailable=True,
        ) from e
    except httpx.HTTPError as e:
        _log_failure(time.perf_counter() - start, len(history), settings)
        raise ChatServiceError("Chat model request failed.", cause=e) from e

    if response.status_code != 200:
        raise ChatServiceError(f"Chat model returned status {response.status_code}.")

    try:
        body = response.json()
    except json.JSONDecodeError as e:
        raise ChatServiceError(
            "Chat model response body is not valid JSON.",
            cause=e,
        ) from e

    logger.info(
        "LLM chat request completed",
        extra={
            "llm_latency_seconds": elapsed,
            "message_count": len(history),
            "model": settings.LLM_MODEL,
        },
    )

    choices = body.get("choices") if isinstance(body, dict) else None
    if not isinstance(choices, list):
        raise ChatServiceError("Chat model response missing 'choices'.")
    if not choices:
        return FALLBACK_REPLY
    message = choices[0].get("message") if isinstance(choices[0], dict) else None
    content = message.get("content") if isinstance(message, dict) else None
    if not isinstance(content, str) or not content.strip():
        return FALLBACK_REPLY
    return content
