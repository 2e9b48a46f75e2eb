"""Chat assistant endpoints: send a message and read back a conversation."""

from typing import Annotated

from fastapi import APIRouter, Depends, HTTPException, Request
from fastapi.concurrency import run_in_threadpool
from sqlalchemy.orm import Session

from brainfeed.core.database import get_db
from brainfeed.models import Conversation
from brainfeed.schemas.articles import ArticleOut
from brainfeed.schemas.chat import (
    ChatMessageRequest,
    ChatMessageResponse,
    ConversationMessageOut,
    ConversationOut,
)
from brainfeed.services.articles import list_recent_approved
from brainfeed.services.chat import (
    ChatServiceError,
    add_message,
    find_conversation,
    get_history,
    get_or_create_conversation,
    request_completion,
)

router = APIRouter()

SUGGESTED_ARTICLE_COUNT = 3


def _store_user_turn(
    db: Session,
    session_id: str,
    content: str,
) -> tuple[int, int, list[dict[str, str]]]:
    conversation = get_or_create_conversation(db, session_id)
    user_message = add_message(db, conversation, "user", content)
    history = [
        {"role": m.role, "content": m.content}
        for m in get_history(db, conversation.id)
    ]
    return conversation.id, user_message.id, history


def _store_reply(db: Session, conversation_id: int, reply: str) -> list[ArticleOut]:
    conversation = db.get(Conversation, conversation_id)
    add_message(db, conversation, "assistant", reply)
    suggested = list_recent_approved(db, limit=SUGGESTED_ARTICLE_COUNT)
    return [ArticleOut.model_validate(a) for a in suggested]


@router.post("/message", response_model=ChatMessageResponse)
async def post_message(
    body: ChatMessageRequest,
    request: Request,
    db: Annotated[Session, Depends(get_db)],
) -> ChatMessageResponse:
    """
    Add the user's message to the conversation for sessionId (created on first use),
    ask the model with the full history, store and return its reply.

    Database work runs in the threadpool; only the model call is awaited on the loop.
    Returns 503 when the model is unreachable or times out, 502 for a bad upstream answer.
    """
    settings = request.app.state.settings
    conversation_id, message_id, history = await run_in_threadpool(
        _store_user_turn, db, body.session_id, body.message
    )

    try:
        reply = await request_completion(history, settings)
    except ChatServiceError as e:
        if e.upstream_unavailable:
            raise HTTPException(status_code=503, detail=e.message) from e
        raise HTTPException(status_code=502, detail=e.message) from e

    suggested = await run_in_threadpool(_store_reply, db, conversation_id, reply)
    return ChatMessageResponse(
        conversation_id=conversation_id,
        message_id=message_id,
        response=reply,
        suggested_articles=suggested,
    )


@router.get("/history/{session_id}", response_model=ConversationOut)
def get_conversation_history(
    session_id: str,
    db: Annotated[Session, Depends(get_db)],
) -> ConversationOut:
    """Conversation for session_id with its messages, newest first. 404 if none."""
    conversation = find_conversation(db, session_id)
    if conversation is None:
        raise HTTPException(status_code=404, detail="Conversation not found")
    messages = get_history(db, conversation.id)
    return ConversationOut(
        id=conversation.id,
        session_id=conversation.session_id,
        title=conversation.title,
        created_at=conversation.created_at,
        updated_at=conversation.updated_at,
        messages=[ConversationMessageOut.model_validate(m) for m in reversed(messages)],
    )
