"""
Chat Router - Emergency triage assistant endpoints.

A client creates a session, posts each typed text or quick-action value, and
follows the navigation the assistant requests once its delay has elapsed.
"""

from __future__ import annotations

import logging
from typing import Any

from fastapi import APIRouter, Depends, HTTPException, Response

from lifeline.auth_middleware import AuthUser, get_optional_user
from lifeline.chatbot.session import ChatSession
from lifeline.chatbot.session_store import ChatSessionStore
from lifeline.errors import SessionClosedError, SessionNotFoundError

from ..dependencies import get_chat_store
from ..schemas.chat import ChatSessionResponse, SendMessageRequest, SendMessageResponse

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/api/chat", tags=["chat"])


def _get_session(store: ChatSessionStore, session_id: str) -> ChatSession:
    try:
        return store.get(session_id)
    except SessionNotFoundError as e:
        raise HTTPException(status_code=404, detail=str(e)) from e


@router.post("/sessions", response_model=ChatSessionResponse, status_code=201)
async def create_session(store: ChatSessionStore = Depends(get_chat_store)) -> dict[str, Any]:
    """Start a conversation; the greeting and quick actions come back immediately."""
    store.purge_expired()
    session = store.create()
    logger.info(f"Chat session {session.id} started ({len(store)} active)")
    return session.to_dict()


@router.get("/sessions/{session_id}", response_model=ChatSessionResponse)
async def get_session(session_id: str, store: ChatSessionStore = Depends(get_chat_store)) -> dict[str, Any]:
    """Current slots, message log, typing flag and navigation state."""
    return _get_session(store, session_id).to_dict()


@router.post("/sessions/{session_id}/messages", response_model=SendMessageResponse)
async def send_message(
    session_id: str,
    body: SendMessageRequest,
    store: ChatSessionStore = Depends(get_chat_store),
    user: AuthUser | None = Depends(get_optional_user),
) -> dict[str, Any]:
    """Send one user input and return the messages it produced."""
    session = _get_session(store, session_id)

    try:
        messages = await session.send(body.text, is_authenticated=user is not None)
    except SessionClosedError as e:
        raise HTTPException(status_code=409, detail=str(e)) from e

    navigation = session.turn_navigation if messages else None
    return {
        "session_id": session.id,
        "mode": session.state.mode,
        "messages": [m.to_dict() for m in messages or []],
        "navigation": navigation.to_dict() if navigation else None,
    }


@router.delete("/sessions/{session_id}", status_code=204)
async def close_session(session_id: str, store: ChatSessionStore = Depends(get_chat_store)) -> Response:
    """End a conversation and cancel any redirect still pending."""
    try:
        store.close(session_id)
    except SessionNotFoundError as e:
        raise HTTPException(status_code=404, detail=str(e)) from e
    return Response(status_code=204)
