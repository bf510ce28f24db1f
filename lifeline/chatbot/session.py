"""
Chat Session - One visitor's conversation with the assistant.

Holds the dialogue state, the append-only message log, the typing flag and
the timers the conversation schedules (typing delay, deferred redirect).
All timers are asyncio tasks owned by the session and cancelled by close(),
so nothing fires after the session is torn down.
"""

from __future__ import annotations

import asyncio
import itertools
import logging
import time
import uuid
from collections.abc import Callable, Coroutine
from typing import Any

from lifeline.errors import SessionClosedError

from .constants import (
    DEFAULT_REDIRECT_DELAY_SECONDS,
    DEFAULT_TYPING_DELAY_SECONDS,
    GREETING_TEXT,
    Sender,
    View,
)
from .engine import DonorLookup, respond
from .models import (
    QUICK_ACTIONS,
    BotReply,
    DialogueState,
    Message,
    Navigation,
    NormalState,
    state_to_dict,
)

logger = logging.getLogger(__name__)

NavigationCallback = Callable[["ChatSession", Navigation], None]


class ChatSession:
    """Stateful wrapper around the dialogue engine for a single visitor."""

    def __init__(
        self,
        donor_lookup: DonorLookup,
        session_id: str | None = None,
        typing_delay_seconds: float = DEFAULT_TYPING_DELAY_SECONDS,
        redirect_delay_seconds: float = DEFAULT_REDIRECT_DELAY_SECONDS,
        on_navigate: NavigationCallback | None = None,
    ):
        self.id = session_id or uuid.uuid4().hex
        self.state: DialogueState = NormalState()
        self.messages: list[Message] = []
        self.is_typing = False
        self.pending_navigation: Navigation | None = None
        self.navigate_to: View | None = None
        self.turn_navigation: Navigation | None = None
        self.created_at = time.time()
        self.last_activity = self.created_at

        self._donor_lookup = donor_lookup
        self._typing_delay = typing_delay_seconds
        self._redirect_delay = redirect_delay_seconds
        self._on_navigate = on_navigate
        self._ids = itertools.count(1)
        self._turn_lock = asyncio.Lock()
        self._timers: set[asyncio.Task[Any]] = set()
        self._redirect_task: asyncio.Task[None] | None = None
        self._closed = False

        self._append(GREETING_TEXT, Sender.BOT, actions=list(QUICK_ACTIONS))

    @property
    def closed(self) -> bool:
        return self._closed

    def _append(self, text: str, sender: Sender, **kwargs: Any) -> Message:
        message = Message(id=next(self._ids), text=text, sender=sender, **kwargs)
        self.messages.append(message)
        return message

    def _append_reply(self, reply: BotReply) -> Message:
        return self._append(
            reply.text,
            Sender.BOT,
            actions=list(reply.actions) if reply.actions is not None else None,
            donors=list(reply.donors) if reply.donors is not None else None,
        )

    def _spawn(self, coro: Coroutine[Any, Any, Any]) -> asyncio.Task[Any]:
        task = asyncio.create_task(coro)
        self._timers.add(task)
        task.add_done_callback(self._timers.discard)
        return task

    async def send(self, text: str, is_authenticated: bool = False) -> list[Message] | None:
        """Process one user input.

        Args:
            text: Typed text or a quick-action value
            is_authenticated: Whether the visitor is signed in

        Returns:
            Messages appended by this turn (user, interim, reply), or None for
            blank input

        Raises:
            SessionClosedError: If the session was closed before or during the turn
        """
        if self._closed:
            raise SessionClosedError(self.id)
        if not text.strip():
            return None

        async with self._turn_lock:
            if self._closed:
                raise SessionClosedError(self.id)

            self.last_activity = time.time()
            self.turn_navigation = None
            start = len(self.messages)
            self._append(text, Sender.USER)
            self.is_typing = True

            try:
                if self._typing_delay > 0:
                    await self._spawn(asyncio.sleep(self._typing_delay))
                result = await respond(self.state, text, self._donor_lookup, is_authenticated)
            except asyncio.CancelledError:
                if self._closed:
                    raise SessionClosedError(self.id) from None
                raise
            finally:
                self.is_typing = False

            if self._closed:
                raise SessionClosedError(self.id)

            self.state = result.state
            if result.interim:
                self._append(result.interim, Sender.BOT, is_system=True)
            self._append_reply(result.reply)

            if result.reply.redirect is not None:
                self._schedule_navigation(result.reply.redirect)

            logger.debug(f"Session {self.id} turn complete, mode={self.state.mode}")
            return self.messages[start:]

    def _schedule_navigation(self, view: View) -> None:
        if self._redirect_task is not None and not self._redirect_task.done():
            self._redirect_task.cancel()

        navigation = Navigation(view=view, delay_seconds=self._redirect_delay)
        self.pending_navigation = navigation
        self.turn_navigation = navigation
        self.navigate_to = None
        self._redirect_task = self._spawn(self._navigate_later(navigation))
        logger.debug(f"Session {self.id} scheduled redirect to {view.value} in {self._redirect_delay}s")

    async def _navigate_later(self, navigation: Navigation) -> None:
        await asyncio.sleep(navigation.delay_seconds)
        self.pending_navigation = None
        self.navigate_to = navigation.view
        logger.info(f"Session {self.id} redirecting to {navigation.view.value}")
        if self._on_navigate is not None:
            self._on_navigate(self, navigation)

    def close(self) -> None:
        """Cancel outstanding timers and reject further input."""
        if self._closed:
            return
        self._closed = True
        outstanding = list(self._timers)
        for task in outstanding:
            task.cancel()
        self.pending_navigation = None
        logger.debug(f"Session {self.id} closed, cancelled {len(outstanding)} timer(s)")

    def to_dict(self) -> dict[str, Any]:
        return {
            "session_id": self.id,
            **state_to_dict(self.state),
            "is_typing": self.is_typing,
            "messages": [m.to_dict() for m in self.messages],
            "pending_navigation": self.pending_navigation.to_dict() if self.pending_navigation else None,
            "navigate_to": self.navigate_to.value if self.navigate_to else None,
        }
