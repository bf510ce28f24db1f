"""
Pydantic schemas for chat assistant endpoints.
"""

from __future__ import annotations

from pydantic import BaseModel, Field


class QuickActionModel(BaseModel):
    """A quick-reply button."""

    label: str = Field(description="Button text")
    value: str = Field(description="Text submitted when the button is pressed")


class DonorSummaryModel(BaseModel):
    """Donor card shown in a chat reply or the results view."""

    id: str = Field(description="PocketBase user ID")
    name: str = Field(description="Donor name (Anonymous Hero if unset)")
    phone: str = Field(description="Contact phone (N/A if unset)")
    blood_type: str = Field(description="ABO/Rh blood group")
    city: str = Field(description="City from the donor profile")


class MessageModel(BaseModel):
    """An entry in the chat log."""

    id: int = Field(description="Sequence number within the session")
    text: str
    sender: str = Field(description="user or bot")
    actions: list[QuickActionModel] | None = Field(None, description="Quick replies offered with this message")
    donors: list[DonorSummaryModel] | None = Field(None, description="Donor cards attached to this message")
    is_system: bool = Field(False, description="Interim status line (e.g. searching)")
    created_at: str = Field(description="ISO8601 UTC timestamp")


class NavigationModel(BaseModel):
    """A redirect the client should perform after a delay."""

    view: str = Field(description="results, login, dashboard or camps")
    path: str = Field(description="Client route for the view")
    delay_seconds: float = Field(description="Seconds to wait before navigating")


class SendMessageRequest(BaseModel):
    """Request body for POST /api/chat/sessions/{session_id}/messages."""

    text: str = Field(max_length=500, description="Typed text or a quick-action value")


class SendMessageResponse(BaseModel):
    """Messages appended by one turn."""

    session_id: str
    mode: str = Field(description="normal or emergency")
    messages: list[MessageModel] = Field(description="User message, interim line (if any) and bot reply")
    navigation: NavigationModel | None = Field(None, description="Redirect requested by this turn")


class ChatSessionResponse(BaseModel):
    """Full state of a chat session."""

    session_id: str
    mode: str = Field(description="normal or emergency")
    blood_group: str | None = Field(None, description="Collected blood group slot")
    city: str | None = Field(None, description="Collected city slot")
    is_typing: bool = Field(description="Bot reply in progress")
    messages: list[MessageModel]
    pending_navigation: NavigationModel | None = Field(None, description="Redirect scheduled but not yet due")
    navigate_to: str | None = Field(None, description="View whose redirect delay has elapsed")
