"""
Pydantic schemas for the LifeLine API.

Re-exports all schemas for convenient importing.
"""

from __future__ import annotations

from .camps import CampListResponse, CampLocationModel, CampModel
from .chat import (
    ChatSessionResponse,
    DonorSummaryModel,
    MessageModel,
    NavigationModel,
    QuickActionModel,
    SendMessageRequest,
    SendMessageResponse,
)
from .donors import DonorSearchResponse, WatchRequestCreate, WatchRequestResponse

__all__ = [
    # Chat
    "ChatSessionResponse",
    "DonorSummaryModel",
    "MessageModel",
    "NavigationModel",
    "QuickActionModel",
    "SendMessageRequest",
    "SendMessageResponse",
    # Camps
    "CampListResponse",
    "CampLocationModel",
    "CampModel",
    # Donors
    "DonorSearchResponse",
    "WatchRequestCreate",
    "WatchRequestResponse",
]
