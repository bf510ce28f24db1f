"""
Chat assistant - emergency triage over a rule-based dialogue.

- engine: pure transition function over the dialogue state
- session: message log, typing flag and cancellable timers for one visitor
- session_store: in-memory registry with idle expiry
"""

from .constants import BLOOD_GROUPS, View
from .engine import match_donors_by_city, normalize_city, parse_blood_group, respond
from .models import (
    AlertContext,
    AwaitingBloodGroup,
    AwaitingCity,
    DialogueState,
    DonorSummary,
    Message,
    Navigation,
    NormalState,
    QuickAction,
)
from .session import ChatSession
from .session_store import ChatSessionStore

__all__ = [
    "BLOOD_GROUPS",
    "AlertContext",
    "AwaitingBloodGroup",
    "AwaitingCity",
    "ChatSession",
    "ChatSessionStore",
    "DialogueState",
    "DonorSummary",
    "Message",
    "Navigation",
    "NormalState",
    "QuickAction",
    "View",
    "match_donors_by_city",
    "normalize_city",
    "parse_blood_group",
    "respond",
]
