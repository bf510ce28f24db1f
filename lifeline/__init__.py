"""
LifeLine - Core logic for blood-donation coordination.

This package contains:
- chatbot: Emergency triage dialogue engine and chat sessions
- camps: Donation camp listing (partition, search, sort)
- data: PocketBase repositories for donors, camps and the watchlist
"""

from lifeline.camps.listing import list_camps, partition_camps
from lifeline.chatbot.engine import respond
from lifeline.chatbot.session import ChatSession

__all__ = [
    "ChatSession",
    "list_camps",
    "partition_camps",
    "respond",
]
