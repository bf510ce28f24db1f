"""Domain models for the chat assistant.

The dialogue state is a tagged variant. Each variant carries exactly the
slots that are valid in it, so "blood group set but no city" cannot be
confused with "nothing collected yet".
"""

from __future__ import annotations

from dataclasses import dataclass, field
from datetime import UTC, datetime
from typing import Any

from .constants import BLOOD_GROUPS, NOTIFY_ME, NOTIFY_ME_LABEL, VIEW_PATHS, Sender, View

NORMAL_MODE = "normal"
EMERGENCY_MODE = "emergency"


@dataclass(frozen=True)
class QuickAction:
    """A button that submits `value` as if the user typed it."""

    label: str
    value: str

    def to_dict(self) -> dict[str, str]:
        return {"label": self.label, "value": self.value}


QUICK_ACTIONS: tuple[QuickAction, ...] = (
    QuickAction("Emergency Help 🚨", "Emergency Help"),
    QuickAction("Check Eligibility ✅", "Check Eligibility"),
    QuickAction("Find Camps 📍", "Find Camps"),
)

BLOOD_GROUP_ACTIONS: tuple[QuickAction, ...] = tuple(QuickAction(bg, bg) for bg in BLOOD_GROUPS)

NOTIFY_ME_ACTIONS: tuple[QuickAction, ...] = (QuickAction(NOTIFY_ME_LABEL, NOTIFY_ME),)


@dataclass(frozen=True)
class DonorSummary:
    """Read-only view of a donor record, as shown on a donor card."""

    id: str
    name: str
    phone: str
    blood_type: str
    city: str

    def to_dict(self) -> dict[str, str]:
        return {
            "id": self.id,
            "name": self.name,
            "phone": self.phone,
            "blood_type": self.blood_type,
            "city": self.city,
        }


@dataclass(frozen=True)
class AlertContext:
    """Blood group and city of the last completed donor search."""

    blood_group: str
    city: str


@dataclass(frozen=True)
class NormalState:
    """Free conversation. `alert` is kept so a following "Notify Me" has context."""

    alert: AlertContext | None = None

    @property
    def mode(self) -> str:
        return NORMAL_MODE

    @property
    def blood_group(self) -> str | None:
        return self.alert.blood_group if self.alert else None

    @property
    def city(self) -> str | None:
        return self.alert.city if self.alert else None


@dataclass(frozen=True)
class AwaitingBloodGroup:
    """Emergency flow started; waiting for one of the eight blood groups."""

    @property
    def mode(self) -> str:
        return EMERGENCY_MODE

    @property
    def blood_group(self) -> str | None:
        return None

    @property
    def city(self) -> str | None:
        return None


@dataclass(frozen=True)
class AwaitingCity:
    """Blood group collected; waiting for the city to search in."""

    blood_group: str

    @property
    def mode(self) -> str:
        return EMERGENCY_MODE

    @property
    def city(self) -> str | None:
        return None


DialogueState = NormalState | AwaitingBloodGroup | AwaitingCity


def state_to_dict(state: DialogueState) -> dict[str, Any]:
    """Flatten a dialogue state into {mode, blood_group, city}."""
    return {
        "mode": state.mode,
        "blood_group": state.blood_group,
        "city": state.city,
    }


@dataclass(frozen=True)
class Navigation:
    """Deferred navigation to a client view."""

    view: View
    delay_seconds: float

    def to_dict(self) -> dict[str, Any]:
        return {"view": self.view.value, "path": VIEW_PATHS[self.view], "delay_seconds": self.delay_seconds}


@dataclass(frozen=True)
class BotReply:
    """What the engine says back for one user turn."""

    text: str
    actions: tuple[QuickAction, ...] | None = None
    donors: tuple[DonorSummary, ...] | None = None
    redirect: View | None = None


@dataclass(frozen=True)
class TurnResult:
    """Outcome of one engine transition.

    `interim` is a status line shown while the donor lookup runs.
    """

    state: DialogueState
    reply: BotReply
    interim: str | None = None


@dataclass
class Message:
    """An entry in a chat session's message log."""

    id: int
    text: str
    sender: Sender
    actions: list[QuickAction] | None = None
    donors: list[DonorSummary] | None = None
    is_system: bool = False
    created_at: datetime = field(default_factory=lambda: datetime.now(UTC))

    def to_dict(self) -> dict[str, Any]:
        return {
            "id": self.id,
            "text": self.text,
            "sender": self.sender.value,
            "actions": [a.to_dict() for a in self.actions] if self.actions is not None else None,
            "donors": [d.to_dict() for d in self.donors] if self.donors is not None else None,
            "is_system": self.is_system,
            "created_at": self.created_at.isoformat(),
        }
