"""
Dialogue Engine - Rule-based triage for emergency blood requests.

`respond` is a pure transition: given the current dialogue state and one user
input it returns the next state and the bot reply. The only side effect is
the donor lookup, which is injected so the engine can be exercised without
PocketBase.

Transitions, in priority order:
1. Normal + panic keyword        -> AwaitingBloodGroup, offer the 8 groups
2. AwaitingBloodGroup            -> AwaitingCity on a valid group, else re-prompt
3. AwaitingCity                  -> donor lookup, back to Normal
4. "Notify Me"                   -> login or results view, slots cleared
5. Keyword replies               -> canned reply, optional redirect
6. Fallback                      -> "not understood" + quick actions
"""

from __future__ import annotations

import logging
from collections.abc import Awaitable, Callable, Iterable, Sequence

from lifeline.errors import DonorLookupError

from . import constants as c
from .constants import View
from .models import (
    BLOOD_GROUP_ACTIONS,
    NOTIFY_ME_ACTIONS,
    QUICK_ACTIONS,
    AlertContext,
    AwaitingBloodGroup,
    AwaitingCity,
    BotReply,
    DialogueState,
    DonorSummary,
    NormalState,
    TurnResult,
)

logger = logging.getLogger(__name__)

DonorLookup = Callable[[str], Awaitable[Sequence[DonorSummary]]]


# ============================================================================
# Helpers
# ============================================================================


def contains_any(text: str, keywords: Iterable[str]) -> bool:
    """True if any keyword occurs in text (case-insensitive)."""
    lowered = text.lower()
    return any(keyword in lowered for keyword in keywords)


def parse_blood_group(text: str) -> str | None:
    """Return the canonical blood group for text, or None if it is not one of the eight."""
    candidate = text.strip().upper()
    return candidate if candidate in c.BLOOD_GROUPS else None


def normalize_city(text: str) -> str:
    """Trim and capitalize: "  mUMBAI " -> "Mumbai".

    Idempotent: normalize_city(normalize_city(x)) == normalize_city(x).
    """
    city = text.strip()
    return city[:1].upper() + city[1:].lower()


def match_donors_by_city(donors: Iterable[DonorSummary], city: str) -> list[DonorSummary]:
    """Donors whose stored city contains `city` (case-insensitive), in input order."""
    needle = city.lower()
    return [donor for donor in donors if needle in (donor.city or "").lower()]


def is_cancel(text: str) -> bool:
    return text.strip().lower() in c.CANCEL_KEYWORDS


# ============================================================================
# Transitions
# ============================================================================


def _start_emergency() -> TurnResult:
    return TurnResult(
        state=AwaitingBloodGroup(),
        reply=BotReply(text=c.PANIC_TEXT, actions=BLOOD_GROUP_ACTIONS),
    )


def _capture_blood_group(user_text: str) -> TurnResult:
    blood_group = parse_blood_group(user_text)
    if blood_group is None:
        return TurnResult(
            state=AwaitingBloodGroup(),
            reply=BotReply(text=c.INVALID_BLOOD_GROUP_TEXT, actions=BLOOD_GROUP_ACTIONS),
        )

    return TurnResult(
        state=AwaitingCity(blood_group=blood_group),
        reply=BotReply(text=c.ASK_CITY_TEXT.format(blood_group=blood_group)),
    )


async def _search_donors(state: AwaitingCity, user_text: str, donor_lookup: DonorLookup) -> TurnResult:
    city = normalize_city(user_text)
    blood_group = state.blood_group
    interim = c.SEARCHING_TEXT.format(city=city)

    try:
        candidates = await donor_lookup(blood_group)
    except DonorLookupError as e:
        logger.error(f"Error searching donors for {blood_group} in {city}: {e}")
        return TurnResult(
            state=NormalState(),
            reply=BotReply(text=c.SEARCH_ERROR_TEXT),
            interim=interim,
        )

    matched = match_donors_by_city(candidates, city)
    logger.info(f"Donor search {blood_group} in {city}: {len(matched)} of {len(candidates)} candidates matched")
    next_state = NormalState(alert=AlertContext(blood_group=blood_group, city=city))

    if matched:
        return TurnResult(
            state=next_state,
            reply=BotReply(
                text=c.DONORS_FOUND_TEXT.format(count=len(matched), city=city),
                donors=tuple(matched[: c.MAX_DONORS_IN_REPLY]),
                redirect=View.RESULTS,
            ),
            interim=interim,
        )

    return TurnResult(
        state=next_state,
        reply=BotReply(
            text=c.NO_DONORS_TEXT.format(blood_group=blood_group, city=city),
            actions=NOTIFY_ME_ACTIONS,
        ),
        interim=interim,
    )


def _notify_me(state: DialogueState, is_authenticated: bool) -> TurnResult:
    # Slots are cleared whichever branch is taken
    if not is_authenticated:
        return TurnResult(state=NormalState(), reply=BotReply(text=c.LOGIN_REQUIRED_TEXT, redirect=View.LOGIN))

    if state.blood_group and state.city:
        return TurnResult(state=NormalState(), reply=BotReply(text=c.CONFIRM_ALERT_TEXT, redirect=View.RESULTS))

    return TurnResult(
        state=NormalState(),
        reply=BotReply(text=c.MISSING_ALERT_CONTEXT_TEXT, actions=QUICK_ACTIONS),
    )


def _keyword_reply(state: NormalState, user_text: str) -> TurnResult:
    if contains_any(user_text, c.GREETING_KEYWORDS):
        reply = BotReply(text=c.HELLO_TEXT, actions=QUICK_ACTIONS)
    elif contains_any(user_text, c.ELIGIBILITY_KEYWORDS):
        reply = BotReply(text=c.ELIGIBILITY_TEXT, redirect=View.DASHBOARD)
    elif contains_any(user_text, c.DONATION_KEYWORDS):
        reply = BotReply(text=c.DONATE_TEXT, redirect=View.CAMPS)
    elif contains_any(user_text, c.CAMP_KEYWORDS):
        reply = BotReply(text=c.CAMPS_TEXT, redirect=View.CAMPS)
    else:
        reply = BotReply(text=c.FALLBACK_TEXT, actions=QUICK_ACTIONS)

    return TurnResult(state=state, reply=reply)


async def respond(
    state: DialogueState,
    user_text: str,
    donor_lookup: DonorLookup,
    is_authenticated: bool = False,
) -> TurnResult:
    """Apply one user input to the dialogue.

    Args:
        state: Current dialogue state
        user_text: Raw text typed or submitted by a quick action
        donor_lookup: Async callable returning eligible donors for a blood type
        is_authenticated: Whether a user is signed in (gates "Notify Me")

    Returns:
        TurnResult with the next state, the reply and an optional interim line
    """
    if isinstance(state, NormalState) and contains_any(user_text, c.PANIC_KEYWORDS):
        logger.debug("Panic keyword detected, starting emergency flow")
        return _start_emergency()

    if isinstance(state, AwaitingBloodGroup | AwaitingCity) and is_cancel(user_text):
        logger.debug("Emergency flow cancelled by user")
        return TurnResult(state=NormalState(), reply=BotReply(text=c.CANCELLED_TEXT, actions=QUICK_ACTIONS))

    if isinstance(state, AwaitingBloodGroup):
        return _capture_blood_group(user_text)

    if isinstance(state, AwaitingCity):
        return await _search_donors(state, user_text, donor_lookup)

    if c.NOTIFY_ME in user_text:
        return _notify_me(state, is_authenticated)

    return _keyword_reply(state, user_text)
