"""Constants for the chat assistant: blood groups, keywords, canned replies."""

from __future__ import annotations

from enum import Enum

BLOOD_GROUPS: tuple[str, ...] = ("A+", "A-", "B+", "B-", "AB+", "AB-", "O+", "O-")

# Matched as case-insensitive substrings, checked in this order
PANIC_KEYWORDS: tuple[str, ...] = ("urgent", "emergency", "need blood", "help")
CANCEL_KEYWORDS: frozenset[str] = frozenset({"cancel", "stop", "exit", "quit"})
GREETING_KEYWORDS: tuple[str, ...] = ("hello", "hi")
ELIGIBILITY_KEYWORDS: tuple[str, ...] = ("eligible", "eligibility")
DONATION_KEYWORDS: tuple[str, ...] = ("donate", "donation")
CAMP_KEYWORDS: tuple[str, ...] = ("camp", "location")

NOTIFY_ME = "Notify Me"
NOTIFY_ME_LABEL = "Notify Me When Available 🔔"

# Donor cards shown inline in the chat; the results view lists everything
MAX_DONORS_IN_REPLY = 3

DEFAULT_TYPING_DELAY_SECONDS = 1.0
DEFAULT_REDIRECT_DELAY_SECONDS = 3.5


class View(str, Enum):
    """Client views the assistant can send the user to."""

    RESULTS = "results"
    LOGIN = "login"
    DASHBOARD = "dashboard"
    CAMPS = "camps"


VIEW_PATHS: dict[View, str] = {
    View.RESULTS: "/search",
    View.LOGIN: "/login",
    View.DASHBOARD: "/dashboard",
    View.CAMPS: "/camps",
}


class Sender(str, Enum):
    USER = "user"
    BOT = "bot"


GREETING_TEXT = "Hello! How can I help you today?"
PANIC_TEXT = "🚨 I'm here to help. Please select the required blood group below."
INVALID_BLOOD_GROUP_TEXT = "Please select a valid blood group from the options."
ASK_CITY_TEXT = "Got it ({blood_group}). Please tell me your city or location to find nearby donors."
SEARCHING_TEXT = "Searching for heroes in {city}..."
DONORS_FOUND_TEXT = 'Found {count} potential donor(s) matching "{city}"!'
NO_DONORS_TEXT = 'I couldn\'t find any registered donors for {blood_group} in "{city}" right now.'
SEARCH_ERROR_TEXT = "Sorry, I encountered an error while searching. Please try again later."
CANCELLED_TEXT = "No problem, I've stopped the emergency search. What else can I help you with?"
LOGIN_REQUIRED_TEXT = "You need to be logged in to set alerts. Redirecting you to login..."
CONFIRM_ALERT_TEXT = "Redirecting to the Search page. Please click the 'Notify Me' button there to confirm your alert."
MISSING_ALERT_CONTEXT_TEXT = "I don't have the details to set an alert. Please try the Emergency Help flow again."
HELLO_TEXT = "Hello! I'm here to assist. You can use the buttons below for quick actions."
ELIGIBILITY_TEXT = (
    "To be eligible: 18-65 years old, >50kg weight, healthy. I'm redirecting you to the eligibility quiz."
)
DONATE_TEXT = "You can donate by finding a nearby camp. Redirecting you to the camps locator."
CAMPS_TEXT = "Searching for donation camps... Redirecting you to the map."
FALLBACK_TEXT = "I'm not sure I understand. Would you like Emergency Help?"
