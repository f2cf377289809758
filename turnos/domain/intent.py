"""Reply Intent Detection.

Classifies a patient's free-text WhatsApp reply to a reminder as a
confirmation, a cancellation or something we cannot interpret.
"""

import re
from enum import Enum


class ReplyIntent(str, Enum):
    """Intención de la respuesta del paciente."""

    CONFIRM = "confirm"
    CANCEL = "cancel"
    UNKNOWN = "unknown"


CONFIRM_KEYWORDS = [
    "confirmar",
    "confirmo",
    "si",
    "sí",
    "ok",
    "dale",
    "listo",
    "voy",
    "asisto",
    "confirmar turno",
    "1",
]
CANCEL_KEYWORDS = ["cancelar", "cancelo", "no", "no puedo", "no voy", "anular", "2"]


def _keyword_regex(keyword: str) -> re.Pattern[str]:
    # Whole words only: "si" must not match inside "asistir"
    return re.compile(rf"(?<!\w){re.escape(keyword)}(?!\w)")


_CONFIRM_PATTERNS = [_keyword_regex(kw) for kw in CONFIRM_KEYWORDS]
_CANCEL_PATTERNS = [_keyword_regex(kw) for kw in CANCEL_KEYWORDS]


def parse_intent(text: str) -> ReplyIntent:
    """
    Detect the intent of a reply.

    Confirmation keywords are checked first, so a reply carrying both kinds
    ("no voy", "sí, pero no puedo") counts as a confirmation.

    Examples:
        >>> parse_intent("Sí, confirmo")
        <ReplyIntent.CONFIRM: 'confirm'>
        >>> parse_intent("No puedo asistir")
        <ReplyIntent.CANCEL: 'cancel'>
        >>> parse_intent("tal vez")
        <ReplyIntent.UNKNOWN: 'unknown'>
    """
    message = (text or "").strip().lower()
    if not message:
        return ReplyIntent.UNKNOWN

    if any(pattern.search(message) for pattern in _CONFIRM_PATTERNS):
        return ReplyIntent.CONFIRM
    if any(pattern.search(message) for pattern in _CANCEL_PATTERNS):
        return ReplyIntent.CANCEL
    return ReplyIntent.UNKNOWN
