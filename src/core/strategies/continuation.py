"""Detection of replies to a "show more results?" offer."""
import re

from ..models.chat import ContinuationSignal

# Longer messages are treated as new queries.
MAX_SIGNAL_LENGTH = 20

AFFIRMATIVE_PATTERN = re.compile(
    r"\b(yes|yeah|yep|sure|ok|okay|show|more|see them|please)\b", re.I
)
NEGATIVE_PATTERN = re.compile(r"\b(no|nope|nah|don'?t|not now|skip)\b", re.I)


def detect_continuation(message: str) -> ContinuationSignal:
    text = (message or "").strip().lower()
    if not text or len(text) >= MAX_SIGNAL_LENGTH:
        return ContinuationSignal.NONE

    is_yes = bool(AFFIRMATIVE_PATTERN.search(text))
    is_no = bool(NEGATIVE_PATTERN.search(text))

    if is_yes and not is_no:
        return ContinuationSignal.AFFIRMATIVE
    if is_no and not is_yes:
        return ContinuationSignal.NEGATIVE
    return ContinuationSignal.NONE
