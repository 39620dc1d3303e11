from __future__ import annotations

from ..models import HINT_MAX_LENGTH
from .store import HINT_SLOTS


CODE_MAX_LENGTH = 50


class InvalidInput(ValueError):
    """Malformed request input, rejected before storage is touched."""


def validate_code(code) -> str:
    # Generated codes are 6 hex chars; anything over the cap can never match.
    if not code or not isinstance(code, str) or len(code) > CODE_MAX_LENGTH:
        raise InvalidInput("Invalid code format")
    return code


def validate_hint_number(hint_number) -> int:
    allowed = {str(slot): slot for slot in HINT_SLOTS}
    if isinstance(hint_number, bool) or str(hint_number) not in allowed:
        raise InvalidInput("Invalid hint number")
    return allowed[str(hint_number)]


def validate_hint_text(text) -> str:
    if not text or not isinstance(text, str) or len(text) > HINT_MAX_LENGTH:
        raise InvalidInput(f"Hint must be between 1 and {HINT_MAX_LENGTH} characters")
    return text
