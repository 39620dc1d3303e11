from __future__ import annotations

from .store import ParticipantStore
from .validation import validate_code, validate_hint_number, validate_hint_text


def save_hint(store: ParticipantStore, code, hint_number, text) -> bool:
    """Overwrite one of the caller's three hint slots. Last write wins."""
    code = validate_code(code)
    slot = validate_hint_number(hint_number)
    text = validate_hint_text(text)
    return store.update_hint(code, slot, text)


def get_hints_for(store: ParticipantStore, code) -> dict[str, str | None] | None:
    """The hints the code holder's Secret Santa left for them."""
    me = store.find_by_code(validate_code(code))
    if me is None:
        return None
    santa = store.find_giver_of(me.id)
    if santa is None:
        return None
    return santa.hints
