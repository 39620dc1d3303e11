from __future__ import annotations

from dataclasses import dataclass

from .store import ParticipantRecord, ParticipantStore
from .validation import validate_code


@dataclass(frozen=True)
class Resolution:
    participant: ParticipantRecord
    gives_to: ParticipantRecord
    # Absent only while a regeneration is half written.
    given_by: ParticipantRecord | None


def _with_recipient(store: ParticipantStore, code: str) -> tuple[ParticipantRecord, ParticipantRecord] | None:
    me = store.find_by_code(code)
    if me is None or me.gives_to_id is None:
        return None
    recipient = store.find_by_id(me.gives_to_id)
    if recipient is None:
        return None
    return me, recipient


def resolve_by_code(store: ParticipantStore, code) -> Resolution | None:
    """
    Returns who the code holder gives to and who gives to them, or None when
    the code does not belong to an assigned participant.
    """
    found = _with_recipient(store, validate_code(code))
    if found is None:
        return None
    me, recipient = found
    return Resolution(participant=me, gives_to=recipient, given_by=store.find_giver_of(me.id))


def reveal_santa_for(store: ParticipantStore, code) -> tuple[str, str] | None:
    """
    Forward read: the code's owner and the person they give to. A recipient
    who finds their Santa's code on paper gets (santa name, own name).
    """
    found = _with_recipient(store, validate_code(code))
    if found is None:
        return None
    santa, recipient = found
    return santa.name, recipient.name
