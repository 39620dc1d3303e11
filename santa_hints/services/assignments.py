from __future__ import annotations

import logging
import random
from dataclasses import dataclass

from ..security import generate_code
from .store import ParticipantRecord, ParticipantStore


logger = logging.getLogger(__name__)

_system_random = random.SystemRandom()


class AssignmentError(RuntimeError):
    pass


@dataclass(frozen=True)
class RosterEntry:
    """Admin view row: a participant joined with the name of their recipient."""
    participant: ParticipantRecord
    gives_to_name: str | None


def _unique_codes(count: int) -> list[str]:
    codes: list[str] = []
    seen: set[str] = set()
    while len(codes) < count:
        code = generate_code()
        if code in seen:
            continue
        seen.add(code)
        codes.append(code)
    return codes


def cycle_assignment(ids: list[int], rng=None) -> dict[int, int]:
    """
    Shuffle the ids and point each one at its successor, wrapping the last
    back to the first. The result is a single cycle over every id, so nobody
    draws themselves and there are no closed pairs.
    """
    if len(ids) < 2:
        raise AssignmentError("Need at least 2 participants to run assignments.")

    order = list(ids)
    (rng or _system_random).shuffle(order)
    return {giver: order[(i + 1) % len(order)] for i, giver in enumerate(order)}


def regenerate(store: ParticipantStore, roster: list[str], rng=None) -> list[RosterEntry]:
    """
    Replace the live generation: every old participant, code and hint is
    dropped, new codes are issued and a fresh cycle is drawn.
    """
    names = list(roster)
    if len(names) < 2:
        raise AssignmentError("Need at least 2 participants to run assignments.")

    try:
        ids = store.replace_roster(list(zip(names, _unique_codes(len(names)))))
        store.assign_recipients(cycle_assignment(ids, rng))
        store.commit()
    except Exception:
        store.rollback()
        raise

    logger.info("Regenerated codes and assignments for %d participants", len(names))
    return list_participants(store)


def list_participants(store: ParticipantStore) -> list[RosterEntry]:
    rows = store.list_all()
    names_by_id = {p.id: p.name for p in rows}
    return [RosterEntry(participant=p, gives_to_name=names_by_id.get(p.gives_to_id)) for p in rows]
