from __future__ import annotations

import itertools
from abc import ABC, abstractmethod
from dataclasses import dataclass, replace

from ..extensions import db
from ..models import Participant


HINT_SLOTS = (1, 2, 3)


@dataclass(frozen=True)
class ParticipantRecord:
    id: int
    name: str
    code: str
    gives_to_id: int | None = None
    hint1: str | None = None
    hint2: str | None = None
    hint3: str | None = None

    @property
    def hints(self) -> dict[str, str | None]:
        return {"hint1": self.hint1, "hint2": self.hint2, "hint3": self.hint3}


class ParticipantStore(ABC):
    """
    Storage operations the services need. Writes made by replace_roster and
    assign_recipients only become durable on commit().
    """

    @abstractmethod
    def replace_roster(self, entries: list[tuple[str, str]]) -> list[int]:
        """Drop every participant and insert (name, code) pairs; returns new ids in order."""

    @abstractmethod
    def assign_recipients(self, mapping: dict[int, int]) -> None:
        ...

    def commit(self) -> None:
        pass

    def rollback(self) -> None:
        pass

    @abstractmethod
    def find_by_code(self, code: str) -> ParticipantRecord | None:
        ...

    @abstractmethod
    def find_by_id(self, participant_id: int) -> ParticipantRecord | None:
        ...

    @abstractmethod
    def find_giver_of(self, participant_id: int) -> ParticipantRecord | None:
        """The participant whose gives_to_id points at participant_id."""

    @abstractmethod
    def update_hint(self, code: str, slot: int, text: str) -> bool:
        """Overwrite one hint slot. False when no participant owns the code."""

    @abstractmethod
    def list_all(self) -> list[ParticipantRecord]:
        """All participants ordered by name."""


def _to_record(p: Participant | None) -> ParticipantRecord | None:
    if p is None:
        return None
    return ParticipantRecord(
        id=p.id,
        name=p.name,
        code=p.code,
        gives_to_id=p.gives_to_id,
        hint1=p.hint1,
        hint2=p.hint2,
        hint3=p.hint3,
    )


class SqlParticipantStore(ParticipantStore):
    """Backed by the Flask-SQLAlchemy session of the current app."""

    def replace_roster(self, entries: list[tuple[str, str]]) -> list[int]:
        Participant.query.delete()
        rows = [Participant(name=name, code=code) for name, code in entries]
        db.session.add_all(rows)
        db.session.flush()
        return [p.id for p in rows]

    def assign_recipients(self, mapping: dict[int, int]) -> None:
        id_map = {p.id: p for p in Participant.query.filter(Participant.id.in_(list(mapping))).all()}
        for giver_id, receiver_id in mapping.items():
            id_map[giver_id].gives_to = id_map[receiver_id]

    def commit(self) -> None:
        db.session.commit()

    def rollback(self) -> None:
        db.session.rollback()

    def find_by_code(self, code: str) -> ParticipantRecord | None:
        return _to_record(Participant.query.filter_by(code=code).first())

    def find_by_id(self, participant_id: int) -> ParticipantRecord | None:
        return _to_record(db.session.get(Participant, participant_id))

    def find_giver_of(self, participant_id: int) -> ParticipantRecord | None:
        return _to_record(Participant.query.filter_by(gives_to_id=participant_id).first())

    def update_hint(self, code: str, slot: int, text: str) -> bool:
        if slot not in HINT_SLOTS:
            raise ValueError(f"Unknown hint slot: {slot}")
        updated = Participant.query.filter_by(code=code).update(
            {f"hint{slot}": text}, synchronize_session=False
        )
        db.session.commit()
        return updated > 0

    def list_all(self) -> list[ParticipantRecord]:
        rows = Participant.query.order_by(Participant.name.asc(), Participant.id.asc()).all()
        return [_to_record(p) for p in rows]


class InMemoryParticipantStore(ParticipantStore):
    """Dict backed store for tests and scripting. No transactions: writes apply immediately."""

    def __init__(self) -> None:
        self._rows: dict[int, ParticipantRecord] = {}
        self._ids = itertools.count(1)

    def replace_roster(self, entries: list[tuple[str, str]]) -> list[int]:
        self._rows.clear()
        ids = []
        for name, code in entries:
            pid = next(self._ids)
            self._rows[pid] = ParticipantRecord(id=pid, name=name, code=code)
            ids.append(pid)
        return ids

    def assign_recipients(self, mapping: dict[int, int]) -> None:
        for giver_id, receiver_id in mapping.items():
            self._rows[giver_id] = replace(self._rows[giver_id], gives_to_id=receiver_id)

    def find_by_code(self, code: str) -> ParticipantRecord | None:
        return next((r for r in self._rows.values() if r.code == code), None)

    def find_by_id(self, participant_id: int) -> ParticipantRecord | None:
        return self._rows.get(participant_id)

    def find_giver_of(self, participant_id: int) -> ParticipantRecord | None:
        return next((r for r in self._rows.values() if r.gives_to_id == participant_id), None)

    def update_hint(self, code: str, slot: int, text: str) -> bool:
        if slot not in HINT_SLOTS:
            raise ValueError(f"Unknown hint slot: {slot}")
        row = self.find_by_code(code)
        if row is None:
            return False
        self._rows[row.id] = replace(row, **{f"hint{slot}": text})
        return True

    def list_all(self) -> list[ParticipantRecord]:
        return sorted(self._rows.values(), key=lambda r: (r.name, r.id))
