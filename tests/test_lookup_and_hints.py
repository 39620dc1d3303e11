import pytest

from santa_hints.services.assignments import regenerate
from santa_hints.services.hints import get_hints_for, save_hint
from santa_hints.services.lookup import resolve_by_code, reveal_santa_for
from santa_hints.services.validation import InvalidInput

from conftest import FixedOrder


@pytest.fixture
def abc(memory_store):
    """A, B, C with edges B->C, C->A, A->B; returns {name: code}."""
    entries = regenerate(memory_store, ["A", "B", "C"], rng=FixedOrder([2, 3, 1]))
    return {e.participant.name: e.participant.code for e in entries}


def test_resolve_by_code(memory_store, abc):
    resolution = resolve_by_code(memory_store, abc["A"])
    assert resolution.participant.name == "A"
    assert resolution.gives_to.name == "B"
    assert resolution.given_by.name == "C"


def test_resolve_unknown_code(memory_store, abc):
    unknown = next(c for c in ("000000", "111111") if c not in abc.values())
    assert resolve_by_code(memory_store, unknown) is None


@pytest.mark.parametrize("code", [None, "", 123, "x" * 51])
def test_resolve_rejects_malformed_code(memory_store, code):
    with pytest.raises(InvalidInput):
        resolve_by_code(memory_store, code)


def test_resolve_without_assignment_is_not_found(memory_store):
    memory_store.replace_roster([("Lonely", "abc123")])
    assert resolve_by_code(memory_store, "abc123") is None


def test_resolve_tolerates_missing_giver(memory_store):
    a, b = memory_store.replace_roster([("A", "aaaaaa"), ("B", "bbbbbb")])
    memory_store.assign_recipients({a: b})
    resolution = resolve_by_code(memory_store, "aaaaaa")
    assert resolution.gives_to.name == "B"
    assert resolution.given_by is None


def test_hint_round_trip_reaches_recipient(memory_store, abc):
    # B gives to C, so C reads B's hints
    assert save_hint(memory_store, abc["B"], 2, "behind the sofa") is True
    hints = get_hints_for(memory_store, abc["C"])
    assert hints == {"hint1": None, "hint2": "behind the sofa", "hint3": None}


def test_hint_last_write_wins(memory_store, abc):
    save_hint(memory_store, abc["A"], "1", "garage")
    save_hint(memory_store, abc["A"], "1", "attic")
    assert get_hints_for(memory_store, abc["B"])["hint1"] == "attic"


def test_hint_length_boundary(memory_store, abc):
    assert save_hint(memory_store, abc["A"], 3, "x" * 500) is True
    with pytest.raises(InvalidInput):
        save_hint(memory_store, abc["A"], 3, "x" * 501)


@pytest.mark.parametrize("hint_number", [0, 4, "hint1", None, True, 1.5])
def test_hint_number_must_be_a_slot(memory_store, abc, hint_number):
    with pytest.raises(InvalidInput):
        save_hint(memory_store, abc["A"], hint_number, "somewhere")


def test_empty_hint_rejected(memory_store, abc):
    with pytest.raises(InvalidInput):
        save_hint(memory_store, abc["A"], 1, "")


def test_save_hint_unknown_code(memory_store, abc):
    unknown = next(c for c in ("000000", "111111") if c not in abc.values())
    assert save_hint(memory_store, unknown, 1, "nowhere") is False


def test_get_hints_unknown_code(memory_store, abc):
    unknown = next(c for c in ("000000", "111111") if c not in abc.values())
    assert get_hints_for(memory_store, unknown) is None


def test_reveal_reads_forward_edge(memory_store, abc):
    # C finds B's code on paper: B is the santa, C the recipient
    assert reveal_santa_for(memory_store, abc["B"]) == ("B", "C")


def test_reveal_unknown_code(memory_store, abc):
    unknown = next(c for c in ("000000", "111111") if c not in abc.values())
    assert reveal_santa_for(memory_store, unknown) is None
