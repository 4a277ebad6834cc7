"""
Unit tests for the net model and markings.

:return : Test suite.
:return: Unit tests for Place, Transition, Arc, Net and Marking.
"""

import pytest
from pn_inheritance.errors import MalformedModel
from pn_inheritance.models.marking import Marking
from pn_inheritance.models.net import Arc, Net, Place, Transition


def test_place_identity_by_id() -> None:
    """
    Test that places compare by id only.

    :return : None.
    :return: Test assertion.
    """
    assert Place("P1", 1) == Place("P1", 5)
    assert hash(Place("P1", 1)) == hash(Place("P1", 5))
    assert Place("P1", 1) != Place("P2", 1)


def test_arc_identity_by_triple() -> None:
    """
    Test that arcs compare by source, destination and multiplicity.

    :return : None.
    :return: Test assertion.
    """
    assert Arc("P1", "T1", 2) == Arc("P1", "T1", 2)
    assert Arc("P1", "T1", 1) != Arc("P1", "T1", 2)
    assert len({Arc("P1", "T1"), Arc("P1", "T1", 1)}) == 1


def test_invalid_entities_rejected() -> None:
    with pytest.raises(MalformedModel):
        Place("P1", -1)
    with pytest.raises(MalformedModel):
        Arc("P1", "T1", 0)


def test_marking_ignores_zero_entries() -> None:
    """
    Test canonical equality and hashing of markings.

    :return : None.
    :return: Test assertion.
    """
    m1 = Marking({"P1": 1, "P2": 0})
    m2 = Marking({"P1": 1})

    assert m1 == m2
    assert hash(m1) == hash(m2)
    assert m1 == {"P1": 1}
    assert Marking({"P2": 0, "P1": 1}) == Marking({"P1": 1, "P2": 0})
    assert m1 != Marking({"P1": 2})
    assert {m1: "state"}[m2] == "state"


def test_equal_markings_expose_same_places() -> None:
    m1 = Marking({"P1": 1, "P3": 0})
    m2 = Marking({"P1": 1})

    assert len(m1) == len(m2) == 1
    assert list(m1) == list(m2) == ["P1"]
    assert "P3" not in m1
    with pytest.raises(KeyError):
        m1["P3"]
    assert m1.tokens("P3") == 0
    assert m1.to_dict() == {"P1": 1}
    assert str(m1) == "[P1=1]"


def test_marking_tokens_and_delta() -> None:
    marking = Marking({"P1": 2})

    updated = marking.with_delta({"P1": -2, "P2": 3})

    assert marking.tokens("P1") == 2
    assert marking.tokens("missing") == 0
    assert updated.tokens("P1") == 0
    assert updated.tokens("P2") == 3
    assert updated.support() == frozenset({"P2"})


def test_marking_rejects_negative_counts() -> None:
    with pytest.raises(ValueError):
        Marking({"P1": -1})
    with pytest.raises(ValueError):
        Marking({"P1": 0}).with_delta({"P1": -1})


def test_net_initial_marking_and_arcs(parent_net: Net) -> None:
    """
    Test initial marking and arc lookup of a net.

    :return : None.
    :return: Test assertion.
    """
    assert parent_net.initial_marking() == Marking({"P1": 1})
    assert parent_net.input_arcs("T1") == [Arc("P1", "T1", 1)]
    assert parent_net.output_arcs("T1") == [Arc("T1", "P1", 1)]
    assert parent_net.place_ids() == {"P1"}
    assert parent_net.transition_ids() == {"T1"}


def test_net_validation(parent_net: Net) -> None:
    """
    Test explicit structural validation.

    :return : None.
    :return: Test assertion.
    """
    parent_net.validate()

    dangling = Net(
        places=[Place("P1", 1)],
        transitions=[Transition("T1")],
        arcs=[Arc("P1", "T1"), Arc("T1", "P9")],
    )
    with pytest.raises(MalformedModel):
        dangling.validate()

    duplicate = Net(places=[Place("P1", 1), Place("P1", 0)])
    with pytest.raises(MalformedModel):
        duplicate.validate()

    shared = Net(places=[Place("X")], transitions=[Transition("X")])
    with pytest.raises(MalformedModel):
        shared.validate()


def test_net_is_subnet_of(parent_net: Net, child_with_isolated_transition: Net) -> None:
    assert parent_net.is_subnet_of(child_with_isolated_transition)
    assert not child_with_isolated_transition.is_subnet_of(parent_net)


def test_net_serialization(child_with_silent_detour: Net) -> None:
    """
    Test Net dictionary serialization.

    :return : None.
    :return: Test assertion.
    """
    restored = Net.from_dict(child_with_silent_detour.to_dict())

    assert restored == child_with_silent_detour
    assert [p.tokens for p in restored.places] == [1, 0]
    assert restored.name == "child_b"
