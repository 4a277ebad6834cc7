"""
Unit tests for the pm4py integration.

:return : Test suite.
:return: Unit tests for pm4py conversion and PNML I/O.
"""

import pytest
from pathlib import Path
from pm4py.objects.petri_net.obj import PetriNet, Marking as PMMarking
from pm4py.objects.petri_net.utils import petri_utils, reachability_graph
from pn_inheritance.analysis.reachability import build_reachability_graph
from pn_inheritance.errors import MalformedModel
from pn_inheritance.inheritance.classifier import InheritanceType, classify
from pn_inheritance.integration.pm4py_adapter import (
    export_pnml,
    import_pnml,
    net_from_pm4py,
    net_to_pm4py,
)
from pn_inheritance.models.net import Arc, Net, Place, Transition


def test_net_to_pm4py(child_with_silent_detour: Net) -> None:
    """
    Test conversion to a pm4py Petri net.

    :return : None.
    :return: Test assertion.
    """
    petri_net, initial_marking = net_to_pm4py(child_with_silent_detour)

    assert len(petri_net.places) == 2
    assert len(petri_net.transitions) == 2
    assert len(petri_net.arcs) == 4
    assert {p.name: count for p, count in initial_marking.items()} == {"P1": 1}
    assert {t.label for t in petri_net.transitions} == {"T1", "T2"}


def test_net_to_pm4py_rejects_dangling_arcs() -> None:
    net = Net(places=[Place("P1", 1)], transitions=[Transition("T1")], arcs=[Arc("T1", "P9")])

    with pytest.raises(MalformedModel):
        net_to_pm4py(net)


def test_net_from_pm4py() -> None:
    """
    Test conversion from a pm4py Petri net with a silent transition.

    :return : None.
    :return: Test assertion.
    """
    petri_net = PetriNet(name="pm")
    source = PetriNet.Place("source")
    sink = PetriNet.Place("sink")
    petri_net.places.update({source, sink})
    visible = PetriNet.Transition("t_register", label="register")
    silent = PetriNet.Transition("t_skip", label=None)
    petri_net.transitions.update({visible, silent})
    petri_utils.add_arc_from_to(source, visible, petri_net, weight=2)
    petri_utils.add_arc_from_to(visible, sink, petri_net)
    petri_utils.add_arc_from_to(source, silent, petri_net)
    petri_utils.add_arc_from_to(silent, sink, petri_net)
    initial_marking = PMMarking()
    initial_marking[source] = 2

    net = net_from_pm4py(petri_net, initial_marking)

    assert net.transition_ids() == {"register", "t_skip"}
    assert {(p.id, p.tokens) for p in net.places} == {("source", 2), ("sink", 0)}
    assert Arc("source", "register", 2) in net.arcs
    assert net_from_pm4py(petri_net, initial_marking, use_labels=False).transition_ids() == {
        "t_register",
        "t_skip",
    }


def test_state_count_matches_pm4py(child_with_silent_detour: Net) -> None:
    petri_net, initial_marking = net_to_pm4py(child_with_silent_detour)

    ts = reachability_graph.construct_reachability_graph(petri_net, initial_marking)

    assert len(ts.states) == len(build_reachability_graph(child_with_silent_detour))


def test_pnml_round_trip(tmp_path: Path, parent_net: Net, child_with_silent_detour: Net) -> None:
    """
    Test PNML export and import through pm4py.

    :return : None.
    :return: Test assertion.
    """
    parent_path = tmp_path / "parent.pnml"
    child_path = tmp_path / "child.pnml"

    export_pnml(parent_net, str(parent_path))
    export_pnml(child_with_silent_detour, str(child_path))
    parent = import_pnml(str(parent_path))
    child = import_pnml(str(child_path))

    assert parent.place_ids() == {"P1"}
    assert parent.transition_ids() == {"T1"}
    assert classify(parent, child) == InheritanceType.PROJECTION
