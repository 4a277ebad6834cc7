"""
Shared net fixtures.

:return : Pytest fixtures.
:return: Parent and child nets of the reference scenarios.
"""

from pathlib import Path
import pytest
from pn_inheritance.models.net import Arc, Net, Place, Transition

SAMPLES_DIR = Path(__file__).parent.parent / "samples"


def loop_net(name: str = "parent") -> Net:
    """
    P1 holds one token and T1 moves it from P1 back to P1.

    :param name: Net name.
    :return : Net instance.
    :return: Single-transition loop net.
    """
    return Net(
        places=[Place("P1", 1)],
        transitions=[Transition("T1")],
        arcs=[Arc("P1", "T1", 1), Arc("T1", "P1", 1)],
        name=name,
    )


@pytest.fixture
def samples_dir() -> Path:
    return SAMPLES_DIR


@pytest.fixture
def parent_net() -> Net:
    return loop_net()


@pytest.fixture
def child_with_isolated_transition() -> Net:
    """
    Scenario A: the parent loop plus a transition T2 without arcs.
    """
    net = loop_net("child_a")
    net.transitions.append(Transition("T2"))
    return net


@pytest.fixture
def child_with_silent_detour() -> Net:
    """
    Scenario B: P1 -> T2 -> P3 -> T1 -> P1.
    """
    return Net(
        places=[Place("P1", 1), Place("P3", 0)],
        transitions=[Transition("T1"), Transition("T2")],
        arcs=[
            Arc("P1", "T2", 1),
            Arc("T2", "P3", 1),
            Arc("P3", "T1", 1),
            Arc("T1", "P1", 1),
        ],
        name="child_b",
    )


@pytest.fixture
def child_with_dead_transition() -> Net:
    """
    Scenario C: T1 needs two tokens but P1 never holds more than one.
    """
    return Net(
        places=[Place("P1", 1)],
        transitions=[Transition("T1")],
        arcs=[Arc("P1", "T1", 2), Arc("T1", "P1", 2)],
        name="child_c",
    )


@pytest.fixture
def unbounded_net() -> Net:
    """
    Scenario D: every firing of T1 adds a token to P2.
    """
    return Net(
        places=[Place("P1", 1), Place("P2", 0)],
        transitions=[Transition("T1")],
        arcs=[Arc("P1", "T1", 1), Arc("T1", "P1", 1), Arc("T1", "P2", 1)],
        name="unbounded",
    )
