"""
pm4py integration adapter.

Converts between the net model of this package and pm4py Petri nets, and
provides PNML import/export through pm4py.

:return : pm4py integration utilities.
:return: Functions for pm4py conversion and PNML I/O.
"""

from typing import Dict, Tuple, Union
import logging
from pm4py.objects.petri_net.obj import PetriNet, Marking as PMMarking
from pm4py.objects.petri_net.utils import petri_utils
from pm4py.objects.petri_net.importer import importer as pnml_importer
from pm4py.objects.petri_net.exporter import exporter as pnml_exporter
from pn_inheritance.errors import DocumentError, MalformedModel
from pn_inheritance.models.net import Arc, Net, Place, Transition

logger = logging.getLogger(__name__)


def net_to_pm4py(net: Net) -> Tuple[PetriNet, PMMarking]:
    """
    Convert a net to a pm4py Petri net.

    Transition ids become both name and label of the pm4py transitions.

    :param net: Net to convert.
    :return : Tuple of (petri_net, initial_marking).
    :return: pm4py net with its initial marking.
    """
    petri_net = PetriNet(name=net.name or "net")
    initial_marking = PMMarking()

    elements: Dict[str, Union[PetriNet.Place, PetriNet.Transition]] = {}
    for place in net.places:
        pm_place = PetriNet.Place(place.id)
        petri_net.places.add(pm_place)
        elements[place.id] = pm_place
        if place.tokens > 0:
            initial_marking[pm_place] = place.tokens

    for transition in net.transitions:
        pm_trans = PetriNet.Transition(name=transition.id, label=transition.id)
        petri_net.transitions.add(pm_trans)
        elements[transition.id] = pm_trans

    for arc in net.arcs:
        source = elements.get(arc.source_id)
        target = elements.get(arc.destination_id)
        if source is None or target is None:
            raise MalformedModel(
                f"Arc {arc.source_id} -> {arc.destination_id} references an unknown element"
            )
        petri_utils.add_arc_from_to(source, target, petri_net, weight=arc.multiplicity)

    return petri_net, initial_marking


def net_from_pm4py(
    petri_net: PetriNet, initial_marking: PMMarking, use_labels: bool = True
) -> Net:
    """
    Convert a pm4py Petri net to a net.

    :param petri_net: pm4py Petri net.
    :param initial_marking: pm4py initial marking.
    :param use_labels: Identify visible transitions by label instead of name.
    :return : Net instance.
    :return: Net with places, transitions and weighted arcs.
    """

    def transition_id(trans: PetriNet.Transition) -> str:
        if use_labels and trans.label is not None:
            return trans.label
        return trans.name

    places = [
        Place(id=p.name, tokens=initial_marking.get(p, 0))
        for p in sorted(petri_net.places, key=lambda p: p.name)
    ]
    transitions = [
        Transition(id=transition_id(t))
        for t in sorted(petri_net.transitions, key=lambda t: t.name)
    ]

    arcs = []
    for arc in petri_net.arcs:
        if isinstance(arc.source, PetriNet.Transition):
            arcs.append(Arc(transition_id(arc.source), arc.target.name, arc.weight))
        else:
            arcs.append(Arc(arc.source.name, transition_id(arc.target), arc.weight))

    if len({t.id for t in transitions}) != len(transitions):
        logger.warning(
            f"Transitions of {petri_net.name} share labels; they are merged into one transition id"
        )

    return Net(places=places, transitions=transitions, arcs=arcs, name=petri_net.name)


def import_pnml(filepath: str, use_labels: bool = True) -> Net:
    """
    Import a net from a PNML file.

    :param filepath: Input file path.
    :param use_labels: Identify visible transitions by label instead of name.
    :return : Net instance.
    :return: Loaded net.
    """
    try:
        petri_net, initial_marking, _ = pnml_importer.apply(filepath)
    except Exception as e:
        raise DocumentError(f"Cannot import PNML file {filepath}: {e}") from e
    return net_from_pm4py(petri_net, initial_marking, use_labels=use_labels)


def export_pnml(net: Net, filepath: str) -> None:
    """
    Export a net to a PNML file.

    :param net: Net to export.
    :param filepath: Output file path.
    :return : None.
    :return: File write side-effect.
    """
    petri_net, initial_marking = net_to_pm4py(net)
    pnml_exporter.apply(petri_net, initial_marking, filepath)
