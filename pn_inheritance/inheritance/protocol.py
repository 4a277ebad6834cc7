"""
Protocol inheritance check.

A child net protocol-inherits from a parent when its reachability graph,
with every non-parent transition blocked, still contains the parent's
reachability graph: each parent marking has a matching child marking and
each parent firing is reproduced by the same transition from that marking.

:return : Protocol inheritance utilities.
:return: Functions for comparing a parent graph with a restricted child graph.
"""

from collections import defaultdict
from typing import AbstractSet, Collection, Dict, List, Optional, Tuple
import logging
from pn_inheritance.analysis.reachability import ReachabilityGraph
from pn_inheritance.models.marking import Marking
from pn_inheritance.models.net import Transition

logger = logging.getLogger(__name__)


def markings_match(
    parent_marking: Marking,
    child_marking: Marking,
    parent_place_ids: AbstractSet[str],
    strict: bool = True,
) -> bool:
    """
    Compare a child marking with a parent marking on the parent's places.

    Places the parent knows (its declared places plus any place present in
    the parent marking) must hold the same tokens in both markings. In strict
    mode every other place of the child marking must be empty.

    :param parent_marking: Marking of the parent graph.
    :param child_marking: Marking of the child graph.
    :param parent_place_ids: Place ids declared by the parent net.
    :param strict: Reject child tokens on places unknown to the parent.
    :return : Boolean result.
    :return: True if the markings correspond.
    """
    known = set(parent_place_ids) | set(parent_marking)
    for place_id in known:
        if parent_marking.tokens(place_id) != child_marking.tokens(place_id):
            return False
    if strict and not child_marking.support() <= known:
        return False
    return True


def _firings_embed(
    parent_firings: Dict[Transition, Marking],
    child_firings: Dict[Transition, Marking],
    parent_place_ids: AbstractSet[str],
    strict: bool,
) -> bool:
    child_targets = {transition.id: target for transition, target in child_firings.items()}
    for transition, parent_target in parent_firings.items():
        child_target = child_targets.get(transition.id)
        if child_target is None:
            return False
        if not markings_match(parent_target, child_target, parent_place_ids, strict):
            return False
    return True


def is_protocol_inheritance(
    parent_graph: ReachabilityGraph,
    parent_place_ids: Collection[str],
    parent_transition_ids: Collection[str],
    child_graph: ReachabilityGraph,
    strict: bool = True,
    log: Optional[logging.Logger] = None,
) -> bool:
    """
    Check protocol inheritance between two reachability graphs.

    :param parent_graph: Reachability graph of the parent net.
    :param parent_place_ids: Place ids of the parent net.
    :param parent_transition_ids: Transition ids of the parent net.
    :param child_graph: Reachability graph of the child net.
    :param strict: Require empty extension places in matched child markings.
    :param log: Logger receiving the reason of a failed check.
    :return : Boolean result.
    :return: True if the parent graph embeds into the restricted child graph.
    """
    log = log or logger
    place_ids = frozenset(parent_place_ids)
    ordered_places = sorted(place_ids)
    restricted = child_graph.restrict(parent_transition_ids)

    # Bucket child markings by their tokens on the parent places
    buckets: Dict[Tuple[int, ...], List[Marking]] = defaultdict(list)
    for child_marking in restricted:
        key = tuple(child_marking.tokens(p) for p in ordered_places)
        buckets[key].append(child_marking)

    for parent_marking in parent_graph:
        key = tuple(parent_marking.tokens(p) for p in ordered_places)
        candidates = [
            child_marking
            for child_marking in buckets.get(key, [])
            if markings_match(parent_marking, child_marking, place_ids, strict)
        ]
        if not candidates:
            log.info(f"Protocol check: no child marking matches parent marking {parent_marking}")
            return False

        parent_firings = parent_graph.successors(parent_marking)
        if not any(
            _firings_embed(parent_firings, restricted.successors(c), place_ids, strict)
            for c in candidates
        ):
            missing = sorted(t.id for t in parent_firings)
            log.info(
                f"Protocol check: firings {missing} of parent marking {parent_marking} "
                f"are not reproduced by the child"
            )
            return False

        log.debug(f"Protocol check: parent marking {parent_marking} matched")

    return True
