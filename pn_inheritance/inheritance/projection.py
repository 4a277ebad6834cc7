"""
Projection inheritance check.

Child transitions outside the parent's transition set are silent (tau).
A child projection-inherits from its parent when both reachability graphs
are weakly bisimilar: every visible move on one side is answered by a move
with the same label on the other side, allowing silent steps before and
after it.

:return : Projection inheritance utilities.
:return: Functions for weak (bi)simulation between reachability graphs.
"""

from collections import defaultdict, deque
from typing import Callable, Collection, Deque, Dict, FrozenSet, Optional, Set, Tuple
import logging
from pn_inheritance.analysis.reachability import ReachabilityGraph
from pn_inheritance.models.marking import Marking

logger = logging.getLogger(__name__)

SILENT_LABEL = "tau"

Move = Tuple[str, Marking]
Pair = Tuple[Marking, Marking]


def visibility(parent_transition_ids: Collection[str]) -> Callable[[str], bool]:
    """
    Build the visibility predicate for transition ids.

    :param parent_transition_ids: Transition ids of the parent net.
    :return : Predicate over transition ids.
    :return: True for parent transitions other than the silent label.
    """
    visible_ids = frozenset(parent_transition_ids) - {SILENT_LABEL}
    return lambda transition_id: transition_id in visible_ids


def tau_closure(
    graph: ReachabilityGraph, marking: Marking, visible: Callable[[str], bool]
) -> Set[Marking]:
    """
    Markings reachable through silent firings only.

    :param graph: Reachability graph.
    :param marking: Start marking, always part of the closure.
    :param visible: Visibility predicate over transition ids.
    :return : Set of markings.
    :return: The tau-closure of marking.
    """
    closure = {marking}
    queue: Deque[Marking] = deque([marking])
    while queue:
        current = queue.popleft()
        for transition, target in graph.successors(current).items():
            if not visible(transition.id) and target not in closure:
                closure.add(target)
                queue.append(target)
    return closure


def visible_moves(
    graph: ReachabilityGraph, marking: Marking, visible: Callable[[str], bool]
) -> Set[Move]:
    """
    Weak visible moves of a marking.

    A move (a, m3) exists when m reaches m1 silently, m1 fires visible a to
    m2, and m2 reaches m3 silently.

    :param graph: Reachability graph.
    :param marking: Start marking.
    :param visible: Visibility predicate over transition ids.
    :return : Set of (label, marking) pairs.
    :return: All weak visible moves.
    """
    moves: Set[Move] = set()
    for before in tau_closure(graph, marking, visible):
        for transition, target in graph.successors(before).items():
            if visible(transition.id):
                for after in tau_closure(graph, target, visible):
                    moves.add((transition.id, after))
    return moves


class _WeakMoves:
    """
    Memoized weak moves of one graph, grouped by label.
    """

    def __init__(self, graph: ReachabilityGraph, visible: Callable[[str], bool]) -> None:
        self.graph = graph
        self.visible = visible
        self._closures: Dict[Marking, FrozenSet[Marking]] = {}
        self._moves: Dict[Marking, Dict[str, Set[Marking]]] = {}

    def closure(self, marking: Marking) -> FrozenSet[Marking]:
        if marking not in self._closures:
            self._closures[marking] = frozenset(tau_closure(self.graph, marking, self.visible))
        return self._closures[marking]

    def by_label(self, marking: Marking) -> Dict[str, Set[Marking]]:
        if marking not in self._moves:
            grouped: Dict[str, Set[Marking]] = defaultdict(set)
            for before in self.closure(marking):
                for transition, target in self.graph.successors(before).items():
                    if self.visible(transition.id):
                        grouped[transition.id].update(self.closure(target))
            self._moves[marking] = dict(grouped)
        return self._moves[marking]


def _related(
    parent_graph: ReachabilityGraph,
    child_graph: ReachabilityGraph,
    parent_transition_ids: Collection[str],
    symmetric: bool,
    log: logging.Logger,
) -> bool:
    visible = visibility(parent_transition_ids)
    parent_moves = _WeakMoves(parent_graph, visible)
    child_moves = _WeakMoves(child_graph, visible)

    start: Pair = (parent_graph.initial, child_graph.initial)
    seen: Set[Pair] = {start}
    worklist: Deque[Pair] = deque([start])

    while worklist:
        parent_marking, child_marking = worklist.popleft()
        parent_by_label = parent_moves.by_label(parent_marking)
        child_by_label = child_moves.by_label(child_marking)

        for label in parent_by_label:
            if label not in child_by_label:
                log.info(
                    f"Projection check: parent move {label} at {parent_marking} "
                    f"has no counterpart at child marking {child_marking}"
                )
                return False

        if symmetric:
            for label in child_by_label:
                if label not in parent_by_label:
                    log.info(
                        f"Projection check: child move {label} at {child_marking} "
                        f"has no counterpart at parent marking {parent_marking}"
                    )
                    return False

        for label, parent_targets in parent_by_label.items():
            for parent_target in parent_targets:
                for child_target in child_by_label[label]:
                    pair = (parent_target, child_target)
                    if pair not in seen:
                        seen.add(pair)
                        worklist.append(pair)

    log.debug(f"Projection check: {len(seen)} related marking pairs")
    return True


def is_projection_inheritance(
    parent_graph: ReachabilityGraph,
    child_graph: ReachabilityGraph,
    parent_transition_ids: Collection[str],
    log: Optional[logging.Logger] = None,
) -> bool:
    """
    Check projection inheritance as weak bisimilarity of the two graphs.

    :param parent_graph: Reachability graph of the parent net.
    :param child_graph: Reachability graph of the child net.
    :param parent_transition_ids: Transition ids of the parent net.
    :param log: Logger receiving the reason of a failed check.
    :return : Boolean result.
    :return: True if every visible move on either side is matched.
    """
    return _related(parent_graph, child_graph, parent_transition_ids, True, log or logger)


def is_projection_simulation(
    parent_graph: ReachabilityGraph,
    child_graph: ReachabilityGraph,
    parent_transition_ids: Collection[str],
    log: Optional[logging.Logger] = None,
) -> bool:
    """
    Check that the child weakly simulates the parent.

    Only parent moves have to be matched; additional visible child behavior
    is tolerated.

    :param parent_graph: Reachability graph of the parent net.
    :param child_graph: Reachability graph of the child net.
    :param parent_transition_ids: Transition ids of the parent net.
    :param log: Logger receiving the reason of a failed check.
    :return : Boolean result.
    :return: True if every parent move is matched by the child.
    """
    return _related(parent_graph, child_graph, parent_transition_ids, False, log or logger)
