"""
Bounded reachability graph construction.

Explores the markings of a net breadth-first from its initial marking and
records every firing as a transition-labeled edge. Exploration stops with a
StateSpaceOverflow once more markings are discovered than the state bound.

:return : Reachability utilities.
:return: Functions and classes for building reachability graphs.
"""

from collections import defaultdict, deque
from dataclasses import dataclass
from typing import Collection, Deque, Dict, Iterator, List, Optional, Set, Tuple
import logging
import pandas as pd
from pn_inheritance.errors import StateSpaceOverflow
from pn_inheritance.models.marking import Marking
from pn_inheritance.models.net import Net, Transition

logger = logging.getLogger(__name__)

DEFAULT_STATE_BOUND = 10000

Edges = Dict[Marking, Dict[Transition, Marking]]


class ReachabilityGraph:
    """
    Edge-labeled graph of reachable markings.

    :param initial: Initial marking.
    :param edges: Map from marking to its outgoing firings.
    :return : ReachabilityGraph instance.
    :return: A reachability graph.
    """

    def __init__(self, initial: Marking, edges: Edges) -> None:
        self.initial = initial
        self._edges = edges

    def __len__(self) -> int:
        return len(self._edges)

    def __contains__(self, marking: object) -> bool:
        return marking in self._edges

    def __iter__(self) -> Iterator[Marking]:
        return iter(self._edges)

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, ReachabilityGraph):
            return NotImplemented
        return self.initial == other.initial and self._edges == other._edges

    def markings(self) -> List[Marking]:
        return list(self._edges)

    def successors(self, marking: Marking) -> Dict[Transition, Marking]:
        """
        Outgoing firings of a marking.

        :param marking: Source marking.
        :return : Map from transition to target marking.
        :return: Empty dict for markings outside the graph.
        """
        return self._edges.get(marking, {})

    def edges(self) -> Iterator[Tuple[Marking, Transition, Marking]]:
        for source, firings in self._edges.items():
            for transition, target in firings.items():
                yield source, transition, target

    def edge_count(self) -> int:
        return sum(len(firings) for firings in self._edges.values())

    def restrict(self, transition_ids: Collection[str]) -> "ReachabilityGraph":
        """
        Drop every edge whose transition id is not in transition_ids.

        All markings are kept, including ones left without incoming edges.

        :param transition_ids: Transition ids whose edges are kept.
        :return : ReachabilityGraph instance.
        :return: The restricted graph.
        """
        allowed = set(transition_ids)
        restricted: Edges = {
            marking: {t: target for t, target in firings.items() if t.id in allowed}
            for marking, firings in self._edges.items()
        }
        return ReachabilityGraph(self.initial, restricted)

    def to_frame(self) -> pd.DataFrame:
        """
        Tabulate the edges of the graph.

        :return : DataFrame with columns source, transition, target.
        :return: One row per edge in exploration order.
        """
        rows = [
            {"source": str(source), "transition": transition.id, "target": str(target)}
            for source, transition, target in self.edges()
        ]
        return pd.DataFrame(rows, columns=["source", "transition", "target"])


@dataclass
class Exploration:
    """
    Outcome of a bounded exploration.

    Exactly one of graph and overflow is set.

    :param graph: The complete reachability graph.
    :param overflow: The overflow that stopped the exploration.
    :return : Exploration instance.
    :return: Explicit exploration result.
    """

    graph: Optional[ReachabilityGraph] = None
    overflow: Optional[StateSpaceOverflow] = None

    @property
    def ok(self) -> bool:
        return self.overflow is None

    def unwrap(self) -> ReachabilityGraph:
        """
        Return the graph or raise the overflow.

        :return : ReachabilityGraph instance.
        :return: Graph of a successful exploration.
        """
        if self.overflow is not None:
            raise self.overflow
        assert self.graph is not None
        return self.graph


class _FiringRule:
    """
    Input and output weights of every transition, aggregated per place.
    """

    def __init__(self, net: Net) -> None:
        self.consume: Dict[str, Dict[str, int]] = defaultdict(dict)
        self.produce: Dict[str, Dict[str, int]] = defaultdict(dict)
        transition_ids = net.transition_ids()
        for arc in net.arcs:
            if arc.destination_id in transition_ids:
                weights = self.consume[arc.destination_id]
                weights[arc.source_id] = weights.get(arc.source_id, 0) + arc.multiplicity
            if arc.source_id in transition_ids:
                weights = self.produce[arc.source_id]
                weights[arc.destination_id] = weights.get(arc.destination_id, 0) + arc.multiplicity

    def enabled(self, marking: Marking, transition_id: str) -> bool:
        return all(
            marking.tokens(place_id) >= weight
            for place_id, weight in self.consume.get(transition_id, {}).items()
        )

    def fire(self, marking: Marking, transition_id: str) -> Marking:
        delta: Dict[str, int] = {}
        for place_id, weight in self.consume.get(transition_id, {}).items():
            delta[place_id] = delta.get(place_id, 0) - weight
        for place_id, weight in self.produce.get(transition_id, {}).items():
            delta[place_id] = delta.get(place_id, 0) + weight
        return marking.with_delta(delta)


def is_enabled(net: Net, marking: Marking, transition_id: str) -> bool:
    """
    Check whether a transition may fire at a marking.

    Only input arcs gate enablement; places missing from the marking hold 0 tokens.

    :param net: Net owning the transition.
    :param marking: Current marking.
    :param transition_id: Transition identifier.
    :return : Boolean result.
    :return: True if every input place holds enough tokens.
    """
    return _FiringRule(net).enabled(marking, transition_id)


def fire(net: Net, marking: Marking, transition_id: str) -> Marking:
    """
    Fire an enabled transition.

    :param net: Net owning the transition.
    :param marking: Current marking.
    :param transition_id: Transition identifier.
    :return : Marking instance.
    :return: Marking after consuming input and producing output tokens.
    """
    rule = _FiringRule(net)
    if not rule.enabled(marking, transition_id):
        raise ValueError(f"Transition {transition_id} is not enabled at {marking}")
    return rule.fire(marking, transition_id)


def explore(
    net: Net,
    state_bound: int = DEFAULT_STATE_BOUND,
    log: Optional[logging.Logger] = None,
) -> Exploration:
    """
    Explore the reachable markings of a net breadth-first.

    Every enabled transition at every visited marking contributes one edge;
    a marking is queued for expansion only the first time it is discovered.

    :param net: Net to explore.
    :param state_bound: Maximum number of markings, at least 1.
    :param log: Logger receiving progress records.
    :return : Exploration result.
    :return: The graph, or the overflow if the bound was exceeded.
    """
    if state_bound < 1:
        raise ValueError(f"State bound must be positive, got {state_bound}")
    log = log or logger
    rule = _FiringRule(net)

    initial = net.initial_marking()
    edges: Edges = {initial: {}}
    visited: Set[Marking] = {initial}
    queue: Deque[Marking] = deque([initial])

    log.debug(f"Exploring {net.label()} from {initial} (bound={state_bound})")

    while queue:
        current = queue.popleft()
        firings = edges[current]

        for transition in net.transitions:
            if not rule.enabled(current, transition.id):
                continue
            successor = rule.fire(current, transition.id)
            firings[transition] = successor

            if successor not in visited:
                visited.add(successor)
                if len(visited) > state_bound:
                    overflow = StateSpaceOverflow(state_bound, len(visited), net.name)
                    log.warning(str(overflow))
                    return Exploration(overflow=overflow)
                edges[successor] = {}
                queue.append(successor)

        log.debug(f"  {current}: {len(firings)} enabled transitions")

    graph = ReachabilityGraph(initial, edges)
    log.info(
        f"Reachability graph of {net.label()}: {len(graph)} markings, {graph.edge_count()} edges"
    )
    return Exploration(graph=graph)


def build_reachability_graph(
    net: Net,
    state_bound: int = DEFAULT_STATE_BOUND,
    log: Optional[logging.Logger] = None,
) -> ReachabilityGraph:
    """
    Build the reachability graph of a net.

    :param net: Net to explore.
    :param state_bound: Maximum number of markings.
    :param log: Logger receiving progress records.
    :return : ReachabilityGraph instance.
    :return: Complete graph; raises StateSpaceOverflow past the bound.
    """
    return explore(net, state_bound=state_bound, log=log).unwrap()
