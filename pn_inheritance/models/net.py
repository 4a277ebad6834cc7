"""
Place/transition net model definitions.

This module provides dataclasses for the entities a net document is loaded into:
- Place: identity and initial token count
- Transition: identity only
- Arc: weighted connection between a place and a transition
- Net: the three collections above

:return : Net model components.
:return: Classes for Place, Transition, Arc, and Net.
"""

from dataclasses import dataclass, field
from typing import Any, Dict, List, Optional, Set
import json
from pn_inheritance.errors import MalformedModel
from pn_inheritance.models.marking import Marking


@dataclass(frozen=True)
class Place:
    """
    Net place.

    Equality and hashing use the id only.

    :param id: Place identifier, unique within a net.
    :param tokens: Initial token count.
    :return : Place instance.
    :return: A place descriptor.
    """

    id: str
    tokens: int = field(default=0, compare=False)

    def __post_init__(self) -> None:
        if self.tokens < 0:
            raise MalformedModel(f"Place {self.id} has negative token count {self.tokens}")

    def to_dict(self) -> Dict[str, Any]:
        return {"id": self.id, "tokens": self.tokens}

    @staticmethod
    def from_dict(data: Dict[str, Any]) -> "Place":
        return Place(id=data["id"], tokens=int(data.get("tokens", 0)))


@dataclass(frozen=True)
class Transition:
    """
    Net transition.

    :param id: Transition identifier, unique within a net.
    :return : Transition instance.
    :return: A transition descriptor.
    """

    id: str

    def to_dict(self) -> Dict[str, str]:
        return {"id": self.id}

    @staticmethod
    def from_dict(data: Dict[str, Any]) -> "Transition":
        return Transition(id=data["id"])

    def __str__(self) -> str:
        return self.id


@dataclass(frozen=True)
class Arc:
    """
    Weighted arc between a place and a transition.

    The endpoints are plain ids; whether they name a place or a transition
    is decided by the net the arc belongs to.

    :param source_id: Id of the source element.
    :param destination_id: Id of the destination element.
    :param multiplicity: Positive arc weight.
    :return : Arc instance.
    :return: An arc descriptor.
    """

    source_id: str
    destination_id: str
    multiplicity: int = 1

    def __post_init__(self) -> None:
        if self.multiplicity < 1:
            raise MalformedModel(
                f"Arc {self.source_id} -> {self.destination_id} has non-positive "
                f"multiplicity {self.multiplicity}"
            )

    def to_dict(self) -> Dict[str, Any]:
        return {
            "sourceId": self.source_id,
            "destinationId": self.destination_id,
            "multiplicity": self.multiplicity,
        }

    @staticmethod
    def from_dict(data: Dict[str, Any]) -> "Arc":
        return Arc(
            source_id=data["sourceId"],
            destination_id=data["destinationId"],
            multiplicity=int(data.get("multiplicity", 1)),
        )


@dataclass
class Net:
    """
    Place/transition net.

    :param places: Places with their initial tokens.
    :param transitions: Transitions.
    :param arcs: Arcs connecting places and transitions.
    :param name: Optional net name used in messages.
    :return : Net instance.
    :return: A net model.
    """

    places: List[Place] = field(default_factory=list)
    transitions: List[Transition] = field(default_factory=list)
    arcs: List[Arc] = field(default_factory=list)
    name: Optional[str] = None

    def place_ids(self) -> Set[str]:
        return {p.id for p in self.places}

    def transition_ids(self) -> Set[str]:
        return {t.id for t in self.transitions}

    def input_arcs(self, transition_id: str) -> List[Arc]:
        """
        Arcs ending in a transition.

        :param transition_id: Transition identifier.
        :return : List of arcs.
        :return: Input arcs of the transition.
        """
        return [a for a in self.arcs if a.destination_id == transition_id]

    def output_arcs(self, transition_id: str) -> List[Arc]:
        """
        Arcs leaving a transition.

        :param transition_id: Transition identifier.
        :return : List of arcs.
        :return: Output arcs of the transition.
        """
        return [a for a in self.arcs if a.source_id == transition_id]

    def initial_marking(self) -> Marking:
        """
        Build the initial marking from the place token counts.

        :return : Marking instance.
        :return: Marking of the places holding initial tokens.
        """
        return Marking({p.id: p.tokens for p in self.places})

    def validate(self) -> None:
        """
        Check structural consistency of the net.

        Duplicate ids, ids shared between a place and a transition, and arcs
        that do not connect an existing place with an existing transition are
        rejected.

        :return : None.
        :return: Raises MalformedModel on the first violation.
        """
        place_ids = self.place_ids()
        transition_ids = self.transition_ids()

        if len(place_ids) != len(self.places):
            raise MalformedModel(f"Duplicate place ids in {self.label()}")
        if len(transition_ids) != len(self.transitions):
            raise MalformedModel(f"Duplicate transition ids in {self.label()}")

        shared = place_ids & transition_ids
        if shared:
            raise MalformedModel(
                f"Ids used by both a place and a transition in {self.label()}: {sorted(shared)}"
            )

        for arc in self.arcs:
            place_to_transition = arc.source_id in place_ids and arc.destination_id in transition_ids
            transition_to_place = arc.source_id in transition_ids and arc.destination_id in place_ids
            if not (place_to_transition or transition_to_place):
                raise MalformedModel(
                    f"Arc {arc.source_id} -> {arc.destination_id} in {self.label()} "
                    f"does not connect a place with a transition"
                )

    def is_subnet_of(self, other: "Net") -> bool:
        """
        Check structural containment in another net.

        :param other: Candidate supernet.
        :return : Boolean result.
        :return: True if every place, transition and arc also occurs in other.
        """
        return (
            set(self.places) <= set(other.places)
            and set(self.transitions) <= set(other.transitions)
            and set(self.arcs) <= set(other.arcs)
        )

    def label(self) -> str:
        return f"net '{self.name}'" if self.name else "net"

    def to_dict(self) -> Dict[str, Any]:
        """
        Serialize net to dictionary.

        :return : Dictionary representation.
        :return: Dict with places, transitions and arcs.
        """
        return {
            "name": self.name,
            "places": [p.to_dict() for p in self.places],
            "transitions": [t.to_dict() for t in self.transitions],
            "arcs": [a.to_dict() for a in self.arcs],
        }

    @staticmethod
    def from_dict(data: Dict[str, Any]) -> "Net":
        """
        Deserialize net from dictionary.

        :param data: Dictionary with net data.
        :return : Net instance.
        :return: Reconstructed Net.
        """
        return Net(
            places=[Place.from_dict(p) for p in data.get("places", [])],
            transitions=[Transition.from_dict(t) for t in data.get("transitions", [])],
            arcs=[Arc.from_dict(a) for a in data.get("arcs", [])],
            name=data.get("name"),
        )

    def to_json(self, filepath: str) -> None:
        with open(filepath, "w") as f:
            json.dump(self.to_dict(), f, indent=2)

    @staticmethod
    def from_json(filepath: str) -> "Net":
        with open(filepath, "r") as f:
            data = json.load(f)
        return Net.from_dict(data)
