"""
Marking of a place/transition net.

A marking is the state of a net: the number of tokens held by each place.
Markings are the vertices of every reachability graph and are used as
dictionary keys, so equality and hashing are defined on the token contents:
places holding zero tokens are not stored, so they are indistinguishable
from absent places in equality, hashing, iteration and lookup.

:return : Marking value type.
:return: The Marking class.
"""

from typing import Dict, FrozenSet, Iterator, Mapping, Optional, Tuple


class Marking(Mapping[str, int]):
    """
    Immutable mapping from place id to token count.

    :param counts: Token count per place id.
    :return : Marking instance.
    :return: A canonical, hashable marking.
    """

    __slots__ = ("_counts", "_key")

    def __init__(self, counts: Optional[Mapping[str, int]] = None) -> None:
        items: Dict[str, int] = {}
        for place_id, count in (counts or {}).items():
            if count < 0:
                raise ValueError(f"Negative token count {count} for place {place_id}")
            if count:
                items[place_id] = count
        self._counts = items
        self._key: FrozenSet[Tuple[str, int]] = frozenset(items.items())

    def __getitem__(self, place_id: str) -> int:
        return self._counts[place_id]

    def __iter__(self) -> Iterator[str]:
        return iter(self._counts)

    def __len__(self) -> int:
        return len(self._counts)

    def __eq__(self, other: object) -> bool:
        if isinstance(other, Marking):
            return self._key == other._key
        if isinstance(other, Mapping):
            return self._key == Marking(other)._key
        return NotImplemented

    def __ne__(self, other: object) -> bool:
        result = self.__eq__(other)
        if result is NotImplemented:
            return result
        return not result

    def __hash__(self) -> int:
        return hash(self._key)

    def tokens(self, place_id: str) -> int:
        """
        Token count of a place, 0 when the place is absent.

        :param place_id: Place identifier.
        :return : Token count.
        :return: Number of tokens on the place.
        """
        return self._counts.get(place_id, 0)

    def with_delta(self, delta: Mapping[str, int]) -> "Marking":
        """
        Return a new marking with per-place token changes applied.

        :param delta: Signed token change per place id.
        :return : Marking instance.
        :return: The updated marking; this marking is left untouched.
        """
        counts = dict(self._counts)
        for place_id, change in delta.items():
            counts[place_id] = counts.get(place_id, 0) + change
        return Marking(counts)

    def support(self) -> FrozenSet[str]:
        """
        Places holding at least one token.

        :return : Set of place ids.
        :return: Marked places.
        """
        return frozenset(self._counts)

    def to_dict(self) -> Dict[str, int]:
        return dict(self._counts)

    def __repr__(self) -> str:
        return f"Marking({dict(sorted(self._counts.items()))!r})"

    def __str__(self) -> str:
        items = [f"{place_id}={count}" for place_id, count in sorted(self._counts.items())]
        return "[" + ", ".join(items) + "]"
