"""
Error types raised by the inheritance analysis.

:return : Exception hierarchy.
:return: Classes for model, state-space and document failures.
"""

from typing import Optional


class InheritanceError(Exception):
    """
    Base class for every failure of the analysis.
    """


class MalformedModel(InheritanceError, ValueError):
    """
    Net data that violates the model invariants.

    Raised when a place holds a negative token count, an arc carries a
    non-positive multiplicity, or, under explicit validation, when ids
    collide or arc endpoints do not resolve.
    """


class StateSpaceOverflow(InheritanceError):
    """
    Reachability exploration discovered more markings than allowed.

    :param bound: Configured state bound.
    :param discovered: Number of markings discovered when exploration stopped.
    :param net_name: Optional name of the explored net.
    :return : StateSpaceOverflow instance.
    :return: An overflow error carrying the exploration figures.
    """

    def __init__(self, bound: int, discovered: int, net_name: Optional[str] = None) -> None:
        self.bound = bound
        self.discovered = discovered
        self.net_name = net_name
        subject = f"net '{net_name}'" if net_name else "net"
        super().__init__(
            f"State space of {subject} exceeds bound of {bound} markings "
            f"({discovered} discovered); model too large to analyze"
        )


class DocumentError(InheritanceError):
    """
    A net document could not be read or parsed.
    """
