"""
pn-inheritance: Protocol and projection inheritance between place/transition nets.

This package decides whether a child net behaviorally extends a parent net by
comparing bounded reachability graphs of both nets.

Main components:
- models: Net entities and markings
- analysis: Bounded reachability graph construction
- inheritance: Protocol and projection checks and the classifier
- documents: Net document I/O (XML/JSON)
- integration: pm4py adapters and PNML I/O
- cli: Command-line interface

:return : Package initialization.
:return: Module exports for public API.
"""

__version__ = "0.1.0"
__author__ = "pn-inheritance Team"

from pn_inheritance.models.marking import Marking
from pn_inheritance.models.net import Arc, Net, Place, Transition
from pn_inheritance.errors import (
    DocumentError,
    InheritanceError,
    MalformedModel,
    StateSpaceOverflow,
)
from pn_inheritance.analysis.reachability import ReachabilityGraph, build_reachability_graph, explore
from pn_inheritance.config import AnalysisConfig
from pn_inheritance.inheritance.classifier import InheritanceType, analyze, classify

__all__ = [
    "Arc",
    "Marking",
    "Net",
    "Place",
    "Transition",
    "DocumentError",
    "InheritanceError",
    "MalformedModel",
    "StateSpaceOverflow",
    "ReachabilityGraph",
    "build_reachability_graph",
    "explore",
    "AnalysisConfig",
    "InheritanceType",
    "analyze",
    "classify",
]
