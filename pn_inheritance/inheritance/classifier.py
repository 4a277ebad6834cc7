"""
Inheritance classification.

Builds the reachability graphs of a parent and a child net and reports the
strongest inheritance relation that holds between them. Protocol
inheritance is checked first since it is the stronger relation.

:return : Classification utilities.
:return: InheritanceType, InheritanceReport, classify and analyze.
"""

from dataclasses import dataclass
from enum import Enum
from typing import Any, Dict, Optional
import logging
from pn_inheritance.analysis.reachability import build_reachability_graph
from pn_inheritance.config import AnalysisConfig
from pn_inheritance.errors import InheritanceError
from pn_inheritance.inheritance.projection import (
    is_projection_inheritance,
    is_projection_simulation,
)
from pn_inheritance.inheritance.protocol import is_protocol_inheritance
from pn_inheritance.models.net import Net

logger = logging.getLogger(__name__)


class InheritanceType(Enum):
    """
    Inheritance relation between a parent and a child net.
    """

    PROTOCOL = "Protocol Inheritance"
    PROJECTION = "Projection Inheritance"
    NONE = "No Inheritance"

    def __str__(self) -> str:
        return self.value


@dataclass
class InheritanceReport:
    """
    Outcome of one analysis.

    Either result or error is set. A failed analysis is not a
    "No Inheritance" verdict.

    :param result: Classification of the child net.
    :param error: Failure that stopped the analysis.
    :param protocol: Verdict of the protocol check, if evaluated.
    :param projection: Verdict of the projection check, if evaluated.
    :param parent_states: Number of parent markings.
    :param child_states: Number of child markings.
    :return : InheritanceReport instance.
    :return: Explicit analysis result.
    """

    result: Optional[InheritanceType] = None
    error: Optional[InheritanceError] = None
    protocol: Optional[bool] = None
    projection: Optional[bool] = None
    parent_states: Optional[int] = None
    child_states: Optional[int] = None

    @property
    def ok(self) -> bool:
        return self.error is None

    def to_dict(self) -> Dict[str, Any]:
        """
        Serialize report to dictionary.

        :return : Dictionary representation.
        :return: Dict with the verdicts or the error message.
        """
        return {
            "result": self.result.value if self.result else None,
            "error": str(self.error) if self.error else None,
            "error_type": type(self.error).__name__ if self.error else None,
            "protocol": self.protocol,
            "projection": self.projection,
            "parent_states": self.parent_states,
            "child_states": self.child_states,
        }


def _evaluate(
    parent_net: Net, child_net: Net, config: AnalysisConfig, log: logging.Logger
) -> InheritanceReport:
    if config.validate_models:
        parent_net.validate()
        child_net.validate()

    parent_graph = build_reachability_graph(parent_net, config.state_bound, log=log)
    child_graph = build_reachability_graph(child_net, config.state_bound, log=log)

    parent_transition_ids = parent_net.transition_ids()
    parent_place_ids = parent_net.place_ids()

    report = InheritanceReport(parent_states=len(parent_graph), child_states=len(child_graph))

    report.protocol = is_protocol_inheritance(
        parent_graph,
        parent_place_ids,
        parent_transition_ids,
        child_graph,
        strict=config.strict_protocol,
        log=log,
    )
    if report.protocol:
        report.result = InheritanceType.PROTOCOL
        return report

    if config.projection_semantics == "simulation":
        report.projection = is_projection_simulation(
            parent_graph, child_graph, parent_transition_ids, log=log
        )
    else:
        report.projection = is_projection_inheritance(
            parent_graph, child_graph, parent_transition_ids, log=log
        )
    report.result = InheritanceType.PROJECTION if report.projection else InheritanceType.NONE
    return report


def classify(
    parent_net: Net,
    child_net: Net,
    config: Optional[AnalysisConfig] = None,
    log: Optional[logging.Logger] = None,
) -> InheritanceType:
    """
    Classify the inheritance relation of a child net to its parent.

    Failures, including StateSpaceOverflow from either graph build, propagate.

    :param parent_net: Parent net.
    :param child_net: Child net.
    :param config: Analysis settings.
    :param log: Logger receiving progress records.
    :return : InheritanceType.
    :return: Strongest relation that holds.
    """
    log = log or logger
    report = _evaluate(parent_net, child_net, config or AnalysisConfig(), log)
    log.info(f"Classification: {report.result}")
    assert report.result is not None
    return report.result


def analyze(
    parent_net: Net,
    child_net: Net,
    config: Optional[AnalysisConfig] = None,
    log: Optional[logging.Logger] = None,
) -> InheritanceReport:
    """
    Classify a child net and capture analysis failures in the report.

    :param parent_net: Parent net.
    :param child_net: Child net.
    :param config: Analysis settings.
    :param log: Logger receiving progress records.
    :return : InheritanceReport.
    :return: Report carrying the classification or the error.
    """
    log = log or logger
    try:
        report = _evaluate(parent_net, child_net, config or AnalysisConfig(), log)
    except InheritanceError as e:
        log.error(f"Analysis failed: {e}")
        return InheritanceReport(error=e)
    log.info(f"Classification: {report.result}")
    return report
