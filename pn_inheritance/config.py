"""
Analysis configuration.

:return : Configuration dataclass.
:return: The AnalysisConfig class.
"""

from dataclasses import asdict, dataclass
from typing import Any, Dict, Literal
from pn_inheritance.analysis.reachability import DEFAULT_STATE_BOUND

PROJECTION_SEMANTICS = ("bisimulation", "simulation")


@dataclass
class AnalysisConfig:
    """
    Settings of one inheritance analysis.

    :param state_bound: Maximum number of markings explored per net.
    :param strict_protocol: Require empty extension places when matching markings.
    :param projection_semantics: "bisimulation" or the one-directional "simulation".
    :param validate_models: Reject nets with dangling or duplicate ids before exploring.
    :return : AnalysisConfig instance.
    :return: Analysis settings.
    """

    state_bound: int = DEFAULT_STATE_BOUND
    strict_protocol: bool = True
    projection_semantics: Literal["bisimulation", "simulation"] = "bisimulation"
    validate_models: bool = False

    def __post_init__(self) -> None:
        if self.state_bound < 1:
            raise ValueError(f"State bound must be positive, got {self.state_bound}")
        if self.projection_semantics not in PROJECTION_SEMANTICS:
            raise ValueError(
                f"Unknown projection semantics {self.projection_semantics!r}, "
                f"expected one of {PROJECTION_SEMANTICS}"
            )

    def to_dict(self) -> Dict[str, Any]:
        return asdict(self)
