"""
Concrete core specimen data model.

Holds the measured geometry, breaking load and moisture state of a drilled
core together with the descriptive fields recorded on the test sheet.
Instances are immutable; the validation layer builds them from request data.
"""

from dataclasses import dataclass, field
from enum import Enum
from typing import Optional, Tuple


class MoistureCondition(str, Enum):
    """Aggregate moisture condition of the core at test time."""
    DRY = 'dry'
    NATURAL = 'natural'
    SATURATED = 'saturated'


class AggregateType(str, Enum):
    """Coarse aggregate type."""
    GRAVEL = 'gravel'
    CRUSHED = 'crushed'
    LIGHTWEIGHT = 'lightweight'


class EndPreparation(str, Enum):
    """Method used to prepare the core ends before loading."""
    SULFUR_CAPPING = 'sulfur_capping'
    GRINDING = 'grinding'
    NEOPRENE_PADS = 'neoprene_pads'


# Direction factor for horizontal coring (vertical coring typically uses 2.3)
DIRECTION_FACTOR_HORIZONTAL = 2.5


@dataclass(frozen=True)
class ReinforcementBar:
    """
    Reinforcement bar found in a core.

    Parameters
    ----------
    diameter : float
        Bar diameter (mm)
    distance_from_end : float
        Distance from the bar axis to the nearest core end (mm)
    """
    diameter: float
    distance_from_end: float


@dataclass(frozen=True)
class CoreSampleInfo:
    """Descriptive fields from the core test sheet, echoed on results."""
    sample_number: Optional[str] = None
    tested_element: Optional[str] = None
    visual_condition: Optional[str] = None
    aggregate_type: Optional[AggregateType] = None
    coring_date: Optional[str] = None
    testing_date: Optional[str] = None
    curing_age_days: Optional[float] = None
    end_preparation: Optional[EndPreparation] = None
    failure_pattern: Optional[str] = None

    def to_dict(self) -> dict:
        return {
            'sample_number': self.sample_number,
            'tested_element': self.tested_element,
            'visual_condition': self.visual_condition,
            'aggregate_type': self.aggregate_type.value if self.aggregate_type else None,
            'coring_date': self.coring_date,
            'testing_date': self.testing_date,
            'curing_age_days': self.curing_age_days,
            'end_preparation': self.end_preparation.value if self.end_preparation else None,
            'failure_pattern': self.failure_pattern,
        }


@dataclass(frozen=True)
class CoreSampleMeasurement:
    """
    Measurements of a single concrete core.

    Parameters
    ----------
    diameters : tuple of float
        Two perpendicular diameter readings (mm)
    lengths : tuple of float
        Two or three length readings after capping (mm)
    breaking_load : float
        Maximum load at failure (kN)
    moisture_condition : MoistureCondition
        Aggregate moisture condition
    direction_factor : float
        Coring direction factor (2.5 horizontal, 2.3 vertical)
    weight : float, optional
        Core weight (g), used only for the reported density
    reinforcement : tuple of ReinforcementBar
        Bars crossing the core, empty when none
    info : CoreSampleInfo
        Descriptive fields from the test sheet
    """
    diameters: Tuple[float, float]
    lengths: Tuple[float, ...]
    breaking_load: float
    moisture_condition: MoistureCondition
    direction_factor: float = DIRECTION_FACTOR_HORIZONTAL
    weight: Optional[float] = None
    reinforcement: Tuple[ReinforcementBar, ...] = ()
    info: CoreSampleInfo = field(default_factory=CoreSampleInfo)

    @property
    def average_diameter(self) -> float:
        """Arithmetic mean of the diameter readings (mm)."""
        return sum(self.diameters) / len(self.diameters)

    @property
    def average_length(self) -> float:
        """Arithmetic mean of the length readings (mm)."""
        return sum(self.lengths) / len(self.lengths)


@dataclass(frozen=True)
class ProjectMetadata:
    """Details supplied by the party requesting the test."""
    requesting_entity: Optional[str] = None
    project_name: Optional[str] = None
    owner: Optional[str] = None
    contractor: Optional[str] = None
    consultant: Optional[str] = None
    additional_info: Optional[str] = None

    def to_dict(self) -> dict:
        return {
            'requesting_entity': self.requesting_entity,
            'project_name': self.project_name,
            'owner': self.owner,
            'contractor': self.contractor,
            'consultant': self.consultant,
            'additional_info': self.additional_info,
        }
