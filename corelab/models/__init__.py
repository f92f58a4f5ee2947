"""Data models for specimens and test records."""
from .core_sample import (
    AggregateType,
    CoreSampleInfo,
    CoreSampleMeasurement,
    EndPreparation,
    MoistureCondition,
    ProjectMetadata,
    ReinforcementBar,
)
from .pulloff_specimen import PullOffSpecimenMeasurement
from .schmidt_element import AnvilCalibration, SchmidtElementMeasurement

__all__ = ['AggregateType', 'CoreSampleInfo', 'CoreSampleMeasurement',
           'EndPreparation', 'MoistureCondition', 'ProjectMetadata',
           'ReinforcementBar', 'PullOffSpecimenMeasurement',
           'AnvilCalibration', 'SchmidtElementMeasurement']
