"""
Pull-off tensile adhesion calculations per BS 1881-207 with GUM uncertainty.

Stress per specimen:

    f = P / A = 4P / (pi * D²)

Batch uncertainty is evaluated at the mean diameter and mean strength with
sensitivity coefficients

    Cp = df/dP = 4 / (pi * D²)
    Cd = df/dD = -2f / D

Each input quantity carries a repeatability (Type A), a calibration and a
resolution (Type B) component. The expanded uncertainty uses k = 2.
"""

import logging
import math
from dataclasses import dataclass, field
from typing import List, Optional, Sequence

from corelab.models.pulloff_specimen import PullOffSpecimenMeasurement
from .statistics import SAMPLE, BatchStatistics, aggregate, standard_deviation
from .uncertainty import UncertaintyBudget

logger = logging.getLogger(__name__)

LOAD_REPEATABILITY = 'load_repeatability'
LOAD_CALIBRATION = 'load_calibration'
LOAD_RESOLUTION = 'load_resolution'
DIAMETER_REPEATABILITY = 'diameter_repeatability'
DIAMETER_CALIBRATION = 'diameter_calibration'
DIAMETER_RESOLUTION = 'diameter_resolution'


@dataclass
class PullOffAnalysisConfig:
    """
    Device constants for the pull-off uncertainty budget.

    Parameters
    ----------
    load_calibration_tolerance : float
        Expanded calibration uncertainty of the load cell (N, k=2)
    load_resolution : float
        Load indicator resolution (N)
    diameter_calibration_tolerance : float
        Expanded calibration uncertainty of the caliper (mm, k=2)
    diameter_resolution : float
        Caliper resolution (mm)
    coverage_factor : float
        k for the expanded uncertainty
    """
    load_calibration_tolerance: float = 104.5
    load_resolution: float = 100.0
    diameter_calibration_tolerance: float = 0.007378583333333333
    diameter_resolution: float = 0.02
    coverage_factor: float = 2.0


@dataclass(frozen=True)
class PullOffSpecimenResult:
    """Tensile adhesion result for one specimen."""
    specimen: PullOffSpecimenMeasurement
    failure_load_n: float
    area: float  # mm²
    tensile_strength: float  # MPa

    def to_dict(self) -> dict:
        return {
            'specimen_number': self.specimen.specimen_number,
            'specimen_code': self.specimen.specimen_code,
            'tested_item': self.specimen.tested_item,
            'failure_mode': self.specimen.failure_mode,
            'diameter_mm': self.specimen.diameter,
            'failure_load_kn': self.specimen.failure_load,
            'failure_load_n': self.failure_load_n,
            'area_mm2': self.area,
            'tensile_strength_mpa': self.tensile_strength,
        }


@dataclass(frozen=True)
class PullOffUncertainty:
    """
    Pull-off uncertainty budget summary.

    Input-quantity uncertainties are in N (load) and mm (diameter); the
    Type A/B, combined and expanded values are in MPa.
    """
    average_diameter: float
    diameter_sd: float
    average_load: float  # N
    load_sd: float  # N
    average_strength: float
    sensitivity_load: float
    sensitivity_diameter: float
    uncertainty_repeatability_load: float
    uncertainty_calibration_load: float
    uncertainty_resolution_load: float
    uncertainty_repeatability_diameter: float
    uncertainty_calibration_diameter: float
    uncertainty_resolution_diameter: float
    uncertainty_type_a: float
    uncertainty_type_b: float
    combined_uncertainty: float
    coverage_factor: float
    expanded_uncertainty: float
    budget: UncertaintyBudget = field(repr=False, compare=False)

    def to_dict(self) -> dict:
        return {
            'average_diameter': self.average_diameter,
            'diameter_sd': self.diameter_sd,
            'average_load_n': self.average_load,
            'load_sd_n': self.load_sd,
            'average_strength': self.average_strength,
            'sensitivity_load': self.sensitivity_load,
            'sensitivity_diameter': self.sensitivity_diameter,
            'uncertainty_repeatability_load': self.uncertainty_repeatability_load,
            'uncertainty_calibration_load': self.uncertainty_calibration_load,
            'uncertainty_resolution_load': self.uncertainty_resolution_load,
            'uncertainty_repeatability_diameter': self.uncertainty_repeatability_diameter,
            'uncertainty_calibration_diameter': self.uncertainty_calibration_diameter,
            'uncertainty_resolution_diameter': self.uncertainty_resolution_diameter,
            'uncertainty_type_a': self.uncertainty_type_a,
            'uncertainty_type_b': self.uncertainty_type_b,
            'combined_uncertainty': self.combined_uncertainty,
            'coverage_factor': self.coverage_factor,
            'expanded_uncertainty': self.expanded_uncertainty,
            'components': self.budget.to_dict()['components'],
        }


@dataclass(frozen=True)
class PullOffBatchResult:
    """
    Pull-off batch result.

    The coefficient of variation is taken from the failure loads, not from
    the strengths, as on the laboratory report.
    """
    results: List[PullOffSpecimenResult]
    strength_statistics: BatchStatistics
    load_statistics: BatchStatistics  # kN
    uncertainty: PullOffUncertainty

    @property
    def coefficient_of_variation(self) -> float:
        return self.load_statistics.coefficient_of_variation

    def to_dict(self) -> dict:
        return {
            'results': [r.to_dict() for r in self.results],
            'average_strength': self.strength_statistics.average,
            'minimum_strength': self.strength_statistics.minimum,
            'maximum_strength': self.strength_statistics.maximum,
            'standard_deviation': self.strength_statistics.standard_deviation,
            'average_load_kn': self.load_statistics.average,
            'load_standard_deviation_kn': self.load_statistics.standard_deviation,
            'coefficient_of_variation': self.coefficient_of_variation,
            'expanded_uncertainty_mpa': self.uncertainty.expanded_uncertainty,
            'uncertainty': self.uncertainty.to_dict(),
        }


class PullOffAnalyzer:
    """
    Pull-off adhesion analyzer with GUM uncertainty.

    Parameters
    ----------
    config : PullOffAnalysisConfig, optional
        Device constants for the uncertainty budget
    """

    def __init__(self, config: Optional[PullOffAnalysisConfig] = None):
        self.config = config or PullOffAnalysisConfig()

    @staticmethod
    def calculate_area(diameter: float) -> float:
        """Circular area in mm² from diameter in mm."""
        return math.pi * (diameter / 2) ** 2

    def calculate_tensile_strength(self, load_n: float, diameter: float) -> float:
        """Tensile adhesion strength in MPa (N/mm²)."""
        return load_n / self.calculate_area(diameter)

    def run_analysis(self, specimen: PullOffSpecimenMeasurement) -> PullOffSpecimenResult:
        """
        Calculate the adhesion strength of one specimen.

        Parameters
        ----------
        specimen : PullOffSpecimenMeasurement
            Validated specimen data

        Returns
        -------
        PullOffSpecimenResult
            Load in N, area and tensile strength
        """
        load_n = specimen.failure_load * 1000
        return PullOffSpecimenResult(
            specimen=specimen,
            failure_load_n=load_n,
            area=self.calculate_area(specimen.diameter),
            tensile_strength=self.calculate_tensile_strength(load_n, specimen.diameter),
        )

    def calculate_uncertainty(
        self,
        diameters: Sequence[float],
        loads_n: Sequence[float],
        average_strength: float
    ) -> PullOffUncertainty:
        """
        Build the uncertainty budget for a batch.

        Repeatability of each input is SD / sqrt(3) with the sample SD across
        the batch. Calibration is half the expanded calibration tolerance,
        resolution is (resolution / 2) / sqrt(3).

        Parameters
        ----------
        diameters : sequence of float
            Specimen diameters (mm)
        loads_n : sequence of float
            Failure loads (N)
        average_strength : float
            Mean tensile strength of the batch (MPa)

        Returns
        -------
        PullOffUncertainty
            Component and combined uncertainties
        """
        cfg = self.config
        average_diameter = sum(diameters) / len(diameters)
        average_load = sum(loads_n) / len(loads_n)
        diameter_sd = standard_deviation(diameters, SAMPLE)
        load_sd = standard_deviation(loads_n, SAMPLE)

        cp = 4 / (math.pi * average_diameter ** 2)
        cd = -2 * average_strength / average_diameter

        budget = UncertaintyBudget('Tensile adhesion strength', average_strength, 'MPa')
        budget.add_type_a(LOAD_REPEATABILITY, load_sd / math.sqrt(3), cp,
                          source="Scatter of failure loads")
        budget.add_type_a(DIAMETER_REPEATABILITY, diameter_sd / math.sqrt(3), cd,
                          source="Scatter of dolly diameters")
        budget.add_type_b_normal(LOAD_CALIBRATION, cfg.load_calibration_tolerance,
                                 sensitivity=cp, source="Load cell calibration")
        budget.add_type_b_rectangular(LOAD_RESOLUTION, cfg.load_resolution / 2, cp,
                                      source="Load indicator resolution")
        budget.add_type_b_normal(DIAMETER_CALIBRATION, cfg.diameter_calibration_tolerance,
                                 sensitivity=cd, source="Caliper calibration")
        budget.add_type_b_rectangular(DIAMETER_RESOLUTION, cfg.diameter_resolution / 2, cd,
                                      source="Caliper resolution")

        return PullOffUncertainty(
            average_diameter=average_diameter,
            diameter_sd=diameter_sd,
            average_load=average_load,
            load_sd=load_sd,
            average_strength=average_strength,
            sensitivity_load=cp,
            sensitivity_diameter=cd,
            uncertainty_repeatability_load=budget.component(LOAD_REPEATABILITY).value,
            uncertainty_calibration_load=budget.component(LOAD_CALIBRATION).value,
            uncertainty_resolution_load=budget.component(LOAD_RESOLUTION).value,
            uncertainty_repeatability_diameter=budget.component(DIAMETER_REPEATABILITY).value,
            uncertainty_calibration_diameter=budget.component(DIAMETER_CALIBRATION).value,
            uncertainty_resolution_diameter=budget.component(DIAMETER_RESOLUTION).value,
            uncertainty_type_a=budget.type_a_uncertainty,
            uncertainty_type_b=budget.type_b_uncertainty,
            combined_uncertainty=budget.combined_standard_uncertainty,
            coverage_factor=cfg.coverage_factor,
            expanded_uncertainty=budget.expanded_uncertainty(cfg.coverage_factor),
            budget=budget,
        )

    def run_batch(self, specimens: Sequence[PullOffSpecimenMeasurement]) -> PullOffBatchResult:
        """
        Analyse a set of pull-off specimens.

        Parameters
        ----------
        specimens : sequence of PullOffSpecimenMeasurement
            At least one validated specimen

        Returns
        -------
        PullOffBatchResult
            Per-specimen results, statistics and uncertainty budget
        """
        results = [self.run_analysis(s) for s in specimens]

        strength_stats = aggregate([r.tensile_strength for r in results], ddof=SAMPLE)
        load_stats = aggregate([s.failure_load for s in specimens], ddof=SAMPLE)
        uncertainty = self.calculate_uncertainty(
            [s.diameter for s in specimens],
            [r.failure_load_n for r in results],
            strength_stats.average,
        )
        logger.debug("Pull-off batch of %d specimens: mean %.3f MPa, U %.3f MPa",
                     strength_stats.count, strength_stats.average,
                     uncertainty.expanded_uncertainty)

        return PullOffBatchResult(
            results=results,
            strength_statistics=strength_stats,
            load_statistics=load_stats,
            uncertainty=uncertainty,
        )
