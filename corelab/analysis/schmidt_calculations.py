"""
Rebound (Schmidt) hammer calculations per EN 12504-2 with GUM uncertainty.

Readings are corrected with the anvil factor RSA = 80 / median(anvil
readings). Per element the median rebound, the +/-25 % acceptance band, the
sample standard deviation and an uncertainty budget are reported:

    u_rep = sqrt(SD² / n)                 Type A, n - 1 dof
    u_res = (resolution / 2) / sqrt(3)    Type B, rectangular
    u_cal = 0.0266 / 2                    Type B, certificate (k = 2)

The expanded uncertainty uses k = 2 for more than two readings. The
Welch-Satterthwaite dof and the Student-t k are reported but not applied.
"""

import logging
import math
from dataclasses import dataclass
from typing import List, Optional, Sequence, Tuple

from corelab.models.schmidt_element import AnvilCalibration, SchmidtElementMeasurement
from .statistics import SAMPLE, BatchStatistics, aggregate, median, standard_deviation
from .tables import DEFAULT_TABLES, CorrectionTables
from .uncertainty import UncertaintyBudget

logger = logging.getLogger(__name__)


@dataclass
class SchmidtAnalysisConfig:
    """
    Configuration for rebound hammer analysis.

    Parameters
    ----------
    anvil_reference_value : float
        Nominal rebound number of the calibration anvil
    resolution : float
        Scale division of the hammer (rebound units)
    calibration_uncertainty : float
        Expanded calibration uncertainty of the hammer (k=2)
    coverage_factor : float
        k for the expanded uncertainty
    acceptance_lower : float
        Lower acceptance limit as a fraction of the median rebound
    acceptance_upper : float
        Upper acceptance limit as a fraction of the median rebound
    indicative_strength_factor : float
        kg/cm² per rebound unit for the indicative strength estimate
    """
    anvil_reference_value: float = 80.0
    resolution: float = 2.0
    calibration_uncertainty: float = 0.0266
    coverage_factor: float = 2.0
    acceptance_lower: float = 0.75
    acceptance_upper: float = 1.25
    indicative_strength_factor: float = 11.5


def round_half_up(value: float) -> int:
    """Round to the nearest integer with halves going up (12.5 -> 13)."""
    return int(math.floor(value + 0.5))


@dataclass(frozen=True)
class AnvilResult:
    """Anvil correction factor and the pooled anvil median."""
    rsa: float
    median: float

    def to_dict(self) -> dict:
        return {'rsa': self.rsa, 'median': self.median}


@dataclass(frozen=True)
class SchmidtUncertainty:
    """Uncertainty budget summary for one element, in rebound units."""
    repeatability_uncertainty: float
    resolution_uncertainty: float
    calibration_uncertainty: float
    combined_uncertainty: float
    effective_dof: Optional[int]
    tabulated_coverage_factor: float
    student_t_coverage_factor: float
    coverage_factor: float
    expanded_uncertainty: float

    def to_dict(self) -> dict:
        return {
            'repeatability_uncertainty': self.repeatability_uncertainty,
            'resolution_uncertainty': self.resolution_uncertainty,
            'calibration_uncertainty': self.calibration_uncertainty,
            'combined_uncertainty': self.combined_uncertainty,
            'effective_dof': self.effective_dof,
            'tabulated_coverage_factor': self.tabulated_coverage_factor,
            'student_t_coverage_factor': self.student_t_coverage_factor,
            'coverage_factor': self.coverage_factor,
            'expanded_uncertainty': self.expanded_uncertainty,
        }


@dataclass(frozen=True)
class SchmidtElementResult:
    """
    Rebound hammer result for one element.

    ``indicative_strength`` is a rough linear correlation in kg/cm². It is
    advisory only and must not be reported as a certified strength without
    correlation against cores.
    """
    element: SchmidtElementMeasurement
    corrected_readings: Tuple[float, ...]
    median_rebound: int
    lower_limit: float
    upper_limit: float
    valid_readings_count: int
    standard_deviation: float
    uncertainty: SchmidtUncertainty
    indicative_strength: float

    @property
    def total_readings(self) -> int:
        return len(self.corrected_readings)

    def to_dict(self) -> dict:
        return {
            'element_name': self.element.element_name,
            'element_code': self.element.element_code,
            'hammer_direction': self.element.hammer_direction,
            'notes': self.element.notes,
            'original_readings': list(self.element.readings),
            'corrected_readings': list(self.corrected_readings),
            'median_rebound': self.median_rebound,
            'lower_limit': self.lower_limit,
            'upper_limit': self.upper_limit,
            'valid_readings_count': self.valid_readings_count,
            'total_readings': self.total_readings,
            'standard_deviation': self.standard_deviation,
            'uncertainty': self.uncertainty.to_dict(),
            'expanded_uncertainty': self.uncertainty.expanded_uncertainty,
            'indicative_strength_kg_cm2': self.indicative_strength,
            'indicative_strength_note': ('Indicative only; not a certified strength. '
                                         'Correlate with core tests before use.'),
        }


@dataclass(frozen=True)
class SchmidtBatchResult:
    """Element results of one session with the shared anvil correction."""
    results: List[SchmidtElementResult]
    anvil: AnvilResult
    statistics: BatchStatistics  # over element median rebounds
    hammer_code: Optional[str] = None
    testing_date: Optional[str] = None

    def to_dict(self) -> dict:
        return {
            'results': [r.to_dict() for r in self.results],
            'correction_factor_rsa': self.anvil.rsa,
            'anvil_median': self.anvil.median,
            'statistics': self.statistics.to_dict(),
            'hammer_code': self.hammer_code,
            'testing_date': self.testing_date,
        }


class SchmidtAnalyzer:
    """
    Rebound hammer analyzer.

    Parameters
    ----------
    tables : CorrectionTables, optional
        Source of the dof-to-k table
    config : SchmidtAnalysisConfig, optional
        Hammer constants and acceptance limits
    """

    def __init__(self,
                 tables: Optional[CorrectionTables] = None,
                 config: Optional[SchmidtAnalysisConfig] = None):
        self.tables = tables or DEFAULT_TABLES
        self.config = config or SchmidtAnalysisConfig()

    def calibrate_anvil(
        self,
        readings_before: Sequence[float],
        readings_after: Sequence[float]
    ) -> AnvilResult:
        """
        Anvil correction factor RSA.

        Before and after readings are pooled and RSA = 80 / median.

        Parameters
        ----------
        readings_before : sequence of float
            Anvil readings before the session
        readings_after : sequence of float
            Anvil readings after the session

        Returns
        -------
        AnvilResult
            RSA and the unrounded pooled median
        """
        anvil_median = median(list(readings_before) + list(readings_after))
        return AnvilResult(rsa=self.config.anvil_reference_value / anvil_median,
                           median=anvil_median)

    def calculate_uncertainty(self, corrected_readings: Sequence[float]) -> SchmidtUncertainty:
        """
        Uncertainty budget for one element.

        Parameters
        ----------
        corrected_readings : sequence of float
            RSA-corrected rebound numbers

        Returns
        -------
        SchmidtUncertainty
            Component, combined and expanded uncertainties
        """
        cfg = self.config
        n = len(corrected_readings)
        sd = standard_deviation(corrected_readings, SAMPLE)

        budget = UncertaintyBudget('Rebound number', median(corrected_readings), 'R')
        repeatability = budget.add_type_a('repeatability', math.sqrt(sd ** 2 / n),
                                          degrees_of_freedom=n - 1,
                                          source=f"Scatter of {n} readings")
        resolution = budget.add_type_b_rectangular('resolution', cfg.resolution / 2,
                                                   source="Hammer scale division")
        calibration = budget.add_type_b_normal('calibration', cfg.calibration_uncertainty,
                                               source="Hammer calibration certificate")

        nu_eff = budget.effective_degrees_of_freedom
        dof = round_half_up(nu_eff) if nu_eff is not None else None

        return SchmidtUncertainty(
            repeatability_uncertainty=repeatability.value,
            resolution_uncertainty=resolution.value,
            calibration_uncertainty=calibration.value,
            combined_uncertainty=budget.combined_standard_uncertainty,
            effective_dof=dof,
            tabulated_coverage_factor=self.tables.coverage_factor(dof),
            student_t_coverage_factor=budget.student_t_coverage_factor(),
            coverage_factor=cfg.coverage_factor,
            expanded_uncertainty=budget.expanded_uncertainty(cfg.coverage_factor),
        )

    def run_analysis(self, element: SchmidtElementMeasurement, rsa: float) -> SchmidtElementResult:
        """
        Evaluate the readings of one element.

        Parameters
        ----------
        element : SchmidtElementMeasurement
            Validated element readings
        rsa : float
            Anvil correction factor of the session

        Returns
        -------
        SchmidtElementResult
            Corrected readings, acceptance count and uncertainty
        """
        cfg = self.config
        corrected = tuple(r * rsa for r in element.readings)
        median_rebound = round_half_up(median(corrected))
        lower = median_rebound * cfg.acceptance_lower
        upper = median_rebound * cfg.acceptance_upper
        valid_count = sum(1 for r in corrected if lower <= r <= upper)

        return SchmidtElementResult(
            element=element,
            corrected_readings=corrected,
            median_rebound=median_rebound,
            lower_limit=lower,
            upper_limit=upper,
            valid_readings_count=valid_count,
            standard_deviation=standard_deviation(corrected, SAMPLE),
            uncertainty=self.calculate_uncertainty(corrected),
            indicative_strength=median_rebound * cfg.indicative_strength_factor,
        )

    def run_batch(
        self,
        elements: Sequence[SchmidtElementMeasurement],
        anvil_calibration: AnvilCalibration,
        hammer_code: Optional[str] = None,
        testing_date: Optional[str] = None
    ) -> SchmidtBatchResult:
        """
        Evaluate all elements of a session with one anvil calibration.

        Parameters
        ----------
        elements : sequence of SchmidtElementMeasurement
            At least one validated element
        anvil_calibration : AnvilCalibration
            Shared anvil readings
        hammer_code : str, optional
            Hammer identification
        testing_date : str, optional
            Date of the session

        Returns
        -------
        SchmidtBatchResult
            Element results, RSA and statistics of the median rebounds
        """
        anvil = self.calibrate_anvil(anvil_calibration.readings_before,
                                     anvil_calibration.readings_after)
        results = [self.run_analysis(e, anvil.rsa) for e in elements]
        statistics = aggregate([r.median_rebound for r in results], ddof=SAMPLE)
        logger.debug("Rebound batch of %d elements: RSA %.4f, mean median %.1f",
                     statistics.count, anvil.rsa, statistics.average)

        return SchmidtBatchResult(
            results=results,
            anvil=anvil,
            statistics=statistics,
            hammer_code=hammer_code,
            testing_date=testing_date,
        )
