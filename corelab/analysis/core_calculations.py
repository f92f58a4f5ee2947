"""
Drilled concrete core calculations (ECP 203-2020, BS EN 12504-1, ASTM C42).

Converts the breaking load of a core into the equivalent in-situ 150 mm cube
strength:

    fcu = fcore * Fm * Fg * (direction_factor / (1.5 + D/L)) * Fr

where fcore is the core strength, Fm the moisture factor, Fg the cutting
factor and Fr the reinforcement factor. The L/D correction factor and the
density are reported for reference only and do not enter the formula.
"""

import logging
from dataclasses import dataclass, field
from typing import List, Optional, Sequence

from corelab.models.core_sample import (
    CoreSampleInfo,
    CoreSampleMeasurement,
    MoistureCondition,
    ProjectMetadata,
    ReinforcementBar,
)
from .interpolation import bilinear_lookup, nearest_standard_value, table_lookup_1d
from .statistics import POPULATION, BatchStatistics, aggregate
from .tables import DEFAULT_TABLES, CorrectionTables

logger = logging.getLogger(__name__)

# 4/pi as used on the laboratory sheets
FOUR_OVER_PI = 1.2732
KGCM2_TO_MPA = 0.0980665


@dataclass
class CoreAnalysisConfig:
    """
    Configuration for core analysis.

    Parameters
    ----------
    snap_fg_diameter : bool
        Snap the core diameter to the nearest nominal diameter before the
        Fg lookup instead of interpolating on the measured diameter
    """
    snap_fg_diameter: bool = False


@dataclass(frozen=True)
class CoreSampleResult:
    """
    Derived values for one core. Strengths are in kg/cm² unless noted.
    """
    average_diameter: float  # mm
    average_length: float  # mm
    ld_ratio: float
    calculated_density: float  # g/cm³
    breaking_load_tons: float
    core_strength: float
    core_strength_mpa: float
    moisture_correction_factor: float
    cutting_correction_factor: float
    ld_correction_factor: float
    reinforcement_correction_factor: float
    equivalent_cube_strength: float
    equivalent_cube_strength_mpa: float
    info: CoreSampleInfo = field(default_factory=CoreSampleInfo)

    def to_dict(self) -> dict:
        """Export as dictionary for reporting."""
        result = self.info.to_dict()
        result.update({
            'average_diameter': self.average_diameter,
            'average_length': self.average_length,
            'ld_ratio': self.ld_ratio,
            'calculated_density': self.calculated_density,
            'breaking_load_tons': self.breaking_load_tons,
            'core_strength': self.core_strength,
            'core_strength_mpa': self.core_strength_mpa,
            'moisture_correction_factor': self.moisture_correction_factor,
            'cutting_correction_factor': self.cutting_correction_factor,
            'ld_correction_factor': self.ld_correction_factor,
            'reinforcement_correction_factor': self.reinforcement_correction_factor,
            'equivalent_cube_strength': self.equivalent_cube_strength,
            'equivalent_cube_strength_mpa': self.equivalent_cube_strength_mpa,
        })
        return result


@dataclass(frozen=True)
class CoreBatchResult:
    """Per-core results with population statistics of the cube strength."""
    results: List[CoreSampleResult]
    statistics: BatchStatistics
    metadata: ProjectMetadata = field(default_factory=ProjectMetadata)
    testing_date: Optional[str] = None

    @property
    def average_strength_mpa(self) -> float:
        return self.statistics.average * KGCM2_TO_MPA

    def to_dict(self) -> dict:
        return {
            'results': [r.to_dict() for r in self.results],
            'average_strength': self.statistics.average,
            'average_strength_mpa': self.average_strength_mpa,
            'minimum_strength': self.statistics.minimum,
            'maximum_strength': self.statistics.maximum,
            'standard_deviation': self.statistics.standard_deviation,
            'sample_count': self.statistics.count,
            'metadata': self.metadata.to_dict(),
            'testing_date': self.testing_date,
        }


class CoreAnalyzer:
    """
    Equivalent cube strength analyzer for drilled cores.

    Parameters
    ----------
    tables : CorrectionTables, optional
        Correction tables, ``DEFAULT_TABLES`` when omitted
    config : CoreAnalysisConfig, optional
        Lookup policy options

    Examples
    --------
    >>> analyzer = CoreAnalyzer()
    >>> result = analyzer.run_analysis(measurement)
    >>> result.equivalent_cube_strength
    """

    def __init__(self,
                 tables: Optional[CorrectionTables] = None,
                 config: Optional[CoreAnalysisConfig] = None):
        self.tables = tables or DEFAULT_TABLES
        self.config = config or CoreAnalysisConfig()

    @staticmethod
    def convert_kn_to_tons(load_kn: float) -> float:
        """Breaking load in tons, as on the test sheet (kN / 10)."""
        return load_kn / 10

    @staticmethod
    def calculate_core_strength(load_tons: float, diameter: float) -> float:
        """
        Core compressive strength in kg/cm².

        fcore = P(t) * 1000 * (4/pi) * 100 / D²

        Parameters
        ----------
        load_tons : float
            Breaking load (t)
        diameter : float
            Average core diameter (mm)

        Returns
        -------
        float
            Core strength (kg/cm²)
        """
        return load_tons * 1000 * FOUR_OVER_PI * 100 / (diameter * diameter)

    @staticmethod
    def calculate_density(weight: float, diameter: float, length: float) -> float:
        """
        Core density in g/cm³ from weight (g) and dimensions (mm).

        rho = W * (4/pi) / D² / L * 1000
        """
        return weight * FOUR_OVER_PI / diameter / diameter / length * 1000

    def moisture_factor(self, condition: MoistureCondition) -> float:
        """Moisture correction factor Fm."""
        return self.tables.moisture_factor(condition)

    def cutting_factor(self, diameter: float, strength_mpa: float) -> float:
        """
        Cutting correction factor Fg.

        Bilinear interpolation on the (diameter, strength) grid. Strength is
        clamped to 15-35 MPa and diameter to 50-150 mm. With
        ``snap_fg_diameter`` the diameter is first replaced by the nearest
        nominal diameter.

        Parameters
        ----------
        diameter : float
            Core diameter (mm)
        strength_mpa : float
            Core strength (MPa)

        Returns
        -------
        float
            Fg
        """
        if self.config.snap_fg_diameter:
            diameter = nearest_standard_value(diameter, self.tables.nominal_diameters)
        return bilinear_lookup(
            diameter,
            strength_mpa,
            self.tables.fg_diameters,
            self.tables.fg_strengths,
            self.tables.fg_grid,
        )

    def ld_correction_factor(self, ld_ratio: float) -> float:
        """
        L/D correction factor, for reference only.

        The lookup key is L/D x 10 against breakpoints scaled the same way
        (15, 20, 25, 30, 35), clamped at both ends.
        """
        scaled_table = [(ratio * 10, factor) for ratio, factor in self.tables.ld_table]
        return table_lookup_1d(ld_ratio * 10, scaled_table)

    @staticmethod
    def reinforcement_factor(
        bars: Sequence[ReinforcementBar],
        diameter: float,
        length: float
    ) -> float:
        """
        Reinforcement correction factor.

        Fr = 1 + 1.5 * sum(phi_i * x_i) / (D * L)

        Exactly 1.0 when the core contains no bars.
        """
        if not bars:
            return 1.0
        sum_product = sum(bar.diameter * bar.distance_from_end for bar in bars)
        return 1 + 1.5 * sum_product / (diameter * length)

    def run_analysis(self, measurement: CoreSampleMeasurement) -> CoreSampleResult:
        """
        Run the complete core calculation for one sample.

        Parameters
        ----------
        measurement : CoreSampleMeasurement
            Validated core measurements

        Returns
        -------
        CoreSampleResult
            All derived values including the equivalent cube strength
        """
        diameter = measurement.average_diameter
        length = measurement.average_length
        ld_ratio = length / diameter

        load_tons = self.convert_kn_to_tons(measurement.breaking_load)
        core_strength = self.calculate_core_strength(load_tons, diameter)
        core_strength_mpa = core_strength * KGCM2_TO_MPA

        if measurement.weight:
            density = self.calculate_density(measurement.weight, diameter, length)
        else:
            density = self.tables.nominal_density

        fm = self.moisture_factor(measurement.moisture_condition)
        fg = self.cutting_factor(diameter, core_strength_mpa)
        f_ld = self.ld_correction_factor(ld_ratio)
        fr = self.reinforcement_factor(measurement.reinforcement, diameter, length)

        # Shape term: direction factor over (1.5 + D/L)
        shape_factor = measurement.direction_factor / (1.5 + diameter / length)
        cube_strength = core_strength * fm * fg * shape_factor * fr

        return CoreSampleResult(
            average_diameter=diameter,
            average_length=length,
            ld_ratio=ld_ratio,
            calculated_density=density,
            breaking_load_tons=load_tons,
            core_strength=core_strength,
            core_strength_mpa=core_strength_mpa,
            moisture_correction_factor=fm,
            cutting_correction_factor=fg,
            ld_correction_factor=f_ld,
            reinforcement_correction_factor=fr,
            equivalent_cube_strength=cube_strength,
            equivalent_cube_strength_mpa=cube_strength * KGCM2_TO_MPA,
            info=measurement.info,
        )

    def run_batch(
        self,
        measurements: Sequence[CoreSampleMeasurement],
        metadata: Optional[ProjectMetadata] = None,
        testing_date: Optional[str] = None
    ) -> CoreBatchResult:
        """
        Analyse a set of cores and summarise their cube strengths.

        Statistics use the population standard deviation.

        Parameters
        ----------
        measurements : sequence of CoreSampleMeasurement
            At least one validated core
        metadata : ProjectMetadata, optional
            Project details echoed on the result
        testing_date : str, optional
            Date of the test session

        Returns
        -------
        CoreBatchResult
            Per-core results and batch statistics
        """
        results = [self.run_analysis(m) for m in measurements]
        statistics = aggregate([r.equivalent_cube_strength for r in results], ddof=POPULATION)
        logger.debug("Core batch of %d samples: mean %.2f kg/cm², SD %.2f",
                     statistics.count, statistics.average, statistics.standard_deviation)
        return CoreBatchResult(
            results=results,
            statistics=statistics,
            metadata=metadata or ProjectMetadata(),
            testing_date=testing_date,
        )
