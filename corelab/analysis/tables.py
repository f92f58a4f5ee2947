"""
Reference correction tables for the concrete test calculations.

All tables are immutable and built once at import time. Engines receive a
``CorrectionTables`` instance (``DEFAULT_TABLES`` unless a caller injects an
alternative), so no calculation reads module globals directly.

Sources:
    ECP 203-2020 / BS EN 12504-1 - core correction factors (Fm, Fg, L/D)
    EN 12504-2 - rebound hammer uncertainty (Student-t coverage factors)
"""

from dataclasses import dataclass
from typing import Dict, List, Optional, Tuple

from corelab.models.core_sample import MoistureCondition


@dataclass(frozen=True)
class CorrectionTables:
    """
    Immutable set of correction tables.

    Parameters
    ----------
    moisture_factors : tuple
        (condition, factor) pairs, exact lookup only
    ld_table : tuple
        (L/D ratio, factor) breakpoints in ascending order
    fg_diameters : tuple
        Fg grid diameter axis (mm)
    fg_strengths : tuple
        Fg grid strength axis (MPa)
    fg_grid : tuple
        Fg values, one row per diameter, one column per strength
    nominal_diameters : tuple
        Standard core diameters used when snapping to a nominal size
    nominal_density : float
        Reported density (g/cm³) when no specimen weight is available
    coverage_factors : tuple
        (degrees of freedom, k at 95 %) pairs in ascending order
    """
    moisture_factors: Tuple[Tuple[MoistureCondition, float], ...] = (
        (MoistureCondition.DRY, 0.96),
        (MoistureCondition.NATURAL, 1.00),
        (MoistureCondition.SATURATED, 1.05),
    )
    ld_table: Tuple[Tuple[float, float], ...] = (
        (1.5, 1.07),
        (2.0, 1.05),
        (2.5, 1.04),
        (3.0, 1.03),
        (3.5, 1.02),
    )
    fg_diameters: Tuple[float, ...] = (50, 75, 100, 125, 150)
    fg_strengths: Tuple[float, ...] = (15, 20, 25, 30, 35)
    fg_grid: Tuple[Tuple[float, ...], ...] = (
        (1.18, 1.15, 1.14, 1.11, 1.08),  # 50 mm
        (1.15, 1.13, 1.11, 1.09, 1.07),  # 75 mm
        (1.12, 1.10, 1.08, 1.07, 1.06),  # 100 mm
        (1.09, 1.07, 1.06, 1.05, 1.04),  # 125 mm
        (1.07, 1.05, 1.04, 1.03, 1.02),  # 150 mm
    )
    nominal_diameters: Tuple[float, ...] = (50, 75, 100, 125, 150)
    nominal_density: float = 2.4
    coverage_factors: Tuple[Tuple[int, float], ...] = (
        (1, 13.97), (2, 4.53), (3, 3.31), (4, 2.87), (5, 2.65),
        (6, 2.52), (7, 2.43), (8, 2.37), (12, 2.23), (14, 2.20),
        (16, 2.17), (18, 2.10), (20, 2.13), (25, 2.11), (30, 2.09),
        (35, 2.07), (40, 2.06), (45, 2.06), (50, 2.05), (60, 2.04),
        (80, 2.03), (100, 2.02),
    )
    infinite_dof_coverage_factor: float = 2.0

    def moisture_factor(self, condition: MoistureCondition) -> float:
        """Exact Fm lookup; no interpolation, no fallback value."""
        return dict(self.moisture_factors)[MoistureCondition(condition)]

    def coverage_factor(self, dof: Optional[float]) -> float:
        """
        Tabulated 95 % coverage factor for the given degrees of freedom.

        Uses the largest tabulated dof not exceeding ``dof``. Unbounded or
        sub-unity dof fall back to the infinite-dof value.
        """
        if dof is None:
            return self.infinite_dof_coverage_factor
        for table_dof, k in reversed(self.coverage_factors):
            if dof >= table_dof:
                return k
        return self.infinite_dof_coverage_factor

    def ld_table_rows(self) -> List[Dict[str, float]]:
        """L/D table as a list of dicts for reporting."""
        return [{'ld_ratio': ratio, 'correction_factor': factor}
                for ratio, factor in self.ld_table]

    def moisture_table_rows(self) -> List[Dict]:
        """Moisture table as a list of dicts for reporting."""
        return [{'condition': condition.value, 'factor': factor}
                for condition, factor in self.moisture_factors]

    def fg_table(self) -> Dict:
        """Fg grid keyed by diameter for reporting."""
        return {
            'diameters': list(self.fg_diameters),
            'strengths': list(self.fg_strengths),
            'table': {str(d): list(row)
                      for d, row in zip(self.fg_diameters, self.fg_grid)},
        }


DEFAULT_TABLES = CorrectionTables()
