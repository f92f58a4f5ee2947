"""
Uncertainty propagation following GUM (Guide to Expression of Uncertainty in Measurement).

Components are stored as standard uncertainties with their sensitivity
coefficients. Type A and Type B contributions can be read separately, which
the pull-off report needs, and the Welch-Satterthwaite effective degrees of
freedom are available for the rebound hammer report.
"""

import math
from dataclasses import dataclass, field
from typing import Dict, List, Optional

from scipy import stats

TYPE_A = 'A'
TYPE_B = 'B'
INFINITE_DOF = float('inf')


@dataclass
class UncertaintyComponent:
    """
    A single uncertainty component in an uncertainty budget.

    Parameters
    ----------
    name : str
        Name/description of the uncertainty source
    value : float
        Standard uncertainty u, in the unit of the input quantity
    type : str
        'A' (statistical) or 'B' (other knowledge)
    distribution : str
        'normal' or 'rectangular'
    sensitivity_coefficient : float
        Sensitivity coefficient ci (partial derivative)
    degrees_of_freedom : float
        Degrees of freedom; infinite for well-known Type B sources
    source : str
        Description of the uncertainty source
    """
    name: str
    value: float
    type: str
    distribution: str
    sensitivity_coefficient: float = 1.0
    degrees_of_freedom: float = INFINITE_DOF
    source: str = ""

    @property
    def contribution(self) -> float:
        """Variance contribution (ci * ui)^2."""
        return (self.sensitivity_coefficient * self.value) ** 2

    @property
    def output_uncertainty(self) -> float:
        """|ci| * ui, the contribution in the unit of the measurand."""
        return abs(self.sensitivity_coefficient) * self.value


@dataclass
class UncertaintyBudget:
    """
    Uncertainty budget for one measurand.

    Parameters
    ----------
    measurand_name : str
        Name of the quantity being measured
    measurand_value : float
        Value of the measurand
    unit : str
        Unit of measurement
    components : List[UncertaintyComponent]
        List of uncertainty components
    """
    measurand_name: str
    measurand_value: float
    unit: str
    components: List[UncertaintyComponent] = field(default_factory=list)

    def add_type_a(
        self,
        name: str,
        standard_uncertainty: float,
        sensitivity: float = 1.0,
        degrees_of_freedom: float = INFINITE_DOF,
        source: str = ""
    ) -> UncertaintyComponent:
        """
        Add a Type A (repeatability) component.

        The standard uncertainty is evaluated by the caller because the test
        methods divide the scatter differently (SD/sqrt(3) for pull-off,
        SD/sqrt(n) for the rebound hammer).

        Parameters
        ----------
        name : str
            Name of the uncertainty component
        standard_uncertainty : float
            Standard uncertainty u
        sensitivity : float
            Sensitivity coefficient ci
        degrees_of_freedom : float
            n - 1 for the readings it was derived from
        source : str
            Description of the source

        Returns
        -------
        UncertaintyComponent
            The created component
        """
        component = UncertaintyComponent(
            name=name,
            value=standard_uncertainty,
            type=TYPE_A,
            distribution='normal',
            sensitivity_coefficient=sensitivity,
            degrees_of_freedom=degrees_of_freedom,
            source=source
        )
        self.components.append(component)
        return component

    def add_type_b_rectangular(
        self,
        name: str,
        half_width: float,
        sensitivity: float = 1.0,
        source: str = ""
    ) -> UncertaintyComponent:
        """
        Add Type B uncertainty with rectangular distribution.

        For a resolution or tolerance of "+/- a" the standard
        uncertainty is u = a / sqrt(3).

        Parameters
        ----------
        name : str
            Name of the uncertainty component
        half_width : float
            Half-width 'a' of the rectangular distribution
        sensitivity : float
            Sensitivity coefficient ci
        source : str
            Description of the source

        Returns
        -------
        UncertaintyComponent
            The created component
        """
        component = UncertaintyComponent(
            name=name,
            value=half_width / math.sqrt(3),
            type=TYPE_B,
            distribution='rectangular',
            sensitivity_coefficient=sensitivity,
            source=source
        )
        self.components.append(component)
        return component

    def add_type_b_normal(
        self,
        name: str,
        expanded_uncertainty: float,
        coverage_factor: float = 2.0,
        sensitivity: float = 1.0,
        source: str = ""
    ) -> UncertaintyComponent:
        """
        Add Type B uncertainty from a calibration certificate.

        u = U / k

        Parameters
        ----------
        name : str
            Name of the uncertainty component
        expanded_uncertainty : float
            Expanded uncertainty U from the certificate
        coverage_factor : float
            Coverage factor k stated on the certificate (usually 2)
        sensitivity : float
            Sensitivity coefficient ci
        source : str
            Description (e.g., certificate number)

        Returns
        -------
        UncertaintyComponent
            The created component
        """
        component = UncertaintyComponent(
            name=name,
            value=expanded_uncertainty / coverage_factor,
            type=TYPE_B,
            distribution='normal',
            sensitivity_coefficient=sensitivity,
            source=source
        )
        self.components.append(component)
        return component

    def component(self, name: str) -> UncertaintyComponent:
        """Look up a component by name."""
        for c in self.components:
            if c.name == name:
                return c
        raise KeyError(name)

    def _root_sum_square(self, components) -> float:
        return math.sqrt(sum(c.contribution for c in components))

    @property
    def type_a_uncertainty(self) -> float:
        """Root-sum-square of the Type A contributions."""
        return self._root_sum_square(c for c in self.components if c.type == TYPE_A)

    @property
    def type_b_uncertainty(self) -> float:
        """Root-sum-square of the Type B contributions."""
        return self._root_sum_square(c for c in self.components if c.type == TYPE_B)

    @property
    def combined_standard_uncertainty(self) -> float:
        """
        Combined standard uncertainty uc.

        uc^2 = sum(ci^2 * ui^2)
        """
        return self._root_sum_square(self.components)

    @property
    def effective_degrees_of_freedom(self) -> Optional[float]:
        """
        Effective degrees of freedom using the Welch-Satterthwaite formula.

        nu_eff = uc^4 / sum((ci*ui)^4 / nu_i)

        Components with infinite degrees of freedom add nothing to the
        denominator. Returns None when the result is unbounded.
        """
        uc = self.combined_standard_uncertainty
        denominator = sum(
            c.contribution ** 2 / c.degrees_of_freedom
            for c in self.components
            if 0 < c.degrees_of_freedom < INFINITE_DOF
        )
        if uc == 0 or denominator == 0:
            return None
        return uc ** 4 / denominator

    def expanded_uncertainty(self, coverage_factor: float = 2.0) -> float:
        """Expanded uncertainty U = k * uc."""
        return coverage_factor * self.combined_standard_uncertainty

    def student_t_coverage_factor(self, confidence: float = 0.95) -> float:
        """
        Coverage factor from the Student-t distribution at nu_eff.

        Parameters
        ----------
        confidence : float
            Confidence level (default 0.95 = 95%)

        Returns
        -------
        float
            k such that U = k * uc covers the stated confidence
        """
        nu_eff = self.effective_degrees_of_freedom
        if nu_eff is None or nu_eff > 1000:
            return float(stats.norm.ppf((1 + confidence) / 2))
        return float(stats.t.ppf((1 + confidence) / 2, nu_eff))

    def to_dict(self) -> Dict:
        """
        Export budget as dictionary for reporting.

        Returns
        -------
        dict
            Complete uncertainty budget information
        """
        return {
            'measurand': self.measurand_name,
            'value': self.measurand_value,
            'unit': self.unit,
            'type_a_uncertainty': self.type_a_uncertainty,
            'type_b_uncertainty': self.type_b_uncertainty,
            'combined_uncertainty': self.combined_standard_uncertainty,
            'effective_dof': self.effective_degrees_of_freedom,
            'components': [
                {
                    'name': c.name,
                    'type': c.type,
                    'distribution': c.distribution,
                    'standard_uncertainty': c.value,
                    'sensitivity': c.sensitivity_coefficient,
                    'output_uncertainty': c.output_uncertainty,
                    'contribution': c.contribution,
                    'degrees_of_freedom': (None if c.degrees_of_freedom == INFINITE_DOF
                                           else c.degrees_of_freedom),
                    'source': c.source
                }
                for c in self.components
            ]
        }
