"""Tests for the GUM uncertainty budget."""
import math
import pytest

from corelab.analysis.uncertainty import TYPE_A, TYPE_B, UncertaintyBudget


@pytest.fixture
def budget():
    b = UncertaintyBudget('Rebound number', 39, 'R')
    b.add_type_a('repeatability', 0.5, degrees_of_freedom=9)
    b.add_type_b_rectangular('resolution', 1.0)
    b.add_type_b_normal('calibration', 0.0266)
    return b


def test_component_values(budget):
    assert budget.component('repeatability').type == TYPE_A
    assert budget.component('resolution').value == pytest.approx(1 / math.sqrt(3))
    assert budget.component('resolution').type == TYPE_B
    assert budget.component('calibration').value == pytest.approx(0.0133)


def test_unknown_component_raises(budget):
    with pytest.raises(KeyError):
        budget.component('temperature')


def test_combined_is_root_sum_square(budget):
    expected = math.sqrt(0.25 + 1 / 3 + 0.0133 ** 2)
    assert budget.combined_standard_uncertainty == pytest.approx(expected)
    assert budget.type_a_uncertainty == pytest.approx(0.5)
    assert budget.expanded_uncertainty(2.0) == pytest.approx(2 * expected)


def test_sensitivity_coefficient_scales_contribution():
    b = UncertaintyBudget('Strength', 1.5, 'MPa')
    c = b.add_type_b_rectangular('resolution', 50, sensitivity=-0.002)
    assert c.output_uncertainty == pytest.approx(0.002 * 50 / math.sqrt(3))
    assert b.combined_standard_uncertainty == pytest.approx(c.output_uncertainty)


def test_welch_satterthwaite(budget):
    uc = budget.combined_standard_uncertainty
    assert budget.effective_degrees_of_freedom == pytest.approx(uc ** 4 / (0.5 ** 4 / 9))


def test_effective_dof_unbounded_without_finite_components():
    b = UncertaintyBudget('x', 1.0, '-')
    b.add_type_b_rectangular('resolution', 1.0)
    assert b.effective_degrees_of_freedom is None
    assert b.student_t_coverage_factor() == pytest.approx(1.96, abs=0.01)


def test_effective_dof_none_when_repeatability_is_zero():
    b = UncertaintyBudget('x', 1.0, '-')
    b.add_type_a('repeatability', 0.0, degrees_of_freedom=9)
    assert b.effective_degrees_of_freedom is None


def test_student_t_factor(budget):
    nu = budget.effective_degrees_of_freedom
    assert budget.student_t_coverage_factor() > 1.96
    assert nu > 9


def test_to_dict_maps_infinite_dof_to_none(budget):
    data = budget.to_dict()
    assert data['unit'] == 'R'
    assert len(data['components']) == 3
    dofs = {c['name']: c['degrees_of_freedom'] for c in data['components']}
    assert dofs == {'repeatability': 9, 'resolution': None, 'calibration': None}


def test_to_dict_reports_output_uncertainty():
    b = UncertaintyBudget('Strength', 1.5, 'MPa')
    b.add_type_b_rectangular('resolution', 50, sensitivity=-0.002)
    component = b.to_dict()['components'][0]
    assert component['output_uncertainty'] == pytest.approx(0.002 * 50 / math.sqrt(3))
