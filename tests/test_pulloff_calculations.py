"""Tests for the pull-off adhesion calculations."""
import math
import pytest

from corelab.analysis.pulloff_calculations import PullOffAnalyzer
from corelab.models.pulloff_specimen import PullOffSpecimenMeasurement


@pytest.fixture
def analyzer():
    return PullOffAnalyzer()


def test_single_specimen(analyzer):
    result = analyzer.run_analysis(PullOffSpecimenMeasurement(diameter=55, failure_load=3.63))
    assert result.failure_load_n == pytest.approx(3630)
    assert result.area == pytest.approx(math.pi * 27.5 ** 2)
    assert result.tensile_strength == pytest.approx(1.528, abs=0.001)


def test_reference_batch(analyzer, pulloff_specimens):
    batch = analyzer.run_batch(pulloff_specimens)
    strengths = [r.tensile_strength for r in batch.results]
    assert strengths == pytest.approx([1.528, 1.208, 1.689, 1.393, 1.717, 1.932], abs=0.001)
    assert batch.strength_statistics.average == pytest.approx(1.578, abs=0.001)
    assert batch.coefficient_of_variation == pytest.approx(17.23, abs=0.01)
    assert batch.uncertainty.expanded_uncertainty == pytest.approx(0.352, abs=0.001)


def test_cv_comes_from_loads(analyzer, pulloff_specimens):
    batch = analyzer.run_batch(pulloff_specimens)
    loads = batch.load_statistics
    assert batch.coefficient_of_variation == pytest.approx(
        loads.standard_deviation / loads.average * 100)
    assert batch.coefficient_of_variation != pytest.approx(
        batch.strength_statistics.coefficient_of_variation)


def test_uncertainty_components(analyzer, pulloff_specimens):
    u = analyzer.run_batch(pulloff_specimens).uncertainty
    assert u.average_diameter == pytest.approx(54.0833, abs=1e-4)
    assert u.sensitivity_load == pytest.approx(4 / (math.pi * u.average_diameter ** 2))
    assert u.sensitivity_diameter == pytest.approx(-2 * u.average_strength / u.average_diameter)
    assert u.sensitivity_diameter < 0
    assert u.uncertainty_repeatability_load == pytest.approx(u.load_sd / math.sqrt(3))
    assert u.uncertainty_calibration_load == pytest.approx(52.25)
    assert u.uncertainty_resolution_load == pytest.approx(50 / math.sqrt(3))
    assert u.uncertainty_resolution_diameter == pytest.approx(0.01 / math.sqrt(3))
    assert u.uncertainty_type_a == pytest.approx(0.174, abs=0.001)
    assert u.uncertainty_type_b == pytest.approx(0.026, abs=0.001)
    assert u.combined_uncertainty == pytest.approx(
        math.hypot(u.uncertainty_type_a, u.uncertainty_type_b))
    assert u.coverage_factor == 2.0


def test_single_specimen_batch_has_no_repeatability(analyzer):
    batch = analyzer.run_batch([PullOffSpecimenMeasurement(diameter=50, failure_load=2.5)])
    assert batch.strength_statistics.standard_deviation == 0.0
    assert batch.coefficient_of_variation == 0.0
    assert batch.uncertainty.uncertainty_type_a == 0.0
    assert batch.uncertainty.expanded_uncertainty > 0


def test_to_dict(analyzer, pulloff_specimens):
    data = analyzer.run_batch(pulloff_specimens).to_dict()
    assert len(data['results']) == 6
    assert data['results'][2]['diameter_mm'] == 49.5
    assert data['average_load_kn'] == pytest.approx(3.6217, abs=1e-4)
    assert data['expanded_uncertainty_mpa'] == pytest.approx(0.352, abs=0.001)
    assert len(data['uncertainty']['components']) == 6
