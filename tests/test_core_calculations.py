"""Tests for the drilled core calculations."""
import dataclasses
import pytest

from corelab.analysis.core_calculations import (
    CoreAnalysisConfig, CoreAnalyzer, KGCM2_TO_MPA,
)
from corelab.models.core_sample import (
    CoreSampleInfo, MoistureCondition, ProjectMetadata, ReinforcementBar,
)


@pytest.fixture
def analyzer():
    return CoreAnalyzer()


@pytest.fixture
def snapping_analyzer():
    return CoreAnalyzer(config=CoreAnalysisConfig(snap_fg_diameter=True))


class TestReferenceSample:
    def test_core_strength(self, analyzer, core_sample):
        result = analyzer.run_analysis(core_sample)
        assert result.breaking_load_tons == pytest.approx(6.84)
        assert result.core_strength == pytest.approx(100.69, abs=0.01)
        assert result.core_strength_mpa == pytest.approx(100.69 * KGCM2_TO_MPA, abs=0.001)

    def test_geometry_and_density(self, analyzer, core_sample):
        result = analyzer.run_analysis(core_sample)
        assert result.average_diameter == 93
        assert result.average_length == pytest.approx(121.333, abs=0.001)
        assert result.ld_ratio == pytest.approx(1.3047, abs=0.0001)
        assert result.calculated_density == pytest.approx(2.226, abs=0.001)

    def test_equivalent_cube_strength_interpolated_fg(self, analyzer, core_sample):
        result = analyzer.run_analysis(core_sample)
        assert result.cutting_correction_factor == pytest.approx(1.1284)
        assert result.equivalent_cube_strength == pytest.approx(120.31, abs=0.01)

    def test_equivalent_cube_strength_snapped_fg(self, snapping_analyzer, core_sample):
        result = snapping_analyzer.run_analysis(core_sample)
        assert result.cutting_correction_factor == pytest.approx(1.12)
        assert result.equivalent_cube_strength == pytest.approx(119.42, abs=0.01)

    def test_correction_factors(self, analyzer, core_sample):
        result = analyzer.run_analysis(core_sample)
        assert result.moisture_correction_factor == 0.96
        assert result.reinforcement_correction_factor == 1.0
        # L/D below 1.5 clamps to the first table entry
        assert result.ld_correction_factor == 1.07


def test_ld_factor_does_not_change_cube_strength(analyzer, core_sample):
    longer = dataclasses.replace(core_sample, lengths=(200.0, 200.0))
    result = analyzer.run_analysis(longer)
    shape = 2.5 / (1.5 + 93 / 200)
    expected = (result.core_strength * 0.96 * result.cutting_correction_factor * shape)
    assert result.equivalent_cube_strength == pytest.approx(expected)
    assert result.ld_correction_factor == pytest.approx(1.05 - 0.01 * (21.505 - 20) / 5, abs=1e-4)


def test_direction_factor_scales_result(analyzer, core_sample):
    vertical = dataclasses.replace(core_sample, direction_factor=2.3)
    horizontal = analyzer.run_analysis(core_sample)
    result = analyzer.run_analysis(vertical)
    assert result.equivalent_cube_strength == pytest.approx(
        horizontal.equivalent_cube_strength * 2.3 / 2.5)


def test_density_falls_back_to_nominal(analyzer, core_sample):
    no_weight = dataclasses.replace(core_sample, weight=None)
    result = analyzer.run_analysis(no_weight)
    assert result.calculated_density == 2.4
    assert result.equivalent_cube_strength == pytest.approx(120.31, abs=0.01)


@pytest.mark.parametrize('condition, factor', [
    (MoistureCondition.DRY, 0.96),
    (MoistureCondition.NATURAL, 1.00),
    (MoistureCondition.SATURATED, 1.05),
])
def test_moisture_factor(analyzer, condition, factor):
    assert analyzer.moisture_factor(condition) == factor


class TestReinforcementFactor:
    def test_no_bars_is_exactly_one(self):
        assert CoreAnalyzer.reinforcement_factor((), 93, 115.67) == 1.0

    def test_single_bar(self):
        fr = CoreAnalyzer.reinforcement_factor((ReinforcementBar(8, 43),), 93, 115.67)
        assert fr == pytest.approx(1 + 1.5 * 8 * 43 / (93 * 115.67))
        assert fr > 1.0

    def test_bars_add_up(self):
        bars = (ReinforcementBar(8, 43), ReinforcementBar(10, 20))
        fr = CoreAnalyzer.reinforcement_factor(bars, 100, 120)
        assert fr == pytest.approx(1 + 1.5 * (344 + 200) / 12000)

    def test_bar_at_end_face_adds_nothing(self):
        assert CoreAnalyzer.reinforcement_factor((ReinforcementBar(8, 0),), 93, 120) == 1.0

    def test_applied_to_cube_strength(self, analyzer, core_sample):
        plain = analyzer.run_analysis(core_sample)
        reinforced = analyzer.run_analysis(
            dataclasses.replace(core_sample, reinforcement=(ReinforcementBar(8, 43),)))
        assert reinforced.equivalent_cube_strength == pytest.approx(
            plain.equivalent_cube_strength * reinforced.reinforcement_correction_factor)


def test_fg_clamps_high_strength(analyzer):
    assert analyzer.cutting_factor(150, 60) == pytest.approx(1.02)
    assert analyzer.cutting_factor(40, 10) == pytest.approx(1.18)


def test_info_echoed_on_result(analyzer, core_sample):
    info = CoreSampleInfo(sample_number='C-7', tested_element='Slab S2')
    result = analyzer.run_analysis(dataclasses.replace(core_sample, info=info))
    data = result.to_dict()
    assert data['sample_number'] == 'C-7'
    assert data['tested_element'] == 'Slab S2'
    assert data['aggregate_type'] is None
    assert data['equivalent_cube_strength'] == pytest.approx(120.31, abs=0.01)


class TestBatch:
    def test_population_standard_deviation(self, analyzer, core_sample):
        wet = dataclasses.replace(core_sample, moisture_condition=MoistureCondition.SATURATED)
        batch = analyzer.run_batch([core_sample, wet])
        a, b = (r.equivalent_cube_strength for r in batch.results)
        assert batch.statistics.standard_deviation == pytest.approx(abs(a - b) / 2)
        assert batch.statistics.average == pytest.approx((a + b) / 2)
        assert batch.statistics.minimum == pytest.approx(a)
        assert batch.statistics.maximum == pytest.approx(b)

    def test_single_sample(self, analyzer, core_sample):
        batch = analyzer.run_batch([core_sample])
        assert batch.statistics.count == 1
        assert batch.statistics.standard_deviation == 0.0

    def test_metadata_and_mpa_average(self, analyzer, core_sample):
        metadata = ProjectMetadata(project_name='Bridge deck', owner='City')
        batch = analyzer.run_batch([core_sample], metadata, '2024-03-12')
        data = batch.to_dict()
        assert data['metadata']['project_name'] == 'Bridge deck'
        assert data['testing_date'] == '2024-03-12'
        assert data['sample_count'] == 1
        assert data['average_strength_mpa'] == pytest.approx(
            data['average_strength'] * KGCM2_TO_MPA)
