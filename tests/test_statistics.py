"""Tests for batch statistics."""
import math
import pytest

from corelab.analysis.statistics import (
    POPULATION, SAMPLE, aggregate, median, standard_deviation,
)


def test_population_and_sample_sd_differ():
    values = [2, 4, 4, 4, 5, 5, 7, 9]
    assert standard_deviation(values, POPULATION) == pytest.approx(2.0)
    assert standard_deviation(values, SAMPLE) == pytest.approx(math.sqrt(32 / 7))


def test_single_value_sd_is_zero():
    assert standard_deviation([3.5], POPULATION) == 0.0
    assert standard_deviation([3.5], SAMPLE) == 0.0


def test_median_even_and_odd():
    assert median([81, 83, 84, 84, 83, 80, 80, 82, 82, 81]) == 82
    assert median([3, 1, 2]) == 2
    assert median([1, 2, 3, 4]) == 2.5


def test_aggregate():
    stats = aggregate([1.0, 2.0, 3.0], ddof=SAMPLE)
    assert stats.count == 3
    assert stats.average == pytest.approx(2.0)
    assert stats.minimum == 1.0
    assert stats.maximum == 3.0
    assert stats.standard_deviation == pytest.approx(1.0)
    assert stats.coefficient_of_variation == pytest.approx(50.0)


def test_aggregate_single_value():
    stats = aggregate([120.3], ddof=POPULATION)
    assert stats.count == 1
    assert stats.standard_deviation == 0.0
    assert stats.to_dict()['average'] == pytest.approx(120.3)
