"""Shared test fixtures."""
import pytest

from app import create_app
from corelab.models.core_sample import CoreSampleMeasurement, MoistureCondition
from corelab.models.pulloff_specimen import PullOffSpecimenMeasurement
from corelab.models.schmidt_element import AnvilCalibration, SchmidtElementMeasurement


@pytest.fixture(scope='session')
def app():
    """Create application for the test session."""
    app = create_app('testing')
    yield app


@pytest.fixture()
def client(app):
    """Flask test client."""
    return app.test_client()


# --- Reference data from the laboratory sheets ---

@pytest.fixture
def core_sample_payload():
    return {
        'sample_number': '1',
        'diameters': [93, 93],
        'lengths': [122, 120, 122],
        'weight': 1835,
        'breaking_load': 68.4,
        'moisture_condition': 'dry',
        'direction_factor': 2.5,
    }


@pytest.fixture
def core_sample():
    return CoreSampleMeasurement(
        diameters=(93.0, 93.0),
        lengths=(122.0, 120.0, 122.0),
        breaking_load=68.4,
        moisture_condition=MoistureCondition.DRY,
        direction_factor=2.5,
        weight=1835.0,
    )


PULLOFF_DIAMETERS = [55, 55, 49.5, 55, 55, 55]
PULLOFF_LOADS = [3.63, 2.87, 3.25, 3.31, 4.08, 4.59]


@pytest.fixture
def pulloff_payload():
    return {'specimens': [
        {'specimen_number': str(i + 1), 'diameter': d, 'failure_load': p}
        for i, (d, p) in enumerate(zip(PULLOFF_DIAMETERS, PULLOFF_LOADS))
    ]}


@pytest.fixture
def pulloff_specimens():
    return [PullOffSpecimenMeasurement(diameter=d, failure_load=p)
            for d, p in zip(PULLOFF_DIAMETERS, PULLOFF_LOADS)]


ANVIL_BEFORE = [81, 83, 84, 84, 83]
ANVIL_AFTER = [80, 80, 82, 82, 81]
ELEMENT_READINGS = [40, 42, 38, 41, 39, 40, 43, 37, 41, 40]


@pytest.fixture
def anvil():
    return AnvilCalibration(readings_before=tuple(ANVIL_BEFORE),
                            readings_after=tuple(ANVIL_AFTER))


@pytest.fixture
def schmidt_element():
    return SchmidtElementMeasurement(readings=tuple(float(r) for r in ELEMENT_READINGS),
                                     element_name='Column C1', element_code='C1')


@pytest.fixture
def schmidt_payload():
    return {
        'hammer_code': 'SH-01',
        'testing_date': '2024-03-12',
        'anvil_calibration': {'readings_before': ANVIL_BEFORE, 'readings_after': ANVIL_AFTER},
        'elements': [{'element_name': 'Column C1', 'element_code': 'C1',
                      'readings': ELEMENT_READINGS}],
    }
