"""
Request payload validation.

Turns JSON request bodies into the immutable measurement records consumed by
the calculation engines. Every check raises ``ValidationError`` naming the
offending field, so the engines only ever see range-checked input.
"""

import math
from numbers import Real

from corelab.models.core_sample import (
    AggregateType,
    CoreSampleInfo,
    CoreSampleMeasurement,
    DIRECTION_FACTOR_HORIZONTAL,
    EndPreparation,
    MoistureCondition,
    ProjectMetadata,
    ReinforcementBar,
)
from corelab.models.pulloff_specimen import PullOffSpecimenMeasurement
from corelab.models.schmidt_element import (
    AnvilCalibration,
    MAX_ELEMENT_READINGS,
    MIN_ANVIL_READINGS,
    MIN_ELEMENT_READINGS,
    SchmidtElementMeasurement,
)


class ValidationError(ValueError):
    """Request data failed validation."""


def _require_object(data, name):
    if not isinstance(data, dict):
        raise ValidationError(f"{name} must be a JSON object")
    return data


def _number(value, name, allow_zero=False):
    """Real number above zero, or zero too when ``allow_zero`` is set."""
    if isinstance(value, bool) or not isinstance(value, Real):
        raise ValidationError(f"{name} must be a number")
    value = float(value)
    if not math.isfinite(value):
        raise ValidationError(f"{name} must be finite")
    if value < 0 or (value == 0 and not allow_zero):
        raise ValidationError(f"{name} must be {'non-negative' if allow_zero else 'positive'}")
    return value


def _number_list(values, name, min_items, max_items=None):
    if not isinstance(values, list):
        raise ValidationError(f"{name} must be a list")
    if len(values) < min_items or (max_items is not None and len(values) > max_items):
        if max_items is None:
            expected = f"at least {min_items}"
        elif min_items == max_items:
            expected = f"exactly {min_items}"
        else:
            expected = f"{min_items} to {max_items}"
        raise ValidationError(f"{name} must contain {expected} values, got {len(values)}")
    return tuple(_number(v, f"{name}[{i}]") for i, v in enumerate(values))


def _optional_text(data, key):
    """Optional descriptive field; numbers are accepted and kept as strings."""
    value = data.get(key)
    if value is None:
        return None
    if isinstance(value, bool) or not isinstance(value, (str, Real)):
        raise ValidationError(f"{key} must be a string")
    return str(value)


def _enum(value, enum_cls, name):
    try:
        return enum_cls(value)
    except ValueError:
        valid = ', '.join(member.value for member in enum_cls)
        raise ValidationError(f"{name} must be one of: {valid}")


def _batch_items(data, key, max_items):
    items = data.get(key)
    if not isinstance(items, list) or not items:
        raise ValidationError(f"{key} must be a non-empty list")
    if len(items) > max_items:
        raise ValidationError(f"{key} must contain at most {max_items} items")
    return items


# --- Core test ---

def parse_reinforcement(data, name='reinforcement'):
    """List of ``{diameter, distance_from_end}`` objects; null means none."""
    if data is None:
        return ()
    if not isinstance(data, list):
        raise ValidationError(f"{name} must be a list")
    bars = []
    for i, item in enumerate(data):
        item = _require_object(item, f"{name}[{i}]")
        bars.append(ReinforcementBar(
            diameter=_number(item.get('diameter'), f"{name}[{i}].diameter"),
            distance_from_end=_number(item.get('distance_from_end'),
                                      f"{name}[{i}].distance_from_end",
                                      allow_zero=True),
        ))
    return tuple(bars)


def parse_core_sample(data, name='sample'):
    """Build a CoreSampleMeasurement from a request object."""
    data = _require_object(data, name)

    if 'density' in data:
        raise ValidationError("density is not accepted; pass the coring direction factor "
                              "as direction_factor (2.5 horizontal, 2.3 vertical)")
    if data.get('moisture_condition') is None:
        raise ValidationError("moisture_condition is required")
    moisture = _enum(data['moisture_condition'], MoistureCondition, 'moisture_condition')

    direction_factor = data.get('direction_factor', DIRECTION_FACTOR_HORIZONTAL)
    weight = data.get('weight')

    aggregate_type = data.get('aggregate_type')
    end_preparation = data.get('end_preparation')
    curing_age = data.get('curing_age_days')

    info = CoreSampleInfo(
        sample_number=_optional_text(data, 'sample_number'),
        tested_element=_optional_text(data, 'tested_element'),
        visual_condition=_optional_text(data, 'visual_condition'),
        aggregate_type=(_enum(aggregate_type, AggregateType, 'aggregate_type')
                        if aggregate_type is not None else None),
        coring_date=_optional_text(data, 'coring_date'),
        testing_date=_optional_text(data, 'testing_date'),
        curing_age_days=(_number(curing_age, 'curing_age_days', allow_zero=True)
                         if curing_age is not None else None),
        end_preparation=(_enum(end_preparation, EndPreparation, 'end_preparation')
                         if end_preparation is not None else None),
        failure_pattern=_optional_text(data, 'failure_pattern'),
    )

    return CoreSampleMeasurement(
        diameters=_number_list(data.get('diameters'), 'diameters', 2, 2),
        lengths=_number_list(data.get('lengths'), 'lengths', 2, 3),
        breaking_load=_number(data.get('breaking_load'), 'breaking_load'),
        moisture_condition=moisture,
        direction_factor=_number(direction_factor, 'direction_factor'),
        weight=_number(weight, 'weight') if weight is not None else None,
        reinforcement=parse_reinforcement(data.get('reinforcement')),
        info=info,
    )


def parse_project_metadata(data):
    if data is None:
        return ProjectMetadata()
    data = _require_object(data, 'metadata')
    return ProjectMetadata(
        requesting_entity=_optional_text(data, 'requesting_entity'),
        project_name=_optional_text(data, 'project_name'),
        owner=_optional_text(data, 'owner'),
        contractor=_optional_text(data, 'contractor'),
        consultant=_optional_text(data, 'consultant'),
        additional_info=_optional_text(data, 'additional_info'),
    )


def parse_core_batch(data, max_items):
    """
    Parse ``{samples, metadata?, testing_date?}``.

    Returns
    -------
    tuple
        (measurements, ProjectMetadata, testing_date)
    """
    data = _require_object(data, 'request body')
    samples = _batch_items(data, 'samples', max_items)
    measurements = [parse_core_sample(s, f"samples[{i}]") for i, s in enumerate(samples)]
    return (measurements,
            parse_project_metadata(data.get('metadata')),
            _optional_text(data, 'testing_date'))


# --- Pull-off test ---

def parse_pulloff_specimen(data, name='specimen'):
    data = _require_object(data, name)
    return PullOffSpecimenMeasurement(
        diameter=_number(data.get('diameter'), 'diameter'),
        failure_load=_number(data.get('failure_load'), 'failure_load'),
        specimen_number=_optional_text(data, 'specimen_number'),
        specimen_code=_optional_text(data, 'specimen_code'),
        tested_item=_optional_text(data, 'tested_item'),
        failure_mode=_optional_text(data, 'failure_mode'),
    )


def parse_pulloff_batch(data, max_items):
    """Parse ``{specimens}`` into a list of PullOffSpecimenMeasurement."""
    data = _require_object(data, 'request body')
    specimens = _batch_items(data, 'specimens', max_items)
    return [parse_pulloff_specimen(s, f"specimens[{i}]") for i, s in enumerate(specimens)]


# --- Rebound hammer ---

def _anvil_readings(values, name):
    readings = _number_list(values, name, MIN_ANVIL_READINGS)
    for i, value in enumerate(readings):
        if not value.is_integer():
            raise ValidationError(f"{name}[{i}] must be an integer")
    return tuple(int(v) for v in readings)


def parse_anvil(data, name='anvil_calibration'):
    data = _require_object(data, name)
    return AnvilCalibration(
        readings_before=_anvil_readings(data.get('readings_before'), 'readings_before'),
        readings_after=_anvil_readings(data.get('readings_after'), 'readings_after'),
    )


def parse_schmidt_element(data, name='element'):
    data = _require_object(data, name)
    return SchmidtElementMeasurement(
        readings=_number_list(data.get('readings'), 'readings',
                              MIN_ELEMENT_READINGS, MAX_ELEMENT_READINGS),
        element_name=_optional_text(data, 'element_name'),
        element_code=_optional_text(data, 'element_code'),
        hammer_direction=_optional_text(data, 'hammer_direction'),
        notes=_optional_text(data, 'notes'),
    )


def parse_schmidt_batch(data, max_items):
    """
    Parse ``{elements, anvil_calibration, hammer_code?, testing_date?}``.

    Returns
    -------
    tuple
        (elements, AnvilCalibration, hammer_code, testing_date)
    """
    data = _require_object(data, 'request body')
    elements = _batch_items(data, 'elements', max_items)
    if data.get('anvil_calibration') is None:
        raise ValidationError("anvil_calibration is required")
    return ([parse_schmidt_element(e, f"elements[{i}]") for i, e in enumerate(elements)],
            parse_anvil(data['anvil_calibration']),
            _optional_text(data, 'hammer_code'),
            _optional_text(data, 'testing_date'))
