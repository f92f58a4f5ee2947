"""JSON API routes for the core, pull-off and rebound hammer calculations."""

import logging
import math
from datetime import datetime, timezone

from flask import current_app, jsonify, request

from app.api import api_bp
from app.api.validators import (
    ValidationError,
    parse_anvil,
    parse_core_batch,
    parse_core_sample,
    parse_pulloff_batch,
    parse_pulloff_specimen,
    parse_schmidt_batch,
)
from corelab.analysis import (
    DEFAULT_TABLES,
    CoreAnalysisConfig,
    CoreAnalyzer,
    PullOffAnalyzer,
    SchmidtAnalyzer,
)
from corelab.models.core_sample import MoistureCondition

logger = logging.getLogger(__name__)


def core_analyzer():
    config = CoreAnalysisConfig(
        snap_fg_diameter=current_app.config.get('FG_SNAP_TO_NOMINAL_DIAMETER', False))
    return CoreAnalyzer(DEFAULT_TABLES, config)


def max_batch_size():
    return current_app.config.get('MAX_BATCH_SIZE', 500)


def json_body():
    """Request body as parsed JSON, or None when missing or malformed."""
    return request.get_json(silent=True)


def parse_path_number(value, name):
    try:
        number = float(value)
    except ValueError:
        raise ValidationError(f"{name} must be a number")
    if not math.isfinite(number):
        raise ValidationError(f"{name} must be finite")
    return number


@api_bp.errorhandler(ValidationError)
def handle_validation_error(e):
    logger.warning("Rejected %s %s: %s", request.method, request.path, e)
    return jsonify({'error': 'Invalid input', 'details': str(e)}), 400


# --- Health ---

@api_bp.route('/health')
def health():
    return jsonify({
        'status': 'ok',
        'timestamp': datetime.now(timezone.utc).isoformat(),
    })


# --- Core test ---

@api_bp.route('/core/calculate', methods=['POST'])
def calculate_core():
    measurement = parse_core_sample(json_body(), 'request body')
    result = core_analyzer().run_analysis(measurement)
    logger.info("Core sample %s: cube strength %.2f kg/cm²",
                measurement.info.sample_number or '-', result.equivalent_cube_strength)
    return jsonify(result.to_dict())


@api_bp.route('/core/calculate/batch', methods=['POST'])
def calculate_core_batch():
    measurements, metadata, testing_date = parse_core_batch(json_body(), max_batch_size())
    batch = core_analyzer().run_batch(measurements, metadata, testing_date)
    logger.info("Core batch of %d samples calculated", len(measurements))
    return jsonify(batch.to_dict())


# --- Pull-off test ---

@api_bp.route('/pulloff/calculate', methods=['POST'])
def calculate_pulloff():
    specimen = parse_pulloff_specimen(json_body(), 'request body')
    result = PullOffAnalyzer().run_analysis(specimen)
    logger.info("Pull-off specimen %s: %.3f MPa",
                specimen.specimen_number or '-', result.tensile_strength)
    return jsonify(result.to_dict())


@api_bp.route('/pulloff/calculate/batch', methods=['POST'])
def calculate_pulloff_batch():
    specimens = parse_pulloff_batch(json_body(), max_batch_size())
    batch = PullOffAnalyzer().run_batch(specimens)
    logger.info("Pull-off batch of %d specimens calculated", len(specimens))
    return jsonify(batch.to_dict())


# --- Rebound hammer ---

@api_bp.route('/schmidt/anvil', methods=['POST'])
def calculate_anvil():
    anvil = parse_anvil(json_body(), 'request body')
    result = SchmidtAnalyzer(DEFAULT_TABLES).calibrate_anvil(anvil.readings_before,
                                                             anvil.readings_after)
    return jsonify(result.to_dict())


@api_bp.route('/schmidt/calculate/batch', methods=['POST'])
def calculate_schmidt_batch():
    elements, anvil, hammer_code, testing_date = parse_schmidt_batch(json_body(),
                                                                     max_batch_size())
    batch = SchmidtAnalyzer(DEFAULT_TABLES).run_batch(elements, anvil, hammer_code, testing_date)
    logger.info("Rebound batch of %d elements calculated (RSA %.4f)",
                len(elements), batch.anvil.rsa)
    return jsonify(batch.to_dict())


# --- Reference tables ---

@api_bp.route('/reference/ld-correction')
def ld_correction_table():
    return jsonify({
        'table': DEFAULT_TABLES.ld_table_rows(),
        'note': 'Linear interpolation between points, clamped at the table ends.',
    })


@api_bp.route('/reference/moisture-correction')
def moisture_correction_table():
    return jsonify({'table': DEFAULT_TABLES.moisture_table_rows()})


@api_bp.route('/reference/fg-correction')
def fg_correction_table():
    table = DEFAULT_TABLES.fg_table()
    table['note'] = 'Bilinear interpolation on diameter (mm) and core strength (MPa).'
    return jsonify(table)


@api_bp.route('/reference/ld-factor/<ratio>')
def ld_factor(ratio):
    ld_ratio = parse_path_number(ratio, 'ratio')
    if ld_ratio <= 0:
        raise ValidationError("ratio must be positive")
    return jsonify({
        'ld_ratio': ld_ratio,
        'correction_factor': core_analyzer().ld_correction_factor(ld_ratio),
    })


@api_bp.route('/reference/moisture-factor/<condition>')
def moisture_factor(condition):
    try:
        factor = DEFAULT_TABLES.moisture_factor(condition)
    except ValueError:
        logger.warning("Unknown moisture condition requested: %s", condition)
        return jsonify({
            'error': 'Invalid moisture condition',
            'valid_conditions': [c.value for c in MoistureCondition],
        }), 400
    return jsonify({'condition': condition, 'factor': factor})


@api_bp.route('/reference/fg-factor/<diameter>/<strength>')
def fg_factor(diameter, strength):
    diameter_mm = parse_path_number(diameter, 'diameter')
    strength_mpa = parse_path_number(strength, 'strength')
    if diameter_mm <= 0 or strength_mpa <= 0:
        raise ValidationError("diameter and strength must be positive")
    return jsonify({
        'diameter': diameter_mm,
        'strength': strength_mpa,
        'factor': core_analyzer().cutting_factor(diameter_mm, strength_mpa),
    })


@api_bp.route('/reference/coverage-factor/<dof>')
def coverage_factor(dof):
    degrees_of_freedom = parse_path_number(dof, 'dof')
    if degrees_of_freedom <= 0:
        raise ValidationError("dof must be positive")
    return jsonify({
        'degrees_of_freedom': degrees_of_freedom,
        'coverage_factor': DEFAULT_TABLES.coverage_factor(degrees_of_freedom),
    })
