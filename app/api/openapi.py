"""OpenAPI (Swagger 2.0) description of the /api endpoints, served by flasgger."""

DOCS_ROUTE = '/api-docs/'
SPEC_ROUTE = '/api-docs/openapi.json'


def _ref(name):
    return {'$ref': f'#/definitions/{name}'}


def _json_body(schema_name, description):
    return [{'in': 'body', 'name': 'body', 'required': True,
             'description': description, 'schema': _ref(schema_name)}]


def _path_param(name, kind, description):
    return {'in': 'path', 'name': name, 'type': kind, 'required': True,
            'description': description}


def _responses(description, invalid=True):
    responses = {'200': {'description': description}}
    if invalid:
        responses['400'] = {'description': 'Invalid input', 'schema': _ref('Error')}
    return responses


def _post(tag, summary, schema_name, body_description, result_description):
    return {'post': {
        'tags': [tag],
        'summary': summary,
        'consumes': ['application/json'],
        'produces': ['application/json'],
        'parameters': _json_body(schema_name, body_description),
        'responses': _responses(result_description),
    }}


def _get(tag, summary, result_description, parameters=(), invalid=False):
    return {'get': {
        'tags': [tag],
        'summary': summary,
        'produces': ['application/json'],
        'parameters': list(parameters),
        'responses': _responses(result_description, invalid),
    }}


DEFINITIONS = {
    'Error': {
        'type': 'object',
        'properties': {
            'error': {'type': 'string', 'example': 'Invalid input'},
            'details': {'type': 'string'},
        },
    },
    'ReinforcementBar': {
        'type': 'object',
        'required': ['diameter', 'distance_from_end'],
        'properties': {
            'diameter': {'type': 'number', 'description': 'Bar diameter (mm), > 0'},
            'distance_from_end': {'type': 'number',
                                  'description': 'Bar axis to nearest core end (mm), >= 0'},
        },
    },
    'CoreSample': {
        'type': 'object',
        'required': ['diameters', 'lengths', 'breaking_load', 'moisture_condition'],
        'properties': {
            'diameters': {'type': 'array', 'items': {'type': 'number'},
                          'minItems': 2, 'maxItems': 2, 'example': [93, 93]},
            'lengths': {'type': 'array', 'items': {'type': 'number'},
                        'minItems': 2, 'maxItems': 3, 'example': [122, 120, 122]},
            'breaking_load': {'type': 'number', 'description': 'kN', 'example': 68.4},
            'moisture_condition': {'type': 'string',
                                   'enum': ['dry', 'natural', 'saturated']},
            'direction_factor': {'type': 'number', 'default': 2.5,
                                 'description': '2.5 horizontal, 2.3 vertical coring'},
            'weight': {'type': 'number', 'description': 'g, reported density only'},
            'reinforcement': {'type': 'array', 'items': _ref('ReinforcementBar')},
            'sample_number': {'type': 'string'},
            'tested_element': {'type': 'string'},
            'visual_condition': {'type': 'string'},
            'aggregate_type': {'type': 'string', 'enum': ['gravel', 'crushed', 'lightweight']},
            'coring_date': {'type': 'string'},
            'testing_date': {'type': 'string'},
            'curing_age_days': {'type': 'number'},
            'end_preparation': {'type': 'string',
                                'enum': ['sulfur_capping', 'grinding', 'neoprene_pads']},
            'failure_pattern': {'type': 'string'},
        },
    },
    'ProjectMetadata': {
        'type': 'object',
        'properties': {key: {'type': 'string'} for key in (
            'requesting_entity', 'project_name', 'owner',
            'contractor', 'consultant', 'additional_info')},
    },
    'CoreBatch': {
        'type': 'object',
        'required': ['samples'],
        'properties': {
            'samples': {'type': 'array', 'items': _ref('CoreSample'), 'minItems': 1},
            'metadata': _ref('ProjectMetadata'),
            'testing_date': {'type': 'string'},
        },
    },
    'PullOffSpecimen': {
        'type': 'object',
        'required': ['diameter', 'failure_load'],
        'properties': {
            'diameter': {'type': 'number', 'description': 'mm', 'example': 55},
            'failure_load': {'type': 'number', 'description': 'kN', 'example': 3.63},
            'specimen_number': {'type': 'string'},
            'specimen_code': {'type': 'string'},
            'tested_item': {'type': 'string'},
            'failure_mode': {'type': 'string'},
        },
    },
    'PullOffBatch': {
        'type': 'object',
        'required': ['specimens'],
        'properties': {
            'specimens': {'type': 'array', 'items': _ref('PullOffSpecimen'), 'minItems': 1},
        },
    },
    'AnvilCalibration': {
        'type': 'object',
        'required': ['readings_before', 'readings_after'],
        'properties': {
            'readings_before': {'type': 'array', 'items': {'type': 'integer'}, 'minItems': 5,
                                'example': [81, 83, 84, 84, 83]},
            'readings_after': {'type': 'array', 'items': {'type': 'integer'}, 'minItems': 5,
                               'example': [80, 80, 82, 82, 81]},
        },
    },
    'SchmidtElement': {
        'type': 'object',
        'required': ['readings'],
        'properties': {
            'readings': {'type': 'array', 'items': {'type': 'number'},
                         'minItems': 9, 'maxItems': 15},
            'element_name': {'type': 'string'},
            'element_code': {'type': 'string'},
            'hammer_direction': {'type': 'string'},
            'notes': {'type': 'string'},
        },
    },
    'SchmidtBatch': {
        'type': 'object',
        'required': ['elements', 'anvil_calibration'],
        'properties': {
            'elements': {'type': 'array', 'items': _ref('SchmidtElement'), 'minItems': 1},
            'anvil_calibration': _ref('AnvilCalibration'),
            'hammer_code': {'type': 'string'},
            'testing_date': {'type': 'string'},
        },
    },
}

PATHS = {
    '/api/health': _get('system', 'Service health', 'Status and UTC timestamp'),
    '/api/core/calculate': _post(
        'core', 'Equivalent cube strength of one core', 'CoreSample',
        'Core measurements', 'Core result (strengths in kg/cm² and MPa)'),
    '/api/core/calculate/batch': _post(
        'core', 'Equivalent cube strength of a set of cores', 'CoreBatch',
        'Cores with optional project metadata', 'Per-core results and population statistics'),
    '/api/pulloff/calculate': _post(
        'pulloff', 'Tensile adhesion strength of one specimen', 'PullOffSpecimen',
        'Specimen measurements', 'Specimen result in MPa'),
    '/api/pulloff/calculate/batch': _post(
        'pulloff', 'Pull-off batch with uncertainty budget', 'PullOffBatch',
        'Specimens', 'Per-specimen results, statistics and expanded uncertainty'),
    '/api/schmidt/anvil': _post(
        'schmidt', 'Anvil correction factor', 'AnvilCalibration',
        'Anvil readings before and after the session', 'RSA and pooled anvil median'),
    '/api/schmidt/calculate/batch': _post(
        'schmidt', 'Rebound hammer session', 'SchmidtBatch',
        'Elements and the shared anvil calibration',
        'Per-element medians, acceptance counts and uncertainty'),
    '/api/reference/ld-correction': _get('reference', 'L/D correction table', 'Table rows'),
    '/api/reference/moisture-correction': _get(
        'reference', 'Moisture correction table', 'Table rows'),
    '/api/reference/fg-correction': _get(
        'reference', 'Cutting correction (Fg) grid', 'Axes and grid'),
    '/api/reference/ld-factor/{ratio}': _get(
        'reference', 'Interpolated L/D correction factor', 'Factor',
        [_path_param('ratio', 'number', 'L/D ratio')], invalid=True),
    '/api/reference/moisture-factor/{condition}': _get(
        'reference', 'Moisture correction factor', 'Factor',
        [_path_param('condition', 'string', 'dry, natural or saturated')], invalid=True),
    '/api/reference/fg-factor/{diameter}/{strength}': _get(
        'reference', 'Interpolated cutting correction factor', 'Factor',
        [_path_param('diameter', 'number', 'Core diameter (mm)'),
         _path_param('strength', 'number', 'Core strength (MPa)')], invalid=True),
    '/api/reference/coverage-factor/{dof}': _get(
        'reference', 'Tabulated 95 % coverage factor', 'Coverage factor',
        [_path_param('dof', 'number', 'Degrees of freedom')], invalid=True),
}

TEMPLATE = {
    'swagger': '2.0',
    'info': {
        'title': 'Concrete test calculation API',
        'description': ('Drilled core equivalent cube strength, pull-off adhesion and '
                        'rebound hammer calculations with GUM uncertainty.'),
        'version': '1.0.0',
    },
    'tags': [
        {'name': 'core', 'description': 'Drilled core test'},
        {'name': 'pulloff', 'description': 'Pull-off adhesion test'},
        {'name': 'schmidt', 'description': 'Rebound hammer test'},
        {'name': 'reference', 'description': 'Correction tables and factor lookups'},
        {'name': 'system', 'description': 'Service status'},
    ],
    'paths': PATHS,
    'definitions': DEFINITIONS,
}


def swagger_config(default_config):
    """flasgger config serving the UI at /api-docs/ from the paths declared above."""
    config = dict(default_config)
    config.update({
        'specs': [{
            'endpoint': 'openapi',
            'route': SPEC_ROUTE,
            # paths come from TEMPLATE, not from view docstrings
            'rule_filter': lambda rule: False,
            'model_filter': lambda tag: False,
        }],
        'specs_route': DOCS_ROUTE,
    })
    return config
