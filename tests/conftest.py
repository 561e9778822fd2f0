"""Shared fixtures for the ROI engine tests."""

import pytest

from engines.assumptions import build_assumptions
from engines.parameters import default_params


def make_assumptions(**overrides):
    """Baseline scenario: 25 employees, maturity 3, 50/h, throughput at 70%, no training spend."""
    raw = {
        'employeesInScope': 25,
        'maturityLevel': 3,
        'hourlyRate': 50,
        'annualSalary': None,
        'selectedPriorities': ['throughput'],
        'trainingCostPerEmployee': 0,
        'trainingHoursPerEmployee': 0,
        'programOneOffCost': 0,
        'amortizationMonths': 12,
        'params': {'throughput': {'hoursPerPersonPerWeek': None, 'utilizationPct': 70}},
    }
    params = overrides.pop('params', None)
    raw.update(overrides)
    if params:
        for key, block in params.items():
            raw['params'].setdefault(key, {}).update(block)
    return build_assumptions(raw)


@pytest.fixture
def model():
    return default_params()


@pytest.fixture
def baseline():
    return make_assumptions()


@pytest.fixture
def client():
    import app as app_module

    app_module.STATE.update({'model': None, 'assumptions': None, 'results': None,
                             'loaded': False, '_load_error': None})
    app_module.app.config['TESTING'] = True
    with app_module.app.test_client() as c:
        yield c
