"""
AI Productivity ROI: Parameters
Model constants and calculator defaults.
Defaults live here; a consultant can override any of them through
data/config/parameters.xlsx (columns: Parameter, Value).
"""
import os, logging, math
import openpyxl

DATA_DIR = os.path.join(os.path.dirname(os.path.dirname(__file__)), 'data')
PARAMETERS_PATH = os.path.join(DATA_DIR, 'config', 'parameters.xlsx')

# ── Maturity -> hours saved per employee per week ──
# 1 = low maturity (big wins from basic AI) -> ~5h/week
# 10 = high maturity (already optimised) -> ~1h/week
MATURITY_HOURS = {
    1: 5.0, 2: 4.6, 3: 4.2, 4: 3.8, 5: 3.4,
    6: 3.0, 7: 2.6, 8: 2.2, 9: 1.6, 10: 1.0,
}


def read_xlsx_sheet(filepath, sheet_name=None):
    wb = openpyxl.load_workbook(filepath, read_only=True, data_only=True)
    ws = wb[sheet_name] if sheet_name else wb.active
    rows = list(ws.iter_rows(values_only=True))
    wb.close()
    if len(rows) < 2:
        return []
    headers = [str(h).strip() if h else f'col_{i}' for i, h in enumerate(rows[0])]
    return [dict(zip(headers, row)) for row in rows[1:]]


def default_params():
    return {
        'maturityHours': dict(MATURITY_HOURS),
        'overlapFactor': 0.70,          # upskilling kept when throughput is also selected
        'rampCeilingMonths': 24,        # max onboarding ramp saving per hire
        'maxPriorities': 3,
        'weeksPerYear': 52,
        'hoursPerWeek': 40,
        'weeksPerMonth': 4.33,
        'productiveHoursPerMonth': 160,
    }


def default_assumption_values():
    """Calculator session defaults, keyed like the API payload."""
    return {
        'employeesInScope': 150,
        'currency': 'EUR',
        'team': 'all',
        'hourlyRate': None,
        'annualSalary': 52000,
        'maturityLevel': 3,
        'selectedPriorities': ['throughput', 'retention'],
        'priorityWeights': {},
        'trainingCostPerEmployee': 850,
        'trainingHoursPerEmployee': 0,
        'programOneOffCost': 0,
        'amortizationMonths': 12,
        'params': {
            'throughput': {'hoursPerPersonPerWeek': None, 'utilizationPct': 70},
            'quality': {'reworkEventsPerPersonPerMonth': 3, 'reductionPct': 20, 'hoursPerFix': 1},
            'onboarding': {'hiresPerYear': 24, 'baselineRampMonths': 3, 'improvedRampMonths': 2},
            'retention': {'baselineTurnoverPct': 20, 'reductionPct': 10, 'replacementCostPct': 50},
            'cost': {'monthlyConsolidationSavings': 0, 'eliminatedToolCount': 0, 'avgToolCostPerMonth': 200},
            'upskilling': {'coveragePct': 40, 'hoursPerPersonPerWeek': None, 'utilizationPct': 70},
        },
    }


def validate_maturity_curve(hours):
    """Levels 1..10 must all be present and hours must never rise with maturity."""
    levels = sorted(hours)
    if levels != list(range(1, 11)):
        raise ValueError(f"maturity curve must define levels 1-10, got {levels}")
    for lvl in levels:
        if not math.isfinite(hours[lvl]) or hours[lvl] < 0:
            raise ValueError(f"maturity curve at level {lvl} must be a finite, non-negative number, got {hours[lvl]!r}")
    for lvl in range(2, 11):
        if hours[lvl] > hours[lvl - 1]:
            raise ValueError(f"maturity curve rises at level {lvl}: {hours[lvl - 1]} -> {hours[lvl]}")
    return hours


def load_parameters(path=None):
    """Load model constants from parameters.xlsx, falling back to defaults.

    Rows are `Parameter | Value`; maturity rows use `Maturity Level N`.
    """
    path = path or PARAMETERS_PATH
    p = default_params()
    if not os.path.exists(path):
        return p
    rows = read_xlsx_sheet(path)
    param_map = {
        'Overlap Factor': 'overlapFactor',
        'Ramp Ceiling (months)': 'rampCeilingMonths',
        'Max Priorities': 'maxPriorities',
        'Weeks per Year': 'weeksPerYear',
        'Hours per Week': 'hoursPerWeek',
        'Weeks per Month': 'weeksPerMonth',
        'Productive Hours per Month': 'productiveHoursPerMonth',
    }
    hours = dict(p['maturityHours'])
    for row in rows:
        key = str(row.get('Parameter', '') or '').strip()
        val = row.get('Value')
        if val is None or val == '':
            continue
        try:
            val = float(val)
        except (TypeError, ValueError):
            logging.warning(f"parameters.xlsx: non-numeric value for '{key}' ignored ({val!r})")
            continue
        if key.startswith('Maturity Level '):
            try:
                hours[int(key.rsplit(' ', 1)[1])] = val
            except ValueError:
                logging.warning(f"parameters.xlsx: bad maturity row '{key}' ignored")
            continue
        if key in param_map:
            mapped = param_map[key]
            if mapped in ('rampCeilingMonths', 'maxPriorities', 'weeksPerYear'):
                val = int(val)
            p[mapped] = val
        else:
            logging.warning(f"parameters.xlsx: unknown parameter '{key}' ignored")
    p['maturityHours'] = validate_maturity_curve(hours)
    p['overlapFactor'] = max(0.0, min(1.0, p['overlapFactor']))
    logging.info(f"Loaded model parameters from {path}")
    return p
