"""
AI Productivity ROI: Maturity Model
Self-assessed AI maturity (1-10) -> baseline hours saved per employee per week.
Diminishing returns: the less mature the organisation, the more low-hanging
fruit basic AI tooling still has to pick.
"""
from engines.errors import InvalidMaturityLevel
from engines.parameters import MATURITY_HOURS

MATURITY_BANDS = [
    {'key': 'early', 'label': 'Early', 'levels': (1, 3),
     'description': 'Ad-hoc experiments; big wins from prompt basics & workflow mapping.'},
    {'key': 'developing', 'label': 'Developing', 'levels': (4, 7),
     'description': 'Teams using AI in parts of their workflow; standardising patterns now yields leverage.'},
    {'key': 'advanced', 'label': 'Advanced', 'levels': (8, 10),
     'description': 'AI embedded across workflows; wins come from quality systems, guardrails & scale.'},
]


def _check_level(level):
    if isinstance(level, bool) or not isinstance(level, int) or not 1 <= level <= 10:
        raise InvalidMaturityLevel(level)
    return level


def hours_saved_per_person_per_week(level, curve=None):
    """Baseline hours saved per employee per week for a maturity level.

    Raises InvalidMaturityLevel outside [1, 10]; callers clamp first.
    """
    curve = curve or MATURITY_HOURS
    return float(curve[_check_level(level)])


def maturity_band(level):
    lvl = _check_level(level)
    for band in MATURITY_BANDS:
        lo, hi = band['levels']
        if lo <= lvl <= hi:
            return band


def run_maturity(level, employees, model=None):
    """Maturity panel: per-person baseline plus team totals."""
    model = model or {}
    weeks_per_month = model.get('weeksPerMonth', 4.33)
    weeks_per_year = model.get('weeksPerYear', 52)
    per_person = hours_saved_per_person_per_week(level, model.get('maturityHours'))
    team_week = per_person * max(0, employees)
    band = maturity_band(level)
    return {
        'level': level,
        'hoursPerEmployeePerWeek': per_person,
        'teamHoursPerWeek': team_week,
        'teamHoursPerMonth': team_week * weeks_per_month,
        'teamHoursPerYear': team_week * weeks_per_year,
        'band': band['key'],
        'label': band['label'],
        'description': band['description'],
    }
