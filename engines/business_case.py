"""
AI Productivity ROI: Business Case Pipeline
Assumptions → maturity baseline → priority values → overlap → financial summary.
Stateless: the same Assumptions always produce the same result.
"""
import math

from engines.assumptions import PRIORITY_META, TEAMS, assumptions_to_dict
from engines.converters import currency_symbol, resolve_rates
from engines.errors import InvalidInput
from engines.financials import aggregate, training_from_assumptions
from engines.maturity import hours_saved_per_person_per_week, run_maturity
from engines.overlap import resolve_overlap
from engines.parameters import default_params
from engines.priorities import build_context, compute_priority_values


def normalize_weights(selected, weights=None):
    """Importance weights over the selected priorities, summing to 1.

    User weights (0-100) replace the defaults; all-zero falls back to an even split.
    """
    weights = weights or {}
    raw = {p: weights.get(p, PRIORITY_META[p]['weight']) for p in selected}
    total = sum(raw.values())
    if total <= 0:
        return {p: 1 / len(raw) for p in raw} if raw else {}
    return {p: w / total for p, w in raw.items()}


def _check_finite(summary, breakdown):
    """Every reported number must be finite; otherwise the inputs are out of range."""
    rows = [('summary', summary)] + [(f"breakdown.{b['priority']}", b) for b in breakdown]
    for where, row in rows:
        for key, value in row.items():
            if isinstance(value, float) and not math.isfinite(value):
                raise InvalidInput(f"{where}.{key}", 'inputs produce a non-finite result')


def _notes(a, summary):
    notes = ['Productivity savings are driven by AI maturity → hours saved/employee/week.']
    if a.block('throughput').hours_per_person_per_week is not None and a.is_selected('throughput'):
        notes[0] = 'Throughput uses your own hours/person/week instead of the maturity baseline.'
    if a.is_selected('throughput') and a.is_selected('upskilling'):
        notes.append('Upskilling is discounted because it overlaps with throughput time savings.')
    if a.is_selected('retention'):
        notes.append('Retention savings calculated from turnover improvement and replacement cost assumptions.')
    notes.append('Training costs are amortized over your selected period to show net impact and payback.')
    if summary['paybackMonths'] is None:
        notes.append('Payback is not reached with these inputs; amortised training cost exceeds monthly savings.')
    return notes


def run_business_case(assumptions, model=None):
    model = model or default_params()
    a = assumptions
    hourly, salary = resolve_rates(a.hourly_rate, a.annual_salary,
                                   hours_per_year=model['weeksPerYear'] * model['hoursPerWeek'])
    baseline = hours_saved_per_person_per_week(a.maturity_level, model['maturityHours'])

    ctx = build_context(a, hourly, salary, baseline)
    raw_values = compute_priority_values(a, ctx, model)
    adjusted = resolve_overlap(raw_values, a.selected_priorities, model['overlapFactor'])
    summary = aggregate(adjusted, training_from_assumptions(a), a.employees_in_scope, hourly)

    weights = normalize_weights(a.selected_priorities, a.priority_weights)
    total = summary['totalAnnualValue']
    breakdown = []
    for p, row in adjusted.items():
        breakdown.append({
            'priority': p.value,
            'label': row['label'],
            'rationale': row['rationale'],
            'mechanism': row['mechanism'],
            'hoursPerYear': row['hoursPerYear'],
            'annualValue': row['annualValue'],
            'monthlyValue': row['annualValue'] / 12,
            'grossAnnualValue': row['grossAnnualValue'],
            'overlapFactor': row['overlapFactor'],
            'overlapWith': row['overlapWith'],
            'share': row['annualValue'] / total if total > 0 else 0.0,
            'weight': weights.get(p, 0.0),
        })

    summary['hourlyRate'] = hourly
    summary['annualSalary'] = salary
    summary['baselineHoursSavedPerPersonPerWeek'] = baseline
    _check_finite(summary, breakdown)

    return {
        'summary': summary,
        'breakdown': breakdown,
        'maturity': run_maturity(a.maturity_level, a.employees_in_scope, model),
        'assumptions': assumptions_to_dict(a),
        'currency': a.currency,
        'currencySymbol': currency_symbol(a.currency),
        'team': TEAMS[a.team],
        'notes': _notes(a, summary),
    }
