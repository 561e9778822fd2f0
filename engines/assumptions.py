"""
AI Productivity ROI: Assumptions
Closed priority set, per-priority parameter blocks and the immutable
Assumptions record every engine reads from.

Raw payloads (camelCase, as sent by the API) go through build_assumptions(),
which clamps what can be clamped and raises InvalidInput for what cannot.
Edits never mutate a record: update_assumptions() / toggle_priority()
return a new one.
"""
import copy, logging, math
from dataclasses import dataclass, field, fields
from enum import Enum
from typing import Optional

from engines.errors import InvalidInput
from engines.parameters import default_params, default_assumption_values


class Priority(str, Enum):
    THROUGHPUT = 'throughput'
    QUALITY = 'quality'
    ONBOARDING = 'onboarding'
    RETENTION = 'retention'
    COST = 'cost'
    UPSKILLING = 'upskilling'


PRIORITY_META = {
    Priority.THROUGHPUT: {
        'label': 'Throughput / Cycle time', 'hint': 'Ship more with fewer blockers',
        'rationale': 'Ship faster; reduce cycle time & waiting waste.', 'weight': 30,
    },
    Priority.QUALITY: {
        'label': 'Quality / Rework reduction', 'hint': 'Fewer errors, less rework',
        'rationale': 'Fewer reworks; better first-pass yield.', 'weight': 20,
    },
    Priority.ONBOARDING: {
        'label': 'Onboarding speed', 'hint': 'Faster time-to-productivity',
        'rationale': 'Ramp new hires faster with guided prompts / playbooks.', 'weight': 20,
    },
    Priority.RETENTION: {
        'label': 'Retention', 'hint': 'Avoid regretted churn & hiring cost',
        'rationale': 'Happier teams stay longer; fewer replacement hires.', 'weight': 15,
    },
    Priority.COST: {
        'label': 'Cost', 'hint': 'Tool consolidation & direct savings',
        'rationale': 'Consolidate tools; avoid direct spend.', 'weight': 15,
    },
    Priority.UPSKILLING: {
        'label': 'Upskilling', 'hint': 'Increase AI competency coverage',
        'rationale': 'Grow AI confidence; expand competency coverage.', 'weight': 15,
    },
}

TEAMS = {
    'all': 'Company-wide', 'hr': 'HR / People Ops', 'ops': 'Operations',
    'marketing': 'Marketing', 'sales': 'Sales', 'support': 'Customer Support',
    'product': 'Product', 'engineering': 'Engineering',
}

CURRENCIES = ('EUR', 'USD', 'GBP')

# largest accepted magnitude for any numeric input; keeps every product finite
MAX_INPUT = 1e12


# ── Parameter blocks ──
# metadata: pct -> clamped to [0, 100]; seeded -> None means "use the maturity baseline"

def _pct(default):
    return field(default=default, metadata={'pct': True})


@dataclass(frozen=True)
class ThroughputParams:
    hours_per_person_per_week: Optional[float] = field(default=None, metadata={'seeded': True})
    utilization_pct: float = _pct(70.0)


@dataclass(frozen=True)
class QualityParams:
    rework_events_per_person_per_month: float = 3.0
    reduction_pct: float = _pct(20.0)
    hours_per_fix: float = 1.0


@dataclass(frozen=True)
class OnboardingParams:
    hires_per_year: float = 24.0
    baseline_ramp_months: float = 3.0
    improved_ramp_months: float = 2.0


@dataclass(frozen=True)
class RetentionParams:
    baseline_turnover_pct: float = _pct(20.0)
    reduction_pct: float = _pct(10.0)
    replacement_cost_pct: float = _pct(50.0)


@dataclass(frozen=True)
class CostParams:
    monthly_consolidation_savings: float = 0.0
    eliminated_tool_count: float = 0.0
    avg_tool_cost_per_month: float = 200.0


@dataclass(frozen=True)
class UpskillingParams:
    coverage_pct: float = _pct(40.0)
    hours_per_person_per_week: Optional[float] = field(default=None, metadata={'seeded': True})
    utilization_pct: float = _pct(70.0)


PARAM_BLOCKS = {
    Priority.THROUGHPUT: ThroughputParams,
    Priority.QUALITY: QualityParams,
    Priority.ONBOARDING: OnboardingParams,
    Priority.RETENTION: RetentionParams,
    Priority.COST: CostParams,
    Priority.UPSKILLING: UpskillingParams,
}


@dataclass(frozen=True)
class Assumptions:
    employees_in_scope: int
    maturity_level: int
    currency: str = 'EUR'
    team: str = 'all'
    hourly_rate: Optional[float] = None
    annual_salary: Optional[float] = None
    selected_priorities: tuple = ()
    priority_weights: dict = field(default_factory=dict)
    params: dict = field(default_factory=dict)
    training_cost_per_employee: float = 0.0
    training_hours_per_employee: float = 0.0
    program_one_off_cost: float = 0.0
    amortization_months: int = 12

    def block(self, priority):
        return self.params.get(Priority(priority)) or PARAM_BLOCKS[Priority(priority)]()

    def is_selected(self, priority):
        return Priority(priority) in self.selected_priorities


# ── snake_case -> camelCase ──

def _camel(name):
    head, *rest = name.split('_')
    return head + ''.join(w.title() for w in rest)


# ── Boundary normalisation ──

def _number(name, value, integer=False, optional=False):
    if value is None or value == '':
        if optional:
            return None
        raise InvalidInput(name, 'value is required')
    if isinstance(value, bool):
        raise InvalidInput(name, f"expected a number, got {value!r}")
    try:
        num = float(value)
    except (TypeError, ValueError):
        raise InvalidInput(name, f"expected a number, got {value!r}")
    if not math.isfinite(num):
        raise InvalidInput(name, f"must be finite, got {value!r}")
    if num > MAX_INPUT:
        raise InvalidInput(name, f"must be at most {MAX_INPUT:g}, got {value!r}")
    if num < 0:
        logging.info(f"Clamped negative input {name}={num} to 0")
        num = 0.0
    if integer:
        return int(round(num))
    return num


def _percentage(name, value):
    num = _number(name, value)
    if num > 100:
        logging.info(f"Clamped percentage {name}={num} to 100")
        num = 100.0
    return num


def _maturity(value):
    if value is None or value == '':
        raise InvalidInput('maturityLevel', 'value is required')
    num = _number('maturityLevel', value)
    if num != int(num):
        raise InvalidInput('maturityLevel', f"expected a whole level 1-10, got {value!r}")
    lvl = int(num)
    if lvl < 1 or lvl > 10:
        logging.info(f"Clamped maturityLevel={lvl} into [1, 10]")
    return max(1, min(10, lvl))


def _mapping(name, value):
    if value is None:
        return {}
    if not isinstance(value, dict):
        raise InvalidInput(name, f"expected an object, got {type(value).__name__}")
    return value


def _priority(name, key):
    try:
        return Priority(key)
    except ValueError:
        raise InvalidInput(name, f"unknown priority {key!r}; expected one of {[p.value for p in Priority]}")


def _build_block(priority, raw):
    cls = PARAM_BLOCKS[priority]
    raw = _mapping(f"params.{priority.value}", raw)
    known = {_camel(f.name) for f in fields(cls)}
    unknown = set(raw) - known
    if unknown:
        raise InvalidInput(f"params.{priority.value}", f"unknown fields {sorted(unknown)}")
    kwargs = {}
    for f in fields(cls):
        key = _camel(f.name)
        name = f"params.{priority.value}.{key}"
        if key not in raw:
            continue
        if f.metadata.get('pct'):
            kwargs[f.name] = _percentage(name, raw[key])
        else:
            kwargs[f.name] = _number(name, raw[key], optional=f.metadata.get('seeded', False))
    return cls(**kwargs)


def _merge(base, raw):
    out = copy.deepcopy(base)
    for k, v in _mapping('body', raw).items():
        if k == 'params':
            for pk, block in _mapping('params', v).items():
                out['params'].setdefault(pk, {}).update(_mapping(f"params.{pk}", block))
        else:
            out[k] = v
    return out


def build_assumptions(raw=None, model=None, base=None):
    """Validate and normalise a camelCase payload into an Assumptions record.

    Missing keys fall back to `base` (the session defaults when omitted).
    Negative numbers clamp to 0, percentages to [0, 100], maturity to [1, 10].
    Raises InvalidInput for anything that cannot be clamped.
    """
    model = model or default_params()
    values = _merge(base or default_assumption_values(), raw)

    currency = str(values.get('currency') or 'EUR').upper()
    if currency not in CURRENCIES:
        raise InvalidInput('currency', f"unsupported currency {values.get('currency')!r}")
    team = values.get('team') or 'all'
    if team not in TEAMS:
        raise InvalidInput('team', f"unknown team {team!r}")

    selected = []
    keys = values.get('selectedPriorities') or []
    if not isinstance(keys, (list, tuple)):
        raise InvalidInput('selectedPriorities', f"expected a list, got {type(keys).__name__}")
    for key in keys:
        p = _priority('selectedPriorities', key)
        if p not in selected:
            selected.append(p)
    if len(selected) > model['maxPriorities']:
        raise InvalidInput('selectedPriorities',
                           f"at most {model['maxPriorities']} priorities can be selected, got {len(selected)}")
    selected = tuple(p for p in Priority if p in selected)

    weights = {}
    for key, w in _mapping('priorityWeights', values.get('priorityWeights')).items():
        p = _priority('priorityWeights', key)
        weights[p] = _percentage(f"priorityWeights.{p.value}", w)

    raw_params = _mapping('params', values.get('params'))
    for key in raw_params:
        _priority('params', key)
    params = {p: _build_block(p, raw_params.get(p.value)) for p in Priority}

    return Assumptions(
        employees_in_scope=_number('employeesInScope', values.get('employeesInScope'), integer=True),
        maturity_level=_maturity(values.get('maturityLevel')),
        currency=currency,
        team=team,
        hourly_rate=_number('hourlyRate', values.get('hourlyRate'), optional=True),
        annual_salary=_number('annualSalary', values.get('annualSalary'), optional=True),
        selected_priorities=selected,
        priority_weights=weights,
        params=params,
        training_cost_per_employee=_number('trainingCostPerEmployee', values.get('trainingCostPerEmployee') or 0),
        training_hours_per_employee=_number('trainingHoursPerEmployee', values.get('trainingHoursPerEmployee') or 0),
        program_one_off_cost=_number('programOneOffCost', values.get('programOneOffCost') or 0),
        amortization_months=max(1, _number('amortizationMonths', values.get('amortizationMonths') or 0, integer=True)),
    )


def assumptions_to_dict(a):
    """Inverse of build_assumptions: the camelCase payload for this record."""
    return {
        'employeesInScope': a.employees_in_scope,
        'currency': a.currency,
        'team': a.team,
        'hourlyRate': a.hourly_rate,
        'annualSalary': a.annual_salary,
        'maturityLevel': a.maturity_level,
        'selectedPriorities': [p.value for p in a.selected_priorities],
        'priorityWeights': {p.value: w for p, w in a.priority_weights.items()},
        'trainingCostPerEmployee': a.training_cost_per_employee,
        'trainingHoursPerEmployee': a.training_hours_per_employee,
        'programOneOffCost': a.program_one_off_cost,
        'amortizationMonths': a.amortization_months,
        'params': {
            p.value: {_camel(f.name): getattr(a.block(p), f.name) for f in fields(PARAM_BLOCKS[p])}
            for p in Priority
        },
    }


def update_assumptions(a, changes, model=None):
    """Return a new record with the camelCase `changes` applied (field-level setter)."""
    changes = dict(_mapping('body', changes))
    # a new salary without a new rate re-derives the rate, and vice versa
    if 'annualSalary' in changes and 'hourlyRate' not in changes:
        changes['hourlyRate'] = None
    elif 'hourlyRate' in changes and 'annualSalary' not in changes:
        changes['annualSalary'] = None
    return build_assumptions(changes, model=model, base=assumptions_to_dict(a))


def toggle_priority(a, priority, model=None):
    p = _priority('priority', priority)
    current = [x.value for x in a.selected_priorities]
    if p.value in current:
        current.remove(p.value)
    else:
        current.append(p.value)
    return update_assumptions(a, {'selectedPriorities': current}, model=model)
