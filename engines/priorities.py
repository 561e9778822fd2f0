"""
AI Productivity ROI: Priority Value Engine
Computes the annual value of each selected priority.

Each priority has its own physics:

  Throughput:  hours/person/week × 52 × employees → hours → × rate × utilisation
  Quality:     rework events avoided × hours per fix → hours → × rate × utilisation
  Onboarding:  ramp months saved × hires → salary-months × utilisation
  Retention:   leavers avoided × replacement cost (NO hours component)
  Cost:        tool consolidation + eliminated tools (NO hourly-rate dependency)
  Upskilling:  competency coverage × employees × hours/week × 52 × rate × utilisation
"""
from engines.assumptions import Priority, PRIORITY_META
from engines.converters import clamp, non_negative, pct_to_fraction
from engines.parameters import default_params


def build_context(assumptions, hourly_rate, annual_salary, baseline_hours):
    """Inputs every calculator shares."""
    return {
        'employees': max(0, assumptions.employees_in_scope),
        'hourlyRate': non_negative(hourly_rate),
        'annualSalary': non_negative(annual_salary),
        'baselineHoursPerWeek': non_negative(baseline_hours),
        # quality and onboarding reuse the throughput adoption factor
        'utilization': pct_to_fraction(assumptions.block(Priority.THROUGHPUT).utilization_pct),
    }


def _seeded(hours, ctx):
    return non_negative(ctx['baselineHoursPerWeek'] if hours is None else hours)


def value_throughput(p, ctx, model):
    hours_week = _seeded(p.hours_per_person_per_week, ctx)
    util = pct_to_fraction(p.utilization_pct)
    hours = hours_week * model['weeksPerYear'] * ctx['employees']
    value = hours * ctx['hourlyRate'] * util
    return {
        'hoursPerYear': hours * util,
        'annualValue': value,
        'mechanism': f"Throughput: {hours_week:.1f}h/wk × {model['weeksPerYear']} × {ctx['employees']:,} employees "
                     f"× {ctx['hourlyRate']:.2f}/h × {util:.0%} utilisation",
    }


def value_quality(p, ctx, model):
    reduction = pct_to_fraction(p.reduction_pct)
    avoided = non_negative(p.rework_events_per_person_per_month) * ctx['employees'] * 12 * reduction
    hours = avoided * non_negative(p.hours_per_fix)
    util = ctx['utilization']
    return {
        'hoursPerYear': hours * util,
        'annualValue': hours * ctx['hourlyRate'] * util,
        'mechanism': f"Quality: {avoided:,.0f} rework events avoided × {p.hours_per_fix:g}h per fix "
                     f"× {ctx['hourlyRate']:.2f}/h × {util:.0%} utilisation",
    }


def value_onboarding(p, ctx, model):
    # improved ramp longer than baseline is a misconfiguration, not negative value
    months_saved = clamp(non_negative(p.baseline_ramp_months) - non_negative(p.improved_ramp_months),
                         0.0, model['rampCeilingMonths'])
    hires = non_negative(p.hires_per_year)
    util = ctx['utilization']
    return {
        'hoursPerYear': months_saved * hires * model['productiveHoursPerMonth'] * util,
        'annualValue': months_saved * hires * (ctx['annualSalary'] / 12) * util,
        'mechanism': f"Onboarding: {months_saved:g} ramp months saved × {hires:g} hires "
                     f"× {ctx['annualSalary'] / 12:,.0f}/month × {util:.0%} utilisation",
    }


def value_retention(p, ctx, model):
    avoided = ctx['employees'] * pct_to_fraction(p.baseline_turnover_pct) * pct_to_fraction(p.reduction_pct)
    replacement = ctx['annualSalary'] * pct_to_fraction(p.replacement_cost_pct)
    return {
        'hoursPerYear': None,
        'annualValue': avoided * replacement,
        'mechanism': f"Retention: {avoided:.1f} leavers avoided × {replacement:,.0f} replacement cost",
    }


def value_cost(p, ctx, model):
    monthly = (non_negative(p.monthly_consolidation_savings)
               + non_negative(p.eliminated_tool_count) * non_negative(p.avg_tool_cost_per_month))
    return {
        'hoursPerYear': None,
        'annualValue': monthly * 12,
        'mechanism': f"Cost: {monthly:,.0f}/month direct savings × 12",
    }


def value_upskilling(p, ctx, model):
    coverage = pct_to_fraction(p.coverage_pct)
    hours_week = _seeded(p.hours_per_person_per_week, ctx)
    util = pct_to_fraction(p.utilization_pct)
    hours = coverage * ctx['employees'] * hours_week * model['weeksPerYear']
    return {
        'hoursPerYear': hours * util,
        'annualValue': hours * ctx['hourlyRate'] * util,
        'mechanism': f"Upskilling: {coverage:.0%} coverage × {ctx['employees']:,} employees × {hours_week:.1f}h/wk "
                     f"× {model['weeksPerYear']} × {ctx['hourlyRate']:.2f}/h × {util:.0%} utilisation",
    }


CALCULATORS = {
    Priority.THROUGHPUT: value_throughput,
    Priority.QUALITY: value_quality,
    Priority.ONBOARDING: value_onboarding,
    Priority.RETENTION: value_retention,
    Priority.COST: value_cost,
    Priority.UPSKILLING: value_upskilling,
}

if set(CALCULATORS) != set(Priority):
    raise RuntimeError(f"priority calculators out of sync: {set(Priority) ^ set(CALCULATORS)}")


def compute_priority_value(priority, assumptions, ctx, model=None):
    model = model or default_params()
    priority = Priority(priority)
    result = CALCULATORS[priority](assumptions.block(priority), ctx, model)
    result['priority'] = priority.value
    result['label'] = PRIORITY_META[priority]['label']
    result['rationale'] = PRIORITY_META[priority]['rationale']
    return result


def compute_priority_values(assumptions, ctx, model=None):
    """Values for exactly the selected priorities, keyed by Priority, in canonical order."""
    return {p: compute_priority_value(p, assumptions, ctx, model)
            for p in Priority if p in assumptions.selected_priorities}
