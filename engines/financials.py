"""
AI Productivity ROI: Financial Summary Engine
Sums per-priority value and derives program cost, amortisation, net
monthly savings, payback and annual ROI multiple.

Every ratio is guarded: a zero or negative denominator yields a sentinel
(payback None / 'not_reached', ROI 0), never inf or NaN.
"""
import logging, math

from engines.converters import non_negative

PAYBACK_REACHED = 'reached'
PAYBACK_IMMEDIATE = 'immediate'
PAYBACK_NOT_REACHED = 'not_reached'


def training_from_assumptions(a):
    return {
        'trainingCostPerEmployee': a.training_cost_per_employee,
        'trainingHoursPerEmployee': a.training_hours_per_employee,
        'programOneOffCost': a.program_one_off_cost,
        'amortizationMonths': a.amortization_months,
    }


def program_cost(training, employees, hourly_rate):
    """Direct training spend + one-off cost + training hours as opportunity cost."""
    employees = max(0, employees)
    direct = non_negative(training.get('trainingCostPerEmployee')) * employees
    one_off = non_negative(training.get('programOneOffCost'))
    time_cost = non_negative(training.get('trainingHoursPerEmployee')) * non_negative(hourly_rate) * employees
    return direct + one_off + time_cost


def monthly_amortized_cost(cost, months):
    divisor = months if months and months > 0 else 1
    return cost / divisor


def payback_months(cost, monthly_net):
    """(months, status). Months is None when payback is never reached."""
    if monthly_net <= 0 or not math.isfinite(monthly_net):
        return None, PAYBACK_NOT_REACHED
    if cost <= 0:
        return 0, PAYBACK_IMMEDIATE
    months = cost / monthly_net
    if not math.isfinite(months):
        return None, PAYBACK_NOT_REACHED
    return math.ceil(months), PAYBACK_REACHED


def annual_roi_multiple(monthly_net, cost):
    return (monthly_net * 12) / cost if cost > 0 else 0.0


def aggregate(adjusted_values, training, employees, hourly_rate):
    # rows are non-negative already; the total is their exact sum
    total_value = sum(row['annualValue'] for row in adjusted_values.values())
    total_hours = sum(row['hoursPerYear'] for row in adjusted_values.values()
                      if row.get('hoursPerYear') is not None)
    monthly = total_value / 12

    cost = program_cost(training, employees, hourly_rate)
    amortized = monthly_amortized_cost(cost, training.get('amortizationMonths'))
    # training may outweigh gross savings early on; net never reported negative
    monthly_net = max(0.0, monthly - amortized)

    payback, status = payback_months(cost, monthly_net)
    if status == PAYBACK_NOT_REACHED:
        logging.info(f"Payback not reached: monthly savings {monthly:,.0f} vs amortised cost {amortized:,.0f}")

    return {
        'totalAnnualValue': total_value,
        'totalHoursPerYear': total_hours,
        'monthlySavings': monthly,
        'programCost': cost,
        'monthlyAmortizedCost': amortized,
        'monthlyNetSavings': monthly_net,
        'paybackMonths': payback,
        'paybackStatus': status,
        'annualROIMultiple': annual_roi_multiple(monthly_net, cost),
    }
