"""
AI Productivity ROI: Primitive Converters
Salary <-> hourly rate, percentage clamping, display formatting.
"""
import math

WEEKS_PER_YEAR = 52
HOURS_PER_WEEK = 40
WORK_HOURS_PER_YEAR = WEEKS_PER_YEAR * HOURS_PER_WEEK  # 2080

CURRENCY_SYMBOLS = {'EUR': '€', 'USD': '$', 'GBP': '£'}


def clamp(v, lo, hi):
    return max(lo, min(hi, v))


def pct_to_fraction(pct):
    """0-100 percentage -> 0-1 fraction, clamped. Non-finite input counts as 0."""
    if pct is None or not math.isfinite(pct):
        return 0.0
    return clamp(float(pct), 0.0, 100.0) / 100.0


def non_negative(v):
    if v is None or not math.isfinite(v):
        return 0.0
    return max(0.0, float(v))


def hourly_rate_from_salary(annual_salary, hours_per_year=WORK_HOURS_PER_YEAR):
    return non_negative(annual_salary) / max(hours_per_year, 1)


def salary_from_hourly_rate(hourly_rate, hours_per_year=WORK_HOURS_PER_YEAR):
    return non_negative(hourly_rate) * hours_per_year


def resolve_rates(hourly_rate=None, annual_salary=None, hours_per_year=WORK_HOURS_PER_YEAR):
    """Return (hourly_rate, annual_salary), deriving whichever one is missing."""
    if hourly_rate is None and annual_salary is None:
        return 0.0, 0.0
    if hourly_rate is None:
        return hourly_rate_from_salary(annual_salary, hours_per_year), non_negative(annual_salary)
    if annual_salary is None:
        return non_negative(hourly_rate), salary_from_hourly_rate(hourly_rate, hours_per_year)
    return non_negative(hourly_rate), non_negative(annual_salary)


def currency_symbol(currency):
    return CURRENCY_SYMBOLS.get(currency, currency or '')


def format_money(value, currency='EUR'):
    """`€ 19,110` style: symbol, space, rounded thousands-separated amount."""
    return f"{currency_symbol(currency)} {round(value):,}"


def format_hours(hours):
    if hours is None:
        return '—'
    return f"{round(hours):,}h"


def format_multiple(multiple):
    return f"{multiple:.1f}×" if multiple > 0 else '—'


def format_payback(months, status):
    if status == 'not_reached':
        return 'Not reached (adjust inputs)'
    if status == 'immediate':
        return 'Immediate'
    return f"{months} months"
