"""Tests for the per-priority value calculators."""

import pytest

from engines.assumptions import Priority
from engines.priorities import CALCULATORS, build_context, compute_priority_value, compute_priority_values

from conftest import make_assumptions


def _value(a, priority, model, baseline_hours=4.2):
    ctx = build_context(a, 50.0, 104000.0, baseline_hours)
    return compute_priority_value(priority, a, ctx, model)


class TestCalculatorTable:
    def test_one_calculator_per_priority(self):
        assert set(CALCULATORS) == set(Priority)


class TestThroughput:
    def test_baseline_scenario(self, baseline, model):
        row = _value(baseline, 'throughput', model)
        assert row['annualValue'] == pytest.approx(4.2 * 52 * 25 * 50 * 0.7)
        assert row['annualValue'] == pytest.approx(19110)

    def test_explicit_hours_override_maturity(self, model):
        a = make_assumptions(params={'throughput': {'hoursPerPersonPerWeek': 3}})
        row = _value(a, 'throughput', model)
        assert row['annualValue'] == pytest.approx(3 * 52 * 25 * 50 * 0.7)

    def test_hours_per_year_reported(self, baseline, model):
        row = _value(baseline, 'throughput', model)
        assert row['hoursPerYear'] == pytest.approx(4.2 * 52 * 25 * 0.7)

    def test_zero_utilization_is_zero_value(self, model):
        a = make_assumptions(params={'throughput': {'utilizationPct': 0}})
        assert _value(a, 'throughput', model)['annualValue'] == 0


class TestQuality:
    def test_formula(self, model):
        a = make_assumptions(params={'quality': {'reworkEventsPerPersonPerMonth': 3, 'reductionPct': 20,
                                                 'hoursPerFix': 1}})
        row = _value(a, 'quality', model)
        assert row['annualValue'] == pytest.approx(3 * 25 * 12 * 0.2 * 1 * 50 * 0.7)

    def test_uses_throughput_utilization(self, model):
        a = make_assumptions(params={'throughput': {'utilizationPct': 50}})
        row = _value(a, 'quality', model)
        assert row['annualValue'] == pytest.approx(3 * 25 * 12 * 0.2 * 1 * 50 * 0.5)


class TestOnboarding:
    def test_formula(self, model):
        row = _value(make_assumptions(), 'onboarding', model)
        # (3 - 2) months × 24 hires × 104000/12 × 0.7
        assert row['annualValue'] == pytest.approx(1 * 24 * (104000 / 12) * 0.7)

    def test_improved_longer_than_baseline_is_zero(self, model):
        a = make_assumptions(params={'onboarding': {'baselineRampMonths': 2, 'improvedRampMonths': 5}})
        row = _value(a, 'onboarding', model)
        assert row['annualValue'] == 0
        assert row['hoursPerYear'] == 0

    def test_ramp_delta_capped(self, model):
        a = make_assumptions(params={'onboarding': {'baselineRampMonths': 100, 'improvedRampMonths': 0,
                                                    'hiresPerYear': 1}})
        row = _value(a, 'onboarding', model)
        assert row['annualValue'] == pytest.approx(24 * (104000 / 12) * 0.7)


class TestRetention:
    def test_formula(self, model):
        row = _value(make_assumptions(), 'retention', model)
        # 25 × 20% × 10% × (104000 × 50%)
        assert row['annualValue'] == pytest.approx(25 * 0.2 * 0.1 * 104000 * 0.5)
        assert row['hoursPerYear'] is None


class TestCost:
    def test_formula(self, model):
        a = make_assumptions(params={'cost': {'monthlyConsolidationSavings': 500, 'eliminatedToolCount': 3,
                                              'avgToolCostPerMonth': 200}})
        row = _value(a, 'cost', model)
        assert row['annualValue'] == pytest.approx((500 + 3 * 200) * 12)

    def test_independent_of_hourly_rate(self, model):
        a = make_assumptions(params={'cost': {'eliminatedToolCount': 2}})
        ctx_low = build_context(a, 10.0, 20800.0, 4.2)
        ctx_high = build_context(a, 90.0, 187200.0, 4.2)
        assert (compute_priority_value('cost', a, ctx_low, model)['annualValue']
                == compute_priority_value('cost', a, ctx_high, model)['annualValue'])


class TestUpskilling:
    def test_formula_seeded_from_maturity(self, model):
        row = _value(make_assumptions(), 'upskilling', model)
        assert row['annualValue'] == pytest.approx(0.4 * 25 * 4.2 * 52 * 50 * 0.7)

    def test_explicit_hours(self, model):
        a = make_assumptions(params={'upskilling': {'coveragePct': 100, 'hoursPerPersonPerWeek': 2,
                                                    'utilizationPct': 50}})
        row = _value(a, 'upskilling', model)
        assert row['annualValue'] == pytest.approx(1.0 * 25 * 2 * 52 * 50 * 0.5)


class TestSelection:
    def test_only_selected_priorities_computed(self, model):
        a = make_assumptions(selectedPriorities=['quality', 'cost'])
        values = compute_priority_values(a, build_context(a, 50.0, 104000.0, 4.2), model)
        assert list(values) == [Priority.QUALITY, Priority.COST]

    def test_rows_carry_rationale(self, baseline, model):
        row = _value(baseline, 'throughput', model)
        assert row['rationale']
        assert row['label'] == 'Throughput / Cycle time'
        assert row['mechanism'].startswith('Throughput:')

    @pytest.mark.parametrize("priority", [p.value for p in Priority])
    def test_values_non_negative_with_extreme_inputs(self, priority, model):
        a = make_assumptions(employeesInScope=-10, params={
            'quality': {'reductionPct': -50}, 'onboarding': {'hiresPerYear': -3},
            'cost': {'avgToolCostPerMonth': -1}, 'upskilling': {'coveragePct': 500}})
        row = _value(a, priority, model)
        assert row['annualValue'] >= 0
