"""Tests for the throughput/upskilling overlap discount."""

import pytest

from engines.assumptions import Priority
from engines.overlap import OVERLAP_FACTOR, resolve_overlap


def _rows():
    return {
        Priority.THROUGHPUT: {'annualValue': 1000.0, 'hoursPerYear': 100.0},
        Priority.UPSKILLING: {'annualValue': 500.0, 'hoursPerYear': 50.0},
        Priority.COST: {'annualValue': 200.0, 'hoursPerYear': None},
    }


class TestResolveOverlap:
    def test_default_factor(self):
        assert OVERLAP_FACTOR == 0.7

    def test_upskilling_discounted_when_both_selected(self):
        out = resolve_overlap(_rows(), [Priority.THROUGHPUT, Priority.UPSKILLING])
        assert out[Priority.UPSKILLING]['annualValue'] == pytest.approx(350.0)
        assert out[Priority.UPSKILLING]['hoursPerYear'] == pytest.approx(35.0)
        assert out[Priority.UPSKILLING]['grossAnnualValue'] == 500.0
        assert out[Priority.UPSKILLING]['overlapWith'] == 'throughput'

    def test_throughput_unaffected(self):
        out = resolve_overlap(_rows(), [Priority.THROUGHPUT, Priority.UPSKILLING])
        assert out[Priority.THROUGHPUT]['annualValue'] == 1000.0
        assert out[Priority.THROUGHPUT]['overlapFactor'] == 1.0

    def test_upskilling_alone_not_discounted(self):
        out = resolve_overlap(_rows(), [Priority.UPSKILLING])
        assert out[Priority.UPSKILLING]['annualValue'] == 500.0
        assert Priority.THROUGHPUT not in out

    def test_no_other_pairs_discounted(self):
        out = resolve_overlap(_rows(), [Priority.THROUGHPUT, Priority.COST])
        assert out[Priority.COST]['annualValue'] == 200.0

    def test_input_rows_not_mutated(self):
        rows = _rows()
        resolve_overlap(rows, [Priority.THROUGHPUT, Priority.UPSKILLING])
        assert rows[Priority.UPSKILLING]['annualValue'] == 500.0

    def test_repeated_calls_discount_once(self):
        rows = _rows()
        first = resolve_overlap(rows, [Priority.THROUGHPUT, Priority.UPSKILLING])
        second = resolve_overlap(rows, [Priority.THROUGHPUT, Priority.UPSKILLING])
        assert first == second

    def test_custom_factor_clamped(self):
        out = resolve_overlap(_rows(), ['throughput', 'upskilling'], factor=1.5)
        assert out[Priority.UPSKILLING]['annualValue'] == 500.0
        out = resolve_overlap(_rows(), ['throughput', 'upskilling'], factor=0.5)
        assert out[Priority.UPSKILLING]['annualValue'] == 250.0
