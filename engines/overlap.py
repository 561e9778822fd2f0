"""
AI Productivity ROI: Overlap Resolver
Throughput and upskilling both model time reclaimed from the same work, so
summing them naively double-counts hours. When both are selected the
upskilling value is discounted by a fixed factor.

Known approximation: one pairwise heuristic, not an attribution model.
"""
import logging

from engines.assumptions import Priority

OVERLAP_FACTOR = 0.70

# (kept priority, discounted priority)
OVERLAP_PAIRS = [
    (Priority.THROUGHPUT, Priority.UPSKILLING),
]


def resolve_overlap(values, selected, factor=OVERLAP_FACTOR):
    """Return a new {Priority: row} mapping with overlap discounts applied.

    `values` holds the raw per-priority rows; input rows are never mutated.
    Each pair discounts at most once, however often this is called on raw values.
    """
    factor = max(0.0, min(1.0, factor))
    selected = {Priority(p) for p in selected}
    adjusted = {p: dict(row) for p, row in values.items() if p in selected}
    for row in adjusted.values():
        row['grossAnnualValue'] = row['annualValue']
        row['overlapFactor'] = 1.0
        row['overlapWith'] = None

    for kept, discounted in OVERLAP_PAIRS:
        if kept in adjusted and discounted in adjusted:
            row = adjusted[discounted]
            row['annualValue'] = row['grossAnnualValue'] * factor
            if row.get('hoursPerYear') is not None:
                row['hoursPerYear'] = row['hoursPerYear'] * factor
            row['overlapFactor'] = factor
            row['overlapWith'] = kept.value
            logging.info(f"Overlap: {discounted.value} discounted ×{factor:.2f} "
                         f"because {kept.value} is also selected")
    return adjusted
