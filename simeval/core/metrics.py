"""Set-comparison and cost metrics for strategy evaluation.

All ratios are defined as 0.0 on a zero denominator instead of raising:
- precision = TP / (TP + FP)
- recall = TP / (TP + FN)
- f_measure = 2PR / (P + R)
- efficiency = 1 - comparisons / C(N, 2), clamped to [0, 1]
- effectiveness = f_measure * efficiency
"""

from typing import AbstractSet, Tuple

from simeval.core.types import Pair


def confusion_counts(
    candidates: AbstractSet[Pair],
    gold_pairs: AbstractSet[Pair],
) -> Tuple[int, int, int]:
    """Compute (TP, FP, FN) between candidate and gold pair sets."""
    tp = len(candidates & gold_pairs)
    fp = len(candidates - gold_pairs)
    fn = len(gold_pairs - candidates)
    return tp, fp, fn


def precision(tp: int, fp: int) -> float:
    if tp + fp == 0:
        return 0.0
    return tp / (tp + fp)


def recall(tp: int, fn: int) -> float:
    if tp + fn == 0:
        return 0.0
    return tp / (tp + fn)


def f_measure(precision_value: float, recall_value: float) -> float:
    """Harmonic mean of precision and recall (0.0 when both are 0)."""
    total = precision_value + recall_value
    if total == 0:
        return 0.0
    return 2.0 * precision_value * recall_value / total


def total_pairs(n_documents: int) -> int:
    """Number of unordered document pairs, N(N-1)/2."""
    if n_documents < 2:
        return 0
    return n_documents * (n_documents - 1) // 2


def efficiency(comparisons: int, possible_pairs: int) -> float:
    """Fraction of exhaustive pairwise work avoided.

    Strategies that also count structure-building comparisons can exceed
    C(N, 2); the value is clamped so it stays in [0, 1].
    """
    if possible_pairs <= 0:
        return 0.0
    value = 1.0 - comparisons / possible_pairs
    return min(1.0, max(0.0, value))


def effectiveness(f_measure_value: float, efficiency_value: float) -> float:
    """Composite score: accurate and cheap strategies score high."""
    return f_measure_value * efficiency_value
