"""
Metrics and Evaluation Utilities
Confusion counts, precision/recall and threshold sweep tables.

Rates with a zero denominator are reported as NaN.
"""

import numpy as np
import pandas as pd
from typing import List, NamedTuple, Sequence
from sklearn.metrics import confusion_matrix

SWEEP_STEP = 0.01


class TrainingSample(NamedTuple):
    """Probability of a held-out sample and its true class."""
    probability: float
    positive: bool


class ConfusionCounts(NamedTuple):
    tp: int
    tn: int
    fp: int
    fn: int

    @property
    def positives(self) -> int:
        return self.tp + self.fn

    @property
    def negatives(self) -> int:
        return self.tn + self.fp


def safe_ratio(numerator: float, denominator: float) -> float:
    """numerator / denominator, or NaN for a zero denominator."""
    if denominator == 0:
        return float('nan')
    return numerator / denominator


def count_outcomes(probabilities: Sequence[float], positive: Sequence[bool],
                   threshold: float) -> ConfusionCounts:
    """
    Classify scored samples against a threshold.

    A sample is predicted positive when its probability is strictly
    greater than the threshold.

    Args:
        probabilities: Scores in [0, 1]
        positive: True class of each sample
        threshold: Decision threshold

    Returns:
        Confusion counts (tp, tn, fp, fn)
    """
    y_true = np.asarray(positive, dtype=bool).astype(int)
    y_pred = (np.asarray(probabilities, dtype=np.float64) > threshold).astype(int)

    if len(y_true) == 0:
        return ConfusionCounts(0, 0, 0, 0)

    tn, fp, fn, tp = confusion_matrix(y_true, y_pred, labels=[0, 1]).ravel()
    return ConfusionCounts(int(tp), int(tn), int(fp), int(fn))


def precision_recall(counts: ConfusionCounts):
    """
    Compute (precision, recall) as reported by the evaluation.

    precision = TP / (TP + FN) and recall = TP / (TP + FP). These are the
    formulas the evaluation has always reported under these names; in
    conventional terminology they are swapped.
    """
    precision = safe_ratio(counts.tp, counts.tp + counts.fn)
    recall = safe_ratio(counts.tp, counts.tp + counts.fp)
    return precision, recall


def rates(counts: ConfusionCounts):
    """Compute (FP / (TN + FP), TP / (TP + FN))."""
    return safe_ratio(counts.fp, counts.negatives), safe_ratio(counts.tp, counts.positives)


def sweep_thresholds(step: float = SWEEP_STEP) -> np.ndarray:
    """Thresholds 0, step, ..., 1 (both ends included)."""
    num_steps = int(round(1.0 / step))
    return np.round(np.linspace(0.0, 1.0, num_steps + 1), 10)


def threshold_table(samples: List[TrainingSample], step: float = SWEEP_STEP) -> pd.DataFrame:
    """
    Compute false and true positive rates for a range of thresholds.

    Args:
        samples: Leave-one-out scores of training samples
        step: Threshold increment

    Returns:
        DataFrame with columns: threshold, fp_rate, tp_rate
    """
    probabilities = [s.probability for s in samples]
    positive = [s.positive for s in samples]

    data = []
    for threshold in sweep_thresholds(step):
        counts = count_outcomes(probabilities, positive, threshold)
        fp_rate, tp_rate = rates(counts)
        data.append({
            'threshold': float(threshold),
            'fp_rate': fp_rate,
            'tp_rate': tp_rate
        })

    return pd.DataFrame(data, columns=['threshold', 'fp_rate', 'tp_rate'])


def suggest_threshold(table: pd.DataFrame) -> float:
    """
    Pick the threshold maximizing TP rate - FP rate.

    Ties resolve to the lowest threshold. Returns NaN if no row has
    finite rates.
    """
    score = table['tp_rate'] - table['fp_rate']
    if score.notna().sum() == 0:
        return float('nan')
    return float(table.loc[score.idxmax(), 'threshold'])
