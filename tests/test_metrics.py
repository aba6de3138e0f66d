"""Tests for confusion counts, precision/recall and the threshold sweep."""

import math

import numpy as np
import pytest

from bayes_color.metrics import (
    TrainingSample, ConfusionCounts, count_outcomes, precision_recall, rates,
    sweep_thresholds, threshold_table, suggest_threshold
)


def separable_samples():
    return [
        TrainingSample(0.93, True),
        TrainingSample(0.88, True),
        TrainingSample(0.97, True),
        TrainingSample(0.05, False),
        TrainingSample(0.12, False),
    ]


def test_count_outcomes():
    counts = count_outcomes([0.9, 0.4, 0.6, 0.1], [True, True, False, False], threshold=0.5)

    assert counts == ConfusionCounts(tp=1, tn=1, fp=1, fn=1)


def test_score_equal_to_threshold_is_negative():
    counts = count_outcomes([0.5, 0.5], [True, False], threshold=0.5)

    assert counts.fn == 1
    assert counts.tn == 1
    assert counts.tp == 0
    assert counts.fp == 0


def test_count_outcomes_without_samples():
    assert count_outcomes([], [], 0.5) == ConfusionCounts(0, 0, 0, 0)


def test_precision_recall_formulas():
    precision, recall = precision_recall(ConfusionCounts(tp=6, tn=5, fp=2, fn=3))

    # precision = TP / (TP + FN), recall = TP / (TP + FP)
    assert precision == pytest.approx(6 / 9)
    assert recall == pytest.approx(6 / 8)


def test_zero_denominators_are_nan():
    precision, recall = precision_recall(ConfusionCounts(tp=0, tn=4, fp=0, fn=0))
    fp_rate, tp_rate = rates(ConfusionCounts(tp=2, tn=0, fp=0, fn=1))

    assert math.isnan(precision)
    assert math.isnan(recall)
    assert math.isnan(fp_rate)
    assert tp_rate == pytest.approx(2 / 3)


def test_sweep_thresholds_include_both_ends():
    thresholds = sweep_thresholds(0.01)

    assert len(thresholds) == 101
    assert thresholds[0] == 0.0
    assert thresholds[1] == 0.01
    assert thresholds[-1] == 1.0


def test_threshold_table_on_separable_samples():
    table = threshold_table(separable_samples())

    assert list(table.columns) == ['threshold', 'fp_rate', 'tp_rate']
    assert len(table) == 101

    first, last = table.iloc[0], table.iloc[-1]
    assert (first['fp_rate'], first['tp_rate']) == (1.0, 1.0)
    assert (last['fp_rate'], last['tp_rate']) == (0.0, 0.0)

    assert np.all(np.diff(table['fp_rate'].values) <= 0)
    assert np.all(np.diff(table['tp_rate'].values) <= 0)


def test_threshold_table_rates_at_a_threshold():
    table = threshold_table(separable_samples())
    row = table.loc[np.isclose(table['threshold'], 0.9)].iloc[0]

    assert row['fp_rate'] == 0.0
    assert row['tp_rate'] == pytest.approx(2 / 3)


def test_threshold_table_without_negatives():
    table = threshold_table([TrainingSample(0.7, True), TrainingSample(0.2, True)])

    assert table['fp_rate'].isna().all()
    assert table['tp_rate'].iloc[0] == 1.0


def test_suggest_threshold_separates_classes():
    threshold = suggest_threshold(threshold_table(separable_samples()))

    # Lowest threshold with all positives above and all negatives at or below
    assert threshold == pytest.approx(0.12)


def test_suggest_threshold_without_finite_rates():
    table = threshold_table([TrainingSample(0.7, True)])

    assert math.isnan(suggest_threshold(table))
