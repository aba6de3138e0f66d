"""
Plot Generation Module
ROC-like curves of threshold sweeps and confusion matrix heatmaps.
"""

import sys
import matplotlib
matplotlib.use('Agg')
import matplotlib.pyplot as plt
import numpy as np
import pandas as pd
import seaborn as sns
from pathlib import Path

from .metrics import ConfusionCounts, precision_recall

sns.set_style("whitegrid")


def plot_threshold_curve(table: pd.DataFrame, output_path: str, suggested: float = None):
    """
    Plot TP rate against FP rate for every swept threshold.

    Args:
        table: DataFrame with columns threshold, fp_rate, tp_rate
        output_path: Image file to write
        suggested: Optional threshold to highlight on the curve
    """
    output_path = Path(output_path)
    fig, ax = plt.subplots(figsize=(7, 6))

    ax.plot(table['fp_rate'], table['tp_rate'], color='#3498db', linewidth=2,
            marker='o', markersize=3, label='Leave-one-out')
    ax.plot([0, 1], [0, 1], color='gray', linestyle='--', linewidth=1, label='Chance')

    if suggested is not None and not np.isnan(suggested):
        row = table.loc[np.isclose(table['threshold'], suggested)].iloc[0]
        ax.scatter([row['fp_rate']], [row['tp_rate']], color='#e74c3c', s=80, zorder=3,
                   label=f'Threshold {suggested:.2f}')

    ax.set_xlabel('FP / (TN + FP)', fontsize=12, fontweight='bold')
    ax.set_ylabel('TP / (TP + FN)', fontsize=12, fontweight='bold')
    ax.set_title('Threshold Sweep', fontsize=14, fontweight='bold', pad=20)
    ax.set_xlim([-0.02, 1.02])
    ax.set_ylim([-0.02, 1.02])
    ax.legend(loc='lower right')

    plt.tight_layout()
    plt.savefig(output_path, dpi=150, bbox_inches='tight')
    plt.close(fig)
    print(f"[OK] Saved threshold curve to {output_path}", file=sys.stderr)


def plot_confusion_matrix(counts: ConfusionCounts, output_path: str):
    """Plot the binary confusion matrix as a heatmap."""
    output_path = Path(output_path)
    labels = ['Negative', 'Positive']
    cm = np.array([[counts.tn, counts.fp],
                   [counts.fn, counts.tp]])

    fig, ax = plt.subplots(figsize=(6, 5))

    sns.heatmap(cm, annot=True, fmt='d', cmap='Blues',
                xticklabels=labels, yticklabels=labels,
                cbar_kws={'label': 'Count'}, ax=ax,
                linewidths=0.5, linecolor='gray')

    precision, recall = precision_recall(counts)
    ax.set_xlabel('Predicted Label', fontsize=12, fontweight='bold')
    ax.set_ylabel('True Label', fontsize=12, fontweight='bold')
    ax.set_title(f'Confusion Matrix (precision {precision:.2%}, recall {recall:.2%})',
                 fontsize=12, fontweight='bold', pad=20)

    plt.tight_layout()
    plt.savefig(output_path, dpi=150, bbox_inches='tight')
    plt.close(fig)
    print(f"[OK] Saved confusion matrix plot to {output_path}", file=sys.stderr)
