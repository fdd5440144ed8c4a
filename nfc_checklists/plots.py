"""
plots.py

Bar chart of calls per hourly checklist, stacked by species.
"""

import os
from collections import defaultdict

import matplotlib.pyplot as plt
import numpy as np

from .buckets import iter_buckets, tally_species
from .report import species_label
from .time_utils import short_label


def hourly_counts(buckets):
    """
    Returns:
      labels: list of 'MM/DD/YY H:MM' strings, one per non-empty bucket
      per_species: dict species label -> np.array of counts aligned with labels
    """
    labels = []
    tallies = []
    for date, label, bucket in iter_buckets(buckets):
        labels.append(f"{date} {short_label(label)}")
        tallies.append(tally_species(bucket))

    per_species = defaultdict(lambda: np.zeros(len(labels), dtype=int))
    for i, counts in enumerate(tallies):
        for (code, family), count in counts.items():
            per_species[species_label(code, family)][i] += count
    return labels, dict(per_species)


def plot_hourly_counts(buckets, output_path):
    """Save the chart to output_path. Returns the path, or None if there is nothing to plot."""
    labels, per_species = hourly_counts(buckets)
    if not labels:
        print("⚠ No detections to plot")
        return None

    os.makedirs(os.path.dirname(output_path) or ".", exist_ok=True)

    x = np.arange(len(labels))
    fig, ax = plt.subplots(figsize=(max(8, len(labels) * 0.6), 6))
    bottom = np.zeros(len(labels), dtype=int)
    for name in sorted(per_species, key=lambda s: -per_species[s].sum()):
        ax.bar(x, per_species[name], bottom=bottom, label=name, alpha=0.8)
        bottom = bottom + per_species[name]

    ax.set_xticks(x)
    ax.set_xticklabels(labels, rotation=45, ha='right')
    ax.set_xlabel('Checklist (date, start hour)')
    ax.set_ylabel('Number of calls')
    ax.set_title('NFC Calls per Hourly Checklist')
    ax.legend(fontsize=8, ncol=2)
    ax.grid(True, axis='y', alpha=0.3)

    plt.tight_layout()
    plt.savefig(output_path, dpi=150, bbox_inches='tight')
    plt.close(fig)
    print(f"Saved hourly chart to {output_path}")
    return output_path
