"""Recommendation consensus by median ordinal position."""

from __future__ import annotations

import math
from collections.abc import Iterable

from eval_consensus.contracts import NO_CONSENSUS, RECOMMENDATION_ORDER, EvaluationRecord
from eval_consensus.scoring.stats import median


def extract_recommendations(records: Iterable[EvaluationRecord]) -> list[str]:
    """Valid recommendation labels in record order. Unknown labels are dropped."""
    labels: list[str] = []
    for record in records:
        label = (record.get("qualitative_summary") or {}).get("recommendation")
        if isinstance(label, str) and label in RECOMMENDATION_ORDER:
            labels.append(label)
    return labels


def recommendation_index(label: str) -> int:
    """Ordinal position of a label, 0 = best."""
    try:
        return RECOMMENDATION_ORDER.index(label)
    except ValueError:
        raise ValueError(
            f"Unknown recommendation {label!r}. Expected one of: {', '.join(RECOMMENDATION_ORDER)}"
        ) from None


def consensus_recommendation(labels: Iterable[str]) -> str:
    """Median ordinal of labels from extract_recommendations, mapped back to a label.

    Half positions round up, toward the more cautious rung. No labels gives
    "No consensus"; a label off the scale raises ValueError.
    """
    indices = [recommendation_index(lb) for lb in labels]
    if not indices:
        return NO_CONSENSUS
    position = math.floor(median(indices) + 0.5)
    return RECOMMENDATION_ORDER[position]
