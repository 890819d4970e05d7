"""Rubric consensus: median per criterion, category scores, weighted score.

Category scores are computed from the consensus (median) criterion scores,
never from raw means, so one erratic evaluator cannot drag a whole category.
Criteria whose std-dev exceeds the divergence threshold are recorded for
human review; divergence never blocks aggregation.
"""

from __future__ import annotations

from collections.abc import Iterable, Mapping, Sequence

from eval_consensus.contracts import (
    CATEGORY_CRITERIA,
    CATEGORY_WEIGHTS,
    DIVERGENCE_STDDEV_THRESHOLD,
    MAX_CRITERION_SCORE,
    MODERATE_AGREEMENT_MAX_STDDEV,
    STRONG_AGREEMENT_MAX_STDDEV,
    Agreement,
    Category,
    CategoryConsensus,
    CriterionConsensus,
    Divergence,
    EvaluationRecord,
)
from eval_consensus.scoring.stats import mean, median, stddev
from eval_consensus.utils.records import evaluator_id, is_number

DIVERGENCE_NOTE = "High disagreement, flag for human review"


def extract_criterion_scores(
    records: Iterable[EvaluationRecord],
    category: Category,
    criterion: str,
) -> list[tuple[str, int | float]]:
    """Return (evaluator, score) pairs. Missing or non-numeric scores are dropped."""
    pairs: list[tuple[str, int | float]] = []
    for record in records:
        cat = (record.get("rubric_scores") or {}).get(category.value) or {}
        entry = (cat.get("criteria") or {}).get(criterion)
        if not isinstance(entry, dict):
            continue
        score = entry.get("score")
        if is_number(score):
            pairs.append((evaluator_id(record), score))
    return pairs


def agreement_tier(std_dev: float) -> Agreement:
    """Classify cross-evaluator spread into strong / moderate / weak."""
    if std_dev <= STRONG_AGREEMENT_MAX_STDDEV:
        return Agreement.STRONG
    if std_dev <= MODERATE_AGREEMENT_MAX_STDDEV:
        return Agreement.MODERATE
    return Agreement.WEAK


def build_criterion_consensus(scores: Sequence[int | float]) -> CriterionConsensus:
    sd = stddev(scores)
    return CriterionConsensus(
        consensus_score=median(scores),
        mean=round(mean(scores), 2),
        std_dev=round(sd, 2),
        individual_scores=list(scores),
        agreement=agreement_tier(sd),
    )


def category_score(consensus_scores: Sequence[float], criteria_count: int) -> float:
    """100 * sum / (count * max score). Zero criteria -> 0."""
    if criteria_count <= 0:
        return 0.0
    return sum(consensus_scores) / (criteria_count * MAX_CRITERION_SCORE) * 100


def build_rubric_consensus(
    records: list[EvaluationRecord],
    *,
    divergence_threshold: float = DIVERGENCE_STDDEV_THRESHOLD,
) -> tuple[dict[str, CategoryConsensus], list[Divergence]]:
    """Build per-category consensus and collect high-divergence criteria.

    Returns (rubric_consensus keyed by category id, divergences).
    """
    rubric: dict[str, CategoryConsensus] = {}
    divergences: list[Divergence] = []

    for category in Category:
        criteria: dict[str, CriterionConsensus] = {}
        for criterion in CATEGORY_CRITERIA[category]:
            pairs = extract_criterion_scores(records, category, criterion)
            scores = [score for _, score in pairs]
            consensus = build_criterion_consensus(scores)
            criteria[criterion] = consensus

            sd = stddev(scores)
            if sd > divergence_threshold:
                divergences.append(
                    Divergence(
                        criterion=criterion,
                        category=category.value,
                        scores=scores,
                        evaluators=[name for name, _ in pairs],
                        std_dev=sd,
                        note=DIVERGENCE_NOTE,
                    )
                )

        consensus_scores = [criteria[c]["consensus_score"] for c in CATEGORY_CRITERIA[category]]
        rubric[category.value] = CategoryConsensus(
            weight=CATEGORY_WEIGHTS[category],
            criteria=criteria,
            category_score=round(
                category_score(consensus_scores, len(CATEGORY_CRITERIA[category])), 2
            ),
        )

    return rubric, divergences


def weighted_score(category_scores: Mapping[str, float]) -> float:
    """Sum of category score x fixed weight across all categories."""
    total = 0.0
    for category in Category:
        total += category_scores.get(category.value, 0.0) * CATEGORY_WEIGHTS[category]
    return round(total, 2)
