"""Candidate consensus: merge N evaluation records into one CandidateConsensus.

Deterministic, no I/O. Combines:
  rubric      -> per-criterion median, category scores, weighted score
  gates       -> majority verdicts, recomputed automatic failure
  bonus       -> component-wise max per track, capped
  qualitative -> all text collected verbatim, median recommendation
"""

from __future__ import annotations

from eval_consensus.contracts import (
    DIVERGENCE_STDDEV_THRESHOLD,
    MIN_EVALUATORS_FOR_FULL_CONFIDENCE,
    SCORE_BANDS,
    TOTAL_CRITERIA,
    BonusTrack,
    CandidateConsensus,
    ConsensusConfidence,
    EvaluationRecord,
    GateSummary,
    InterEvaluatorAnalysis,
    QualitativeConsensus,
    ScoringSummary,
)
from eval_consensus.ranking import overall_agreement
from eval_consensus.scoring.bonus import aggregate_bonus_track
from eval_consensus.scoring.gates import build_gate_consensus, recompute_automatic_failure
from eval_consensus.scoring.recommendation import (
    consensus_recommendation,
    extract_recommendations,
)
from eval_consensus.scoring.rubric import build_rubric_consensus, weighted_score
from eval_consensus.utils.records import collect_text_field, collect_text_list, evaluator_id


def score_band(score: float) -> str:
    """Map a final score to its band label."""
    for minimum, label in SCORE_BANDS:
        if score >= minimum:
            return label
    return SCORE_BANDS[-1][1]


def build_consensus(
    candidate_id: str,
    records: list[EvaluationRecord],
    *,
    min_evaluators: int = MIN_EVALUATORS_FOR_FULL_CONFIDENCE,
    divergence_threshold: float = DIVERGENCE_STDDEV_THRESHOLD,
) -> CandidateConsensus:
    """Aggregate one candidate's accepted records.

    Records are read, never modified. Fewer than ``min_evaluators`` records
    still aggregate but the result is tagged provisional.
    """
    evaluators = [evaluator_id(r) for r in records]

    # --- Gates ---
    gate_checks = build_gate_consensus(records)
    auto_fail, fail_reasons = recompute_automatic_failure(gate_checks)

    # --- Rubric ---
    rubric, divergences = build_rubric_consensus(records, divergence_threshold=divergence_threshold)
    category_scores = {cat: block["category_score"] for cat, block in rubric.items()}
    weighted = weighted_score(category_scores)

    # --- Bonus tracks ---
    git_bonus = aggregate_bonus_track(records, BonusTrack.GIT_HISTORY)
    ai_bonus = aggregate_bonus_track(records, BonusTrack.AI_INTEGRATION)

    final = round(weighted + git_bonus["bonus_total"] + ai_bonus["bonus_total"], 2)

    # --- Qualitative ---
    recommendations = extract_recommendations(records)

    return CandidateConsensus(
        candidate_id=candidate_id,
        evaluator_count=len(records),
        evaluators=evaluators,
        confidence=(
            ConsensusConfidence.FULL
            if len(records) >= min_evaluators
            else ConsensusConfidence.PROVISIONAL
        ),
        automated_gate=GateSummary(
            checks=gate_checks,
            automatic_failure=auto_fail,
            failure_reasons=fail_reasons,
        ),
        rubric_consensus=rubric,
        git_history_bonus=git_bonus,
        ai_integration_bonus=ai_bonus,
        scoring_summary=ScoringSummary(
            category_scores=category_scores,
            weighted_score=weighted,
            git_bonus=git_bonus["bonus_total"],
            ai_bonus=ai_bonus["bonus_total"],
            final_score=final,
            score_band=score_band(final),
            automatic_failure=auto_fail,
            automatic_failure_reasons=list(fail_reasons),
        ),
        qualitative_consensus=QualitativeConsensus(
            all_strengths=collect_text_list(records, "top_strengths"),
            all_weaknesses=collect_text_list(records, "top_weaknesses"),
            all_standout_moments=collect_text_list(records, "standout_moments"),
            hiring_signals=collect_text_field(records, "hiring_signal"),
            individual_recommendations=recommendations,
            consensus_recommendation=consensus_recommendation(recommendations),
        ),
        inter_evaluator_analysis=InterEvaluatorAnalysis(
            total_criteria_evaluated=TOTAL_CRITERIA,
            high_divergence_criteria=divergences,
            divergence_count=len(divergences),
            overall_agreement=overall_agreement(len(divergences)),
        ),
    )
