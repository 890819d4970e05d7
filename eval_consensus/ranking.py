"""Cross-candidate ranking and inter-evaluator reliability report."""

from __future__ import annotations

from collections.abc import Iterable
from datetime import datetime, timezone

from eval_consensus.contracts import (
    MODERATE_OVERALL_MAX_DIVERGENCES,
    RECURRING_DIVERGENCE_MIN_CANDIDATES,
    Agreement,
    AgreementReport,
    CandidateConsensus,
    Comparison,
    ComparisonEntry,
    Divergence,
    RecurringDivergence,
)

RECURRING_NOTE = (
    "This criterion frequently produces evaluator disagreement. "
    "Consider refining its rubric definition."
)


def _now_iso() -> str:
    return datetime.now(timezone.utc).isoformat()


def overall_agreement(divergence_count: int) -> Agreement:
    """Candidate-level agreement from the number of divergent criteria."""
    if divergence_count == 0:
        return Agreement.STRONG
    if divergence_count <= MODERATE_OVERALL_MAX_DIVERGENCES:
        return Agreement.MODERATE
    return Agreement.WEAK


def rank_candidates(consensus_results: Iterable[CandidateConsensus]) -> list[CandidateConsensus]:
    """Total order: final score descending, then candidate id ascending."""
    return sorted(
        consensus_results,
        key=lambda c: (-c["scoring_summary"]["final_score"], c["candidate_id"]),
    )


def build_comparison(
    consensus_results: Iterable[CandidateConsensus],
    *,
    generated_at: str | None = None,
) -> Comparison:
    ranked = rank_candidates(consensus_results)
    ranking: list[ComparisonEntry] = []
    for position, c in enumerate(ranked, start=1):
        summary = c["scoring_summary"]
        ranking.append(
            ComparisonEntry(
                rank=position,
                candidate_id=c["candidate_id"],
                final_score=summary["final_score"],
                score_band=summary["score_band"],
                weighted_score=summary["weighted_score"],
                git_bonus=summary["git_bonus"],
                ai_bonus=summary["ai_bonus"],
                automatic_failure=summary["automatic_failure"],
                category_scores=dict(summary["category_scores"]),
                consensus_recommendation=c["qualitative_consensus"]["consensus_recommendation"],
                evaluator_count=c["evaluator_count"],
                confidence=c["confidence"],
                evaluator_agreement=c["inter_evaluator_analysis"]["overall_agreement"],
            )
        )

    return Comparison(
        generated_at=generated_at or _now_iso(),
        candidate_count=len(ranking),
        ranking=ranking,
    )


def find_recurring_divergences(
    divergences: Iterable[Divergence],
    *,
    min_candidates: int = RECURRING_DIVERGENCE_MIN_CANDIDATES,
) -> list[RecurringDivergence]:
    """Criteria divergent in at least ``min_candidates`` candidates.

    Plain frequency count, sorted by count descending then criterion id.
    """
    candidates_by_criterion: dict[str, list[str]] = {}
    for d in divergences:
        candidates_by_criterion.setdefault(d["criterion"], []).append(d.get("candidate_id", ""))

    recurring = [
        RecurringDivergence(
            criterion=criterion,
            divergence_count_across_candidates=len(cids),
            candidate_ids=sorted(cids),
            note=RECURRING_NOTE,
        )
        for criterion, cids in candidates_by_criterion.items()
        if len(cids) >= min_candidates
    ]
    recurring.sort(key=lambda r: (-r["divergence_count_across_candidates"], r["criterion"]))
    return recurring


def build_agreement_report(
    consensus_results: Iterable[CandidateConsensus],
    *,
    recurring_min: int = RECURRING_DIVERGENCE_MIN_CANDIDATES,
    generated_at: str | None = None,
) -> AgreementReport:
    results = list(consensus_results)

    all_divergences: list[Divergence] = []
    for c in results:
        for d in c["inter_evaluator_analysis"]["high_divergence_criteria"]:
            tagged = Divergence(**d)
            tagged["candidate_id"] = c["candidate_id"]
            all_divergences.append(tagged)

    recurring = find_recurring_divergences(all_divergences, min_candidates=recurring_min)

    if not all_divergences:
        summary = "Strong inter-evaluator agreement across all candidates and criteria."
    else:
        summary = (
            f"{len(all_divergences)} high-divergence instances found across "
            f"{len(results)} candidates. {len(recurring)} criteria show recurring "
            "disagreement and may need rubric refinement."
        )

    return AgreementReport(
        generated_at=generated_at or _now_iso(),
        total_candidates=len(results),
        total_divergences=len(all_divergences),
        all_divergences=all_divergences,
        frequently_divergent_criteria=recurring,
        summary=summary,
    )
