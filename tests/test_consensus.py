"""Tests for consensus.build_consensus: end-to-end per-candidate aggregation."""

from __future__ import annotations

import copy

import pytest

from eval_consensus.consensus import build_consensus, score_band
from eval_consensus.contracts import (
    CATEGORY_WEIGHTS,
    CRITICAL_GATE_REASONS,
    MAX_FINAL_SCORE,
    TOTAL_CRITERIA,
    Agreement,
    Category,
    ConsensusConfidence,
    GateCheck,
)


class TestScoreBand:
    def test_boundaries(self):
        assert score_band(110) == "Exceptional"
        assert score_band(90) == "Exceptional"
        assert score_band(89.99) == "Strong"
        assert score_band(75) == "Strong"
        assert score_band(60) == "Competent"
        assert score_band(45) == "Below Expectations"
        assert score_band(44.99) == "Insufficient"
        assert score_band(0) == "Insufficient"


class TestBuildConsensus:
    def test_scores_all_threes(self, three_evaluations):
        c = build_consensus("C-001", three_evaluations)
        summary = c["scoring_summary"]
        assert all(v == 75.0 for v in summary["category_scores"].values())
        assert summary["weighted_score"] == 75.0
        # git (1,1,1) -> 3, ai (0,0,0) -> 0
        assert summary["git_bonus"] == 3
        assert summary["ai_bonus"] == 0
        assert summary["final_score"] == 78.0
        assert summary["score_band"] == "Strong"

    def test_weighted_equals_sum_of_products(self, make_evaluation):
        records = [
            make_evaluation(evaluator="a", score=2, scores={"A1_data_population": 4}),
            make_evaluation(evaluator="b", score=3, scores={"E1_separation_of_concerns": 0}),
            make_evaluation(evaluator="c", score=1),
        ]
        summary = build_consensus("C-002", records)["scoring_summary"]
        expected = sum(summary["category_scores"][c.value] * CATEGORY_WEIGHTS[c] for c in Category)
        assert summary["weighted_score"] == pytest.approx(round(expected, 2))

    def test_final_score_ceiling(self, make_evaluation):
        records = [make_evaluation(score=4, git=(2, 2, 1), ai=(2, 2, 1)) for _ in range(3)]
        summary = build_consensus("C-003", records)["scoring_summary"]
        assert summary["final_score"] == MAX_FINAL_SCORE == 110.0

    def test_confidence_full_and_provisional(self, make_evaluation, three_evaluations):
        assert build_consensus("C-001", three_evaluations)["confidence"] == ConsensusConfidence.FULL
        two = [make_evaluation(evaluator="a"), make_evaluation(evaluator="b")]
        assert build_consensus("C-001", two)["confidence"] == ConsensusConfidence.PROVISIONAL
        assert (
            build_consensus("C-001", two, min_evaluators=2)["confidence"]
            == ConsensusConfidence.FULL
        )

    def test_evaluators_listed(self, three_evaluations):
        c = build_consensus("C-001", three_evaluations)
        assert c["evaluator_count"] == 3
        assert c["evaluators"] == ["agent-opus-1", "agent-sonnet-2", "human-1"]

    def test_records_not_mutated(self, three_evaluations):
        before = copy.deepcopy(three_evaluations)
        build_consensus("C-001", three_evaluations)
        assert three_evaluations == before


class TestAutomaticFailureRecomputed:
    def test_self_report_false_but_consensus_fails(self, make_evaluation):
        chart = GateCheck.CHART_RENDERS_DATA.value
        records = [
            make_evaluation(evaluator="a", gates={chart: False}, self_reported_failure=False),
            make_evaluation(evaluator="b", gates={chart: False}, self_reported_failure=False),
            make_evaluation(evaluator="c", self_reported_failure=False),
        ]
        c = build_consensus("C-001", records)
        reason = CRITICAL_GATE_REASONS[GateCheck.CHART_RENDERS_DATA]
        assert c["automated_gate"]["automatic_failure"] is True
        assert c["automated_gate"]["failure_reasons"] == [reason]
        assert c["scoring_summary"]["automatic_failure"] is True
        assert c["scoring_summary"]["automatic_failure_reasons"] == [reason]

    def test_self_report_true_but_consensus_passes(self, make_evaluation):
        records = [make_evaluation(self_reported_failure=True) for _ in range(3)]
        c = build_consensus("C-001", records)
        assert c["scoring_summary"]["automatic_failure"] is False

    def test_failure_still_scored(self, make_evaluation):
        build = GateCheck.BUILD_SUCCEEDS.value
        records = [make_evaluation(gates={build: False}) for _ in range(3)]
        c = build_consensus("C-001", records)
        assert c["scoring_summary"]["automatic_failure"] is True
        assert c["scoring_summary"]["final_score"] > 0


class TestQualitativeConsensus:
    def test_text_collected_verbatim(self, make_evaluation):
        records = [
            make_evaluation(evaluator="a", strengths=["fast", "tidy"], weaknesses=[]),
            make_evaluation(evaluator="b", strengths=["tidy"], weaknesses=["no docs"]),
        ]
        q = build_consensus("C-001", records)["qualitative_consensus"]
        assert q["all_strengths"] == ["fast", "tidy", "tidy"]
        assert q["all_weaknesses"] == ["no docs"]
        assert q["hiring_signals"] == ["a signal", "b signal"]

    def test_recommendation(self, three_evaluations):
        q = build_consensus("C-001", three_evaluations)["qualitative_consensus"]
        assert q["individual_recommendations"] == ["Strong Hire", "Hire", "No Hire"]
        assert q["consensus_recommendation"] == "Hire"


class TestInterEvaluatorAnalysis:
    def test_no_divergence_is_strong(self, three_evaluations):
        analysis = build_consensus("C-001", three_evaluations)["inter_evaluator_analysis"]
        assert analysis["total_criteria_evaluated"] == TOTAL_CRITERIA == 29
        assert analysis["divergence_count"] == 0
        assert analysis["overall_agreement"] == Agreement.STRONG

    def test_many_divergences_is_weak(self, make_evaluation):
        records = [
            make_evaluation(evaluator="a", score=0),
            make_evaluation(evaluator="b", score=4),
        ]
        analysis = build_consensus("C-001", records)["inter_evaluator_analysis"]
        assert analysis["divergence_count"] == 29
        assert analysis["overall_agreement"] == Agreement.WEAK
