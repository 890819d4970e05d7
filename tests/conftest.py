"""Test fixtures: evaluation document factories and on-disk layouts."""

from __future__ import annotations

import json
from pathlib import Path

import pytest

from eval_consensus.contracts import (
    BONUS_TRACK_COMPONENTS,
    CATEGORY_CRITERIA,
    BonusTrack,
    Category,
    GateCheck,
)


def build_evaluation(
    *,
    evaluator: str = "agent-1",
    candidate_id: str = "C-001",
    score: int = 3,
    scores: dict[str, int] | None = None,
    gates: dict[str, bool] | None = None,
    git: tuple[int, int, int] = (1, 1, 1),
    ai: tuple[int, int, int] | None = (0, 0, 0),
    recommendation: str | None = "Hire",
    self_reported_failure: bool = False,
    strengths: list[str] | None = None,
    weaknesses: list[str] | None = None,
) -> dict:
    """A structurally valid evaluation document.

    Every criterion gets ``score`` unless overridden in ``scores``; every gate
    passes unless overridden in ``gates``.
    """
    scores = scores or {}
    gates = gates or {}

    rubric = {}
    for category in Category:
        rubric[category.value] = {
            "criteria": {
                crit: {"score": scores.get(crit, score), "evidence": "seen in repo"}
                for crit in CATEGORY_CRITERIA[category]
            }
        }

    def _track(track: BonusTrack, points: tuple[int, int, int]) -> dict:
        block = {
            comp.value: {"points": p, "notes": ""}
            for comp, p in zip(BONUS_TRACK_COMPONENTS[track], points)
        }
        block["bonus_total"] = min(5, sum(points))
        return block

    doc = {
        "evaluation_metadata": {
            "candidate_id": candidate_id,
            "evaluator": evaluator,
            "evaluated_at": "2026-02-20T00:00:00Z",
        },
        "automated_gate": {
            check.value: {"pass": gates.get(check.value, True), "details": ""}
            for check in GateCheck
        },
        "rubric_scores": rubric,
        "git_history_bonus": _track(BonusTrack.GIT_HISTORY, git),
        "scoring_summary": {
            "automatic_failure": self_reported_failure,
            "final_score": 0,
        },
        "qualitative_summary": {
            "top_strengths": strengths if strengths is not None else [f"{evaluator}: clean code"],
            "top_weaknesses": weaknesses if weaknesses is not None else [f"{evaluator}: no tests"],
            "standout_moments": [],
            "hiring_signal": f"{evaluator} signal",
        },
    }
    if ai is not None:
        doc["ai_integration_bonus"] = _track(BonusTrack.AI_INTEGRATION, ai)
    if recommendation is not None:
        doc["qualitative_summary"]["recommendation"] = recommendation
    return doc


@pytest.fixture
def make_evaluation():
    return build_evaluation


@pytest.fixture
def three_evaluations() -> list[dict]:
    return [
        build_evaluation(evaluator="agent-opus-1", recommendation="Strong Hire"),
        build_evaluation(evaluator="agent-sonnet-2", recommendation="Hire"),
        build_evaluation(evaluator="human-1", recommendation="No Hire"),
    ]


@pytest.fixture
def write_candidate(tmp_path):
    """Write documents under <tmp>/evals/<candidate_id>/ and return the root."""
    root = tmp_path / "evals"
    root.mkdir()

    def _write(candidate_id: str, docs: list[dict | str]) -> Path:
        cdir = root / candidate_id
        cdir.mkdir(exist_ok=True)
        for i, doc in enumerate(docs, start=1):
            text = doc if isinstance(doc, str) else json.dumps(doc)
            (cdir / f"eval-{i}.json").write_text(text, encoding="utf-8")
        return root

    return _write
