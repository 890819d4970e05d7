"""Structural validation of evaluation documents.

Checks shape, types, and ranges only. A document with any error is rejected
before it reaches the consensus engine.
"""

from __future__ import annotations

from typing import Any

from eval_consensus.contracts import (
    BONUS_COMPONENT_CAPS,
    BONUS_TRACK_CAP,
    BONUS_TRACK_COMPONENTS,
    CATEGORY_CRITERIA,
    MAX_CRITERION_SCORE,
    RECOMMENDATION_ORDER,
    BonusTrack,
    Category,
    GateCheck,
)
from eval_consensus.utils.records import is_number


def _is_int(value: Any) -> bool:
    return is_number(value) and (isinstance(value, int) or value.is_integer())


def _check_bonus_track(doc: dict, track: BonusTrack, warn) -> None:
    bonus = doc.get(track.value)
    if not isinstance(bonus, dict):
        warn(f"Invalid {track.value}: expected an object")
        return

    for component in BONUS_TRACK_COMPONENTS[track]:
        if component.value not in bonus:
            continue
        entry = bonus[component.value]
        pts = entry.get("points") if isinstance(entry, dict) else None
        cap = BONUS_COMPONENT_CAPS[component]
        if not _is_int(pts) or pts < 0 or pts > cap:
            warn(f"Invalid points for {component.value}: {pts} (must be integer 0-{cap})")

    total = bonus.get("bonus_total")
    if not is_number(total) or total < 0 or total > BONUS_TRACK_CAP:
        warn(f"Invalid {track.value} bonus_total: {total}")


def validate_evaluation(doc: Any, source: str) -> list[str]:
    """Return validation errors prefixed with ``source``. Empty list means valid."""
    errors: list[str] = []

    def warn(msg: str) -> None:
        errors.append(f"{source}: {msg}")

    if not isinstance(doc, dict):
        warn("Document is not a JSON object")
        return errors

    meta = doc.get("evaluation_metadata")
    if not isinstance(meta, dict):
        meta = {}
    if not meta.get("candidate_id"):
        warn("Missing candidate_id")
    if not meta.get("evaluator"):
        warn("Missing evaluator")

    # Gate checks
    gate = doc.get("automated_gate")
    if not isinstance(gate, dict):
        warn("Missing automated_gate")
    else:
        for check in GateCheck:
            if check.value not in gate:
                warn(f"Missing gate check: {check.value}")

    # Rubric scores
    rubric = doc.get("rubric_scores")
    if not isinstance(rubric, dict):
        warn("Missing rubric_scores")
    else:
        for category in Category:
            block = rubric.get(category.value)
            if not isinstance(block, dict):
                warn(f"Missing category: {category.value}")
                continue
            criteria = block.get("criteria")
            if not isinstance(criteria, dict):
                warn(f"Missing criteria in {category.value}")
                continue
            for criterion in CATEGORY_CRITERIA[category]:
                entry = criteria.get(criterion)
                if not isinstance(entry, dict):
                    warn(f"Missing criterion: {category.value}.{criterion}")
                    continue
                s = entry.get("score")
                if not _is_int(s) or s < 0 or s > MAX_CRITERION_SCORE:
                    warn(
                        f"Invalid score for {criterion}: {s} "
                        f"(must be integer 0-{MAX_CRITERION_SCORE})"
                    )

    # Bonus tracks (AI integration is optional for older evaluations)
    if BonusTrack.GIT_HISTORY.value not in doc:
        warn(f"Missing {BonusTrack.GIT_HISTORY.value}")
    else:
        _check_bonus_track(doc, BonusTrack.GIT_HISTORY, warn)
    if doc.get(BonusTrack.AI_INTEGRATION.value) is not None:
        _check_bonus_track(doc, BonusTrack.AI_INTEGRATION, warn)

    # Qualitative summary
    qualitative = doc.get("qualitative_summary")
    if not isinstance(qualitative, dict):
        warn("Missing qualitative_summary")
    else:
        rec = qualitative.get("recommendation")
        if rec is not None and rec not in RECOMMENDATION_ORDER:
            warn(f"Invalid recommendation: {rec!r}")

    return errors
