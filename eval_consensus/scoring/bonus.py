"""Bonus track aggregation: component-wise max across evaluators, capped total.

Each sub-component takes the highest points any single evaluator awarded for
that sub-component. The per-component maxima are summed and clamped to the
track cap. An evaluator's own ``bonus_total`` is never used.
"""

from __future__ import annotations

from collections.abc import Iterable

from eval_consensus.contracts import (
    BONUS_TRACK_CAP,
    BONUS_TRACK_COMPONENTS,
    BonusComponent,
    BonusComponentConsensus,
    BonusConsensus,
    BonusTrack,
    EvaluationRecord,
)
from eval_consensus.utils.records import is_number


def extract_component_points(
    records: Iterable[EvaluationRecord],
    track: BonusTrack,
    component: BonusComponent,
) -> list[int]:
    """Points each evaluator gave one sub-component. Absent tracks are skipped."""
    points: list[int] = []
    for record in records:
        entry = (record.get(track.value) or {}).get(component.value)
        if not isinstance(entry, dict):
            continue
        value = entry.get("points")
        if is_number(value):
            points.append(value)
    return points


def aggregate_bonus_track(
    records: list[EvaluationRecord],
    track: BonusTrack,
    *,
    cap: int = BONUS_TRACK_CAP,
) -> BonusConsensus:
    components: dict[str, BonusComponentConsensus] = {}
    total = 0
    for component in BONUS_TRACK_COMPONENTS[track]:
        points = extract_component_points(records, track, component)
        best = max(points, default=0)
        components[component.value] = BonusComponentConsensus(
            max=best,
            individual_scores=points,
        )
        total += best

    return BonusConsensus(
        components=components,
        bonus_total=min(cap, max(0, total)),
    )
