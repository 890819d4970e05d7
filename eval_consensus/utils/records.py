"""Read-only accessors for evaluation records."""

from __future__ import annotations

from collections.abc import Iterable

from eval_consensus.contracts import EvaluationRecord

UNKNOWN_EVALUATOR = "unknown"


def evaluator_id(record: EvaluationRecord) -> str:
    """Evaluator name from metadata, or 'unknown'."""
    meta = record.get("evaluation_metadata") or {}
    name = meta.get("evaluator")
    return name if isinstance(name, str) and name else UNKNOWN_EVALUATOR


def is_number(value: object) -> bool:
    """True for int/float, False for bool (a bool is not a score)."""
    return isinstance(value, (int, float)) and not isinstance(value, bool)


def collect_text_list(records: Iterable[EvaluationRecord], key: str) -> list[str]:
    """Concatenate a qualitative_summary list field across records, verbatim."""
    collected: list[str] = []
    for record in records:
        items = (record.get("qualitative_summary") or {}).get(key)
        if isinstance(items, list):
            collected.extend(items)
    return collected


def collect_text_field(records: Iterable[EvaluationRecord], key: str) -> list[str]:
    """Collect a non-empty qualitative_summary string field from each record."""
    collected: list[str] = []
    for record in records:
        value = (record.get("qualitative_summary") or {}).get(key)
        if isinstance(value, str) and value:
            collected.append(value)
    return collected
