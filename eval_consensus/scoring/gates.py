"""Gate consensus: majority verdict per binary check, recomputed auto-failure.

Majority rule is strict: pass iff pass_count > fail_count. A tie fails.
Split verdicts are surfaced through the agreement tag for human review.

Automatic failure is recomputed here from the consensus verdicts of the
critical gates only. The evaluator-reported ``scoring_summary.automatic_failure``
flag is never read.
"""

from __future__ import annotations

from collections.abc import Iterable, Mapping

from eval_consensus.contracts import (
    CRITICAL_GATE_REASONS,
    EvaluationRecord,
    GateAgreement,
    GateCheck,
    GateConsensus,
)


def extract_gate_results(records: Iterable[EvaluationRecord], check: GateCheck) -> list[bool]:
    """Collect every evaluator's boolean verdict for one check.

    Missing checks and non-boolean ``pass`` values are dropped.
    """
    results: list[bool] = []
    for record in records:
        gate = (record.get("automated_gate") or {}).get(check.value)
        if not isinstance(gate, dict):
            continue
        verdict = gate.get("pass")
        if isinstance(verdict, bool):
            results.append(verdict)
    return results


def resolve_gate(results: list[bool]) -> GateConsensus:
    """Reduce a list of pass/fail verdicts to one majority verdict."""
    pass_count = sum(1 for r in results if r)
    fail_count = len(results) - pass_count

    if not results:
        agreement = GateAgreement.NO_DATA
    elif pass_count == 0 or fail_count == 0:
        agreement = GateAgreement.UNANIMOUS
    else:
        agreement = GateAgreement.SPLIT

    return GateConsensus(
        consensus_pass=pass_count > fail_count,
        evaluator_results=list(results),
        pass_count=pass_count,
        fail_count=fail_count,
        agreement=agreement,
    )


def build_gate_consensus(records: list[EvaluationRecord]) -> dict[str, GateConsensus]:
    """Resolve every gate check, keyed by check identifier."""
    return {check.value: resolve_gate(extract_gate_results(records, check)) for check in GateCheck}


def recompute_automatic_failure(
    gate_consensus: Mapping[str, GateConsensus],
) -> tuple[bool, list[str]]:
    """Return (automatic_failure, reasons) from critical-gate consensus.

    A critical check only counts when at least one evaluator reported it.
    """
    reasons: list[str] = []
    for check, reason in CRITICAL_GATE_REASONS.items():
        gc = gate_consensus.get(check.value)
        if gc is None or gc["agreement"] == GateAgreement.NO_DATA:
            continue
        if not gc["consensus_pass"]:
            reasons.append(reason)
    return bool(reasons), reasons
