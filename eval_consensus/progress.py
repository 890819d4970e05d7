"""Progress display for per-candidate aggregation, printed to stderr."""

from __future__ import annotations

import sys
from pathlib import Path

from eval_consensus.contracts import CandidateConsensus, Rejection


class ProgressDisplay:
    """Prints load, rejection, and consensus progress to stderr."""

    def __init__(self, *, verbose: bool = False) -> None:
        self._verbose = verbose

    def _print(self, msg: str) -> None:
        print(msg, file=sys.stderr, flush=True)

    def candidates_found(self, names: list[str]) -> None:
        self._print(f"Found {len(names)} candidate(s): {', '.join(names)}")

    def candidate_start(self, candidate_id: str, file_count: int) -> None:
        self._print(f"\n  {candidate_id}: {file_count} evaluation(s)")

    def document_loaded(self, source: str, evaluator: str) -> None:
        if self._verbose:
            self._print(f"    Loaded: {Path(source).name} (evaluator: {evaluator})")

    def document_rejected(self, rejection: Rejection) -> None:
        reasons = rejection["reasons"]
        self._print(
            f"    REJECTED {Path(rejection['source']).name} "
            f"({len(reasons)} validation error(s)):"
        )
        for reason in reasons:
            self._print(f"      - {reason}")

    def candidate_skipped(self, candidate_id: str, reason: str) -> None:
        self._print(f"  WARNING: {reason} for {candidate_id}, skipping.")

    def provisional(self, candidate_id: str, accepted: int, minimum: int) -> None:
        self._print(
            f"  WARNING: Only {accepted} valid evaluation(s) for {candidate_id}. "
            f"Methodology requires {minimum}+. Results will be marked provisional."
        )

    def consensus_done(self, consensus: CandidateConsensus, path: Path | None = None) -> None:
        summary = consensus["scoring_summary"]
        if path is not None:
            self._print(f"    Consensus written: {path}")
        fail = " **AUTO-FAIL**" if summary["automatic_failure"] else ""
        self._print(f"    Score: {summary['final_score']} ({summary['score_band']}){fail}")
        divergences = consensus["inter_evaluator_analysis"]["divergence_count"]
        if divergences > 0:
            self._print(f"    Divergences: {divergences} criteria need human review")

    def run_summary(
        self,
        *,
        processed: int,
        skipped: int,
        rejected_documents: int,
        validation_issues: int,
        output_dir: Path,
    ) -> None:
        self._print("\n--- Summary ---")
        self._print(f"Candidates processed: {processed}")
        self._print(f"Candidates skipped: {skipped}")
        self._print(f"Documents rejected: {rejected_documents}")
        self._print(f"Validation issues: {validation_issues}")
        self._print(f"\nOutputs written to: {output_dir}")
