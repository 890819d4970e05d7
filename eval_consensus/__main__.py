"""CLI entry point: python -m eval_consensus <evals-directory> [--output DIR]"""

from __future__ import annotations

import argparse
import os
import sys
import time
from datetime import datetime, timezone
from pathlib import Path

from eval_consensus.config import get_settings
from eval_consensus.consensus import build_consensus
from eval_consensus.event_log.writer import EventLog
from eval_consensus.ingest.loader import InputRootError, discover_candidates, load_candidate
from eval_consensus.progress import ProgressDisplay
from eval_consensus.ranking import build_agreement_report, build_comparison
from eval_consensus.reporting.renderer import render_console_ranking
from eval_consensus.reporting.writer import write_comparison_outputs, write_consensus
from eval_consensus.utils.records import evaluator_id


def _generate_run_id() -> str:
    """Generate a unique run ID: aggregate-YYYYMMDD-HHMMSS-XXXX."""
    ts = datetime.now(timezone.utc).strftime("%Y%m%d-%H%M%S")
    suffix = os.urandom(2).hex()
    return f"aggregate-{ts}-{suffix}"


def parse_args() -> argparse.Namespace:
    parser = argparse.ArgumentParser(
        prog="eval-consensus",
        description=(
            "Aggregate multiple evaluations per candidate into consensus scores, "
            "a cross-candidate ranking, and an inter-evaluator agreement report"
        ),
        epilog=(
            "Expected layout: <evals-directory>/C-001/eval-*.json, C-002/..., "
            "one subdirectory per candidate"
        ),
    )
    parser.add_argument(
        "evals_dir",
        type=str,
        help="Root directory containing one subdirectory per candidate",
    )
    parser.add_argument(
        "--output",
        type=str,
        default=None,
        help="Output directory (default: OUTPUT_DIR or <evals-directory>/output)",
    )
    parser.add_argument(
        "--min-evaluators",
        type=int,
        default=None,
        help="Evaluations needed for full confidence (default: from config, 3)",
    )
    parser.add_argument(
        "--prefix",
        type=str,
        default=None,
        help="Candidate directory name prefix (default: from config, 'C-'; '' accepts all)",
    )
    parser.add_argument(
        "--no-log",
        action="store_true",
        default=False,
        help="Disable run event logging",
    )
    parser.add_argument(
        "--verbose",
        action="store_true",
        default=False,
        help="Show every loaded document",
    )
    args = parser.parse_args()

    if args.min_evaluators is not None and args.min_evaluators < 1:
        parser.error("--min-evaluators must be >= 1")

    return args


def run(args: argparse.Namespace) -> int:
    """Run one aggregation batch. Returns the process exit status."""
    settings = get_settings()

    errors = settings.validate()
    if errors:
        for err in errors:
            print(f"ERROR: {err}", file=sys.stderr)
        return 1
    for warn in settings.warnings():
        print(f"WARNING: {warn}", file=sys.stderr)

    min_evaluators = args.min_evaluators or settings.min_evaluators
    prefix = settings.candidate_prefix if args.prefix is None else args.prefix
    output_dir = settings.resolve_output_dir(args.evals_dir, args.output)

    try:
        candidate_dirs = discover_candidates(
            args.evals_dir, prefix=prefix, exclude=[output_dir]
        )
    except InputRootError as e:
        print(f"ERROR: {e}", file=sys.stderr)
        return 1

    display = ProgressDisplay(verbose=args.verbose)
    display.candidates_found([d.name for d in candidate_dirs])

    output_dir.mkdir(parents=True, exist_ok=True)

    event_log = None
    if settings.event_log_enabled and not args.no_log:
        event_log = EventLog(output_dir / settings.run_log_dir, _generate_run_id())

    all_consensus = []
    skipped = 0
    rejected_documents = 0
    validation_issues = 0

    for candidate_dir in candidate_dirs:
        started = time.perf_counter()
        loaded = load_candidate(candidate_dir)
        cid = loaded.candidate_id

        if loaded.files_found == 0:
            display.candidate_skipped(cid, "No JSON files found")
            skipped += 1
            if event_log is not None:
                event_log.emit(
                    EventLog.make_event(stage="skip", candidate_id=cid, messages=["no_files"])
                )
            continue

        display.candidate_start(cid, loaded.files_found)
        for record, source in zip(loaded.records, loaded.sources):
            display.document_loaded(source, evaluator_id(record))
        for rejection in loaded.rejections:
            display.document_rejected(rejection)
            if event_log is not None:
                event_log.emit(
                    EventLog.make_event(
                        stage="reject",
                        candidate_id=cid,
                        messages=rejection["reasons"],
                    )
                )

        rejected_documents += len(loaded.rejections)
        validation_issues += loaded.issue_count

        if event_log is not None:
            event_log.emit(
                EventLog.make_event(
                    stage="load",
                    candidate_id=cid,
                    elapsed_s=time.perf_counter() - started,
                    counts={
                        "files": loaded.files_found,
                        "accepted": len(loaded.records),
                        "rejected": len(loaded.rejections),
                    },
                )
            )

        if not loaded.records:
            display.candidate_skipped(cid, "No valid evaluations")
            skipped += 1
            if event_log is not None:
                event_log.emit(
                    EventLog.make_event(
                        stage="skip", candidate_id=cid, messages=["no_valid_evaluations"]
                    )
                )
            continue

        if len(loaded.records) < min_evaluators:
            display.provisional(cid, len(loaded.records), min_evaluators)

        consensus = build_consensus(
            cid,
            loaded.records,
            min_evaluators=min_evaluators,
            divergence_threshold=settings.divergence_threshold,
        )
        all_consensus.append(consensus)
        path = write_consensus(output_dir, consensus)
        display.consensus_done(consensus, path)

        if event_log is not None:
            summary = consensus["scoring_summary"]
            event_log.emit(
                EventLog.make_event(
                    stage="consensus",
                    candidate_id=cid,
                    elapsed_s=time.perf_counter() - started,
                    counts={
                        "evaluators": consensus["evaluator_count"],
                        "divergences": consensus["inter_evaluator_analysis"]["divergence_count"],
                        "automatic_failure": int(summary["automatic_failure"]),
                    },
                    messages=[f"final_score={summary['final_score']}"],
                )
            )

    # --- Cross-candidate comparison ---
    if all_consensus:
        comparison = build_comparison(all_consensus)
        agreement = build_agreement_report(
            all_consensus, recurring_min=settings.recurring_divergence_min
        )
        write_comparison_outputs(output_dir, comparison, agreement)
        if event_log is not None:
            event_log.emit(
                EventLog.make_event(
                    stage="compare",
                    counts={
                        "candidates": comparison["candidate_count"],
                        "divergences": agreement["total_divergences"],
                        "recurring": len(agreement["frequently_divergent_criteria"]),
                    },
                )
            )
    else:
        print("WARNING: No candidate had a valid evaluation. Nothing to compare.", file=sys.stderr)

    display.run_summary(
        processed=len(all_consensus),
        skipped=skipped,
        rejected_documents=rejected_documents,
        validation_issues=validation_issues,
        output_dir=output_dir,
    )
    if event_log is not None:
        print(f"Event log: {event_log.path}", file=sys.stderr)

    if all_consensus:
        print("\n--- Rankings ---")
        for line in render_console_ranking(comparison):
            print(line)

    return 0


def main() -> None:
    args = parse_args()
    sys.exit(run(args))


if __name__ == "__main__":
    main()
