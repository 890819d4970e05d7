"""Write consensus, comparison, and agreement outputs to disk."""

from __future__ import annotations

import json
from pathlib import Path
from typing import Any

from eval_consensus.contracts import AgreementReport, CandidateConsensus, Comparison
from eval_consensus.reporting.renderer import render_comparison_markdown

COMPARISON_JSON = "comparison.json"
COMPARISON_MD = "comparison.md"
AGREEMENT_JSON = "agreement-report.json"


def _write_json(path: Path, payload: Any) -> Path:
    path.parent.mkdir(parents=True, exist_ok=True)
    path.write_text(json.dumps(payload, indent=2, ensure_ascii=False), encoding="utf-8")
    return path


def consensus_path(output_dir: str | Path, candidate_id: str) -> Path:
    return Path(output_dir) / f"consensus-{candidate_id}.json"


def write_consensus(output_dir: str | Path, consensus: CandidateConsensus) -> Path:
    return _write_json(consensus_path(output_dir, consensus["candidate_id"]), consensus)


def write_comparison_outputs(
    output_dir: str | Path,
    comparison: Comparison,
    agreement_report: AgreementReport,
) -> list[Path]:
    """Write comparison.json, comparison.md, and agreement-report.json."""
    out = Path(output_dir)
    out.mkdir(parents=True, exist_ok=True)

    md_path = out / COMPARISON_MD
    md_path.write_text(
        render_comparison_markdown(comparison, agreement_report) + "\n", encoding="utf-8"
    )
    return [
        _write_json(out / COMPARISON_JSON, comparison),
        md_path,
        _write_json(out / AGREEMENT_JSON, agreement_report),
    ]
