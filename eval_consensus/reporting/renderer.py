"""Markdown comparison report with YAML frontmatter, plus console ranking lines."""

from __future__ import annotations

import yaml

from eval_consensus.contracts import (
    BONUS_TRACK_CAP,
    MAX_FINAL_SCORE,
    AgreementReport,
    Comparison,
)
from eval_consensus.reporting.tables import (
    render_bands_table,
    render_ranking_table,
    render_recurring_table,
    render_weights_table,
)


def render_comparison_markdown(
    comparison: Comparison,
    agreement_report: AgreementReport | None = None,
) -> str:
    """Render the human-readable comparison report."""
    ranking = comparison["ranking"]

    # --- YAML Frontmatter ---
    frontmatter = {
        "title": "Candidate Comparison Report",
        "generated": comparison["generated_at"],
        "candidates": comparison["candidate_count"],
        "automatic_failures": sum(1 for r in ranking if r["automatic_failure"]),
        "max_final_score": MAX_FINAL_SCORE,
    }
    if agreement_report is not None:
        frontmatter["total_divergences"] = agreement_report["total_divergences"]

    lines: list[str] = []
    lines.append("---")
    lines.append(yaml.dump(frontmatter, default_flow_style=False, sort_keys=False).strip())
    lines.append("---")
    lines.append("")

    lines.append("# Candidate Comparison Report")
    lines.append("")
    lines.append(f"Generated: {comparison['generated_at']}")
    lines.append(f"Candidates evaluated: {comparison['candidate_count']}")
    lines.append("")

    # --- Rankings ---
    lines.append("## Rankings")
    lines.append("")
    lines.append(render_ranking_table(ranking))
    lines.append("")
    if any(r.get("confidence") == "provisional" for r in ranking):
        lines.append("\\* Provisional: fewer evaluations than the recommended minimum.")
        lines.append("")

    # --- Reliability ---
    if agreement_report is not None:
        lines.append("## Evaluator Agreement")
        lines.append("")
        lines.append(agreement_report["summary"])
        lines.append("")
        lines.append(render_recurring_table(agreement_report["frequently_divergent_criteria"]))
        lines.append("")

    # --- Reference tables ---
    lines.append("## Category Weights")
    lines.append("")
    lines.append(render_weights_table())
    lines.append("")
    lines.append("## Score Bands")
    lines.append("")
    lines.append(render_bands_table())
    lines.append("")
    lines.append(
        f"> **Note:** Final scores include up to {BONUS_TRACK_CAP} bonus points for git history "
        f"and up to {BONUS_TRACK_CAP} bonus points for AI integration. "
        "Automatic failure flags are noted but candidates still receive scores "
        "for comparative purposes."
    )

    return "\n".join(lines)


def render_console_ranking(comparison: Comparison) -> list[str]:
    """One line per ranked candidate for terminal output."""
    out: list[str] = []
    for r in comparison["ranking"]:
        fail = " [AUTO-FAIL]" if r["automatic_failure"] else ""
        out.append(
            f"  #{r['rank']}  {r['candidate_id']}  {r['final_score']} pts  "
            f"{r['score_band']}  {r['consensus_recommendation']}{fail}"
        )
    return out
