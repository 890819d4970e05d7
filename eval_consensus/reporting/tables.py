"""Markdown tables for the comparison report."""

from __future__ import annotations

from eval_consensus.contracts import (
    CATEGORY_LABELS,
    CATEGORY_WEIGHTS,
    SCORE_BANDS,
    Category,
    ComparisonEntry,
    RecurringDivergence,
)

# Short column headers, same order as Category
CATEGORY_COLUMNS: dict[Category, str] = {
    Category.STRATEGY_MATRIX: "Matrix",
    Category.TECHNICAL_FOUNDATION: "Tech",
    Category.UI_UX_QUALITY: "UI/UX",
    Category.PRD_COMPLIANCE: "PRD",
    Category.CODE_QUALITY: "Code",
    Category.BONUS_FEATURES: "Bonus",
    Category.DECISION_MAKING: "Decision",
}


def _row(cells: list[str]) -> str:
    return "| " + " | ".join(cells) + " |"


def _fmt(value: float) -> str:
    """Drop a trailing .0 so whole scores read as 75, not 75.0."""
    return f"{value:g}" if float(value).is_integer() else f"{value:.2f}".rstrip("0")


def render_ranking_table(ranking: list[ComparisonEntry]) -> str:
    if not ranking:
        return "*No candidates to rank.*"

    header = ["Rank", "Candidate", "Score", "Band", "Weighted"]
    header += [CATEGORY_COLUMNS[c] for c in Category]
    header += ["Git", "AI", "Rec", "Evals", "Agreement"]

    lines = [_row(header), _row(["-" * max(3, len(h)) for h in header])]
    for r in ranking:
        fail = " **FAIL**" if r["automatic_failure"] else ""
        evals = str(r["evaluator_count"])
        if r.get("confidence") == "provisional":
            evals += "*"
        cells = [
            str(r["rank"]),
            f"{r['candidate_id']}{fail}",
            _fmt(r["final_score"]),
            r["score_band"],
            _fmt(r["weighted_score"]),
        ]
        cells += [_fmt(r["category_scores"].get(c.value, 0.0)) for c in Category]
        cells += [
            str(r["git_bonus"]),
            str(r["ai_bonus"]),
            r["consensus_recommendation"],
            evals,
            str(getattr(r["evaluator_agreement"], "value", r["evaluator_agreement"])),
        ]
        lines.append(_row(cells))

    return "\n".join(lines)


def render_weights_table() -> str:
    lines = ["| Category | Weight |", "|----------|--------|"]
    for category in Category:
        letter = category.value[0]
        lines.append(
            f"| {letter}: {CATEGORY_LABELS[category]} | {CATEGORY_WEIGHTS[category]:.0%} |"
        )
    return "\n".join(lines)


def render_bands_table() -> str:
    lines = ["| Minimum | Band |", "|---------|------|"]
    for minimum, label in SCORE_BANDS:
        lines.append(f"| {minimum:g} | {label} |")
    return "\n".join(lines)


def render_recurring_table(recurring: list[RecurringDivergence]) -> str:
    if not recurring:
        return "*No criterion diverged in more than one candidate.*"
    lines = ["| Criterion | Candidates | Count |", "|-----------|------------|-------|"]
    for r in recurring:
        lines.append(
            f"| {r['criterion']} | {', '.join(r['candidate_ids'])} "
            f"| {r['divergence_count_across_candidates']} |"
        )
    return "\n".join(lines)
