"""Single source of truth for all types, enums, and constant tables."""

from __future__ import annotations

from enum import Enum
from types import MappingProxyType
from typing import Any, Mapping, NotRequired, TypedDict

# --- Enums ---


class Category(str, Enum):
    STRATEGY_MATRIX = "A_strategy_matrix"
    TECHNICAL_FOUNDATION = "B_technical_foundation"
    UI_UX_QUALITY = "C_ui_ux_quality"
    PRD_COMPLIANCE = "D_prd_compliance"
    CODE_QUALITY = "E_code_quality"
    BONUS_FEATURES = "F_bonus_features"
    DECISION_MAKING = "G_decision_making"


class GateCheck(str, Enum):
    PACKAGE_JSON_EXISTS = "G1_package_json_exists"
    INSTALL_SUCCEEDS = "G2_install_succeeds"
    BUILD_SUCCEEDS = "G3_build_succeeds"
    MATRIX_ROUTE_EXISTS = "G4_matrix_route_exists"
    PROJECT_FILES_EXIST = "G5_project_files_exist"
    CHART_LIBRARY_INSTALLED = "G6_chart_library_installed"
    NORMALIZATION_LOGIC_EXISTS = "G7_normalization_logic_exists"
    QUADRANT_LOGIC_EXISTS = "G8_quadrant_logic_exists"
    CHART_RENDERS_DATA = "G9_chart_renders_data"
    TOOLTIPS_IMPLEMENTED = "G10_tooltips_implemented"


class BonusTrack(str, Enum):
    GIT_HISTORY = "git_history_bonus"
    AI_INTEGRATION = "ai_integration_bonus"


class BonusComponent(str, Enum):
    COMMIT_CADENCE = "H1_commit_cadence"
    MESSAGE_QUALITY = "H2_message_quality"
    LOGICAL_PROGRESSION = "H3_logical_progression"
    AI_VISION_PLANNING = "I1_ai_vision_planning"
    AI_IMPLEMENTATION = "I2_ai_implementation"
    AI_INTEGRATION_QUALITY = "I3_ai_integration_quality"


class Recommendation(str, Enum):
    STRONG_HIRE = "Strong Hire"
    HIRE = "Hire"
    LEAN_HIRE = "Lean Hire"
    LEAN_NO_HIRE = "Lean No Hire"
    NO_HIRE = "No Hire"


class Agreement(str, Enum):
    STRONG = "strong"
    MODERATE = "moderate"
    WEAK = "weak"


class GateAgreement(str, Enum):
    UNANIMOUS = "unanimous"
    SPLIT = "split"
    NO_DATA = "no_data"


class ConsensusConfidence(str, Enum):
    FULL = "full"  # >= min evaluators
    PROVISIONAL = "provisional"


# --- Constant tables (read-only, built once at import) ---

CATEGORY_CRITERIA: Mapping[Category, tuple[str, ...]] = MappingProxyType(
    {
        Category.STRATEGY_MATRIX: (
            "A1_data_population",
            "A2_score_normalization",
            "A3_quadrant_assignment",
            "A4_scatter_plot_rendering",
            "A5_tooltip_implementation",
            "A6_logic_ui_separation",
        ),
        Category.TECHNICAL_FOUNDATION: (
            "B1_project_setup",
            "B2_routing_navigation",
            "B3_type_safety",
            "B4_data_layer",
        ),
        Category.UI_UX_QUALITY: (
            "C1_visual_design",
            "C2_responsive_design",
            "C3_interactivity",
            "C4_empty_error_loading_states",
            "C5_design_token_usage",
        ),
        Category.PRD_COMPLIANCE: (
            "D1_schema_adherence",
            "D2_quadrant_logic_accuracy",
            "D3_route_structure",
            "D4_specification_details",
        ),
        Category.CODE_QUALITY: (
            "E1_separation_of_concerns",
            "E2_readability_naming",
            "E3_error_handling",
            "E4_dependency_choices",
        ),
        Category.BONUS_FEATURES: (
            "F1_dashboard",
            "F2_additional_pages",
            "F3_search_filtering",
            "F4_creative_additions",
        ),
        Category.DECISION_MAKING: (
            "G1_prioritization",
            "G2_pr_description",
        ),
    }
)

CATEGORY_WEIGHTS: Mapping[Category, float] = MappingProxyType(
    {
        Category.STRATEGY_MATRIX: 0.30,
        Category.TECHNICAL_FOUNDATION: 0.15,
        Category.UI_UX_QUALITY: 0.15,
        Category.PRD_COMPLIANCE: 0.10,
        Category.CODE_QUALITY: 0.20,
        Category.BONUS_FEATURES: 0.05,
        Category.DECISION_MAKING: 0.05,
    }
)

CATEGORY_LABELS: Mapping[Category, str] = MappingProxyType(
    {
        Category.STRATEGY_MATRIX: "Strategy Matrix",
        Category.TECHNICAL_FOUNDATION: "Technical Foundation",
        Category.UI_UX_QUALITY: "UI/UX Quality",
        Category.PRD_COMPLIANCE: "PRD Compliance",
        Category.CODE_QUALITY: "Code Quality",
        Category.BONUS_FEATURES: "Bonus Features",
        Category.DECISION_MAKING: "Decision Making",
    }
)

# Only these gates can trigger automatic failure.
CRITICAL_GATE_REASONS: Mapping[GateCheck, str] = MappingProxyType(
    {
        GateCheck.BUILD_SUCCEEDS: "Project does not build (npm run build fails)",
        GateCheck.MATRIX_ROUTE_EXISTS: "Matrix route (/matrix) does not exist or renders nothing",
        GateCheck.CHART_RENDERS_DATA: "No scatter plot or chart renders data",
    }
)

BONUS_TRACK_COMPONENTS: Mapping[BonusTrack, tuple[BonusComponent, ...]] = MappingProxyType(
    {
        BonusTrack.GIT_HISTORY: (
            BonusComponent.COMMIT_CADENCE,
            BonusComponent.MESSAGE_QUALITY,
            BonusComponent.LOGICAL_PROGRESSION,
        ),
        BonusTrack.AI_INTEGRATION: (
            BonusComponent.AI_VISION_PLANNING,
            BonusComponent.AI_IMPLEMENTATION,
            BonusComponent.AI_INTEGRATION_QUALITY,
        ),
    }
)

BONUS_COMPONENT_CAPS: Mapping[BonusComponent, int] = MappingProxyType(
    {
        BonusComponent.COMMIT_CADENCE: 2,
        BonusComponent.MESSAGE_QUALITY: 2,
        BonusComponent.LOGICAL_PROGRESSION: 1,
        BonusComponent.AI_VISION_PLANNING: 2,
        BonusComponent.AI_IMPLEMENTATION: 2,
        BonusComponent.AI_INTEGRATION_QUALITY: 1,
    }
)

BONUS_TRACK_CAP = 5
MAX_CRITERION_SCORE = 4
MAX_FINAL_SCORE = 100.0 + BONUS_TRACK_CAP * len(BonusTrack)

# Best to worst. Index = ordinal position.
RECOMMENDATION_ORDER: tuple[str, ...] = tuple(r.value for r in Recommendation)
NO_CONSENSUS = "No consensus"

# (minimum score, label), checked top-down
SCORE_BANDS: tuple[tuple[float, str], ...] = (
    (90.0, "Exceptional"),
    (75.0, "Strong"),
    (60.0, "Competent"),
    (45.0, "Below Expectations"),
    (0.0, "Insufficient"),
)

STRONG_AGREEMENT_MAX_STDDEV = 0.5
MODERATE_AGREEMENT_MAX_STDDEV = 1.0
DIVERGENCE_STDDEV_THRESHOLD = 1.0
MODERATE_OVERALL_MAX_DIVERGENCES = 3
RECURRING_DIVERGENCE_MIN_CANDIDATES = 2
MIN_EVALUATORS_FOR_FULL_CONFIDENCE = 3

TOTAL_CRITERIA = sum(len(c) for c in CATEGORY_CRITERIA.values())


# --- Data Types ---

# An accepted evaluation document, exactly as parsed from JSON. Read-only.
EvaluationRecord = dict[str, Any]


class CriterionConsensus(TypedDict):
    consensus_score: float  # median
    mean: float
    std_dev: float
    individual_scores: list[int]
    agreement: Agreement


class CategoryConsensus(TypedDict):
    weight: float
    criteria: dict[str, CriterionConsensus]
    category_score: float  # 0-100


class Divergence(TypedDict):
    criterion: str
    category: str
    scores: list[int]
    evaluators: list[str]
    std_dev: float  # unrounded
    note: str
    candidate_id: NotRequired[str]  # set in the cross-candidate report


class GateConsensus(TypedDict):
    consensus_pass: bool
    evaluator_results: list[bool]
    pass_count: int
    fail_count: int
    agreement: GateAgreement


class GateSummary(TypedDict):
    checks: dict[str, GateConsensus]
    automatic_failure: bool
    failure_reasons: list[str]


class BonusComponentConsensus(TypedDict):
    max: int
    individual_scores: list[int]


class BonusConsensus(TypedDict):
    components: dict[str, BonusComponentConsensus]
    bonus_total: int  # clamped to BONUS_TRACK_CAP


class ScoringSummary(TypedDict):
    category_scores: dict[str, float]
    weighted_score: float
    git_bonus: int
    ai_bonus: int
    final_score: float
    score_band: str
    automatic_failure: bool
    automatic_failure_reasons: list[str]


class QualitativeConsensus(TypedDict):
    all_strengths: list[str]
    all_weaknesses: list[str]
    all_standout_moments: list[str]
    hiring_signals: list[str]
    individual_recommendations: list[str]
    consensus_recommendation: str


class InterEvaluatorAnalysis(TypedDict):
    total_criteria_evaluated: int
    high_divergence_criteria: list[Divergence]
    divergence_count: int
    overall_agreement: Agreement


class CandidateConsensus(TypedDict):
    candidate_id: str
    evaluator_count: int
    evaluators: list[str]
    confidence: ConsensusConfidence
    automated_gate: GateSummary
    rubric_consensus: dict[str, CategoryConsensus]
    git_history_bonus: BonusConsensus
    ai_integration_bonus: BonusConsensus
    scoring_summary: ScoringSummary
    qualitative_consensus: QualitativeConsensus
    inter_evaluator_analysis: InterEvaluatorAnalysis


class ComparisonEntry(TypedDict):
    rank: int
    candidate_id: str
    final_score: float
    score_band: str
    weighted_score: float
    git_bonus: int
    ai_bonus: int
    automatic_failure: bool
    category_scores: dict[str, float]
    consensus_recommendation: str
    evaluator_count: int
    confidence: ConsensusConfidence
    evaluator_agreement: Agreement


class Comparison(TypedDict):
    generated_at: str  # ISO 8601
    candidate_count: int
    ranking: list[ComparisonEntry]


class RecurringDivergence(TypedDict):
    criterion: str
    divergence_count_across_candidates: int
    candidate_ids: list[str]
    note: str


class AgreementReport(TypedDict):
    generated_at: str
    total_candidates: int
    total_divergences: int
    all_divergences: list[Divergence]
    frequently_divergent_criteria: list[RecurringDivergence]
    summary: str


class Rejection(TypedDict):
    source: str
    reasons: list[str]


class RunEvent(TypedDict):
    stage: str  # "load" | "reject" | "skip" | "consensus" | "compare"
    candidate_id: str  # "" for run-level events
    ts: str  # ISO 8601
    elapsed_s: float
    counts: dict[str, int]
    messages: list[str]
