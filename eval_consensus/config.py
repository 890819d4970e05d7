"""Settings loaded from environment variables."""

from __future__ import annotations

import os
from dataclasses import dataclass, field
from pathlib import Path

from dotenv import load_dotenv


def _load_env() -> None:
    """Load .env from project root if it exists."""
    env_path = Path(__file__).resolve().parent.parent / ".env"
    if env_path.exists():
        load_dotenv(env_path)


_load_env()


@dataclass(frozen=True)
class Settings:
    # Input discovery
    candidate_prefix: str = field(
        default_factory=lambda: os.environ.get("CANDIDATE_PREFIX", "C-")
    )

    # Consensus
    min_evaluators: int = field(default_factory=lambda: int(os.environ.get("MIN_EVALUATORS", "3")))
    divergence_threshold: float = field(
        default_factory=lambda: float(os.environ.get("DIVERGENCE_THRESHOLD", "1.0"))
    )
    recurring_divergence_min: int = field(
        default_factory=lambda: int(os.environ.get("RECURRING_DIVERGENCE_MIN", "2"))
    )

    # Output ("" means <evals-dir>/output)
    output_dir: str = field(default_factory=lambda: os.environ.get("OUTPUT_DIR", ""))

    # Run event log, relative to the output directory unless absolute
    run_log_dir: str = field(default_factory=lambda: os.environ.get("RUN_LOG_DIR", "runs"))
    event_log_enabled: bool = field(
        default_factory=lambda: os.environ.get("EVENT_LOG_ENABLED", "true").lower() == "true"
    )

    def resolve_output_dir(self, evals_dir: str | Path, override: str | None = None) -> Path:
        """CLI flag beats OUTPUT_DIR, which beats <evals-dir>/output."""
        if override:
            return Path(override)
        if self.output_dir:
            return Path(self.output_dir)
        return Path(evals_dir) / "output"

    def validate(self) -> list[str]:
        """Return list of validation errors. Empty list means valid."""
        errors = []
        if self.min_evaluators < 1:
            errors.append(f"MIN_EVALUATORS must be >= 1, got {self.min_evaluators}")
        if self.divergence_threshold <= 0:
            errors.append(f"DIVERGENCE_THRESHOLD must be > 0, got {self.divergence_threshold}")
        if self.recurring_divergence_min < 1:
            errors.append(
                f"RECURRING_DIVERGENCE_MIN must be >= 1, got {self.recurring_divergence_min}"
            )
        return errors

    def warnings(self) -> list[str]:
        """Return list of non-fatal configuration warnings."""
        warns: list[str] = []
        if self.min_evaluators < 3:
            warns.append(
                f"MIN_EVALUATORS={self.min_evaluators} is below the recommended 3. "
                "Consensus from fewer evaluators will still be tagged 'full'."
            )
        if self.divergence_threshold > 2.0:
            warns.append(
                f"DIVERGENCE_THRESHOLD={self.divergence_threshold} is lenient on a 0-4 scale. "
                "Few criteria will be flagged for human review."
            )
        return warns


def get_settings() -> Settings:
    """Create Settings from current environment."""
    return Settings()
