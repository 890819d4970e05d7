"""Tests for config.py: Settings defaults, env overrides, validation, output resolution."""

from __future__ import annotations

from pathlib import Path

from eval_consensus.config import Settings


class TestConfigDefaults:
    def test_candidate_prefix_default(self, monkeypatch):
        monkeypatch.delenv("CANDIDATE_PREFIX", raising=False)
        assert Settings().candidate_prefix == "C-"

    def test_consensus_defaults(self, monkeypatch):
        for name in ("MIN_EVALUATORS", "DIVERGENCE_THRESHOLD", "RECURRING_DIVERGENCE_MIN"):
            monkeypatch.delenv(name, raising=False)
        s = Settings()
        assert s.min_evaluators == 3
        assert s.divergence_threshold == 1.0
        assert s.recurring_divergence_min == 2

    def test_event_log_enabled_default_true(self, monkeypatch):
        monkeypatch.delenv("EVENT_LOG_ENABLED", raising=False)
        assert Settings().event_log_enabled is True


class TestEnvOverrides:
    def test_min_evaluators_from_env(self, monkeypatch):
        monkeypatch.setenv("MIN_EVALUATORS", "5")
        assert Settings().min_evaluators == 5

    def test_event_log_disabled_from_env(self, monkeypatch):
        monkeypatch.setenv("EVENT_LOG_ENABLED", "false")
        assert Settings().event_log_enabled is False


class TestValidate:
    def test_defaults_valid(self):
        s = Settings(min_evaluators=3, divergence_threshold=1.0, recurring_divergence_min=2)
        assert s.validate() == []

    def test_min_evaluators_must_be_positive(self):
        errors = Settings(min_evaluators=0).validate()
        assert any("MIN_EVALUATORS" in e for e in errors)

    def test_threshold_must_be_positive(self):
        errors = Settings(divergence_threshold=0.0).validate()
        assert any("DIVERGENCE_THRESHOLD" in e for e in errors)

    def test_recurring_min_must_be_positive(self):
        errors = Settings(recurring_divergence_min=0).validate()
        assert any("RECURRING_DIVERGENCE_MIN" in e for e in errors)


class TestWarnings:
    def test_no_warnings_for_defaults(self):
        assert Settings(min_evaluators=3, divergence_threshold=1.0).warnings() == []

    def test_low_min_evaluators_warns(self):
        warns = Settings(min_evaluators=2, divergence_threshold=1.0).warnings()
        assert len(warns) == 1
        assert "MIN_EVALUATORS=2" in warns[0]

    def test_lenient_threshold_warns(self):
        warns = Settings(min_evaluators=3, divergence_threshold=2.5).warnings()
        assert len(warns) == 1
        assert "DIVERGENCE_THRESHOLD" in warns[0]


class TestResolveOutputDir:
    def test_default_under_evals_dir(self):
        s = Settings(output_dir="")
        assert s.resolve_output_dir("/data/evals") == Path("/data/evals") / "output"

    def test_env_setting(self):
        s = Settings(output_dir="/srv/reports")
        assert s.resolve_output_dir("/data/evals") == Path("/srv/reports")

    def test_override_wins(self):
        s = Settings(output_dir="/srv/reports")
        assert s.resolve_output_dir("/data/evals", "/tmp/out") == Path("/tmp/out")
