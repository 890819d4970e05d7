"""Append-only JSONL event log for aggregation runs."""

from __future__ import annotations

import json
from datetime import datetime, timezone
from pathlib import Path

from eval_consensus.contracts import RunEvent


class EventLog:
    """JSONL-backed event log for a single aggregation run.

    One directory per run id, auto-created. Reads skip corrupt lines and
    return [] on a missing or unreadable file.
    """

    _FILENAME = "events.jsonl"

    def __init__(self, log_dir: str | Path, run_id: str) -> None:
        self._dir = Path(log_dir) / run_id
        self._dir.mkdir(parents=True, exist_ok=True)

    @property
    def path(self) -> Path:
        return self._dir / self._FILENAME

    def emit(self, event: RunEvent) -> None:
        """Append a single event as a JSON line."""
        line = json.dumps(event, ensure_ascii=False)
        with self.path.open("a", encoding="utf-8") as f:
            f.write(line + "\n")

    def read_all(self) -> list[RunEvent]:
        if not self.path.exists():
            return []
        events: list[RunEvent] = []
        try:
            for line in self.path.read_text(encoding="utf-8").splitlines():
                line = line.strip()
                if not line:
                    continue
                try:
                    events.append(json.loads(line))
                except json.JSONDecodeError:
                    continue
        except OSError:
            return []
        return events

    @staticmethod
    def make_event(
        *,
        stage: str,
        candidate_id: str = "",
        elapsed_s: float = 0.0,
        counts: dict[str, int] | None = None,
        messages: list[str] | None = None,
    ) -> RunEvent:
        """Factory for creating a RunEvent with timestamp."""
        return RunEvent(
            stage=stage,
            candidate_id=candidate_id,
            ts=datetime.now(timezone.utc).isoformat(),
            elapsed_s=round(elapsed_s, 3),
            counts=counts or {},
            messages=messages or [],
        )
