"""Discover candidate directories and load their evaluation documents."""

from __future__ import annotations

import json
from collections.abc import Iterable
from dataclasses import dataclass, field
from pathlib import Path

from eval_consensus.contracts import EvaluationRecord, Rejection
from eval_consensus.ingest.validation import validate_evaluation


class InputRootError(RuntimeError):
    """The evaluations root is missing, unreadable, or has no candidates."""


@dataclass
class CandidateLoad:
    """Outcome of loading one candidate directory."""

    candidate_id: str
    directory: Path
    files_found: int = 0
    records: list[EvaluationRecord] = field(default_factory=list)
    sources: list[str] = field(default_factory=list)  # parallel to records
    rejections: list[Rejection] = field(default_factory=list)

    @property
    def issue_count(self) -> int:
        return sum(len(r["reasons"]) for r in self.rejections)


def discover_candidates(
    root: str | Path,
    *,
    prefix: str = "C-",
    exclude: Iterable[str | Path] = (),
) -> list[Path]:
    """Return candidate subdirectories sorted by name.

    Directories in ``exclude`` (e.g. an output dir nested under the root) are
    never treated as candidates. Raises InputRootError when the root is
    unusable or holds no candidates.
    """
    root_path = Path(root)
    excluded = {Path(p).resolve() for p in exclude}
    if not root_path.exists():
        raise InputRootError(f"Directory not found: {root_path}")
    if not root_path.is_dir():
        raise InputRootError(f"Not a directory: {root_path}")

    try:
        entries = [
            p
            for p in root_path.iterdir()
            if p.is_dir() and p.name.startswith(prefix) and p.resolve() not in excluded
        ]
    except OSError as e:
        raise InputRootError(f"Cannot read {root_path}: {e}") from e

    if not entries:
        pattern = f"{prefix}XXX" if prefix else "any"
        raise InputRootError(f"No candidate directories ({pattern}) found in {root_path}")
    return sorted(entries, key=lambda p: p.name)


def load_candidate(directory: str | Path) -> CandidateLoad:
    """Read and validate every *.json file in a candidate directory.

    Unparseable or invalid documents become rejections; they never raise.
    """
    dir_path = Path(directory)
    result = CandidateLoad(candidate_id=dir_path.name, directory=dir_path)

    files = sorted(p for p in dir_path.glob("*.json") if p.is_file())
    result.files_found = len(files)

    for path in files:
        source = str(path)
        # ValueError covers JSONDecodeError, UnicodeDecodeError and oversized ints
        try:
            doc = json.loads(path.read_text(encoding="utf-8"))
        except (OSError, ValueError, RecursionError) as e:
            result.rejections.append(Rejection(source=source, reasons=[f"{source}: {e}"]))
            continue

        errors = validate_evaluation(doc, source)
        if errors:
            result.rejections.append(Rejection(source=source, reasons=errors))
            continue

        result.records.append(doc)
        result.sources.append(source)

    return result
