"""
Conversion reports: per-file tag counts and run totals.

Reports are derived data. Every stage builds a fresh one and writes it to
``<target>/reports/<name>-report.json``; nothing is read back between runs.
"""

import json
import logging
from collections import Counter
from dataclasses import dataclass, field
from datetime import datetime
from pathlib import Path
from typing import Any, Dict, List, Optional

from .extraction_result import ExtractionResult, RuleTag

logger = logging.getLogger(__name__)

STATUS_CONVERTED = "converted"
STATUS_UNCHANGED = "unchanged"
STATUS_SKIPPED = "skipped"
STATUS_ERROR = "error"
# Survey statuses used by the migration report
STATUS_COMPLETE = "complete"
STATUS_NEEDS_REVIEW = "needs-review"


def _tag_counts() -> Dict[str, int]:
    return {tag.value: 0 for tag in RuleTag}


@dataclass
class FileReport:
    """What happened to one source or target file."""

    source: str
    target: Optional[str] = None
    status: str = STATUS_CONVERTED
    counts: Dict[str, int] = field(default_factory=_tag_counts)
    rules: Counter = field(default_factory=Counter)
    needs_review: int = 0
    details: Dict[str, Any] = field(default_factory=dict)
    error: Optional[str] = None

    def record(self, result: ExtractionResult) -> ExtractionResult:
        """Count one translated unit."""
        self.counts[result.tag.value] += 1
        if result.rule:
            self.rules[result.rule] += 1
        if result.needs_review:
            self.needs_review += 1
        return result

    def fail(self, error: Exception):
        self.status = STATUS_ERROR
        self.error = f"{type(error).__name__}: {error}"

    @property
    def units(self) -> int:
        return sum(self.counts.values())

    def to_dict(self) -> Dict[str, Any]:
        data: Dict[str, Any] = {
            "source": self.source,
            "target": self.target,
            "status": self.status,
            "units": self.units,
            "counts": dict(self.counts),
            "needsReview": self.needs_review,
        }
        if self.rules:
            data["rules"] = dict(sorted(self.rules.items()))
        data.update(self.details)
        if self.error:
            data["error"] = self.error
        return data


@dataclass
class ConversionReport:
    """
    Result of one pipeline stage.

    Totals are always computed from the file entries, never stored.
    """

    name: str
    source_dir: Optional[str] = None
    target_dir: Optional[str] = None
    files: List[FileReport] = field(default_factory=list)
    summary: Dict[str, Any] = field(default_factory=dict)
    issues: List[str] = field(default_factory=list)

    def add(self, file_report: FileReport) -> FileReport:
        self.files.append(file_report)
        return file_report

    @property
    def totals(self) -> Dict[str, Any]:
        counts = _tag_counts()
        for file_report in self.files:
            for tag, count in file_report.counts.items():
                counts[tag] += count

        statuses = Counter(file_report.status for file_report in self.files)
        return {
            "files": len(self.files),
            "units": sum(f.units for f in self.files),
            "needsReview": sum(f.needs_review for f in self.files),
            "errors": statuses.get(STATUS_ERROR, 0),
            "statuses": dict(sorted(statuses.items())),
            **counts,
        }

    @property
    def rules(self) -> Counter:
        combined: Counter = Counter()
        for file_report in self.files:
            combined.update(file_report.rules)
        return combined

    @property
    def errors(self) -> List[FileReport]:
        return [f for f in self.files if f.status == STATUS_ERROR]

    @property
    def ok(self) -> bool:
        return not self.errors

    def merge(self, other: "ConversionReport", name: str = None) -> "ConversionReport":
        """Combine two reports into a new one; the inputs are left untouched."""
        return ConversionReport(
            name=name or self.name,
            source_dir=self.source_dir,
            target_dir=self.target_dir,
            files=self.files + other.files,
            summary={**self.summary, **other.summary},
            issues=self.issues + other.issues,
        )

    def to_dict(self) -> Dict[str, Any]:
        return {
            "name": self.name,
            "timestamp": datetime.now().isoformat(),
            "sourceDirectory": self.source_dir,
            "targetDirectory": self.target_dir,
            "totals": self.totals,
            "rules": dict(self.rules.most_common()),
            "summary": self.summary,
            "issues": self.issues,
            "files": [f.to_dict() for f in self.files],
        }

    def write(self, reports_dir: Path) -> Path:
        """Write the report as JSON, replacing any previous run's file."""
        reports_dir.mkdir(parents=True, exist_ok=True)
        path = reports_dir / f"{self.name}-report.json"
        path.write_text(json.dumps(self.to_dict(), indent=2) + "\n", encoding="utf-8")
        logger.info(f"Report saved: {path}")
        return path
