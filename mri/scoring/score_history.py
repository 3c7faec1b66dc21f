"""
Snapshot History Store
======================

In-memory history of computed assessment snapshots, keyed by
organization and site.

Implements the HistoryLookup read path used by the comparator, so simple
hosts and tests can keep history without a database. Stored snapshots
are immutable.

Author: MRI Team
Version: 1.0.0
"""

import logging
from collections import defaultdict
from dataclasses import dataclass, field
from datetime import date, datetime, timezone
from typing import Any, Dict, List, Optional, Tuple

from shared.schemas.assessments import AggregateResult, BaselineEntry
from mri.config import settings
from mri.scoring.precision import mean, round_half_up, to_decimal

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class SnapshotRecord:
    """One recorded assessment snapshot."""
    assessment_id: str
    organization_id: str
    site_id: str
    assessment_date: date
    result: Optional[AggregateResult]
    sequence: int = 0
    recorded_at: datetime = field(default_factory=lambda: datetime.now(timezone.utc))

    @property
    def overall_score(self) -> Optional[float]:
        return self.result.overall_score if self.result is not None else None

    def to_baseline(self) -> BaselineEntry:
        return BaselineEntry(
            assessment_id=self.assessment_id,
            organization_id=self.organization_id,
            site_id=self.site_id,
            assessment_date=self.assessment_date,
            overall_score=self.overall_score,
        )

    def to_dict(self) -> Dict[str, Any]:
        return {
            "assessment_id": self.assessment_id,
            "organization_id": self.organization_id,
            "site_id": self.site_id,
            "assessment_date": self.assessment_date.isoformat(),
            "overall_score": self.overall_score,
            "recorded_at": self.recorded_at.isoformat(),
        }


class ScoreHistoryStore:
    """
    In-memory snapshot history.

    Records are ordered by (assessment_date, sequence): among assessments
    sharing a date, the one recorded last is the most recent. An
    assessment dated the same day as the current one is never its
    baseline.

    Usage:
        store = ScoreHistoryStore()
        store.record_snapshot("a-1", "org-1", "site-1", date(2026, 1, 5), result)
        baseline = store.get_baseline("org-1", "site-1", date(2026, 2, 1))
    """

    def __init__(self, max_records: Optional[int] = None):
        self._max_records = max_records or settings.history_max_records
        self._sequence = 0
        # {(organization_id, site_id) -> [SnapshotRecord]} in recording order
        self._records: Dict[Tuple[str, str], List[SnapshotRecord]] = defaultdict(list)

    # =========================================================================
    # Write
    # =========================================================================

    def record_snapshot(
        self,
        assessment_id: str,
        organization_id: str,
        site_id: str,
        assessment_date: date,
        result: Optional[AggregateResult],
    ) -> SnapshotRecord:
        """
        Record an assessment snapshot.

        A None result records an assessment whose score was never
        computed; using it as a baseline raises MissingBaselineScoreError.
        """
        self._sequence += 1
        record = SnapshotRecord(
            assessment_id=assessment_id,
            organization_id=organization_id,
            site_id=site_id,
            assessment_date=assessment_date,
            result=result,
            sequence=self._sequence,
        )

        bucket = self._records[(organization_id, site_id)]
        bucket.append(record)
        if len(bucket) > self._max_records:
            bucket.sort(key=lambda r: (r.assessment_date, r.sequence))
            del bucket[:-self._max_records]

        logger.debug(f"Recorded snapshot {assessment_id} for {organization_id}/{site_id}")
        return record

    # =========================================================================
    # Read
    # =========================================================================

    def get_history(
        self,
        organization_id: str,
        site_id: str,
        limit: int = 30,
    ) -> List[SnapshotRecord]:
        """Snapshots for one organization site, most recent first."""
        bucket = self._records.get((organization_id, site_id), [])
        ordered = sorted(bucket, key=lambda r: (r.assessment_date, r.sequence), reverse=True)
        return ordered[:limit]

    def get_baseline(
        self,
        organization_id: str,
        site_id: str,
        before: date,
    ) -> Optional[BaselineEntry]:
        """Most recent snapshot of the same organization site strictly before a date."""
        candidates = [
            r for r in self._records.get((organization_id, site_id), [])
            if r.assessment_date < before
        ]
        if not candidates:
            return None
        latest = max(candidates, key=lambda r: (r.assessment_date, r.sequence))
        return latest.to_baseline()

    # =========================================================================
    # Analytics
    # =========================================================================

    def get_trend(
        self,
        organization_id: str,
        site_id: str,
        window: int = 5,
    ) -> Dict[str, Any]:
        """
        Overall score trend over the last `window` scored snapshots.

        Returns:
            dict with keys: direction, change_points, avg, min, max
        """
        history = [
            r for r in self.get_history(organization_id, site_id, limit=self._max_records)
            if r.overall_score is not None
        ][:window]
        if len(history) < 2:
            return {"direction": "stable", "change_points": 0.0, "avg": 0.0, "min": 0.0, "max": 0.0}

        scores = [r.overall_score for r in reversed(history)]  # chronological order
        change = to_decimal(scores[-1]) - to_decimal(scores[0])

        if change > 0:
            direction = "increasing"
        elif change < 0:
            direction = "decreasing"
        else:
            direction = "stable"

        return {
            "direction": direction,
            "change_points": round_half_up(change),
            "avg": round_half_up(mean(scores)),
            "min": min(scores),
            "max": max(scores),
        }
