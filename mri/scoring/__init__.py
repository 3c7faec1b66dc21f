"""
MRI Scoring Package
===================

Scoring, aggregation and comparison engine for the Movement Risk Index.

This package provides:
    - aggregator: Role, driver and overall scores from observations
    - comparator: Delta against the baseline assessment
    - drivers: Weighted driver sets
    - engine: Assessment scoring orchestration
    - score_history: In-memory snapshot history

Author: MRI Team
Version: 1.0.0
"""

from mri.scoring.aggregator import aggregate
from mri.scoring.comparator import HistoryLookup, compute_delta
from mri.scoring.drivers import DriverSet, load_default_driver_set
from mri.scoring.engine import AssessmentScore, MovementRiskEngine
from mri.scoring.score_history import ScoreHistoryStore, SnapshotRecord

__all__ = [
    "aggregate",
    "compute_delta",
    "HistoryLookup",
    "DriverSet",
    "load_default_driver_set",
    "AssessmentScore",
    "MovementRiskEngine",
    "ScoreHistoryStore",
    "SnapshotRecord",
]
