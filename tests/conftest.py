"""
pytest configuration and fixtures.

Author: MRI Team
Version: 1.0.0
"""

import pytest
from datetime import date

from shared.schemas.assessments import AggregateResult, Assessment, Observation
from mri.scoring.drivers import DriverSet
from mri.scoring.score_history import ScoreHistoryStore

from tests.fixtures import (
    OFFICE_WORKER_SCORES,
    ORGANIZATION_ID,
    REFERENCE_WEIGHTS,
    SITE_HISTORY,
    SITE_ID,
)


@pytest.fixture
def driver_set():
    """Reference six-driver set."""
    return DriverSet.from_weights(REFERENCE_WEIGHTS)


@pytest.fixture
def office_worker_observations():
    """Office worker scored on every driver."""
    return [
        Observation(role_id="office-worker", driver_id=driver_id, score=score)
        for driver_id, score in OFFICE_WORKER_SCORES.items()
    ]


@pytest.fixture
def history_store():
    """Empty in-memory history."""
    return ScoreHistoryStore()


@pytest.fixture
def populated_store(history_store):
    """History holding the reference site's earlier assessments."""
    for assessment_id, assessment_date, score in SITE_HISTORY:
        history_store.record_snapshot(
            assessment_id,
            ORGANIZATION_ID,
            SITE_ID,
            assessment_date,
            AggregateResult(overall_score=score),
        )
    return history_store


@pytest.fixture
def make_assessment(office_worker_observations):
    """Factory for assessments of the reference organization site."""
    def _make(
        assessment_id="a-current",
        organization_id=ORGANIZATION_ID,
        site_id=SITE_ID,
        assessment_date=date(2026, 3, 1),
        observations=None,
    ):
        return Assessment(
            assessment_id=assessment_id,
            organization_id=organization_id,
            site_id=site_id,
            assessment_date=assessment_date,
            observations=office_worker_observations if observations is None else observations,
        )
    return _make
