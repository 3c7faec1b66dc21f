"""
Historical Comparator Tests
===========================

Unit tests for baseline deltas. The history lookup is faked with
unittest.mock so no store is involved.

Author: MRI Team
Version: 1.0.0
"""

import pytest
from datetime import date
from unittest.mock import MagicMock

from shared.schemas.assessments import BaselineEntry, Delta
from mri.exceptions import BaselineMismatchError, ComparisonError, MissingBaselineScoreError
from mri.scoring.comparator import HistoryLookup, compute_delta

from tests.fixtures import ORGANIZATION_ID, SITE_ID


CURRENT_DATE = date(2026, 3, 1)


def _entry(**overrides):
    data = {
        "assessment_id": "a-prev",
        "organization_id": ORGANIZATION_ID,
        "site_id": SITE_ID,
        "assessment_date": date(2025, 12, 1),
        "overall_score": 60.2,
    }
    data.update(overrides)
    return BaselineEntry(**data)


@pytest.fixture
def lookup():
    """Mock history lookup with no baseline."""
    mock = MagicMock(spec=HistoryLookup)
    mock.get_baseline.return_value = None
    return mock


class TestComputeDelta:
    """Tests for compute_delta."""

    def test_first_audit(self, lookup):
        delta = compute_delta(ORGANIZATION_ID, SITE_ID, CURRENT_DATE, 55.7, lookup)

        assert delta == Delta(baseline_assessment_id=None, delta_points=None)
        assert delta.has_baseline is False

    def test_improvement_is_negative(self, lookup):
        lookup.get_baseline.return_value = _entry()

        delta = compute_delta(ORGANIZATION_ID, SITE_ID, CURRENT_DATE, 55.7, lookup)

        assert delta.baseline_assessment_id == "a-prev"
        assert delta.delta_points == -4.5

    def test_increase_is_positive(self, lookup):
        lookup.get_baseline.return_value = _entry(overall_score=40.1)

        delta = compute_delta(ORGANIZATION_ID, SITE_ID, CURRENT_DATE, 42.3, lookup)

        assert delta.delta_points == 2.2

    def test_no_change(self, lookup):
        lookup.get_baseline.return_value = _entry(overall_score=55.7)

        delta = compute_delta(ORGANIZATION_ID, SITE_ID, CURRENT_DATE, 55.7, lookup)

        assert delta.delta_points == 0.0
        assert delta.has_baseline is True

    def test_lookup_receives_identity(self, lookup):
        compute_delta(ORGANIZATION_ID, SITE_ID, CURRENT_DATE, 55.7, lookup)

        lookup.get_baseline.assert_called_once_with(ORGANIZATION_ID, SITE_ID, CURRENT_DATE)

    def test_missing_baseline_score(self, lookup):
        lookup.get_baseline.return_value = _entry(overall_score=None)

        with pytest.raises(MissingBaselineScoreError) as exc_info:
            compute_delta(ORGANIZATION_ID, SITE_ID, CURRENT_DATE, 55.7, lookup)

        assert exc_info.value.baseline_assessment_id == "a-prev"

    def test_other_site_refused(self, lookup):
        lookup.get_baseline.return_value = _entry(site_id="site-warehouse")

        with pytest.raises(BaselineMismatchError, match="expected"):
            compute_delta(ORGANIZATION_ID, SITE_ID, CURRENT_DATE, 55.7, lookup)

    def test_other_organization_refused(self, lookup):
        lookup.get_baseline.return_value = _entry(organization_id="org-other")

        with pytest.raises(ComparisonError):
            compute_delta(ORGANIZATION_ID, SITE_ID, CURRENT_DATE, 55.7, lookup)

    def test_same_day_baseline_refused(self, lookup):
        lookup.get_baseline.return_value = _entry(assessment_date=CURRENT_DATE)

        with pytest.raises(BaselineMismatchError, match="not before"):
            compute_delta(ORGANIZATION_ID, SITE_ID, CURRENT_DATE, 55.7, lookup)
