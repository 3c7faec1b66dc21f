"""
MRI Historical Comparator
=========================

Compares an assessment's overall score with its baseline: the most
recent strictly earlier assessment of the same organization and site.

The history read path is injected by the host as a HistoryLookup, so the
comparator performs no I/O and can be tested with an in-memory fake.

Usage:
    from mri.scoring.comparator import compute_delta

    delta = compute_delta("org-1", "site-1", date(2026, 3, 1), 55.7, store)
    if delta.has_baseline:
        print(delta.delta_points)

Author: MRI Team
Version: 1.0.0
"""

import logging
from datetime import date
from typing import Optional, Protocol, runtime_checkable

from shared.schemas.assessments import BaselineEntry, Delta
from mri.exceptions import BaselineMismatchError, MissingBaselineScoreError
from mri.scoring.precision import round_half_up, to_decimal


logger = logging.getLogger(__name__)


@runtime_checkable
class HistoryLookup(Protocol):
    """
    Read path into persisted assessment snapshots.

    Implementations return the most recent assessment of the given
    organization and site dated strictly before `before`, or None.
    """

    def get_baseline(
        self,
        organization_id: str,
        site_id: str,
        before: date,
    ) -> Optional[BaselineEntry]:
        ...


def _check_baseline(
    entry: BaselineEntry,
    organization_id: str,
    site_id: str,
    assessment_date: date,
) -> None:
    if entry.organization_id != organization_id or entry.site_id != site_id:
        raise BaselineMismatchError(
            f"Baseline {entry.assessment_id} belongs to "
            f"{entry.organization_id}/{entry.site_id}, "
            f"expected {organization_id}/{site_id}"
        )
    if entry.assessment_date >= assessment_date:
        raise BaselineMismatchError(
            f"Baseline {entry.assessment_id} dated {entry.assessment_date} "
            f"is not before {assessment_date}"
        )


def compute_delta(
    organization_id: str,
    site_id: str,
    assessment_date: date,
    overall_score: float,
    history_lookup: HistoryLookup,
) -> Delta:
    """
    Signed change of the overall score against the baseline assessment.

    Args:
        organization_id: Organization of the current assessment
        site_id: Site of the current assessment
        assessment_date: Date of the current assessment
        overall_score: Current overall MRI (0-100)
        history_lookup: Host-supplied history read path

    Returns:
        Delta with the baseline id and rounded difference, or an empty
        Delta for a first audit

    Raises:
        MissingBaselineScoreError: If the baseline has no computed score
        BaselineMismatchError: If the lookup returned an entry for another
            organization/site or one not dated strictly earlier
    """
    entry = history_lookup.get_baseline(organization_id, site_id, assessment_date)

    if entry is None:
        logger.debug(f"No baseline for {organization_id}/{site_id} before {assessment_date}")
        return Delta()

    _check_baseline(entry, organization_id, site_id, assessment_date)

    if entry.overall_score is None:
        logger.warning(f"Baseline {entry.assessment_id} has no computed score")
        raise MissingBaselineScoreError(entry.assessment_id)

    difference = to_decimal(overall_score) - to_decimal(entry.overall_score)
    delta = Delta(
        baseline_assessment_id=entry.assessment_id,
        delta_points=round_half_up(difference),
    )

    logger.debug(
        f"Delta for {organization_id}/{site_id}: {delta.delta_points} "
        f"against {entry.assessment_id}"
    )

    return delta
