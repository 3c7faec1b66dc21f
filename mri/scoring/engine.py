"""
MRI Scoring Engine
==================

Orchestrates a full assessment calculation.

This module coordinates:
    - Aggregation of an assessment's observations
    - Comparison with the baseline assessment
    - Risk level classification and explanations

The engine never persists anything: the host records the returned
snapshot and delta, then feeds them back through its history lookup.

Usage:
    from mri.scoring.engine import MovementRiskEngine

    engine = MovementRiskEngine(driver_set, history_store)
    scored = engine.score_assessment(assessment)
    print(scored.result.overall_score, scored.delta.delta_points)

Author: MRI Team
Version: 1.0.0
"""

from dataclasses import dataclass
from typing import Any, Dict, List, Optional

from shared.schemas.assessments import AggregateResult, Assessment, Delta
from mri.config import Settings, settings as default_settings
from mri.logging import clear_assessment_context, get_logger, set_assessment_context
from mri.scoring.aggregator import aggregate
from mri.scoring.comparator import HistoryLookup, compute_delta
from mri.scoring.drivers import DriverSetLike, as_driver_set, load_default_driver_set


logger = get_logger(__name__)


@dataclass(frozen=True)
class AssessmentScore:
    """
    Complete scoring outcome for one assessment.

    Includes the snapshot, the baseline delta and identifying metadata.
    """
    assessment_id: str
    organization_id: str
    site_id: str
    result: AggregateResult
    delta: Delta
    risk_level: str


class MovementRiskEngine:
    """
    Movement Risk Index engine.

    Holds the driver set and the history read path; every call is a pure
    function of those and the assessment passed in.

    Attributes:
        driver_set: Validated driver set used for every calculation
        history: Host-supplied history lookup

    Example:
        engine = MovementRiskEngine(load_default_driver_set(), ScoreHistoryStore())
        scored = engine.score_assessment(assessment)
        explanation = engine.explain_result(scored.result)
    """

    def __init__(
        self,
        driver_set: Optional[DriverSetLike] = None,
        history: Optional[HistoryLookup] = None,
        settings: Optional[Settings] = None,
    ):
        """
        Initialize the engine.

        Args:
            driver_set: Drivers to score against (defaults to configured set)
            history: History lookup for deltas; without one every
                assessment is treated as a first audit
            settings: Settings for risk thresholds
        """
        self.settings = settings or default_settings
        if driver_set is None:
            self.driver_set = load_default_driver_set(self.settings)
        else:
            self.driver_set = as_driver_set(driver_set)
        self.history = history

    def score_assessment(self, assessment: Assessment) -> AssessmentScore:
        """
        Aggregate an assessment and compare it with its baseline.

        Args:
            assessment: Assessment to score

        Returns:
            AssessmentScore with snapshot, delta and risk level

        Raises:
            ValidationError, UnknownDriverError: On bad observations
            DriverWeightsInvalidError: On an invalid driver set
            ComparisonError: On an unusable baseline
        """
        set_assessment_context(assessment.assessment_id, assessment.organization_id)
        try:
            result = aggregate(assessment.observations, self.driver_set)

            if self.history is None:
                delta = Delta()
            else:
                delta = compute_delta(
                    assessment.organization_id,
                    assessment.site_id,
                    assessment.assessment_date,
                    result.overall_score,
                    self.history,
                )

            scored = AssessmentScore(
                assessment_id=assessment.assessment_id,
                organization_id=assessment.organization_id,
                site_id=assessment.site_id,
                result=result,
                delta=delta,
                risk_level=self.classify_risk_level(result.overall_score),
            )

            logger.info(
                "assessment_scored",
                site_id=assessment.site_id,
                overall_score=result.overall_score,
                delta_points=delta.delta_points,
                top_driver=result.top_driver_id,
            )
            return scored
        except Exception as e:
            logger.warning("assessment_scoring_failed", error=str(e))
            raise
        finally:
            clear_assessment_context()

    def classify_risk_level(self, percentage: float) -> str:
        """
        Map an MRI percentage to a risk level.

        Args:
            percentage: Score in [0, 100]

        Returns:
            "high", "medium" or "low"
        """
        if percentage >= self.settings.risk_threshold_high:
            return "high"
        elif percentage >= self.settings.risk_threshold_medium:
            return "medium"
        return "low"

    def explain_result(
        self,
        result: AggregateResult,
        delta: Optional[Delta] = None,
        max_roles: int = 3,
    ) -> Dict[str, Any]:
        """
        Generate a human-readable explanation of a snapshot.

        Args:
            result: Snapshot to explain
            delta: Optional baseline comparison to include
            max_roles: Number of highest-risk roles to list

        Returns:
            Dictionary with summary text and breakdowns
        """
        ranked_roles = sorted(result.roles, key=lambda r: r.percentage, reverse=True)
        names = {d.driver_id: d.name or d.driver_id for d in self.driver_set}

        return {
            "overall_score": result.overall_score,
            "risk_level": self.classify_risk_level(result.overall_score),
            "summary": self._generate_summary(result, delta),
            "top_driver": result.top_driver_id,
            "highest_risk_roles": [r.role_id for r in ranked_roles[:max_roles]],
            "driver_breakdown": {
                names.get(d.driver_id, d.driver_id): d.percentage
                for d in result.drivers
            },
            "role_breakdown": {r.role_id: r.percentage for r in result.roles},
            "delta_points": delta.delta_points if delta else None,
        }

    def _generate_summary(self, result: AggregateResult, delta: Optional[Delta]) -> str:
        """Generate a one-line summary of the snapshot."""
        level = self.classify_risk_level(result.overall_score)
        parts: List[str] = [
            f"Movement Risk Index {result.overall_score:.1f} ({level.upper()})."
        ]

        if result.top_driver_id is not None and result.top_driver_percentage:
            driver = self.driver_set.get(result.top_driver_id)
            name = driver.name if driver and driver.name else result.top_driver_id
            parts.append(f"Main driver: {name} at {result.top_driver_percentage:.1f}%.")

        if delta is not None:
            if not delta.has_baseline:
                parts.append("First audit for this site.")
            elif delta.delta_points < 0:
                parts.append(f"Down {abs(delta.delta_points):.1f} points since last audit.")
            elif delta.delta_points > 0:
                parts.append(f"Up {delta.delta_points:.1f} points since last audit.")
            else:
                parts.append("Unchanged since last audit.")

        return " ".join(parts)
