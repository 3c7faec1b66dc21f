"""
MRI Assessment Schemas
======================

Core data shapes for the Movement Risk Index engine. These schemas define
the observations a host collects and the immutable results the engine
hands back.

Key Components:
    - DriverDefinition: A named, weighted risk driver
    - Observation: One (role, driver, ordinal score) triple
    - Assessment: One dated assessment of an organization site
    - AggregateResult: Snapshot produced by the aggregator
    - Delta: Change against the baseline assessment
    - BaselineEntry: What a history lookup returns

Usage:
    from shared.schemas.assessments import Observation

    obs = Observation(role_id="office-worker", driver_id="sitting", score=3)

Author: MRI Team
Version: 1.0.0
"""

from datetime import date
from typing import List, Optional
from pydantic import BaseModel, ConfigDict, Field, StrictInt, field_validator


MIN_ORDINAL_SCORE = 0
MAX_ORDINAL_SCORE = 4


class DriverDefinition(BaseModel):
    """
    A named risk factor contributing to the overall score.

    Weight bounds are enforced by DriverSet so that a bad weight surfaces
    as DriverWeightsInvalidError rather than a schema error.
    """

    model_config = ConfigDict(frozen=True)

    driver_id: str = Field(..., description="Stable driver identifier")
    name: str = Field(default="", description="Display name")
    weight: float = Field(..., description="Relative weight in (0, 1]")

    @field_validator('driver_id')
    @classmethod
    def validate_driver_id(cls, v: str) -> str:
        """Ensure driver_id is not empty."""
        if not v or not v.strip():
            raise ValueError("driver_id cannot be empty")
        return v.strip()


class Observation(BaseModel):
    """
    A single ordinal exposure score for one role/driver pair.

    The score is kept as a strict integer; its range is checked by the
    aggregator so that out-of-range input is reported as an engine
    ValidationError.
    """

    model_config = ConfigDict(frozen=True)

    role_id: str = Field(..., description="Job role identifier")
    driver_id: str = Field(..., description="Driver identifier")
    score: StrictInt = Field(..., description="Ordinal exposure score (0-4)")

    @field_validator('role_id', 'driver_id')
    @classmethod
    def validate_identifier(cls, v: str) -> str:
        if not v or not v.strip():
            raise ValueError("identifier cannot be empty")
        return v.strip()


class Assessment(BaseModel):
    """
    One assessment of an organization site on a given date.

    Created and owned by the host application; the engine only reads
    its observations.
    """

    model_config = ConfigDict(frozen=True)

    assessment_id: str = Field(..., description="Assessment identifier")
    organization_id: str = Field(..., description="Owning organization")
    site_id: str = Field(..., description="Assessed physical site")
    assessment_date: date = Field(..., description="Date of the assessment")
    observations: List[Observation] = Field(
        default_factory=list,
        description="Ordinal scores collected for this assessment"
    )


class RoleScore(BaseModel):
    """Weighted score for one job role."""

    model_config = ConfigDict(frozen=True)

    role_id: str
    raw_score: float = Field(..., ge=0.0, description="Normalized score, nominally 0-1")
    percentage: float = Field(..., ge=0.0, le=100.0, description="Rounded percentage")


class DriverScore(BaseModel):
    """Mean ordinal score for one driver across roles."""

    model_config = ConfigDict(frozen=True)

    driver_id: str
    mean_score: float = Field(..., ge=0.0, le=4.0, description="Mean ordinal score (0-4)")
    percentage: float = Field(..., ge=0.0, le=100.0, description="Rounded percentage")
    observation_count: int = Field(default=0, ge=0)


class AggregateResult(BaseModel):
    """
    Immutable snapshot of one assessment's aggregate figures.

    Attributes:
        overall_score: Movement Risk Index (0-100, one decimal)
        roles: Per-role breakdown, in order of first appearance
        drivers: Per-driver breakdown, one entry per defined driver
        top_driver_id: Driver with the strictly highest percentage
        top_driver_percentage: Percentage of the top driver
    """

    model_config = ConfigDict(frozen=True)

    overall_score: float = Field(..., ge=0.0, le=100.0)
    roles: List[RoleScore] = Field(default_factory=list)
    drivers: List[DriverScore] = Field(default_factory=list)
    top_driver_id: Optional[str] = None
    top_driver_percentage: Optional[float] = None

    def get_role(self, role_id: str) -> Optional[RoleScore]:
        for role in self.roles:
            if role.role_id == role_id:
                return role
        return None

    def get_driver(self, driver_id: str) -> Optional[DriverScore]:
        for driver in self.drivers:
            if driver.driver_id == driver_id:
                return driver
        return None


class BaselineEntry(BaseModel):
    """
    Prior assessment returned by a history lookup.

    overall_score is None when the host holds the assessment but never
    persisted a computed score for it.
    """

    model_config = ConfigDict(frozen=True)

    assessment_id: str
    organization_id: str
    site_id: str
    assessment_date: date
    overall_score: Optional[float] = None


class Delta(BaseModel):
    """
    Signed change of the overall score against the baseline.

    Both fields are None for a first audit (no earlier assessment).
    Negative delta_points means risk decreased.
    """

    model_config = ConfigDict(frozen=True)

    baseline_assessment_id: Optional[str] = None
    delta_points: Optional[float] = None

    @property
    def has_baseline(self) -> bool:
        return self.baseline_assessment_id is not None
