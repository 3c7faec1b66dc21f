"""
MRI Engine Exceptions
=====================

Error taxonomy for the scoring and comparison engine. All errors are
local and deterministic: retrying with the same input cannot change the
outcome.

Author: MRI Team
Version: 1.0.0
"""

from typing import Optional


class MRIError(Exception):
    """Base exception for MRI engine errors."""
    pass


class ValidationError(MRIError):
    """Raised when an observation is malformed or its score is out of range."""

    def __init__(
        self,
        message: str,
        role_id: Optional[str] = None,
        driver_id: Optional[str] = None,
        score: Optional[object] = None,
    ):
        super().__init__(message)
        self.role_id = role_id
        self.driver_id = driver_id
        self.score = score


class UnknownDriverError(ValidationError):
    """Raised when an observation references a driver absent from the driver set."""
    pass


class DriverWeightsInvalidError(MRIError):
    """Raised when a driver set's weights are invalid or do not sum to 1.0."""

    def __init__(self, message: str, total_weight: Optional[float] = None):
        super().__init__(message)
        self.total_weight = total_weight


class ComparisonError(MRIError):
    """Base exception for historical comparison errors."""
    pass


class MissingBaselineScoreError(ComparisonError):
    """Raised when a prior assessment exists but has no computed score."""

    def __init__(self, baseline_assessment_id: str):
        super().__init__(
            f"Baseline assessment {baseline_assessment_id} has no computed overall score"
        )
        self.baseline_assessment_id = baseline_assessment_id


class BaselineMismatchError(ComparisonError):
    """Raised when a history lookup returns an entry that is not a valid baseline."""
    pass
