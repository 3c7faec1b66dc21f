"""
MRI Shared Schemas Package
==========================

Data shapes exchanged between the host application and the MRI engine.

This package provides:
    - Input schemas: DriverDefinition, Observation, Assessment
    - Output schemas: AggregateResult, RoleScore, DriverScore, Delta
    - History schema: BaselineEntry

Author: MRI Team
Version: 1.0.0
"""

from shared.schemas.assessments import (
    MIN_ORDINAL_SCORE,
    MAX_ORDINAL_SCORE,
    DriverDefinition,
    Observation,
    Assessment,
    RoleScore,
    DriverScore,
    AggregateResult,
    BaselineEntry,
    Delta,
)

__all__ = [
    "MIN_ORDINAL_SCORE",
    "MAX_ORDINAL_SCORE",
    # Input schema
    "DriverDefinition",
    "Observation",
    "Assessment",
    # Output schema
    "RoleScore",
    "DriverScore",
    "AggregateResult",
    "Delta",
    # History
    "BaselineEntry",
]
