"""
MRI Core Package
================

The Movement Risk Index scoring engine.

This package contains:
    - scoring/: Aggregation, comparison and driver sets
    - config: Pydantic settings
    - logging: Structured logging setup
    - exceptions: Engine error taxonomy

Author: MRI Team
Version: 1.0.0
"""

__version__ = "1.0.0"
