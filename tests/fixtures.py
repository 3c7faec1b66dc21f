"""
Test Fixtures for MRI Scoring
=============================

Reference dataset used across the test suite:
    - The six-driver reference weight set
    - An office worker scored on every driver (48.8%)
    - A short assessment history for one organization site

Author: MRI Team
Version: 1.0.0
"""

from datetime import date


ORGANIZATION_ID = "org-acme"
SITE_ID = "site-hq"


# =============================================================================
# Drivers
# =============================================================================

REFERENCE_WEIGHTS = {
    "sitting": 0.25,
    "movement": 0.20,
    "upper_limb": 0.15,
    "neck": 0.15,
    "work_org": 0.15,
    "workstation": 0.10,
}


# =============================================================================
# Observations
# =============================================================================

OFFICE_WORKER_SCORES = {
    "sitting": 3,
    "movement": 2,
    "upper_limb": 1,
    "neck": 2,
    "work_org": 1,
    "workstation": 2,
}


# =============================================================================
# History: (assessment_id, assessment_date, overall_score)
# =============================================================================

SITE_HISTORY = [
    ("a-2025-q3", date(2025, 9, 10), 64.0),
    ("a-2025-q4", date(2025, 12, 1), 60.2),
]
