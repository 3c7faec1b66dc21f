"""
Observation Validation
======================

Input checks shared by the aggregator and the scoring engine.

Author: MRI Team
Version: 1.0.0
"""

import logging
from typing import Iterable, List, Set, Tuple

from shared.schemas.assessments import MAX_ORDINAL_SCORE, MIN_ORDINAL_SCORE, Observation
from mri.exceptions import UnknownDriverError, ValidationError
from mri.scoring.drivers import DriverSet


logger = logging.getLogger(__name__)


def validate_score(observation: Observation) -> int:
    """
    Check that an observation's score is an ordinal in [0, 4].

    Scores are never clamped.

    Raises:
        ValidationError: If the score is not an integer or out of range
    """
    score = observation.score
    if isinstance(score, bool) or not isinstance(score, int):
        raise ValidationError(
            f"Score for {observation.role_id}/{observation.driver_id} "
            f"must be an integer, got {score!r}",
            role_id=observation.role_id,
            driver_id=observation.driver_id,
            score=score,
        )
    if not MIN_ORDINAL_SCORE <= score <= MAX_ORDINAL_SCORE:
        raise ValidationError(
            f"Score {score} for {observation.role_id}/{observation.driver_id} "
            f"outside [{MIN_ORDINAL_SCORE}, {MAX_ORDINAL_SCORE}]",
            role_id=observation.role_id,
            driver_id=observation.driver_id,
            score=score,
        )
    return score


def validate_observations(
    observations: Iterable[Observation],
    driver_set: DriverSet,
) -> List[Observation]:
    """
    Validate a collection of observations against a driver set.

    Args:
        observations: Observations of one assessment
        driver_set: Drivers the observations may reference

    Returns:
        The observations as a list, in input order

    Raises:
        UnknownDriverError: If a driver id is not in the driver set
        ValidationError: On an out-of-range score or a duplicate
            (role, driver) pair
    """
    validated = []
    seen: Set[Tuple[str, str]] = set()

    for observation in observations:
        if observation.driver_id not in driver_set:
            logger.warning(f"Observation references unknown driver {observation.driver_id}")
            raise UnknownDriverError(
                f"Unknown driver {observation.driver_id} for role {observation.role_id}",
                role_id=observation.role_id,
                driver_id=observation.driver_id,
                score=observation.score,
            )

        validate_score(observation)

        pair = (observation.role_id, observation.driver_id)
        if pair in seen:
            raise ValidationError(
                f"Duplicate observation for role {pair[0]} and driver {pair[1]}",
                role_id=pair[0],
                driver_id=pair[1],
            )
        seen.add(pair)
        validated.append(observation)

    return validated
