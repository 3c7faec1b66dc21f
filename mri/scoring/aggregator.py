"""
MRI Aggregator
==============

Turns ordinal observations into the Movement Risk Index snapshot.

Scoring rules:
    - Role score: sum of weight(driver) * score / 4 over the drivers
      observed for the role. Unobserved drivers are left out of the sum;
      the weights are not renormalized.
    - Overall score: mean of the role percentages as presented, 0 when
      no role has observations.
    - Driver score: mean ordinal score across roles, 0 when unobserved.
      Every driver of the set appears in the breakdown.
    - Top driver: strictly highest driver percentage, first in
      definition order on ties.

Figures are computed with Decimal arithmetic and each presented value
is rounded once, as it is placed into the result.

Usage:
    from mri.scoring.aggregator import aggregate

    result = aggregate(observations, driver_set)
    print(result.overall_score, result.top_driver_id)

Author: MRI Team
Version: 1.0.0
"""

import logging
from collections import OrderedDict
from decimal import Decimal
from typing import Dict, Iterable, List, Optional, Sequence, Tuple, Union

from pydantic import ValidationError as SchemaValidationError

from shared.schemas.assessments import (
    AggregateResult,
    DriverScore,
    Observation,
    RoleScore,
)
from mri.exceptions import ValidationError
from mri.scoring.drivers import DriverSet, DriverSetLike, as_driver_set
from mri.scoring.precision import (
    MAX_SCORE,
    ZERO,
    mean,
    round_half_up,
    to_decimal,
    to_percentage,
)
from mri.scoring.validation import validate_observations


logger = logging.getLogger(__name__)


ObservationLike = Union[Observation, Tuple[str, str, int]]


def _coerce_observation(item: ObservationLike) -> Observation:
    """Accept (role_id, driver_id, score) tuples alongside Observation models."""
    if isinstance(item, Observation):
        return item
    role_id, driver_id, score = item
    try:
        return Observation(role_id=role_id, driver_id=driver_id, score=score)
    except SchemaValidationError as e:
        raise ValidationError(
            f"Invalid observation {tuple(item)!r}: identifiers must be non-empty "
            f"and the score an integer",
            role_id=role_id,
            driver_id=driver_id,
            score=score,
        ) from e


def role_raw_scores(
    observations: Sequence[Observation],
    driver_set: DriverSet,
) -> "OrderedDict[str, Decimal]":
    """
    Weighted raw score (0-1) per role, in order of first appearance.

    Args:
        observations: Validated observations
        driver_set: Driver set supplying the weights

    Returns:
        Mapping of role id to unrounded raw score
    """
    weights = {d.driver_id: to_decimal(d.weight) for d in driver_set}
    scores: "OrderedDict[str, Decimal]" = OrderedDict()
    for obs in observations:
        contribution = weights[obs.driver_id] * Decimal(obs.score) / MAX_SCORE
        scores[obs.role_id] = scores.get(obs.role_id, ZERO) + contribution
    return scores


def driver_mean_scores(
    observations: Sequence[Observation],
    driver_set: DriverSet,
) -> Dict[str, Tuple[Decimal, int]]:
    """
    Mean ordinal score (0-4) and observation count per driver.

    Drivers without observations get a mean of 0.
    """
    collected: Dict[str, List[int]] = {d.driver_id: [] for d in driver_set}
    for obs in observations:
        collected[obs.driver_id].append(obs.score)
    return {
        driver_id: (mean(values), len(values))
        for driver_id, values in collected.items()
    }


def overall_score(role_percentages: Iterable[float]) -> float:
    """
    Overall MRI from the role percentages placed in the result.

    The mean itself is kept at full precision and rounded once, so
    roles at 48.8 and 62.5 give 55.65, presented as 55.7.

    Returns:
        Rounded mean role percentage, or 0.0 when there are no roles
    """
    percentages = list(role_percentages)
    if not percentages:
        return 0.0
    return round_half_up(mean(percentages))


def select_top_driver(drivers: Sequence[DriverScore]) -> Optional[DriverScore]:
    """Driver with the strictly highest percentage; earliest wins ties."""
    top = None
    for driver in drivers:
        if top is None or driver.percentage > top.percentage:
            top = driver
    return top


def aggregate(
    observations: Iterable[ObservationLike],
    driver_set: DriverSetLike,
) -> AggregateResult:
    """
    Compute the MRI snapshot for one assessment's observations.

    Args:
        observations: Observations or (role_id, driver_id, score) tuples
        driver_set: DriverSet, or driver definitions to build one from

    Returns:
        Immutable AggregateResult

    Raises:
        DriverWeightsInvalidError: If the driver set is invalid
        UnknownDriverError: If an observation references an undefined driver
        ValidationError: On an out-of-range score or duplicate pair
    """
    drivers = as_driver_set(driver_set)
    validated = validate_observations(
        (_coerce_observation(item) for item in observations),
        drivers,
    )

    raw_roles = role_raw_scores(validated, drivers)
    roles = [
        RoleScore(
            role_id=role_id,
            raw_score=float(raw),
            percentage=round_half_up(to_percentage(raw)),
        )
        for role_id, raw in raw_roles.items()
    ]

    driver_means = driver_mean_scores(validated, drivers)
    driver_scores = []
    for definition in drivers:
        avg, count = driver_means[definition.driver_id]
        driver_scores.append(
            DriverScore(
                driver_id=definition.driver_id,
                mean_score=float(avg),
                percentage=round_half_up(to_percentage(avg / MAX_SCORE)),
                observation_count=count,
            )
        )

    top = select_top_driver(driver_scores)

    result = AggregateResult(
        overall_score=overall_score(role.percentage for role in roles),
        roles=roles,
        drivers=driver_scores,
        top_driver_id=top.driver_id if top else None,
        top_driver_percentage=top.percentage if top else None,
    )

    logger.debug(
        f"Aggregated {len(validated)} observations over {len(roles)} roles: "
        f"overall={result.overall_score}"
    )

    return result
