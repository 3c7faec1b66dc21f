"""
MRI Driver Sets
===============

Weighted risk driver reference data.

A driver set is loaded once and passed explicitly into every calculation.
Its weights are checked at construction; the aggregator re-checks them
before computing so that a set built around validation is still refused.

Usage:
    from mri.scoring.drivers import DriverSet, load_default_driver_set

    drivers = load_default_driver_set()
    drivers.weight("sitting")   # 0.25

Author: MRI Team
Version: 1.0.0
"""

import logging
from dataclasses import dataclass, field
from decimal import Decimal
from typing import Dict, Iterable, Iterator, Optional, Sequence, Tuple, Union

from shared.schemas.assessments import DriverDefinition
from mri.config import Settings, settings as default_settings
from mri.exceptions import DriverWeightsInvalidError
from mri.scoring.precision import ONE, ZERO, to_decimal


logger = logging.getLogger(__name__)


DEFAULT_DRIVER_NAMES = {
    "sitting": "Sustained sitting",
    "movement": "Movement",
    "upper_limb": "Upper limb",
    "neck": "Neck",
    "work_organisation": "Work organisation",
    "workstation": "Workstation",
}


def max_weight_tolerance(places: Optional[int] = None) -> Decimal:
    """
    Largest admissible weight tolerance, exclusive.

    Half a presentation unit of a role percentage, so a role scored 4 on
    every driver never shows above 100.0 (5e-4 at one decimal).
    """
    if places is None:
        places = default_settings.score_decimal_places
    return Decimal(5).scaleb(-(places + 3))


@dataclass(frozen=True)
class DriverSet:
    """
    Ordered, immutable collection of weighted drivers.

    Definition order is significant: it is the display order and breaks
    ties between equally scored drivers.

    Attributes:
        definitions: Driver definitions in display order
        tolerance: Allowed deviation of the weight sum from 1.0
    """

    definitions: Tuple[DriverDefinition, ...]
    tolerance: float = field(default_factory=lambda: default_settings.driver_weight_tolerance)

    def __post_init__(self):
        object.__setattr__(self, "definitions", tuple(self.definitions))
        self.ensure_valid()

    @classmethod
    def from_weights(
        cls,
        weights: Dict[str, float],
        names: Optional[Dict[str, str]] = None,
        tolerance: Optional[float] = None,
    ) -> "DriverSet":
        """Build a driver set from an ordered {driver_id: weight} mapping."""
        names = names or {}
        definitions = tuple(
            DriverDefinition(driver_id=driver_id, name=names.get(driver_id, driver_id), weight=weight)
            for driver_id, weight in weights.items()
        )
        if tolerance is None:
            return cls(definitions)
        return cls(definitions, tolerance=tolerance)

    def ensure_valid(self) -> None:
        """
        Check the weight invariants.

        Raises:
            DriverWeightsInvalidError: On a tolerance outside
                [0, max_weight_tolerance()), duplicate ids, a weight outside
                (0, 1], or a weight sum further than tolerance from 1.0
        """
        limit = max_weight_tolerance()
        if not ZERO <= to_decimal(self.tolerance) < limit:
            raise DriverWeightsInvalidError(
                f"Weight tolerance {self.tolerance} outside [0, {limit})"
            )

        seen = set()
        for definition in self.definitions:
            if definition.driver_id in seen:
                raise DriverWeightsInvalidError(
                    f"Duplicate driver id: {definition.driver_id}"
                )
            seen.add(definition.driver_id)
            if not 0.0 < definition.weight <= 1.0:
                raise DriverWeightsInvalidError(
                    f"Driver {definition.driver_id} weight {definition.weight} "
                    f"outside (0, 1]"
                )

        # An empty set is permitted and produces empty breakdowns.
        if not self.definitions:
            return

        total = self.total_weight
        if abs(total - ONE) > to_decimal(self.tolerance):
            logger.warning(f"Rejected driver set with weight sum {total}")
            raise DriverWeightsInvalidError(
                f"Driver weights sum to {total}, expected 1.0",
                total_weight=float(total),
            )

    @property
    def total_weight(self) -> Decimal:
        return sum((to_decimal(d.weight) for d in self.definitions), ZERO)

    @property
    def driver_ids(self) -> Tuple[str, ...]:
        return tuple(d.driver_id for d in self.definitions)

    def __contains__(self, driver_id: object) -> bool:
        return any(d.driver_id == driver_id for d in self.definitions)

    def __iter__(self) -> Iterator[DriverDefinition]:
        return iter(self.definitions)

    def __len__(self) -> int:
        return len(self.definitions)

    def get(self, driver_id: str) -> Optional[DriverDefinition]:
        for definition in self.definitions:
            if definition.driver_id == driver_id:
                return definition
        return None

    def weight(self, driver_id: str) -> float:
        """Weight of a driver; KeyError if it is not defined."""
        definition = self.get(driver_id)
        if definition is None:
            raise KeyError(driver_id)
        return definition.weight


DriverSetLike = Union[DriverSet, Sequence[DriverDefinition], Iterable[DriverDefinition]]


def as_driver_set(drivers: DriverSetLike) -> DriverSet:
    """Return drivers as a validated DriverSet."""
    if isinstance(drivers, DriverSet):
        drivers.ensure_valid()
        return drivers
    return DriverSet(tuple(drivers))


def load_default_driver_set(settings: Optional[Settings] = None) -> DriverSet:
    """
    Build the reference driver set from configured weights.

    Args:
        settings: Settings to read weights from (defaults to global settings)

    Returns:
        Validated DriverSet in display order
    """
    settings = settings or default_settings
    return DriverSet.from_weights(
        settings.default_driver_weights,
        names=DEFAULT_DRIVER_NAMES,
        tolerance=settings.driver_weight_tolerance,
    )
