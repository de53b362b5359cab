"""
Methodology versions for housing and storage ammonia.

Two equation sets are in use for how TAN moves from housing into storage:

- v1: a constant per-head daily loss derived from the yearly TAN excretion
  rate. No carry-over between days and no temperature adjustment.
- v2: TAN entering storage on day n is the TAN excreted on days n and n-1
  less the ammonia lost in housing on day n-1, and storage losses are
  scaled by the month's mean temperature.

Neither is treated as a correction of the other; callers pick one.
"""

from dataclasses import dataclass
from enum import Enum

from farmghg.core.config import settings
from farmghg.emissions import equations
from farmghg.emissions.records import CarryOverState


class MethodologyVersion(Enum):
    V1 = "v1"
    V2 = "v2"

    @classmethod
    def from_settings(cls) -> "MethodologyVersion":
        return cls(settings.methodology_version)

    @classmethod
    def resolve(cls, value: "MethodologyVersion | str | None") -> "MethodologyVersion":
        """Accept an enum member, its value, or None for the configured default."""
        if value is None:
            return cls.from_settings()
        if isinstance(value, cls):
            return value
        return cls(value)


@dataclass(frozen=True)
class StorageAmmonia:
    tan_entering_storage: float  # kg TAN
    temperature_factor: float
    ammonia_lost_from_storage: float  # kg NH3-N


def storage_ammonia(
    methodology: MethodologyVersion,
    tan_excretion: float,
    tan_excretion_rate: float,
    number_of_animals: float,
    storage_emission_factor: float,
    temperature: float,
    previous: CarryOverState | None,
) -> StorageAmmonia:
    """
    Ammonia lost from manure storage on one day.

    Args:
        methodology: Equation set to use
        tan_excretion: TAN excreted by the group today (kg)
        tan_excretion_rate: TAN excretion rate (kg/head/day)
        number_of_animals: Head count
        storage_emission_factor: Fraction of TAN lost as NH3-N in storage
        temperature: Mean temperature of the month (°C)
        previous: Carry-over from the previous day, None on the first day
    """
    if methodology is MethodologyVersion.V1:
        loss = tan_excretion_rate * storage_emission_factor * number_of_animals
        return StorageAmmonia(
            tan_entering_storage=tan_excretion,
            temperature_factor=1.0,
            ammonia_lost_from_storage=max(0.0, loss),
        )

    entering = tan_excretion
    if previous is not None:
        entering += previous.tan_excretion - previous.ammonia_concentration_in_housing
    entering = max(0.0, entering)

    factor = equations.storage_temperature_factor(temperature)
    return StorageAmmonia(
        tan_entering_storage=entering,
        temperature_factor=factor,
        ammonia_lost_from_storage=entering * storage_emission_factor * factor,
    )
