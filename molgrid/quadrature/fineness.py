"""Resolution tiers of the molecular integration grid.

Each tier fixes the number of radial shells per atom and the order of the
Lebedev rule used on every shell:

    tier        radial points (H, He)   Lebedev order   angular points
    COARSE      20                      11              50
    MEDIUM      35                      17              110
    FINE        50                      23              194
    ULTRAFINE   75                      29              302

Atoms beyond the first period get RADIAL_POINTS_PER_PERIOD extra radial
points for every additional period.
"""

import dataclasses
import enum


class Fineness(enum.Enum):
    """The resolution of the numerical integration."""

    COARSE = 0
    MEDIUM = 1
    FINE = 2
    ULTRAFINE = 3


@dataclasses.dataclass(frozen=True)
class QuadratureSettings:
    # Number of radial points for a first period atom.
    n_radial: int

    # Degree of the Lebedev rule. Spherical harmonics up to this degree are
    # integrated exactly.
    lebedev_order: int


FINENESS_SETTINGS: dict[Fineness, QuadratureSettings] = {
    Fineness.COARSE: QuadratureSettings(n_radial=20, lebedev_order=11),
    Fineness.MEDIUM: QuadratureSettings(n_radial=35, lebedev_order=17),
    Fineness.FINE: QuadratureSettings(n_radial=50, lebedev_order=23),
    Fineness.ULTRAFINE: QuadratureSettings(n_radial=75, lebedev_order=29),
}

RADIAL_POINTS_PER_PERIOD = 5

# The last atomic number of each period.
_PERIOD_ENDS = (2, 10, 18, 36, 54, 86, 118)


def period(number: int) -> int:
    """The period (row) of the periodic table containing an element."""
    for row, end in enumerate(_PERIOD_ENDS, start=1):
        if number <= end:
            return row
    raise ValueError(f"Unknown element with atomic number {number}.")


def get_settings(fineness: Fineness) -> QuadratureSettings:
    if not isinstance(fineness, Fineness):
        raise TypeError(
            f"Expected fineness of type Fineness, got {type(fineness)}"
        )
    return FINENESS_SETTINGS[fineness]


def radial_point_count(fineness: Fineness, number: int) -> int:
    """The number of radial points for an element at a given fineness."""
    extra_periods = period(number) - 1
    return (
        get_settings(fineness).n_radial
        + RADIAL_POINTS_PER_PERIOD * extra_periods
    )
