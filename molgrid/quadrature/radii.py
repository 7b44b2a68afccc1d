import numpy as np

from molgrid.structure import units

# Bragg-Slater radii in Angstrom for Z = 1..36. Hydrogen uses the 0.35
# Angstrom value from Becke's paper; the noble gases, which have no
# Bragg-Slater radius, use the values adopted by common DFT codes.
BRAGG_SLATER_RADII = np.array(
    [
        0.35, 1.40,
        1.45, 1.05, 0.85, 0.70, 0.65, 0.60, 0.50, 1.50,
        1.80, 1.50, 1.25, 1.10, 1.00, 1.00, 1.00, 1.80,
        2.20, 1.80,
        1.60, 1.40, 1.35, 1.40, 1.40, 1.40, 1.35, 1.35, 1.35, 1.35,
        1.30, 1.25, 1.15, 1.15, 1.15, 1.90,
    ]
)


def bragg_slater_radius(number: int) -> float:
    """The Bragg-Slater radius of an element in Bohr."""
    if not 1 <= number <= BRAGG_SLATER_RADII.shape[0]:
        raise ValueError(
            f"No Bragg-Slater radius for atomic number {number}. "
            f"Supported elements are Z = 1..{BRAGG_SLATER_RADII.shape[0]}."
        )
    return float(BRAGG_SLATER_RADII[number - 1] * units.ANGSTROM_TO_BOHR)


def radial_scale(number: int) -> float:
    """The midpoint r_m of the radial mapping in Bohr.

    Half of the Bragg-Slater radius, except for hydrogen which uses the full
    radius.
    """
    radius = bragg_slater_radius(number)
    if number == 1:
        return radius
    return 0.5 * radius
