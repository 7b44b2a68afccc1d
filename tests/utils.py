import numpy as np

import molgrid as mg

# STO-3G hydrogen 1s shell.
STO3G_H_EXPONENTS = np.array([3.425250914, 0.6239137298, 0.1688554040])
STO3G_H_COEFFICIENTS = np.array([0.1543289673, 0.5353281423, 0.4446345422])


def sto3g_h_shell() -> mg.ContractedGTO:
    return mg.ContractedGTO(
        primitive_type=mg.PrimitiveType.CARTESIAN,
        angular_momentum=(0,),
        exponents=STO3G_H_EXPONENTS,
        coefficients=STO3G_H_COEFFICIENTS[None, :],
    )


def hydrogen(position) -> mg.Atom:
    return mg.Atom(
        symbol="H",
        number=1,
        position=np.asarray(position, dtype=np.float64),
        shells=[sto3g_h_shell()],
    )


def h2_molecule(distance: float) -> mg.Molecule:
    return mg.Molecule(
        atoms=[
            hydrogen([0.0, 0.0, 0.0]),
            hydrogen([0.0, 0.0, distance]),
        ]
    )


def s_overlap(
    exponents: np.ndarray, coefficients: np.ndarray, distance: float
) -> float:
    """Overlap of two contracted, normalized s functions a distance apart.

    <g_a|g_b> = (pi / (a + b))^(3/2) exp(-ab / (a + b) R^2) for unnormalized
    primitives, and each primitive is normalized by (2a / pi)^(3/4).
    """
    a = exponents[:, None]
    b = exponents[None, :]
    norms = (2.0 * exponents / np.pi) ** 0.75
    primitive_overlaps = (np.pi / (a + b)) ** 1.5 * np.exp(
        -a * b / (a + b) * distance**2
    )
    c = coefficients * norms
    return float(c @ primitive_overlaps @ c)


def h2_bonding_density(distance: float) -> np.ndarray:
    """Closed shell density matrix of the H2 sigma_g orbital in STO-3G.

    The matrix holds two electrons, one per atom.
    """
    S_aa = s_overlap(STO3G_H_EXPONENTS, STO3G_H_COEFFICIENTS, 0.0)
    S_ab = s_overlap(STO3G_H_EXPONENTS, STO3G_H_COEFFICIENTS, distance)
    c = np.ones(2) / np.sqrt(2.0 * S_aa + 2.0 * S_ab)
    return 2.0 * np.outer(c, c)
