import dataclasses
import pytest

import numpy as np

from molgrid.grid import becke


@dataclasses.dataclass
class _PartitionTestCase:
    centers: np.ndarray  # shape (n_atoms, 3)
    points: np.ndarray  # shape (n_points, 3)


def _random_points(n_points: int, seed: int) -> np.ndarray:
    rng = np.random.default_rng(seed)
    return rng.uniform(-4.0, 4.0, size=(n_points, 3))


_PARTITION_CASES = [
    # Homonuclear diatomic.
    _PartitionTestCase(
        centers=np.array([[0.0, 0.0, 0.0], [0.0, 0.0, 1.4]]),
        points=_random_points(200, seed=0),
    ),
    # Bent triatomic.
    _PartitionTestCase(
        centers=np.array(
            [[0.0, 0.0, 0.0], [1.43, 1.11, 0.0], [-1.43, 1.11, 0.0]]
        ),
        points=_random_points(200, seed=1),
    ),
    # Tetrahedron.
    _PartitionTestCase(
        centers=np.array(
            [
                [1.0, 1.0, 1.0],
                [1.0, -1.0, -1.0],
                [-1.0, 1.0, -1.0],
                [-1.0, -1.0, 1.0],
            ]
        ),
        points=_random_points(200, seed=2),
    ),
]


@pytest.mark.parametrize("k", [1, 2, 3])
def test_smoothing_polynomial_fixed_points(k):
    mu = np.array([-1.0, 0.0, 1.0])

    np.testing.assert_allclose(
        becke.smoothing_polynomial(mu, k), [-1.0, 0.0, 1.0], atol=1e-15
    )


def test_smoothing_polynomial_iterates():
    mu = np.linspace(-1.0, 1.0, 21)
    f1 = 0.5 * (3.0 * mu - mu**3)
    f2 = 0.5 * (3.0 * f1 - f1**3)
    f3 = 0.5 * (3.0 * f2 - f2**3)

    np.testing.assert_allclose(becke.smoothing_polynomial(mu, 1), f1)
    np.testing.assert_allclose(becke.smoothing_polynomial(mu, 3), f3)
    np.testing.assert_allclose(becke.smoothing_polynomial(mu), f3)


def test_smoothing_polynomial_is_odd_and_bounded():
    mu = np.linspace(-1.0, 1.0, 101)
    f = np.asarray(becke.smoothing_polynomial(mu))

    np.testing.assert_allclose(f, -f[::-1], atol=1e-15)
    assert np.all(np.abs(f) <= 1.0 + 1e-15)
    # f_k is increasing on [-1, 1].
    assert np.all(np.diff(f) >= 0.0)


def test_cutoff():
    np.testing.assert_allclose(
        becke.cutoff(np.array([-1.0, 0.0, 1.0])), [1.0, 0.5, 0.0], atol=1e-15
    )


@pytest.mark.parametrize("case", _PARTITION_CASES)
def test_partition_of_unity(case: _PartitionTestCase):
    weights = np.asarray(becke.partition_weights(case.points, case.centers))

    assert weights.shape == (case.points.shape[0], case.centers.shape[0])
    assert np.all(weights >= 0.0)
    np.testing.assert_allclose(np.sum(weights, axis=-1), 1.0, atol=1e-10)


@pytest.mark.parametrize("case", _PARTITION_CASES)
def test_partition_at_nuclei(case: _PartitionTestCase):
    # At atom i, mu_ij = -1 for all j so P_i = 1.
    weights = np.asarray(becke.partition_weights(case.centers, case.centers))

    np.testing.assert_allclose(
        weights, np.eye(case.centers.shape[0]), atol=1e-14
    )


def test_partition_midpoint():
    centers = np.array([[0.0, 0.0, 0.0], [0.0, 0.0, 1.4]])
    # The bisecting plane of the bond.
    points = np.array(
        [[0.0, 0.0, 0.7], [1.0, 0.0, 0.7], [-3.0, 2.0, 0.7]]
    )

    weights = np.asarray(becke.partition_weights(points, centers))

    np.testing.assert_array_equal(weights, np.full((3, 2), 0.5))


def test_single_atom_partition_is_one():
    centers = np.array([[0.5, -0.5, 1.0]])
    points = _random_points(50, seed=3)

    cells = np.asarray(becke.cell_functions(points, centers))
    weights = np.asarray(becke.partition_weights(points, centers))

    np.testing.assert_array_equal(cells, np.ones((50, 1)))
    np.testing.assert_array_equal(weights, np.ones((50, 1)))


def test_cell_functions_two_atoms():
    centers = np.array([[0.0, 0.0, 0.0], [2.0, 0.0, 0.0]])
    points = np.array([[0.5, 0.0, 0.0]])
    # d_0 = 0.5, d_1 = 1.5, mu_01 = -0.5, mu_10 = 0.5
    expected = np.array(
        [[float(becke.cutoff(-0.5)), float(becke.cutoff(0.5))]]
    )

    cells = np.asarray(becke.cell_functions(points, centers))

    np.testing.assert_allclose(cells, expected)
    np.testing.assert_allclose(np.sum(cells), 1.0)


def test_atomic_partition_selects_owner():
    centers = _PARTITION_CASES[1].centers
    points = _PARTITION_CASES[1].points
    owners = np.arange(points.shape[0]) % centers.shape[0]

    factors = becke.atomic_partition(points, centers, owners)
    weights = np.asarray(becke.partition_weights(points, centers))

    assert factors.shape == (points.shape[0],)
    np.testing.assert_allclose(
        factors, weights[np.arange(points.shape[0]), owners]
    )


@pytest.mark.parametrize("batch_size", [1, 7, 64])
def test_atomic_partition_batching(batch_size: int):
    centers = _PARTITION_CASES[2].centers
    points = _random_points(150, seed=5)
    owners = np.arange(points.shape[0]) % centers.shape[0]

    batched = becke.atomic_partition(
        points, centers, owners, batch_size=batch_size
    )
    unbatched = becke.atomic_partition(
        points, centers, owners, batch_size=points.shape[0]
    )

    np.testing.assert_allclose(batched, unbatched, rtol=1e-12, atol=1e-300)


@pytest.mark.parametrize("batch_size", [1, 16, 1000])
def test_cell_functions_batching(batch_size: int):
    centers = _PARTITION_CASES[1].centers
    points = _random_points(50, seed=6)

    batched = np.asarray(
        becke.cell_functions(points, centers, batch_size=batch_size)
    )
    unbatched = np.asarray(
        becke.cell_functions(points, centers, batch_size=points.shape[0])
    )

    np.testing.assert_allclose(batched, unbatched, rtol=1e-12, atol=1e-300)


def test_atomic_partition_many_atoms():
    # A zigzag chain of 40 atoms.
    n_atoms = 40
    centers = np.zeros((n_atoms, 3))
    centers[:, 0] = 1.2 * np.arange(n_atoms)
    centers[1::2, 1] = 0.8
    points = _random_points(300, seed=7)
    points[:, 0] += 20.0

    total = np.zeros(points.shape[0])
    for owner in range(n_atoms):
        total += becke.atomic_partition(
            points, centers, np.full(points.shape[0], owner), batch_size=32
        )

    np.testing.assert_allclose(total, 1.0, rtol=1e-10)
