import numpy as np
import pytest
from numpy.testing import assert_almost_equal, assert_array_almost_equal

from ligplot3d.rings import MAX_RING_SIZE, MIN_RING_SIZE, Ring, find_rings, get_adjacency
from ligplot3d.structure import Atom


def to_atoms(coords, element="C", start=0):
    return [
        Atom(start + i, f"{element}{i + 1}", element, *xyz, "LIG", 1, "A", True)
        for i, xyz in enumerate(coords)
    ]


def test_adjacency(make_polygon) -> None:
    atoms = to_atoms(make_polygon(6))
    adjacency = get_adjacency(atoms)
    assert adjacency[0] == [1, 5]
    assert all(len(neighbors) == 2 for neighbors in adjacency)


def test_adjacency_empty() -> None:
    assert get_adjacency([]) == []


def test_hexagon_single_ring(make_polygon) -> None:
    atoms = to_atoms(make_polygon(6))
    rings = find_rings(atoms)
    assert len(rings) == 1
    ring = rings[0]
    assert len(ring.atoms) == 6
    assert ring.indices == (0, 1, 2, 3, 4, 5)
    assert ring.atoms[0].index == 0
    assert_array_almost_equal(ring.centroid, (0, 0, 0))
    assert_almost_equal(abs(ring.normal[2]), 1.0)


def test_pentagon(make_polygon) -> None:
    atoms = to_atoms(make_polygon(5, center=(3, 2, 1)))
    rings = find_rings(atoms)
    assert len(rings) == 1
    assert len(rings[0].atoms) == 5
    assert_array_almost_equal(rings[0].centroid, (3, 2, 1))


def test_fused_rings() -> None:
    dx = 1.4 * np.cos(np.radians(30))
    first = [
        (1.4 * np.cos(np.radians(30 + 60 * k)), 1.4 * np.sin(np.radians(30 + 60 * k)), 0)
        for k in range(6)
    ]
    # second ring shares the edge at x = dx
    second = [(2 * dx - x, y, z) for x, y, z in first if x < dx - 0.1]
    atoms = to_atoms(first + second)
    rings = find_rings(atoms)
    assert len(rings) == 2
    assert all(len(ring.atoms) == 6 for ring in rings)
    assert len({ring.indices for ring in rings}) == 2


def test_ring_without_carbon_or_nitrogen(make_polygon) -> None:
    atoms = to_atoms(make_polygon(6), element="O")
    assert find_rings(atoms) == []


def test_heterocycle(make_polygon) -> None:
    coords = make_polygon(5)
    atoms = [
        Atom(i, name, element, *xyz, "LIG", 1, "A", True)
        for i, ((name, element), xyz) in enumerate(
            zip([("O1", "O"), ("C2", "C"), ("C3", "C"), ("C4", "C"), ("C5", "C")], coords)
        )
    ]
    rings = find_rings(atoms)
    assert len(rings) == 1
    assert rings[0].atoms[0].name == "C2"


@pytest.mark.parametrize(
    "coords",
    [
        [],
        [(0, 0, 0)],
        [(0, 0, 0), (1.4, 0, 0), (2.8, 0, 0), (4.2, 0, 0), (5.6, 0, 0), (7.0, 0, 0)],
        [(0, 0, 0), (10, 0, 0), (20, 0, 0)],
    ],
)
def test_no_ring(coords) -> None:
    assert find_rings(to_atoms(coords)) == []


def test_ring_size_limits(make_polygon) -> None:
    for n in (3, 4, 7, 8):
        rings = find_rings(to_atoms(make_polygon(n)))
        assert all(MIN_RING_SIZE <= len(ring.atoms) <= MAX_RING_SIZE for ring in rings)
        assert rings == []


def test_ring_bond_length(make_polygon) -> None:
    atoms = to_atoms(make_polygon(6, bond=1.8))
    assert find_rings(atoms) == []
    assert len(find_rings(atoms, bond_length=1.9)) == 1


def test_ring_from_atoms(make_polygon) -> None:
    atoms = to_atoms(make_polygon(6, center=(0, 0, 5), plane="xz"), start=10)
    ring = Ring.from_atoms(reversed(atoms))
    assert ring.indices == (10, 11, 12, 13, 14, 15)
    assert ring.atoms[0].index == 15
    assert_array_almost_equal(ring.centroid, (0, 0, 5))
    assert_almost_equal(abs(ring.normal[1]), 1.0)
