"""
Ring perception --- :mod:`ligplot3d.rings`
==========================================

Ligands rarely come with reliable bond orders, so rings are perceived from the
coordinates only: atoms closer than a covalent bond length are connected, and
5 and 6-membered cycles are found with a depth-limited search.

This is not a minimal cycle basis. Fused or bridged systems can be partly
missed, and very dense connectivity can yield overlapping rings.
"""

import logging
from collections.abc import Sequence
from typing import TYPE_CHECKING, NamedTuple

import numpy as np

from ligplot3d.geometry import centroid, plane_normal

if TYPE_CHECKING:
    from numpy.typing import NDArray

    from ligplot3d.structure import Atom

logger = logging.getLogger(__name__)

MIN_RING_SIZE = 5
MAX_RING_SIZE = 6
# covers single and aromatic C-C, C-N and C-O bonds
BOND_LENGTH = 1.65
_RING_START_ELEMENTS = frozenset({"C", "N"})


class Ring(NamedTuple):
    """A ring of atoms with its centroid and the normal vector to its plane

    The normal is the null vector when the ring atoms are collinear.
    """

    atoms: tuple["Atom", ...]
    centroid: "NDArray[np.float64]"
    normal: "NDArray[np.float64]"

    @classmethod
    def from_atoms(cls, atoms: Sequence["Atom"]) -> "Ring":
        """Creates a Ring from atoms given in cycle order"""
        atoms = tuple(atoms)
        coords = [atom.xyz for atom in atoms]
        return cls(atoms, centroid(coords), plane_normal(coords))

    @property
    def indices(self) -> tuple[int, ...]:
        """Sorted atom indices, identical for all traversals of the same ring"""
        return tuple(sorted(atom.index for atom in self.atoms))


def get_adjacency(atoms: Sequence["Atom"], bond_length: float = BOND_LENGTH):
    """Neighbours of each atom, based on interatomic distances only

    Parameters
    ----------
    atoms : list
        List of :class:`~ligplot3d.structure.Atom`
    bond_length : float
        Atoms strictly closer than this distance are considered bonded

    Returns
    -------
    adjacency : list
        For each atom, the list of positions (in ``atoms``) of its neighbours
    """
    if not atoms:
        return []
    xyz = np.array([atom.xyz for atom in atoms], dtype=float)
    dist = np.linalg.norm(xyz[:, None, :] - xyz[None, :, :], axis=-1)
    bonded = dist < bond_length
    np.fill_diagonal(bonded, False)
    return [np.flatnonzero(row).tolist() for row in bonded]


def find_rings(atoms: Sequence["Atom"], bond_length: float = BOND_LENGTH) -> list[Ring]:
    """Finds 5 and 6-membered rings in a ligand

    Parameters
    ----------
    atoms : list
        The :class:`~ligplot3d.structure.Atom` of the ligand only
    bond_length : float
        Distance threshold used to connect atoms

    Returns
    -------
    rings : list
        A list of :class:`Ring`, each ring is reported once regardless of the
        atom and direction from which it was traversed. Atoms of a ring are in
        cycle order, starting with the atom from which it was first found.
    """
    adjacency = get_adjacency(atoms, bond_length)
    rings: list[Ring] = []
    seen: set[tuple[int, ...]] = set()

    def search(start: int, current: int, path: list[int]) -> None:
        if len(path) > MAX_RING_SIZE:
            return
        if len(path) >= MIN_RING_SIZE and start in adjacency[current]:
            key = tuple(sorted(atoms[i].index for i in path))
            if key not in seen:
                seen.add(key)
                rings.append(Ring.from_atoms([atoms[i] for i in path]))
            return
        for neighbor in adjacency[current]:
            if neighbor not in path:
                search(start, neighbor, [*path, neighbor])

    for i, atom in enumerate(atoms):
        if atom.symbol in _RING_START_ELEMENTS:
            search(i, i, [i])
    logger.debug("Found %d ring(s) in %d atoms", len(rings), len(atoms))
    return rings
