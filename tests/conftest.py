from collections.abc import Sequence
from math import cos, radians, sin
from typing import Callable

import pytest

from ligplot3d.structure import Atom, Structure

Coordinates = tuple[float, float, float]


class StructureBuilder:
    """Creates synthetic structures atom by atom, with unique indices"""

    def __init__(self) -> None:
        self.atoms: list[Atom] = []

    def add(
        self,
        name: str,
        element: str,
        xyz: Sequence[float],
        resname: str,
        resnumber: int,
        chain: str = "A",
        hetero: bool = False,
    ) -> Atom:
        x, y, z = (float(v) for v in xyz)
        atom = Atom(
            len(self.atoms), name, element, x, y, z, resname, resnumber, chain, hetero
        )
        self.atoms.append(atom)
        return atom

    def add_ligand(
        self,
        atoms: Sequence[tuple[str, str, Sequence[float]]],
        resname: str = "LIG",
        resnumber: int = 1,
        chain: str = "A",
    ) -> list[Atom]:
        return [
            self.add(name, element, xyz, resname, resnumber, chain, hetero=True)
            for name, element, xyz in atoms
        ]

    def add_residue(
        self,
        resname: str,
        resnumber: int,
        atoms: Sequence[tuple[str, str, Sequence[float]]],
        chain: str = "A",
        hetero: bool = False,
    ) -> list[Atom]:
        return [
            self.add(name, element, xyz, resname, resnumber, chain, hetero)
            for name, element, xyz in atoms
        ]

    def build(self) -> Structure:
        return Structure(self.atoms)


def polygon(
    n: int,
    bond: float = 1.4,
    center: Sequence[float] = (0.0, 0.0, 0.0),
    plane: str = "xy",
    phase: float = 0.0,
) -> list[Coordinates]:
    """Vertices of a regular polygon with the given edge length, in cycle order"""
    radius = bond / (2 * sin(radians(180 / n)))
    cx, cy, cz = center
    points = []
    for k in range(n):
        a = radians(phase + 360 * k / n)
        u, v = radius * cos(a), radius * sin(a)
        if plane == "xy":
            points.append((cx + u, cy + v, cz))
        elif plane == "xz":
            points.append((cx + u, cy, cz + v))
        else:
            points.append((cx, cy + u, cz + v))
    return points


@pytest.fixture
def builder() -> StructureBuilder:
    return StructureBuilder()


@pytest.fixture(scope="session")
def make_polygon() -> Callable[..., list[Coordinates]]:
    return polygon


@pytest.fixture
def benzene_atoms(make_polygon) -> list[tuple[str, str, Coordinates]]:
    """Ligand benzene centered on the origin, in the XY plane"""
    return [(f"C{i + 1}", "C", xyz) for i, xyz in enumerate(make_polygon(6))]


@pytest.fixture
def phe_atoms(make_polygon) -> Callable[..., list[tuple[str, str, Coordinates]]]:
    """Side chain ring of a phenylalanine, with atoms in PDB order"""

    def make(center=(0.0, 0.0, 3.8), plane="xy"):
        ring = make_polygon(6, center=center, plane=plane)
        # CG, CD1, CD2, CE1, CE2, CZ around the ring
        order = {"CG": 0, "CD1": 1, "CD2": 5, "CE1": 2, "CE2": 4, "CZ": 3}
        return [(name, "C", ring[k]) for name, k in order.items()]

    return make


@pytest.fixture
def simple_structure(builder: StructureBuilder) -> Structure:
    """A ligand oxygen hydrogen bonded to a backbone nitrogen, with a water"""
    builder.add_ligand([("O1", "O", (0, 0, 0))], resnumber=101)
    builder.add_residue("ALA", 1, [("N", "N", (0, 0, 3)), ("CA", "C", (0, 1.4, 3.5))])
    builder.add_residue("HOH", 201, [("O", "O", (0, 0, -2.8))], hetero=True)
    return builder.build()


def pdb_line(record, serial, name, resname, chain, resnumber, xyz, element):
    name = f" {name:<3}" if len(name) < 4 else name
    x, y, z = xyz
    return (
        f"{record:<6}{serial:>5} {name} {resname:>3} {chain}{resnumber:>4}    "
        f"{x:>8.3f}{y:>8.3f}{z:>8.3f}{1.0:>6.2f}{0.0:>6.2f}          {element:>2}"
    )


PDB_ATOMS = [
    ("ATOM", "N", "ALA", "A", 1, (0.0, 0.0, 3.0), "N"),
    ("ATOM", "CA", "ALA", "A", 1, (0.0, 1.4, 3.5), "C"),
    ("HETATM", "O1", "LIG", "A", 101, (0.0, 0.0, 0.0), "O"),
    ("HETATM", "C1", "LIG", "A", 101, (1.4, 0.0, 0.0), "C"),
    ("HETATM", "O", "HOH", "A", 201, (0.0, 0.0, -2.8), "O"),
]


@pytest.fixture
def pdb_file(tmp_path):
    """PDB file of a small complex, with the ligand LIG101.A"""
    lines = [pdb_line(rec, i + 1, *rest) for i, (rec, *rest) in enumerate(PDB_ATOMS)]
    path = tmp_path / "complex.pdb"
    path.write_text("\n".join([*lines, "END", ""]))
    return path
