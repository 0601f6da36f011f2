"""
Residue-related classes --- :mod:`ligplot3d.residue`
====================================================
"""

import re
from collections import UserDict
from collections.abc import Iterable, Mapping, Sequence
from functools import cached_property
from typing import TYPE_CHECKING, NamedTuple, Optional

import numpy as np

from ligplot3d.constants import (
    AROMATIC_PLANES,
    NEGATIVE_CHARGE_ATOMS,
    POSITIVE_CHARGE_ATOMS,
)
from ligplot3d.geometry import centroid
from ligplot3d.rings import Ring

if TYPE_CHECKING:
    from numpy.typing import NDArray

    from ligplot3d.structure import Atom

_RE_RESID = re.compile(r"([A-Z]{,4})?(-?\d+)?\.?(\w+)?")
# names that don't fit the compact format are separated from the number by ":"
_RE_RESID_SEP = re.compile(r"([^\s:.]+):(-?\d+)?\.?(\w+)?")
_RE_RESNAME = re.compile(r"[A-Z]{,4}")


class ResidueId:
    """A unique residue identifier

    Parameters
    ----------
    name : str
        Residue name
    number : int
        Residue number
    chain : str, optional
        Chain identifier, an empty string if the structure has no chains

    Notes
    -----
    Two identifiers are equal only if their name, number and chain are all
    equal. Sorting follows the chain first, then the residue number.
    """

    def __init__(self, name: str = "UNK", number: int = 0, chain: Optional[str] = None):
        self.name = name or "UNK"
        self.number = number or 0
        self.chain = chain or ""

    def __repr__(self) -> str:
        return f"ResidueId({self.name}, {self.number}, {self.chain})"

    def __str__(self) -> str:
        sep = "" if _RE_RESNAME.fullmatch(self.name) else ":"
        resid = f"{self.name}{sep}{self.number}"
        if self.chain:
            resid += f".{self.chain}"
        return resid

    def __hash__(self) -> int:
        return hash((self.name, self.number, self.chain))

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, ResidueId):
            return NotImplemented
        return (self.name, self.number, self.chain) == (
            other.name,
            other.number,
            other.chain,
        )

    def __lt__(self, other: "ResidueId") -> bool:
        return (self.chain, self.number) < (other.chain, other.number)

    @classmethod
    def from_atom(cls, atom: "Atom") -> "ResidueId":
        """Creates a ResidueId from an :class:`~ligplot3d.structure.Atom`"""
        return cls(atom.resname, atom.resnumber, atom.chain)

    @classmethod
    def from_string(cls, resid_str: str) -> "ResidueId":
        """Creates a ResidueId from a string

        Parameters
        ----------
        resid_str : str
            A string in the format ``<residue name><residue number>.<chain>``
            All arguments are optional, and the dot should be present only if
            the chain identifier is also present. Residue names are made of up
            to 4 uppercase letters, other names (lowercase, digits, longer
            names) must be followed by a colon as in ``"001:1.A"``, which is
            how :meth:`__str__` writes them.

        Examples
        --------

        +-----------+----------------------------------+
        | string    | Corresponding ResidueId          |
        +===========+==================================+
        | "ALA10.A" | ``ResidueId("ALA", 10, "A")``    |
        +-----------+----------------------------------+
        | "GLU33"   | ``ResidueId("GLU", 33, "")``     |
        +-----------+----------------------------------+
        | "LYS.B"   | ``ResidueId("LYS", 0, "B")``     |
        +-----------+----------------------------------+
        | "5.C"     | ``ResidueId("UNK", 5, "C")``     |
        +-----------+----------------------------------+
        | ""        | ``ResidueId("UNK", 0, "")``      |
        +-----------+----------------------------------+
        | "001:1.A" | ``ResidueId("001", 1, "A")``     |
        +-----------+----------------------------------+

        """
        resid_str = resid_str.strip()
        matches = _RE_RESID_SEP.match(resid_str) or _RE_RESID.match(resid_str)
        name, number, chain = matches.groups()
        number = int(number) if number else 0
        return cls(name, number, chain)


class ResidueOption(NamedTuple):
    """A residue that can be selected as the ligand"""

    name: str
    number: int
    chain: str
    atom_count: int

    @property
    def resid(self) -> ResidueId:
        return ResidueId(self.name, self.number, self.chain)

    def __str__(self) -> str:
        return str(self.resid)


class ChargeCenter(NamedTuple):
    """Centroid of the charged atoms of a residue, and the first of these atoms
    which represents the group"""

    center: "NDArray[np.float64]"
    atom: "Atom"


class Residue:
    """Atoms of a single residue

    Parameters
    ----------
    atoms : iterable
        The :class:`~ligplot3d.structure.Atom` of the residue, in structure order.
        The residue identifier is taken from the first atom.

    Attributes
    ----------
    resid : ligplot3d.residue.ResidueId
        The residue identifier
    atoms : tuple
        The atoms of the residue
    """

    def __init__(self, atoms: Iterable["Atom"]):
        self.atoms = tuple(atoms)
        if not self.atoms:
            raise ValueError("A residue must contain at least one atom")
        self.resid = ResidueId.from_atom(self.atoms[0])

    def __repr__(self):  # pragma: no cover
        name = ".".join([self.__class__.__module__, self.__class__.__name__])
        return f"<{name} {self.resid} at {id(self):#x}>"

    def __str__(self) -> str:
        return str(self.resid)

    def __len__(self) -> int:
        return len(self.atoms)

    @property
    def is_hetero(self) -> bool:
        return self.atoms[0].is_hetero

    def select_atoms(self, names: Sequence[str]) -> tuple["Atom", ...]:
        """Atoms whose name is in ``names``, in residue order"""
        return tuple(atom for atom in self.atoms if atom.name in names)

    @cached_property
    def aromatic_ring(self) -> Optional[Ring]:
        """Ring formed by the aromatic side chain atoms, if the residue is aromatic
        and at least 3 of these atoms are present"""
        names = AROMATIC_PLANES.get(self.resid.name)
        if names is None:
            return None
        atoms = self.select_atoms(names)
        if len(atoms) < 3:
            return None
        return Ring.from_atoms(atoms)

    @cached_property
    def positive_center(self) -> Optional[ChargeCenter]:
        return self._charge_center(POSITIVE_CHARGE_ATOMS)

    @cached_property
    def negative_center(self) -> Optional[ChargeCenter]:
        return self._charge_center(NEGATIVE_CHARGE_ATOMS)

    def _charge_center(
        self, table: Mapping[str, Sequence[str]]
    ) -> Optional[ChargeCenter]:
        names = table.get(self.resid.name)
        if names is None:
            return None
        atoms = self.select_atoms(names)
        if not atoms:
            return None
        return ChargeCenter(centroid([atom.xyz for atom in atoms]), atoms[0])


class ResidueGroup(UserDict):
    """Residues indexed by their :class:`ResidueId`, in the order they were given

    Residues can also be retrieved with a string such as ``"ALA10.A"`` (see
    :meth:`ResidueId.from_string`) or by their position in the group.
    """

    def __init__(self, residues: Sequence[Residue]):
        super().__init__((r.resid, r) for r in residues)
        self._ordered = tuple(self.data.values())

    def __getitem__(self, key):
        # bool is a subclass of int but shouldn't be used here
        if isinstance(key, bool):
            raise KeyError(
                f"Expected a ResidueId, int, or str, got {type(key).__name__!r} instead"
            )
        if isinstance(key, int):
            return self._ordered[key]
        elif isinstance(key, str):
            return self.data[ResidueId.from_string(key)]
        elif isinstance(key, ResidueId):
            return self.data[key]
        raise KeyError(
            f"Expected a ResidueId, int, or str, got {type(key).__name__!r} instead"
        )

    def __repr__(self):  # pragma: no cover
        name = ".".join([self.__class__.__module__, self.__class__.__name__])
        return f"<{name} with {len(self)} residues at {id(self):#x}>"
