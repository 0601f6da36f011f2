"""
Reading structures --- :mod:`ligplot3d.structure`
=================================================

The analysis works on plain :class:`Atom` records copied once from the library
that parsed the file (MDAnalysis, RDKit, or the mmCIF reader in
:mod:`ligplot3d.io.cif`). A :class:`Structure` is an immutable snapshot of these
atoms, so several analyses can safely share it.
"""

from collections.abc import Iterable, Iterator
from typing import TYPE_CHECKING, Any, NamedTuple, Optional

import numpy as np
from MDAnalysis.exceptions import NoDataError
from rdkit import Chem

from ligplot3d.constants import STANDARD_RESIDUES
from ligplot3d.residue import Residue, ResidueGroup, ResidueId
from ligplot3d.utils import catch_warning

if TYPE_CHECKING:
    from numpy.typing import NDArray

    from ligplot3d.typeshed import MDAObject, ResidueKey


class Atom(NamedTuple):
    """An atom with its residue information

    ``index`` is unique within a structure. Elements are stored as found in the
    input file, :attr:`symbol` should be used for comparisons.
    """

    index: int
    name: str
    element: str
    x: float
    y: float
    z: float
    resname: str
    resnumber: int
    chain: str
    is_hetero: bool

    @property
    def symbol(self) -> str:
        """Uppercase element symbol"""
        return self.element.strip().upper()

    @property
    def xyz(self) -> "NDArray[np.float64]":
        return np.array((self.x, self.y, self.z), dtype=float)

    @property
    def resid(self) -> ResidueId:
        return ResidueId(self.resname, self.resnumber, self.chain)

    def to_dict(self) -> dict[str, Any]:
        return self._asdict()


class Structure:
    """Immutable collection of atoms grouped in residues

    Parameters
    ----------
    atoms : iterable
        The :class:`Atom` of the structure, in file order

    Attributes
    ----------
    atoms : tuple
        All atoms, in file order
    residues : ligplot3d.residue.ResidueGroup
        Residues sorted by chain then residue number. Residues sharing the same
        chain and number keep their order of appearance in the file. This is
        the traversal order used by the ligand lookup functions.

    Examples
    --------
    ::

        >>> import MDAnalysis as mda
        >>> u = mda.Universe("complex.pdb")
        >>> structure = ligplot3d.Structure.from_mda(u)
        >>> structure["LIG1.A"]
        <ligplot3d.residue.Residue LIG1.A at 0x7f9a68719ac0>

    """

    def __init__(self, atoms: Iterable[Atom]):
        self.atoms = tuple(atoms)
        groups: dict[tuple[str, int, str], list[Atom]] = {}
        for atom in self.atoms:
            key = (atom.chain, atom.resnumber, atom.resname)
            groups.setdefault(key, []).append(atom)
        residues = sorted(
            (Residue(group) for group in groups.values()),
            key=lambda res: (res.resid.chain, res.resid.number),
        )
        self.residues = ResidueGroup(residues)

    def __iter__(self) -> Iterator[Residue]:
        yield from self.residues.values()

    def __getitem__(self, key: "ResidueKey") -> Residue:
        return self.residues[key]

    def __len__(self) -> int:
        return len(self.atoms)

    def __repr__(self) -> str:  # pragma: no cover
        name = ".".join([self.__class__.__module__, self.__class__.__name__])
        params = f"{self.n_residues} residues and {len(self.atoms)} atoms"
        return f"<{name} with {params} at {id(self):#x}>"

    @property
    def n_residues(self) -> int:
        return len(self.residues)

    @classmethod
    def from_mda(
        cls, obj: "MDAObject", selection: Optional[str] = None
    ) -> "Structure":
        """Creates a Structure from an MDAnalysis object

        Parameters
        ----------
        obj : MDAnalysis.core.universe.Universe or MDAnalysis.core.groups.AtomGroup
            The MDAnalysis object to convert. Coordinates of the current frame
            are used.
        selection : None or str
            Apply a selection to `obj` to create an AtomGroup. Uses all atoms
            in `obj` if ``selection=None``

        Notes
        -----
        Elements are guessed from the atom names when the topology has none.
        The hetero flag comes from the PDB record type when available, otherwise
        any residue that isn't a standard amino acid or nucleotide is flagged as
        hetero. Chains are empty when the topology has no chain identifiers.
        """
        ag = obj.select_atoms(selection) if selection else obj.atoms
        n_atoms = ag.n_atoms
        try:
            elements = list(ag.elements)
        except NoDataError:
            elements = [""] * n_atoms
        if not all(elements):
            with catch_warning(category=DeprecationWarning):
                from MDAnalysis.topology.guessers import guess_atom_element
            elements = [
                element or guess_atom_element(name)
                for element, name in zip(elements, ag.names)
            ]
        try:
            chains = list(ag.chainIDs)
        except NoDataError:
            chains = [""] * n_atoms
        try:
            hetero = [record == "HETATM" for record in ag.record_types]
        except NoDataError:
            hetero = [resname not in STANDARD_RESIDUES for resname in ag.resnames]
        atoms = [
            Atom(
                index=int(atom.index),
                name=str(atom.name),
                element=str(element),
                x=float(x),
                y=float(y),
                z=float(z),
                resname=str(atom.resname),
                resnumber=int(atom.resid),
                chain=str(chain or ""),
                is_hetero=bool(is_het),
            )
            for atom, element, chain, is_het, (x, y, z) in zip(
                ag, elements, chains, hetero, ag.positions
            )
        ]
        return cls(atoms)

    @classmethod
    def from_rdkit(
        cls,
        mol: Chem.Mol,
        resname: str = "UNL",
        resnumber: int = 1,
        chain: str = "",
    ) -> "Structure":
        """Creates a Structure from an RDKit molecule

        Parameters
        ----------
        mol : rdkit.Chem.rdchem.Mol
            The input RDKit molecule, with a conformer
        resname : str
            The residue name that is used for atoms without residue information
        resnumber : int
            The residue number that is used for atoms without residue information
        chain : str
            The chain Id that is used for atoms without residue information

        Raises
        ------
        ValueError
            The molecule has no conformer

        Notes
        -----
        Atoms without an :class:`~rdkit.Chem.rdchem.AtomPDBResidueInfo` are
        considered hetero atoms, and named after their element and index.
        """
        if mol.GetNumConformers() == 0:
            raise ValueError("The molecule has no 3D coordinates")
        positions = mol.GetConformer().GetPositions()
        atoms = []
        for atom, (x, y, z) in zip(mol.GetAtoms(), positions):
            symbol = atom.GetSymbol()
            mi = atom.GetMonomerInfo()
            if isinstance(mi, Chem.AtomPDBResidueInfo):
                name = mi.GetName().strip() or f"{symbol}{atom.GetIdx() + 1}"
                res_info = (
                    mi.GetResidueName().strip() or resname,
                    mi.GetResidueNumber(),
                    mi.GetChainId().strip(),
                    mi.GetIsHeteroAtom(),
                )
            else:
                if atom.HasProp("_TriposAtomName"):
                    name = atom.GetProp("_TriposAtomName")
                else:
                    name = f"{symbol}{atom.GetIdx() + 1}"
                res_info = (resname, resnumber, chain, True)
            atoms.append(
                Atom(
                    atom.GetIdx(),
                    name,
                    symbol,
                    float(x),
                    float(y),
                    float(z),
                    *res_info,
                )
            )
        return cls(atoms)
