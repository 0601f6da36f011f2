"""
Base interaction classes --- :mod:`ligplot3d.interactions.base`
===============================================================

This module contains the interaction record returned by the analysis, the base
classes used to build the detectors, and the deduplication of interactions
detected for the same pair of atoms.
"""

import warnings
from collections.abc import Iterable, Iterator
from dataclasses import dataclass
from enum import Enum
from typing import TYPE_CHECKING, Any, ClassVar, NamedTuple, Optional

import numpy as np

from ligplot3d.parameters import DEFAULT_PARAMETERS, Parameters

if TYPE_CHECKING:
    from numpy.typing import NDArray

    from ligplot3d.residue import Residue
    from ligplot3d.rings import Ring
    from ligplot3d.structure import Atom

_DETECTORS: dict[str, type["Detector"]] = {}
_BASE_DETECTORS: dict[str, type["Detector"]] = {}


class InteractionType(str, Enum):
    HydrogenBond = "Hydrogen Bond"
    SaltBridge = "Salt Bridge"
    Hydrophobic = "Hydrophobic"
    PiStacking = "Pi-Stacking"
    HalogenBond = "Halogen Bond"
    MetalCoordination = "Metal Coordination"

    def __str__(self) -> str:
        return self.value

    @property
    def priority(self) -> int:
        """Rank used when several interactions involve the same atoms, higher
        wins"""
        return _PRIORITY.get(self, 1)


_PRIORITY = {
    InteractionType.SaltBridge: 4,
    InteractionType.PiStacking: 3,
    InteractionType.HydrogenBond: 2,
}


@dataclass(frozen=True, eq=False)
class Interaction:
    """An interaction between one ligand atom and one protein atom

    Attributes
    ----------
    id : str
        Identifier unique within an analysis, e.g. ``hb-12``
    type : InteractionType
        Category of the interaction
    distance : float
        Distance between ``ligand_point`` and ``protein_point``, in Angstroms
    ligand_atom : ligplot3d.structure.Atom
        The ligand atom, or the first atom of the ligand ring or group
    protein_atom : ligplot3d.structure.Atom
        The protein atom, or the first atom of the residue ring or charged group
    angle : float or None
        Angle between ring planes for pi-stacking, in degrees
    ligand_point, protein_point : numpy.ndarray
        Coordinates between which the distance was measured: atom positions,
        ring centroids or charge centers
    """

    id: str
    type: InteractionType
    distance: float
    ligand_atom: "Atom"
    protein_atom: "Atom"
    angle: Optional[float] = None
    ligand_point: Optional["NDArray[np.float64]"] = None
    protein_point: Optional["NDArray[np.float64]"] = None

    def __post_init__(self) -> None:
        if self.ligand_point is None:
            object.__setattr__(self, "ligand_point", self.ligand_atom.xyz)
        if self.protein_point is None:
            object.__setattr__(self, "protein_point", self.protein_atom.xyz)

    @property
    def atom_pair(self) -> tuple[int, int]:
        """Unordered pair of atom indices, as a sorted tuple"""
        a, b = self.ligand_atom.index, self.protein_atom.index
        return (a, b) if a <= b else (b, a)

    def to_dict(self) -> dict[str, Any]:
        data: dict[str, Any] = {
            "id": self.id,
            "type": self.type.value,
            "distance": self.distance,
        }
        if self.angle is not None:
            data["angle"] = self.angle
        data["ligand_atom"] = self.ligand_atom.to_dict()
        data["protein_atom"] = self.protein_atom.to_dict()
        return data


class Contact(NamedTuple):
    """Raw output of a detector, before an id is assigned"""

    ligand_atom: "Atom"
    protein_atom: "Atom"
    distance: float
    ligand_point: "NDArray[np.float64]"
    protein_point: "NDArray[np.float64]"
    angle: Optional[float] = None


class LigandContext(NamedTuple):
    """Ligand atoms and the rings perceived on them"""

    atoms: tuple["Atom", ...]
    rings: tuple["Ring", ...]


class Detector:
    """Base class for interaction detectors

    All detectors must inherit this class, define the ``type`` of interaction
    they produce and the ``prefix`` of their ids, and define a ``detect``
    method yielding :class:`Contact`.
    Subclasses are registered by name and can be selected in
    :class:`~ligplot3d.analysis.InteractionAnalyzer`.

    Parameters
    ----------
    parameters : ligplot3d.parameters.Parameters, optional
        Thresholds used by the detector
    """

    type: ClassVar[InteractionType]
    prefix: ClassVar[str]

    def __init_subclass__(cls, is_abstract: bool = False) -> None:
        super().__init_subclass__()
        name = cls.__name__
        register = _BASE_DETECTORS if is_abstract else _DETECTORS
        if not hasattr(cls, "detect"):
            raise TypeError(
                f"Can't instantiate detector class {name} without a `detect` method."
            )
        if name in register:
            warnings.warn(
                f"The {name!r} detector has been superseded by a "
                f"new class with id {id(cls):#x}"
            )
        register[name] = cls

    def __init__(self, parameters: Optional[Parameters] = None) -> None:
        self.parameters = parameters or DEFAULT_PARAMETERS

    def __repr__(self):  # pragma: no cover
        cls = self.__class__
        return f"<{cls.__module__}.{cls.__name__} at {id(self):#x}>"


class ResidueDetector(Detector, is_abstract=True):
    """Detectors working on a whole protein residue at once, using its
    aromatic ring or charged groups"""

    def detect(
        self, ligand: LigandContext, residue: "Residue"
    ) -> Iterator[Contact]:  # pragma: no cover
        raise NotImplementedError


class PairDetector(Detector, is_abstract=True):
    """Detectors working on a single pair of atoms

    Subclasses define :meth:`matches` for the chemical criteria and
    :attr:`cutoff` for the distance threshold.
    """

    @property
    def cutoff(self) -> float:  # pragma: no cover
        raise NotImplementedError

    def matches(self, ligand_atom: "Atom", protein_atom: "Atom") -> bool:
        raise NotImplementedError  # pragma: no cover

    def detect(
        self, ligand_atom: "Atom", protein_atom: "Atom", distance: float
    ) -> Iterator[Contact]:
        if distance <= self.cutoff and self.matches(ligand_atom, protein_atom):
            yield Contact(
                ligand_atom,
                protein_atom,
                distance,
                ligand_atom.xyz,
                protein_atom.xyz,
            )


def deduplicate(interactions: Iterable[Interaction]) -> list[Interaction]:
    """Keeps a single interaction per pair of atoms

    Parameters
    ----------
    interactions : iterable
        A list of :class:`Interaction`

    Returns
    -------
    interactions : list
        For each unordered pair of ligand and protein atom indices, the
        interaction with the highest priority, in the order in which pairs were
        first encountered. Salt bridges win over pi-stacking, which wins over
        hydrogen bonds, which win over every other type. Between interactions
        of equal priority, the first one is kept.
    """
    pairs: dict[tuple[int, int], Interaction] = {}
    for interaction in interactions:
        key = interaction.atom_pair
        existing = pairs.get(key)
        if existing is None or interaction.type.priority > existing.type.priority:
            pairs[key] = interaction
    return list(pairs.values())
